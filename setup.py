#!/usr/bin/env python
"""Setup configuration for unibidi."""

from setuptools import find_packages, setup

setup(
    name="unibidi",
    version="1.0.0",
    description="Unicode Bidirectional Algorithm (UAX #9) for Python text",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.5.0",
        "pydantic-settings>=2.0.0",
        "structlog>=23.2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
)
