"""Option flags for reordering and display."""

from enum import IntFlag


class ReorderFlag(IntFlag):
    """
    Options accepted by the reordering functions.

    Each option occupies a single bit. The shaping options are not acted on
    here; they are passed through for shaping code that consumes the
    reordered output.
    """

    SHAPE_MIRRORING = 0x00000001
    REORDER_NSM = 0x00000002
    SHAPE_ARAB_PRES = 0x00000100
    SHAPE_ARAB_LIGA = 0x00000200
    SHAPE_ARAB_CONSOLE = 0x00000400
    REMOVE_BIDI = 0x00010000
    REMOVE_JOINING = 0x00020000
    REMOVE_SPECIALS = 0x00040000

    DEFAULT = SHAPE_MIRRORING | REORDER_NSM | REMOVE_SPECIALS
    ARABIC = SHAPE_ARAB_PRES | SHAPE_ARAB_LIGA


ALL_FLAGS = (
    ReorderFlag.SHAPE_MIRRORING
    | ReorderFlag.REORDER_NSM
    | ReorderFlag.SHAPE_ARAB_PRES
    | ReorderFlag.SHAPE_ARAB_LIGA
    | ReorderFlag.SHAPE_ARAB_CONSOLE
    | ReorderFlag.REMOVE_BIDI
    | ReorderFlag.REMOVE_JOINING
    | ReorderFlag.REMOVE_SPECIALS
)
