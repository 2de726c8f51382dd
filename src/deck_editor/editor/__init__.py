"""Path-addressed tree editing: paths, operations, drag/drop and the palette.

The frame driver lives in :mod:`deck_editor.editor.session` and the text
renderer in :mod:`deck_editor.editor.render`; import them from there.
"""

from deck_editor.editor.dragdrop import (
    DragCandidate,
    DragPhase,
    DragState,
    DropKind,
    is_valid_drag,
)
from deck_editor.editor.operations import (
    Modification,
    cleanup,
    insert,
    instantiate,
    modify,
    prepare_cleanup,
    take,
)
from deck_editor.editor.palette import PaletteTab, build_palette, palette_items
from deck_editor.editor.paths import PathBuilder, TreeContractError, TreePath
from deck_editor.editor.walker import DrawSlot, walk_deck

__all__ = [
    # paths
    "PathBuilder",
    "TreeContractError",
    "TreePath",
    # operations
    "Modification",
    "cleanup",
    "insert",
    "instantiate",
    "modify",
    "prepare_cleanup",
    "take",
    # drag/drop
    "DragCandidate",
    "DragPhase",
    "DragState",
    "DropKind",
    "is_valid_drag",
    # palette
    "PaletteTab",
    "build_palette",
    "palette_items",
    # walker
    "DrawSlot",
    "walk_deck",
]
