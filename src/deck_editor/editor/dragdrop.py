"""Drag/drop transaction state -- at most one drag in flight per session.

The rendering surface reports a drag *candidate* (what is being dragged and
from where), then the drop zone under the pointer, then the release.  On
release the candidate is either handed back for commit (valid pair) or
dropped silently.  Either way the state returns to idle.

The commit itself (take, insert, cleanup) is done by the editor session,
which owns the deck, the palette and the dock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from deck_editor.ir.cards import DragKind

from .paths import PALETTE_SLOT

logger = logging.getLogger(__name__)


class DropKind(str, Enum):
    """Kind of zone a dragged item can be released on."""

    MULTICAST_BASE_CARD = "MultiCastBaseCard"
    BASE_NONE = "BaseNone"
    BASE_PROJECTILE = "BaseProjectile"
    BASE_STATUS_EFFECTS = "BaseStatusEffects"
    COOLDOWN = "Cooldown"
    DIRECTION = "Direction"
    PALETTE = "Palette"


_VALID_DROPS: dict[DragKind, frozenset[DropKind]] = {
    DragKind.PROJECTILE_MODIFIER: frozenset({DropKind.BASE_PROJECTILE}),
    DragKind.STATUS_EFFECT: frozenset({DropKind.BASE_STATUS_EFFECTS}),
    DragKind.MULTICAST_MODIFIER: frozenset({DropKind.MULTICAST_BASE_CARD}),
    DragKind.BASE_CARD: frozenset(
        {DropKind.MULTICAST_BASE_CARD, DropKind.BASE_NONE, DropKind.COOLDOWN}
    ),
    DragKind.COOLDOWN_MODIFIER: frozenset({DropKind.COOLDOWN}),
    DragKind.DIRECTION: frozenset({DropKind.DIRECTION}),
}


def is_valid_drag(drag_kind: DragKind, drop_kind: DropKind) -> bool:
    """True if an item of *drag_kind* may be released on *drop_kind*.

    The palette zone accepts everything (dock or discard).
    """
    if drop_kind is DropKind.PALETTE:
        return True
    return drop_kind in _VALID_DROPS.get(drag_kind, frozenset())


class DragPhase(str, Enum):
    IDLE = "idle"
    CANDIDATE = "candidate"


@dataclass
class DragCandidate:
    """A drag in progress.  Paths are root-first and refer to this frame's tree."""

    source: tuple[int, ...]
    kind: DragKind
    destination: tuple[int, ...] | None = None
    drop_kind: DropKind | None = None

    @property
    def from_palette(self) -> bool:
        return self.source[0] == PALETTE_SLOT

    @property
    def to_palette(self) -> bool:
        return self.destination is not None and self.destination[0] == PALETTE_SLOT

    @property
    def into_itself(self) -> bool:
        """True if the destination lies inside (or is) the dragged subtree."""
        return (
            self.destination is not None
            and self.destination[: len(self.source)] == self.source
        )

    def is_committable(self) -> bool:
        if self.destination is None or self.drop_kind is None or self.into_itself:
            return False
        return self.to_palette or is_valid_drag(self.kind, self.drop_kind)


@dataclass
class DragState:
    """Session-owned drag state machine: IDLE <-> CANDIDATE."""

    candidate: DragCandidate | None = None

    @property
    def phase(self) -> DragPhase:
        return DragPhase.IDLE if self.candidate is None else DragPhase.CANDIDATE

    def begin(self, source: tuple[int, ...], kind: DragKind) -> None:
        if not source:
            raise ValueError("drag source path must not be empty")
        if self.candidate is not None:
            logger.debug("Replacing drag from %s with drag from %s",
                          self.candidate.source, source)
        self.candidate = DragCandidate(source=tuple(source), kind=kind)

    def hover(self, destination: tuple[int, ...] | None, drop_kind: DropKind | None) -> None:
        """Record the zone under the pointer; ``None`` clears it."""
        if self.candidate is None:
            return
        if destination is None or drop_kind is None:
            self.candidate.destination = None
            self.candidate.drop_kind = None
        else:
            if not destination:
                raise ValueError("drop destination path must not be empty")
            self.candidate.destination = tuple(destination)
            self.candidate.drop_kind = drop_kind

    def release(self) -> DragCandidate | None:
        """End the drag.  Returns the candidate if it should be committed."""
        candidate, self.candidate = self.candidate, None
        if candidate is None:
            return None
        if not candidate.is_committable():
            logger.debug(
                "Discarding drag of %s from %s onto %s",
                candidate.kind.value, candidate.source, candidate.drop_kind,
            )
            return None
        return candidate

    def cancel(self) -> None:
        self.candidate = None
