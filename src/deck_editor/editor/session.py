"""EditorSession -- the single owner of a deck being edited.

The session is the frame driver between a rendering surface and the tree
operations.  Each frame the surface reports at most one modify request and
the progress of at most one drag; :meth:`EditorSession.apply_frame` applies
the modify first and then the drag step, so a drag commit always sees the
post-modify tree.

Usage::

    session = EditorSession(deck)
    slots = session.draw()                     # paths for this frame
    session.apply_frame(FrameInput(
        drag=PendingDrag(source=(0, 3), kind=DragKind.PROJECTILE_MODIFIER,
                         destination=(2, 1, 0), drop_kind=DropKind.BASE_PROJECTILE,
                         released=True),
    ))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from deck_editor.balance.recovery import refresh_recovery
from deck_editor.config import EditMode, EditorSettings
from deck_editor.ir.cards import DragableItem, DragKind
from deck_editor.ir.deck import Cooldown, Deck, KeyControl, MouseControl
from deck_editor.storage.deck_files import DeckImportError, export_deck, import_deck

from .dragdrop import DragCandidate, DragState, DropKind
from .operations import Modification, insert, instantiate, modify, prepare_cleanup, take
from .palette import PaletteTab, build_palette, palette_items
from .paths import PALETTE_SLOT, TreeContractError
from .walker import DrawSlot, walk_deck

logger = logging.getLogger(__name__)


@dataclass
class PendingModify:
    path: tuple[int, ...]
    modification: Modification


@dataclass
class PendingDrag:
    """Drag progress reported by the surface for one frame.

    ``source``/``kind`` are set on the frame the drag starts.  ``destination``
    and ``drop_kind`` describe the zone under the pointer (None if there is
    none), and ``released`` is set on the frame the pointer is released.
    """

    source: tuple[int, ...] | None = None
    kind: DragKind | None = None
    destination: tuple[int, ...] | None = None
    drop_kind: DropKind | None = None
    released: bool = False


@dataclass
class FrameInput:
    modify: PendingModify | None = None
    drag: PendingDrag | None = None
    elapsed: float = 0.0
    """Seconds since the previous frame."""


class EditorSession:
    """Owns the deck, the dock, the palette tab and the drag state.

    Parameters
    ----------
    deck:
        Deck to edit.  A new empty deck if omitted.
    settings:
        Editor settings; defaults if omitted.
    edit_mode:
        Overrides ``settings.edit_mode``.  A read-only session ignores every
        mutation request.
    """

    def __init__(
        self,
        deck: Deck | None = None,
        settings: EditorSettings | None = None,
        edit_mode: EditMode | None = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.deck = deck if deck is not None else Deck()
        self.edit_mode = edit_mode or self.settings.edit_mode
        self.palette_tab: PaletteTab = self.settings.default_palette_tab
        self.dock: list[DragableItem] = []
        self.drag = DragState()
        self.errors: list[str] = []
        self._since_edit = self.settings.cooldown_cache_refresh_delay

    @property
    def read_only(self) -> bool:
        return self.edit_mode is EditMode.READONLY

    def _rejected(self, action: str) -> bool:
        if self.read_only:
            logger.debug("Ignoring %s in read-only session", action)
            return True
        return False

    def _edited(self) -> None:
        self.deck.invalidate_caches()
        self._since_edit = 0.0

    # ------------------------------------------------------------------
    # Frame driver
    # ------------------------------------------------------------------

    def apply_frame(self, frame: FrameInput) -> bool:
        """Apply one frame of input.  Returns True if the deck changed."""
        changed = False
        if frame.modify is not None:
            changed |= self.apply_modify(frame.modify.path, frame.modify.modification)
        if frame.drag is not None:
            drag = frame.drag
            if drag.source is not None and drag.kind is not None:
                self.begin_drag(drag.source, drag.kind)
            self.hover(drag.destination, drag.drop_kind)
            if drag.released:
                changed |= self.release()
        self.advance(frame.elapsed)
        return changed

    def apply_modify(self, path: tuple[int, ...], modification: Modification) -> bool:
        """Step the numeric value at *path* (root-first, from the walker).

        A ``DECREASE`` addressed at a cooldown removes it.  Returns True if
        the request was applied.
        """
        if self._rejected("modify"):
            return False
        if not path or path[0] == PALETTE_SLOT:
            raise TreeContractError(f"modify path {list(path)} is outside the deck")
        modify(self.deck, path, modification)
        self._edited()
        logger.debug("Applied %s at %s", modification.value, list(path))
        return True

    # ------------------------------------------------------------------
    # Drag and drop
    # ------------------------------------------------------------------

    def begin_drag(self, source: tuple[int, ...], kind: DragKind) -> None:
        if self._rejected("drag"):
            return
        self.drag.begin(tuple(source), kind)

    def hover(self, destination: tuple[int, ...] | None, drop_kind: DropKind | None) -> None:
        self.drag.hover(destination, drop_kind)

    def release(self) -> bool:
        """Release the pointer.  Returns True if a drag was committed."""
        candidate = self.drag.release()
        if candidate is None or self._rejected("drop"):
            return False
        self._commit(candidate)
        return True

    def apply_drag(
        self,
        source: tuple[int, ...],
        kind: DragKind,
        destination: tuple[int, ...],
        drop_kind: DropKind,
    ) -> bool:
        """Begin, hover and release in one call."""
        self.begin_drag(source, kind)
        self.hover(destination, drop_kind)
        return self.release()

    def _commit(self, candidate: DragCandidate) -> None:
        source_cleanup = None
        if candidate.from_palette:
            item = self._take_from_palette(candidate.source)
        else:
            source_cleanup = prepare_cleanup(self.deck, candidate.source)
            item = take(self.deck, candidate.source)

        if candidate.to_palette:
            if self.palette_tab is PaletteTab.DOCK:
                self.dock.append(item)
                logger.debug("Docked %s", item.kind.value)
            else:
                logger.debug("Discarded %s dropped on the palette", item.kind.value)
        else:
            insert(self.deck, candidate.destination, item)

        if source_cleanup is not None:
            source_cleanup()
        self._edited()
        logger.debug("Moved %s from %s to %s", candidate.kind.value,
                     list(candidate.source), list(candidate.destination))

    def _take_from_palette(self, source: tuple[int, ...]) -> DragableItem:
        rest = source[1:]
        if self.palette_tab is not PaletteTab.DOCK:
            return instantiate(build_palette(self.palette_tab), rest)
        if len(rest) != 1 or not 0 <= rest[0] < len(self.dock):
            raise TreeContractError(f"no dock item at {list(rest)}")
        return self.dock.pop(rest[0])

    # ------------------------------------------------------------------
    # Deck-level edits
    # ------------------------------------------------------------------

    def add_cooldown(self) -> None:
        if self._rejected("add cooldown"):
            return
        self.deck.cooldowns.append(Cooldown.empty())
        self._edited()

    def clear_dock(self) -> None:
        if self._rejected("clear dock"):
            return
        self.dock.clear()

    def select_palette(self, tab: PaletteTab) -> None:
        self.palette_tab = tab

    def select_keybind(self, cooldown: int, ability: int) -> None:
        """Wait for the next key press to bind the given ability."""
        if self._rejected("keybind selection"):
            return
        for other in self.deck.cooldowns:
            for candidate in other.abilities:
                candidate.is_keybind_selected = False
        self.deck.cooldowns[cooldown].abilities[ability].select_keybind()

    def capture_keybind(self, control: KeyControl | MouseControl) -> bool:
        """Bind *control* to the ability waiting for a key, if any."""
        for cooldown in self.deck.cooldowns:
            for ability in cooldown.abilities:
                if ability.capture_keybind(control):
                    return True
        return False

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_deck(self) -> str:
        return export_deck(self.deck)

    def import_deck(self, text: str) -> None:
        """Replace the deck with one parsed from *text*.

        Raises
        ------
        DeckImportError
            If the text is not a valid deck.  The message is also appended to
            ``errors`` and the current deck is kept.
        """
        if self._rejected("import"):
            return
        try:
            deck = import_deck(text)
        except DeckImportError as exc:
            logger.warning("Rejected deck import: %s", exc)
            self.errors.append(str(exc))
            raise
        self.deck = deck
        self.drag.cancel()
        self._edited()
        logger.info("Imported deck with %d cooldowns", len(deck.cooldowns))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def advance(self, seconds: float) -> None:
        self._since_edit += seconds

    def refresh_caches(self, force: bool = False) -> int:
        """Recompute absent recovery caches once the refresh delay has passed."""
        if not force and self._since_edit < self.settings.cooldown_cache_refresh_delay:
            return 0
        return refresh_recovery(self.deck)

    def draw(self) -> list[DrawSlot]:
        """Refresh caches and return this frame's draw slots.

        The palette is only offered while editing.
        """
        self.refresh_caches()
        palette = None if self.read_only else palette_items(self.palette_tab, self.dock)
        return list(walk_deck(self.deck, palette))
