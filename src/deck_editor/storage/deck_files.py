"""Deck persistence -- JSON clipboard text and a directory of deck files.

The JSON form is the pydantic dump of :class:`~deck_editor.ir.deck.Deck`:
every union carries its variant name in ``type``, and session-only fields
(recovery caches, keybind selection) are excluded, so export followed by
import reproduces the deck exactly.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from deck_editor.ir.cards import PaletteCard
from deck_editor.ir.deck import Deck

logger = logging.getLogger(__name__)

DECK_SUFFIX = ".json"


class DeckImportError(ValueError):
    """Deck text or file could not be turned into a valid deck."""


def export_deck(deck: Deck, indent: int | None = None) -> str:
    """Serialise *deck* to JSON text."""
    return deck.model_dump_json(indent=indent)


def import_deck(text: str) -> Deck:
    """Parse JSON text into a new :class:`Deck`.

    Raises
    ------
    DeckImportError
        If the text is not valid deck JSON, or contains a palette card.
    """
    try:
        deck = Deck.model_validate_json(text)
    except ValidationError as exc:
        raise DeckImportError(
            f"invalid deck ({exc.error_count()} errors): {exc}"
        ) from exc
    if _contains_palette(deck):
        raise DeckImportError("palette cards cannot be part of a deck")
    return deck


def _contains_palette(node: object) -> bool:
    if isinstance(node, PaletteCard):
        return True
    if isinstance(node, BaseModel):
        return any(_contains_palette(getattr(node, name)) for name in type(node).model_fields)
    if isinstance(node, list):
        return any(_contains_palette(item) for item in node)
    return False


def save_deck(deck: Deck, path: Path) -> None:
    """Save *deck* to a JSON file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_deck(deck, indent=2), encoding="utf-8")
    logger.info("Saved deck (%d cooldowns) to %s", len(deck.cooldowns), path)


def load_deck(path: Path) -> Deck:
    """Load a deck from a JSON file.

    Raises
    ------
    DeckImportError
        If the file content is not a valid deck.
    FileNotFoundError
        If *path* does not exist.
    """
    deck = import_deck(path.read_text(encoding="utf-8"))
    logger.info("Loaded deck (%d cooldowns) from %s", len(deck.cooldowns), path)
    return deck


def list_decks(directory: Path) -> list[Path]:
    """Return the deck files in *directory*, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix == DECK_SUFFIX and p.is_file())
