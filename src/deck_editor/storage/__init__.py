"""Deck storage: JSON export/import and deck directories."""

from deck_editor.storage.deck_files import (
    DeckImportError,
    export_deck,
    import_deck,
    list_decks,
    load_deck,
    save_deck,
)

__all__ = [
    "DeckImportError",
    "export_deck",
    "import_deck",
    "list_decks",
    "load_deck",
    "save_deck",
]
