"""Editor settings -- where decks live and how the editor behaves.

Settings are a pydantic model read from a JSON file.  The file is taken from
the ``path`` argument, else from ``DECK_EDITOR_SETTINGS``; with neither, the
defaults apply.  ``DECK_EDITOR_CARD_DIR`` overrides the deck directory.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from deck_editor.editor.palette import PaletteTab

logger = logging.getLogger(__name__)

SETTINGS_ENV = "DECK_EDITOR_SETTINGS"
CARD_DIR_ENV = "DECK_EDITOR_CARD_DIR"


class EditMode(str, Enum):
    """Whether the session accepts mutations."""

    FULL_EDITING = "FullEditing"
    READONLY = "Readonly"


class EditorSettings(BaseModel):
    card_file: str = "deck.json"
    """Deck file opened on start, relative to ``card_dir``."""
    card_dir: str = "decks"
    cooldown_cache_refresh_delay: float = Field(default=0.0, ge=0.0)
    """Seconds after the last edit before recovery caches are recomputed."""
    default_palette_tab: PaletteTab = PaletteTab.BASE_CARDS
    edit_mode: EditMode = EditMode.FULL_EDITING

    @property
    def card_path(self) -> Path:
        return Path(self.card_dir) / self.card_file


def load_settings(path: Path | str | None = None) -> EditorSettings:
    """Load settings from JSON, applying environment overrides.

    Raises
    ------
    pydantic.ValidationError
        If the settings file is not a JSON object or has invalid fields.
    """
    if path is None:
        env_path = os.environ.get(SETTINGS_ENV)
        path = Path(env_path) if env_path else None

    settings = EditorSettings()
    if path is not None:
        path = Path(path)
        if path.exists():
            settings = EditorSettings.model_validate_json(path.read_text(encoding="utf-8"))
        else:
            logger.warning("Settings file %s not found, using defaults", path)

    card_dir = os.environ.get(CARD_DIR_ENV)
    if card_dir:
        settings = settings.model_copy(update={"card_dir": card_dir})
    return settings
