"""DeckSheet -- plain-text rendering of a deck for terminals and logs.

Renders the walker's draw slots through a Jinja2 template, one line per
node, indented by tree depth and prefixed with the node's path.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from deck_editor.ir.deck import Deck

from .walker import walk_deck

_TEMPLATE_DIR = Path(__file__).parent / "templates"


class DeckSheet:
    """Renders decks to the ``deck_sheet.txt.j2`` text layout."""

    def __init__(self, indent: int = 2):
        self.indent = indent
        self._jinja = Environment(
            loader=FileSystemLoader(str(_TEMPLATE_DIR)),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, deck: Deck, title: str = "Deck") -> str:
        template = self._jinja.get_template("deck_sheet.txt.j2")
        rows = [
            {
                "path": ",".join(str(segment) for segment in slot.path),
                "pad": " " * (self.indent * slot.depth),
                "label": slot.label,
                "value": slot.value,
                "detail": slot.detail,
                "is_header": slot.depth == 0,
            }
            for slot in walk_deck(deck)
        ]
        ctx = {
            "title": title,
            "cooldown_count": len(deck.cooldowns),
            "passive_count": len(deck.passive.passive_effects),
            "rows": rows,
        }
        return template.render(**ctx)


def render_deck_sheet(deck: Deck, title: str = "Deck") -> str:
    """Render *deck* with the default layout."""
    return DeckSheet().render(deck, title=title)
