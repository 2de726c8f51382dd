#!/usr/bin/env python3
"""Inspect and convert deck files.

Usage:
    python scripts/deck_tool.py show decks/deck.json
    python scripts/deck_tool.py validate decks/*.json
    python scripts/deck_tool.py export decks/deck.json -o clipboard.txt
    python scripts/deck_tool.py list [--settings settings.json]

Add --verbose for debug logging.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from deck_editor.balance.impact import deck_impact
from deck_editor.balance.recovery import refresh_recovery
from deck_editor.config import load_settings
from deck_editor.editor.render import render_deck_sheet
from deck_editor.storage.deck_files import (
    DeckImportError,
    export_deck,
    list_decks,
    load_deck,
    save_deck,
)


def _show(args: argparse.Namespace) -> int:
    deck = load_deck(args.deck)
    refresh_recovery(deck)
    print(render_deck_sheet(deck, title=args.deck.stem), end="")
    print(f"Deck impact: {deck_impact(deck):.2f}")
    return 0


def _validate(args: argparse.Namespace) -> int:
    failures = 0
    for path in args.decks:
        try:
            deck = load_deck(path)
        except (DeckImportError, FileNotFoundError) as exc:
            failures += 1
            print(f"FAIL {path}: {exc}")
            continue
        print(f"ok   {path} ({len(deck.cooldowns)} cooldowns)")
    print(f"\n{len(args.decks) - failures}/{len(args.decks)} decks valid")
    return 1 if failures else 0


def _export(args: argparse.Namespace) -> int:
    deck = load_deck(args.deck)
    if args.output is None:
        print(export_deck(deck))
    elif args.output.suffix == ".json":
        save_deck(deck, args.output)
        print(f"Saved deck to {args.output}")
    else:
        args.output.write_text(export_deck(deck), encoding="utf-8")
        print(f"Wrote clipboard text to {args.output}")
    return 0


def _list(args: argparse.Namespace) -> int:
    settings = load_settings(args.settings)
    card_dir = Path(settings.card_dir)
    decks = list_decks(card_dir)
    print(f"{len(decks)} decks in {card_dir}/")
    for path in decks:
        marker = "*" if path.name == settings.card_file else " "
        print(f" {marker} {path.name}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect and convert deck files.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print a deck sheet")
    show.add_argument("deck", type=Path, help="Deck JSON file")
    show.set_defaults(func=_show)

    validate = sub.add_parser("validate", help="Check that deck files load")
    validate.add_argument("decks", type=Path, nargs="+", help="Deck JSON files")
    validate.set_defaults(func=_validate)

    export = sub.add_parser("export", help="Export a deck as clipboard text")
    export.add_argument("deck", type=Path, help="Deck JSON file")
    export.add_argument("-o", "--output", type=Path, default=None,
                        help="Output file (.json for a formatted deck file; default: stdout)")
    export.set_defaults(func=_export)

    list_cmd = sub.add_parser("list", help="List decks in the configured deck directory")
    list_cmd.add_argument("--settings", type=Path, default=None, help="Settings JSON file")
    list_cmd.set_defaults(func=_list)

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
