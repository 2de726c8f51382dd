"""Headless tree walker -- what a rendering surface would draw, in draw order.

:func:`walk_deck` visits every node of a deck (and optionally the palette)
and yields a :class:`DrawSlot` for each: its root-first path, whether it can
be dragged and as what, and whether it is a drop zone and of which kind.
The paths are built with the same grammar the tree operations consume, so
``take(deck, slot.path)`` detaches exactly ``slot.node`` and
``insert(deck, slot.path, item)`` drops onto exactly that zone.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from deck_editor.ir.cards import (
    ADVANCED_PROJECTILE_MODIFIERS,
    CreateMaterialCard,
    DragableItem,
    DragKind,
    EffectCard,
    Knockback,
    LockToOwner,
    MultiCastCard,
    NoneCard,
    ProjectileCard,
    SimpleStatusEffect,
    StatusEffectsCard,
    StatusOnHit,
    is_empty,
)
from deck_editor.ir.deck import Cooldown, Deck
from deck_editor.ir.kinds import DirectionCard

from .dragdrop import DropKind
from .operations import value_of
from .paths import (
    COOLDOWN_ABILITIES,
    COOLDOWN_MODIFIERS,
    COOLDOWN_OFFSET,
    MULTICAST_CARDS,
    MULTICAST_MODIFIERS,
    NESTED,
    PALETTE_SLOT,
    PASSIVE_SLOT,
    PathBuilder,
)


@dataclass(frozen=True)
class DrawSlot:
    """One drawn node."""

    path: tuple[int, ...]
    node: Any
    depth: int
    drag_kind: DragKind | None
    """Family the node is dragged as, or None if it cannot be dragged."""
    drop_kind: DropKind | None
    """Kind of drop zone the node is, or None."""
    label: str
    value: int | None = None
    detail: str = ""


def describe(node: Any) -> str:
    """Short display label for a node."""
    if isinstance(node, DirectionCard):
        return f"Direction {node.value}"
    if isinstance(node, EffectCard):
        return f"Effect {node.effect.type}"
    if isinstance(node, CreateMaterialCard):
        return f"CreateMaterial {node.material.value}"
    kind = getattr(node, "modifier_type", None) or getattr(node, "effect_type", None)
    if kind is not None:
        return f"{node.type} {kind.value}"
    return node.type


def format_recovery(recovery: tuple[float, list[float]] | None) -> str:
    if recovery is None:
        return ""
    seconds, per_charge = recovery
    charges = ", ".join(f"{s:.2f}" for s in per_charge)
    return f"{seconds:.2f}s [{charges}]"


class _Walker:
    def __init__(self) -> None:
        self.builder = PathBuilder()

    def slot(
        self,
        node: Any,
        depth: int,
        drag_kind: DragKind | None = None,
        drop_kind: DropKind | None = None,
        label: str | None = None,
        detail: str = "",
    ) -> DrawSlot:
        return DrawSlot(
            path=self.builder.current(),
            node=node,
            depth=depth,
            drag_kind=drag_kind,
            drop_kind=drop_kind,
            label=label if label is not None else describe(node),
            value=value_of(node),
            detail=detail,
        )

    # -- deck root ---------------------------------------------------------

    def palette(self, items: list[DragableItem]) -> Iterator[DrawSlot]:
        with self.builder.child(PALETTE_SLOT):
            yield self.slot(None, 0, drop_kind=DropKind.PALETTE, label="Palette")
            for index, item in enumerate(items):
                with self.builder.child(index):
                    yield self.slot(item.value, 1, drag_kind=item.kind)

    def passive(self, deck: Deck) -> Iterator[DrawSlot]:
        with self.builder.child(PASSIVE_SLOT):
            yield self.slot(
                deck.passive, 0, drop_kind=DropKind.BASE_STATUS_EFFECTS, label="Passive",
            )
            for index, effect in enumerate(deck.passive.passive_effects):
                with self.builder.child(index):
                    yield from self.status_effect(effect, 1)

    def cooldown(self, cooldown: Cooldown, position: int) -> Iterator[DrawSlot]:
        with self.builder.child(position + COOLDOWN_OFFSET):
            yield self.slot(
                cooldown, 0, drop_kind=DropKind.COOLDOWN, label="Cooldown",
                detail=format_recovery(cooldown.cached_value),
            )
            with self.builder.child(COOLDOWN_MODIFIERS):
                for index, modifier in enumerate(cooldown.modifiers):
                    with self.builder.child(index):
                        yield self.slot(modifier, 1, drag_kind=_drag(modifier, DragKind.COOLDOWN_MODIFIER))
            with self.builder.child(COOLDOWN_ABILITIES):
                for index, ability in enumerate(cooldown.abilities):
                    with self.builder.child(index):
                        keybind = ability.keybind.simple_representation()
                        detail = f"[{keybind}]" if keybind else "[unbound]"
                        if ability.is_keybind_selected:
                            detail = "[press a key]"
                        yield from self.card(ability.card, 1, detail=detail)

    # -- cards -------------------------------------------------------------

    def card(self, card: Any, depth: int, detail: str = "") -> Iterator[DrawSlot]:
        if isinstance(card, NoneCard):
            yield self.slot(card, depth, drop_kind=DropKind.BASE_NONE, detail=detail)
            return

        drop_kind = None
        if isinstance(card, ProjectileCard):
            drop_kind = DropKind.BASE_PROJECTILE
        elif isinstance(card, MultiCastCard):
            drop_kind = DropKind.MULTICAST_BASE_CARD
        elif isinstance(card, StatusEffectsCard):
            drop_kind = DropKind.BASE_STATUS_EFFECTS
        yield self.slot(card, depth, DragKind.BASE_CARD, drop_kind, detail=detail)

        if isinstance(card, ProjectileCard):
            for index, modifier in enumerate(card.modifiers):
                with self.builder.child(index):
                    yield from self.projectile_modifier(modifier, depth + 1)
        elif isinstance(card, MultiCastCard):
            with self.builder.child(MULTICAST_MODIFIERS):
                for index, modifier in enumerate(card.modifiers):
                    with self.builder.child(index):
                        yield self.slot(modifier, depth + 1, drag_kind=_drag(modifier, DragKind.MULTICAST_MODIFIER))
            with self.builder.child(MULTICAST_CARDS):
                for index, child in enumerate(card.cards):
                    with self.builder.child(index):
                        yield from self.card(child, depth + 1)
        elif isinstance(card, StatusEffectsCard):
            for index, effect in enumerate(card.effects):
                with self.builder.child(index):
                    yield from self.status_effect(effect, depth + 1)
        elif isinstance(card, EffectCard) and isinstance(card.effect, Knockback):
            with self.builder.child(NESTED):
                yield self.direction(card.effect.direction, depth + 1)

    def projectile_modifier(self, modifier: Any, depth: int) -> Iterator[DrawSlot]:
        yield self.slot(modifier, depth, drag_kind=_drag(modifier, DragKind.PROJECTILE_MODIFIER))
        if isinstance(modifier, LockToOwner):
            with self.builder.child(NESTED):
                yield self.direction(modifier.direction, depth + 1)
        elif isinstance(modifier, ADVANCED_PROJECTILE_MODIFIERS):
            with self.builder.child(NESTED):
                yield from self.card(modifier.card, depth + 1)

    def status_effect(self, effect: Any, depth: int) -> Iterator[DrawSlot]:
        yield self.slot(effect, depth, drag_kind=_drag(effect, DragKind.STATUS_EFFECT))
        if isinstance(effect, SimpleStatusEffect) and effect.has_direction:
            with self.builder.child(NESTED):
                yield self.direction(effect.direction, depth + 1)
        elif isinstance(effect, StatusOnHit):
            with self.builder.child(NESTED):
                yield from self.card(effect.card, depth + 1)

    def direction(self, direction: DirectionCard, depth: int) -> DrawSlot:
        drag_kind = None if direction is DirectionCard.NONE else DragKind.DIRECTION
        return self.slot(direction, depth, drag_kind, DropKind.DIRECTION)


def _drag(node: Any, kind: DragKind) -> DragKind | None:
    return None if is_empty(node) else kind


def walk_deck(deck: Deck, palette: list[DragableItem] | None = None) -> Iterator[DrawSlot]:
    """Yield a :class:`DrawSlot` for every node, in draw order.

    Parameters
    ----------
    deck:
        The deck to walk.
    palette:
        Items of the current palette tab.  When given, the palette zone and
        its items are yielded first under root slot ``0``.
    """
    walker = _Walker()
    if palette is not None:
        yield from walker.palette(palette)
    yield from walker.passive(deck)
    for position, cooldown in enumerate(deck.cooldowns):
        yield from walker.cooldown(cooldown, position)
