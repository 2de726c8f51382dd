"""Tree operations -- modify, take, insert and cleanup over path-addressed nodes.

Every operation walks the tree one level at a time.  At each level the node's
kind decides how the next path segment(s) select a child *slot* (see
:mod:`deck_editor.editor.paths` for the grammar).  A slot knows how to read
and replace its value, which dragable family it holds and what its empty
value is, so replacing a child happens in the parent that owns it.

Usage::

    from deck_editor.editor.operations import Modification, insert, modify, take

    item = take(deck, [2, 1, 0, 0])        # detach a projectile modifier
    insert(deck, [3, 1, 0], item)          # drop it on another projectile
    modify(deck, [3, 1, 0, 0], Modification.INCREASE)

Paths that do not fit the tree raise :class:`TreeContractError`.  The
operations never catch it: a bad path means the caller walked a different
tree than the one it mutates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from deck_editor.ir.cards import (
    CooldownNone,
    Damage,
    DragableItem,
    DragBaseCard,
    DragCooldownModifier,
    DragDirection,
    DragMultiCastModifier,
    DragProjectileModifier,
    DragStatusEffect,
    Duplication,
    EffectCard,
    Knockback,
    LockToOwner,
    MultiCastCard,
    MultiCastNone,
    NoneCard,
    OnExpiry,
    OnHeadshot,
    OnHit,
    OnTrigger,
    PaletteCard,
    ProjectileCard,
    ProjectileNone,
    SignedSimpleCooldownModifier,
    SimpleCooldownModifier,
    SimpleModify,
    SimpleStatusEffect,
    Spread,
    StatusEffectsCard,
    StatusNone,
    StatusOnHit,
    Trail,
    TriggerCard,
    UnsignedSimpleStatusEffect,
    is_empty,
)
from deck_editor.ir.deck import Ability, Cooldown, Deck, PassiveCard
from deck_editor.ir.kinds import DirectionCard

from .paths import (
    COOLDOWN_ABILITIES,
    COOLDOWN_MODIFIERS,
    COOLDOWN_OFFSET,
    MULTICAST_CARDS,
    MULTICAST_MODIFIERS,
    NESTED,
    PALETTE_SLOT,
    PASSIVE_SLOT,
    TreeContractError,
    TreePath,
    as_path,
)

logger = logging.getLogger(__name__)


class Modification(str, Enum):
    """Direction of a modify request."""

    INCREASE = "increase"
    DECREASE = "decrease"
    OTHER = "other"
    """The value was already edited in place; only invalidate caches."""


# ---------------------------------------------------------------------------
# Numeric fields, merging and pruning
# ---------------------------------------------------------------------------

# node class -> (numeric field, floor for DECREASE; None means unbounded)
_NUMERIC_FIELDS: dict[type, tuple[str, int | None]] = {
    SimpleModify: ("value", None),
    Spread: ("value", 1),
    Duplication: ("value", 1),
    SimpleCooldownModifier: ("value", 1),
    SignedSimpleCooldownModifier: ("value", None),
    SimpleStatusEffect: ("stacks", None),
    UnsignedSimpleStatusEffect: ("stacks", 0),
    Trail: ("frequency", 1),
    OnTrigger: ("trigger_id", 0),
    StatusEffectsCard: ("duration", 1),
    TriggerCard: ("trigger_id", 0),
    Damage: ("value", None),
    Knockback: ("value", None),
}

# Simple entries: at most one per merge key in a sibling sequence.
_MERGE_KEYS: dict[type, Callable[[Any], tuple]] = {
    SimpleModify: lambda m: (SimpleModify, m.modifier_type),
    Spread: lambda m: (Spread,),
    Duplication: lambda m: (Duplication,),
    SimpleCooldownModifier: lambda m: (SimpleCooldownModifier, m.modifier_type),
    SignedSimpleCooldownModifier: lambda m: (SignedSimpleCooldownModifier, m.modifier_type),
    SimpleStatusEffect: lambda e: (SimpleStatusEffect, e.effect_type, e.direction),
    UnsignedSimpleStatusEffect: lambda e: (UnsignedSimpleStatusEffect, e.effect_type),
}


def merge_key(entry: Any) -> tuple | None:
    """Return the merge key of a simple entry, or None if it never merges."""
    key_of = _MERGE_KEYS.get(type(entry))
    return key_of(entry) if key_of is not None else None


def count_of(entry: Any) -> int | None:
    """Return the count carried by a simple entry, or None."""
    if type(entry) not in _MERGE_KEYS:
        return None
    return getattr(entry, _NUMERIC_FIELDS[type(entry)][0])


def value_of(node: Any) -> int | None:
    """Return the numeric field a modify request would step, or None."""
    if isinstance(node, EffectCard):
        node = node.effect
    numeric = _NUMERIC_FIELDS.get(type(node))
    return getattr(node, numeric[0]) if numeric is not None else None


def _add_count(target: Any, source: Any) -> None:
    name = _NUMERIC_FIELDS[type(target)][0]
    setattr(target, name, getattr(target, name) + getattr(source, name))


def _is_zero(entry: Any) -> bool:
    return not is_empty(entry) and count_of(entry) == 0


def _prune(seq: list, keep_empty: bool = False) -> None:
    """Drop zero-count entries from *seq*, and ``None`` entries unless *keep_empty*."""
    before = len(seq)
    seq[:] = [
        entry for entry in seq
        if not (_is_zero(entry) or (is_empty(entry) and not keep_empty))
    ]
    if len(seq) != before:
        logger.debug("Pruned %d empty entries", before - len(seq))


def _prune_abilities(abilities: list[Ability]) -> None:
    """Drop abilities holding no card, always keeping at least one."""
    index = 0
    while len(abilities) > 1 and index < len(abilities):
        if isinstance(abilities[index].card, NoneCard):
            del abilities[index]
        else:
            index += 1


def _merge(seq: list, entry: Any) -> None:
    """Add *entry* to *seq*, folding it into a same-kind sibling if one exists."""
    key = merge_key(entry)
    if key is not None:
        for existing in seq:
            if merge_key(existing) == key:
                _add_count(existing, entry)
                logger.debug("Merged %s into existing entry", type(entry).__name__)
                break
        else:
            seq.append(entry)
    else:
        seq.append(entry)
    _prune(seq, keep_empty=True)


def _place(seq: list, index: int, entry: Any) -> None:
    """Fill the empty entry at *index*, merging instead if a sibling matches."""
    key = merge_key(entry)
    if key is not None:
        for position, existing in enumerate(seq):
            if position != index and merge_key(existing) == key:
                _add_count(existing, entry)
                break
        else:
            seq[index] = entry
    else:
        seq[index] = entry
    _prune(seq, keep_empty=True)


# ---------------------------------------------------------------------------
# Slots -- one step of the path
# ---------------------------------------------------------------------------

@dataclass
class _Slot:
    """A child position selected by one step of a path.

    ``owner`` is a list when ``index`` is set, otherwise a model; ``attr``
    then names the field holding the child (on ``owner[index]`` if both are
    set).
    """

    owner: Any
    index: int | None = None
    attr: str | None = None
    wrap: type | None = None
    """Dragable wrapper for values of this slot; None if not detachable."""
    empty: Callable[[], Any] | None = None
    prune: Callable[[], None] | None = None
    """Prunes the sibling sequence this slot belongs to."""

    def _target(self) -> Any:
        if self.index is None:
            return self.owner
        if not 0 <= self.index < len(self.owner):
            raise TreeContractError(
                f"element index {self.index} out of range for sequence of {len(self.owner)}"
            )
        return self.owner[self.index]

    def get(self) -> Any:
        target = self._target()
        return target if self.attr is None else getattr(target, self.attr)

    def set(self, value: Any) -> None:
        if self.attr is None:
            self._target()
            self.owner[self.index] = value
        else:
            setattr(self._target(), self.attr, value)

    @property
    def is_sequence_element(self) -> bool:
        return self.index is not None and self.attr is None

    @property
    def is_direction(self) -> bool:
        return self.wrap is DragDirection


def _is_vacant(value: Any) -> bool:
    return value is DirectionCard.NONE or (isinstance(value, BaseModel) and is_empty(value))


def _no_direction() -> DirectionCard:
    return DirectionCard.NONE


def _element(seq: list, path: TreePath, wrap: type, empty: Callable[[], Any]) -> _Slot:
    return _Slot(seq, path.pop(), None, wrap, empty, prune=lambda: _prune(seq))


def _nested_card(node: Any, path: TreePath) -> _Slot:
    path.expect(NESTED)
    return _Slot(node, None, "card", DragBaseCard, NoneCard)


def _direction(node: Any, path: TreePath) -> _Slot:
    path.expect(NESTED)
    return _Slot(node, None, "direction", DragDirection, _no_direction)


def _step_deck(deck: Deck, path: TreePath) -> _Slot:
    root = path.pop()
    if root == PALETTE_SLOT:
        raise TreeContractError("the palette zone is owned by the editor session")
    if root == PASSIVE_SLOT:
        return _Slot(deck, None, "passive")
    return _Slot(deck.cooldowns, root - COOLDOWN_OFFSET)


def _step_cooldown(cooldown: Cooldown, path: TreePath) -> _Slot:
    slot_type = path.pop()
    if slot_type == COOLDOWN_MODIFIERS:
        return _element(cooldown.modifiers, path, DragCooldownModifier, CooldownNone)
    if slot_type == COOLDOWN_ABILITIES:
        abilities = cooldown.abilities
        return _Slot(
            abilities, path.pop(), "card", DragBaseCard, NoneCard,
            prune=lambda: _prune_abilities(abilities),
        )
    raise TreeContractError(f"Cooldown has no slot type {slot_type}")


def _step_multicast(card: MultiCastCard, path: TreePath) -> _Slot:
    slot_type = path.pop()
    if slot_type == MULTICAST_MODIFIERS:
        return _element(card.modifiers, path, DragMultiCastModifier, MultiCastNone)
    if slot_type == MULTICAST_CARDS:
        return _element(card.cards, path, DragBaseCard, NoneCard)
    raise TreeContractError(f"MultiCast has no slot type {slot_type}")


def _step_simple_status(effect: SimpleStatusEffect, path: TreePath) -> _Slot:
    if not effect.has_direction:
        path.expect_end(effect)
    return _direction(effect, path)


_STEP: dict[type, Callable[[Any, TreePath], _Slot]] = {
    Deck: _step_deck,
    Cooldown: _step_cooldown,
    PassiveCard: lambda p, path: _element(p.passive_effects, path, DragStatusEffect, StatusNone),
    ProjectileCard: lambda c, path: _element(c.modifiers, path, DragProjectileModifier, ProjectileNone),
    MultiCastCard: _step_multicast,
    StatusEffectsCard: lambda c, path: _element(c.effects, path, DragStatusEffect, StatusNone),
    EffectCard: lambda c, path: _step(c.effect, path),
    Knockback: _direction,
    LockToOwner: _direction,
    OnHit: _nested_card,
    OnHeadshot: _nested_card,
    OnExpiry: _nested_card,
    OnTrigger: _nested_card,
    Trail: _nested_card,
    StatusOnHit: _nested_card,
    SimpleStatusEffect: _step_simple_status,
}


def _step(node: Any, path: TreePath) -> _Slot:
    step = _STEP.get(type(node))
    if step is None:
        path.expect_end(node)
    return step(node, path)


# ---------------------------------------------------------------------------
# Insertion slots -- what a node accepts at an empty path
# ---------------------------------------------------------------------------

def _reject(node: Any, item: Any) -> TreeContractError:
    return TreeContractError(
        f"{type(node).__name__} does not accept {type(item).__name__}"
    )


def _insert_into_projectile(card: ProjectileCard, item: Any) -> None:
    if not isinstance(item, DragProjectileModifier):
        raise _reject(card, item)
    _merge(card.modifiers, item.value)


def _insert_into_multicast(card: MultiCastCard, item: Any) -> None:
    if isinstance(item, DragMultiCastModifier):
        _merge(card.modifiers, item.value)
    elif isinstance(item, DragBaseCard):
        card.cards.append(item.value)
    else:
        raise _reject(card, item)


def _insert_into_status_effects(card: StatusEffectsCard, item: Any) -> None:
    if not isinstance(item, DragStatusEffect):
        raise _reject(card, item)
    _merge(card.effects, item.value)


def _insert_into_passive(passive: PassiveCard, item: Any) -> None:
    if not isinstance(item, DragStatusEffect):
        raise _reject(passive, item)
    _merge(passive.passive_effects, item.value)


def _insert_into_cooldown(cooldown: Cooldown, item: Any) -> None:
    if isinstance(item, DragCooldownModifier):
        _merge(cooldown.modifiers, item.value)
    elif isinstance(item, DragBaseCard):
        cooldown.abilities.append(Ability(card=item.value))
    else:
        raise _reject(cooldown, item)


_INSERT: dict[type, Callable[[Any, Any], None]] = {
    ProjectileCard: _insert_into_projectile,
    MultiCastCard: _insert_into_multicast,
    StatusEffectsCard: _insert_into_status_effects,
    PassiveCard: _insert_into_passive,
    Cooldown: _insert_into_cooldown,
}


def _prune_own(node: Any) -> None:
    """Prune every sequence held directly by *node*."""
    if isinstance(node, Cooldown):
        _prune(node.modifiers)
        _prune_abilities(node.abilities)
    elif isinstance(node, MultiCastCard):
        _prune(node.modifiers)
        _prune(node.cards)
    elif isinstance(node, ProjectileCard):
        _prune(node.modifiers)
    elif isinstance(node, StatusEffectsCard):
        _prune(node.effects)
    elif isinstance(node, PassiveCard):
        _prune(node.passive_effects)


def _touch(node: Any) -> None:
    if isinstance(node, Cooldown):
        node.invalidate()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def modify(node: Any, path: TreePath | Iterable[int], modification: Modification) -> None:
    """Step the numeric field of the node at *path*.

    ``INCREASE`` adds one.  ``DECREASE`` subtracts one unless the value is
    already at the kind's floor.  ``OTHER`` leaves the value alone.  Nodes
    without a numeric field are left untouched.  A ``DECREASE`` addressed at
    a cooldown of the deck removes that cooldown.

    Parameters
    ----------
    node:
        Subtree root the path is relative to (usually the ``Deck``).
    path:
        Root-first path segments, or a :class:`TreePath`.
    modification:
        Which way to step the value.
    """
    path = as_path(path)
    _touch(node)
    if path.is_empty():
        _modify_value(node, modification)
        return

    slot = _step(node, path)
    child = slot.get()
    if (
        path.is_empty()
        and isinstance(child, Cooldown)
        and modification is Modification.DECREASE
    ):
        logger.debug("Removing cooldown %d", slot.index)
        del slot.owner[slot.index]
        return
    modify(child, path, modification)


def _modify_value(node: Any, modification: Modification) -> None:
    if isinstance(node, EffectCard):
        node = node.effect
    numeric = _NUMERIC_FIELDS.get(type(node))
    if numeric is None or modification is Modification.OTHER:
        return
    name, floor = numeric
    value = getattr(node, name)
    if modification is Modification.INCREASE:
        value += 1
    elif floor is None or value > floor:
        value -= 1
    setattr(node, name, value)


def take(node: Any, path: TreePath | Iterable[int]) -> DragableItem:
    """Detach the subtree at *path*, leaving its slot empty.

    Returns
    -------
    DragableItem
        The detached node, wrapped in the dragable family of its slot.

    Raises
    ------
    TreeContractError
        If the path is empty, addresses a palette, an already-empty slot or
        a slot that cannot be detached (the passive card, a whole cooldown).
    """
    path = as_path(path)
    if isinstance(node, PaletteCard):
        raise TreeContractError("palette templates are instantiated, not taken")
    if path.is_empty():
        raise TreeContractError(f"cannot detach {type(node).__name__} from itself")
    _touch(node)

    slot = _step(node, path)
    child = slot.get()
    if not path.is_empty():
        return take(child, path)

    if slot.wrap is None:
        raise TreeContractError(f"{type(child).__name__} cannot be detached")
    if _is_vacant(child):
        raise TreeContractError("slot is already empty")
    slot.set(slot.empty())
    return slot.wrap(value=child)


def insert(node: Any, path: TreePath | Iterable[int], item: DragableItem) -> None:
    """Attach *item* at *path*.

    At an empty path the item goes into the node's insertion slot: simple
    entries merge into a same-kind sibling, others are appended, and
    zero-count entries are dropped afterwards.  ``None`` entries stay until
    cleanup.  A path ending on an empty slot (a ``None`` card or entry) or
    on a direction fills that slot.

    Raises
    ------
    TreeContractError
        If the addressed node does not accept the item's family, or the slot
        is already occupied by a node with no insertion slot.
    """
    path = as_path(path)
    _touch(node)
    if path.is_empty():
        handler = _INSERT.get(type(node))
        if handler is None:
            raise _reject(node, item)
        handler(node, item)
        return

    slot = _step(node, path)
    child = slot.get()
    if path.is_empty() and slot.wrap is not None and (slot.is_direction or _is_vacant(child)):
        if not isinstance(item, slot.wrap):
            raise TreeContractError(
                f"slot holds {slot.wrap.__name__}, got {type(item).__name__}"
            )
        if slot.is_sequence_element:
            _place(slot.owner, slot.index, item.value)
        else:
            slot.set(item.value)
        return
    insert(child, path, item)


def _no_cleanup() -> None:
    pass


def prepare_cleanup(node: Any, path: TreePath | Iterable[int]) -> Callable[[], None]:
    """Resolve the cleanup of *path* against the current tree shape.

    The returned callable prunes the sequence (or node) that *path*
    addresses right now, even if an insert in between shifts indices.
    A path ending on a single-card slot, a cooldown or the passive card
    resolves to a no-op: the node found there is the one being moved.
    """
    path = as_path(path)
    _touch(node)
    if path.is_empty():
        return lambda: _prune_own(node)

    slot = _step(node, path)
    if path.is_empty():
        return slot.prune if slot.prune is not None else _no_cleanup
    return prepare_cleanup(slot.get(), path)


def cleanup(node: Any, path: TreePath | Iterable[int]) -> None:
    """Prune empty entries after a take or modify.

    When *path* addresses an entry of a sequence, the whole sequence is
    pruned of ``None`` entries and zero-count simple entries; the abilities
    of a cooldown lose their empty cards while more than one remains.
    An empty path prunes the node's own sequences; any other slot is left
    alone.
    """
    prepare_cleanup(node, path)()


def instantiate(palette: PaletteCard, path: TreePath | Iterable[int]) -> DragableItem:
    """Return a fresh copy of the palette template at *path*.

    The palette itself is never modified.
    """
    path = as_path(path)
    index = path.pop_index(len(palette.items))
    template = palette.items[index]
    path.expect_end(template)
    return template.model_copy(deep=True)


__all__ = [
    "Modification",
    "cleanup",
    "count_of",
    "insert",
    "instantiate",
    "merge_key",
    "modify",
    "prepare_cleanup",
    "take",
    "value_of",
]
