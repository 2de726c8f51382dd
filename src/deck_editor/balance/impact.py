"""Impact scores -- a scalar estimate of how strong a card subtree is.

Pure functions over the card tree.  The deck-wide score feeds the cooldown
recovery derivation in :mod:`deck_editor.balance.recovery`: the stronger the
whole deck, the slower every cooldown comes back.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from deck_editor.ir.cards import (
    Cleanse,
    CreateMaterialCard,
    Damage,
    Duplication,
    EffectCard,
    FriendlyFire,
    Invincibility,
    Knockback,
    LockToOwner,
    Lockout,
    MultiCastCard,
    NoEnemyFire,
    OnExpiry,
    OnHeadshot,
    OnHit,
    OnTrigger,
    PiercePlayers,
    ProjectileCard,
    SimpleModify,
    SimpleStatusEffect,
    Spread,
    StatusEffectsCard,
    StatusOnHit,
    Stun,
    Teleport,
    Trail,
    Trapped,
    TriggerCard,
    UnsignedSimpleStatusEffect,
    WallBounce,
)
from deck_editor.ir.deck import Cooldown, Deck

# Flat weights of valueless nodes
_FLAT: dict[type, float] = {
    NoEnemyFire: 0.2,
    FriendlyFire: 0.1,
    PiercePlayers: 0.3,
    WallBounce: 0.3,
    LockToOwner: 0.3,
    Cleanse: 0.5,
    Teleport: 1.0,
    CreateMaterialCard: 0.5,
    TriggerCard: 0.1,
    Invincibility: 2.0,
    Lockout: 1.0,
    Trapped: 1.0,
    Stun: 1.5,
}

# Projectile base cost before modifiers
PROJECTILE_BASE = 1.0
# Passive effects are always on
PASSIVE_WEIGHT = 2.0


def _projectile(card: ProjectileCard) -> float:
    return PROJECTILE_BASE + sum(node_impact(m) for m in card.modifiers)


def _multicast(card: MultiCastCard) -> float:
    duplication = sum(m.value for m in card.modifiers if isinstance(m, Duplication))
    spread = sum(m.value for m in card.modifiers if isinstance(m, Spread))
    cards = sum(node_impact(c) for c in card.cards)
    return cards * (1 + duplication) + 0.05 * spread


def _status_effects(card: StatusEffectsCard) -> float:
    return 0.5 * card.duration * sum(node_impact(e) for e in card.effects)


_IMPACT: dict[type, Callable[[Any], float]] = {
    ProjectileCard: _projectile,
    MultiCastCard: _multicast,
    StatusEffectsCard: _status_effects,
    EffectCard: lambda c: node_impact(c.effect),
    Damage: lambda e: 0.2 * abs(e.value),
    Knockback: lambda e: 0.15 * abs(e.value),
    SimpleModify: lambda m: 0.1 * abs(m.value),
    OnHit: lambda m: 0.5 + node_impact(m.card),
    OnHeadshot: lambda m: 0.25 + node_impact(m.card),
    OnExpiry: lambda m: 0.5 + node_impact(m.card),
    OnTrigger: lambda m: 0.25 + node_impact(m.card),
    Trail: lambda m: 0.5 + 0.5 * m.frequency * node_impact(m.card),
    SimpleStatusEffect: lambda e: 0.2 * abs(e.stacks),
    UnsignedSimpleStatusEffect: lambda e: 0.2 * e.stacks,
    StatusOnHit: lambda e: 0.5 + node_impact(e.card),
}


def node_impact(node: Any) -> float:
    """Impact of any card-tree node.  Empty and unknown nodes score 0."""
    flat = _FLAT.get(type(node))
    if flat is not None:
        return flat
    handler = _IMPACT.get(type(node))
    if handler is None:
        return 0.0
    return handler(node)


def cooldown_impact(cooldown: Cooldown) -> float:
    """Impact of the strongest ability of *cooldown*."""
    return max((node_impact(a.card) for a in cooldown.abilities), default=0.0)


def deck_impact(deck: Deck) -> float:
    """Total impact of every ability and passive effect in *deck*."""
    abilities = sum(
        node_impact(ability.card)
        for cooldown in deck.cooldowns
        for ability in cooldown.abilities
    )
    passive = PASSIVE_WEIGHT * sum(node_impact(e) for e in deck.passive.passive_effects)
    return round(abilities + passive, 4)
