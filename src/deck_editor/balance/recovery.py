"""Cooldown recovery -- derived timing values cached on cooldowns and abilities.

``Cooldown.cached_value`` and ``Ability.cached_recovery`` hold a
``(seconds, per_charge_seconds)`` pair.  The editor clears them on every
mutation; :func:`refresh_recovery` fills whichever are missing.  The values
depend only on the card impacts, the cooldown modifiers and the deck impact,
and are rounded so recomputation gives identical floats.
"""

from __future__ import annotations

import logging

from deck_editor.ir.cards import (
    Reloading,
    SignedSimpleCooldownModifier,
    SimpleCooldownModifier,
)
from deck_editor.ir.deck import Cooldown, Deck, Recovery
from deck_editor.ir.kinds import SignedSimpleCooldownModifierType, SimpleCooldownModifierType

from .impact import cooldown_impact, deck_impact, node_impact

logger = logging.getLogger(__name__)

MIN_SECONDS = 0.1
BASE_SECONDS = 0.5
SECONDS_PER_IMPACT = 1.5
DECK_IMPACT_FACTOR = 0.02
ADD_COOLDOWN_FACTOR = 0.25
DECREASE_COOLDOWN_FACTOR = 0.9
CHARGE_STEP = 0.15
RELOAD_STEP = 0.5


def _totals(modifiers: list) -> tuple[int, int, int, bool]:
    add_charge = add_cooldown = decrease = 0
    reloading = False
    for modifier in modifiers:
        if isinstance(modifier, SimpleCooldownModifier):
            if modifier.modifier_type is SimpleCooldownModifierType.ADD_CHARGE:
                add_charge += modifier.value
            elif modifier.modifier_type is SimpleCooldownModifierType.ADD_COOLDOWN:
                add_cooldown += modifier.value
        elif isinstance(modifier, SignedSimpleCooldownModifier):
            if modifier.modifier_type is SignedSimpleCooldownModifierType.DECREASE_COOLDOWN:
                decrease += modifier.value
        elif isinstance(modifier, Reloading):
            reloading = True
    return add_charge, add_cooldown, decrease, reloading


def cooldown_recovery(impact: float, modifiers: list, total_impact: float) -> Recovery:
    """Derive ``(seconds, per_charge_seconds)`` for one cooldown.

    Parameters
    ----------
    impact:
        Impact of the card (or strongest card) on the cooldown.
    modifiers:
        The cooldown's modifier list.
    total_impact:
        Impact of the whole deck.

    Returns
    -------
    Recovery
        Base recovery seconds and the recovery time of each charge.  Without
        ``Reloading`` each further charge is slower than the last; with it
        all charges come back together after one longer wait.
    """
    add_charge, add_cooldown, decrease, reloading = _totals(modifiers)
    seconds = (
        (BASE_SECONDS + SECONDS_PER_IMPACT * impact)
        * (1 + DECK_IMPACT_FACTOR * total_impact)
        * (1 + ADD_COOLDOWN_FACTOR * add_cooldown)
        * DECREASE_COOLDOWN_FACTOR ** decrease
    )
    seconds = max(MIN_SECONDS, seconds)
    charges = 1 + add_charge
    if reloading:
        per_charge = [seconds * (1 + RELOAD_STEP * (charges - 1))] * charges
    else:
        per_charge = [seconds * (1 + CHARGE_STEP * k) for k in range(charges)]
    return round(seconds, 4), [round(s, 4) for s in per_charge]


def refresh_cooldown(cooldown: Cooldown, total_impact: float) -> int:
    """Fill the missing caches of *cooldown*.  Returns how many were filled."""
    filled = 0
    if cooldown.cached_value is None:
        cooldown.cached_value = cooldown_recovery(
            cooldown_impact(cooldown), cooldown.modifiers, total_impact,
        )
        filled += 1
    for ability in cooldown.abilities:
        if ability.cached_recovery is None:
            ability.cached_recovery = cooldown_recovery(
                node_impact(ability.card), cooldown.modifiers, total_impact,
            )
            filled += 1
    return filled


def refresh_recovery(deck: Deck, total_impact: float | None = None) -> int:
    """Recompute every absent recovery cache of *deck*.

    Present caches are left alone.  Returns the number of caches filled.
    """
    if total_impact is None:
        total_impact = deck_impact(deck)
    filled = sum(refresh_cooldown(c, total_impact) for c in deck.cooldowns)
    if filled:
        logger.debug("Refreshed %d recovery caches (deck impact %.4f)", filled, total_impact)
    return filled
