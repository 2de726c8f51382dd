"""Shared fixtures for deck editor tests."""

from __future__ import annotations

import pytest

from deck_editor.ir import (
    Ability,
    Cooldown,
    Damage,
    Deck,
    DirectionCard,
    EffectCard,
    KeyControl,
    LockToOwner,
    MultiCastCard,
    NoneCard,
    OnHit,
    PassiveCard,
    Pressed,
    ProjectileCard,
    SimpleCooldownModifier,
    SimpleCooldownModifierType,
    SimpleModify,
    SimpleProjectileModifierType,
    SimpleStatusEffect,
    SimpleStatusEffectType,
    Spread,
)


@pytest.fixture
def deck() -> Deck:
    """Two cooldowns and a passive effect.

    Paths of interest::

        [1, 0]           passive Speed status effect
        [2, 0, 0]        AddCharge cooldown modifier
        [2, 1, 0]        projectile card of the first ability
        [2, 1, 0, 0]     SimpleModify(Speed, 2)
        [2, 1, 0, 1]     OnHit, nested card at [2, 1, 0, 1, 0] (Damage 3)
        [2, 1, 0, 2]     LockToOwner, direction at [2, 1, 0, 2, 0]
        [3, 1, 0]        multicast card
        [3, 1, 0, 0, 0]  Spread(2)
        [3, 1, 0, 1, 0]  empty projectile
        [3, 1, 0, 1, 1]  None card
    """
    return Deck(
        cooldowns=[
            Cooldown(
                abilities=[
                    Ability(
                        card=ProjectileCard(modifiers=[
                            SimpleModify(modifier_type=SimpleProjectileModifierType.SPEED, value=2),
                            OnHit(card=EffectCard(effect=Damage(value=3))),
                            LockToOwner(direction=DirectionCard.UP),
                        ]),
                        keybind=Pressed(control=KeyControl(key="KeyQ")),
                    ),
                ],
                modifiers=[
                    SimpleCooldownModifier(
                        modifier_type=SimpleCooldownModifierType.ADD_CHARGE, value=1,
                    ),
                ],
            ),
            Cooldown(
                abilities=[
                    Ability(card=MultiCastCard(
                        cards=[ProjectileCard(), NoneCard()],
                        modifiers=[Spread(value=2)],
                    )),
                ],
            ),
        ],
        passive=PassiveCard(passive_effects=[
            SimpleStatusEffect(effect_type=SimpleStatusEffectType.SPEED, stacks=1),
        ]),
    )
