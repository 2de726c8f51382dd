"""Palette catalogue -- the template items offered for dragging into a deck.

Each tab lists fresh template instances; dragging from the palette copies a
template (see :func:`deck_editor.editor.operations.instantiate`) so the
palette is never consumed.  The ``DOCK`` tab shows the session's dock list
instead, which *is* consumed when an item is dragged out of it.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from deck_editor.ir.cards import (
    Cleanse,
    CreateMaterialCard,
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
    PaletteCard,
    PiercePlayers,
    ProjectileCard,
    Reloading,
    SignedSimpleCooldownModifier,
    SimpleCooldownModifier,
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
)
from deck_editor.ir.kinds import (
    DirectionCard,
    SignedSimpleCooldownModifierType,
    SimpleCooldownModifierType,
    SimpleProjectileModifierType,
    SimpleStatusEffectType,
    UnsignedSimpleStatusEffectType,
    VoxelMaterial,
)


class PaletteTab(str, Enum):
    """Palette tabs, valued by their display label."""

    BASE_CARDS = "Base Cards"
    MATERIALS = "Materials"
    PROJECTILE_MODIFIERS = "Projectile Modifiers"
    ADVANCED_PROJECTILE_MODIFIERS = "Advanced Projectile Modifiers"
    MULTICAST_MODIFIERS = "Multicast Modifiers"
    STATUS_EFFECTS = "Status Effects"
    COOLDOWN_MODIFIERS = "Cooldown Modifiers"
    DIRECTIONS = "Directions"
    DOCK = "Dock"


# ---------------------------------------------------------------------------
# Templates per tab
# ---------------------------------------------------------------------------

def _projectile_modifiers() -> list[DragableItem]:
    simple = [
        DragProjectileModifier(value=SimpleModify(modifier_type=kind, value=1))
        for kind in (
            SimpleProjectileModifierType.GRAVITY,
            SimpleProjectileModifierType.HEALTH,
            SimpleProjectileModifierType.LENGTH,
            SimpleProjectileModifierType.WIDTH,
            SimpleProjectileModifierType.HEIGHT,
            SimpleProjectileModifierType.SIZE,
            SimpleProjectileModifierType.SPEED,
            SimpleProjectileModifierType.LIFETIME,
        )
    ]
    return simple + [
        DragProjectileModifier(value=NoEnemyFire()),
        DragProjectileModifier(value=FriendlyFire()),
        DragProjectileModifier(value=LockToOwner(direction=DirectionCard.NONE)),
        DragProjectileModifier(value=PiercePlayers()),
    ]


def _base_cards() -> list[DragableItem]:
    return [
        DragBaseCard(value=ProjectileCard()),
        DragBaseCard(value=MultiCastCard()),
        DragBaseCard(value=TriggerCard(trigger_id=0)),
        DragBaseCard(value=EffectCard(effect=Damage(value=1))),
        DragBaseCard(value=EffectCard(effect=Knockback(value=1, direction=DirectionCard.NONE))),
        DragBaseCard(value=EffectCard(effect=Cleanse())),
        DragBaseCard(value=EffectCard(effect=Teleport())),
        DragBaseCard(value=StatusEffectsCard(duration=1)),
    ]


def _advanced_projectile_modifiers() -> list[DragableItem]:
    return [
        DragProjectileModifier(value=OnHit()),
        DragProjectileModifier(value=OnHeadshot()),
        DragProjectileModifier(value=OnExpiry()),
        DragProjectileModifier(value=OnTrigger(trigger_id=0)),
        DragProjectileModifier(value=Trail(frequency=1)),
    ]


def _multicast_modifiers() -> list[DragableItem]:
    return [
        DragMultiCastModifier(value=Spread(value=1)),
        DragMultiCastModifier(value=Duplication(value=1)),
    ]


def _cooldown_modifiers() -> list[DragableItem]:
    return [
        DragCooldownModifier(value=SimpleCooldownModifier(
            modifier_type=SimpleCooldownModifierType.ADD_CHARGE, value=1,
        )),
        DragCooldownModifier(value=SimpleCooldownModifier(
            modifier_type=SimpleCooldownModifierType.ADD_COOLDOWN, value=1,
        )),
        DragCooldownModifier(value=SignedSimpleCooldownModifier(
            modifier_type=SignedSimpleCooldownModifierType.DECREASE_COOLDOWN, value=1,
        )),
        DragCooldownModifier(value=Reloading()),
    ]


def _status_effects() -> list[DragableItem]:
    def simple(kind: SimpleStatusEffectType) -> DragStatusEffect:
        return DragStatusEffect(value=SimpleStatusEffect(effect_type=kind, stacks=1))

    return [
        simple(SimpleStatusEffectType.DAMAGE_OVER_TIME),
        simple(SimpleStatusEffectType.INCREASE_DAMAGE_TAKEN),
        simple(SimpleStatusEffectType.INCREASE_GRAVITY),
        simple(SimpleStatusEffectType.SPEED),
        DragStatusEffect(value=UnsignedSimpleStatusEffect(
            effect_type=UnsignedSimpleStatusEffectType.OVERHEAL, stacks=1,
        )),
        simple(SimpleStatusEffectType.GROW),
        simple(SimpleStatusEffectType.INCREASE_MAX_HEALTH),
        DragStatusEffect(value=Invincibility()),
        DragStatusEffect(value=Trapped()),
        DragStatusEffect(value=Lockout()),
        DragStatusEffect(value=Stun()),
        DragStatusEffect(value=StatusOnHit()),
    ]


def _materials() -> list[DragableItem]:
    return [DragBaseCard(value=CreateMaterialCard(material=m)) for m in VoxelMaterial]


def _directions() -> list[DragableItem]:
    return [
        DragDirection(value=DirectionCard.UP),
        DragDirection(value=DirectionCard.FORWARD),
        DragDirection(value=DirectionCard.MOVEMENT),
    ]


_TEMPLATES: dict[PaletteTab, Callable[[], list[DragableItem]]] = {
    PaletteTab.BASE_CARDS: _base_cards,
    PaletteTab.MATERIALS: _materials,
    PaletteTab.PROJECTILE_MODIFIERS: _projectile_modifiers,
    PaletteTab.ADVANCED_PROJECTILE_MODIFIERS: _advanced_projectile_modifiers,
    PaletteTab.MULTICAST_MODIFIERS: _multicast_modifiers,
    PaletteTab.STATUS_EFFECTS: _status_effects,
    PaletteTab.COOLDOWN_MODIFIERS: _cooldown_modifiers,
    PaletteTab.DIRECTIONS: _directions,
}


def palette_items(tab: PaletteTab, dock: list[DragableItem] | None = None) -> list[DragableItem]:
    """Return the items shown on *tab*.

    Template tabs return fresh instances on every call.  The dock tab
    returns *dock* itself (or an empty list).
    """
    if tab is PaletteTab.DOCK:
        return dock if dock is not None else []
    return _TEMPLATES[tab]()


def build_palette(tab: PaletteTab, dock: list[DragableItem] | None = None) -> PaletteCard:
    """Wrap the items of *tab* in a :class:`PaletteCard` for instantiation."""
    return PaletteCard(items=list(palette_items(tab, dock)))
