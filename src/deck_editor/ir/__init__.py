"""Card tree schema for the ability deck editor.

Every node -- base cards, modifiers, status effects, directions, cooldowns --
is a Pydantic model.  The tagged unions are discriminated on a ``type``
field holding the variant name, so decks serialise cleanly to and from JSON.
:class:`Deck` is the root handed to the editor session.
"""

from .cards import (
    Cleanse,
    CooldownModifier,
    CooldownNone,
    CreateMaterialCard,
    Damage,
    DragableItem,
    DragBaseCard,
    DragCooldownModifier,
    DragDirection,
    DragKind,
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
    MultiCastModifier,
    MultiCastNone,
    NoEnemyFire,
    NoneCard,
    OnExpiry,
    OnHeadshot,
    OnHit,
    OnTrigger,
    PaletteCard,
    PiercePlayers,
    ProjectileCard,
    ProjectileModifier,
    ProjectileNone,
    Reloading,
    SignedSimpleCooldownModifier,
    SimpleCooldownModifier,
    SimpleModify,
    SimpleStatusEffect,
    Spread,
    StatusEffect,
    StatusEffectsCard,
    StatusNone,
    StatusOnHit,
    Stun,
    Teleport,
    Trail,
    Trapped,
    TriggerCard,
    UnsignedSimpleStatusEffect,
    WallBounce,
    BaseCard,
    Effect,
    is_advanced,
    is_empty,
)
from .deck import (
    Ability,
    Control,
    Cooldown,
    Deck,
    KeyControl,
    Keybind,
    MouseControl,
    NotBound,
    PassiveCard,
    Pressed,
    Recovery,
)
from .kinds import (
    DirectionCard,
    MouseButton,
    SignedSimpleCooldownModifierType,
    SimpleCooldownModifierType,
    SimpleProjectileModifierType,
    SimpleStatusEffectType,
    UnsignedSimpleStatusEffectType,
    VoxelMaterial,
)

__all__ = [
    # kinds
    "DirectionCard",
    "MouseButton",
    "SignedSimpleCooldownModifierType",
    "SimpleCooldownModifierType",
    "SimpleProjectileModifierType",
    "SimpleStatusEffectType",
    "UnsignedSimpleStatusEffectType",
    "VoxelMaterial",
    # cards -- unions
    "BaseCard",
    "CooldownModifier",
    "DragableItem",
    "Effect",
    "MultiCastModifier",
    "ProjectileModifier",
    "StatusEffect",
    "DragKind",
    # cards -- base cards
    "NoneCard",
    "ProjectileCard",
    "MultiCastCard",
    "CreateMaterialCard",
    "EffectCard",
    "StatusEffectsCard",
    "TriggerCard",
    "PaletteCard",
    # cards -- effects
    "Damage",
    "Knockback",
    "Cleanse",
    "Teleport",
    # cards -- projectile modifiers
    "ProjectileNone",
    "SimpleModify",
    "NoEnemyFire",
    "FriendlyFire",
    "PiercePlayers",
    "WallBounce",
    "LockToOwner",
    "OnHit",
    "OnHeadshot",
    "OnExpiry",
    "OnTrigger",
    "Trail",
    # cards -- multicast / cooldown modifiers
    "MultiCastNone",
    "Spread",
    "Duplication",
    "CooldownNone",
    "Reloading",
    "SimpleCooldownModifier",
    "SignedSimpleCooldownModifier",
    # cards -- status effects
    "StatusNone",
    "Invincibility",
    "Lockout",
    "Trapped",
    "Stun",
    "SimpleStatusEffect",
    "UnsignedSimpleStatusEffect",
    "StatusOnHit",
    # cards -- dragable items
    "DragBaseCard",
    "DragProjectileModifier",
    "DragMultiCastModifier",
    "DragCooldownModifier",
    "DragStatusEffect",
    "DragDirection",
    "is_advanced",
    "is_empty",
    # deck
    "Ability",
    "Control",
    "Cooldown",
    "Deck",
    "KeyControl",
    "Keybind",
    "MouseControl",
    "NotBound",
    "PassiveCard",
    "Pressed",
    "Recovery",
]
