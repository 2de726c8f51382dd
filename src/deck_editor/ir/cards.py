"""Card nodes -- the tagged unions that make up an ability's composition tree.

Every union is a pydantic discriminated union keyed on the ``type`` field,
whose value is the variant name.  The JSON form is therefore a direct
structural mirror of the tree and round-trips losslessly.

The tree is recursive: a ``Projectile`` holds modifiers, an advanced modifier
such as ``OnHit`` holds another ``BaseCard``, which can hold further
modifiers, and so on.  Ownership is strictly tree-shaped.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, Field, model_validator

from .kinds import (
    DirectionCard,
    SignedSimpleCooldownModifierType,
    SimpleCooldownModifierType,
    SimpleProjectileModifierType,
    SimpleStatusEffectType,
    UnsignedSimpleStatusEffectType,
    VoxelMaterial,
)


class DragKind(str, Enum):
    """Which family a detached (dragged) node belongs to."""

    PROJECTILE_MODIFIER = "ProjectileModifier"
    MULTICAST_MODIFIER = "MultiCastModifier"
    COOLDOWN_MODIFIER = "CooldownModifier"
    STATUS_EFFECT = "StatusEffect"
    BASE_CARD = "BaseCard"
    DIRECTION = "Direction"


# ---------------------------------------------------------------------------
# Effects (payload of an ``Effect`` base card)
# ---------------------------------------------------------------------------

class Damage(BaseModel):
    type: Literal["Damage"] = "Damage"
    value: int = 1


class Knockback(BaseModel):
    type: Literal["Knockback"] = "Knockback"
    value: int = 1
    direction: DirectionCard = DirectionCard.NONE


class Cleanse(BaseModel):
    type: Literal["Cleanse"] = "Cleanse"


class Teleport(BaseModel):
    type: Literal["Teleport"] = "Teleport"


Effect = Annotated[
    Union[Damage, Knockback, Cleanse, Teleport],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Base cards
# ---------------------------------------------------------------------------

class NoneCard(BaseModel):
    """The canonical empty card slot."""

    type: Literal["None"] = "None"


class ProjectileCard(BaseModel):
    type: Literal["Projectile"] = "Projectile"
    modifiers: list[ProjectileModifier] = Field(default_factory=list)


class MultiCastCard(BaseModel):
    """Casts every contained card at once, shaped by its modifiers."""

    type: Literal["MultiCast"] = "MultiCast"
    cards: list[BaseCard] = Field(default_factory=list)
    modifiers: list[MultiCastModifier] = Field(default_factory=list)


class CreateMaterialCard(BaseModel):
    type: Literal["CreateMaterial"] = "CreateMaterial"
    material: VoxelMaterial


class EffectCard(BaseModel):
    type: Literal["Effect"] = "Effect"
    effect: Effect


class StatusEffectsCard(BaseModel):
    """Applies ``effects`` for ``duration`` seconds."""

    type: Literal["StatusEffects"] = "StatusEffects"
    duration: int = Field(default=1, ge=0)
    effects: list[StatusEffect] = Field(default_factory=list)


class TriggerCard(BaseModel):
    """Fires every ``OnTrigger`` modifier listening on ``trigger_id``."""

    type: Literal["Trigger"] = "Trigger"
    trigger_id: int = Field(default=0, ge=0)


class PaletteCard(BaseModel):
    """Read-only catalogue of templates.  Never part of a persisted deck."""

    type: Literal["Palette"] = "Palette"
    items: list[DragableItem] = Field(default_factory=list)


BaseCard = Annotated[
    Union[
        NoneCard,
        ProjectileCard,
        MultiCastCard,
        CreateMaterialCard,
        EffectCard,
        StatusEffectsCard,
        TriggerCard,
        PaletteCard,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Projectile modifiers
# ---------------------------------------------------------------------------

class ProjectileNone(BaseModel):
    type: Literal["None"] = "None"


class SimpleModify(BaseModel):
    """Signed adjustment of one projectile stat."""

    type: Literal["SimpleModify"] = "SimpleModify"
    modifier_type: SimpleProjectileModifierType
    value: int = 1


class NoEnemyFire(BaseModel):
    type: Literal["NoEnemyFire"] = "NoEnemyFire"


class FriendlyFire(BaseModel):
    type: Literal["FriendlyFire"] = "FriendlyFire"


class PiercePlayers(BaseModel):
    type: Literal["PiercePlayers"] = "PiercePlayers"


class WallBounce(BaseModel):
    type: Literal["WallBounce"] = "WallBounce"


class LockToOwner(BaseModel):
    type: Literal["LockToOwner"] = "LockToOwner"
    direction: DirectionCard = DirectionCard.NONE


class OnHit(BaseModel):
    type: Literal["OnHit"] = "OnHit"
    card: BaseCard = Field(default_factory=NoneCard)


class OnHeadshot(BaseModel):
    type: Literal["OnHeadshot"] = "OnHeadshot"
    card: BaseCard = Field(default_factory=NoneCard)


class OnExpiry(BaseModel):
    type: Literal["OnExpiry"] = "OnExpiry"
    card: BaseCard = Field(default_factory=NoneCard)


class OnTrigger(BaseModel):
    type: Literal["OnTrigger"] = "OnTrigger"
    trigger_id: int = Field(default=0, ge=0)
    card: BaseCard = Field(default_factory=NoneCard)


class Trail(BaseModel):
    """Casts ``card`` ``frequency`` times per second along the flight path."""

    type: Literal["Trail"] = "Trail"
    frequency: int = Field(default=1, ge=0)
    card: BaseCard = Field(default_factory=NoneCard)


ProjectileModifier = Annotated[
    Union[
        ProjectileNone,
        SimpleModify,
        NoEnemyFire,
        FriendlyFire,
        PiercePlayers,
        WallBounce,
        LockToOwner,
        OnHit,
        OnHeadshot,
        OnExpiry,
        OnTrigger,
        Trail,
    ],
    Field(discriminator="type"),
]

# Modifiers that carry a nested card subtree.
ADVANCED_PROJECTILE_MODIFIERS = (OnHit, OnHeadshot, OnExpiry, OnTrigger, Trail)


# ---------------------------------------------------------------------------
# Multicast modifiers
# ---------------------------------------------------------------------------

class MultiCastNone(BaseModel):
    type: Literal["None"] = "None"


class Spread(BaseModel):
    type: Literal["Spread"] = "Spread"
    value: int = Field(default=1, ge=0)


class Duplication(BaseModel):
    type: Literal["Duplication"] = "Duplication"
    value: int = Field(default=1, ge=0)


MultiCastModifier = Annotated[
    Union[MultiCastNone, Spread, Duplication],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Cooldown modifiers
# ---------------------------------------------------------------------------

class CooldownNone(BaseModel):
    type: Literal["None"] = "None"


class Reloading(BaseModel):
    """All charges come back together instead of one at a time."""

    type: Literal["Reloading"] = "Reloading"


class SimpleCooldownModifier(BaseModel):
    type: Literal["SimpleCooldownModifier"] = "SimpleCooldownModifier"
    modifier_type: SimpleCooldownModifierType
    value: int = Field(default=1, ge=0)


class SignedSimpleCooldownModifier(BaseModel):
    type: Literal["SignedSimpleCooldownModifier"] = "SignedSimpleCooldownModifier"
    modifier_type: SignedSimpleCooldownModifierType
    value: int = 1


CooldownModifier = Annotated[
    Union[CooldownNone, Reloading, SimpleCooldownModifier, SignedSimpleCooldownModifier],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Status effects
# ---------------------------------------------------------------------------

class StatusNone(BaseModel):
    type: Literal["None"] = "None"


class Invincibility(BaseModel):
    type: Literal["Invincibility"] = "Invincibility"


class Lockout(BaseModel):
    type: Literal["Lockout"] = "Lockout"


class Trapped(BaseModel):
    type: Literal["Trapped"] = "Trapped"


class Stun(BaseModel):
    type: Literal["Stun"] = "Stun"


class SimpleStatusEffect(BaseModel):
    """Signed status effect.

    Only ``IncreaseGravity`` carries a ``direction``; for every other
    ``effect_type`` it stays ``None``.  Two entries merge only when both the
    type and the direction match.
    """

    type: Literal["SimpleStatusEffect"] = "SimpleStatusEffect"
    effect_type: SimpleStatusEffectType
    stacks: int = 1
    direction: DirectionCard | None = None

    @model_validator(mode="after")
    def _check_direction(self) -> SimpleStatusEffect:
        if self.effect_type is SimpleStatusEffectType.INCREASE_GRAVITY:
            if self.direction is None:
                self.direction = DirectionCard.NONE
        elif self.direction is not None:
            raise ValueError(
                f"{self.effect_type.value} does not take a direction"
            )
        return self

    @property
    def has_direction(self) -> bool:
        return self.effect_type is SimpleStatusEffectType.INCREASE_GRAVITY


class UnsignedSimpleStatusEffect(BaseModel):
    type: Literal["UnsignedSimpleStatusEffect"] = "UnsignedSimpleStatusEffect"
    effect_type: UnsignedSimpleStatusEffectType
    stacks: int = Field(default=1, ge=0)


class StatusOnHit(BaseModel):
    """Casts ``card`` whenever the affected player is hit."""

    type: Literal["OnHit"] = "OnHit"
    card: BaseCard = Field(default_factory=NoneCard)


StatusEffect = Annotated[
    Union[
        StatusNone,
        Invincibility,
        Lockout,
        Trapped,
        Stun,
        SimpleStatusEffect,
        UnsignedSimpleStatusEffect,
        StatusOnHit,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Dragable items -- transport wrappers for detached nodes
# ---------------------------------------------------------------------------

class DragBaseCard(BaseModel):
    kind: ClassVar[DragKind] = DragKind.BASE_CARD
    type: Literal["BaseCard"] = "BaseCard"
    value: BaseCard


class DragProjectileModifier(BaseModel):
    kind: ClassVar[DragKind] = DragKind.PROJECTILE_MODIFIER
    type: Literal["ProjectileModifier"] = "ProjectileModifier"
    value: ProjectileModifier


class DragMultiCastModifier(BaseModel):
    kind: ClassVar[DragKind] = DragKind.MULTICAST_MODIFIER
    type: Literal["MultiCastModifier"] = "MultiCastModifier"
    value: MultiCastModifier


class DragCooldownModifier(BaseModel):
    kind: ClassVar[DragKind] = DragKind.COOLDOWN_MODIFIER
    type: Literal["CooldownModifier"] = "CooldownModifier"
    value: CooldownModifier


class DragStatusEffect(BaseModel):
    kind: ClassVar[DragKind] = DragKind.STATUS_EFFECT
    type: Literal["StatusEffect"] = "StatusEffect"
    value: StatusEffect


class DragDirection(BaseModel):
    kind: ClassVar[DragKind] = DragKind.DIRECTION
    type: Literal["Direction"] = "Direction"
    value: DirectionCard


DragableItem = Annotated[
    Union[
        DragBaseCard,
        DragProjectileModifier,
        DragMultiCastModifier,
        DragCooldownModifier,
        DragStatusEffect,
        DragDirection,
    ],
    Field(discriminator="type"),
]


def is_advanced(node: BaseModel) -> bool:
    """True if *node* is a modifier or status effect holding a nested card."""
    return isinstance(node, ADVANCED_PROJECTILE_MODIFIERS + (StatusOnHit,))


def is_empty(node: BaseModel) -> bool:
    """True for the ``None`` variant of any card family."""
    return isinstance(
        node, (NoneCard, ProjectileNone, MultiCastNone, CooldownNone, StatusNone)
    )


# Resolve the forward references between the recursive unions.
for _model in (
    ProjectileCard,
    MultiCastCard,
    EffectCard,
    StatusEffectsCard,
    PaletteCard,
    OnHit,
    OnHeadshot,
    OnExpiry,
    OnTrigger,
    Trail,
    StatusOnHit,
    DragBaseCard,
    DragProjectileModifier,
    DragMultiCastModifier,
    DragCooldownModifier,
    DragStatusEffect,
    DragDirection,
):
    _model.model_rebuild()
del _model
