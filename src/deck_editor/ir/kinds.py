"""Leaf enumerations referenced by card nodes.

None of these carry children, so the tree engine treats them as plain values
held by their parent node.
"""

from __future__ import annotations

from enum import Enum


class DirectionCard(str, Enum):
    """Direction a projectile lock, knockback or gravity effect points in."""

    NONE = "None"
    UP = "Up"
    FORWARD = "Forward"
    MOVEMENT = "Movement"


class SimpleProjectileModifierType(str, Enum):
    """Projectile stats adjusted by a ``SimpleModify`` modifier."""

    GRAVITY = "Gravity"
    HEALTH = "Health"
    LENGTH = "Length"
    WIDTH = "Width"
    HEIGHT = "Height"
    SIZE = "Size"
    SPEED = "Speed"
    LIFETIME = "Lifetime"


class SimpleCooldownModifierType(str, Enum):
    """Unsigned cooldown modifiers -- stack counts that stay >= 1."""

    ADD_CHARGE = "AddCharge"
    ADD_COOLDOWN = "AddCooldown"


class SignedSimpleCooldownModifierType(str, Enum):
    """Signed cooldown modifiers -- may go below zero."""

    DECREASE_COOLDOWN = "DecreaseCooldown"


class SimpleStatusEffectType(str, Enum):
    """Signed status effects.  ``INCREASE_GRAVITY`` also carries a direction."""

    DAMAGE_OVER_TIME = "DamageOverTime"
    INCREASE_DAMAGE_TAKEN = "IncreaseDamageTaken"
    INCREASE_GRAVITY = "IncreaseGravity"
    SPEED = "Speed"
    GROW = "Grow"
    INCREASE_MAX_HEALTH = "IncreaseMaxHealth"


class UnsignedSimpleStatusEffectType(str, Enum):
    """Status effects whose stacks never go below zero."""

    OVERHEAL = "Overheal"


class VoxelMaterial(str, Enum):
    """Materials a ``CreateMaterial`` card can place in the world."""

    GRASS = "Grass"
    DIRT = "Dirt"
    STONE = "Stone"
    ICE = "Ice"
    WATER = "Water"


class MouseButton(str, Enum):
    LEFT = "Left"
    MIDDLE = "Middle"
    RIGHT = "Right"
    BACK = "Back"
    FORWARD = "Forward"
