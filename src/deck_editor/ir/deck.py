"""Deck root -- cooldowns, abilities, keybinds and the passive card.

``Deck`` is the root of the editable tree.  Its two top-level slots are the
list of cooldowns and the passive card.  Derived values (cooldown recovery)
and UI selection state live on the models as excluded fields so they never
reach the serialized form.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .cards import BaseCard, CooldownModifier, NoneCard, StatusEffect
from .kinds import MouseButton

# (base seconds, per-charge recovery seconds)
Recovery = tuple[float, list[float]]

_MOUSE_GLYPHS: dict[MouseButton, str] = {
    MouseButton.LEFT: "↖",
    MouseButton.MIDDLE: "⬆",
    MouseButton.RIGHT: "↗",
}


# ---------------------------------------------------------------------------
# Controls and keybinds
# ---------------------------------------------------------------------------

class KeyControl(BaseModel):
    type: Literal["Key"] = "Key"
    key: str
    """Key code name, e.g. ``"KeyQ"`` or ``"Space"``."""

    def __str__(self) -> str:
        return self.key


class MouseControl(BaseModel):
    type: Literal["Mouse"] = "Mouse"
    button: MouseButton

    def __str__(self) -> str:
        return _MOUSE_GLYPHS.get(self.button, self.button.value)


Control = Annotated[Union[KeyControl, MouseControl], Field(discriminator="type")]


class NotBound(BaseModel):
    type: Literal["NotBound"] = "NotBound"

    def simple_representation(self) -> str | None:
        return None


class Pressed(BaseModel):
    type: Literal["Pressed"] = "Pressed"
    control: Control

    def simple_representation(self) -> str | None:
        return str(self.control)


Keybind = Annotated[Union[NotBound, Pressed], Field(discriminator="type")]


# ---------------------------------------------------------------------------
# Abilities and cooldowns
# ---------------------------------------------------------------------------

class Ability(BaseModel):
    """One castable card bound to a key, sharing its cooldown's timer."""

    card: BaseCard = Field(default_factory=NoneCard)
    keybind: Keybind = Field(default_factory=NotBound)

    is_keybind_selected: bool = Field(default=False, exclude=True)
    """True while the editor waits for the next key/mouse press to bind."""

    cached_recovery: Recovery | None = Field(default=None, exclude=True)

    def invalidate_cooldown_cache(self) -> None:
        self.cached_recovery = None

    def select_keybind(self) -> None:
        self.is_keybind_selected = True

    def capture_keybind(self, control: KeyControl | MouseControl) -> bool:
        """Bind *control* if this ability is waiting for a key press.

        Returns True if the keybind changed.
        """
        if not self.is_keybind_selected:
            return False
        self.keybind = Pressed(control=control)
        self.is_keybind_selected = False
        return True


class Cooldown(BaseModel):
    """A set of abilities usable once the shared timer is up."""

    abilities: list[Ability] = Field(default_factory=lambda: [Ability()], min_length=1)
    modifiers: list[CooldownModifier] = Field(default_factory=list)

    cached_value: Recovery | None = Field(default=None, exclude=True)

    @classmethod
    def empty(cls) -> Cooldown:
        return cls(abilities=[Ability()])

    def invalidate(self) -> None:
        """Clear this cooldown's cached recovery and those of its abilities."""
        self.cached_value = None
        for ability in self.abilities:
            ability.invalidate_cooldown_cache()


# ---------------------------------------------------------------------------
# Passive card and deck
# ---------------------------------------------------------------------------

class PassiveCard(BaseModel):
    passive_effects: list[StatusEffect] = Field(default_factory=list)


class Deck(BaseModel):
    """Root of the editable tree."""

    cooldowns: list[Cooldown] = Field(default_factory=list)
    passive: PassiveCard = Field(default_factory=PassiveCard)

    def invalidate_caches(self) -> None:
        for cooldown in self.cooldowns:
            cooldown.invalidate()
