"""Balance derivations: card impact scores and cooldown recovery."""

from deck_editor.balance.impact import cooldown_impact, deck_impact, node_impact
from deck_editor.balance.recovery import (
    cooldown_recovery,
    refresh_cooldown,
    refresh_recovery,
)

__all__ = [
    "cooldown_impact",
    "cooldown_recovery",
    "deck_impact",
    "node_impact",
    "refresh_cooldown",
    "refresh_recovery",
]
