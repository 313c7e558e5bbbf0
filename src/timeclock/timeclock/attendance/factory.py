from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import Intent
from ..core.exceptions import ValidationError
from .strategies.base import TransitionStrategy
from .strategies.break_strategy import EndBreakStrategy, StartBreakStrategy
from .strategies.clock_out_strategy import ClockOutStrategy
from .strategies.pause_strategy import EndPauseStrategy, StartPauseStrategy


def _default_strategies() -> dict[Intent, TransitionStrategy]:
    strategies: list[TransitionStrategy] = [
        StartBreakStrategy(),
        EndBreakStrategy(),
        StartPauseStrategy(),
        EndPauseStrategy(),
        ClockOutStrategy(),
    ]
    return {s.intent: s for s in strategies}


@dataclass
class TransitionFactory:
    """Factory Pattern: pick the transition strategy for a caller intent."""

    strategies: dict[Intent, TransitionStrategy] = field(default_factory=_default_strategies)

    def for_intent(self, intent: Intent | str) -> TransitionStrategy:
        try:
            key = Intent(intent)
        except ValueError:
            raise ValidationError(f"Unknown attendance action: {intent!r}")
        strategy = self.strategies.get(key)
        if strategy is None:
            raise ValidationError(f"Unsupported attendance action: {key.value}")
        return strategy
