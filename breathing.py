from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

INHALE = "inhale"
HOLD_INHALE = "hold_inhale"
EXHALE = "exhale"
HOLD_EXHALE = "hold_exhale"

# Canonical order of a full breathing cycle.
PHASES: List[str] = [INHALE, HOLD_INHALE, EXHALE, HOLD_EXHALE]

DurationMap = Dict[str, int]


def derive_sequence(phases: Iterable[str], durations: Mapping[str, int]) -> List[str]:
    """Return ``phases`` in order, keeping only those with a positive duration.

    Missing, zero and negative durations all drop the phase. The result may
    be empty when nothing is configured.
    """

    return [phase for phase in phases if (durations.get(phase) or 0) > 0]


def coerce_duration(value) -> int:
    """Return ``value`` as a non-negative whole number of seconds.

    Blank or unparsable input counts as ``0`` which removes the phase from
    the cycle. Negative values are clamped to ``0``.
    """

    if isinstance(value, str):
        value = value.strip() or 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return max(0, int(number))


@dataclass
class BreathingPhase:
    """A single phase of the effective cycle."""

    name: str
    duration: int


class BreathingCycle:
    """Effective cycle of an exercise and its total length.

    Only phases with a positive duration take part in the cycle, so
    :attr:`total` is zero exactly when the cycle is empty.
    """

    def __init__(self, phases: Iterable[str], durations: Mapping[str, int]) -> None:
        self.phases: List[BreathingPhase] = [
            BreathingPhase(name, int(durations[name]))
            for name in derive_sequence(phases, durations)
        ]
        self.total: int = sum(p.duration for p in self.phases)

    def __len__(self) -> int:
        return len(self.phases)

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.phases]

