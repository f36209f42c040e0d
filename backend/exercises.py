"""Built-in breathing exercise catalog.

Each exercise declares the order of its phases and how long each phase
lasts. The ``Custom`` exercise has no compiled-in durations; its values come
from :mod:`backend.custom_durations`.
"""

from __future__ import annotations

from typing import Dict, List

from breathing import EXHALE, HOLD_EXHALE, HOLD_INHALE, INHALE, PHASES

from . import CUSTOM_EXERCISE

EXERCISE_PHASES: Dict[str, List[str]] = {
    "Samavritti Advanced": [INHALE, HOLD_INHALE, EXHALE, HOLD_EXHALE],
    "Samavritti Basic": [INHALE, EXHALE],
    "4-7-8 Breathing": [INHALE, HOLD_INHALE, EXHALE],
    "Pursed Lip Breathing": [INHALE, EXHALE],
    "Diaphragmatic Breathing": [INHALE, EXHALE],
    "Nadī Shodhana": [INHALE, EXHALE],
    CUSTOM_EXERCISE: list(PHASES),
}

EXERCISE_DURATIONS: Dict[str, Dict[str, int]] = {
    "Samavritti Advanced": {INHALE: 6, HOLD_INHALE: 6, EXHALE: 6, HOLD_EXHALE: 6},
    "Samavritti Basic": {INHALE: 4, EXHALE: 4},
    "4-7-8 Breathing": {INHALE: 4, HOLD_INHALE: 7, EXHALE: 8},
    "Pursed Lip Breathing": {INHALE: 2, EXHALE: 4},
    "Diaphragmatic Breathing": {INHALE: 4, EXHALE: 6},
    "Nadī Shodhana": {INHALE: 3, EXHALE: 3},
    CUSTOM_EXERCISE: {},
}

PHASE_LABELS: Dict[str, str] = {
    INHALE: "Inhale",
    HOLD_INHALE: "Hold",
    EXHALE: "Exhale",
    HOLD_EXHALE: "Hold",
}

_SAMAVRITTI_INTRO = (
    "Samavritti, or equal breath, is a pranayama practice that balances "
    "inhalation, internal retention, exhalation, and external retention. It "
    "enhances breath awareness, calms the body, and sharpens focus for "
    "meditation."
)

DESCRIPTIONS: Dict[str, str] = {
    "Samavritti Advanced": (
        "Inhale for 6 seconds, hold for 6 seconds, exhale for 6 seconds, and "
        "hold again for 6 seconds.\n\n"
        f"{_SAMAVRITTI_INTRO}\n\n"
        "Try to cultivate the same quality of breath at the beginning, "
        "middle, and end of the count. The breath should not be forced or "
        "strained."
    ),
    "Samavritti Basic": (
        "Breathe in and out evenly, usually around 4 seconds per breath.\n\n"
        f"{_SAMAVRITTI_INTRO}\n\n"
        "In this basic version of Samavritti, there is no need to hold the "
        "breath."
    ),
    "4-7-8 Breathing": (
        "Inhale for 4 seconds, hold the breath for 7 seconds, and exhale for "
        "8 seconds.\n\n"
        "The 4-7-8 breathing technique is a form of pranayama, which is the "
        "practice of breath regulation in yoga. It requires a person to focus "
        "on taking long, deep breaths in and out.\n\n"
        "This breathing pattern aims to reduce anxiety and soothes nerves "
        "prior to sleep."
    ),
    "Pursed Lip Breathing": (
        "Inhale through the nose for 2 seconds with mouth closed, exhale "
        "slowly through pursed lips for 4 seconds.\n\n"
        "Pursed Lip Breathing is a slow breathing technique that enables a "
        "person to be aware and control how much air enters and leaves their "
        "lungs.\n\n"
        "It is beneficial for reducing anxiety and increasing relaxation."
    ),
    "Diaphragmatic Breathing": (
        "Inhale deeply, expanding the diaphragm, for 4 seconds, and exhale "
        "for 6 seconds.\n\n"
        "Practicing relaxed, diaphragmatic breathing is refreshing and "
        "restful, and creates a sense of well-being.\n\n"
        "It calms the nervous system and centers attention in the ADHD mind."
    ),
    "Nadī Shodhana": (
        "Inhale through the left nostril for 3 seconds, exhale through the "
        "right nostril for 3 seconds, and repeat.\n\n"
        "Sometimes called channel-clearing breath, alternate nostril "
        "breathing has historically been said to clear energy blockages and "
        "bring about inner balance.\n\n"
        "Isolate each nostril, breathing in through only one of them at a "
        "time and then exhaling through the other."
    ),
    CUSTOM_EXERCISE: "Create your own custom breathing exercise.",
}


def _check(exercise: str) -> None:
    if exercise not in EXERCISE_PHASES:
        raise ValueError(f"Unknown exercise '{exercise}'")


def get_all_exercises() -> List[str]:
    """Return exercise names for the selector with ``Custom`` last."""

    names = [name for name in EXERCISE_PHASES if name != CUSTOM_EXERCISE]
    names.append(CUSTOM_EXERCISE)
    return names


def get_phases(exercise: str) -> List[str]:
    """Return a copy of the declared phase order of ``exercise``."""

    _check(exercise)
    return list(EXERCISE_PHASES[exercise])


def get_durations(exercise: str) -> Dict[str, int]:
    """Return a copy of the built-in durations of ``exercise``.

    The mapping is empty for :data:`~backend.CUSTOM_EXERCISE`.
    """

    _check(exercise)
    return dict(EXERCISE_DURATIONS[exercise])


def get_description(exercise: str) -> str:
    _check(exercise)
    return DESCRIPTIONS[exercise]


def phase_label(phase: str) -> str:
    """Return the display name for ``phase``."""

    return PHASE_LABELS.get(phase, phase.replace("_", " ").title())
