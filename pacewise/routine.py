"""
Daily routine adaptation based on the user's current state.

Energy bands are checked lowest first; only the first matching band
adapts the routine. Recent fatigue is considered only when energy is
above the moderate band.
"""

from typing import List, Optional

from pacewise.config import PacingConfig
from pacewise.models import (
    AdaptedRoutine,
    BaseRoutine,
    Modification,
    RoutineAdaptation,
    TimeOfDay,
    UserState,
)


def generate_precautions(current_energy: float, recent_fatigue: float, cfg: PacingConfig) -> List[str]:
    rp = cfg.routine
    precautions: List[str] = []

    if current_energy <= rp.very_low_energy:
        precautions.append("Stop immediately if you feel worse during activities")
        precautions.append("Consider doing activities in bed or seated")

    if recent_fatigue > rp.high_fatigue:
        precautions.append("Monitor for post-exertional malaise symptoms")
        precautions.append("Have a recovery plan ready if symptoms worsen")

    precautions.append("Listen to your body and adjust as needed")
    precautions.append("It's always okay to stop or modify activities")
    return precautions


def build_adapted_routine(
    base_routine: BaseRoutine,
    user_state: UserState,
    cfg: PacingConfig,
) -> AdaptedRoutine:
    """
    Scale a routine back to the user's current capacity.

    Bands (first match wins):
        energy <= very_low_energy   → shorten breathing, skip mobility,
                                      simplify stretches (requirement 2)
        energy <= moderate_energy   → shorten mobility, add rest (requirement 3)
        recent fatigue > high       → shorten everything (requirement 4)
        otherwise                   → unchanged (requirement 5)
    """
    rp = cfg.routine
    energy = float(user_state.current_energy)
    fatigue = float(user_state.recent_fatigue)

    adaptations: List[RoutineAdaptation] = []
    requirement = 5

    if energy <= rp.very_low_energy:
        adaptations.append(RoutineAdaptation(
            "breathing", Modification.REDUCE_DURATION, "Low energy level detected",
            new_duration=rp.breathing_seconds,
        ))
        adaptations.append(RoutineAdaptation(
            "mobility", Modification.SKIP, "Energy conservation needed",
        ))
        adaptations.append(RoutineAdaptation(
            "stretches", Modification.SIMPLIFY, "Gentle movements only",
        ))
        requirement = 2
    elif energy <= rp.moderate_energy:
        adaptations.append(RoutineAdaptation(
            "mobility", Modification.REDUCE_DURATION, "Moderate energy level",
            new_duration=rp.mobility_seconds,
        ))
        adaptations.append(RoutineAdaptation(
            "all", Modification.ADD_REST, "Extra rest periods between activities",
        ))
        requirement = 3
    elif fatigue > rp.high_fatigue:
        # No fixed duration: every component is shortened proportionally
        adaptations.append(RoutineAdaptation(
            "all", Modification.REDUCE_DURATION, "Recent high fatigue reported",
        ))
        requirement = 4

    time_of_day = TimeOfDay.MORNING
    if energy <= rp.afternoon_energy_ceiling:
        time_of_day = TimeOfDay.AFTERNOON

    return AdaptedRoutine(
        base_routine_id=base_routine.id,
        adaptations=tuple(adaptations),
        estimated_energy_requirement=requirement,
        recommended_time_of_day=time_of_day,
        precautions=tuple(generate_precautions(energy, fatigue, cfg)),
    )


def default_adapted_routine(base_routine_id: Optional[str]) -> AdaptedRoutine:
    """Gentle all-round routine returned when adaptation fails."""
    return AdaptedRoutine(
        base_routine_id=base_routine_id,
        adaptations=(
            RoutineAdaptation("all", Modification.ADD_REST, "Default gentle approach"),
        ),
        estimated_energy_requirement=4,
        recommended_time_of_day=TimeOfDay.MORNING,
        precautions=("Listen to your body and adjust as needed",),
    )
