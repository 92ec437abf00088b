"""
Program engine: prescriptions, progression, plate math and rest timer.
"""

from .models import AccessoryExercise, Lift, LifterProfile, PrescribedSet, Prescription, SetCategory, Template, WorkoutSession
from .plates import plate_loadout, resolve_plates, round_to_increment
from .prescriber import generate_prescription
from .progression import finalize_session, next_lift
from .rest_timer import RestTimer

__all__ = [
    "AccessoryExercise",
    "Lift",
    "LifterProfile",
    "PrescribedSet",
    "Prescription",
    "SetCategory",
    "Template",
    "WorkoutSession",
    "plate_loadout",
    "resolve_plates",
    "round_to_increment",
    "generate_prescription",
    "finalize_session",
    "next_lift",
    "RestTimer",
]
