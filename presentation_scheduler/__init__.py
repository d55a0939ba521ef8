"""Presentation scheduling - spread research and journal club talks over meeting dates."""

from .scheduler import PresentationScheduler, optimize, check_capacity
from .spec import ScheduleConfig, ScheduleSpec, DateBounds
from .errors import (
    ScheduleValidationError,
    DuplicateIndividualError,
    DuplicateDateError,
    UnknownIndividualError,
    UnknownDateError,
    InvalidConfigurationError,
)
from .constraints import ForcePresentationDates, default_constraints
from .objectives import MinimizeSpacingBadness
from .model_builder import ScheduleModel, build_model
from .program import linearize_product
from .solver import PulpSolverAdapter, SolverAdapter, SolverSettings, SolverStatus
from .decoder import Assignment, ScheduleResult, decode_solution
from .display import format_schedule, schedule_to_html
from .utils import badness
from .visualize_schedule import visualize_schedule

__all__ = [
    "PresentationScheduler",
    "optimize",
    "check_capacity",
    "ScheduleConfig",
    "ScheduleSpec",
    "DateBounds",
    "ScheduleValidationError",
    "DuplicateIndividualError",
    "DuplicateDateError",
    "UnknownIndividualError",
    "UnknownDateError",
    "InvalidConfigurationError",
    "ForcePresentationDates",
    "default_constraints",
    "MinimizeSpacingBadness",
    "ScheduleModel",
    "build_model",
    "linearize_product",
    "PulpSolverAdapter",
    "SolverAdapter",
    "SolverSettings",
    "SolverStatus",
    "Assignment",
    "ScheduleResult",
    "decode_solution",
    "format_schedule",
    "schedule_to_html",
    "badness",
    "visualize_schedule",
]
