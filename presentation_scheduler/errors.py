#!/usr/bin/env python3
"""
Validation errors raised while building a schedule request.

All of them are raised before any model variable is allocated and derive
from ValueError, so callers that only care about "bad input" can catch that.
"""


class ScheduleValidationError(ValueError):
    """Base class for problems with a schedule request."""


class DuplicateIndividualError(ScheduleValidationError):
    """The same individual is listed more than once."""


class DuplicateDateError(ScheduleValidationError):
    """The same meeting date is listed more than once."""


class UnknownIndividualError(ScheduleValidationError):
    """A per-individual override names someone who is not being scheduled."""


class UnknownDateError(ScheduleValidationError):
    """An unavailability entry names a date that is not a meeting date."""


class InvalidConfigurationError(ScheduleValidationError):
    """Negative counts, inverted bounds, bad date types and similar."""
