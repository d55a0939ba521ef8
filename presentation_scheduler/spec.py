#!/usr/bin/env python3
"""
Problem description for presentation scheduling.

A ScheduleSpec is the validated, normalised form of a scheduling request:
who presents, on which dates, how often, and with which per-date limits.
Building one is the only place where input is checked; everything downstream
assumes a valid spec.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from numbers import Integral
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, Mapping, Optional, Sequence, Tuple

from .errors import (
    DuplicateDateError,
    DuplicateIndividualError,
    InvalidConfigurationError,
    UnknownDateError,
    UnknownIndividualError,
)


BACKENDS = ("cbc", "highs")
DATE_BOUND_FIELDS = (
    "min_total", "max_total",
    "min_presentations", "max_presentations",
    "min_journals", "max_journals",
)


def _is_count(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class DateBounds:
    """Per meeting date limits on the number of talks of each kind."""

    min_total: int = 2
    max_total: int = 4
    min_presentations: int = 1
    max_presentations: int = 3
    min_journals: int = 0
    max_journals: int = 1

    def __post_init__(self) -> None:
        for name in ("total", "presentations", "journals"):
            low = getattr(self, f"min_{name}")
            high = getattr(self, f"max_{name}")
            if not _is_count(low) or not _is_count(high):
                raise InvalidConfigurationError(f"min_{name} and max_{name} must be integers")
            if low < 0 or high < 0:
                raise InvalidConfigurationError(f"min_{name} and max_{name} must be non-negative")
            if low > high:
                raise InvalidConfigurationError(
                    f"min_{name} ({low}) cannot be larger than max_{name} ({high})"
                )


@dataclass(frozen=True)
class ScheduleConfig:
    """
    Defaults, per-date bounds and solver settings for a scheduling request.

    Args:
        default_presentations: Research talks per individual unless overridden
        default_journals: Journal club talks per individual unless overridden
        min_total, max_total: Talks of either kind per meeting date
        min_presentations, max_presentations: Research talks per meeting date
        min_journals, max_journals: Journal club talks per meeting date
        time_limit: Wall-clock budget for the solver in seconds; a provably
                    optimal schedule is usually too slow to certify
        seed: Solver random seed. None draws a fresh seed for every solve, so
              repeated runs may return different (equally good) schedules.
              Runs are only reproducible with a fixed seed and the same
              solver backend and version.
        backend: 'cbc' or 'highs'
        solver_verbose: Show the solver log while optimizing
    """

    default_presentations: int = 2
    default_journals: int = 1
    min_total: int = 2
    max_total: int = 4
    min_presentations: int = 1
    max_presentations: int = 3
    min_journals: int = 0
    max_journals: int = 1
    time_limit: float = 60.0
    seed: Optional[int] = None
    backend: str = "cbc"
    solver_verbose: bool = False

    def __post_init__(self) -> None:
        for name in ("default_presentations", "default_journals"):
            value = getattr(self, name)
            if not _is_count(value) or value < 0:
                raise InvalidConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
        self._validate_bounds()
        if not self.time_limit > 0:
            raise InvalidConfigurationError(f"time_limit must be positive, got {self.time_limit!r}")
        if self.seed is not None and not _is_count(self.seed):
            raise InvalidConfigurationError(f"seed must be an integer or None, got {self.seed!r}")
        if self.backend not in BACKENDS:
            raise InvalidConfigurationError(f"backend must be one of {BACKENDS}, got '{self.backend}'")

    def _validate_bounds(self) -> None:
        """Raise InvalidConfigurationError unless every min/max pair is a valid DateBounds."""
        DateBounds(**{name: getattr(self, name) for name in DATE_BOUND_FIELDS})

    @property
    def bounds(self) -> DateBounds:
        return DateBounds(**{name: getattr(self, name) for name in DATE_BOUND_FIELDS})


@dataclass(frozen=True)
class ScheduleSpec:
    """
    A validated scheduling request.

    The order of ``individuals`` and ``dates`` defines the canonical indexing
    used by the model. Dates need not be sorted; distances are computed from
    their values. Every individual has an entry in ``presentations_required``,
    ``journals_required`` and ``unavailable`` once the spec is built.
    """

    individuals: Tuple[Hashable, ...]
    dates: Tuple[object, ...]
    presentations_required: Mapping[Hashable, int]
    journals_required: Mapping[Hashable, int]
    unavailable: Mapping[Hashable, frozenset]
    bounds: DateBounds = field(default_factory=DateBounds)
    time_limit: float = 60.0

    @classmethod
    def create(
        cls,
        individuals: Sequence[Hashable],
        dates: Sequence[object],
        presentations_modify: Optional[Mapping[Hashable, int]] = None,
        journals_modify: Optional[Mapping[Hashable, int]] = None,
        cannot_attend: Optional[Mapping[Hashable, Iterable[object]]] = None,
        config: Optional[ScheduleConfig] = None,
    ) -> "ScheduleSpec":
        """
        Validate a raw request and resolve defaults.

        Args:
            individuals: People to schedule, unique
            dates: Meeting dates (all ``datetime.date`` or all ``int``), unique
            presentations_modify: Research talk count overrides per individual
            journals_modify: Journal club talk count overrides per individual
            cannot_attend: Dates each individual cannot present on; a single
                           date is accepted in place of a collection
            config: ScheduleConfig with defaults and bounds

        Raises:
            DuplicateIndividualError, DuplicateDateError, UnknownIndividualError,
            UnknownDateError, InvalidConfigurationError
        """
        config = config or ScheduleConfig()
        presentations_modify = dict(presentations_modify or {})
        journals_modify = dict(journals_modify or {})
        cannot_attend = dict(cannot_attend or {})

        individuals = tuple(individuals)
        dates = tuple(dates)
        if not individuals:
            raise InvalidConfigurationError("At least one individual is required to build a schedule")
        if not dates:
            raise InvalidConfigurationError("At least one date is required to build a schedule")

        _check_unique(individuals, DuplicateIndividualError, "individuals")
        _check_date_kinds(dates)
        _check_unique(dates, DuplicateDateError, "dates")

        known = set(individuals)
        for label, mapping in (
            ("presentations_modify", presentations_modify),
            ("journals_modify", journals_modify),
            ("cannot_attend", cannot_attend),
        ):
            unknown = [k for k in mapping if k not in known]
            if unknown:
                raise UnknownIndividualError(f"Unknown individuals in {label}: {unknown}")

        date_set = set(dates)
        unavailable: Dict[Hashable, frozenset] = {}
        for individual in individuals:
            absences = cannot_attend.get(individual, ())
            if isinstance(absences, (date, Integral)):
                absences = (absences,)
            absences = frozenset(absences)
            missing = [d for d in absences if d not in date_set]
            if missing:
                raise UnknownDateError(
                    f"cannot_attend for {individual!r} lists dates that are not meeting dates: {missing}"
                )
            unavailable[individual] = absences

        presentations = {}
        journals = {}
        for individual in individuals:
            presentations[individual] = presentations_modify.get(individual, config.default_presentations)
            journals[individual] = journals_modify.get(individual, config.default_journals)
            for label, count in (("presentations", presentations[individual]),
                                 ("journals", journals[individual])):
                if not _is_count(count) or count < 0:
                    raise InvalidConfigurationError(
                        f"Required {label} for {individual!r} must be a non-negative integer, got {count!r}"
                    )

        return cls(
            individuals=individuals,
            dates=dates,
            presentations_required=MappingProxyType(presentations),
            journals_required=MappingProxyType(journals),
            unavailable=MappingProxyType(unavailable),
            bounds=config.bounds,
            time_limit=float(config.time_limit),
        )

    def required_total(self, individual) -> int:
        """Talks of either kind the individual must give."""
        return self.presentations_required[individual] + self.journals_required[individual]

    def available_dates(self, individual) -> list:
        return [d for d in self.dates if d not in self.unavailable[individual]]


def _check_unique(values: Tuple, error, label: str) -> None:
    seen = set()
    duplicates = []
    for v in values:
        if v in seen and v not in duplicates:
            duplicates.append(v)
        seen.add(v)
    if duplicates:
        raise error(f"Duplicate {label} found: {duplicates}")


def _date_kind(d) -> str:
    if isinstance(d, datetime):
        return "naive datetime" if d.tzinfo is None else "aware datetime"
    if isinstance(d, date):
        return "date"
    return "int"


def _check_date_kinds(dates: Tuple) -> None:
    for d in dates:
        if isinstance(d, bool) or not isinstance(d, (date, Integral)):
            raise InvalidConfigurationError(
                f"Dates must be datetime.date or int values, got {type(d).__name__} ({d!r})"
            )
    # only values of one kind can be subtracted from each other
    kinds = sorted({_date_kind(d) for d in dates})
    if len(kinds) > 1:
        raise InvalidConfigurationError(f"Dates must all be of one kind, got a mix of {', '.join(kinds)}")
