#!/usr/bin/env python3
"""
Turn raw solver output into a ScheduleResult.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Hashable, List, Mapping, Optional, Tuple

import pandas as pd

from .model_builder import ScheduleModel
from .solver import RawSolution, SolverStatus


# Values within solver tolerance of 1 are read as "on"
THRESHOLD = 0.5


class Assignment(Enum):
    NONE = "none"
    RESEARCH = "research"
    JOURNAL = "journal"

    @property
    def symbol(self) -> str:
        return {"none": "", "research": "R", "journal": "J"}[self.value]


@dataclass(frozen=True)
class ScheduleResult:
    """
    A decoded schedule. Immutable once created.

    ``assignment`` and ``objective_value`` are None unless the solver found a
    schedule (status OPTIMAL or FEASIBLE_TIME_LIMIT).
    """

    individuals: Tuple[Hashable, ...]
    dates: Tuple[object, ...]
    unavailable: Mapping[Hashable, frozenset]
    status: SolverStatus
    assignment: Optional[Mapping[Tuple[Hashable, object], Assignment]]
    objective_value: Optional[float]
    seed: Optional[int] = None
    message: str = ""

    @property
    def is_feasible(self) -> bool:
        return self.status.has_solution

    def _require_schedule(self):
        if self.assignment is None:
            raise RuntimeError(f"No schedule available (status: {self.status.value})")
        return self.assignment

    def get(self, individual, date) -> Assignment:
        return self._require_schedule()[(individual, date)]

    def dates_for(self, individual, kind: Optional[Assignment] = None) -> List[object]:
        """Dates on which the individual presents, optionally only talks of one kind."""
        assignment = self._require_schedule()
        picked = []
        for date in self.dates:
            value = assignment[(individual, date)]
            if value is Assignment.NONE:
                continue
            if kind is None or value is kind:
                picked.append(date)
        return picked

    def count_on(self, date, kind: Optional[Assignment] = None) -> int:
        """Number of talks on a date, optionally only talks of one kind."""
        assignment = self._require_schedule()
        count = 0
        for individual in self.individuals:
            value = assignment[(individual, date)]
            if value is not Assignment.NONE and (kind is None or value is kind):
                count += 1
        return count

    def is_unavailable(self, individual, date) -> bool:
        return date in self.unavailable.get(individual, ())

    def to_dataframe(self) -> pd.DataFrame:
        """Grid with one row per individual and one column per date; cells are '', 'R' or 'J'."""
        assignment = self._require_schedule()
        return pd.DataFrame(
            [[assignment[(individual, date)].symbol for date in self.dates] for individual in self.individuals],
            index=pd.Index(list(self.individuals), name="Individual"),
            columns=list(self.dates),
        )


def decode_solution(model: ScheduleModel, solution: RawSolution) -> ScheduleResult:
    """
    Read x and y values into per (individual, date) assignments.

    x >= 0.5 and y >= 0.5 is a journal club talk, x >= 0.5 alone is a research
    talk, anything else is no talk. Without a solution no schedule is made up:
    assignment and objective_value stay None.
    """
    spec = model.spec
    common = dict(
        individuals=spec.individuals,
        dates=spec.dates,
        unavailable=spec.unavailable,
        status=solution.status,
        seed=solution.seed,
        message=solution.message,
    )
    if not solution.status.has_solution:
        return ScheduleResult(assignment=None, objective_value=None, **common)

    assignment: Dict[Tuple[Hashable, object], Assignment] = {}
    for k in model.keys:
        x = solution.values.get(model.x[k].name, 0.0)
        y = solution.values.get(model.y[k].name, 0.0)
        if x >= THRESHOLD and y >= THRESHOLD:
            assignment[k] = Assignment.JOURNAL
        elif x >= THRESHOLD:
            assignment[k] = Assignment.RESEARCH
        else:
            assignment[k] = Assignment.NONE

    return ScheduleResult(
        assignment=MappingProxyType(assignment),
        objective_value=solution.objective_value,
        **common,
    )
