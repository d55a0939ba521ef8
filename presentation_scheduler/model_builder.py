#!/usr/bin/env python3
"""
Translation of a ScheduleSpec into a 0/1 integer linear program.

Decision variables:
    x[i, d]     individual i presents (either kind) on date d
    y[i, d]     that presentation is a journal club talk
    z[i, d, e]  x[i, d] * x[i, e], linearized; only e later than d is used

The quadratic "spacing" objective sum_i sum_{d<e} badness(d, e) x[i,d] x[i,e]
is rewritten as a linear objective over z, which keeps the problem solvable
by any MILP backend.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Hashable, List, Mapping, Optional, Sequence, Tuple

from .constraint_base import ConstraintBase
from .constraints import default_constraints
from .objective_base import ObjectiveBase
from .objectives import MinimizeSpacingBadness
from .program import BinaryVariable, IntegerProgram, ProgramBuilder
from .spec import ScheduleSpec


class ModelContext:
    """
    The model while it is being built.

    Constraint families and objectives receive this object; it is discarded
    once build_model() has frozen the program.
    """

    def __init__(self, spec: ScheduleSpec, name: str = "presentation_schedule"):
        self.spec = spec
        self.program = ProgramBuilder(name)
        self.individuals = spec.individuals
        self.dates = spec.dates
        self.individual_index = {individual: i for i, individual in enumerate(self.individuals)}
        self.date_index = {date: d for d, date in enumerate(self.dates)}

        # keys in canonical order: individuals outer, dates inner
        self.keys: List[Tuple[Hashable, object]] = [
            (individual, date) for individual in self.individuals for date in self.dates
        ]

        self.x: Dict[Tuple[Hashable, object], BinaryVariable] = {}
        self.y: Dict[Tuple[Hashable, object], BinaryVariable] = {}
        for k in self.keys:
            i, d = self.index_of(k)
            self.x[k] = self.program.add_binary(f"x_{i}_{d}")
            self.y[k] = self.program.add_binary(f"y_{i}_{d}")

        self.z: Dict[Tuple[Hashable, object, object], BinaryVariable] = {}
        for individual, date in self.keys:
            i, d = self.index_of((individual, date))
            for e, other in enumerate(self.dates):
                self.z[(individual, date, other)] = self.program.add_binary(f"z_{i}_{d}_{e}")

    def index_of(self, key: Tuple[Hashable, object]) -> Tuple[int, int]:
        """Canonical (individual index, date index) of an (individual, date) key."""
        individual, date = key
        return self.individual_index[individual], self.date_index[date]


@dataclass(frozen=True)
class ScheduleModel:
    """
    A fully built model: the abstract program plus the maps needed to decode it.

    Attributes:
        spec: The ScheduleSpec the model was built from
        program: Immutable IntegerProgram to hand to a solver adapter
        x, y: (individual, date) -> BinaryVariable
        z: (individual, date, other_date) -> BinaryVariable
        constraint_counts: (family name, number of constraints) in application order
        objective_name: Name of the objective that was minimized
    """

    spec: ScheduleSpec
    program: IntegerProgram
    x: Mapping[Tuple[Hashable, object], BinaryVariable]
    y: Mapping[Tuple[Hashable, object], BinaryVariable]
    z: Mapping[Tuple[Hashable, object, object], BinaryVariable]
    constraint_counts: Tuple[Tuple[str, int], ...]
    objective_name: str

    @property
    def keys(self) -> List[Tuple[Hashable, object]]:
        return [(individual, date) for individual in self.spec.individuals for date in self.spec.dates]

    @property
    def total_constraints(self) -> int:
        return sum(count for _, count in self.constraint_counts)


def build_model(
    spec: ScheduleSpec,
    constraints: Optional[Sequence[ConstraintBase]] = None,
    objective: Optional[ObjectiveBase] = None,
) -> ScheduleModel:
    """
    Build the integer program for a validated spec.

    Pure: every call creates its own program and shares nothing with other calls.

    Args:
        spec: Validated ScheduleSpec
        constraints: Constraint families to apply (default: default_constraints())
        objective: Objective to minimize (default: MinimizeSpacingBadness())

    Returns:
        ScheduleModel wrapping the frozen IntegerProgram
    """
    if constraints is None:
        constraints = default_constraints()
    if objective is None:
        objective = MinimizeSpacingBadness()

    for constraint in constraints:
        if not isinstance(constraint, ConstraintBase):
            raise TypeError(f"Expected ConstraintBase instance, got {type(constraint).__name__}")
    if not isinstance(objective, ObjectiveBase):
        raise TypeError(f"Expected ObjectiveBase instance, got {type(objective).__name__}")

    context = ModelContext(spec)
    counts = []
    for constraint in constraints:
        counts.append((constraint.name, constraint.apply(context)))
    context.program.set_objective(objective.evaluate(context))

    return ScheduleModel(
        spec=spec,
        program=context.program.build(),
        x=MappingProxyType(dict(context.x)),
        y=MappingProxyType(dict(context.y)),
        z=MappingProxyType(dict(context.z)),
        constraint_counts=tuple(counts),
        objective_name=objective.name,
    )
