#!/usr/bin/env python3
"""
Solver adapters: run an abstract IntegerProgram on a MILP backend.

PulpSolverAdapter translates the program into a PuLP problem and solves it
with CBC (bundled with PuLP) or HiGHS. Every outcome, including backend
failures, comes back as a RawSolution status rather than an exception.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

import pulp

from .program import IntegerProgram, Relation


class SolverStatus(Enum):
    OPTIMAL = "Optimal"
    FEASIBLE_TIME_LIMIT = "FeasibleWithinTimeLimit"
    INFEASIBLE = "Infeasible"
    ERROR = "Error"

    @property
    def has_solution(self) -> bool:
        return self in (SolverStatus.OPTIMAL, SolverStatus.FEASIBLE_TIME_LIMIT)


@dataclass(frozen=True)
class SolverSettings:
    """
    Args:
        time_limit: Wall-clock budget in seconds; the best incumbent is returned at the deadline
        seed: Random seed for the backend; None draws a fresh one per solve
        backend: 'cbc' or 'highs' (ignored when the adapter wraps a ready solver)
        msg: Show the backend's log
    """

    time_limit: float = 60.0
    seed: Optional[int] = None
    backend: str = "cbc"
    msg: bool = False


@dataclass(frozen=True)
class RawSolution:
    """What a solver reports back: status, variable values and objective."""

    status: SolverStatus
    values: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    objective_value: Optional[float] = None
    seed: Optional[int] = None
    raw_status: str = ""
    message: str = ""


class SolverAdapter(ABC):
    """Boundary to a generic 0/1 integer linear solver."""

    @abstractmethod
    def solve(self, program: IntegerProgram, settings: SolverSettings) -> RawSolution:
        """
        Minimize the program's objective within settings.time_limit.

        Returns:
            RawSolution; values are present only when status.has_solution
        """
        pass


def draw_seed() -> int:
    """A fresh seed in the range every supported backend accepts."""
    return random.randint(1, 2**31 - 1)


class PulpSolverAdapter(SolverAdapter):
    """
    Solve IntegerPrograms with PuLP.

    Args:
        solver: A ready pulp.LpSolver to use instead of building one from the
                settings (its own time limit and seed then apply)
    """

    def __init__(self, solver: Optional[pulp.LpSolver] = None):
        self.solver = solver

    def to_pulp(self, program: IntegerProgram):
        """Translate an abstract program into (LpProblem, name -> LpVariable)."""
        prob = pulp.LpProblem(program.name, pulp.LpMinimize)
        variables = {
            v.name: pulp.LpVariable(v.name, cat=pulp.LpBinary) for v in program.variables
        }

        for c in program.constraints:
            expr = pulp.lpSum(coef * variables[name] for name, coef in c.expression.terms.items())
            if c.relation is Relation.LE:
                prob += (expr <= c.rhs, c.name)
            elif c.relation is Relation.GE:
                prob += (expr >= c.rhs, c.name)
            else:
                prob += (expr == c.rhs, c.name)

        prob.setObjective(
            pulp.lpSum(coef * variables[name] for name, coef in program.objective.terms.items())
            + program.objective.constant
        )
        return prob, variables

    def make_solver(self, settings: SolverSettings, seed: int) -> pulp.LpSolver:
        if settings.backend == "cbc":
            return pulp.PULP_CBC_CMD(
                msg=1 if settings.msg else 0,
                timeLimit=settings.time_limit,
                options=[f"randomCbcSeed {seed}"],
            )
        if settings.backend == "highs":
            return pulp.HiGHS(
                msg=settings.msg,
                timeLimit=settings.time_limit,
                random_seed=seed,
            )
        raise ValueError(f"Unknown solver backend '{settings.backend}'")

    def solve(self, program: IntegerProgram, settings: SolverSettings) -> RawSolution:
        prob, variables = self.to_pulp(program)

        # a ready solver keeps its own seed, which is not known here
        seed = None
        try:
            if self.solver is not None:
                solver = self.solver
            else:
                seed = settings.seed if settings.seed is not None else draw_seed()
                solver = self.make_solver(settings, seed)
            if not solver.available():
                return RawSolution(
                    status=SolverStatus.ERROR,
                    seed=seed,
                    message=f"Solver {solver.name} is not available",
                )
            prob.solve(solver)
        except pulp.PulpSolverError as e:
            return RawSolution(status=SolverStatus.ERROR, seed=seed, raw_status="Error", message=str(e))

        raw_status = pulp.LpStatus.get(prob.status, "Undefined")
        status = _map_status(prob.status, prob.sol_status)
        if not status.has_solution:
            return RawSolution(status=status, seed=seed, raw_status=raw_status)

        values: Dict[str, float] = {}
        for name, var in variables.items():
            value = var.value()
            values[name] = 0.0 if value is None else float(value)
        objective_value = pulp.value(prob.objective)

        return RawSolution(
            status=status,
            values=MappingProxyType(values),
            objective_value=0.0 if objective_value is None else float(objective_value),
            seed=seed,
            raw_status=raw_status,
        )


def _map_status(status: int, sol_status: int) -> SolverStatus:
    """Collapse PuLP's (status, sol_status) pair into a SolverStatus."""
    if sol_status == pulp.LpSolutionOptimal:
        return SolverStatus.OPTIMAL
    if sol_status == pulp.LpSolutionIntegerFeasible:
        return SolverStatus.FEASIBLE_TIME_LIMIT
    if sol_status == pulp.LpSolutionInfeasible or status == pulp.LpStatusInfeasible:
        return SolverStatus.INFEASIBLE
    # stopped at the deadline without an incumbent
    if status == pulp.LpStatusNotSolved and sol_status == pulp.LpSolutionNoSolutionFound:
        return SolverStatus.INFEASIBLE
    return SolverStatus.ERROR
