#!/usr/bin/env python3
"""
Solver-independent description of a 0/1 integer linear program.

The model builder writes into a ProgramBuilder and freezes the result into an
IntegerProgram. Nothing here knows about PuLP or any other backend; solver
adapters translate an IntegerProgram into their own vocabulary.
"""

from dataclasses import dataclass
from enum import Enum
from numbers import Real
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class BinaryVariable:
    """Handle for a 0/1 decision variable, identified by its name."""

    name: str

    def to_expression(self) -> "LinearExpression":
        return LinearExpression({self.name: 1.0})

    def __add__(self, other):
        return self.to_expression() + other

    __radd__ = __add__

    def __sub__(self, other):
        return self.to_expression() - other

    def __rsub__(self, other):
        return (-1) * self.to_expression() + other

    def __mul__(self, factor):
        return self.to_expression() * factor

    __rmul__ = __mul__

    def __neg__(self):
        return self.to_expression() * -1


class LinearExpression:
    """Immutable sum of coefficient * variable terms plus a constant."""

    __slots__ = ("_terms", "_constant")

    def __init__(self, terms: Optional[Mapping[str, float]] = None, constant: float = 0.0):
        self._terms = MappingProxyType({
            name: float(coef) for name, coef in (terms or {}).items() if coef != 0
        })
        self._constant = float(constant)

    @property
    def terms(self) -> Mapping[str, float]:
        return self._terms

    @property
    def constant(self) -> float:
        return self._constant

    @staticmethod
    def _coerce(other) -> "LinearExpression":
        if isinstance(other, LinearExpression):
            return other
        if isinstance(other, BinaryVariable):
            return other.to_expression()
        if isinstance(other, Real):
            return LinearExpression(constant=other)
        raise TypeError(f"Cannot combine LinearExpression with {type(other).__name__}")

    def __add__(self, other):
        other = self._coerce(other)
        terms = dict(self._terms)
        for name, coef in other.terms.items():
            terms[name] = terms.get(name, 0.0) + coef
        return LinearExpression(terms, self._constant + other.constant)

    __radd__ = __add__

    def __sub__(self, other):
        return self + self._coerce(other) * -1

    def __rsub__(self, other):
        return self._coerce(other) - self

    def __mul__(self, factor):
        if not isinstance(factor, Real):
            raise TypeError("Linear expressions can only be scaled by numbers")
        return LinearExpression(
            {name: coef * factor for name, coef in self._terms.items()},
            self._constant * factor,
        )

    __rmul__ = __mul__

    def __neg__(self):
        return self * -1

    def __eq__(self, other):
        if not isinstance(other, LinearExpression):
            return NotImplemented
        return dict(self._terms) == dict(other.terms) and self._constant == other.constant

    def __hash__(self):
        return hash((frozenset(self._terms.items()), self._constant))

    def evaluate(self, values: Mapping[str, float]) -> float:
        """Value of the expression for the given variable values (missing names count as 0)."""
        return self._constant + sum(coef * values.get(name, 0.0) for name, coef in self._terms.items())

    def __repr__(self):
        parts = [f"{coef:+g}*{name}" for name, coef in self._terms.items()]
        if self._constant or not parts:
            parts.append(f"{self._constant:+g}")
        return f"LinearExpression({' '.join(parts)})"


def lin_sum(items: Iterable) -> LinearExpression:
    """Sum variables, expressions and numbers into one LinearExpression."""
    terms: Dict[str, float] = {}
    constant = 0.0
    for item in items:
        expr = LinearExpression._coerce(item)
        for name, coef in expr.terms.items():
            terms[name] = terms.get(name, 0.0) + coef
        constant += expr.constant
    return LinearExpression(terms, constant)


class Relation(Enum):
    LE = "<="
    GE = ">="
    EQ = "=="


@dataclass(frozen=True)
class LinearConstraint:
    """``expression relation rhs``; constants are always folded into ``rhs``."""

    name: str
    expression: LinearExpression
    relation: Relation
    rhs: float

    def is_satisfied(self, values: Mapping[str, float], tol: float = 1e-6) -> bool:
        lhs = self.expression.evaluate(values)
        if self.relation is Relation.LE:
            return lhs <= self.rhs + tol
        if self.relation is Relation.GE:
            return lhs >= self.rhs - tol
        return abs(lhs - self.rhs) <= tol


@dataclass(frozen=True)
class IntegerProgram:
    """A minimisation problem over binary variables with linear constraints."""

    name: str
    variables: Tuple[BinaryVariable, ...]
    constraints: Tuple[LinearConstraint, ...]
    objective: LinearExpression

    @property
    def variable_names(self) -> List[str]:
        return [v.name for v in self.variables]

    def evaluate(self, expression: LinearExpression, values: Mapping[str, float]) -> float:
        return expression.evaluate(values)

    def objective_value(self, values: Mapping[str, float]) -> float:
        return self.objective.evaluate(values)

    def violated_constraints(self, values: Mapping[str, float], tol: float = 1e-6) -> List[str]:
        """Names of constraints that the given assignment breaks."""
        return [c.name for c in self.constraints if not c.is_satisfied(values, tol)]


class ProgramBuilder:
    """
    Mutable workspace for assembling an IntegerProgram.

    Each call to build_model() owns its own builder; nothing is shared
    between requests.
    """

    def __init__(self, name: str = "program"):
        self.name = name
        self._variables: Dict[str, BinaryVariable] = {}
        self._constraints: List[LinearConstraint] = []
        self._constraint_names = set()
        self._objective = LinearExpression()

    def add_binary(self, name: str) -> BinaryVariable:
        if name in self._variables:
            raise ValueError(f"Variable '{name}' already exists")
        var = BinaryVariable(name)
        self._variables[name] = var
        return var

    def add_constraint(self, expression, relation, rhs: float, name: Optional[str] = None) -> LinearConstraint:
        """
        Add ``expression relation rhs``.

        Args:
            expression: BinaryVariable, LinearExpression or number
            relation: Relation member or one of '<=', '>=', '=='
            rhs: Right-hand side constant
            name: Unique constraint name (generated when omitted)
        """
        expression = LinearExpression._coerce(expression)
        relation = Relation(relation)
        unknown = [n for n in expression.terms if n not in self._variables]
        if unknown:
            raise ValueError(f"Constraint uses undeclared variables: {unknown}")
        if name is None:
            name = f"c{len(self._constraints)}"
        if name in self._constraint_names:
            raise ValueError(f"Constraint '{name}' already exists")

        constraint = LinearConstraint(
            name=name,
            expression=LinearExpression(expression.terms),
            relation=relation,
            rhs=float(rhs) - expression.constant,
        )
        self._constraints.append(constraint)
        self._constraint_names.add(name)
        return constraint

    def fix(self, var: BinaryVariable, value: int, name: Optional[str] = None) -> LinearConstraint:
        """Fix a variable to 0 or 1 with an equality constraint."""
        if value not in (0, 1):
            raise ValueError(f"A binary variable can only be fixed to 0 or 1, got {value}")
        return self.add_constraint(var, Relation.EQ, value, name)

    def set_objective(self, expression) -> None:
        """Set the expression to minimize."""
        expression = LinearExpression._coerce(expression)
        unknown = [n for n in expression.terms if n not in self._variables]
        if unknown:
            raise ValueError(f"Objective uses undeclared variables: {unknown}")
        self._objective = expression

    def build(self) -> IntegerProgram:
        return IntegerProgram(
            name=self.name,
            variables=tuple(self._variables.values()),
            constraints=tuple(self._constraints),
            objective=self._objective,
        )


def constrain_product(
    builder: ProgramBuilder,
    z: BinaryVariable,
    a: BinaryVariable,
    b: BinaryVariable,
    name: Optional[str] = None,
) -> int:
    """
    Constrain binary ``z`` to equal ``a * b``.

    z <= a, z <= b and z >= a + b - 1. For binary a and b these three
    inequalities admit exactly one value of z, so the product is exact at
    every integral point.

    Returns:
        Number of constraints added
    """
    name = name or z.name
    builder.add_constraint(z - a, Relation.LE, 0, f"{name}_le_first")
    builder.add_constraint(z - b, Relation.LE, 0, f"{name}_le_second")
    builder.add_constraint(z - a - b, Relation.GE, -1, f"{name}_ge_both")
    return 3


def linearize_product(
    builder: ProgramBuilder,
    a: BinaryVariable,
    b: BinaryVariable,
    name: str,
) -> BinaryVariable:
    """Allocate a new binary variable constrained to equal ``a * b``."""
    z = builder.add_binary(name)
    constrain_product(builder, z, a, b)
    return z
