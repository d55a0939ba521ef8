#!/usr/bin/env python3
"""
Tests for the abstract integer program and the product linearization helper.
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import itertools

import pytest

from presentation_scheduler.program import (
    BinaryVariable,
    LinearExpression,
    ProgramBuilder,
    Relation,
    constrain_product,
    lin_sum,
    linearize_product,
)


def test_expression_arithmetic():
    a, b = BinaryVariable('a'), BinaryVariable('b')
    expr = 2 * a + b - 3
    assert dict(expr.terms) == {'a': 2.0, 'b': 1.0}
    assert expr.constant == -3.0
    assert (a - a).terms == {}, 'Cancelled terms should disappear'
    assert dict((1 - a).terms) == {'a': -1.0}
    assert (1 - a).constant == 1.0
    assert dict((-(a + b)).terms) == {'a': -1.0, 'b': -1.0}


def test_lin_sum_merges_terms():
    a, b = BinaryVariable('a'), BinaryVariable('b')
    expr = lin_sum([a, b, a, 0.5 * b, 4])
    assert dict(expr.terms) == {'a': 2.0, 'b': 1.5}
    assert expr.constant == 4.0
    assert lin_sum([]) == LinearExpression()


def test_expression_evaluate():
    a, b = BinaryVariable('a'), BinaryVariable('b')
    expr = 3 * a - b + 1
    assert expr.evaluate({'a': 1, 'b': 1}) == 3.0
    assert expr.evaluate({}) == 1.0


def test_expression_rejects_non_linear_scaling():
    a = BinaryVariable('a')
    with pytest.raises(TypeError):
        a * a
    with pytest.raises(TypeError):
        a + 'b'


def test_builder_folds_constants_into_rhs():
    builder = ProgramBuilder('p')
    a = builder.add_binary('a')
    constraint = builder.add_constraint(a + 2, '<=', 3, 'c')
    assert constraint.rhs == 1.0
    assert constraint.relation is Relation.LE
    assert constraint.expression.constant == 0.0


def test_builder_rejects_duplicates_and_unknown_variables():
    builder = ProgramBuilder('p')
    a = builder.add_binary('a')
    with pytest.raises(ValueError):
        builder.add_binary('a')
    builder.add_constraint(a, Relation.GE, 0, 'c')
    with pytest.raises(ValueError):
        builder.add_constraint(a, Relation.GE, 0, 'c')
    with pytest.raises(ValueError):
        builder.add_constraint(BinaryVariable('ghost'), Relation.LE, 1)
    with pytest.raises(ValueError):
        builder.set_objective(BinaryVariable('ghost'))
    with pytest.raises(ValueError):
        builder.fix(a, 2)


def test_built_program_is_frozen_snapshot():
    builder = ProgramBuilder('p')
    a = builder.add_binary('a')
    builder.set_objective(a)
    program = builder.build()
    builder.add_binary('b')
    assert program.variable_names == ['a'], 'Later builder changes must not leak into a built program'
    with pytest.raises(AttributeError):
        program.name = 'q'


def test_violated_constraints():
    builder = ProgramBuilder('p')
    a, b = builder.add_binary('a'), builder.add_binary('b')
    builder.add_constraint(a + b, Relation.EQ, 1, 'exactly_one')
    builder.add_constraint(a, Relation.GE, 1, 'a_on')
    program = builder.build()
    assert program.violated_constraints({'a': 1, 'b': 0}) == []
    assert program.violated_constraints({'a': 0, 'b': 1}) == ['a_on']
    assert program.violated_constraints({'a': 1, 'b': 1}) == ['exactly_one']


def test_linearize_product_is_exact_on_binaries():
    """For every binary a, b exactly one z value is feasible, and it is a * b."""
    builder = ProgramBuilder('p')
    a, b = builder.add_binary('a'), builder.add_binary('b')
    z = linearize_product(builder, a, b, 'ab')
    program = builder.build()
    assert z.name == 'ab'
    assert len(program.constraints) == 3

    for va, vb in itertools.product((0, 1), repeat=2):
        feasible_z = [
            vz for vz in (0, 1)
            if not program.violated_constraints({'a': va, 'b': vb, 'ab': vz})
        ]
        assert feasible_z == [va * vb], f'a={va}, b={vb}: feasible z values {feasible_z}'


def test_constrain_product_on_existing_variable():
    builder = ProgramBuilder('p')
    a, b, z = builder.add_binary('a'), builder.add_binary('b'), builder.add_binary('z')
    assert constrain_product(builder, z, a, b) == 3
    names = [c.name for c in builder.build().constraints]
    assert names == ['z_le_first', 'z_le_second', 'z_ge_both']
