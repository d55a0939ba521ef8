#!/usr/bin/env python3
"""
Tests for build_model: variables, constraint families and the spacing objective.

These check the program directly against hand-made schedules, without a solver.
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import itertools

import pytest

from presentation_scheduler.constraints import ForcePresentationDates, _PerDateBounds, default_constraints
from presentation_scheduler.errors import UnknownDateError, UnknownIndividualError
from presentation_scheduler.model_builder import build_model
from presentation_scheduler.program import Relation
from presentation_scheduler.spec import ScheduleConfig, ScheduleSpec
from tests.utils import VALID_GRID, SMALL_CONFIG, small_spec, values_for


def test_variable_counts():
    model = build_model(small_spec())
    assert len(model.x) == 6
    assert len(model.y) == 6
    assert len(model.z) == 2 * 3 * 3, 'z covers the full date x date matrix per individual'
    assert len(model.program.variables) == 30


def test_constraint_counts_per_family():
    model = build_model(small_spec(cannot_attend={'A': [7]}))
    counts = dict(model.constraint_counts)
    assert counts == {
        'Required presentations': 2,
        'Required journals': 2,
        'Journal requires presentation': 6,
        'Total per date': 6,
        'Research per date': 6,
        'Journals per date': 6,
        'Cannot attend': 1,
        # 3 later-date pairs x 3 inequalities + 6 fixed unused entries, per individual
        'Pair products': 2 * (3 * 3 + 6),
    }
    assert model.total_constraints == len(model.program.constraints)


def test_valid_schedule_satisfies_every_constraint():
    model = build_model(small_spec())
    values = values_for(model, VALID_GRID)
    assert model.program.violated_constraints(values) == []


def test_objective_is_spacing_badness():
    model = build_model(small_spec())
    values = values_for(model, VALID_GRID)
    # A presents on 0 and 14, B on 7 and 14
    assert model.program.objective_value(values) == pytest.approx(1 / 14 + 1 / 7)
    assert model.objective_name == 'Minimize spacing badness'


def test_objective_only_uses_later_date_pairs():
    model = build_model(small_spec())
    terms = model.program.objective.terms
    assert len(terms) == 2 * 3
    assert terms['z_0_0_1'] == pytest.approx(1 / 7)
    assert terms['z_0_0_2'] == pytest.approx(1 / 14)
    assert 'z_0_1_0' not in terms
    assert 'z_0_1_1' not in terms


def test_unsorted_dates_use_actual_distances():
    spec = ScheduleSpec.create(['A', 'B'], [14, 0, 7], config=SMALL_CONFIG)
    terms = build_model(spec).program.objective.terms
    assert terms['z_0_0_1'] == pytest.approx(1 / 14)
    assert terms['z_0_1_2'] == pytest.approx(1 / 7)
    assert terms['z_0_0_2'] == pytest.approx(1 / 7)


def test_wrong_product_value_is_rejected():
    model = build_model(small_spec())
    values = values_for(model, VALID_GRID)
    values['z_0_0_2'] = 0
    violated = model.program.violated_constraints(values)
    assert violated == ['z_0_0_2_ge_both']


def test_unused_product_half_is_fixed_to_zero():
    model = build_model(small_spec())
    values = values_for(model, VALID_GRID)
    values['z_0_2_0'] = 1
    assert model.program.violated_constraints(values) == ['unused_z_0_2_0']


@pytest.mark.parametrize('grid, expected', [
    # A gives only one talk
    ({('A', 0): 'R', ('B', 7): 'J', ('B', 14): 'R'}, 'required_total_0'),
    # B has no journal club talk
    ({('A', 0): 'R', ('A', 14): 'J', ('B', 7): 'R', ('B', 14): 'R'}, 'required_journals_1'),
    # two journal club talks on 14
    ({('A', 0): 'R', ('A', 14): 'J', ('B', 7): 'R', ('B', 14): 'J'}, 'max_journals_2'),
    # nobody on 7
    ({('A', 0): 'R', ('A', 14): 'J', ('B', 0): 'J', ('B', 14): 'R'}, 'min_total_1'),
])
def test_broken_schedules_are_rejected(grid, expected):
    model = build_model(small_spec())
    violated = model.program.violated_constraints(values_for(model, grid))
    assert expected in violated, f'Expected {expected} among {violated}'


def test_journal_without_presentation_is_rejected():
    model = build_model(small_spec())
    values = values_for(model, VALID_GRID)
    values['y_0_1'] = 1
    assert 'journal_slot_0_1' in model.program.violated_constraints(values)


def test_cannot_attend_fixes_presentation_to_zero():
    model = build_model(small_spec(cannot_attend={'A': [14]}))
    constraint = next(c for c in model.program.constraints if c.name == 'cannot_attend_0_2')
    assert dict(constraint.expression.terms) == {'x_0_2': 1.0}
    assert constraint.relation is Relation.EQ
    assert constraint.rhs == 0
    values = values_for(model, VALID_GRID)
    assert model.program.violated_constraints(values) == ['cannot_attend_0_2']


def test_build_model_is_pure():
    spec = small_spec()
    first = build_model(spec)
    second = build_model(spec)
    assert first.program == second.program
    assert first.program is not second.program
    with pytest.raises(TypeError):
        first.x[('A', 0)] = None


def test_force_presentation_dates():
    spec = small_spec()
    model = build_model(spec, default_constraints() + [ForcePresentationDates({'B': [0]})])
    assert dict(model.constraint_counts)['Force presentation dates (1 individuals)'] == 1
    values = values_for(model, VALID_GRID)
    assert model.program.violated_constraints(values) == ['force_date_1_0']

    with pytest.raises(UnknownIndividualError):
        build_model(spec, [ForcePresentationDates({'Zed': [0]})])
    with pytest.raises(UnknownDateError):
        build_model(spec, [ForcePresentationDates({'A': [3]})])


def test_rejects_non_constraint_objects():
    with pytest.raises(TypeError):
        build_model(small_spec(), ['not a constraint'])


def test_per_date_template_needs_a_term():
    with pytest.raises(TypeError):
        _PerDateBounds('Anything per date', 'min_total', 'max_total')


def feasible_schedules(model):
    """Every (x, y) assignment of a tiny model that satisfies all constraints."""
    names = [model.x[k].name for k in model.keys] + [model.y[k].name for k in model.keys]
    found = set()
    for bits in itertools.product((0, 1), repeat=len(names)):
        grid = {}
        for k in model.keys:
            x = bits[names.index(model.x[k].name)]
            y = bits[names.index(model.y[k].name)]
            if x and y:
                grid[k] = 'J'
            elif x:
                grid[k] = 'R'
            elif y:
                grid[k] = 'bad'
        if 'bad' in grid.values():
            continue
        if not model.program.violated_constraints(values_for(model, grid)):
            found.add(tuple(sorted(grid.items())))
    return found


def test_tightening_a_minimum_never_grows_the_feasible_region():
    loose = ScheduleConfig(
        default_presentations=1, default_journals=0,
        min_total=0, max_total=2, min_presentations=0, max_presentations=2,
        min_journals=0, max_journals=1,
    )
    tight = ScheduleConfig(
        default_presentations=1, default_journals=0,
        min_total=1, max_total=2, min_presentations=1, max_presentations=2,
        min_journals=0, max_journals=1,
    )
    loose_set = feasible_schedules(build_model(ScheduleSpec.create(['A', 'B'], [0, 7], config=loose)))
    tight_set = feasible_schedules(build_model(ScheduleSpec.create(['A', 'B'], [0, 7], config=tight)))
    assert len(loose_set) == 4, 'Each of A and B picks one of two dates'
    assert tight_set <= loose_set
    assert len(tight_set) == 2, 'With one talk per date A and B must split the dates'
