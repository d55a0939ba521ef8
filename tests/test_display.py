#!/usr/bin/env python3
"""
Tests for the text and HTML schedule tables.
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from datetime import date

from presentation_scheduler.decoder import decode_solution
from presentation_scheduler.display import (
    JOURNAL_SYMBOL,
    LEGEND,
    RESEARCH_SYMBOL,
    UNAVAILABLE_SYMBOL,
    format_schedule,
    schedule_table,
    schedule_to_html,
)
from presentation_scheduler.model_builder import build_model
from presentation_scheduler.solver import RawSolution, SolverStatus
from presentation_scheduler.spec import ScheduleSpec
from presentation_scheduler.utils import stringify_date
from tests.utils import SMALL_CONFIG, VALID_GRID, small_spec, values_for


def decoded(spec, grid=VALID_GRID, status=SolverStatus.OPTIMAL):
    model = build_model(spec)
    return decode_solution(model, RawSolution(status=status, values=values_for(model, grid), objective_value=0.5))


def test_symbols_in_table():
    result = decoded(small_spec(cannot_attend={'A': [7]}))
    table = schedule_table(result)
    assert list(table.index) == ['A', 'B']
    assert table.loc['A'].tolist() == [RESEARCH_SYMBOL, UNAVAILABLE_SYMBOL, JOURNAL_SYMBOL]
    assert table.loc['B'].tolist() == ['', JOURNAL_SYMBOL, RESEARCH_SYMBOL]


def test_format_schedule():
    text = format_schedule(decoded(small_spec()))
    lines = text.splitlines()
    assert lines[0] == LEGEND
    assert text.count(RESEARCH_SYMBOL) == 2 + 1, 'Two research talks plus the legend'
    assert text.count(JOURNAL_SYMBOL) == 2 + 1
    assert lines[-1] == 'Objective value (total badness): 0.5'


def test_time_limit_note():
    text = format_schedule(decoded(small_spec(), status=SolverStatus.FEASIBLE_TIME_LIMIT))
    assert 'not proven optimal' in text


def test_dates_are_formatted_as_day_month():
    dates = [date(2024, 8, 28), date(2024, 9, 11), date(2024, 9, 25)]
    assert stringify_date(dates[1]) == '11/9'
    grid = {('A', dates[0]): 'R', ('A', dates[2]): 'J', ('B', dates[1]): 'J', ('B', dates[2]): 'R'}
    spec = ScheduleSpec.create(['A', 'B'], dates, config=SMALL_CONFIG)
    assert list(schedule_table(decoded(spec, grid)).columns) == ['28/8', '11/9', '25/9']


def test_no_schedule_text():
    assert format_schedule(decoded(small_spec(), status=SolverStatus.INFEASIBLE)) == 'No feasible solution found.'
    model = build_model(small_spec())
    crashed = decode_solution(model, RawSolution(status=SolverStatus.ERROR, message='cbc not found'))
    assert format_schedule(crashed) == 'Solver error: cbc not found'


def test_schedule_to_html():
    html = schedule_to_html(decoded(small_spec()))
    assert html.startswith('<table')
    assert '<td>R</td>' in html
    assert '<td>J</td>' in html
    assert schedule_to_html(decoded(small_spec(), status=SolverStatus.INFEASIBLE)) == \
        '<div>No feasible solution found.</div>'
