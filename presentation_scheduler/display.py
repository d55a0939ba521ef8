#!/usr/bin/env python3
"""
Text and HTML tables for a ScheduleResult.
"""

import pandas as pd

from .decoder import Assignment, ScheduleResult
from .solver import SolverStatus
from .utils import stringify_date


RESEARCH_SYMBOL = "●"
JOURNAL_SYMBOL = "■"
UNAVAILABLE_SYMBOL = "▉"

LEGEND = (
    f" {RESEARCH_SYMBOL} research presentation  "
    f"{JOURNAL_SYMBOL} journal club  "
    f"{UNAVAILABLE_SYMBOL} cannot attend"
)


def _no_schedule_text(result: ScheduleResult) -> str:
    if result.status is SolverStatus.ERROR:
        return f"Solver error: {result.message or 'unknown failure'}"
    return "No feasible solution found."


def _cell(result: ScheduleResult, individual, date) -> str:
    value = result.get(individual, date)
    if value is Assignment.JOURNAL:
        return JOURNAL_SYMBOL
    if value is Assignment.RESEARCH:
        return RESEARCH_SYMBOL
    if result.is_unavailable(individual, date):
        return UNAVAILABLE_SYMBOL
    return ""


def schedule_table(result: ScheduleResult) -> pd.DataFrame:
    """Display grid: rows are individuals, columns are formatted dates, cells are symbols."""
    return pd.DataFrame(
        [[_cell(result, individual, date) for date in result.dates] for individual in result.individuals],
        index=[str(individual) for individual in result.individuals],
        columns=[stringify_date(date) for date in result.dates],
    )


def format_schedule(result: ScheduleResult) -> str:
    """Legend, schedule table and objective value as plain text."""
    if not result.is_feasible:
        return _no_schedule_text(result)

    table = schedule_table(result).to_string(justify="center")
    lines = [LEGEND, table, f"Objective value (total badness): {result.objective_value}"]
    if result.status is SolverStatus.FEASIBLE_TIME_LIMIT:
        lines.append("(time limit reached; schedule is not proven optimal)")
    return "\n".join(lines)


def schedule_to_html(result: ScheduleResult) -> str:
    """HTML table with 'R' for research and 'J' for journal club talks."""
    if not result.is_feasible:
        return "<div>No feasible solution found.</div>"

    df = result.to_dataframe()
    df.index = [str(individual) for individual in df.index]
    df.columns = [stringify_date(date) for date in result.dates]
    return df.to_html(classes="schedule", border=0)
