#!/usr/bin/env python3
"""
Tests for the schedule visualization.
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import matplotlib
matplotlib.use('Agg')

import numpy as np

from presentation_scheduler.decoder import decode_solution
from presentation_scheduler.model_builder import build_model
from presentation_scheduler.solver import RawSolution, SolverStatus
from presentation_scheduler.visualize_schedule import assignment_matrix, visualize_schedule
from tests.utils import VALID_GRID, small_spec, values_for


def decoded(status=SolverStatus.OPTIMAL):
    model = build_model(small_spec(cannot_attend={'A': [7]}))
    return decode_solution(model, RawSolution(status=status, values=values_for(model, VALID_GRID), objective_value=0.2))


def test_assignment_matrix():
    matrix = assignment_matrix(decoded())
    expected = np.array([[1, 0, 2], [0, 2, 1]])
    assert (matrix == expected).all()


def test_visualize_writes_png(tmp_path):
    output = tmp_path / 'plots' / 'schedule.png'
    path = visualize_schedule(decoded(), str(output))
    assert path == str(output)
    assert output.exists()
    with open(output, 'rb') as f:
        assert f.read(8) == b'\x89PNG\r\n\x1a\n'


def test_visualize_without_schedule(tmp_path):
    output = tmp_path / 'schedule.png'
    assert visualize_schedule(decoded(SolverStatus.INFEASIBLE), str(output)) is None
    assert not output.exists()
