#!/usr/bin/env python3
"""
Schedule Visualization
Creates a visual grid showing who presents on which meeting date.
"""

import os

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from matplotlib.patches import Rectangle
import numpy as np

from .decoder import Assignment, ScheduleResult
from .utils import stringify_date


RESEARCH_COLOR = 'tab:blue'
JOURNAL_COLOR = 'tab:green'
UNAVAILABLE_COLOR = 'mistyrose'


def assignment_matrix(result: ScheduleResult) -> np.ndarray:
    """Individuals x dates matrix: 0 = no talk, 1 = research, 2 = journal club."""
    codes = {Assignment.NONE: 0, Assignment.RESEARCH: 1, Assignment.JOURNAL: 2}
    matrix = np.zeros((len(result.individuals), len(result.dates)), dtype=int)
    for i, individual in enumerate(result.individuals):
        for d, date in enumerate(result.dates):
            matrix[i, d] = codes[result.get(individual, date)]
    return matrix


def visualize_schedule(result: ScheduleResult, output_file='schedule_visual.png'):
    """Create a visual grid representation of the schedule."""
    if not result.is_feasible:
        print("No schedule available to visualize.")
        return None

    matrix = assignment_matrix(result)
    n_individuals, n_dates = matrix.shape

    fig, ax = plt.subplots(figsize=(max(6, 1.2 * n_dates), max(3, 0.6 * n_individuals + 1)))

    # First individual on top
    ax.set_xlim(-0.5, n_dates - 0.5)
    ax.set_ylim(n_individuals - 0.5, -0.5)

    # Draw grid
    for i in range(n_individuals + 1):
        ax.axhline(i - 0.5, color='gray', linewidth=0.5)
    for d in range(n_dates + 1):
        ax.axvline(d - 0.5, color='gray', linewidth=0.5, alpha=0.3)

    for i, individual in enumerate(result.individuals):
        for d, date in enumerate(result.dates):
            if result.is_unavailable(individual, date):
                ax.add_patch(Rectangle((d - 0.5, i - 0.5), 1, 1,
                                       facecolor=UNAVAILABLE_COLOR, edgecolor='none'))
            if matrix[i, d] == 0:
                continue

            color = JOURNAL_COLOR if matrix[i, d] == 2 else RESEARCH_COLOR
            label = 'J' if matrix[i, d] == 2 else 'R'
            rect = Rectangle((d - 0.4, i - 0.4), 0.8, 0.8,
                             facecolor=color, edgecolor='black', linewidth=1)
            ax.add_patch(rect)
            ax.text(d, i, label, ha='center', va='center',
                    fontsize=9, weight='bold', color='white')

    ax.set_yticks(range(n_individuals))
    ax.set_yticklabels([str(individual) for individual in result.individuals])
    ax.set_xticks(range(n_dates))
    ax.set_xticklabels([stringify_date(date) for date in result.dates])

    ax.set_title(f"Presentation schedule (total badness {result.objective_value:.4f})",
                 fontsize=12, weight='bold')
    ax.set_xlabel('Meeting date')
    ax.set_ylabel('Individual')
    ax.legend(handles=[
        mpatches.Patch(color=RESEARCH_COLOR, label='Research presentation'),
        mpatches.Patch(color=JOURNAL_COLOR, label='Journal club'),
        mpatches.Patch(color=UNAVAILABLE_COLOR, label='Cannot attend'),
    ], loc='upper left', bbox_to_anchor=(1.01, 1.0))

    dirname = os.path.dirname(output_file)
    if dirname:
        os.makedirs(dirname, exist_ok=True)

    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    print(f"\nSchedule visualization saved to {output_file}")
    plt.close(fig)
    return output_file
