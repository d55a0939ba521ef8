#!/usr/bin/env python3
"""
Presentation Scheduling System with Integer Linear Programming
Spreads each individual's research and journal club talks over the meeting dates.
"""

import os
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .constraint_base import ConstraintBase
from .constraints import default_constraints
from .decoder import ScheduleResult, decode_solution
from .display import format_schedule
from .errors import DuplicateDateError, DuplicateIndividualError
from .model_builder import ScheduleModel, build_model
from .solver import PulpSolverAdapter, RawSolution, SolverAdapter, SolverSettings, SolverStatus
from .spec import ScheduleConfig, ScheduleSpec
from .visualize_schedule import visualize_schedule


def check_capacity(spec: ScheduleSpec) -> Tuple[bool, str]:
    """
    Cheap necessary conditions for feasibility, checked before solving.

    Compares total demand for each kind of talk with what the per-date bounds
    allow over all dates, and each individual's demand with the dates they
    can attend.

    Returns (is_feasible, message) tuple.
    """
    n_dates = len(spec.dates)
    bounds = spec.bounds
    demands = [
        ("total", sum(spec.required_total(i) for i in spec.individuals),
         bounds.min_total, bounds.max_total),
        ("research", sum(spec.presentations_required.values()),
         bounds.min_presentations, bounds.max_presentations),
        ("journal club", sum(spec.journals_required.values()),
         bounds.min_journals, bounds.max_journals),
    ]
    for label, required, low, high in demands:
        if required > high * n_dates:
            return False, (
                f"Too many {label} talks: {required} required, "
                f"at most {high * n_dates} fit in {n_dates} dates"
            )
        if required < low * n_dates:
            return False, (
                f"Too few {label} talks: {required} required, "
                f"at least {low * n_dates} needed to fill {n_dates} dates"
            )

    for individual in spec.individuals:
        available = len(spec.available_dates(individual))
        if spec.required_total(individual) > available:
            return False, (
                f"{individual} needs {spec.required_total(individual)} talks "
                f"but can only attend {available} dates"
            )

    return True, "Capacity checks passed"


def parse_date_point(value):
    """Read a date point from CSV text: integers stay integers, anything else is parsed as a date."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, int):
        return value
    # integer columns with blanks are read back as floats
    if isinstance(value, float) and value.is_integer():
        return int(value)
    text = str(value).strip()
    if text.lstrip('-').isdigit():
        return int(text)
    return pd.Timestamp(text).date()


def _split_dates(cell) -> List[object]:
    if pd.isna(cell) or str(cell).strip() == '':
        return []
    if not isinstance(cell, str):
        return [parse_date_point(cell)]
    return [parse_date_point(part) for part in str(cell).split(';') if part.strip()]


def _to_python(value):
    return value.item() if isinstance(value, np.generic) else value


class PresentationScheduler:
    def __init__(
        self,
        config: Optional[ScheduleConfig] = None,
        adapter: Optional[SolverAdapter] = None,
    ):
        """
        Initialize the presentation scheduler.

        Args:
            config: ScheduleConfig with default counts, per-date bounds and
                    solver settings (default: ScheduleConfig())
            adapter: SolverAdapter used to solve the model
                     (default: PulpSolverAdapter())
        """
        self.config = config or ScheduleConfig()
        self.adapter = adapter or PulpSolverAdapter()
        self._constraints: List[ConstraintBase] = []

        self.individuals: Optional[List[Hashable]] = None
        self.dates: Optional[List[object]] = None
        self.presentations_modify: Dict[Hashable, int] = {}
        self.journals_modify: Dict[Hashable, int] = {}
        self.cannot_attend: Dict[Hashable, List[object]] = {}

        self.spec: Optional[ScheduleSpec] = None
        self.model: Optional[ScheduleModel] = None
        self.result: Optional[ScheduleResult] = None

    def add_constraints(self, constraints: List[ConstraintBase]):
        """
        Add constraints on top of the default constraint families.

        Args:
            constraints: List of ConstraintBase instances to add

        Example:
            scheduler.add_constraints([
                ForcePresentationDates({'Jane': [date(2024, 9, 11)]}),
            ])
        """
        for constraint in constraints:
            if not isinstance(constraint, ConstraintBase):
                raise TypeError(f"Expected ConstraintBase instance, got {type(constraint).__name__}")
            self._constraints.append(constraint)
        print(f"Added {len(constraints)} constraint(s)")

    def set_problem(
        self,
        individuals: Sequence[Hashable],
        dates: Sequence[object],
        presentations_modify: Optional[Mapping[Hashable, int]] = None,
        journals_modify: Optional[Mapping[Hashable, int]] = None,
        cannot_attend: Optional[Mapping[Hashable, Iterable[object]]] = None,
    ):
        """Set individuals, dates and per-individual overrides directly instead of loading CSV files."""
        self.individuals = list(individuals)
        self.dates = list(dates)
        self.presentations_modify = dict(presentations_modify or {})
        self.journals_modify = dict(journals_modify or {})
        self.cannot_attend = dict(cannot_attend or {})

    def load_individuals(self, filename: str = 'individuals.csv'):
        """
        Load individuals from a CSV file.

        Required column 'Individual'. Optional columns 'Presentations' and
        'Journals' override the default counts; 'Cannot Attend' lists dates
        separated by ';'.
        """
        try:
            df = pd.read_csv(filename)
        except FileNotFoundError:
            print(f"Error: {filename} not found")
            return None

        individuals = df['Individual']
        if len(individuals) != len(individuals.unique()):
            duplicates = individuals[individuals.duplicated()].unique()
            raise DuplicateIndividualError(f"Duplicate individuals found: {list(duplicates)}")

        self.individuals = [_to_python(v) for v in individuals]
        self.presentations_modify = {}
        self.journals_modify = {}
        self.cannot_attend = {}
        for _, row in df.iterrows():
            individual = _to_python(row['Individual'])
            if 'Presentations' in df.columns and pd.notna(row['Presentations']):
                self.presentations_modify[individual] = int(row['Presentations'])
            if 'Journals' in df.columns and pd.notna(row['Journals']):
                self.journals_modify[individual] = int(row['Journals'])
            if 'Cannot Attend' in df.columns:
                absences = _split_dates(row['Cannot Attend'])
                if absences:
                    self.cannot_attend[individual] = absences

        print(f"Loaded {len(df)} individuals from {filename}")
        return df

    def load_dates(self, filename: str = 'dates.csv'):
        """Load meeting dates from a CSV file with a 'Date' column (ISO dates or integers)."""
        try:
            df = pd.read_csv(filename)
        except FileNotFoundError:
            print(f"Error: {filename} not found")
            return None

        dates = df['Date']
        if len(dates) != len(dates.unique()):
            duplicates = dates[dates.duplicated()].unique()
            raise DuplicateDateError(f"Duplicate dates found: {list(duplicates)}")

        self.dates = [parse_date_point(v) for v in dates]
        print(f"Loaded {len(self.dates)} dates from {filename}")
        return df

    def setup_problem(self):
        """
        Validate the request and build the integer program without solving it.

        Should be called before optimize_schedule() when the model itself is
        of interest; optimize_schedule() calls it anyway.

        Raises:
            ScheduleValidationError: if the request is malformed
        """
        if self.individuals is None or self.dates is None:
            print("Error: Individuals and dates must be set or loaded first")
            return False

        self.spec = ScheduleSpec.create(
            self.individuals,
            self.dates,
            self.presentations_modify,
            self.journals_modify,
            self.cannot_attend,
            self.config,
        )
        self.model = build_model(self.spec, default_constraints() + self._constraints)

        for name, count in self.model.constraint_counts:
            print(f"  Applied: {name} ({count} constraints)")
        print(f"Total: {self.model.total_constraints} constraints applied, "
              f"{len(self.model.program.variables)} binary variables")
        return True

    def optimize_schedule(self) -> Optional[ScheduleResult]:
        """Solve the presentation scheduling problem using integer linear programming."""
        if not self.setup_problem():
            return None

        feasible, message = check_capacity(self.spec)
        if not feasible:
            print(f"  ✗ {message}")
            solution = RawSolution(status=SolverStatus.INFEASIBLE, raw_status="Infeasible", message=message)
        else:
            settings = SolverSettings(
                time_limit=self.spec.time_limit,
                seed=self.config.seed,
                backend=self.config.backend,
                msg=self.config.solver_verbose,
            )
            solution = self.adapter.solve(self.model.program, settings)

        self.result = decode_solution(self.model, solution)

        status = self.result.status
        if status is SolverStatus.OPTIMAL:
            print(f"  ✓ Optimal value: {self.result.objective_value:.4f}")
        elif status is SolverStatus.FEASIBLE_TIME_LIMIT:
            print(f"  ✓ Best value within {self.spec.time_limit:g}s: {self.result.objective_value:.4f}")
        elif status is SolverStatus.INFEASIBLE:
            print("  ✗ No feasible schedule (status: Infeasible)")
        else:
            print(f"  ✗ Solver error: {self.result.message}")
        return self.result

    def display_schedule(self):
        """Display the optimized schedule."""
        if self.result is not None:
            print("\nOptimized Schedule:")
            print(format_schedule(self.result))
        else:
            print("No schedule available. Please run optimize_schedule() first.")

    def save_schedule(self, filename: str = 'schedule.csv'):
        """Save the optimized schedule to a CSV file ('R' research, 'J' journal club)."""
        if self.result is not None and self.result.is_feasible:
            dirname = os.path.dirname(filename)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            self.result.to_dataframe().to_csv(filename)
            print(f"Schedule saved to {filename}")
        else:
            print("No schedule available to save. Please run optimize_schedule() first.")

    def visualize_schedule(self, output_file='schedule_visual.png'):
        """
        Visualize the optimized schedule.

        Delegates to the visualize_schedule module for the drawing.

        Args:
            output_file: Path to save the visualization PNG (default: 'schedule_visual.png')
        """
        if self.result is not None:
            return visualize_schedule(self.result, output_file)
        print("No schedule available to visualize. Please run optimize_schedule() first.")
        return None


def optimize(
    individuals: Sequence[Hashable],
    dates: Sequence[object],
    presentations_modify: Optional[Mapping[Hashable, int]] = None,
    journals_modify: Optional[Mapping[Hashable, int]] = None,
    cannot_attend: Optional[Mapping[Hashable, Iterable[object]]] = None,
    config: Optional[ScheduleConfig] = None,
    *,
    adapter: Optional[SolverAdapter] = None,
    constraints: Optional[List[ConstraintBase]] = None,
) -> ScheduleResult:
    """
    Plan a meeting schedule that spreads each individual's talks evenly.

    Every individual gives ``default_presentations`` research talks and
    ``default_journals`` journal club talks unless overridden, every date
    respects the per-date bounds, and nobody presents on a date they cannot
    attend. Among such schedules, one minimizing the total spacing badness
    is returned (or the best found within ``config.time_limit``).

    Args:
        individuals: People to schedule
        dates: Meeting dates, all ``datetime.date`` or all ``int``
        presentations_modify: e.g. ``{'Malcolm': 1}``
        journals_modify: e.g. ``{'Malcolm': 0}``
        cannot_attend: e.g. ``{'Malcolm': [date(2024, 9, 25)]}``
        config: ScheduleConfig (defaults and per-date bounds)
        adapter: SolverAdapter to use (default: PulpSolverAdapter())
        constraints: Extra constraint families on top of the defaults

    Returns:
        ScheduleResult; its status tells whether a schedule was found

    Raises:
        ScheduleValidationError: before any model is built, for malformed input
    """
    scheduler = PresentationScheduler(config=config, adapter=adapter)
    scheduler.set_problem(individuals, dates, presentations_modify, journals_modify, cannot_attend)
    if constraints:
        scheduler.add_constraints(constraints)
    return scheduler.optimize_schedule()


def main():
    scheduler = PresentationScheduler()

    # Load data
    print("Loading individual and date data...")
    individuals = scheduler.load_individuals()
    dates = scheduler.load_dates()

    if individuals is not None and dates is not None:
        print("\nIndividual data preview:")
        print(individuals.head())
        print("\nDate data preview:")
        print(dates.head())

        # Optimize schedule
        scheduler.optimize_schedule()
        scheduler.display_schedule()
        scheduler.save_schedule()
        scheduler.visualize_schedule()
    else:
        print("Failed to load required data files")


if __name__ == "__main__":
    main()
