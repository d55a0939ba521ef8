#!/usr/bin/env python3
"""
Core constraint classes for presentation scheduling.

These define the feasibility requirements that all valid schedules must satisfy.
"""

from abc import abstractmethod
from typing import Hashable, Iterable, List, Mapping

from .constraint_base import ConstraintBase
from .errors import UnknownDateError, UnknownIndividualError
from .program import Relation, constrain_product, lin_sum
from .utils import filter_keys


class RequiredPresentations(ConstraintBase):
    """Each individual gives exactly their required number of talks of either kind."""

    def __init__(self):
        super().__init__(name="Required presentations")

    def apply(self, model) -> int:
        count = 0
        for i, individual in enumerate(model.individuals):
            model.program.add_constraint(
                lin_sum(model.x[k] for k in filter_keys(model.keys, individual=individual)),
                Relation.EQ,
                model.spec.required_total(individual),
                f"required_total_{i}"
            )
            count += 1
        return count


class RequiredJournals(ConstraintBase):
    """Each individual gives exactly their required number of journal club talks."""

    def __init__(self):
        super().__init__(name="Required journals")

    def apply(self, model) -> int:
        count = 0
        for i, individual in enumerate(model.individuals):
            model.program.add_constraint(
                lin_sum(model.y[k] for k in filter_keys(model.keys, individual=individual)),
                Relation.EQ,
                model.spec.journals_required[individual],
                f"required_journals_{i}"
            )
            count += 1
        return count


class JournalRequiresPresentation(ConstraintBase):
    """A journal club talk occupies the individual's presentation slot on that date."""

    def __init__(self):
        super().__init__(name="Journal requires presentation")

    def apply(self, model) -> int:
        count = 0
        for k in model.keys:
            i, d = model.index_of(k)
            model.program.add_constraint(model.y[k] - model.x[k], Relation.LE, 0, f"journal_slot_{i}_{d}")
            count += 1
        return count


class _PerDateBounds(ConstraintBase):
    """Lower and upper bound on a per-date sum, one pair of constraints per date."""

    label = ""

    def __init__(self, name: str, low_attr: str, high_attr: str):
        self.low_attr = low_attr
        self.high_attr = high_attr
        super().__init__(name=name)

    @abstractmethod
    def term(self, model, k):
        """Expression counted on the date of key k."""
        pass

    def apply(self, model) -> int:
        low = getattr(model.spec.bounds, self.low_attr)
        high = getattr(model.spec.bounds, self.high_attr)
        count = 0
        for d, date in enumerate(model.dates):
            expr = lin_sum(self.term(model, k) for k in filter_keys(model.keys, date=date))
            model.program.add_constraint(expr, Relation.GE, low, f"min_{self.label}_{d}")
            model.program.add_constraint(expr, Relation.LE, high, f"max_{self.label}_{d}")
            count += 2
        return count


class TotalPerDate(_PerDateBounds):
    """Between min_total and max_total talks of either kind on every date."""

    label = "total"

    def __init__(self):
        super().__init__("Total per date", "min_total", "max_total")

    def term(self, model, k):
        return model.x[k]


class ResearchPerDate(_PerDateBounds):
    """Between min_presentations and max_presentations research talks on every date."""

    label = "research"

    def __init__(self):
        super().__init__("Research per date", "min_presentations", "max_presentations")

    def term(self, model, k):
        return model.x[k] - model.y[k]


class JournalsPerDate(_PerDateBounds):
    """Between min_journals and max_journals journal club talks on every date."""

    label = "journals"

    def __init__(self):
        super().__init__("Journals per date", "min_journals", "max_journals")

    def term(self, model, k):
        return model.y[k]


class CannotAttend(ConstraintBase):
    """Fixes x to 0 wherever an individual is unavailable."""

    def __init__(self):
        super().__init__(name="Cannot attend")

    def apply(self, model) -> int:
        count = 0
        for k in filter_keys(model.keys, predicate=lambda i, d: d in model.spec.unavailable[i]):
            i, d = model.index_of(k)
            model.program.fix(model.x[k], 0, f"cannot_attend_{i}_{d}")
            count += 1
        return count


class PairProducts(ConstraintBase):
    """
    Ties z[i, d, e] to x[i, d] * x[i, e] for every later date e.

    The lower half of the z matrix (e at or before d) is unused and fixed to 0.
    """

    def __init__(self):
        super().__init__(name="Pair products")

    def apply(self, model) -> int:
        count = 0
        for (individual, date, other), z in model.z.items():
            i, d = model.index_of((individual, date))
            e = model.date_index[other]
            if e > d:
                count += constrain_product(
                    model.program, z, model.x[(individual, date)], model.x[(individual, other)]
                )
            else:
                model.program.fix(z, 0, f"unused_{z.name}")
                count += 1
        return count


class ForcePresentationDates(ConstraintBase):
    """Forces specific individuals to present on specific dates."""

    def __init__(self, forced: Mapping[Hashable, Iterable[object]]):
        """
        Args:
            forced: individual -> dates they must present on (talk kind is left free)
        """
        self.forced = {individual: list(dates) for individual, dates in forced.items()}
        super().__init__(name=f"Force presentation dates ({len(self.forced)} individuals)")

    def apply(self, model) -> int:
        count = 0
        for individual, dates in self.forced.items():
            if individual not in model.spec.presentations_required:
                raise UnknownIndividualError(f"Cannot force dates for unknown individual {individual!r}")
            for date in dates:
                if date not in model.date_index:
                    raise UnknownDateError(f"Cannot force {individual!r} onto unknown date {date!r}")
                i, d = model.index_of((individual, date))
                model.program.fix(model.x[(individual, date)], 1, f"force_date_{i}_{d}")
                count += 1
        return count


def default_constraints() -> List[ConstraintBase]:
    """The constraint families every presentation schedule needs."""
    return [
        RequiredPresentations(),
        RequiredJournals(),
        JournalRequiresPresentation(),
        TotalPerDate(),
        ResearchPerDate(),
        JournalsPerDate(),
        CannotAttend(),
        PairProducts(),
    ]
