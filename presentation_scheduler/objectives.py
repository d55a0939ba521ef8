#!/usr/bin/env python3
"""
Objective classes for presentation scheduling.
"""

from .objective_base import ObjectiveBase
from .program import lin_sum
from .utils import badness


class MinimizeSpacingBadness(ObjectiveBase):
    """
    Minimize how closely each individual's own talks are bunched together.

    Sums badness(d, e) over every pair of dates d < e on which the same
    individual presents. The pair indicator is the linearized product
    z[i, d, e] = x[i, d] * x[i, e], so the linear objective over z equals the
    quadratic spacing penalty over x at every integral point.
    """

    def __init__(self):
        super().__init__(name="Minimize spacing badness")

    def evaluate(self, model):
        return lin_sum(
            z * badness(date, other)
            for (individual, date, other), z in model.z.items()
            if model.date_index[other] > model.date_index[date]
        )
