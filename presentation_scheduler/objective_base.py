#!/usr/bin/env python3
"""
Base class for scheduling objectives.

Objectives are always minimized; an objective that should be maximized is
expressed by negating its expression.
"""

from abc import ABC, abstractmethod

from .program import LinearExpression


class ObjectiveBase(ABC):
    """
    Abstract base class for optimization objectives.

    Each objective has:
    - A name for logging/debugging
    - An evaluate() method that returns a linear expression to minimize
    """

    def __init__(self, name: str):
        """
        Initialize an optimization objective.

        Args:
            name: Human-readable name for this objective
        """
        self.name = name

    @abstractmethod
    def evaluate(self, model) -> LinearExpression:
        """
        Evaluate this objective for the model being built.

        Args:
            model: ModelContext with the problem under construction
                   Has access to:
                   - model.x, model.y: decision variable dicts
                   - model.z: pair product variables keyed by (individual, date, other_date)
                   - model.spec: the validated ScheduleSpec

        Returns:
            LinearExpression to minimize
        """
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}(name='{self.name}')"
