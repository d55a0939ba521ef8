#!/usr/bin/env python3
"""
Base class for constraint families.

A constraint family adds a group of related linear constraints to the model
under construction and reports how many it added.
"""

from abc import ABC, abstractmethod


class ConstraintBase(ABC):
    """
    Abstract base class for scheduling constraints.

    Each constraint family has:
    - A name for logging/debugging
    - An apply() method that writes its constraints into the model
    """

    def __init__(self, name: str):
        """
        Args:
            name: Human-readable name for this constraint family
        """
        self.name = name

    @abstractmethod
    def apply(self, model) -> int:
        """
        Add this family's constraints to the model being built.

        Args:
            model: ModelContext with the problem under construction
                   Has access to:
                   - model.spec: the validated ScheduleSpec
                   - model.program: ProgramBuilder to add constraints to
                   - model.x, model.y: dicts keyed by (individual, date)
                   - model.z: dict keyed by (individual, date, other_date)
                   - model.keys: list of (individual, date) tuples

        Returns:
            Number of constraints added
        """
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}(name='{self.name}')"
