"""Shared fixtures and helpers for model and decoder tests."""

from presentation_scheduler.spec import ScheduleConfig, ScheduleSpec


SMALL_CONFIG = ScheduleConfig(
    default_presentations=1, default_journals=1,
    min_total=1, max_total=2,
    min_presentations=0, max_presentations=2,
    min_journals=0, max_journals=1,
)

# A: research on 0, journal club on 14; B: journal club on 7, research on 14
VALID_GRID = {('A', 0): 'R', ('A', 14): 'J', ('B', 7): 'J', ('B', 14): 'R'}


def small_spec(**kwargs):
    return ScheduleSpec.create(['A', 'B'], [0, 7, 14], config=SMALL_CONFIG, **kwargs)


def values_for(model, grid):
    """
    Variable values for a schedule given as {(individual, date): 'R' or 'J'}.

    z is filled in as the product of the two x values for later dates, 0 otherwise.
    """
    values = {}
    for k in model.keys:
        kind = grid.get(k)
        values[model.x[k].name] = 1 if kind in ('R', 'J') else 0
        values[model.y[k].name] = 1 if kind == 'J' else 0
    order = {date: d for d, date in enumerate(model.spec.dates)}
    for (individual, date, other), z in model.z.items():
        if order[other] > order[date]:
            values[z.name] = values[model.x[(individual, date)].name] * values[model.x[(individual, other)].name]
        else:
            values[z.name] = 0
    return values
