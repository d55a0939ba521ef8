#!/usr/bin/env python3
"""
Example script scheduling a semester of group meetings.

Nine biweekly meetings, default of two research talks and one journal club
talk per person, with a few individual overrides.
"""

from datetime import date, timedelta

from presentation_scheduler import *

dates = [date(2024, 8, 28) + timedelta(weeks=2 * k) for k in range(9)]
individuals = ['John', 'Jane', 'Bob', 'Alice', 'Sven', 'Luis', 'Jean', 'Malcolm']

config = ScheduleConfig(
    default_presentations=2,
    default_journals=1,
    min_total=2,
    max_total=3,
    time_limit=20,
)

scheduler = PresentationScheduler(config=config)
scheduler.set_problem(
    individuals,
    dates,
    presentations_modify={'Malcolm': 1, 'Alice': 3},
    journals_modify={'Malcolm': 0, 'Alice': 0, 'Sven': 0},
    # Malcolm leaves after the second meeting
    cannot_attend={'Malcolm': dates[2:]},
)

# Jane wants to present early in the semester
scheduler.add_constraints([
    ForcePresentationDates({'Jane': [dates[0]]}),
])

scheduler.optimize_schedule()
scheduler.display_schedule()
scheduler.save_schedule('schedule.csv')
scheduler.visualize_schedule('schedule_visual.png')
