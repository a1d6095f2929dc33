"""
Random weekly meal schedule.

Each of the six plan days (Sunday is not planned) gets 2 or 3 recipes, drawn
uniformly with replacement from the whole pool. Repeats within a day or across
the week are allowed and no recipe is guaranteed to appear.
"""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

DAYS_OF_WEEK = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
MIN_RECIPES_PER_DAY = 2
MAX_RECIPES_PER_DAY = 3


def generate_weekly_plan(
    recipes: Sequence[T],
    rng: Optional[random.Random] = None,
) -> dict[str, list[T]]:
    """Return {day: [recipe, ...]} for every day, or {} when there are no recipes.

    Pass a seeded ``random.Random`` to make the plan reproducible.
    """
    if not recipes:
        return {}
    rng = rng or random.Random()
    plan: dict[str, list[T]] = {}
    for day in DAYS_OF_WEEK:
        count = rng.randint(MIN_RECIPES_PER_DAY, MAX_RECIPES_PER_DAY)
        plan[day] = [rng.choice(recipes) for _ in range(count)]
    return plan
