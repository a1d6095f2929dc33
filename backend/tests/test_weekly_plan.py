"""Tests for the random weekly plan generator."""

import random
from dataclasses import dataclass, field

from recipe_planner.services.planning.weekly_plan import (
    DAYS_OF_WEEK,
    MAX_RECIPES_PER_DAY,
    MIN_RECIPES_PER_DAY,
    generate_weekly_plan,
)


@dataclass(frozen=True)
class SimpleRecipe:
    name: str
    ingredients: tuple[str, ...] = field(default_factory=tuple)


A = SimpleRecipe("A", ("x",))
B = SimpleRecipe("B", ("y", "z"))


def test_empty_input_gives_empty_plan():
    assert generate_weekly_plan([]) == {}


def test_two_recipes_fill_every_day():
    plan = generate_weekly_plan([A, B])
    assert list(plan) == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
    for day, recipes in plan.items():
        assert len(recipes) in (2, 3), day
        assert all(r in (A, B) for r in recipes)


def test_sunday_is_never_planned():
    assert "Sunday" not in DAYS_OF_WEEK
    assert "Sunday" not in generate_weekly_plan([A])


def test_single_recipe_repeats():
    plan = generate_weekly_plan([A])
    for recipes in plan.values():
        assert recipes == [A] * len(recipes)


def test_recipes_are_returned_untransformed():
    pool = [{"name": "Soup", "ingredients": ["water", "salt"]}]
    plan = generate_weekly_plan(pool)
    for recipes in plan.values():
        for r in recipes:
            assert r is pool[0]


def test_input_is_not_mutated():
    pool = [A, B]
    generate_weekly_plan(pool)
    assert pool == [A, B]


def test_duplicate_inputs_are_allowed():
    plan = generate_weekly_plan([A, A, B])
    assert len(plan) == len(DAYS_OF_WEEK)


def test_day_sizes_take_both_values():
    rng = random.Random(1234)
    sizes = set()
    for _ in range(200):
        plan = generate_weekly_plan([A, B], rng=rng)
        sizes.update(len(v) for v in plan.values())
    assert sizes == {MIN_RECIPES_PER_DAY, MAX_RECIPES_PER_DAY}


def test_every_recipe_eventually_sampled():
    pool = [SimpleRecipe(str(i)) for i in range(5)]
    rng = random.Random(7)
    seen = set()
    for _ in range(100):
        for recipes in generate_weekly_plan(pool, rng=rng).values():
            seen.update(recipes)
    assert seen == set(pool)


def test_seeded_rng_is_reproducible():
    pool = [SimpleRecipe(str(i)) for i in range(10)]
    first = generate_weekly_plan(pool, rng=random.Random(42))
    second = generate_weekly_plan(pool, rng=random.Random(42))
    assert first == second
