from contextlib import contextmanager

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from recipe_planner.services.llm import recipe_details
from recipe_planner.services.llm.dspy_client import run_with_logging
from recipe_planner.services.llm.recipe_details import (
    FALLBACK_DETAILS,
    RecipeDetailsError,
    build_recipe_details_prompt,
    expand_recipe,
)
from recipe_planner.storage.models import LLMCallLog


@contextmanager
def fake_session():
    yield None


def test_run_with_logging(monkeypatch):
    logged = {}

    def fake_log_llm_call(**kwargs):
        logged.update(kwargs)

    def dummy_fn(input_value):
        return {"output": input_value * 2}

    monkeypatch.setattr(
        "recipe_planner.services.llm.dspy_client.log_llm_call",
        lambda session, **kwargs: fake_log_llm_call(**kwargs),
    )
    monkeypatch.setattr("recipe_planner.services.llm.dspy_client.get_session", fake_session)

    result = run_with_logging(
        prompt_name="unit_test",
        prompt_version="v1",
        fn=dummy_fn,
        input_value=2,
    )
    assert result == {"output": 4}
    assert logged["prompt_name"] == "unit_test"
    assert logged["latency_ms"] >= 0


def test_run_with_logging_propagates_errors(monkeypatch):
    monkeypatch.setattr("recipe_planner.services.llm.dspy_client.get_session", fake_session)

    def boom():
        raise ConnectionError("offline")

    with pytest.raises(ConnectionError):
        run_with_logging(prompt_name="unit_test", prompt_version="v1", fn=boom)


def test_prompt_mentions_recipe_and_ingredients(monkeypatch):
    monkeypatch.setattr(recipe_details.settings, "recipe_details_language", "English")
    prompt = build_recipe_details_prompt("Pho", ["beef", "noodles"])
    assert '"Pho"' in prompt
    assert "beef, noodles" in prompt
    assert "respond in English" in prompt


def test_expand_recipe_returns_completion_and_logs_call(monkeypatch, engine, session):
    from recipe_planner.storage import db as db_module

    monkeypatch.setattr(db_module, "engine", engine)
    monkeypatch.setattr(recipe_details, "_complete", lambda prompt: "  Step 1: boil water.\n")

    assert expand_recipe("Pho", ["beef"]) == "Step 1: boil water."
    logs = list(session.exec(select(LLMCallLog)))
    assert len(logs) == 1
    assert logs[0].prompt_name == "recipe_details"


def test_expand_recipe_empty_completion_falls_back(monkeypatch):
    monkeypatch.setattr("recipe_planner.services.llm.dspy_client.get_session", fake_session)
    monkeypatch.setattr(
        "recipe_planner.services.llm.dspy_client.log_llm_call", lambda session, **kwargs: None
    )
    monkeypatch.setattr(recipe_details, "_complete", lambda prompt: "")

    assert expand_recipe("Pho", ["beef"]) == FALLBACK_DETAILS


def test_expand_recipe_wraps_upstream_failure(monkeypatch):
    def fail(prompt):
        raise RuntimeError("HTTP 401")

    monkeypatch.setattr(recipe_details, "_complete", fail)
    with pytest.raises(RecipeDetailsError):
        expand_recipe("Pho", ["beef"])


def test_complete_without_configured_lm(monkeypatch):
    monkeypatch.setattr(recipe_details, "_current_lm", lambda: None)
    with pytest.raises(RecipeDetailsError):
        recipe_details._complete("hello")


def test_complete_reads_first_output(monkeypatch):
    calls = []

    def fake_lm(messages):
        calls.append(messages)
        return ["Here is your recipe."]

    monkeypatch.setattr(recipe_details, "_current_lm", lambda: fake_lm)
    assert recipe_details._complete("hello") == "Here is your recipe."
    assert calls[0] == [{"role": "user", "content": "hello"}]


def test_expand_recipe_keeps_completion_when_call_log_fails(monkeypatch):
    def broken_log(session, **kwargs):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr("recipe_planner.services.llm.dspy_client.get_session", fake_session)
    monkeypatch.setattr("recipe_planner.services.llm.dspy_client.log_llm_call", broken_log)
    monkeypatch.setattr(recipe_details, "_complete", lambda prompt: "Step 1: cook.")

    assert expand_recipe("Pho", ["beef"]) == "Step 1: cook."


def test_run_with_logging_survives_unavailable_log_store(monkeypatch):
    @contextmanager
    def broken_session():
        raise OperationalError("connect", {}, Exception("unable to open database file"))
        yield

    monkeypatch.setattr("recipe_planner.services.llm.dspy_client.get_session", broken_session)
    result = run_with_logging(prompt_name="unit_test", prompt_version="v1", fn=lambda: "done")
    assert result == "done"
