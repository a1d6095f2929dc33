"""
Expand a recipe (name + ingredients) into full cooking instructions with the configured LM.
The completion text is returned as-is; nothing is parsed or validated.
"""

import dspy

from recipe_planner.config import settings
from recipe_planner.logging import get_logger
from recipe_planner.services.llm.dspy_client import run_with_logging
from recipe_planner.services.llm.prompts import (
    RECIPE_DETAILS_PROMPT_VERSION,
    RECIPE_DETAILS_TEMPLATE,
)

logger = get_logger(__name__)

FALLBACK_DETAILS = "Recipe details could not be generated."


class RecipeDetailsError(RuntimeError):
    """The upstream text-generation call failed."""


def build_recipe_details_prompt(name: str, ingredients: list[str]) -> str:
    return RECIPE_DETAILS_TEMPLATE.format(
        recipe_name=name,
        ingredients=", ".join(ingredients),
        language=settings.recipe_details_language,
    )


def _current_lm():
    return dspy.settings.lm


def _complete(prompt: str) -> str:
    lm = _current_lm()
    if lm is None:
        raise RecipeDetailsError("language model is not configured")
    outputs = lm(messages=[{"role": "user", "content": prompt}])
    if not outputs:
        return ""
    first = outputs[0]
    if isinstance(first, dict):
        return first.get("text") or ""
    return first or ""


def _complete_or_fail(prompt: str) -> str:
    try:
        return _complete(prompt)
    except RecipeDetailsError:
        raise
    except Exception as e:
        logger.warning("recipe_details.upstream_failed error=%s", e)
        raise RecipeDetailsError("text generation call failed") from e


def expand_recipe(name: str, ingredients: list[str]) -> str:
    """Only upstream failures raise RecipeDetailsError; call-log problems do not."""
    prompt = build_recipe_details_prompt(name, ingredients)
    text = run_with_logging(
        prompt_name="recipe_details",
        prompt_version=RECIPE_DETAILS_PROMPT_VERSION,
        fn=_complete_or_fail,
        prompt=prompt,
    )
    return text.strip() or FALLBACK_DETAILS
