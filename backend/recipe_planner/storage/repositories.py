from typing import Any, Optional

from sqlmodel import Session, col, select

from recipe_planner.logging import get_logger
from recipe_planner.schemas.plan import PlanUpdate
from recipe_planner.schemas.recipe import RecipeUpdate
from recipe_planner.storage.models import LLMCallLog, Recipe, WeeklyPlanRecord, utcnow

logger = get_logger(__name__)

# Request field -> model attribute. Nothing outside these maps is ever written.
RECIPE_UPDATE_FIELDS = {
    "name": "name",
    "ingredients": "ingredients",
    "instructions": "instructions",
}
PLAN_UPDATE_FIELDS = {
    "name": "name",
    "plan_data": "plan_data",
}


def _apply_update(target: Any, values: dict[str, Any], field_map: dict[str, str]) -> list[str]:
    changed = []
    for field, value in values.items():
        attr = field_map.get(field)
        if attr is None:
            continue
        setattr(target, attr, value)
        changed.append(attr)
    target.updated_at = utcnow()
    return changed


def list_recipes(session: Session) -> list[Recipe]:
    stmt = select(Recipe).order_by(col(Recipe.created_at).desc(), col(Recipe.id).desc())
    return list(session.exec(stmt))


def get_recipes_by_ids(session: Session, recipe_ids: list[int]) -> list[Recipe]:
    """Recipes in request order. Repeated ids repeat the recipe; unknown ids are skipped."""
    if not recipe_ids:
        return []
    stmt = select(Recipe).where(col(Recipe.id).in_(set(recipe_ids)))
    by_id = {r.id: r for r in session.exec(stmt)}
    return [by_id[i] for i in recipe_ids if i in by_id]


def get_recipe(session: Session, recipe_id: int) -> Optional[Recipe]:
    return session.get(Recipe, recipe_id)


def create_recipe(session: Session, recipe: Recipe) -> Recipe:
    session.add(recipe)
    session.commit()
    session.refresh(recipe)
    logger.info(
        "recipe.created id=%s name=%s ingredients=%s", recipe.id, recipe.name, len(recipe.ingredients)
    )
    return recipe


def update_recipe(session: Session, recipe: Recipe, update: RecipeUpdate) -> Recipe:
    changed = _apply_update(recipe, update.model_dump(exclude_unset=True), RECIPE_UPDATE_FIELDS)
    session.add(recipe)
    session.commit()
    session.refresh(recipe)
    logger.info("recipe.updated id=%s fields=%s", recipe.id, ",".join(changed))
    return recipe


def delete_recipe(session: Session, recipe: Recipe) -> None:
    recipe_id = recipe.id
    session.delete(recipe)
    session.commit()
    logger.info("recipe.deleted id=%s", recipe_id)


def list_plans(session: Session) -> list[WeeklyPlanRecord]:
    stmt = select(WeeklyPlanRecord).order_by(
        col(WeeklyPlanRecord.created_at).desc(), col(WeeklyPlanRecord.id).desc()
    )
    return list(session.exec(stmt))


def get_plan(session: Session, plan_id: int) -> Optional[WeeklyPlanRecord]:
    return session.get(WeeklyPlanRecord, plan_id)


def create_plan(session: Session, name: str, plan_data: dict[str, Any]) -> WeeklyPlanRecord:
    plan = WeeklyPlanRecord(name=name, plan_data=plan_data)
    session.add(plan)
    session.commit()
    session.refresh(plan)
    logger.info("plan.created id=%s name=%s", plan.id, plan.name)
    return plan


def update_plan(session: Session, plan: WeeklyPlanRecord, update: PlanUpdate) -> WeeklyPlanRecord:
    changed = _apply_update(plan, update.model_dump(exclude_unset=True), PLAN_UPDATE_FIELDS)
    session.add(plan)
    session.commit()
    session.refresh(plan)
    logger.info("plan.updated id=%s fields=%s", plan.id, ",".join(changed))
    return plan


def delete_plan(session: Session, plan: WeeklyPlanRecord) -> None:
    plan_id = plan.id
    session.delete(plan)
    session.commit()
    logger.info("plan.deleted id=%s", plan_id)


def log_llm_call(
    session: Session,
    prompt_name: str,
    prompt_version: str,
    model: str,
    input_payload: str,
    output_payload: str,
    latency_ms: int,
) -> None:
    session.add(
        LLMCallLog(
            prompt_name=prompt_name,
            prompt_version=prompt_version,
            model=model,
            input_payload=input_payload,
            output_payload=output_payload,
            latency_ms=latency_ms,
        )
    )
    session.commit()
