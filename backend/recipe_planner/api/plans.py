import random

from fastapi import APIRouter, HTTPException
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError

from recipe_planner.logging import get_logger
from recipe_planner.schemas.plan import (
    GeneratePlanRequest,
    GeneratePlanResponse,
    PlanCreate,
    PlanRead,
    PlanUpdate,
)
from recipe_planner.schemas.recipe import RecipeRead
from recipe_planner.services.planning.weekly_plan import DAYS_OF_WEEK, generate_weekly_plan
from recipe_planner.storage.db import get_session
from recipe_planner.storage.repositories import (
    create_plan,
    delete_plan,
    get_plan,
    get_recipes_by_ids,
    list_plans,
    list_recipes,
    update_plan,
)

router = APIRouter()
logger = get_logger(__name__)

PLAN_NOT_FOUND = "Plan not found"


@router.get("/plans", response_model=list[PlanRead])
def get_plans() -> list[PlanRead]:
    try:
        with get_session() as session:
            return [PlanRead.model_validate(p) for p in list_plans(session)]
    except SQLAlchemyError:
        logger.exception("plans.list_failed")
        raise HTTPException(status_code=500, detail="Failed to fetch plans")


@router.get("/plans/{plan_id}", response_model=PlanRead)
def get_plan_by_id(plan_id: int) -> PlanRead:
    try:
        with get_session() as session:
            plan = get_plan(session, plan_id)
            if plan is None:
                raise HTTPException(status_code=404, detail=PLAN_NOT_FOUND)
            return PlanRead.model_validate(plan)
    except SQLAlchemyError:
        logger.exception("plans.get_failed id=%s", plan_id)
        raise HTTPException(status_code=500, detail="Failed to fetch plan")


@router.post("/plans", response_model=PlanRead, status_code=201)
def post_plan(body: PlanCreate) -> PlanRead:
    try:
        with get_session() as session:
            return PlanRead.model_validate(create_plan(session, body.name, body.plan_data))
    except SQLAlchemyError:
        logger.exception("plans.create_failed name=%s", body.name)
        raise HTTPException(status_code=500, detail="Failed to create plan")


@router.post("/plans/generate", response_model=GeneratePlanResponse)
def post_generate_plan(body: GeneratePlanRequest | None = None) -> GeneratePlanResponse:
    """
    Build a random weekly plan from stored recipes.
    Expects optional { "recipe_ids": [...], "seed": int, "save_as": "name" }.
    Returns { days, recipes_available, plan: {day: [recipe]}, saved_plan_id }; plan is {} with no recipes.
    Repeated recipe_ids weight that recipe in the pool; unknown ids are ignored.
    """
    body = body or GeneratePlanRequest()
    try:
        with get_session() as session:
            if body.recipe_ids is not None:
                stored = get_recipes_by_ids(session, body.recipe_ids)
            else:
                stored = list_recipes(session)
            recipes = [RecipeRead.model_validate(r) for r in stored]
    except SQLAlchemyError:
        logger.exception("plans.generate_load_failed")
        raise HTTPException(status_code=500, detail="Failed to fetch recipes")

    rng = random.Random(body.seed) if body.seed is not None else None
    plan = generate_weekly_plan(recipes, rng=rng)
    logger.info(
        "plan.generated recipes=%s days=%s slots=%s seed=%s",
        len(recipes),
        len(plan),
        sum(len(v) for v in plan.values()),
        body.seed,
    )

    saved_plan_id = None
    if body.save_as and plan:
        try:
            with get_session() as session:
                saved = create_plan(session, body.save_as, jsonable_encoder(plan))
                saved_plan_id = saved.id
        except SQLAlchemyError:
            logger.exception("plans.generate_save_failed name=%s", body.save_as)
            raise HTTPException(status_code=500, detail="Failed to create plan")

    return GeneratePlanResponse(
        days=list(DAYS_OF_WEEK),
        recipes_available=len(recipes),
        plan=plan,
        saved_plan_id=saved_plan_id,
    )


@router.put("/plans/{plan_id}", response_model=PlanRead)
def put_plan(plan_id: int, body: PlanUpdate) -> PlanRead:
    try:
        with get_session() as session:
            plan = get_plan(session, plan_id)
            if plan is None:
                raise HTTPException(status_code=404, detail=PLAN_NOT_FOUND)
            return PlanRead.model_validate(update_plan(session, plan, body))
    except SQLAlchemyError:
        logger.exception("plans.update_failed id=%s", plan_id)
        raise HTTPException(status_code=500, detail="Failed to update plan")


@router.delete("/plans/{plan_id}")
def remove_plan(plan_id: int) -> dict:
    try:
        with get_session() as session:
            plan = get_plan(session, plan_id)
            if plan is None:
                raise HTTPException(status_code=404, detail=PLAN_NOT_FOUND)
            delete_plan(session, plan)
    except SQLAlchemyError:
        logger.exception("plans.delete_failed id=%s", plan_id)
        raise HTTPException(status_code=500, detail="Failed to delete plan")
    return {"message": "Plan deleted successfully"}
