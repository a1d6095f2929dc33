from fastapi import APIRouter, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError

from recipe_planner.logging import get_logger
from recipe_planner.schemas.recipe import (
    RecipeCreate,
    RecipeDetailsRequest,
    RecipeDetailsResponse,
    RecipeRead,
    RecipeUpdate,
)
from recipe_planner.services.llm.recipe_details import RecipeDetailsError, expand_recipe
from recipe_planner.storage.db import get_session
from recipe_planner.storage.models import Recipe
from recipe_planner.storage.repositories import (
    create_recipe,
    delete_recipe,
    get_recipe,
    list_recipes,
    update_recipe,
)
from recipe_planner.utils.timing import time_span

router = APIRouter()
logger = get_logger(__name__)

RECIPE_NOT_FOUND = "Recipe not found"
DETAILS_FAILED = "Failed to generate recipe details. Please check your API key or try again later."


@router.get("/recipes", response_model=list[RecipeRead])
def get_recipes() -> list[RecipeRead]:
    try:
        with get_session() as session:
            return [RecipeRead.model_validate(r) for r in list_recipes(session)]
    except SQLAlchemyError:
        logger.exception("recipes.list_failed")
        raise HTTPException(status_code=500, detail="Failed to fetch recipes")


@router.get("/recipes/{recipe_id}", response_model=RecipeRead)
def get_recipe_by_id(recipe_id: int) -> RecipeRead:
    try:
        with get_session() as session:
            recipe = get_recipe(session, recipe_id)
            if recipe is None:
                raise HTTPException(status_code=404, detail=RECIPE_NOT_FOUND)
            return RecipeRead.model_validate(recipe)
    except SQLAlchemyError:
        logger.exception("recipes.get_failed id=%s", recipe_id)
        raise HTTPException(status_code=500, detail="Failed to fetch recipe")


@router.post("/recipes", response_model=RecipeRead, status_code=201)
def post_recipe(body: RecipeCreate) -> RecipeRead:
    try:
        with get_session() as session:
            recipe = create_recipe(
                session,
                Recipe(name=body.name, ingredients=body.ingredients, instructions=body.instructions),
            )
            return RecipeRead.model_validate(recipe)
    except SQLAlchemyError:
        logger.exception("recipes.create_failed name=%s", body.name)
        raise HTTPException(status_code=500, detail="Failed to create recipe")


@router.put("/recipes/{recipe_id}", response_model=RecipeRead)
def put_recipe(recipe_id: int, body: RecipeUpdate) -> RecipeRead:
    try:
        with get_session() as session:
            recipe = get_recipe(session, recipe_id)
            if recipe is None:
                raise HTTPException(status_code=404, detail=RECIPE_NOT_FOUND)
            return RecipeRead.model_validate(update_recipe(session, recipe, body))
    except SQLAlchemyError:
        logger.exception("recipes.update_failed id=%s", recipe_id)
        raise HTTPException(status_code=500, detail="Failed to update recipe")


@router.delete("/recipes/{recipe_id}")
def remove_recipe(recipe_id: int) -> dict:
    try:
        with get_session() as session:
            recipe = get_recipe(session, recipe_id)
            if recipe is None:
                raise HTTPException(status_code=404, detail=RECIPE_NOT_FOUND)
            delete_recipe(session, recipe)
    except SQLAlchemyError:
        logger.exception("recipes.delete_failed id=%s", recipe_id)
        raise HTTPException(status_code=500, detail="Failed to delete recipe")
    return {"message": "Recipe deleted successfully"}


@router.post("/recipes/details", response_model=RecipeDetailsResponse)
def post_recipe_details(body: RecipeDetailsRequest) -> RecipeDetailsResponse:
    """Generate cooking instructions for an unsaved recipe."""
    with time_span("recipes.details", recipe=body.name):
        try:
            details = expand_recipe(body.name, body.ingredients)
        except RecipeDetailsError:
            raise HTTPException(status_code=502, detail=DETAILS_FAILED)
    return RecipeDetailsResponse(name=body.name, details=details)


@router.post("/recipes/{recipe_id}/details", response_model=RecipeDetailsResponse)
def post_stored_recipe_details(
    recipe_id: int,
    save: bool = Query(default=False, description="Write the text to the recipe's instructions"),
) -> RecipeDetailsResponse:
    """
    Generate cooking instructions for a stored recipe.
    The session is not held open across the LLM call.
    """
    with get_session() as session:
        recipe = get_recipe(session, recipe_id)
        if recipe is None:
            raise HTTPException(status_code=404, detail=RECIPE_NOT_FOUND)
        name, ingredients = recipe.name, list(recipe.ingredients)

    with time_span("recipes.details", recipe=name, recipe_id=recipe_id):
        try:
            details = expand_recipe(name, ingredients)
        except RecipeDetailsError:
            raise HTTPException(status_code=502, detail=DETAILS_FAILED)

    if save:
        try:
            with get_session() as session:
                recipe = get_recipe(session, recipe_id)
                if recipe is None:
                    raise HTTPException(status_code=404, detail=RECIPE_NOT_FOUND)
                update_recipe(session, recipe, RecipeUpdate(instructions=details))
        except SQLAlchemyError:
            logger.exception("recipes.details_save_failed id=%s", recipe_id)
            raise HTTPException(status_code=500, detail="Failed to update recipe")
    return RecipeDetailsResponse(name=name, details=details)
