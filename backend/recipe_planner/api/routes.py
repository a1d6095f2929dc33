from fastapi import APIRouter

from recipe_planner.api.health import router as health_router
from recipe_planner.api.plans import router as plans_router
from recipe_planner.api.recipes import router as recipes_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(recipes_router)
router.include_router(plans_router)
