from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_planner.api.errors import register_error_handlers
from recipe_planner.api.routes import router as api_router
from recipe_planner.config import settings
from recipe_planner.logging import configure_logging, get_logger
from recipe_planner.services.llm.dspy_client import configure_dspy
from recipe_planner.storage.db import create_db_and_tables

app = FastAPI(title="Recipe Planner API", version=settings.version)
logger = get_logger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)


@app.on_event("startup")
def on_startup() -> None:
    configure_logging(settings.log_level)
    logger.info("startup: configuring services env=%s", settings.env)
    configure_dspy()
    create_db_and_tables()


@app.get("/")
def root() -> dict:
    return {
        "message": "Recipe Planner API",
        "version": settings.version,
        "endpoints": {
            "health": "/api/health",
            "recipes": "/api/recipes",
            "plans": "/api/plans",
            "generate_plan": "/api/plans/generate",
        },
    }


app.include_router(api_router)
