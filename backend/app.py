from __future__ import annotations

# Standard library
import os
import logging as _logging
from contextlib import asynccontextmanager
from typing import Final, Any

# Third-party
from dotenv import load_dotenv
from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter

load_dotenv()

# Local application imports
from graphql_api.context import create_context  # noqa: E402
from graphql_api.schema import create_schema  # noqa: E402
from application.daily_goals.event_handlers import GoalsCalculatedHandler  # noqa: E402
from application.daily_goals.orchestrators.goal_calculation_orchestrator import (  # noqa: E402
    GoalCalculationOrchestrator,
)
from application.daily_goals.services.recalculation_trigger import (  # noqa: E402
    RecalculationTriggerService,
)
from domain.daily_goals.calculation import (  # noqa: E402
    CaloriesGoalService,
    FallbackGoalGenerator,
    HeartPointsGoalService,
    StepsGoalService,
)
from domain.daily_goals.core.events.goals_calculated import GoalsCalculated  # noqa: E402
from infrastructure.cache.in_memory_freshness_cache import InMemoryFreshnessCache  # noqa: E402
from infrastructure.config import GoalEngineSettings  # noqa: E402
from infrastructure.events.in_memory_bus import InMemoryEventBus  # noqa: E402
from infrastructure.persistence.goal_repository_factory import get_goal_repository  # noqa: E402
from infrastructure.persistence.in_memory.profile_source import (  # noqa: E402
    InMemoryProfileSource,
)
from metrics import daily_goals as goal_metrics  # noqa: E402

# --- Basic logging configuration (minimal) ---
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_logging.basicConfig(
    level=getattr(_logging, _LOG_LEVEL, _logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

APP_VERSION = os.getenv("APP_VERSION", "0.1.0")

# ============================================
# Dependency wiring
# ============================================

# Singletons (persistent across requests)
# - REPOSITORY_BACKEND: "inmemory" (default) | "mongodb"
_settings = GoalEngineSettings.from_env()
_goal_repository = get_goal_repository()
_profile_source = InMemoryProfileSource()
_freshness_cache = InMemoryFreshnessCache()
_event_bus = InMemoryEventBus()
_fallback_generator = FallbackGoalGenerator()

_goal_orchestrator = GoalCalculationOrchestrator(
    profile_source=_profile_source,
    repository=_goal_repository,
    cache=_freshness_cache,
    steps_calculator=StepsGoalService(),
    calories_calculator=CaloriesGoalService(),
    heart_points_calculator=HeartPointsGoalService(),
    fallback_generator=_fallback_generator,
    event_bus=_event_bus,
    settings=_settings,
)
_trigger_service = RecalculationTriggerService(_goal_orchestrator, settings=_settings)

_event_bus.subscribe(GoalsCalculated, GoalsCalculatedHandler().handle)

schema = create_schema()


@asynccontextmanager
async def lifespan(_: FastAPI) -> Any:  # pragma: no cover
    """Application lifecycle: log configuration, cancel pending work on shutdown."""
    logger = _logging.getLogger("startup")
    logger.info(
        "lifespan.startup",
        extra={
            "repository": type(_goal_repository).__name__,
            "debounce_s": _settings.recalc_debounce_s,
            "storage_retry_attempts": _settings.storage_retry_attempts,
        },
    )
    yield
    logger.info("lifespan.shutdown", extra={"pending": _trigger_service.pending_count()})
    _trigger_service.cancel_all()
    close = getattr(_goal_repository, "close", None)
    if close is not None:
        await close()


app = FastAPI(
    title="Daily Goals Service",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
async def version() -> dict[str, str]:
    return {"version": APP_VERSION}


@app.get("/metrics")
async def metrics() -> dict[str, Any]:
    """In-process metrics snapshot, grouped per declared metric."""
    return dict(goal_metrics.snapshot())


def get_graphql_context() -> Any:
    """Create GraphQL context with all dependencies.

    Uses singleton instances (persistent across requests).
    """
    return create_context(
        profile_source=_profile_source,
        goal_orchestrator=_goal_orchestrator,
        trigger_service=_trigger_service,
        event_bus=_event_bus,
    )


graphql_app: Final[GraphQLRouter[Any, Any]] = GraphQLRouter(
    schema, context_getter=get_graphql_context
)
app.include_router(graphql_app, prefix="/graphql")
