import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from config import settings
from api.v1.router import api_router
from core.meal_plan import MealPlan
from core.recommendation import RecommendationService
from services.db import SqlKeyValueStore
from services.gemini import GeminiClient
from services.storage import KeyValueStore, StorageService

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_LOG = logging.getLogger(__name__)


def create_app(
    store: KeyValueStore | None = None,
    gemini: GeminiClient | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        kv = store if store is not None else SqlKeyValueStore(settings.database_url)
        storage = StorageService(kv)
        client = gemini if gemini is not None else GeminiClient()

        # a key saved through /settings wins over the operator one
        api_key = await storage.get_gemini_api_key() or settings.gemini_api_key
        if api_key and api_key.strip() and not client.is_configured:
            client.set_api_key(api_key)

        plan = MealPlan(storage)
        await plan.load()
        if await storage.is_first_time_user():
            await storage.set_first_time_user(False)

        app.state.storage = storage
        app.state.gemini = client
        app.state.meal_plan = plan
        app.state.recommender = RecommendationService(client)
        _LOG.info(
            "meal plan ready (env=%s, profile=%s, gemini=%s)",
            settings.env_name,
            plan.personal_info is not None,
            client.is_configured,
        )
        yield
        await plan.flush()
        if isinstance(kv, SqlKeyValueStore):
            await kv.dispose()

    app = FastAPI(title="Meal-Plan API", version="1.0.0", lifespan=lifespan)

    # CORS (public demo only – lock down in prod)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health", tags=["meta"])
    def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.env_name}

    return app


app = create_app()
