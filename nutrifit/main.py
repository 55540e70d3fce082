import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nutrifit.api.router import api_router
from nutrifit.core import init_database, settings
from nutrifit.core.errors import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="NutriFit - fitness and nutrition tracker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    await init_database()
    logger.info("NutriFit started")


@app.get("/")
async def root():
    base_url = "http://localhost:8000"

    return {
        "app": "NutriFit",
        "message": "NutriFit - track workouts, meals and health metrics",
        "links": {
            "dashboard": f"{base_url}/api/v1/dashboard",
            "workouts": f"{base_url}/api/v1/workouts",
            "nutrition": f"{base_url}/api/v1/nutrition",
            "progress": f"{base_url}/api/v1/progress",
            "docs": f"{base_url}/docs",
        }
    }
