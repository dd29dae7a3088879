import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staywise.config import settings

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(settings.log_dir)
_LOG_DIR.mkdir(parents=True, exist_ok=True)

_log_level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "staywise.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from staywise.routers import dashboard, pricing, properties, reservations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    from staywise.services.llm_client import llm_client
    from staywise.services.pricing_service import pricing_service

    if pricing_service.ai_stage.enabled:
        providers = ", ".join(llm_client.provider_names)
        logger.info(f"AI pricing enabled via {providers}, heuristic engine used as fallback")
    else:
        logger.info("AI pricing disabled, using heuristic engine")

    yield

    from staywise.database import engine
    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title="StayWise",
    description="Property management and pricing suggestions",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(properties.router, prefix="/api/properties", tags=["properties"])
app.include_router(reservations.router, prefix="/api/reservations", tags=["reservations"])
app.include_router(pricing.router, prefix="/api/pricing", tags=["pricing"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "staywise"}
