from importlib import import_module
from pathlib import Path

import structlog
from fastapi import FastAPI

from . import db
from .utils import configure_logging

configure_logging()

logger = structlog.get_logger()

app = FastAPI(title="weatherskill")


def load_apps(path: Path) -> None:
    for api_module in path.glob("*/api.py"):

        # Construct the name of the module
        relative_path = api_module.relative_to(Path(__file__).parent)
        module_path = ".".join(p.name for p in reversed(relative_path.parents))
        module_name = f"{module_path}.{api_module.stem}"

        # Register the module
        module = import_module(module_name, package="weatherskill")
        if router := getattr(module, "router", None):
            app.include_router(router)


load_apps(Path(__file__).parent)


@app.on_event("startup")
async def startup() -> None:
    if db.is_configured():
        await db.connect()
    else:
        logger.warning("DATABASE_URL not set, consent tokens are kept in memory")


@app.on_event("shutdown")
async def shutdown() -> None:
    if db.is_configured():
        await db.disconnect()


@app.get("/health")
async def get_health() -> dict:
    if db.is_connected():
        await db.fetchval("SELECT 1")
    return {"status": "pass"}
