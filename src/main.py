"""FastAPI application entrypoint for PCP Tracker."""

import logging
import os
from contextlib import asynccontextmanager

from src.config import AppConfig, get_config
from src.logging_config import setup_logging

# Configure logging before anything else
_config = get_config()
setup_logging(log_level=_config.log_level, log_file=_config.log_file)
logger = logging.getLogger(__name__)

from fastapi import FastAPI
from starlette.requests import Request

from src.api.errors import register_exception_handlers
from src.api.middleware.rate_limit import setup_rate_limiting
from src.api.routers import demands, production_orders, reports, skus
from src.database.connection import Database
from src.repositories import (
    SqliteDemandRepository,
    SqliteProductionOrderRepository,
    SqliteSkuRepository,
)
from src.services import DemandService, ProductionOrderService, ReportService, SkuService


def attach_services(app: FastAPI, db: Database, config: AppConfig) -> None:
    """Wire repositories and services onto ``app.state``."""
    sku_repo = SqliteSkuRepository(db)
    order_repo = SqliteProductionOrderRepository(db)
    demand_repo = SqliteDemandRepository(db)

    app.state.config = config
    app.state.db = db
    app.state.sku_service = SkuService(sku_repo, order_repo, demand_repo)
    app.state.production_order_service = ProductionOrderService(order_repo, sku_repo)
    app.state.demand_service = DemandService(demand_repo, sku_repo)
    app.state.report_service = ReportService(
        sku_repo, order_repo, demand_repo, reporting=config.reporting
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    config.db_path.parent.mkdir(parents=True, exist_ok=True)

    db = Database(config.db_path)
    await db.connect()
    logger.info(
        "Database ready at %s (reporting timezone: %s)",
        config.db_path, config.reporting.timezone,
    )

    attach_services(app, db, config)

    yield

    await db.close()


app = FastAPI(title="PCP Tracker", lifespan=lifespan)
setup_rate_limiting(app)
register_exception_handlers(app)

cors_origins = os.getenv("CORS_ALLOWED_ORIGINS", "")
if cors_origins:
    from fastapi.middleware.cors import CORSMiddleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cors_origins.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def add_api_version_header(request: Request, call_next):
    response = await call_next(request)
    if request.url.path.startswith("/api/"):
        response.headers["X-API-Version"] = "1"
    return response


app.include_router(skus.router)
app.include_router(production_orders.router)
app.include_router(demands.router)
app.include_router(reports.router)


@app.get("/health")
async def health():
    return {"status": "healthy"}
