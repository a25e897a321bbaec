import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from db import create_engine, create_session_maker, create_db_and_tables
from exceptions import PizzaShopException
from jobs.keepalive_job import keepalive_scheduler
from jobs.order_retention_job import order_retention_scheduler
from services.menu import MenuService
from services.order import OrderService
from utils.error_handler import handle_service_error, GENERIC_ERROR_MESSAGE
from web.api_router import api_router


async def _stop_task(task: asyncio.Task | None, name: str) -> None:
    if task is None:
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        logging.info(f"[Shutdown] {name} stopped")


def create_app(db_url: str | None = None, start_jobs: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    The database engine is created in the lifespan and handed to the services,
    which open a session per unit of work.

    Args:
        db_url: Database URL, defaults to config.DB_URL
        start_jobs: Start the keepalive and order retention schedulers
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan event handler for startup and shutdown."""
        engine = create_engine(db_url)
        await create_db_and_tables(engine)
        session_maker = create_session_maker(engine)

        app.state.order_service = OrderService(session_maker)
        app.state.menu_service = MenuService(session_maker)

        keepalive_task = None
        retention_task = None
        if start_jobs:
            keepalive_task = asyncio.create_task(keepalive_scheduler())
            logging.info("[Startup] Keepalive scheduler started")

            retention_task = asyncio.create_task(order_retention_scheduler(app.state.order_service))
            logging.info("[Startup] Order retention scheduler started")

        yield

        logging.warning('Shutting down..')
        await _stop_task(keepalive_task, "Keepalive scheduler")
        await _stop_task(retention_task, "Order retention scheduler")
        await engine.dispose()
        logging.warning('Bye!')

    app = FastAPI(title="Pizza Shop API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.exception_handler(PizzaShopException)
    async def service_exception_handler(request: Request, exc: PizzaShopException):
        status_code, message = handle_service_error(exc)
        return JSONResponse(status_code=status_code, content={"error": message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logging.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request data"})

    @app.exception_handler(Exception)
    async def exception_handler(request: Request, exc: Exception):
        logging.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})

    return app


app = create_app()


def main() -> None:
    uvicorn.run(app, host=config.HOST, port=config.PORT)
