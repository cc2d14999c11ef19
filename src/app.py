"""Order Intake FastAPI application.

Accepts orders over HTTP, stores them across the relational order schema
and serves the orders seen so far from memory.

Usage:
    uvicorn app:app --app-dir src --host 127.0.0.1 --port 8081
    python src/server.py --port 8081 --db-name orders
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from intake.config import Settings
from intake.domain import intake, logger

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
intake.init()

from intake.api.routes import router  # noqa: E402
from intake.order.repository import OrderRepository  # noqa: E402
from intake.order.service import OrderService  # noqa: E402
from intake.utils.db import make_engine, setup_db  # noqa: E402


def build_service(settings: Settings) -> OrderService:
    """Connect to storage, ensure the schema exists and load stored orders.

    Any failure here is fatal: it is logged and re-raised so the server
    never starts without its orders.
    """
    try:
        engine = make_engine(settings.url)
        setup_db(engine)
        service = OrderService(OrderRepository(engine))
        with intake.domain_context():
            service.load()
    except Exception:
        logger.critical("Could not initialise order storage", exc_info=True)
        raise
    return service


def create_app(settings: Settings | None = None, service: OrderService | None = None) -> FastAPI:
    """Build the application.

    Pass ``service`` to skip the storage bootstrap, e.g. in tests.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "order_service", None) is None:
            app.state.order_service = build_service(settings or Settings.from_env())
        yield

    app = FastAPI(
        title="Order Intake API",
        description="Accepts orders as JSON and lists the orders stored so far",
        lifespan=lifespan,
    )
    app.state.order_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each request."""
        with intake.domain_context():
            response = await call_next(request)
        return response

    app.include_router(router)

    # -----------------------------------------------------------------------
    # Health
    # -----------------------------------------------------------------------
    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domain": intake.name,
                "orders": app.state.order_service.count(),
            }
        )

    return app


app = create_app()
