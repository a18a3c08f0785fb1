# shopfront/main.py
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session

from shopfront.core.config import get_settings
from shopfront.database import create_db_and_tables, engine
from shopfront.seed import seed_demo_data

# Import models so SQLModel metadata is populated before create_all()
from shopfront.models import user as _user_models  # noqa: F401
from shopfront.models import product as _product_models  # noqa: F401
from shopfront.models import cart as _cart_models  # noqa: F401
from shopfront.models import order as _order_models  # noqa: F401


# Routers
from shopfront.routers.auth import router as auth_router
from shopfront.routers.products import router as products_router
from shopfront.routers.cart import router as cart_router
from shopfront.routers.orders import router as orders_router
from shopfront.routers.seller import router as seller_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
      - Seed demo accounts/catalog into an empty database (SEED_DEMO_DATA).
    """
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise

    if settings.SEED_DEMO_DATA:
        with Session(engine) as session:
            if seed_demo_data(session):
                logger.info("Startup: demo data seeded.")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed or missing input is a 400, like every other validation error."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(products_router, prefix=settings.API_PREFIX)
app.include_router(cart_router, prefix=settings.API_PREFIX)
app.include_router(orders_router, prefix=settings.API_PREFIX)
app.include_router(seller_router, prefix=settings.API_PREFIX)


@app.get(f"{settings.API_PREFIX}/health")
def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
