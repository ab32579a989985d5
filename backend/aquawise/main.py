from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from apscheduler.schedulers.asyncio import AsyncIOScheduler
import logging
import pytz

from aquawise.config import settings
from aquawise.exceptions import AquaWiseError
from aquawise.api import tenants, availability, water_orders, notifications, usage
from aquawise.tasks.order_completion import complete_expired_orders_job


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create scheduler
scheduler = AsyncIOScheduler(timezone=pytz.timezone(settings.schedule_timezone))


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting AquaWise API...")
    if settings.scheduler_enabled:
        scheduler.start()
        scheduler.add_job(
            complete_expired_orders_job,
            'interval',
            minutes=settings.order_completion_interval_minutes,
            id='complete_expired_orders',
            replace_existing=True,
            coalesce=True
        )
        logger.info(f"Scheduled expired order completion every {settings.order_completion_interval_minutes} minutes")

    yield
    # Shutdown
    logger.info("Shutting down AquaWise API...")
    if scheduler.running:
        scheduler.shutdown()


app = FastAPI(
    title="AquaWise",
    description="Water availability and water-order scheduling for irrigation companies",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AquaWiseError)
async def aquawise_error_handler(request: Request, exc: AquaWiseError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers
app.include_router(tenants.router, prefix="/api/tenants", tags=["Tenants"])
app.include_router(availability.router, prefix="/api/tenants/{tenant_id}/availability", tags=["Availability"])
app.include_router(water_orders.router, prefix="/api/tenants/{tenant_id}/orders", tags=["Water Orders"])
app.include_router(notifications.router, prefix="/api/tenants/{tenant_id}/notifications", tags=["Notifications"])
app.include_router(usage.router, prefix="/api/tenants/{tenant_id}/usage", tags=["Usage"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/")
async def root():
    return {"message": "AquaWise API", "docs": "/docs"}
