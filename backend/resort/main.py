import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from resort.core.config import (
    APP_NAME,
    APP_VERSION,
    CORS_ORIGINS,
    REPORTS_DIR,
    SERVER_HOST,
    SERVER_PORT,
)
from resort.core.logging import setup_logging
from resort.db.database import close_database_connection, init_indexes, test_connection
from resort.router.bookings import router as bookings_router
from resort.router.menu import router as menu_router
from resort.router.packages import router as packages_router
from resort.router.payments import router as payments_router
from resort.router.room_reservations import router as room_reservations_router
from resort.router.rooms import router as rooms_router
from resort.router.system import router as system_router

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up %s...", APP_NAME)
    os.makedirs(REPORTS_DIR, exist_ok=True)
    await test_connection()
    await init_indexes()
    yield
    logger.info("Shutting down %s...", APP_NAME)
    await close_database_connection()


app = FastAPI(title=APP_NAME, version=APP_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(system_router)
app.include_router(bookings_router)
app.include_router(packages_router)
app.include_router(payments_router)
app.include_router(menu_router)
app.include_router(rooms_router)
app.include_router(room_reservations_router)

# Generated PDF reports
app.mount("/reports", StaticFiles(directory=REPORTS_DIR, check_dir=False), name="reports")

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
