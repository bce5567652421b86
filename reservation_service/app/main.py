import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import reservation_engine, Base, ReservationSessionLocal
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware

from .models.hospitality import rooms, bookings, booking_rooms  # noqa: F401
from .router.hospitality import bookings_router, rooms_router
from .crud.hospitality.rooms_crud import provision_rooms

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s [%(levelname)s]: %(message)s"
)
logger = logging.getLogger(__name__)

# Create all tables
Base.metadata.create_all(bind=reservation_engine)


def ensure_inventory():
    db = ReservationSessionLocal()
    try:
        created = provision_rooms(db)
        if created:
            logger.info("Room inventory provisioned on startup (%s rooms)", created)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_inventory()
    yield


app = FastAPI(title="Hotel Reservation Service API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom JSON response wrapper middleware
app.add_middleware(JsonResponseMiddleware)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(rooms_router.router)
app.include_router(bookings_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}
