from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from shared.core.config import RESERVATION_DATABASE_URL

Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2


def build_engine(url: str):
    if url.startswith("sqlite"):
        # sqlite connections are shared across the request threadpool
        return create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": 30}
        )

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=POOL_SIZE,          # max idle connections
        max_overflow=MAX_OVERFLOW,      # max temporary extra connections
        pool_timeout=30       # wait time before failing
    )


# Reservation DB
reservation_engine = build_engine(RESERVATION_DATABASE_URL)
ReservationSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=reservation_engine)


# Dependency


def get_reservation_db():
    db = ReservationSessionLocal()
    try:
        yield db
    finally:
        db.close()
