import logging

from sqlalchemy.orm import Session

from shared.core.database import ReservationSessionLocal, reservation_engine, Base
from reservation_service.app.models.hospitality import Room
from reservation_service.app.crud.hospitality.rooms_crud import provision_rooms
from reservation_service.app.services.inventory_service import TOTAL_ROOMS

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s]: %(message)s"
)
logger = logging.getLogger(__name__)

# Create tables
Base.metadata.create_all(bind=reservation_engine)


def seed_rooms():
    db: Session = ReservationSessionLocal()
    try:
        created = provision_rooms(db)
        total = db.query(Room).count()
        logger.info("Created %s rooms, inventory now holds %s", created, total)
        if total != TOTAL_ROOMS:
            logger.warning("Expected %s rooms but found %s", TOTAL_ROOMS, total)
    finally:
        db.close()


if __name__ == "__main__":
    seed_rooms()
