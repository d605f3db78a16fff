import logging

from app.database.database import Base, engine
from app.models.users import User  # noqa: F401  registers the table on Base.metadata

logger = logging.getLogger(__name__)


def create_all_tables(bind=None):
    logger.info("Creating tables in the database...")
    Base.metadata.create_all(bind=bind or engine)
    logger.info("All tables created")


if __name__ == "__main__":
    create_all_tables()
