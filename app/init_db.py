# app/init_db.py
import logging

from app.db import Base, engine
from app import models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db():
    logger.info("Creating tables in database...")
    Base.metadata.create_all(bind=engine)
    logger.info("Done.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
