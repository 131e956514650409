import logging
from riseup.db.session import ENGINE, current_engine_url
from riseup.db.models import Base

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def main():
    logger.info("Initializing storage schema at %s ...", current_engine_url())
    Base.metadata.create_all(bind=ENGINE)
    logger.info("Storage schema initialized successfully.")

if __name__ == "__main__":
    main()
