import uvicorn

from . import config
from .logging_config import get_logger, setup_logging


def run() -> None:
    setup_logging(log_level=config.LOG_LEVEL, log_file=config.LOG_FILE)
    logger = get_logger(__name__)
    logger.info(f"Starting AirParty relay on {config.HOST}:{config.PORT}")
    uvicorn.run("airparty.app:app", host=config.HOST, port=config.PORT, log_config=None)


if __name__ == "__main__":
    run()
