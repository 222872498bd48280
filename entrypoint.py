import uvicorn
from constants import BIND_HOST, PORT, RELOAD, LOG_LEVEL, LOG_FILE
from logging_config import get_logger, setup_logging

# Setup logging before importing app
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)

logger = get_logger(__name__)


def main():
    logger.info(f"Starting Room Relay server on {BIND_HOST}:{PORT}")
    uvicorn.run("app:app", host=BIND_HOST, port=PORT, reload=RELOAD, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
