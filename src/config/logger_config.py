from loguru import logger
from pathlib import Path

log_dir = Path("logs")
log_file = log_dir / "link_health_{time}.log"

logger.remove()
logger.add(
    log_file,
    rotation="64 MB",
    retention="10 days",
    compression="zip",
    encoding="utf-8",
    level="DEBUG",
)

if __name__ == "__main__":
    logger.info("logger ready")
    logger.debug("debug message")
    logger.warning("warning message")
    logger.error("error message")
