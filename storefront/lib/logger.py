# ================== LOGURU LOGGER CONFIG =====================
import os
import sys

from loguru import logger as _logger

LOG_FILE = os.environ.get("LOG_FILE", "logs/storefront.json")

log_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>req:{extra[request_id]}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

_logger.remove()
_logger.add(sys.stderr, colorize=True, format=log_format, level="INFO")

if LOG_FILE:
    os.makedirs(os.path.dirname(LOG_FILE) or ".", exist_ok=True)
    _logger.add(
        LOG_FILE,
        rotation="100 MB",
        retention="10 days",
        compression="zip",
        serialize=True,
        level="DEBUG",
        enqueue=True,
        catch=True,
    )

# ================== EXPORT LOGGER =====================
logger = _logger.patch(lambda record: record["extra"].setdefault("request_id", "-"))
