import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from hr_access.core.config import Settings, settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Third-party loggers that are chatty at INFO.
QUIET_LOGGERS = ("passlib", "multipart")


def configure_logging(config: Optional[Settings] = None) -> None:
    config = config or settings
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    config.log_path.parent.mkdir(parents=True, exist_ok=True)
    root_logger.setLevel(config.log_level.upper())
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    file_handler = RotatingFileHandler(
        config.log_path,
        maxBytes=config.log_max_bytes,
        backupCount=config.log_backup_count,
    )
    file_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
