"""Logging configuration for the dashboard core."""
import logging
import logging.handlers
from pathlib import Path
from windfarm_ops.config.settings import settings

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(name: str) -> logging.Logger:
    """
    Configure logging for a module.

    Calling this more than once for the same name does not stack handlers.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(settings.LOG_LEVEL.upper())

    if getattr(logger, '_windfarm_configured', False):
        return logger

    formatter = logging.Formatter(_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler, only when a log directory is configured
    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / f'{name}.log',
            maxBytes=10485760,  # 10MB
            backupCount=5,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger._windfarm_configured = True
    return logger
