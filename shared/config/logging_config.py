# ================================================================================================
# shared/config/logging_config.py - Structured Logging Configuration
# ================================================================================================

import logging
import logging.handlers
import structlog
from pathlib import Path
from typing import Optional

from app.settings import settings

NOISY_LOGGERS = ("httpx", "httpcore")

def add_service_context(logger, method_name: str, event_dict: dict) -> dict:
    """Stamp every event with the service that emitted it"""
    event_dict.setdefault("service", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    return event_dict

def configure_logging(
    log_level: str = "INFO",
    log_format: str = "console",  # json, console
    log_file_path: Optional[Path] = Path("./data/logs/foodlog-detection.log"),
    log_max_size: str = "10MB",
    log_backup_count: int = 5
) -> None:
    """Configure stdlib handlers and the structlog processor chain"""

    handlers = [logging.StreamHandler()]

    # File output is optional for one-shot CLI runs
    if log_file_path is not None:
        log_file_path = Path(log_file_path)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file_path,
                maxBytes=_parse_size(log_max_size),
                backupCount=log_backup_count,
                encoding='utf-8'
            )
        )

    level = getattr(logging, log_level.upper())
    logging.basicConfig(level=level, handlers=handlers, force=True)

    # httpx logs every request at INFO
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    shared_processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_context,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ]
    else:
        processors = shared_processors + [
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer()
        ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

def _parse_size(size_str: str) -> int:
    """Parse size string like '10MB' to bytes"""
    size_str = size_str.upper()
    if size_str.endswith('KB'):
        return int(size_str[:-2]) * 1024
    elif size_str.endswith('MB'):
        return int(size_str[:-2]) * 1024 * 1024
    elif size_str.endswith('GB'):
        return int(size_str[:-2]) * 1024 * 1024 * 1024
    else:
        return int(size_str)

# Logger instance for the application
logger = structlog.get_logger("foodlog.detection")
