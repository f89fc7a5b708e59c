import json
import logging
from datetime import UTC, datetime

from wgapi.config import Settings, get_settings

# Package logger; module loggers (wgapi.client, ...) propagate to it
logger = logging.getLogger("wgapi")

# Request parameters that authenticate the caller
SECRET_PROPS = frozenset({"application_id", "access_token"})


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record: the record basics plus its structured props.

    Credential props are masked so a caller passing request parameters as
    props cannot leak them into log storage.
    """

    def format(self, record):
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        props = getattr(record, "props", None) or {}
        for key, value in props.items():
            log_record[key] = "***" if key in SECRET_PROPS else value
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record, ensure_ascii=False, default=str)


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Attach a single stderr handler to the wgapi logger, plain or JSON per settings."""
    settings = settings or get_settings()
    handler = logging.StreamHandler()

    if settings.log_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    # Reset handlers to avoid duplication if called multiple times
    logger.handlers = []
    logger.addHandler(handler)
    logger.setLevel(settings.log_level.upper())
    return logger
