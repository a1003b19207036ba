import json
import logging
import sys
from datetime import datetime, timezone

PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        # context passed via extra={...}
        for key in ("command", "country", "registry"):
            val = getattr(record, key, None)
            if val:
                payload[key] = val
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level="INFO", json_lines=False, stream=None):
    """Replace root handlers with a single stream handler (stderr by default)."""
    logger = logging.getLogger()
    logger.setLevel(level)
    h = logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(JsonFormatter() if json_lines else logging.Formatter(PLAIN_FORMAT, DATE_FORMAT))
    logger.handlers = [h]
    return logger
