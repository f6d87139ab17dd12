"""
Logging setup for the Jobly API.

JSON lines for deployed instances, plain text for local runs. Every
request produces one record on the `jobly.access` logger whose method,
path, status and timing travel as record attributes, so the JSON
formatter emits them as separate fields.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

access_logger = logging.getLogger("jobly.access")


class JoblyJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter stamping each record with the service name, a UTC
    timestamp taken from the record itself, and a source location for
    warnings and errors.
    """

    def __init__(self, *args, service: str = "jobly-api", **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = self.service

        if record.levelno >= logging.WARNING:
            log_record['location'] = f"{record.module}:{record.funcName}:{record.lineno}"


def log_request(method: str, path: str, status_code: int, duration_ms: float,
                username: Optional[str] = None) -> None:
    """Emit the access record for one handled request."""
    level = logging.WARNING if status_code >= 500 else logging.INFO
    access_logger.log(
        level,
        f"{method} {path} -> {status_code} ({duration_ms:.1f}ms)",
        extra={
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 1),
            "username": username,
        },
    )


def setup_logging(log_level: str = "INFO", json_logs: bool = True, service: str = "jobly-api") -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        log_level: Logging level name
        json_logs: JSON lines when True, human-readable text otherwise
        service: Value of the `service` field in JSON output
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)

    if json_logs:
        formatter = JoblyJsonFormatter('%(timestamp)s %(level)s %(logger)s %(message)s', service=service)
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    # jobly.access replaces the server's own access log; SQL echo stays off
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
