"""
Logging configuration for the NoteVault backend.

Nothing logged here may contain passwords or raw session tokens: request
logs carry method, path, status and the authenticated user id only, and
``RedactSecretsFilter`` masks any sensitive ``extra`` field that slips in.
"""
import json
import logging
import logging.config
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import Settings, get_settings

# attributes every LogRecord has; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}

SENSITIVE_FIELDS = frozenset(('password', 'password_hash', 'token', 'access_token', 'authorization', 'cookie'))
REDACTED = '[redacted]'

_LEVELS = {
    'CRITICAL': logging.CRITICAL,
    'ERROR': logging.ERROR,
    'WARNING': logging.WARNING,
    'INFO': logging.INFO,
    'DEBUG': logging.DEBUG,
}

# library loggers and the level they are held at
_LIBRARY_LEVELS = {
    'uvicorn': 'INFO',
    'sqlalchemy': 'WARNING',
    'alembic': 'INFO',
    'aiosqlite': 'WARNING',
}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


class RedactSecretsFilter(logging.Filter):
    """Mask sensitive ``extra`` values before any handler formats them."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key in _extra_fields(record):
            if key.lower() in SENSITIVE_FIELDS:
                setattr(record, key, REDACTED)
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'location': f"{record.module}.{record.funcName}:{record.lineno}",
        }

        extra = _extra_fields(record)
        if extra:
            entry['extra'] = extra

        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Human-friendly console output for local development."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # work on a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{self.COLORS.get(record.levelname, '')}{record.levelname:<8}{self.RESET}"
        line = super().format(record)
        extra = _extra_fields(record)
        if extra:
            line += ' ' + ' '.join(f"{k}={v}" for k, v in extra.items())
        return line


def get_log_level(level_str: Optional[str] = None) -> int:
    """Map a level name (default: settings.log_level) to its logging constant."""
    name = (level_str or get_settings().log_level).upper()
    return _LEVELS.get(name, logging.INFO)


def _file_handlers(settings: Settings) -> Dict[str, Dict[str, Any]]:
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    def rotating(filename: str, level: str) -> Dict[str, Any]:
        return {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': str(log_dir / filename),
            'maxBytes': 10_000_000,
            'backupCount': 5,
            'formatter': 'json',
            'filters': ['redact'],
            'level': level,
        }

    return {'file': rotating('notevault.log', 'DEBUG'), 'error_file': rotating('error.log', 'ERROR')}


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """dictConfig for the app: console always, rotating files when enabled."""
    handlers: Dict[str, Dict[str, Any]] = {
        'console': {
            'class': 'logging.StreamHandler',
            'stream': sys.stdout,
            'formatter': 'colored' if settings.debug else 'json',
            'filters': ['redact'],
            'level': get_log_level(settings.log_level),
        },
    }
    if settings.log_to_file:
        handlers.update(_file_handlers(settings))

    loggers: Dict[str, Dict[str, Any]] = {
        'notevault': {'handlers': list(handlers), 'level': 'DEBUG', 'propagate': False},
    }
    for name, level in _LIBRARY_LEVELS.items():
        loggers[name] = {'handlers': ['console'], 'level': level, 'propagate': False}

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {'redact': {'()': RedactSecretsFilter}},
        'formatters': {
            'json': {'()': JSONFormatter},
            'colored': {
                '()': ColoredFormatter,
                'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
                'datefmt': '%H:%M:%S',
            },
        },
        'handlers': handlers,
        'loggers': loggers,
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Install the logging configuration."""
    settings = settings or get_settings()
    logging.config.dictConfig(build_logging_config(settings))

    get_logger('logging').info("Logging configured", extra={
        'log_level': settings.log_level,
        'debug': settings.debug,
        'log_to_file': settings.log_to_file,
    })


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``notevault`` namespace."""
    return logging.getLogger(f"notevault.{name}")


class LoggingMiddleware:
    """ASGI middleware that logs one line per response.

    The query string and headers are never logged; the user id is read
    from the request state the session gate fills in.
    """

    def __init__(self, app, logger_name: str = "http"):
        self.app = app
        self.logger = get_logger(logger_name)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        request_id = uuid.uuid4().hex[:12]
        base = {
            'request_id': request_id,
            'method': scope['method'],
            'path': scope['path'],
        }

        def elapsed_ms() -> float:
            return round((time.perf_counter() - started) * 1000, 2)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                user_id = scope.get('state', {}).get('user_id')
                self.logger.info("HTTP Response", extra={
                    **base,
                    'status_code': message.get('status', 0),
                    'duration_ms': elapsed_ms(),
                    'user_id': str(user_id) if user_id else None,
                })
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            self.logger.error("HTTP Request Failed", extra={
                **base,
                'duration_ms': elapsed_ms(),
                'exception_type': type(exc).__name__,
            })
            raise
