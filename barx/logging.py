"""barx structured logging: console/JSON formatters, audit events and call tracing."""

import functools
import json
import logging
import sys
import time
import traceback
from datetime import datetime, timezone

# Custom AUDIT level (between WARNING=30 and ERROR=40)
AUDIT = 35
logging.addLevelName(AUDIT, "AUDIT")

ROOT_LOGGER = "barx"


def _truncate(value: object, max_len: int = 80) -> str:
    """Truncate a value's string form for safe logging."""
    s = str(value)
    if len(s) > max_len:
        return s[:max_len] + "..."
    return s


def _summarize(value: object) -> str:
    """Short description of a call argument or return value."""
    if isinstance(value, (str, int, float, bool)) or value is None:
        return _truncate(repr(value), 80)
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}[{len(value)}]"
    if isinstance(value, dict):
        return f"dict[{len(value)} keys]"
    return f"<{type(value).__name__}>"


def _timestamp(record: logging.LogRecord, fmt: str) -> str:
    """UTC time of a record, to the millisecond."""
    return datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(fmt)[:-3]


def _fields(record: logging.LogRecord) -> dict:
    """Structured parts of a record shared by both formatters.

    Event records carry ``event``/``ctx``/``duration_ms`` (see ``_emit``);
    plain records contribute their formatted message as ``msg``.
    """
    fields = {}
    event = getattr(record, "event", None)
    if event is not None:
        fields["event"] = event
    elif record.getMessage():
        fields["msg"] = record.getMessage()
    if getattr(record, "duration_ms", None) is not None:
        fields["duration_ms"] = record.duration_ms
    if getattr(record, "ctx", None) is not None:
        fields["ctx"] = record.ctx
    if record.exc_info and record.exc_info[1]:
        fields["traceback"] = traceback.format_exception(*record.exc_info)
    return fields


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log files and machine parsing."""

    def format(self, record):
        entry = {
            "ts": _timestamp(record, "%Y-%m-%dT%H:%M:%S.%f") + "Z",
            "level": record.levelname,
            "src": record.name,
            **_fields(record),
        }
        if "duration_ms" in entry:
            entry["duration_ms"] = round(entry["duration_ms"], 2)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Single-line console output; level names are colored when ``color`` is set."""

    COLORS = {
        "DEBUG": "\033[36m",    # cyan
        "INFO": "\033[32m",     # green
        "AUDIT": "\033[35m",    # magenta
        "WARNING": "\033[33m",  # yellow
        "ERROR": "\033[31m",    # red
    }
    RESET = "\033[0m"

    def __init__(self, color: bool = True):
        super().__init__()
        self.color = color

    def format(self, record):
        fields = _fields(record)
        level = f"{record.levelname:5s}"
        if self.color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"
        parts = [_timestamp(record, "%H:%M:%S.%f"), level, f"[{record.name}]"]

        if "event" in fields:
            parts.append(fields["event"])
        if "duration_ms" in fields:
            parts.append(f"({fields['duration_ms']:.1f}ms)")
        if fields.get("ctx"):
            parts.append(" ".join(f"{k}={_truncate(v)}" for k, v in fields["ctx"].items()))
        elif "msg" in fields:
            parts.append(fields["msg"])
        if "traceback" in fields:
            parts.append("\n" + "".join(fields["traceback"]))
        return " ".join(parts)


def setup_logging(level: str = "INFO", log_file: str | None = None, json_format: bool = False):
    """Configure the root barx logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, AUDIT).
        log_file: If set, also write JSON logs to this file path.
        json_format: If True, use JSON format on the console too.
    """
    root = logging.getLogger(ROOT_LOGGER)
    level_name = level.upper()
    root.setLevel(AUDIT if level_name == "AUDIT" else getattr(logging, level_name, logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler()
    if json_format:
        console.setFormatter(JsonFormatter())
    else:
        console.setFormatter(ConsoleFormatter(color=console.stream.isatty()))
    root.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(JsonFormatter())
        root.addHandler(fh)


def get_logger(module_name: str) -> logging.Logger:
    """Get a logger scoped under the barx namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{module_name}")


def _emit(log: logging.Logger, level: int, event: str, ctx: dict,
          duration_ms: float | None = None, exc_info=None):
    """Build and dispatch a structured record carrying an event tag and context."""
    record = log.makeRecord(
        name=log.name, level=level, fn="", lno=0,
        msg="", args=(), exc_info=exc_info,
    )
    record.event = event
    record.ctx = ctx
    if duration_ms is not None:
        record.duration_ms = duration_ms
    log.handle(record)


def audit(event: str, logger: logging.Logger | None = None, **context):
    """Emit an AUDIT-level structured log entry.

    Args:
        event: Machine-readable event tag (e.g., "compose.done").
        logger: Logger to use. Defaults to the barx root.
        **context: Key-value pairs for the event context.
    """
    log = logger or logging.getLogger(ROOT_LOGGER)
    if log.isEnabledFor(AUDIT):
        _emit(log, AUDIT, event, context)


def trace(func=None, *, logger_name: str | None = None):
    """Decorator that auto-logs function entry/exit with timing.

    - DEBUG on entry with arguments
    - INFO on exit with duration
    - ERROR on exception with traceback and duration
    """
    def decorator(fn):
        log = get_logger(logger_name or fn.__module__.replace(f"{ROOT_LOGGER}.", ""))

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            fn_name = fn.__name__

            if log.isEnabledFor(logging.DEBUG):
                _emit(log, logging.DEBUG, f"{fn_name}.enter", {
                    "args": [_summarize(a) for a in args],
                    "kwargs": {k: _summarize(v) for k, v in kwargs.items()},
                })

            start = time.perf_counter()
            try:
                result = fn(*args, **kwargs)
            except Exception:
                elapsed = (time.perf_counter() - start) * 1000
                _emit(log, logging.ERROR, f"{fn_name}.error", {"function": fn_name},
                      duration_ms=elapsed, exc_info=sys.exc_info())
                raise

            elapsed = (time.perf_counter() - start) * 1000
            if log.isEnabledFor(logging.INFO):
                _emit(log, logging.INFO, f"{fn_name}.done", {"result": _summarize(result)},
                      duration_ms=elapsed)
            return result

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
