# vidtube/core/logger.py
from __future__ import annotations

"""
VidTube — Logging (Loguru)
--------------------------
- Pretty console logs by default; JSON logs via `LOG_JSON=1`
- Request correlation through `request_id` (bound by RequestIDMiddleware)
- Intercepts stdlib/uvicorn/fastapi/starlette logs into Loguru
- Optional rotating file sink

Env
---
LOG_LEVEL=INFO|DEBUG|WARNING|ERROR (default: INFO)
LOG_JSON=1
LOG_TO_FILE=1 (write logs/app.log with rotation; default: 0)
LOG_DIR=logs
LOG_FILE=app.log
LOG_ROTATION=10 MB
APP_DEBUG=1 (backtrace/diagnose in console sink)
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from loguru import logger

# ─────────────────────────────────────────────────────────────
# ⚙️ Env
# ─────────────────────────────────────────────────────────────
load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_JSON = os.getenv("LOG_JSON", "0").lower() in {"1", "true", "yes"}
APP_DEBUG = os.getenv("APP_DEBUG", "0").lower() in {"1", "true", "yes"}

LOG_TO_FILE = os.getenv("LOG_TO_FILE", "0").lower() in {"1", "true", "yes"}
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_FILE = os.getenv("LOG_FILE", "app.log")
LOG_ROTATION = os.getenv("LOG_ROTATION", "10 MB")


# ─────────────────────────────────────────────────────────────
# 🧾 Formatters
# ─────────────────────────────────────────────────────────────
def _fmt_pretty(record) -> str:
    """Colorized single-line formatter with request_id support."""
    record["extra"].setdefault("request_id", "N/A")
    safe_name = (record["name"] or "").replace("<", "[").replace(">", "]")
    safe_func = record["function"].replace("<", "[").replace(">", "]")
    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level:<8}</level> | "
        f"<cyan>{safe_name}</cyan>:<cyan>{safe_func}</cyan>:<cyan>{{line}}</cyan> - "
        "<level>{message}</level> | request_id={extra[request_id]}\n"
    )
    if record["exception"]:
        fmt += "{exception}"
    return fmt


def _serialize_json(record) -> str:
    payload: Dict[str, Any] = {
        "time": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%f%z"),
        "level": record["level"].name,
        "logger": record["name"],
        "func": record["function"],
        "line": record["line"],
        "message": record["message"],
        "request_id": record["extra"].get("request_id", "N/A"),
    }
    for k, v in record["extra"].items():
        payload.setdefault(k, v)
    if record["exception"]:
        payload["exception"] = repr(record["exception"].value)
    return json.dumps(payload, ensure_ascii=False, default=str)


def _fmt_json(record) -> str:
    """Structured JSON logs, one object per line."""
    record["extra"]["_json"] = _serialize_json(record)
    return "{extra[_json]}\n"


# ─────────────────────────────────────────────────────────────
# 🔁 Intercept stdlib logging → Loguru
# ─────────────────────────────────────────────────────────────
class InterceptHandler(logging.Handler):
    """Route standard logging records into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


# ─────────────────────────────────────────────────────────────
# 📤 Sinks
# ─────────────────────────────────────────────────────────────
def setup_logging() -> None:
    """(Re)configure Loguru sinks and patch stdlib loggers. Idempotent."""
    logger.remove()
    fmt = _fmt_json if LOG_JSON else _fmt_pretty

    logger.add(
        sys.stdout,
        level=LOG_LEVEL,
        format=fmt,
        backtrace=APP_DEBUG,
        diagnose=APP_DEBUG,
    )

    if LOG_TO_FILE:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(LOG_DIR / LOG_FILE),
            rotation=LOG_ROTATION,
            level=LOG_LEVEL,
            format=fmt,
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )

    # Application modules use `logging.getLogger("vidtube...")`
    logging.basicConfig(handlers=[InterceptHandler()], level=LOG_LEVEL, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "starlette", "vidtube"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.setLevel(LOG_LEVEL)
        std_logger.propagate = False

    # boto retries and SQL echo are noise at INFO
    std_level = logging.getLevelName(LOG_LEVEL)
    quiet_level = max(logging.WARNING, std_level if isinstance(std_level, int) else logging.INFO)
    for name in ("botocore", "boto3", "s3transfer", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(quiet_level)


setup_logging()

__all__ = ["logger", "setup_logging", "InterceptHandler"]
