"""
===============================================================================
CRC CARD — crosscutting/logger.py
===============================================================================

Componente:
  Logger "docshare" (stdlib logging, una línea JSON por evento)

Responsabilidades:
  - Emitir a stdout en JSON (o texto plano con LOG_JSON=false).
  - Adjuntar request_id / method / path desde docshare.context.
  - Copiar los `extra=` del call-site al payload, redactando credenciales
    (tokens, secretos, DATABASE_URL) y recortando strings largos.

Colaboradores:
  - docshare/context.py
  - crosscutting/config.py (log_level, log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

LOGGER_NAME = "docshare"

# Atributos que todo LogRecord trae de fábrica; el resto vino por `extra=`.
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
}

_SENSITIVE_KEYS = frozenset(
    {
        "authorization",
        "cookie",
        "token",
        "access_token",
        "jwt_secret",
        "secret",
        "password",
        "database_url",
    }
)

_MAX_STR = 2_000
_MAX_DEPTH = 4


def redact(value: Any, *, key: str | None = None, depth: int = 0) -> Any:
    """Versión segura para loguear de `value` (recursiva sobre dict/list)."""
    if key is not None and key.lower() in _SENSITIVE_KEYS:
        return "[REDACTED]"
    if depth >= _MAX_DEPTH:
        return "[DEPTH]"
    if isinstance(value, str):
        return value if len(value) <= _MAX_STR else value[:_MAX_STR] + "..."
    if isinstance(value, dict):
        return {
            str(k): redact(v, key=str(k), depth=depth + 1) for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        return [redact(v, depth=depth + 1) for v in value]
    return value


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}:{record.lineno}",
        }
        payload.update(get_context_dict())
        payload.update(
            {
                key: redact(value, key=key)
                for key, value in record.__dict__.items()
                if key not in _STANDARD_ATTRS
            }
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _level_and_format() -> tuple[str, bool]:
    # Sin DATABASE_URL (alembic offline, tooling) Settings no valida.
    try:
        from .config import get_settings

        settings = get_settings()
    except ValidationError:
        return "INFO", True
    return settings.log_level, settings.log_json


def setup_logger(name: str = LOGGER_NAME) -> logging.Logger:
    log = logging.getLogger(name)
    level, use_json = _level_and_format()
    log.setLevel(level)
    log.propagate = False

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)
    return log


logger = setup_logger()
