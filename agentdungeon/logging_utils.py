"""Minimal structured logging helper.

Emits one key=value (or JSON) line per event with a timestamp, level and
logger name. Generation steps log at debug; run summaries at info.

Usage:
    from agentdungeon.logging_utils import get_logger
    log = get_logger("agentdungeon.generator")
    log.info(event="generation_complete", strategy="stochastic", filled=250)

Environment:
    DUNGEON_LOG_LEVEL   debug | info | warn | error (default: info)
    DUNGEON_LOG_JSON    1/true/yes/on for JSON lines

Lines go to stderr so CLI output on stdout (maps, --json payloads) stays clean.
Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("DUNGEON_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("DUNGEON_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def set_level(level: str) -> None:
    global CURRENT_LEVEL
    if level not in LEVELS:
        raise ValueError(f"unknown log level {level!r}")
    CURRENT_LEVEL = LEVELS[level]


def _format(level: str, **fields) -> str:
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "agentdungeon"

    def enabled(self, lvl: str) -> bool:
        return LEVELS[lvl] >= CURRENT_LEVEL

    def _log(self, lvl: str, **fields):
        if not self.enabled(lvl):
            return
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("agentdungeon")
