"""
Structured one-line JSON logging shared by handler and workflow.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

logger = logging.getLogger("jira_orchestrator")


def configure_logging() -> None:
    level_name = (os.getenv("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)
    root = logging.getLogger()
    if root.level and root.level > level:
        root.setLevel(level)


def request_id(context: Any) -> str | None:
    return getattr(context, "aws_request_id", None)


def log(msg: str, level: int = logging.INFO, **fields: Any) -> None:
    try:
        rec = json.dumps({"msg": msg, **fields}, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        logger.log(level, "%s | %s", msg, fields)
        return
    logger.log(level, rec)
