"""structlog 处理器."""

from __future__ import annotations

from typing import Any

import structlog
from flask import current_app, has_app_context


class DebugFilter:
    """按 `ENABLE_DEBUG_LOG` 丢弃 DEBUG 日志的处理器.

    处于应用上下文时读取当前应用的配置,多个应用实例互不影响;
    应用上下文之外使用 `enabled` 作为默认值.

    Attributes:
        enabled: 应用上下文之外是否输出 DEBUG 日志.

    """

    def __init__(self, *, enabled: bool = False) -> None:
        self.enabled = enabled

    def is_enabled(self) -> bool:
        if has_app_context():
            return bool(current_app.config.get("ENABLE_DEBUG_LOG", self.enabled))
        return self.enabled

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        """DEBUG 日志未启用时抛出 `structlog.DropEvent`."""
        level = str(event_dict.get("level", method_name)).upper()
        if level == "DEBUG" and not self.is_enabled():
            raise structlog.DropEvent
        return event_dict


__all__ = ["DebugFilter"]
