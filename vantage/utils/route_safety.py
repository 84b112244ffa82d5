"""路由层结构化日志助手.

提供 `log_with_context`,用于复用结构化日志字段(module/action/context).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, TypedDict, Unpack, cast

from vantage.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from vantage.types import ContextDict, ContextMapping, LoggerExtra

LogLevel = Literal["debug", "info", "warning", "error", "critical"]


class LogContextOptions(TypedDict, total=False):
    """结构化日志可选参数."""

    context: ContextMapping | None
    extra: LoggerExtra | None
    logger_name: str


def log_with_context(
    level: LogLevel,
    event: str,
    *,
    module: str,
    action: str,
    **options: Unpack[LogContextOptions],
) -> None:
    """记录带有统一上下文字段的结构化日志.

    Args:
        level: 日志级别,使用 structlog 的方法名,例如 "info", "error".
        event: 日志事件描述,建议使用动词短语.
        module: 所属模块或领域,用于快速过滤.
        action: 当前操作名称,通常对应视图函数名.
        **options: 支持 context, extra, logger_name 选项以扩展日志内容.

    """
    logger = get_logger(options.get("logger_name", "app"))
    payload: ContextDict = {"module": module, "action": action}

    context_opt = cast("ContextMapping | None", options.get("context"))
    extra_opt = cast("LoggerExtra | None", options.get("extra"))
    if context_opt:
        payload.update(context_opt)
    if extra_opt:
        payload.update(extra_opt)

    log_method = getattr(logger, level, logger.error)
    log_method(event, **payload)


__all__ = ["log_with_context"]
