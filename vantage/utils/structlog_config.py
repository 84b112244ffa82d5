"""结构化日志配置.

所有模块通过 `get_logger(name)` 获取 structlog logger;处理器链只配置一次,
DEBUG 日志是否输出由 `ENABLE_DEBUG_LOG` 控制.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Literal

import structlog
from flask import Flask, current_app, has_app_context, has_request_context

from vantage.constants.system_constants import ErrorSeverity
from vantage.settings import APP_NAME, APP_VERSION
from vantage.types import ContextDict, JsonValue, LoggerExtra, StructlogEventDict
from vantage.utils.logging.context_vars import request_id_var
from vantage.utils.logging.error_adapter import (
    ErrorContext,
    ErrorMetadata,
    build_public_context,
    derive_error_metadata,
    get_error_suggestions,
)
from vantage.utils.logging.handlers import DebugFilter

if TYPE_CHECKING:
    from structlog.typing import Processor, WrappedLogger

LogField = JsonValue | ContextDict | LoggerExtra
ErrorPayload = dict[str, LogField]
_HelperLevel = Literal["debug", "info", "warning", "error", "critical"]


def _inject_request_id(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: StructlogEventDict,
) -> StructlogEventDict:
    if has_request_context():
        event_dict["request_id"] = request_id_var.get()
    return event_dict


def _inject_app_metadata(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: StructlogEventDict,
) -> StructlogEventDict:
    config = current_app.config if has_app_context() else {}
    event_dict["app_name"] = config.get("APP_NAME", APP_NAME)
    event_dict["app_version"] = config.get("APP_VERSION", APP_VERSION)
    if "ENV" in config:
        event_dict["environment"] = config["ENV"]
    event_dict["logger_name"] = getattr(_logger, "name", "unknown")
    return event_dict


class StructlogConfig:
    """structlog 处理器链的唯一配置入口.

    Attributes:
        debug_filter: DEBUG 日志开关处理器.
        configured: 处理器链是否已写入 structlog.

    """

    def __init__(self) -> None:
        self.debug_filter = DebugFilter(enabled=False)
        self.configured = False

    def build_processors(self) -> list[Processor]:
        return [
            structlog.stdlib.add_log_level,
            self.debug_filter,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _inject_request_id,
            _inject_app_metadata,
            self._renderer(),
        ]

    def configure(self) -> None:
        """写入处理器链,只执行一次;DEBUG 开关由 `DebugFilter` 按当前应用配置判断."""
        if self.configured:
            return
        structlog.configure(
            processors=self.build_processors(),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        self.configured = True

    @staticmethod
    def _renderer() -> Processor:
        # 终端里可读输出,其余场景(容器、文件重定向)输出 JSON 行
        if sys.stdout.isatty():
            return structlog.dev.ConsoleRenderer(colors=True)
        return structlog.processors.JSONRenderer(ensure_ascii=False)


structlog_config = StructlogConfig()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    Example:
        >>> get_logger("view_privileges").info("委派资源请求", view_name="FILES")

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def configure_structlog(app: Flask) -> None:
    """配置 structlog 并注册应用上下文销毁时的异常日志."""
    structlog_config.configure()

    @app.teardown_appcontext
    def _log_teardown_error(exception: BaseException | None) -> None:
        if exception is not None:
            get_logger("app").error("应用请求处理异常", module="system", exception=str(exception))


def _emit(
    level: _HelperLevel,
    message: str,
    module: str,
    exception: Exception | None,
    fields: dict[str, LogField],
) -> None:
    logger = get_logger("app")
    if exception is not None:
        if level in ("error", "critical"):
            fields = {**fields, "error": str(exception), "exc_info": exception}
        else:
            fields = {**fields, "exception": str(exception)}
    getattr(logger, level)(message, module=module, **fields)


def log_debug(message: str, module: str = "app", **kwargs: LogField) -> None:
    _emit("debug", message, module, None, kwargs)


def log_info(message: str, module: str = "app", **kwargs: LogField) -> None:
    _emit("info", message, module, None, kwargs)


def log_warning(message: str, module: str = "app", exception: Exception | None = None, **kwargs: LogField) -> None:
    _emit("warning", message, module, exception, kwargs)


def enhanced_error_handler(
    error: Exception,
    context: ErrorContext | None = None,
    *,
    extra: LoggerExtra | None = None,
) -> ErrorPayload:
    """把异常转换为统一错误载荷,并按严重度记录日志.

    Args:
        error: 异常对象.
        context: 错误上下文,缺省时按当前请求自动采集.
        extra: 需要随错误一起返回的非敏感诊断字段.

    Returns:
        统一错误封套字典(不含 `success` 字段).

    """
    context = context or ErrorContext(error)
    metadata = derive_error_metadata(error)

    payload: ErrorPayload = {
        "error": True,
        "error_id": context.error_id,
        "category": metadata.category.value,
        "severity": metadata.severity.value,
        "message_code": metadata.message_key,
        "message": metadata.message,
        "timestamp": context.timestamp.isoformat(),
        "recoverable": metadata.recoverable,
        "suggestions": get_error_suggestions(metadata.category),
        "context": build_public_context(context),
    }
    if extra:
        payload["extra"] = dict(extra)

    _log_error_payload(error, metadata, payload)
    return payload


_SEVERITY_LEVELS: dict[ErrorSeverity, _HelperLevel] = {
    ErrorSeverity.CRITICAL: "critical",
    ErrorSeverity.HIGH: "error",
}


def _log_error_payload(error: Exception, metadata: ErrorMetadata, payload: ErrorPayload) -> None:
    fields: dict[str, LogField] = {
        "error_id": payload["error_id"],
        "category": payload["category"],
        "severity": payload["severity"],
        "message_code": payload["message_code"],
        "context": payload["context"],
    }
    if "extra" in payload:
        fields["extra"] = payload["extra"]
    level = _SEVERITY_LEVELS.get(metadata.severity, "warning")
    _emit(level, str(payload["message"]), "error_handler", error, fields)


__all__ = [
    "ErrorContext",
    "ErrorMetadata",
    "configure_structlog",
    "enhanced_error_handler",
    "get_logger",
    "log_debug",
    "log_info",
    "log_warning",
]
