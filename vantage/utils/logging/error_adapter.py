"""错误封套与错误日志共用的元数据推导."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any, Final
from uuid import uuid4

from flask import has_request_context, request
from werkzeug.exceptions import HTTPException

from vantage.constants import HttpStatus
from vantage.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity
from vantage.errors import AppError
from vantage.utils.logging.context_vars import request_id_var

_DEFAULT_SUGGESTIONS: Final[tuple[str, ...]] = ("联系管理员", "查看错误日志")

ERROR_SUGGESTIONS: Final[Mapping[ErrorCategory, tuple[str, ...]]] = MappingProxyType(
    {
        ErrorCategory.VALIDATION: ("检查输入数据", "根据提示修正请求参数"),
        ErrorCategory.BUSINESS: ("确认资源是否存在", "联系管理员核对数据"),
        ErrorCategory.AUTHENTICATION: ("重新登录", "验证凭据有效性"),
        ErrorCategory.AUTHORIZATION: ("检查权限配置", "联系管理员"),
        ErrorCategory.EXTERNAL: ("确认下游服务状态", "稍后重试"),
        ErrorCategory.NETWORK: ("检查网络连接", "稍后重试"),
        ErrorCategory.SYSTEM: _DEFAULT_SUGGESTIONS,
    },
)


@dataclass(slots=True)
class ErrorContext:
    """一次错误的采集信息.

    `request` 缺省时在请求上下文内自动取当前请求;`request_id` 来自 contextvars.
    """

    error: Exception
    request: Any | None = None
    error_id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    request_id: str | None = field(default_factory=request_id_var.get)
    url: str | None = None
    method: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def ensure_request(self) -> None:
        if self.request is None and has_request_context():
            self.request = request
        if self.request is None:
            return
        self.url = getattr(self.request, "url", self.url)
        self.method = getattr(self.request, "method", self.method)
        self.extra.setdefault("ip_address", getattr(self.request, "remote_addr", None))


@dataclass(frozen=True, slots=True)
class ErrorMetadata:
    status_code: int
    category: ErrorCategory
    severity: ErrorSeverity
    message_key: str
    message: str

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


def _metadata_for_http_exception(error: HTTPException) -> ErrorMetadata:
    status_code = int(error.code or HttpStatus.INTERNAL_SERVER_ERROR)
    if status_code >= HttpStatus.INTERNAL_SERVER_ERROR:
        return ErrorMetadata(
            status_code=status_code,
            category=ErrorCategory.SYSTEM,
            severity=ErrorSeverity.HIGH,
            message_key="INTERNAL_ERROR",
            message=error.description or ErrorMessages.INTERNAL_ERROR,
        )
    return ErrorMetadata(
        status_code=status_code,
        category=ErrorCategory.BUSINESS,
        severity=ErrorSeverity.MEDIUM,
        message_key="INVALID_REQUEST",
        message=error.description or ErrorMessages.INVALID_REQUEST,
    )


def derive_error_metadata(error: Exception) -> ErrorMetadata:
    """推导错误元数据.

    未识别的异常一律视为系统错误,对外文案固定为 `ErrorMessages.INTERNAL_ERROR`,
    原始异常文本只进入日志.
    """
    if isinstance(error, AppError):
        return ErrorMetadata(
            status_code=error.status_code,
            category=error.category,
            severity=error.severity,
            message_key=error.message_key,
            message=error.message,
        )
    if isinstance(error, HTTPException):
        return _metadata_for_http_exception(error)
    return ErrorMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        message_key="INTERNAL_ERROR",
        message=ErrorMessages.INTERNAL_ERROR,
    )


def build_public_context(context: ErrorContext) -> dict[str, Any]:
    """错误封套中可对外暴露的 `context` 字段."""
    context.ensure_request()
    public: dict[str, Any] = {"request_id": context.request_id}
    if context.url:
        public["url"] = context.url
    if context.method:
        public["method"] = context.method
    meta = {key: value for key, value in context.extra.items() if value is not None}
    if meta:
        public["meta"] = meta
    return public


def get_error_suggestions(category: ErrorCategory) -> list[str]:
    return list(ERROR_SUGGESTIONS.get(category, _DEFAULT_SUGGESTIONS))


__all__ = [
    "ERROR_SUGGESTIONS",
    "ErrorContext",
    "ErrorMetadata",
    "build_public_context",
    "derive_error_metadata",
    "get_error_suggestions",
]
