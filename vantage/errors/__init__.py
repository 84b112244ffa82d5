"""Vantage 异常体系.

每个异常类通过 `ExceptionMetadata` 声明 HTTP 状态码、分类、严重度与默认消息键,
全局错误处理器与 RestX `handle_error` 只依赖这些属性生成错误封套.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from werkzeug.exceptions import HTTPException

from vantage.constants import HttpStatus
from vantage.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

if TYPE_CHECKING:
    from vantage.types import LoggerExtra


def _message_for(key: str) -> str:
    return getattr(ErrorMessages, key, ErrorMessages.INTERNAL_ERROR)


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    status_code: int
    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str

    @property
    def default_message(self) -> str:
        return _message_for(self.default_message_key)


class AppError(Exception):
    """所有业务异常的基类.

    未传 `message` 时按 `message_key` 从 `ErrorMessages` 取文案;
    `severity`/`category`/`status_code` 可逐次覆盖类级默认值.
    """

    metadata: ClassVar[ExceptionMetadata] = ExceptionMetadata(
        HttpStatus.INTERNAL_SERVER_ERROR,
        ErrorCategory.SYSTEM,
        ErrorSeverity.HIGH,
        "INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
        status_code: int | None = None,
    ) -> None:
        defaults = type(self).metadata
        self.message_key = message_key or defaults.default_message_key
        self.message = message or _message_for(self.message_key)
        self.severity = severity or defaults.severity
        self.category = category or defaults.category
        self.status_code = int(status_code or defaults.status_code)
        self.extra = dict(extra) if extra else {}
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class ValidationError(AppError):
    """请求参数或请求体不合法."""

    metadata = ExceptionMetadata(
        HttpStatus.BAD_REQUEST, ErrorCategory.VALIDATION, ErrorSeverity.LOW, "VALIDATION_ERROR"
    )


class AuthenticationError(AppError):
    metadata = ExceptionMetadata(
        HttpStatus.UNAUTHORIZED, ErrorCategory.AUTHENTICATION, ErrorSeverity.MEDIUM, "AUTHENTICATION_REQUIRED"
    )


class AuthorizationError(AppError):
    metadata = ExceptionMetadata(
        HttpStatus.FORBIDDEN, ErrorCategory.AUTHORIZATION, ErrorSeverity.MEDIUM, "PERMISSION_DENIED"
    )


class NotFoundError(AppError):
    """目标资源(视图、版本、实例或权限)不存在."""

    metadata = ExceptionMetadata(
        HttpStatus.NOT_FOUND, ErrorCategory.BUSINESS, ErrorSeverity.LOW, "RESOURCE_NOT_FOUND"
    )


class ConflictError(AppError):
    metadata = ExceptionMetadata(
        HttpStatus.CONFLICT, ErrorCategory.BUSINESS, ErrorSeverity.MEDIUM, "CONSTRAINT_VIOLATION"
    )


class ExternalServiceError(AppError):
    """资源处理器或监控系统等下游依赖不可用."""

    metadata = ExceptionMetadata(
        HttpStatus.BAD_GATEWAY, ErrorCategory.EXTERNAL, ErrorSeverity.HIGH, "EXTERNAL_SERVICE_ERROR"
    )


class SystemError(AppError):  # noqa: A001
    """未归类的系统级故障,沿用基类默认值."""


def map_exception_to_status(error: Exception, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """AppError 取自身状态码,werkzeug HTTPException 取 `code`,其余返回 `default`."""
    if isinstance(error, AppError):
        return error.status_code
    if isinstance(error, HTTPException) and error.code is not None:
        return int(error.code)
    return default


__all__ = [
    "AppError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "ExceptionMetadata",
    "ExternalServiceError",
    "NotFoundError",
    "SystemError",
    "ValidationError",
    "map_exception_to_status",
]
