"""成功与错误响应封套.

路由层与错误处理器只通过这里拼装 JSON,保证两类响应字段一致:
成功封套 `success/error/message/timestamp[/data][/meta]`,
错误封套见 `enhanced_error_handler`,额外带 `success: false`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, cast

from flask import Response, jsonify

from vantage.constants import HttpStatus
from vantage.constants.system_constants import SuccessMessages
from vantage.errors import map_exception_to_status
from vantage.utils.structlog_config import ErrorContext, enhanced_error_handler

if TYPE_CHECKING:
    from collections.abc import Mapping

    from vantage.types import JsonDict, JsonValue


def unified_success_response(
    data: object | None = None,
    message: object | None = None,
    *,
    status: int = HttpStatus.OK,
    meta: Mapping[str, object] | None = None,
) -> tuple[JsonDict, int]:
    """返回 `(payload, status)`;`data` 为 None 时不输出该字段."""
    payload: JsonDict = {
        "success": True,
        "error": False,
        "message": SuccessMessages.OPERATION_SUCCESS if message is None else str(message),
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if data is not None:
        payload["data"] = cast("JsonValue", data)
    if meta:
        payload["meta"] = cast("JsonDict", dict(meta))
    return payload, status


def unified_error_response(
    error: BaseException,
    *,
    status_code: int | None = None,
    extra: Mapping[str, JsonValue] | None = None,
    context: ErrorContext | None = None,
) -> tuple[JsonDict, int]:
    """把异常转换为错误封套并记录错误日志.

    `status_code` 缺省时由 `map_exception_to_status` 推导;
    非 `Exception` 的 BaseException 先包装为普通异常再处理.
    """
    if not isinstance(error, Exception):
        error = Exception(str(error))
    payload = cast("JsonDict", enhanced_error_handler(error, context or ErrorContext(error), extra=extra))
    payload.setdefault("success", False)
    return payload, status_code or map_exception_to_status(error)


def jsonify_unified_success(*args: object, **kwargs: object) -> tuple[Response, int]:
    payload, status = unified_success_response(*args, **kwargs)  # type: ignore[arg-type]
    return jsonify(payload), status
