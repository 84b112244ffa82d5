"""Flask-RESTX Api 定制.

目标:
- 所有 RestX 内部错误与委派处理器抛出的异常统一映射为 `unified_error_response`
"""

from __future__ import annotations

from flask import Response, jsonify, request
from flask_restx import Api

from vantage.constants.system_constants import SuccessMessages
from vantage.utils.response_utils import jsonify_unified_success, unified_error_response
from vantage.utils.structlog_config import ErrorContext


class VantageApi(Api):
    """统一错误封套的 RestX Api."""

    def render_root(self) -> Response:  # type: ignore[override]
        """为 `/api/v1/` 提供可发现性入口(避免误判“未部署”)."""
        prefix = request.path.rstrip("/")
        docs_url = f"{prefix}{self._doc}" if self._doc else None
        response, status_code = jsonify_unified_success(
            data={
                "docs_url": docs_url,
                "openapi_url": f"{prefix}/openapi.json",
                "health_ping_url": f"{prefix}/health/ping",
            },
            message=SuccessMessages.API_READY,
        )
        response.status_code = status_code
        return response

    def handle_error(self, e: Exception) -> Response:  # type: ignore[override]
        payload, status_code = unified_error_response(e, context=ErrorContext(e, request))
        response = jsonify(payload)
        response.status_code = status_code
        return response
