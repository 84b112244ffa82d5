"""Swagger 文档用的响应封套模型.

真实响应由 `BaseResource.success` 与 `VantageApi.handle_error` 生成,这里只描述其形状.
"""

from __future__ import annotations

from flask_restx import Namespace, fields

ERROR_ENVELOPE = "ErrorEnvelope"
_SAMPLE_TIME = "2026-01-01T00:00:00+00:00"


def _common_fields(*, failed: bool) -> dict[str, fields.Raw]:
    return {
        "success": fields.Boolean(required=True, example=not failed),
        "error": fields.Boolean(required=True, example=failed),
        "message": fields.String(required=True, description="面向用户的提示文案"),
        "timestamp": fields.String(required=True, description="UTC ISO8601", example=_SAMPLE_TIME),
    }


def get_error_envelope_model(ns: Namespace):
    """错误封套模型,同一 namespace 内只注册一次."""
    if ERROR_ENVELOPE in ns.models:
        return ns.models[ERROR_ENVELOPE]

    error_fields = _common_fields(failed=True)
    error_fields.update(
        {
            "error_id": fields.String(required=True, description="错误追踪 ID"),
            "category": fields.String(required=True, example="external"),
            "severity": fields.String(required=True, example="high"),
            "message_code": fields.String(required=True, example="RESOURCE_HANDLER_UNAVAILABLE"),
            "recoverable": fields.Boolean(required=True),
            "suggestions": fields.List(fields.String, required=True),
            "context": fields.Raw(required=True, description="request_id/url/method 等"),
            "extra": fields.Raw(required=False),
        },
    )
    return ns.model(ERROR_ENVELOPE, error_fields)


def make_success_envelope_model(ns: Namespace, name: str, data_model=None):
    success_fields = _common_fields(failed=False)
    success_fields["meta"] = fields.Raw(required=False)
    success_fields["data"] = (
        fields.Raw(required=False) if data_model is None else fields.Nested(data_model, required=False)
    )
    return ns.model(name, success_fields)
