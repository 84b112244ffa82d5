"""Base Resource helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar

from flask import Response, current_app, request
from flask_restx import Resource

from vantage.core.registry import get_resource_instance_factory, get_resource_request_handler
from vantage.core.requests import RequestType, UriContext
from vantage.utils.response_utils import jsonify_unified_success
from vantage.utils.route_safety import log_with_context

if TYPE_CHECKING:
    from vantage.core.resources import ResourceIds, ResourceInstance, ResourceType


class BaseResource(Resource):
    """统一封套的 Resource 基类."""

    def success(
        self,
        data: object | None = None,
        message: object | None = None,
        *,
        status: int = 200,
        meta: Mapping[str, object] | None = None,
    ) -> Response:
        response, status_code = jsonify_unified_success(data=data, message=message, status=status, meta=meta)
        response.status_code = status_code
        return response


class ResourceDelegatingResource(BaseResource):
    """把请求原样委派给通用资源请求处理器的 Resource 基类.

    子类只负责从路径参数构造资源句柄;响应内容、校验与错误均由处理器决定.
    """

    log_module: ClassVar[str] = "resources"

    @staticmethod
    def uri_context() -> UriContext:
        return UriContext.from_request(request)

    @staticmethod
    def raw_body() -> str:
        return request.get_data(as_text=True)

    def create_resource(self, resource_type: ResourceType, ids: ResourceIds) -> ResourceInstance:
        return get_resource_instance_factory().create_resource(resource_type, ids)

    def handle_request(
        self,
        headers: Mapping[str, str],
        body: str | None,
        uri_context: UriContext,
        request_type: RequestType,
        resource: ResourceInstance,
    ) -> Response:
        log_with_context(
            "info",
            "委派资源请求",
            module=self.log_module,
            action=f"{request_type.value.lower()}_{resource.resource_type.value}",
            context={
                "path": uri_context.path,
                "request_type": request_type.value,
                "resource_ids": resource.to_dict(),
                "collection": resource.is_collection,
            },
            logger_name="api",
        )
        result = get_resource_request_handler().handle(headers, body, uri_context, request_type, resource)
        # RestX 会把非 Response 返回值按 JSON 重新序列化,这里先交给 Flask 生成最终响应
        return current_app.make_response(result)
