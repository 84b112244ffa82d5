"""View privileges namespace.

视图实例权限集合的 REST 入口:
- 每个接口只把 HTTP 方法与路径参数翻译为一次资源请求,交给注入的资源请求处理器
- 处理器返回值即为 HTTP 响应,这里不做校验也不做错误转换
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from flask import request
from flask_restx import Namespace, fields

from vantage.api.v1.models.envelope import get_error_envelope_model
from vantage.api.v1.resources.base import ResourceDelegatingResource
from vantage.api.v1.resources.query_parsers import build_collection_parser, build_fields_parser
from vantage.core.requests import RequestType
from vantage.core.resources import ResourceIds, ResourceInstance, ResourceType

if TYPE_CHECKING:
    from flask import Response

ns = Namespace("views", description="视图实例权限管理")

PRIVILEGE_CATEGORY = "PrivilegeInfo"
PRIVILEGES_ROUTE = "/<string:view_name>/versions/<string:version>/instances/<string:instance_name>/privileges"

ErrorEnvelope = get_error_envelope_model(ns)

ViewPrivilegeRequestInfo = ns.model(
    "ViewPrivilegeRequestInfo",
    {
        "permission_name": fields.String(required=True, description="权限名称", example="VIEW.USER"),
        "principal_name": fields.String(required=True, description="主体名称", example="admin"),
        "principal_type": fields.String(required=True, description="主体类型(USER/GROUP)", example="USER"),
    },
)

ViewPrivilegeRequest = ns.model(
    "ViewPrivilegeRequest",
    {
        PRIVILEGE_CATEGORY: fields.Nested(ViewPrivilegeRequestInfo, required=True),
    },
)

ViewPrivilegeResponseInfo = ns.model(
    "ViewPrivilegeResponseInfo",
    {
        "privilege_id": fields.Integer(description="权限 ID", example=42),
        "permission_name": fields.String(description="权限名称", example="VIEW.USER"),
        "permission_label": fields.String(description="权限展示名", example="View User"),
        "principal_name": fields.String(description="主体名称", example="admin"),
        "principal_type": fields.String(description="主体类型(USER/GROUP)", example="USER"),
        "view_name": fields.String(description="视图名称", example="FILES"),
        "version": fields.String(description="视图版本", example="1.0.0"),
        "instance_name": fields.String(description="视图实例名称", example="files_1"),
    },
)

ViewPrivilegeResponse = ns.model(
    "ViewPrivilegeResponse",
    {
        PRIVILEGE_CATEGORY: fields.Nested(ViewPrivilegeResponseInfo),
    },
)

_privileges_list_parser = build_collection_parser(
    category=PRIVILEGE_CATEGORY,
    default_fields=f"{PRIVILEGE_CATEGORY}/*",
    default_sort=f"{PRIVILEGE_CATEGORY}/user_name.asc",
)
_privilege_detail_parser = build_fields_parser(category=PRIVILEGE_CATEGORY, default_fields=PRIVILEGE_CATEGORY)

_PATH_PARAMS = {
    "view_name": "视图名称",
    "version": "视图版本",
    "instance_name": "视图实例名称",
}


def build_privilege_ids(
    view_name: str,
    version: str,
    instance_name: str,
    privilege_id: str | None,
) -> dict[ResourceType, str | None]:
    """构造视图权限的路径参数映射.

    集合级操作的 `privilege_id` 为 None,映射中仍保留该键.
    """
    return {
        ResourceType.VIEW: view_name,
        ResourceType.VIEW_VERSION: version,
        ResourceType.VIEW_INSTANCE: instance_name,
        ResourceType.VIEW_PRIVILEGE: privilege_id,
    }


class _ViewPrivilegeResourceBase(ResourceDelegatingResource):
    log_module: ClassVar[str] = "view_privileges"

    def create_privilege_resource(
        self,
        view_name: str,
        version: str,
        instance_name: str,
        privilege_id: str | None,
    ) -> ResourceInstance:
        ids: ResourceIds = build_privilege_ids(view_name, version, instance_name, privilege_id)
        return self.create_resource(ResourceType.VIEW_PRIVILEGE, ids)

    def delegate(
        self,
        request_type: RequestType,
        resource: ResourceInstance,
        *,
        with_body: bool,
    ) -> Response:
        body = self.raw_body() if with_body else None
        return self.handle_request(request.headers, body, self.uri_context(), request_type, resource)


@ns.route(PRIVILEGES_ROUTE, strict_slashes=False)
@ns.doc(params=_PATH_PARAMS)
class ViewPrivilegesResource(_ViewPrivilegeResourceBase):
    """视图实例权限集合."""

    @ns.doc("get_privileges")
    @ns.expect(_privileges_list_parser)
    @ns.response(200, "OK", [ViewPrivilegeResponse])
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, view_name: str, version: str, instance_name: str):
        resource = self.create_privilege_resource(view_name, version, instance_name, None)
        return self.delegate(RequestType.GET, resource, with_body=False)

    @ns.doc("create_privilege")
    @ns.expect(ViewPrivilegeRequest, validate=False)
    @ns.response(201, "Created")
    @ns.response(202, "Accepted")
    @ns.response(400, "Invalid arguments", ErrorEnvelope)
    @ns.response(409, "The requested resource already exists", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def post(self, view_name: str, version: str, instance_name: str):
        resource = self.create_privilege_resource(view_name, version, instance_name, None)
        return self.delegate(RequestType.POST, resource, with_body=True)

    @ns.doc("update_privileges")
    @ns.expect([ViewPrivilegeRequest], validate=False)
    @ns.response(200, "Successful operation")
    @ns.response(400, "Invalid arguments", ErrorEnvelope)
    @ns.response(404, "The requested resource doesn't exist", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def put(self, view_name: str, version: str, instance_name: str):
        resource = self.create_privilege_resource(view_name, version, instance_name, None)
        return self.delegate(RequestType.PUT, resource, with_body=True)

    @ns.doc("delete_privileges")
    @ns.response(200, "Successful operation")
    @ns.response(404, "The requested resource doesn't exist", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def delete(self, view_name: str, version: str, instance_name: str):
        resource = self.create_privilege_resource(view_name, version, instance_name, None)
        return self.delegate(RequestType.DELETE, resource, with_body=True)


@ns.route(f"{PRIVILEGES_ROUTE}/<string:privilege_id>", strict_slashes=False)
@ns.doc(params={**_PATH_PARAMS, "privilege_id": "权限 ID"})
class ViewPrivilegeResource(_ViewPrivilegeResourceBase):
    """单个视图实例权限."""

    @ns.doc("get_privilege")
    @ns.expect(_privilege_detail_parser)
    @ns.response(200, "OK", ViewPrivilegeResponse)
    @ns.response(404, "The requested resource doesn't exist", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, view_name: str, version: str, instance_name: str, privilege_id: str):
        resource = self.create_privilege_resource(view_name, version, instance_name, privilege_id)
        return self.delegate(RequestType.GET, resource, with_body=False)

    @ns.doc("update_privilege")
    @ns.expect(ViewPrivilegeRequest, validate=False)
    @ns.response(200, "Successful operation")
    @ns.response(400, "Invalid arguments", ErrorEnvelope)
    @ns.response(404, "The requested resource doesn't exist", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def put(self, view_name: str, version: str, instance_name: str, privilege_id: str):
        resource = self.create_privilege_resource(view_name, version, instance_name, privilege_id)
        return self.delegate(RequestType.PUT, resource, with_body=True)

    @ns.doc("delete_privilege")
    @ns.response(200, "Successful operation")
    @ns.response(404, "The requested resource doesn't exist", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def delete(self, view_name: str, version: str, instance_name: str, privilege_id: str):
        resource = self.create_privilege_resource(view_name, version, instance_name, privilege_id)
        return self.delegate(RequestType.DELETE, resource, with_body=False)
