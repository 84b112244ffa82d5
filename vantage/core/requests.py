"""资源请求委派协议.

说明:
- 路由层只负责把 (headers, body, uri, method, 资源句柄) 原样交给 `ResourceRequestHandler`.
- 校验、分页、排序、鉴权与错误格式化均由处理器完成,本模块不做任何解释.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from vantage.constants.system_constants import ErrorMessages
from vantage.errors import ExternalServiceError

if TYPE_CHECKING:
    from flask import Request
    from flask.typing import ResponseReturnValue

    from vantage.core.resources import ResourceInstance


class RequestType(Enum):
    """通用资源请求类型."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True, slots=True)
class UriContext:
    """请求 URI 的只读快照.

    Attributes:
        path: 请求路径.
        url: 完整 URL.
        query: query 参数多值映射,保持原始字符串不做转换.

    """

    path: str
    url: str
    query: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_request(cls, request: Request) -> UriContext:
        query = {key: tuple(request.args.getlist(key)) for key in request.args}
        return cls(path=request.path, url=request.url, query=MappingProxyType(query))

    def get_first(self, name: str) -> str | None:
        values = self.query.get(name)
        return values[0] if values else None

    @property
    def fields(self) -> str | None:
        return self.get_first("fields")

    @property
    def sort_by(self) -> str | None:
        return self.get_first("sortBy")

    @property
    def page_size(self) -> str | None:
        return self.get_first("page_size")

    @property
    def page_from(self) -> str | None:
        """分页起点,可为偏移量或 "start"."""
        return self.get_first("from")

    @property
    def page_to(self) -> str | None:
        """分页终点,可为偏移量或 "end"."""
        return self.get_first("to")


class ResourceRequestHandler(Protocol):
    """通用资源请求处理器协议."""

    def handle(
        self,
        headers: Mapping[str, str],
        body: str | None,
        uri_context: UriContext,
        request_type: RequestType,
        resource: ResourceInstance,
    ) -> ResponseReturnValue:
        """处理资源请求并返回最终 HTTP 响应."""
        ...


class UnavailableResourceRequestHandler:
    """未注入处理器时的占位实现,所有请求均以 502 失败."""

    def handle(
        self,
        headers: Mapping[str, str],
        body: str | None,
        uri_context: UriContext,
        request_type: RequestType,
        resource: ResourceInstance,
    ) -> ResponseReturnValue:
        raise ExternalServiceError(
            ErrorMessages.RESOURCE_HANDLER_UNAVAILABLE,
            message_key="RESOURCE_HANDLER_UNAVAILABLE",
            extra={
                "request_type": request_type.value,
                "resource_type": resource.resource_type.value,
                "path": uri_context.path,
            },
        )


__all__ = [
    "RequestType",
    "ResourceRequestHandler",
    "UnavailableResourceRequestHandler",
    "UriContext",
]
