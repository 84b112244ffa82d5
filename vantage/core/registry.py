"""资源框架协作方注册.

资源请求处理器与资源句柄工厂在应用启动时写入 `app.extensions`,之后只读访问.
"""

from __future__ import annotations

from typing import Final, cast

from flask import Flask, current_app

from vantage.core.requests import ResourceRequestHandler, UnavailableResourceRequestHandler
from vantage.core.resources import DefaultResourceInstanceFactory, ResourceInstanceFactory
from vantage.utils.structlog_config import log_warning

RESOURCE_REQUEST_HANDLER_KEY: Final[str] = "vantage.resource_request_handler"
RESOURCE_INSTANCE_FACTORY_KEY: Final[str] = "vantage.resource_instance_factory"


def init_resource_framework(
    app: Flask,
    *,
    request_handler: ResourceRequestHandler | None = None,
    resource_factory: ResourceInstanceFactory | None = None,
) -> None:
    """注册资源请求处理器与资源句柄工厂.

    Args:
        app: Flask 应用实例.
        request_handler: 通用资源请求处理器,缺省时使用返回 502 的占位实现.
        resource_factory: 资源句柄工厂,缺省时使用 `DefaultResourceInstanceFactory`.

    """
    if request_handler is None:
        log_warning("未注入资源请求处理器,资源类接口将返回 502", module="resource_framework")
    app.extensions[RESOURCE_REQUEST_HANDLER_KEY] = request_handler or UnavailableResourceRequestHandler()
    app.extensions[RESOURCE_INSTANCE_FACTORY_KEY] = resource_factory or DefaultResourceInstanceFactory()


def get_resource_request_handler() -> ResourceRequestHandler:
    return cast("ResourceRequestHandler", current_app.extensions[RESOURCE_REQUEST_HANDLER_KEY])


def get_resource_instance_factory() -> ResourceInstanceFactory:
    return cast("ResourceInstanceFactory", current_app.extensions[RESOURCE_INSTANCE_FACTORY_KEY])


__all__ = [
    "RESOURCE_INSTANCE_FACTORY_KEY",
    "RESOURCE_REQUEST_HANDLER_KEY",
    "get_resource_instance_factory",
    "get_resource_request_handler",
    "init_resource_framework",
]
