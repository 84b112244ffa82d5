"""资源框架的共享协议与模型."""

from .requests import RequestType, ResourceRequestHandler, UnavailableResourceRequestHandler, UriContext
from .resources import (
    DefaultResourceInstanceFactory,
    Resource,
    ResourceIds,
    ResourceInstance,
    ResourceInstanceFactory,
    ResourceType,
)

__all__ = [
    "DefaultResourceInstanceFactory",
    "RequestType",
    "Resource",
    "ResourceIds",
    "ResourceInstance",
    "ResourceInstanceFactory",
    "ResourceRequestHandler",
    "ResourceType",
    "UnavailableResourceRequestHandler",
    "UriContext",
]
