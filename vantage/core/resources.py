"""资源模型与资源句柄工厂.

说明:
- `ResourceType` 标识通用 CRUD 框架中的资源种类,值与对外资源名称保持一致.
- `ResourceInstance` 是单次请求内使用的资源句柄,构造后不可变.
- 资源句柄工厂属于外部协作方,此处仅定义协议与一个按原样拷贝 id 映射的默认实现.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Protocol


class ResourceType(Enum):
    """资源种类枚举."""

    HOST_COMPONENT = "HostComponent"
    VIEW = "View"
    VIEW_VERSION = "ViewVersion"
    VIEW_INSTANCE = "ViewInstance"
    VIEW_PRIVILEGE = "ViewPrivilege"


ResourceIds = Mapping[ResourceType, str | None]


@dataclass(frozen=True, slots=True)
class ResourceInstance:
    """资源句柄.

    Attributes:
        resource_type: 主资源类型.
        ids: 路径参数映射(只读拷贝),值为 None 表示集合级别.

    """

    resource_type: ResourceType
    ids: ResourceIds = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_collection(self) -> bool:
        """主资源 id 缺失时视为集合级请求."""
        return self.ids.get(self.resource_type) is None

    def to_dict(self) -> dict[str, str | None]:
        """以资源名称为键导出 id 映射,便于日志输出."""
        return {resource_type.value: value for resource_type, value in self.ids.items()}


class ResourceInstanceFactory(Protocol):
    """资源句柄工厂协议."""

    def create_resource(self, resource_type: ResourceType, ids: ResourceIds) -> ResourceInstance:
        """根据主资源类型与路径参数映射构造资源句柄."""
        ...


class DefaultResourceInstanceFactory:
    """默认资源句柄工厂: 拷贝 id 映射后直接构造 `ResourceInstance`."""

    def create_resource(self, resource_type: ResourceType, ids: ResourceIds) -> ResourceInstance:
        return ResourceInstance(resource_type=resource_type, ids=MappingProxyType(dict(ids)))


class Resource:
    """带属性集合的只读资源记录(例如主机组件).

    属性 id 采用 `Category/name` 形式,例如 `HostRoles/host_name`.
    """

    __slots__ = ("_properties", "resource_type")

    def __init__(self, resource_type: ResourceType, properties: Mapping[str, object] | None = None) -> None:
        self.resource_type = resource_type
        self._properties: dict[str, object] = dict(properties or {})

    def get_property_value(self, property_id: str) -> object | None:
        """返回属性值,属性不存在时返回 None."""
        return self._properties.get(property_id)

    @property
    def property_ids(self) -> frozenset[str]:
        return frozenset(self._properties)

    def __repr__(self) -> str:
        return f"Resource(resource_type={self.resource_type.value!r}, properties={self._properties!r})"


__all__ = [
    "DefaultResourceInstanceFactory",
    "Resource",
    "ResourceIds",
    "ResourceInstance",
    "ResourceInstanceFactory",
    "ResourceType",
]
