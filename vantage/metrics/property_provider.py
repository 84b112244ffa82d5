"""监控指标属性提供者基类与协作方协议."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import IO, Protocol, cast
from urllib.parse import urlencode

from vantage.core.resources import Resource
from vantage.metrics.constants import MONITORING_CLUSTER_NAME_MAP
from vantage.utils.structlog_config import log_debug, log_warning


@dataclass(frozen=True, slots=True)
class PropertyInfo:
    """单个指标属性的描述.

    Attributes:
        property_id: 外部时序系统中的指标键.
        temporal: 是否支持按时间区间查询.
        point_in_time: 是否支持时间点查询.

    """

    property_id: str
    temporal: bool = False
    point_in_time: bool = True


ComponentPropertyInfoMap = Mapping[str, Mapping[str, PropertyInfo]]


class StreamProvider(Protocol):
    """读取监控数据流的协作方."""

    def read_from(self, source: str) -> IO[str]:
        """按请求描述打开数据流."""
        ...


class MonitoringHostProvider(Protocol):
    """解析监控采集主机的协作方."""

    def get_collector_host_name(self, cluster_name: str) -> str | None:
        """返回集群对应的监控采集主机名."""
        ...

    def is_collector_host_live(self, cluster_name: str) -> bool:
        """采集主机是否存活."""
        ...


class MetricPropertyProvider(ABC):
    """监控指标属性提供者抽象基类.

    基类负责定位采集主机并打开指标数据流,解析与缓存由外部实现负责;
    子类只需告知如何从资源中解析主机名、组件名以及需要查询的监控集群名称.
    """

    def __init__(
        self,
        component_property_info_map: ComponentPropertyInfoMap,
        stream_provider: StreamProvider,
        host_provider: MonitoringHostProvider,
        cluster_name_property_id: str,
        host_name_property_id: str,
        component_name_property_id: str,
        *,
        cluster_name_map: Mapping[str, str] = MONITORING_CLUSTER_NAME_MAP,
    ) -> None:
        self.component_property_info_map = component_property_info_map
        self.stream_provider = stream_provider
        self.host_provider = host_provider
        self._cluster_name_property_id = cluster_name_property_id
        self._host_name_property_id = host_name_property_id
        self._component_name_property_id = component_name_property_id
        self._cluster_name_map = cluster_name_map

    @property
    def cluster_name_property_id(self) -> str:
        return self._cluster_name_property_id

    @property
    def host_name_property_id(self) -> str:
        return self._host_name_property_id

    @property
    def component_name_property_id(self) -> str:
        return self._component_name_property_id

    @property
    def cluster_name_map(self) -> Mapping[str, str]:
        """组件名称到监控集群名称的只读映射."""
        return self._cluster_name_map

    def get_cluster_name(self, resource: Resource) -> str | None:
        return cast("str | None", resource.get_property_value(self._cluster_name_property_id))

    def get_component_property_infos(self, resource: Resource) -> Mapping[str, PropertyInfo]:
        """返回资源所属组件已注册的指标属性,未知组件返回空映射."""
        component_name = self.get_component_name(resource)
        property_infos = self.component_property_info_map.get(component_name) if component_name else None
        if property_infos is None:
            log_debug("组件未注册指标属性", module="metrics", component_name=component_name)
            return MappingProxyType({})
        return property_infos

    def get_collector_host_name(self, resource: Resource) -> str | None:
        """资源所属集群的监控采集主机,集群未知或采集主机不存活时返回 None."""
        cluster_name = self.get_cluster_name(resource)
        if cluster_name is None:
            return None
        if not self.host_provider.is_collector_host_live(cluster_name):
            log_warning("监控采集主机不可用", module="metrics", cluster_name=cluster_name)
            return None
        return self.host_provider.get_collector_host_name(cluster_name)

    def build_metrics_source(
        self,
        resource: Resource,
        collector_host: str,
        property_infos: Mapping[str, PropertyInfo],
    ) -> str:
        """拼装时间点查询的 rrd 请求地址.

        `c` 为监控集群名称(逗号分隔,忽略 None),`h` 为主机名,`m` 为指标键.
        """
        cluster_names = self.get_monitoring_cluster_names(resource, self.get_cluster_name(resource))
        query = {
            "c": ",".join(sorted(name for name in cluster_names if name)),
            "h": self.get_host_name(resource) or "",
            "m": ",".join(sorted(info.property_id for info in property_infos.values())),
            "e": "now",
            "pt": "true",
        }
        return f"http://{collector_host}/cgi-bin/rrd.py?{urlencode(query, safe=',')}"

    def open_metrics_stream(self, resource: Resource) -> IO[str] | None:
        """打开资源指标数据流;组件无指标或采集主机不可用时返回 None."""
        property_infos = self.get_component_property_infos(resource)
        if not property_infos:
            return None
        collector_host = self.get_collector_host_name(resource)
        if collector_host is None:
            return None
        source = self.build_metrics_source(resource, collector_host, property_infos)
        log_debug("读取监控指标", module="metrics", source=source)
        return self.stream_provider.read_from(source)

    @abstractmethod
    def get_host_name(self, resource: Resource) -> str | None:
        """解析资源所在主机名."""

    @abstractmethod
    def get_component_name(self, resource: Resource) -> str | None:
        """解析资源的组件名称."""

    @abstractmethod
    def get_monitoring_cluster_names(self, resource: Resource, cluster_name: str | None) -> set[str | None]:
        """解析需要查询的监控集群名称集合."""


__all__ = [
    "ComponentPropertyInfoMap",
    "MetricPropertyProvider",
    "MonitoringHostProvider",
    "PropertyInfo",
    "StreamProvider",
]
