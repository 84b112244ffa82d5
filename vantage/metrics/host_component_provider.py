"""主机组件的监控指标属性提供者."""

from __future__ import annotations

from typing import cast

from vantage.core.resources import Resource
from vantage.metrics.property_provider import MetricPropertyProvider


class HostComponentMetricPropertyProvider(MetricPropertyProvider):
    """为主机组件资源解析主机名、组件名与监控集群名称.

    三个方法都是简单的字段投影/查表,属性缺失时返回 None 而不是抛出异常.
    """

    def get_host_name(self, resource: Resource) -> str | None:
        return cast("str | None", resource.get_property_value(self.host_name_property_id))

    def get_component_name(self, resource: Resource) -> str | None:
        return cast("str | None", resource.get_property_value(self.component_name_property_id))

    def get_monitoring_cluster_names(self, resource: Resource, cluster_name: str | None) -> set[str | None]:
        # cluster_name 不参与查表,监控集群只由组件类型决定
        return {self.cluster_name_map.get(cast("str", self.get_component_name(resource)))}


__all__ = ["HostComponentMetricPropertyProvider"]
