"""监控指标属性提供者."""

from .host_component_provider import HostComponentMetricPropertyProvider
from .property_provider import MetricPropertyProvider, MonitoringHostProvider, PropertyInfo, StreamProvider

__all__ = [
    "HostComponentMetricPropertyProvider",
    "MetricPropertyProvider",
    "MonitoringHostProvider",
    "PropertyInfo",
    "StreamProvider",
]
