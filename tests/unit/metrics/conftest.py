"""监控指标适配测试 fixtures."""

import io

import pytest

from vantage.core.resources import Resource, ResourceType
from vantage.metrics.constants import (
    HOST_COMPONENT_CLUSTER_NAME_PROPERTY_ID,
    HOST_COMPONENT_COMPONENT_NAME_PROPERTY_ID,
    HOST_COMPONENT_HOST_NAME_PROPERTY_ID,
)


class _StaticStreamProvider:
    def __init__(self) -> None:
        self.sources: list[str] = []

    def read_from(self, source: str):
        self.sources.append(source)
        return io.StringIO('{"metrics": []}')


class _StaticHostProvider:
    def __init__(self) -> None:
        self.live = True
        self.checked: list[str] = []

    def get_collector_host_name(self, cluster_name: str) -> str | None:
        return f"collector.{cluster_name}.example.com"

    def is_collector_host_live(self, cluster_name: str) -> bool:
        self.checked.append(cluster_name)
        return self.live


@pytest.fixture
def stream_provider():
    return _StaticStreamProvider()


@pytest.fixture
def host_provider():
    return _StaticHostProvider()


@pytest.fixture
def make_host_component():
    def _make(**properties: object) -> Resource:
        mapping = {
            "cluster_name": HOST_COMPONENT_CLUSTER_NAME_PROPERTY_ID,
            "host_name": HOST_COMPONENT_HOST_NAME_PROPERTY_ID,
            "component_name": HOST_COMPONENT_COMPONENT_NAME_PROPERTY_ID,
        }
        return Resource(
            ResourceType.HOST_COMPONENT,
            {mapping[key]: value for key, value in properties.items()},
        )

    return _make
