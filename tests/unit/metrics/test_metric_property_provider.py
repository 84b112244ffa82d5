import pytest
from structlog.testing import capture_logs

from vantage.metrics import HostComponentMetricPropertyProvider, MetricPropertyProvider, PropertyInfo
from vantage.metrics.constants import (
    HOST_COMPONENT_CLUSTER_NAME_PROPERTY_ID,
    HOST_COMPONENT_COMPONENT_NAME_PROPERTY_ID,
    HOST_COMPONENT_HOST_NAME_PROPERTY_ID,
    MONITORING_CLUSTER_NAME_MAP,
)

NAMENODE_PROPERTY_INFOS = {
    "metrics/dfs/FSNamesystem/CapacityUsed": PropertyInfo("dfs.FSNamesystem.CapacityUsed", temporal=True),
    "metrics/jvm/memHeapUsedM": PropertyInfo("jvm.JvmMetrics.MemHeapUsedM", temporal=True, point_in_time=False),
}


@pytest.fixture
def provider(stream_provider, host_provider) -> HostComponentMetricPropertyProvider:
    return HostComponentMetricPropertyProvider(
        {"NAMENODE": NAMENODE_PROPERTY_INFOS},
        stream_provider,
        host_provider,
        HOST_COMPONENT_CLUSTER_NAME_PROPERTY_ID,
        HOST_COMPONENT_HOST_NAME_PROPERTY_ID,
        HOST_COMPONENT_COMPONENT_NAME_PROPERTY_ID,
    )


@pytest.mark.unit
def test_metric_property_provider_is_abstract(stream_provider, host_provider) -> None:
    with pytest.raises(TypeError):
        MetricPropertyProvider(  # type: ignore[abstract]
            {},
            stream_provider,
            host_provider,
            HOST_COMPONENT_CLUSTER_NAME_PROPERTY_ID,
            HOST_COMPONENT_HOST_NAME_PROPERTY_ID,
            HOST_COMPONENT_COMPONENT_NAME_PROPERTY_ID,
        )


@pytest.mark.unit
def test_metric_property_provider_exposes_property_ids(provider) -> None:
    assert provider.cluster_name_property_id == "HostRoles/cluster_name"
    assert provider.host_name_property_id == "HostRoles/host_name"
    assert provider.component_name_property_id == "HostRoles/component_name"
    assert provider.cluster_name_map is MONITORING_CLUSTER_NAME_MAP


@pytest.mark.unit
def test_metric_property_provider_returns_component_property_infos(provider, make_host_component) -> None:
    infos = provider.get_component_property_infos(make_host_component(component_name="NAMENODE"))

    assert infos == NAMENODE_PROPERTY_INFOS
    assert infos["metrics/jvm/memHeapUsedM"].point_in_time is False


@pytest.mark.unit
@pytest.mark.parametrize("component_name", ["DATANODE", None])
def test_metric_property_provider_unknown_component_has_no_property_infos(
    provider,
    make_host_component,
    component_name,
) -> None:
    resource = make_host_component(component_name=component_name) if component_name else make_host_component()

    assert dict(provider.get_component_property_infos(resource)) == {}


@pytest.mark.unit
def test_property_info_defaults() -> None:
    info = PropertyInfo("rpc.rpc.RpcQueueTimeAvgTime")

    assert info.temporal is False
    assert info.point_in_time is True


@pytest.mark.unit
def test_metric_property_provider_resolves_live_collector_host(provider, host_provider, make_host_component) -> None:
    resource = make_host_component(cluster_name="c1", component_name="NAMENODE")

    assert provider.get_collector_host_name(resource) == "collector.c1.example.com"
    assert host_provider.checked == ["c1"]


@pytest.mark.unit
def test_metric_property_provider_skips_dead_collector_host(provider, host_provider, make_host_component) -> None:
    host_provider.live = False
    resource = make_host_component(cluster_name="c1", component_name="NAMENODE")

    with capture_logs() as entries:
        assert provider.get_collector_host_name(resource) is None

    assert [entry["event"] for entry in entries] == ["监控采集主机不可用"]
    assert entries[0]["cluster_name"] == "c1"


@pytest.mark.unit
def test_metric_property_provider_without_cluster_name_has_no_collector(
    provider,
    host_provider,
    make_host_component,
) -> None:
    assert provider.get_collector_host_name(make_host_component(component_name="NAMENODE")) is None
    assert host_provider.checked == []


@pytest.mark.unit
def test_metric_property_provider_opens_point_in_time_stream(provider, stream_provider, make_host_component) -> None:
    resource = make_host_component(cluster_name="c1", host_name="nn1.example.com", component_name="NAMENODE")

    stream = provider.open_metrics_stream(resource)

    assert stream is not None
    assert stream.read() == '{"metrics": []}'
    assert stream_provider.sources == [
        "http://collector.c1.example.com/cgi-bin/rrd.py"
        "?c=HDPNameNode&h=nn1.example.com"
        "&m=dfs.FSNamesystem.CapacityUsed,jvm.JvmMetrics.MemHeapUsedM&e=now&pt=true",
    ]


@pytest.mark.unit
def test_metric_property_provider_stream_needs_metrics_and_live_collector(
    provider,
    stream_provider,
    host_provider,
    make_host_component,
) -> None:
    unregistered = make_host_component(cluster_name="c1", host_name="dn1", component_name="DATANODE")
    assert provider.open_metrics_stream(unregistered) is None

    host_provider.live = False
    namenode = make_host_component(cluster_name="c1", host_name="nn1", component_name="NAMENODE")
    assert provider.open_metrics_stream(namenode) is None

    assert stream_provider.sources == []
