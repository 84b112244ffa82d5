"""监控指标相关常量.

组件名称到监控集群名称的映射在导入时构建一次,之后只读访问.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

HOST_COMPONENT_CLUSTER_NAME_PROPERTY_ID: Final[str] = "HostRoles/cluster_name"
HOST_COMPONENT_HOST_NAME_PROPERTY_ID: Final[str] = "HostRoles/host_name"
HOST_COMPONENT_COMPONENT_NAME_PROPERTY_ID: Final[str] = "HostRoles/component_name"

# 从节点类组件共享同一个监控集群
_SLAVES_CLUSTER_NAME: Final[str] = "HDPSlaves"

MONITORING_CLUSTER_NAME_MAP: Final[Mapping[str, str]] = MappingProxyType(
    {
        "NAMENODE": "HDPNameNode",
        "DATANODE": _SLAVES_CLUSTER_NAME,
        "JOBTRACKER": "HDPJobTracker",
        "TASKTRACKER": _SLAVES_CLUSTER_NAME,
        "RESOURCEMANAGER": "HDPResourceManager",
        "NODEMANAGER": _SLAVES_CLUSTER_NAME,
        "HISTORYSERVER": "HDPHistoryServer",
        "HBASE_MASTER": "HDPHBaseMaster",
        "HBASE_REGIONSERVER": _SLAVES_CLUSTER_NAME,
        "FLUME_SERVER": _SLAVES_CLUSTER_NAME,
        "JOURNALNODE": "HDPJournalNode",
        "NIMBUS": "HDPNimbus",
        "SUPERVISOR": "HDPSupervisor",
    }
)

__all__ = [
    "HOST_COMPONENT_CLUSTER_NAME_PROPERTY_ID",
    "HOST_COMPONENT_COMPONENT_NAME_PROPERTY_ID",
    "HOST_COMPONENT_HOST_NAME_PROPERTY_ID",
    "MONITORING_CLUSTER_NAME_MAP",
]
