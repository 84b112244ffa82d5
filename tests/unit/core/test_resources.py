from types import MappingProxyType

import pytest

from vantage.core.resources import DefaultResourceInstanceFactory, Resource, ResourceInstance, ResourceType


@pytest.mark.unit
def test_resource_type_values_match_resource_names() -> None:
    assert ResourceType.VIEW.value == "View"
    assert ResourceType.VIEW_VERSION.value == "ViewVersion"
    assert ResourceType.VIEW_INSTANCE.value == "ViewInstance"
    assert ResourceType.VIEW_PRIVILEGE.value == "ViewPrivilege"
    assert ResourceType.HOST_COMPONENT.value == "HostComponent"
    assert len(ResourceType) == 5


@pytest.mark.unit
def test_default_factory_copies_ids_into_read_only_mapping() -> None:
    ids = {ResourceType.VIEW: "FILES", ResourceType.VIEW_PRIVILEGE: None}

    instance = DefaultResourceInstanceFactory().create_resource(ResourceType.VIEW_PRIVILEGE, ids)
    ids[ResourceType.VIEW] = "changed"

    assert instance.resource_type is ResourceType.VIEW_PRIVILEGE
    assert instance.ids[ResourceType.VIEW] == "FILES"
    assert isinstance(instance.ids, MappingProxyType)
    with pytest.raises(TypeError):
        instance.ids[ResourceType.VIEW] = "x"  # type: ignore[index]


@pytest.mark.unit
def test_resource_instance_is_collection_when_primary_id_missing() -> None:
    collection = ResourceInstance(ResourceType.VIEW_PRIVILEGE, MappingProxyType({ResourceType.VIEW_PRIVILEGE: None}))
    item = ResourceInstance(ResourceType.VIEW_PRIVILEGE, MappingProxyType({ResourceType.VIEW_PRIVILEGE: "42"}))

    assert collection.is_collection is True
    assert item.is_collection is False
    assert item.to_dict() == {"ViewPrivilege": "42"}


@pytest.mark.unit
def test_resource_get_property_value_returns_none_when_absent() -> None:
    resource = Resource(ResourceType.HOST_COMPONENT, {"HostRoles/host_name": "h1"})

    assert resource.get_property_value("HostRoles/host_name") == "h1"
    assert resource.get_property_value("HostRoles/component_name") is None
    assert resource.property_ids == frozenset({"HostRoles/host_name"})
