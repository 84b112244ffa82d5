from types import MappingProxyType

import pytest
from flask import Flask, request

from vantage.core.requests import RequestType, UnavailableResourceRequestHandler, UriContext
from vantage.core.resources import ResourceInstance, ResourceType
from vantage.errors import ExternalServiceError


@pytest.mark.unit
def test_uri_context_from_request_keeps_raw_query_values() -> None:
    app = Flask(__name__)
    with app.test_request_context("/api/v1/views/V1/privileges?fields=a&fields=b&page_size=x&from=start"):
        uri_context = UriContext.from_request(request)

    assert uri_context.path == "/api/v1/views/V1/privileges"
    assert uri_context.query["fields"] == ("a", "b")
    assert uri_context.fields == "a"
    assert uri_context.page_size == "x"
    assert uri_context.page_from == "start"
    assert uri_context.page_to is None
    assert uri_context.sort_by is None


@pytest.mark.unit
def test_unavailable_handler_raises_external_service_error() -> None:
    resource = ResourceInstance(ResourceType.VIEW_PRIVILEGE, MappingProxyType({ResourceType.VIEW_PRIVILEGE: None}))
    uri_context = UriContext(path="/api/v1/views", url="http://localhost/api/v1/views")

    with pytest.raises(ExternalServiceError) as exc_info:
        UnavailableResourceRequestHandler().handle({}, None, uri_context, RequestType.GET, resource)

    error = exc_info.value
    assert error.status_code == 502
    assert error.message_key == "RESOURCE_HANDLER_UNAVAILABLE"
    assert error.extra == {"request_type": "GET", "resource_type": "ViewPrivilege", "path": "/api/v1/views"}


@pytest.mark.unit
def test_request_type_covers_privilege_operations() -> None:
    assert [member.value for member in RequestType] == ["GET", "POST", "PUT", "DELETE"]
