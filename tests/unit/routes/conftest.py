# tests/unit/routes/conftest.py
"""API 契约测试专用 fixtures.

提供 test_client 以及记录委派调用的资源请求处理器。
"""

from dataclasses import dataclass, field
from typing import Any

import pytest

from vantage import create_app
from vantage.settings import Settings


@dataclass
class RecordedCall:
    headers: dict[str, str]
    body: str | None
    uri_context: Any
    request_type: Any
    resource: Any


@dataclass
class RecordingRequestHandler:
    """记录每次委派并返回预设响应的资源请求处理器."""

    response: Any = field(default_factory=lambda: ({"items": []}, 200))
    error: Exception | None = None
    calls: list[RecordedCall] = field(default_factory=list)

    def handle(self, headers, body, uri_context, request_type, resource):
        self.calls.append(
            RecordedCall(
                headers=dict(headers),
                body=body,
                uri_context=uri_context,
                request_type=request_type,
                resource=resource,
            ),
        )
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_call(self) -> RecordedCall:
        assert self.calls, "资源请求处理器未被调用"
        return self.calls[-1]


@pytest.fixture(scope="function")
def request_handler():
    return RecordingRequestHandler()


@pytest.fixture(scope="function")
def app(monkeypatch, request_handler):
    """创建测试应用实例."""
    monkeypatch.setenv("FLASK_ENV", "testing")

    settings = Settings.load()
    app = create_app(settings=settings, request_handler=request_handler)
    app.config["TESTING"] = True
    return app


@pytest.fixture(scope="function")
def client(app):
    """创建测试客户端."""
    return app.test_client()
