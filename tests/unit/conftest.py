# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供环境变量隔离相关的通用 fixtures。
"""

import pytest


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    for name in ("FLASK_DEBUG", "API_V1_DOCS_ENABLED", "CORS_ORIGINS", "LOG_LEVEL", "ENABLE_DEBUG_LOG"):
        monkeypatch.delenv(name, raising=False)
