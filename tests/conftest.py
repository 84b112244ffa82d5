import os

import pytest


os.environ.setdefault("SECRET_KEY", "test-secret-key")


@pytest.fixture(scope="session", autouse=True)
def _configure_structlog_once():
    """在任何测试前配置 structlog,避免首次日志调用在 capture_logs 内部重写处理器链."""
    from vantage.utils.structlog_config import structlog_config

    structlog_config.configure()
