"""Vantage - Flask 应用初始化.

集群管理控制台后端的视图权限接口与主机组件指标适配.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from flask import Flask, jsonify, request
from flask_cors import CORS

from vantage.api import register_api_blueprints
from vantage.constants import HttpHeaders
from vantage.core.registry import init_resource_framework
from vantage.infra.logging.request_middleware import register_request_logging
from vantage.settings import Settings
from vantage.utils.response_utils import unified_error_response
from vantage.utils.structlog_config import ErrorContext, configure_structlog, log_info

if TYPE_CHECKING:
    from flask.typing import ResponseReturnValue

    from vantage.core.requests import ResourceRequestHandler
    from vantage.core.resources import ResourceInstanceFactory

cors = CORS()


def create_app(
    *,
    settings: Settings | None = None,
    request_handler: ResourceRequestHandler | None = None,
    resource_factory: ResourceInstanceFactory | None = None,
) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.
        request_handler: 通用资源请求处理器,未提供时资源类接口返回 502.
        resource_factory: 资源句柄工厂,未提供时使用默认实现.

    Returns:
        Flask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 初始化扩展
    initialize_extensions(app, resolved_settings)

    # 注册资源框架协作方
    init_resource_framework(app, request_handler=request_handler, resource_factory=resource_factory)

    # 注册蓝图
    register_api_blueprints(app, resolved_settings)

    # 配置日志
    configure_logging(app)

    # 配置统一日志系统
    configure_structlog(app)
    register_request_logging(app)

    # 设置全局日志级别
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    # 注册全局错误处理器
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        payload, status_code = unified_error_response(error, context=ErrorContext(error, request))
        return jsonify(payload), status_code

    log_info("应用初始化完成", module="system", environment=resolved_settings.environment)
    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    """
    app.config.from_mapping(settings.to_flask_config())
    app.config.setdefault("APPLICATION_ROOT", "/")


def initialize_extensions(app: Flask, settings: Settings) -> None:
    """初始化 Flask 扩展."""
    allowed_origins = list(settings.cors_origins)
    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": allowed_origins,
                "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                "allow_headers": [
                    HttpHeaders.CONTENT_TYPE,
                    HttpHeaders.AUTHORIZATION,
                    HttpHeaders.X_REQUEST_ID,
                    HttpHeaders.X_REQUESTED_BY,
                ],
                "expose_headers": [HttpHeaders.X_REQUEST_ID],
                "supports_credentials": True,
            },
        },
    )


def configure_logging(app: Flask) -> None:
    """调试与测试环境之外,额外把 Flask 自身日志写入滚动文件."""
    if app.debug or app.testing:
        return

    level = getattr(logging, app.config["LOG_LEVEL"], logging.INFO)
    log_path = Path(app.config["LOG_FILE"])
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_path,
        maxBytes=app.config["LOG_MAX_SIZE"],
        backupCount=app.config["LOG_BACKUP_COUNT"],
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    handler.setLevel(level)
    app.logger.addHandler(handler)
    app.logger.setLevel(level)
    app.logger.info("Vantage 应用启动")


__all__ = ["create_app"]
