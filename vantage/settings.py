"""Vantage 运行时配置.

所有环境变量只在这里读取; `create_app(settings=...)` 与各模块只消费 `Settings`.
`.env` 文件(可选)由 python-dotenv 在 `Settings.load()` 时注入,不覆盖已有环境变量.
"""

from __future__ import annotations

import json
import logging
import secrets
from pathlib import Path
from typing import Final

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parent.parent
DOTENV_PATH: Final[Path] = PROJECT_ROOT / ".env"

APP_NAME: Final[str] = "Vantage"
APP_VERSION: Final[str] = "0.3.0"

PRODUCTION: Final[str] = "production"
LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

_MIB = 1024 * 1024


def _split_origins(raw: str) -> tuple[str, ...]:
    """CORS 来源支持 JSON 数组或逗号分隔字符串."""
    text = raw.strip()
    if text.startswith("["):
        items = json.loads(text)
        if not isinstance(items, list):
            raise ValueError("CORS_ORIGINS 必须为 JSON 数组或逗号分隔字符串")
    else:
        items = text.split(",")
    return tuple(origin for origin in (str(item).strip() for item in items) if origin)


class Settings(BaseSettings):
    """应用配置.

    生产环境(`FLASK_ENV=production`)下:
    - 未显式设置 `FLASK_DEBUG` 时关闭调试
    - 缺少 `SECRET_KEY` 直接失败,非生产环境则随机生成
    - 未显式设置 `API_V1_DOCS_ENABLED` 时关闭 Swagger UI
    """

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
        # CORS_ORIGINS 交给 validator 解析,不做自动 JSON 解码
        enable_decoding=False,
    )

    environment: str = Field(default="development", validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default=APP_NAME, validation_alias="APP_NAME")
    app_version: str = APP_VERSION
    secret_key: str = Field(default="", validation_alias="SECRET_KEY")
    max_content_length_bytes: int = Field(default=16 * _MIB, validation_alias="MAX_CONTENT_LENGTH")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str = Field(default="userdata/logs/app.log", validation_alias="LOG_FILE")
    log_max_size_bytes: int = Field(default=10 * _MIB, validation_alias="LOG_MAX_SIZE")
    log_backup_count: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")
    enable_debug_log: bool = Field(default=False, validation_alias="ENABLE_DEBUG_LOG")

    cors_origins: tuple[str, ...] = Field(
        default=("http://localhost:8080", "http://127.0.0.1:8080"),
        validation_alias="CORS_ORIGINS",
    )
    api_v1_docs_enabled: bool = Field(default=True, validation_alias="API_V1_DOCS_ENABLED")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return _split_origins(value)
        if isinstance(value, (list, tuple, set)):
            return tuple(origin for origin in (str(item).strip() for item in value) if origin)
        return value

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == PRODUCTION

    @classmethod
    def load(cls) -> Settings:
        """读取 `.env`(若存在)与环境变量并完成校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    def to_flask_config(self) -> dict[str, object]:
        """映射为 `app.config` 键值."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "MAX_CONTENT_LENGTH": self.max_content_length_bytes,
            "LOG_LEVEL": self.log_level,
            "LOG_FILE": self.log_file,
            "LOG_MAX_SIZE": self.log_max_size_bytes,
            "LOG_BACKUP_COUNT": self.log_backup_count,
            "ENABLE_DEBUG_LOG": self.enable_debug_log,
            "CORS_ORIGINS": ",".join(self.cors_origins),
            "API_V1_DOCS_ENABLED": self.api_v1_docs_enabled,
        }

    @model_validator(mode="after")
    def _resolve_environment_defaults(self) -> Settings:
        explicit = self.model_fields_set
        production = self.is_production

        # frozen 模型只能在校验阶段通过 object.__setattr__ 回填派生值
        if "debug" not in explicit:
            object.__setattr__(self, "debug", not production)
        if production and "api_v1_docs_enabled" not in explicit:
            object.__setattr__(self, "api_v1_docs_enabled", False)

        if not self.secret_key:
            if not self.debug:
                raise ValueError("SECRET_KEY environment variable must be set in production")
            object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
            logger.warning("未设置 SECRET_KEY,已为当前进程随机生成,生产环境请显式配置")

        problems = [
            message
            for message, failed in (
                ("MAX_CONTENT_LENGTH 必须为正整数(字节)", self.max_content_length_bytes <= 0),
                ("LOG_LEVEL 仅支持 DEBUG/INFO/WARNING/ERROR/CRITICAL", self.log_level not in LOG_LEVELS),
                ("LOG_MAX_SIZE 必须为正整数(字节)", self.log_max_size_bytes <= 0),
                ("LOG_BACKUP_COUNT 必须为非负整数", self.log_backup_count < 0),
            )
            if failed
        ]
        if problems:
            raise ValueError(f"配置校验失败: {'; '.join(problems)}")
        return self


__all__ = ["APP_NAME", "APP_VERSION", "Settings"]
