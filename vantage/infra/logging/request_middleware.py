"""请求上下文绑定与请求完成事件.

- 每个请求持有一个 request_id,通过 contextvars 供日志与错误封套读取,并回写到响应头.
- 请求结束时输出一条 `http_request_completed` 事件,字段固定,便于按接口聚合.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final
from uuid import uuid4

from flask import Flask, g, request

from vantage.constants import HttpHeaders, HttpStatus
from vantage.utils.logging.context_vars import request_id_var
from vantage.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from contextvars import Token

    from flask import Response

REQUEST_ID_PREFIX: Final[str] = "req_"
_ACCEPTED_REQUEST_ID = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.:-]{0,127}")


@dataclass(slots=True)
class RequestLogState:
    """单个请求的日志状态,保存在 `flask.g` 上."""

    request_id: str
    token: Token[str | None]
    started_at: float

    def elapsed_ms(self) -> int:
        return round((time.perf_counter() - self.started_at) * 1000)


def new_request_id() -> str:
    return f"{REQUEST_ID_PREFIX}{uuid4().hex}"


def accept_request_id(raw_value: str | None) -> str | None:
    """校验调用方传入的 X-Request-ID,不合规时返回 None 由服务端重新生成."""
    candidate = (raw_value or "").strip()
    if _ACCEPTED_REQUEST_ID.fullmatch(candidate) is None:
        return None
    return candidate


def _current_state() -> RequestLogState | None:
    return g.get("request_log_state")


def register_request_logging(app: Flask) -> None:
    """注册 request_id 绑定、响应头回写与请求完成事件."""

    @app.before_request
    def _open_request_log_state() -> None:
        request_id = accept_request_id(request.headers.get(HttpHeaders.X_REQUEST_ID)) or new_request_id()
        g.request_log_state = RequestLogState(
            request_id=request_id,
            token=request_id_var.set(request_id),
            started_at=time.perf_counter(),
        )

    @app.after_request
    def _log_request_completed(response: Response) -> Response:
        state = _current_state()
        request_id = state.request_id if state else (request_id_var.get() or new_request_id())
        response.headers.setdefault(HttpHeaders.X_REQUEST_ID, request_id)

        status_code = response.status_code
        url_rule = request.url_rule
        get_logger("http").info(
            "http_request_completed",
            module="http",
            action=f"{request.method} {request.path}",
            status_code=status_code,
            outcome="success" if status_code < HttpStatus.BAD_REQUEST else "error",
            duration_ms=state.elapsed_ms() if state else None,
            route=url_rule.rule if url_rule else None,
            endpoint=request.endpoint,
        )
        return response

    @app.teardown_request
    def _close_request_log_state(_exc: BaseException | None) -> None:
        state = _current_state()
        if state is None:
            return
        # token 只能在创建它的上下文中 reset
        try:
            request_id_var.reset(state.token)
        except (RuntimeError, ValueError):
            request_id_var.set(None)
        g.pop("request_log_state", None)


__all__ = ["RequestLogState", "accept_request_id", "new_request_id", "register_request_logging"]
