"""HTTP头常量.

定义常用的HTTP头名称，避免魔法字符串。
"""


class HttpHeaders:
    """HTTP头常量."""

    CONTENT_TYPE = "Content-Type"
    AUTHORIZATION = "Authorization"
    X_REQUEST_ID = "X-Request-ID"
    X_REQUESTED_BY = "X-Requested-By"
