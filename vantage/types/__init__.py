"""共享类型别名集合."""

from .structures import (
    ContextDict,
    ContextMapping,
    ContextValue,
    JsonDict,
    JsonValue,
    LoggerExtra,
    ScalarValue,
    StructlogEventDict,
)

__all__ = [
    "ContextDict",
    "ContextMapping",
    "ContextValue",
    "JsonDict",
    "JsonValue",
    "LoggerExtra",
    "ScalarValue",
    "StructlogEventDict",
]
