"""API v1 query 参数解析工具.

约束:
- 仅用于 API 层的 query params(`request.args`)
- 通过 `flask_restx.reqparse.RequestParser` 声明并配合 `@ns.expect(parser)` 输出文档
- 资源委派类接口只声明参数,不调用 `parse_args`,取值与校验交给资源请求处理器
"""

from __future__ import annotations

from typing import Final

from flask_restx import reqparse

_DEFAULT_BUNDLE_ERRORS: Final[bool] = True


def new_parser(*, bundle_errors: bool = _DEFAULT_BUNDLE_ERRORS) -> reqparse.RequestParser:
    """构造统一配置的 RequestParser."""
    return reqparse.RequestParser(bundle_errors=bundle_errors)


def build_fields_parser(*, category: str, default_fields: str) -> reqparse.RequestParser:
    """声明字段过滤参数 `fields`."""
    parser = new_parser()
    parser.add_argument(
        "fields",
        type=str,
        location="args",
        default=default_fields,
        help=f"按属性过滤返回字段,例如 {category}/*",
    )
    return parser


def build_collection_parser(*, category: str, default_fields: str, default_sort: str) -> reqparse.RequestParser:
    """声明集合查询参数: fields/sortBy/page_size/from/to."""
    parser = build_fields_parser(category=category, default_fields=default_fields)
    parser.add_argument(
        "sortBy",
        type=str,
        location="args",
        default=default_sort,
        help="排序规则 (asc | desc)",
    )
    parser.add_argument(
        "page_size",
        type=int,
        location="args",
        default=10,
        help="分页响应中返回的资源数量",
    )
    parser.add_argument(
        "from",
        type=str,
        location="args",
        default="0",
        help='分页起点(包含). 取值为偏移量或 "start"',
    )
    parser.add_argument(
        "to",
        type=str,
        location="args",
        help='分页终点(包含). 取值为偏移量或 "end"',
    )
    return parser
