"""
记录存储抽象层：客户端接口、查询描述、字段映射
"""
from core.records.client import RecordClient, RecordResponse, RecordResult
from core.records.errors import RecordClientError, RecordNotFoundError
from core.records.mapping import FieldMap, FieldSpec
from core.records.query import (
    Condition, FilterOperator, OrderBy, QueryParams, SortType, SubGroup, WhereGroup,
)

__all__ = [
    "RecordClient", "RecordResponse", "RecordResult",
    "RecordClientError", "RecordNotFoundError",
    "FieldMap", "FieldSpec",
    "Condition", "FilterOperator", "OrderBy", "QueryParams", "SortType", "SubGroup", "WhereGroup",
]
