"""
core/records/query.py

记录查询描述结构

服务层用这些数据类构造查询，再通过 to_params() 渲染成
Record Client 的线上描述字典（fields / where / whereGroups / orderBy / pagingInfo）。
from_params() 用于反向解析（InMemoryRecordClient 执行查询时使用）。
"""
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum


class FilterOperator(str, Enum):
    """过滤操作符（线上名称）"""
    EQUAL_TO = "EqualTo"
    NOT_EQUAL_TO = "NotEqualTo"
    CONTAINS = "Contains"
    GREATER_THAN = "GreaterThan"
    GREATER_THAN_OR_EQUAL_TO = "GreaterThanOrEqualTo"
    LESS_THAN = "LessThan"
    LESS_THAN_OR_EQUAL_TO = "LessThanOrEqualTo"


class SortType(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass
class Condition:
    """
    单个过滤条件

    Examples:
        Condition("status_c", FilterOperator.EQUAL_TO, ["Available"])
        Condition("guest_name_c", FilterOperator.CONTAINS, ["smith"])
    """
    field_name: str
    operator: FilterOperator = FilterOperator.EQUAL_TO
    values: List[Any] = field(default_factory=list)

    def to_where(self) -> Dict[str, Any]:
        """渲染为顶层 where 条目（首字母大写的键名）"""
        return {
            "FieldName": self.field_name,
            "Operator": self.operator.value,
            "Values": list(self.values),
        }

    def to_group_condition(self) -> Dict[str, Any]:
        """渲染为 whereGroups 内的条件（小驼峰键名）"""
        return {
            "fieldName": self.field_name,
            "operator": self.operator.value,
            "values": list(self.values),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Condition":
        # 两种键名风格都接受
        return cls(
            field_name=data.get("FieldName", data.get("fieldName")),
            operator=FilterOperator(data.get("Operator", data.get("operator", "EqualTo"))),
            values=list(data.get("Values", data.get("values")) or []),
        )


@dataclass
class SubGroup:
    """条件子组，组内条件以 operator 连接（默认 AND）"""
    conditions: List[Condition] = field(default_factory=list)
    operator: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conditions": [c.to_group_condition() for c in self.conditions],
            "operator": self.operator,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubGroup":
        return cls(
            conditions=[Condition.from_dict(c) for c in data.get("conditions", [])],
            operator=data.get("operator", "") or "",
        )


@dataclass
class WhereGroup:
    """
    条件组，子组之间以 operator 连接

    Examples:
        WhereGroup.any_of(
            Condition("room_number_c", FilterOperator.CONTAINS, ["10"]),
            Condition("guest_name_c", FilterOperator.CONTAINS, ["10"]),
        )
    """
    sub_groups: List[SubGroup] = field(default_factory=list)
    operator: str = "OR"

    @classmethod
    def any_of(cls, *conditions: Condition) -> "WhereGroup":
        """每个条件单独成组，任一命中即可"""
        return cls(sub_groups=[SubGroup(conditions=[c]) for c in conditions], operator="OR")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operator": self.operator,
            "subGroups": [g.to_dict() for g in self.sub_groups],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WhereGroup":
        return cls(
            sub_groups=[SubGroup.from_dict(g) for g in data.get("subGroups", [])],
            operator=data.get("operator", "OR") or "OR",
        )


@dataclass
class OrderBy:
    field_name: str
    sort_type: SortType = SortType.ASC

    def to_dict(self) -> Dict[str, Any]:
        return {"fieldName": self.field_name, "sorttype": self.sort_type.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderBy":
        return cls(
            field_name=data["fieldName"],
            sort_type=SortType(str(data.get("sorttype", "ASC")).upper()),
        )


@dataclass
class QueryParams:
    """
    完整的查询描述

    where 中的条件以 AND 连接；whereGroups 各组之间也以 AND 连接。
    fields 只列出逻辑字段名，客户端不做类型校验。
    """
    fields: List[str] = field(default_factory=list)
    where: List[Condition] = field(default_factory=list)
    where_groups: List[WhereGroup] = field(default_factory=list)
    order_by: List[OrderBy] = field(default_factory=list)
    limit: Optional[int] = None
    offset: int = 0

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "fields": [{"field": {"Name": name}} for name in self.fields],
        }
        if self.where:
            params["where"] = [c.to_where() for c in self.where]
        if self.where_groups:
            params["whereGroups"] = [g.to_dict() for g in self.where_groups]
        if self.order_by:
            params["orderBy"] = [o.to_dict() for o in self.order_by]
        if self.limit is not None:
            params["pagingInfo"] = {"limit": self.limit, "offset": self.offset}
        return params

    @classmethod
    def from_params(cls, params: Optional[Dict[str, Any]]) -> "QueryParams":
        params = params or {}
        paging = params.get("pagingInfo") or {}
        return cls(
            fields=[f["field"]["Name"] for f in params.get("fields", [])],
            where=[Condition.from_dict(c) for c in params.get("where", [])],
            where_groups=[WhereGroup.from_dict(g) for g in params.get("whereGroups", [])],
            order_by=[OrderBy.from_dict(o) for o in params.get("orderBy", [])],
            limit=paging.get("limit"),
            offset=paging.get("offset", 0) or 0,
        )
