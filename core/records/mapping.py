"""
core/records/mapping.py

声明式字段映射

每个实体用一张 FieldMap 描述 后端列名 <-> UI 字段 的对应关系、
缺省值和编解码函数；读写两个方向都由同一张表驱动，
不再在每个服务里手写重复的映射代码。
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from core.records.query import QueryParams, Condition, WhereGroup, OrderBy

logger = logging.getLogger(__name__)


# ============== 编解码函数 ==============

def decode_json_list(value: Any) -> List[Any]:
    """JSON 字符串 -> 列表；已解码的列表原样返回，无法解析时返回空列表"""
    if isinstance(value, list):
        return value
    if not value:
        return []
    try:
        decoded = json.loads(value)
    except (TypeError, ValueError):
        logger.warning(f"Discarding undecodable JSON list value: {value!r}")
        return []
    return decoded if isinstance(decoded, list) else []


def encode_json_list(value: Any) -> str:
    return json.dumps(list(value or []))


def lookup_id(value: Any) -> Any:
    """查找字段可能是原始 ID，也可能是后端展开的 {Id, Name} 对象"""
    if isinstance(value, dict):
        return value.get("Id")
    return value


def lookup_name(value: Any) -> Any:
    if isinstance(value, dict):
        return value.get("Name")
    return None


def to_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def to_bool(value: Any) -> bool:
    """布尔字段可能以字符串返回，如 "false" / "0" / "no" """
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y", "on")
    return bool(value)


# ============== 字段表 ==============

@dataclass(frozen=True)
class FieldSpec:
    """
    单个字段的映射声明

    Examples:
        FieldSpec("guest_name", "guest_name_c", default="")
        FieldSpec("notes", "notes_c", default_factory=list,
                  decode=decode_json_list, encode=encode_json_list)
    """
    attr: str
    column: str
    default: Any = None
    default_factory: Optional[Callable[[], Any]] = None
    decode: Optional[Callable[[Any], Any]] = None
    encode: Optional[Callable[[Any], Any]] = None
    # 只读派生字段可以与其他字段共用同一列（如 assigned_to / assigned_name）
    writable: bool = True

    def default_value(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def read(self, record: Mapping[str, Any]) -> Any:
        value = record.get(self.column)
        if value is None or value == "":
            # 查找字段缺失时 decode 仍有机会给出派生值
            return self.default_value()
        if self.decode is not None:
            value = self.decode(value)
        return self.default_value() if value is None else value

    def write(self, value: Any) -> Any:
        if self.encode is not None:
            return self.encode(value)
        return value


class FieldMap:
    """一张表的完整字段映射"""

    def __init__(self, table: str, specs: Iterable[FieldSpec],
                 id_column: str = "Id", id_attr: str = "id"):
        self.table = table
        self.specs: List[FieldSpec] = list(specs)
        self.id_column = id_column
        self.id_attr = id_attr
        self._by_attr: Dict[str, FieldSpec] = {}
        for spec in self.specs:
            # 同名属性以第一个声明为准（写方向）
            self._by_attr.setdefault(spec.attr, spec)

    def spec(self, attr: str) -> FieldSpec:
        return self._by_attr[attr]

    def column(self, attr: str) -> str:
        return self._by_attr[attr].column

    def columns(self, attrs: Optional[Iterable[str]] = None) -> List[str]:
        """查询用的列清单（含 ID 列，去重且保持顺序）"""
        specs = self.specs if attrs is None else [self._by_attr[a] for a in attrs]
        result = [self.id_column]
        for spec in specs:
            if spec.column not in result:
                result.append(spec.column)
        return result

    def query(self, attrs: Optional[Iterable[str]] = None,
              where: Optional[List[Condition]] = None,
              where_groups: Optional[List[WhereGroup]] = None,
              order_by: Optional[List[OrderBy]] = None,
              limit: Optional[int] = None, offset: int = 0) -> QueryParams:
        return QueryParams(
            fields=self.columns(attrs),
            where=list(where or []),
            where_groups=list(where_groups or []),
            order_by=list(order_by or []),
            limit=limit,
            offset=offset,
        )

    def from_record(self, record: Mapping[str, Any],
                    attrs: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """后端记录 -> UI 字段字典，缺失字段以缺省值填充"""
        wanted = None if attrs is None else set(attrs)
        result: Dict[str, Any] = {self.id_attr: record.get(self.id_column)}
        for spec in self.specs:
            if wanted is not None and spec.attr not in wanted:
                continue
            result[spec.attr] = spec.read(record)
        return result

    def to_record(self, data: Mapping[str, Any], partial: bool = False,
                  record_id: Any = None) -> Dict[str, Any]:
        """
        UI 字段字典 -> 后端记录

        Args:
            data: 以 UI 属性名为键的数据
            partial: True 时只写出 data 中出现的字段；否则写出全部可写字段
            record_id: 更新时附带的记录 ID
        """
        record: Dict[str, Any] = {}
        if record_id is not None:
            record[self.id_column] = record_id
        for attr, spec in self._by_attr.items():
            if not spec.writable:
                continue
            if attr in data:
                record[spec.column] = spec.write(data[attr])
            elif not partial:
                record[spec.column] = spec.write(spec.default_value())
        return record
