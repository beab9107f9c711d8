"""
Record Client 接口：域无关的远程记录存储抽象

app 层只依赖 RecordClient；具体实现见 core.records.http（远程后端）
和 core.records.memory（进程内实现，测试替身）。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field


class RecordResult(BaseModel):
    """批量写操作中单条记录的结果"""
    success: bool
    data: Optional[Dict[str, Any]] = None
    message: Optional[str] = None


class RecordResponse(BaseModel):
    """
    后端统一响应

    读操作使用 data（fetch 为列表，按 ID 读取为单条记录）；
    写操作使用 results，每条记录各自成功或失败。
    """
    success: bool
    data: Optional[Union[List[Dict[str, Any]], Dict[str, Any]]] = None
    results: Optional[List[RecordResult]] = None
    message: Optional[str] = None
    total: Optional[int] = Field(default=None)

    @classmethod
    def failure(cls, message: str) -> "RecordResponse":
        return cls(success=False, message=message)

    def split_results(self) -> Tuple[List[RecordResult], List[RecordResult]]:
        """拆分为 (成功, 失败) 两组"""
        results = self.results or []
        successful = [r for r in results if r.success]
        failed = [r for r in results if not r.success]
        return successful, failed


class RecordClient(ABC):
    """远程记录存储客户端接口

    所有方法都是协程；params 为线上描述字典（见 core.records.query）。
    """

    @abstractmethod
    async def fetch_records(self, table: str, params: Optional[Dict[str, Any]] = None) -> RecordResponse:
        """按描述查询记录列表"""

    @abstractmethod
    async def get_record_by_id(
        self, table: str, record_id: int, params: Optional[Dict[str, Any]] = None
    ) -> RecordResponse:
        """按 ID 读取单条记录"""

    @abstractmethod
    async def create_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        """创建记录，params: {"records": [...]}"""

    @abstractmethod
    async def update_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        """更新记录，params: {"records": [{"Id": ..., ...}], "ifMatch": [...]}"""

    @abstractmethod
    async def delete_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        """删除记录，params: {"RecordIds": [...]}"""

    async def aclose(self) -> None:
        """释放底层资源（默认无操作）"""
