"""
实体服务基类

所有实体服务共享同一套失败处理约定：
1. 没有 Record Client 时提示 "Database connection not available" 并返回中性值
2. 后端返回 success=False 时记录日志、弹出 toast、返回中性值
3. 批量写入部分失败时只返回成功的记录，失败记录逐条提示
4. 意外异常在最外层捕获并记录
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, Iterable, List, Optional

from core.notification import Notifier
from core.records import FieldMap, QueryParams, RecordClient, RecordNotFoundError, RecordResult
from hotelops.config import Settings, get_settings

logger = logging.getLogger(__name__)

CLIENT_UNAVAILABLE = "Database connection not available"


def now_iso() -> str:
    return datetime.now().isoformat()


def service_call(action: str, default: Any = None):
    """
    服务方法装饰器：客户端检查 + 最外层异常兜底

    Args:
        action: 操作描述，用于日志和提示，如 "fetch bookings"
        default: 失败时的返回值；可调用对象（如 list）每次调用生成新值

    内部查询抛出的 RecordNotFoundError 记录日志并提示 "Failed to ..."；
    ValueError 视为前置条件不满足，提示其消息。
    两种情况都返回 default，不向调用方抛出。
    """

    def neutral():
        return default() if callable(default) else default

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            if self.client is None:
                logger.error(f"Cannot {action}: record client not initialized")
                self.notifier.error(CLIENT_UNAVAILABLE)
                return neutral()
            try:
                return await func(self, *args, **kwargs)
            except RecordNotFoundError as e:
                logger.warning(f"Cannot {action}: {e}")
                self.notifier.error(f"Failed to {action}")
                return neutral()
            except ValueError as e:
                logger.warning(f"Cannot {action}: {e}")
                self.notifier.error(str(e))
                return neutral()
            except Exception as e:
                logger.error(f"Error trying to {action}: {e}", exc_info=True)
                self.notifier.error(f"Failed to {action}")
                return neutral()

        return wrapper

    return decorator


@dataclass
class WriteOutcome:
    """批量写入结果：成功记录的数据和失败条数"""
    records: List[Dict[str, Any]] = field(default_factory=list)
    failed: int = 0

    @property
    def ok(self) -> bool:
        return self.failed == 0


class RecordService:
    """
    实体服务基类

    子类设置 fields（字段映射）；client 可以为 None（未配置后端）。
    """

    fields: FieldMap = None

    def __init__(self, client: Optional[RecordClient], notifier: Notifier,
                 settings: Optional[Settings] = None):
        self.client = client
        self.notifier = notifier
        self.settings = settings or get_settings()

    @property
    def acting_user(self) -> str:
        return self.settings.ACTING_USER

    @property
    def table(self) -> str:
        return self.fields.table

    # ============== 失败处理 ==============

    def _report_failure(self, action: str, message: Optional[str]) -> None:
        message = message or f"Failed to {action}"
        logger.error(f"Failed to {action}: {message}")
        self.notifier.error(message)

    def _report_failed_results(self, action: str, failed: Iterable[RecordResult]) -> int:
        count = 0
        for result in failed:
            count += 1
            self._report_failure(action, result.message)
        return count

    # ============== 后端请求 ==============

    async def _fetch_rows(self, query: QueryParams, action: str,
                          table: Optional[str] = None) -> List[Dict[str, Any]]:
        response = await self.client.fetch_records(table or self.table, query.to_params())
        if not response.success:
            self._report_failure(action, response.message)
            return []
        data = response.data
        if not isinstance(data, list):
            return []
        return data

    async def _get_row(self, record_id: Any, action: str,
                       fields: Optional[List[str]] = None,
                       table: Optional[str] = None,
                       notify: bool = True) -> Optional[Dict[str, Any]]:
        """按 ID 读取单条记录；notify=False 时缺失记录只写日志"""
        params = {"fields": [{"field": {"Name": c}} for c in (fields or self.fields.columns())]}
        response = await self.client.get_record_by_id(table or self.table, record_id, params)
        if not response.success:
            if notify:
                self._report_failure(action, response.message)
            else:
                logger.info(f"Could not {action}: {response.message}")
            return None
        if not isinstance(response.data, dict) or not response.data:
            return None
        return response.data

    async def _write(self, operation: str, records: List[Dict[str, Any]], action: str,
                     if_match: Optional[List[Dict[str, Any]]] = None,
                     table: Optional[str] = None) -> WriteOutcome:
        """create / update 批量写入"""
        params: Dict[str, Any] = {"records": records}
        if if_match:
            params["ifMatch"] = if_match
        send = self.client.create_record if operation == "create" else self.client.update_record
        response = await send(table or self.table, params)
        if not response.success:
            self._report_failure(action, response.message)
            return WriteOutcome(failed=len(records) or 1)

        successful, failed = response.split_results()
        failures = self._report_failed_results(action, failed)
        return WriteOutcome(
            records=[r.data or {} for r in successful],
            failed=failures,
        )

    async def _delete_ids(self, record_ids: List[Any], action: str,
                          table: Optional[str] = None, require_results: bool = True) -> bool:
        """
        批量删除；全部删除成功才返回 True

        require_results=False 时，后端只返回 success=True 而没有 results 也视为成功
        """
        response = await self.client.delete_record(table or self.table, {"RecordIds": record_ids})
        if not response.success:
            self._report_failure(action, response.message)
            return False
        if response.results is None and not require_results:
            return True
        successful, failed = response.split_results()
        self._report_failed_results(action, failed)
        return len(successful) == len(record_ids)

    def _if_match(self, record_id: Any, column: str, value: Any) -> Optional[List[Dict[str, Any]]]:
        """开启条件写入时生成 ifMatch 前置条件"""
        if not self.settings.CONDITIONAL_WRITES:
            return None
        return [{"Id": record_id, "FieldName": column, "Value": value}]
