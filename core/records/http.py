"""
远程 Record Client：基于 httpx.AsyncClient

路由约定：
    POST   {base}/tables/{table}/fetch           查询
    POST   {base}/tables/{table}/records/{id}    按 ID 读取
    POST   {base}/tables/{table}/records         创建
    PUT    {base}/tables/{table}/records         更新
    DELETE {base}/tables/{table}/records         删除
请求头携带 X-Project-Id 与 Bearer 公钥。
"""
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from core.records.client import RecordClient, RecordResponse
from core.records.errors import RecordClientError

logger = logging.getLogger(__name__)


class HttpRecordClient(RecordClient):
    """远程记录存储客户端"""

    def __init__(
        self,
        base_url: str,
        project_id: str,
        public_key: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"X-Project-Id": project_id, "Accept": "application/json"}
        if public_key:
            headers["Authorization"] = f"Bearer {public_key}"
        self.base_url = base_url.rstrip("/")
        self.project_id = project_id
        # transport 可注入，便于测试（httpx.MockTransport）
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def _send(self, method: str, path: str, payload: Optional[Dict[str, Any]]) -> RecordResponse:
        try:
            response = await self._client.request(method, path, json=payload or {})
        except httpx.HTTPError as e:
            raise RecordClientError(f"{method} {path} failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            if response.is_success:
                raise RecordClientError(
                    f"{method} {path} returned a non-JSON body", status_code=response.status_code
                )
            # 非 2xx 且无 JSON 主体：按后端失败处理
            return RecordResponse.failure(f"HTTP {response.status_code}: {response.reason_phrase}")

        if not response.is_success and isinstance(body, dict) and "success" not in body:
            message = body.get("message") or f"HTTP {response.status_code}"
            return RecordResponse.failure(message)

        try:
            return RecordResponse.model_validate(body)
        except ValidationError as e:
            raise RecordClientError(
                f"{method} {path} returned an unexpected body: {e}", status_code=response.status_code
            ) from e

    async def fetch_records(self, table: str, params: Optional[Dict[str, Any]] = None) -> RecordResponse:
        return await self._send("POST", f"/tables/{table}/fetch", params)

    async def get_record_by_id(
        self, table: str, record_id: int, params: Optional[Dict[str, Any]] = None
    ) -> RecordResponse:
        return await self._send("POST", f"/tables/{table}/records/{record_id}", params)

    async def create_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        return await self._send("POST", f"/tables/{table}/records", params)

    async def update_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        return await self._send("PUT", f"/tables/{table}/records", params)

    async def delete_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        return await self._send("DELETE", f"/tables/{table}/records", params)

    async def aclose(self) -> None:
        await self._client.aclose()
        logger.info(f"Closed record client for project {self.project_id}")
