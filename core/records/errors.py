"""
记录层异常
"""


class RecordClientError(Exception):
    """后端传输或协议错误（连接失败、响应无法解析等）"""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class RecordNotFoundError(LookupError):
    """按 ID 查找的记录不存在"""

    entity = "Record"

    def __init__(self, record_id):
        self.record_id = record_id
        super().__init__(f"{self.entity} with ID {record_id} not found")
