"""
应用配置
从环境变量（前缀 HOTELOPS_）和 .env 读取
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "HotelOps"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 记录存储后端（未配置时服务走 fail-closed 路径）
    RECORD_API_URL: Optional[str] = None
    PROJECT_ID: Optional[str] = None
    PUBLIC_KEY: str = ""
    REQUEST_TIMEOUT: float = 30.0

    # 写入状态历史时记录的操作人
    ACTING_USER: str = "Current User"

    # 读-追加-写时附带 last_updated_c 前置条件，拒绝过期写入
    CONDITIONAL_WRITES: bool = False

    # UI toast 队列保留条数
    TOAST_HISTORY: int = 100

    model_config = SettingsConfigDict(
        env_prefix="HOTELOPS_", env_file=".env", case_sensitive=True, extra="ignore"
    )

    @property
    def backend_configured(self) -> bool:
        return bool(self.RECORD_API_URL and self.PROJECT_ID)


@lru_cache
def get_settings() -> Settings:
    return Settings()
