"""
通知渠道接口：域无关的 toast 通知抽象

app 层通过实现 INotificationChannel 来对接具体渠道（UI toast 队列、日志等），
服务层只依赖 Notifier。
"""
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class ToastLevel(str, Enum):
    """通知级别"""
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class INotificationChannel(ABC):
    """通知渠道接口"""

    @abstractmethod
    def send(self, level: ToastLevel, message: str, extra: Optional[Dict] = None) -> bool:
        """发送通知

        Args:
            level: 通知级别
            message: 面向用户的提示文本
            extra: 扩展参数（如来源服务、关联记录 ID）

        Returns:
            是否发送成功
        """

    @abstractmethod
    def get_channel_type(self) -> str:
        """返回渠道类型标识，如 'toast', 'log'"""


class Notifier:
    """通知分发器

    由调用方显式构造并注入各服务：
        notifier = Notifier([InMemoryToastChannel(), LoggingChannel()])
        notifier.success("Booking updated successfully")

    单个渠道失败不影响其他渠道。
    """

    def __init__(self, channels: Optional[List[INotificationChannel]] = None):
        self._channels: Dict[str, INotificationChannel] = {}
        for channel in channels or []:
            self.register(channel)

    def register(self, channel: INotificationChannel) -> None:
        """注册通知渠道（同类型覆盖）"""
        self._channels[channel.get_channel_type()] = channel

    def get_channel(self, channel_type: str) -> Optional[INotificationChannel]:
        return self._channels.get(channel_type)

    def get_all_channels(self) -> List[INotificationChannel]:
        return list(self._channels.values())

    def notify(self, level: ToastLevel, message: str, extra: Optional[Dict] = None) -> bool:
        """发送到所有渠道，至少一个成功即返回 True"""
        if not message:
            return False
        delivered = False
        for channel in self._channels.values():
            try:
                delivered = channel.send(level, message, extra) or delivered
            except Exception as e:
                logger.error(
                    f"Notification channel {channel.get_channel_type()} failed: {e}",
                    exc_info=True
                )
        return delivered

    def success(self, message: str, **extra) -> bool:
        return self.notify(ToastLevel.SUCCESS, message, extra or None)

    def error(self, message: str, **extra) -> bool:
        return self.notify(ToastLevel.ERROR, message, extra or None)

    def warning(self, message: str, **extra) -> bool:
        return self.notify(ToastLevel.WARNING, message, extra or None)

    def info(self, message: str, **extra) -> bool:
        return self.notify(ToastLevel.INFO, message, extra or None)

    def clear(self) -> None:
        """清除所有渠道（用于测试）"""
        self._channels.clear()
