"""
UI toast 渠道：服务层产生的提示先进入内存队列，由 UI 轮询 /toasts 取走
"""
import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from core.notification.channel import INotificationChannel, ToastLevel

logger = logging.getLogger(__name__)


@dataclass
class Toast:
    level: ToastLevel
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    extra: Dict = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            "level": self.level.value,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            **({"extra": self.extra} if self.extra else {}),
        }


class InMemoryToastChannel(INotificationChannel):
    """内存 toast 队列（超出 maxlen 时丢弃最旧的）"""

    def __init__(self, maxlen: int = 100):
        self._toasts: deque = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def send(self, level: ToastLevel, message: str, extra: Optional[Dict] = None) -> bool:
        with self._lock:
            self._toasts.append(Toast(level=level, message=message, extra=dict(extra or {})))
        return True

    def get_channel_type(self) -> str:
        return "toast"

    def peek(self) -> List[Toast]:
        with self._lock:
            return list(self._toasts)

    def drain(self) -> List[Toast]:
        """取走全部待显示的 toast"""
        with self._lock:
            toasts = list(self._toasts)
            self._toasts.clear()
        return toasts

    def messages(self, level: Optional[ToastLevel] = None) -> List[str]:
        return [t.message for t in self.peek() if level is None or t.level == level]


class LoggingChannel(INotificationChannel):
    """把 toast 同步写入日志，便于排查用户看到的提示"""

    _LEVELS = {
        ToastLevel.SUCCESS: logging.INFO,
        ToastLevel.INFO: logging.INFO,
        ToastLevel.WARNING: logging.WARNING,
        ToastLevel.ERROR: logging.WARNING,
    }

    def send(self, level: ToastLevel, message: str, extra: Optional[Dict] = None) -> bool:
        logger.log(self._LEVELS.get(level, logging.INFO), f"[toast:{level.value}] {message}")
        return True

    def get_channel_type(self) -> str:
        return "log"
