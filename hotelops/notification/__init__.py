from hotelops.notification.toast_channel import InMemoryToastChannel, LoggingChannel, Toast

__all__ = ["InMemoryToastChannel", "LoggingChannel", "Toast"]
