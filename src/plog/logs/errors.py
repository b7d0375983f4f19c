# -*- coding: utf-8 -*-
"""
日志异常定义
"""


class LogError(Exception):
    """日志库异常基类"""

    pass


class MessageTooLongError(LogError, ValueError):
    """日志消息超过长度限制

    消息不会被截断或部分写入，整条拒绝。
    """

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            f"Log message length {length} exceeds limit (must be < {limit})"
        )


class WriterClosedError(LogError):
    """写入器已关闭"""

    pass
