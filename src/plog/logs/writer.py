# -*- coding: utf-8 -*-
"""
日志写入器

写入器负责把 LogEntry 渲染后输出到目标：
- ConsoleLogWriter: 控制台（按级别着色）
- StreamLogWriter: 调用者提供的任意流
- FileLogWriter: 带轮转的日志文件（见 rotate.py）
"""

import io
import sys
import threading
from abc import ABC, abstractmethod
from typing import IO, Optional

from .entry import LogEntry, LogLevel
from .errors import MessageTooLongError, WriterClosedError

# 控制台消息最大长度（不含）
MAX_MESSAGE_LENGTH = 1000


class LogWriter(ABC):
    """日志写入器接口"""

    @abstractmethod
    def write_log(self, entry: LogEntry) -> None:
        """写出一条日志"""

    def close(self) -> None:
        """释放写入器持有的资源"""


class ConsoleLogWriter(LogWriter):
    """控制台日志写入器

    颜色是进程级共享资源，所有实例共用同一把锁保护
    "设置颜色 / 写行 / 恢复颜色" 这一序列。
    """

    # 颜色代码
    COLORS = {
        LogLevel.DEBUG: "\033[37m",  # 灰色
        LogLevel.INFO: "\033[32m",  # 绿色
        LogLevel.ERROR: "\033[31m",  # 红色
    }
    RESET = "\033[0m"

    _lock = threading.Lock()

    def __init__(
        self,
        stream: Optional[IO[str]] = None,
        enable_colors: Optional[bool] = None,
        max_message_length: int = MAX_MESSAGE_LENGTH,
    ):
        """初始化

        Args:
            stream: 输出流，默认在写入时取 sys.stdout
            enable_colors: 是否着色，None 表示仅在终端上着色
            max_message_length: 消息长度上限，长度 >= 该值的消息被拒绝
        """
        self._stream = stream
        self.enable_colors = enable_colors
        self.max_message_length = max_message_length

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdout

    def _use_colors(self, stream: IO[str]) -> bool:
        if self.enable_colors is not None:
            return self.enable_colors
        return hasattr(stream, "isatty") and stream.isatty()

    def write_log(self, entry: LogEntry) -> None:
        if len(entry.message) >= self.max_message_length:
            raise MessageTooLongError(len(entry.message), self.max_message_length)

        line = entry.render()
        with self._lock:
            stream = self.stream
            if self._use_colors(stream):
                stream.write(self.COLORS[entry.level])
                stream.write(line)
                stream.write(self.RESET + "\n")
            else:
                stream.write(line + "\n")
            stream.flush()


class StreamLogWriter(LogWriter):
    """流日志写入器

    包装调用者提供的流（文本流或二进制流），每行写入后立即 flush。
    流的打开与关闭由调用者负责。
    """

    def __init__(self, stream: IO, encoding: str = "utf-8"):
        """初始化

        Args:
            stream: 可写的文本流或二进制流
            encoding: 二进制流使用的编码
        """
        self._stream = stream
        self.encoding = encoding
        self._binary = _is_binary(stream)
        self._lock = threading.Lock()

    @property
    def stream(self) -> IO:
        return self._stream

    def write_log(self, entry: LogEntry) -> None:
        line = entry.render() + "\n"
        with self._lock:
            if getattr(self._stream, "closed", False):
                raise WriterClosedError("Underlying stream is closed")
            if self._binary:
                self._stream.write(line.encode(self.encoding))
            else:
                self._stream.write(line)
            self._stream.flush()


def _is_binary(stream: IO) -> bool:
    """判断流是否为二进制流"""
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    return "b" in getattr(stream, "mode", "")
