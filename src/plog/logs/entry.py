# -*- coding: utf-8 -*-
"""
日志级别与日志条目

日志行格式：
yyyy-MM-dd HH:mm:ss.fff [Lvl] message

示例：
2017-07-13 21:04:05.123 [Inf] Hello World
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Union

# 时间格式（毫秒部分单独拼接）
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_LINE_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\.(\d{3}) \[(\w+)\] (.*)$", re.DOTALL
)


class LogLevel(IntEnum):
    """日志级别（有序）：DEBUG < INFO < ERROR"""

    DEBUG = 0
    INFO = 1
    ERROR = 2

    @property
    def tag(self) -> str:
        """日志行中的级别标识"""
        return _LEVEL_TAGS[self]

    @classmethod
    def parse(cls, value: Union["LogLevel", int, str]) -> "LogLevel":
        """解析日志级别

        支持枚举本身、整数值、名称（"info"）和行内标识（"Inf"），忽略大小写。

        Args:
            value: 级别值

        Returns:
            LogLevel: 日志级别

        Raises:
            ValueError: 无法识别的级别
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            key = value.strip().lower()
            for level in cls:
                if key in (level.name.lower(), level.tag.lower()):
                    return level
        raise ValueError(f"Unknown log level: {value!r}")


_LEVEL_TAGS = {
    LogLevel.DEBUG: "Dbg",
    LogLevel.INFO: "Inf",
    LogLevel.ERROR: "Err",
}


def format_time(t: datetime) -> str:
    """格式化时间戳，精确到毫秒"""
    return f"{t.strftime(TIME_FORMAT)}.{t.microsecond // 1000:03d}"


@dataclass(frozen=True)
class LogEntry:
    """日志条目

    创建后不可变，按值在调用者、队列和写入器之间传递。
    """

    level: LogLevel
    time: datetime
    message: str

    @classmethod
    def create(cls, level: LogLevel, message: str) -> "LogEntry":
        """以当前时间创建日志条目"""
        return cls(level=level, message=message, time=datetime.now())

    def render(self) -> str:
        """渲染为日志行（不含换行符）"""
        return f"{format_time(self.time)} [{self.level.tag}] {self.message}"

    def __str__(self) -> str:
        return self.render()

    @classmethod
    def parse(cls, line: str) -> "LogEntry":
        """从日志行解析日志条目

        Args:
            line: 日志行，允许带结尾换行符

        Returns:
            LogEntry: 时间精确到毫秒的日志条目

        Raises:
            ValueError: 行格式不正确
        """
        if line.endswith("\n"):
            line = line[:-1]
        match = _LINE_PATTERN.match(line)
        if match is None:
            raise ValueError(f"Malformed log line: {line!r}")

        stamp, millis, tag, message = match.groups()
        t = datetime.strptime(stamp, TIME_FORMAT).replace(
            microsecond=int(millis) * 1000
        )
        return cls(level=LogLevel.parse(tag), message=message, time=t)
