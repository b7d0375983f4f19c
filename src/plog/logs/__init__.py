# -*- coding: utf-8 -*-
"""
plog Logs - 日志库

支持：
- 同步 / 异步两种记录器（异步记录器保证 FIFO 顺序并支持排空停止）
- 控制台（按级别着色）、文件、任意流三种写入器
- 日志文件按大小轮转（log.txt -> log.1.txt, log.2.txt, ...）
- YAML / 字典 / 环境变量配置
"""

from .config import (
    AppConfig,
    ConfigLoader,
    LogConfig,
    LogMode,
    LogWriterType,
    create_writer,
    install_logs,
    load_config,
    parse_size,
)
from .entry import LogEntry, LogLevel
from .errors import LogError, MessageTooLongError, WriterClosedError
from .logger import AsyncLogger, BaseLogger, LoggerState, SyncLogger
from .queue import ClosableQueue
from .rotate import FileLogWriter
from .writer import ConsoleLogWriter, LogWriter, StreamLogWriter

__all__ = [
    # 日志条目
    "LogEntry",
    "LogLevel",
    # 记录器
    "BaseLogger",
    "SyncLogger",
    "AsyncLogger",
    "LoggerState",
    # 写入器
    "LogWriter",
    "ConsoleLogWriter",
    "FileLogWriter",
    "StreamLogWriter",
    # 队列
    "ClosableQueue",
    # 异常
    "LogError",
    "MessageTooLongError",
    "WriterClosedError",
    # 配置
    "AppConfig",
    "ConfigLoader",
    "LogConfig",
    "LogMode",
    "LogWriterType",
    "create_writer",
    "install_logs",
    "load_config",
    "parse_size",
]
