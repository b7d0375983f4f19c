# -*- coding: utf-8 -*-
"""
同步与异步日志记录器

两种记录器对外接口相同（debug / info / error / level），区别在于分发方式：
- SyncLogger: 在调用线程上直接调用写入器，写入异常直接抛给调用者
- AsyncLogger: 入队后立即返回，由唯一的消费者线程按 FIFO 顺序写出

使用示例：
    logger = SyncLogger(FileLogWriter.instance())
    logger.debug("Test debug message")

    with AsyncLogger(StreamLogWriter(stream)) as logger:
        logger.error("Test error message")
"""

import logging
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional, Union

from .entry import LogEntry, LogLevel
from .queue import ClosableQueue
from .writer import LogWriter

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[Exception, LogEntry], None]


class BaseLogger(ABC):
    """记录器基类：级别过滤与日志条目构造"""

    def __init__(self, writer: LogWriter, level: Union[LogLevel, str] = LogLevel.DEBUG):
        self._writer = writer
        self._level = LogLevel.parse(level)
        self._level_lock = threading.Lock()

    @property
    def writer(self) -> LogWriter:
        return self._writer

    @property
    def level(self) -> LogLevel:
        """当前级别阈值，级别 >= 阈值的消息才会写出"""
        with self._level_lock:
            return self._level

    @level.setter
    def level(self, value: Union[LogLevel, str]) -> None:
        value = LogLevel.parse(value)
        with self._level_lock:
            self._level = value

    def debug(self, message: str) -> None:
        self.log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        self.log(LogLevel.INFO, message)

    def error(self, message: str) -> None:
        self.log(LogLevel.ERROR, message)

    def log(self, level: LogLevel, message: str) -> None:
        """按级别记录消息，低于阈值的消息直接丢弃"""
        if level >= self.level:
            self._dispatch(LogEntry.create(level, message))

    @abstractmethod
    def _dispatch(self, entry: LogEntry) -> None:
        """分发日志条目"""


class SyncLogger(BaseLogger):
    """同步记录器"""

    def _dispatch(self, entry: LogEntry) -> None:
        self._writer.write_log(entry)


class LoggerState(str, Enum):
    """异步记录器状态"""

    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


class AsyncLogger(BaseLogger):
    """异步记录器

    日志调用只负责入队；唯一的消费者线程依次调用写入器，保证输出顺序与入队顺序一致。

    消费者线程上的写入异常没有调用者可以接收，会记录到 last_error，
    并交给 on_error 回调；未设置回调时通过 logging 输出错误日志。
    """

    def __init__(
        self,
        writer: LogWriter,
        level: Union[LogLevel, str] = LogLevel.DEBUG,
        queue_size: int = 0,
        on_error: Optional[ErrorCallback] = None,
    ):
        """初始化并启动消费者线程

        Args:
            writer: 日志写入器
            level: 初始级别阈值
            queue_size: 队列长度上限，0 表示不限制
            on_error: 写入失败回调，参数为异常和对应的日志条目
        """
        super().__init__(writer, level)
        self.on_error = on_error
        self._queue: ClosableQueue[LogEntry] = ClosableQueue(maxsize=queue_size)
        self._state = LoggerState.RUNNING
        self._state_lock = threading.Lock()
        self._last_error: Optional[BaseException] = None
        self._dropped_count = 0

        self._consumer = threading.Thread(
            target=self._consume, name="LogQueueConsumer", daemon=True
        )
        self._consumer.start()

    @property
    def state(self) -> LoggerState:
        with self._state_lock:
            return self._state

    @property
    def last_error(self) -> Optional[BaseException]:
        """消费者线程上最近一次写入失败的异常"""
        return self._last_error

    @property
    def dropped_count(self) -> int:
        """停止后被丢弃的日志条数"""
        return self._dropped_count

    @property
    def consumer_alive(self) -> bool:
        return self._consumer.is_alive()

    def _dispatch(self, entry: LogEntry) -> None:
        # 队列关闭后静默丢弃
        if not self._queue.put(entry):
            with self._state_lock:
                self._dropped_count += 1

    def _consume(self) -> None:
        logger.debug("Log queue consumer started")
        try:
            for entry in self._queue:
                try:
                    self._writer.write_log(entry)
                except Exception as e:
                    self._report_error(e, entry)
        except BaseException as e:
            # 消费者异常退出：关闭队列，避免后续日志堆积或生产者永久阻塞
            self._last_error = e
            self._queue.close()
            with self._state_lock:
                self._state = LoggerState.STOPPED
            logger.exception(
                f"Log queue consumer died, {len(self._queue)} queued entries undelivered"
            )
        finally:
            logger.debug("Log queue consumer exited")

    def _report_error(self, error: Exception, entry: LogEntry) -> None:
        self._last_error = error
        if self.on_error is None:
            logger.error(f"Failed to write log entry: {error!r}")
            return
        try:
            self.on_error(error, entry)
        except Exception:
            logger.exception("Log error callback failed")

    def stop(self) -> None:
        """停止记录器

        关闭队列后等待消费者线程写完剩余条目并退出。重复调用是空操作，
        但同样会等待排空完成后才返回。
        """
        if threading.current_thread() is self._consumer:
            raise RuntimeError("AsyncLogger.stop() cannot be called from its consumer thread")

        with self._state_lock:
            if self._state is LoggerState.RUNNING:
                self._state = LoggerState.DRAINING
                self._queue.close()

        self._consumer.join()

        with self._state_lock:
            self._state = LoggerState.STOPPED

    def __enter__(self) -> "AsyncLogger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
