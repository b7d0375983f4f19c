# -*- coding: utf-8 -*-
"""
日志文件轮转模块

按文件大小轮转：
- 每次写入后从磁盘重新读取文件大小
- 达到阈值后把当前文件重命名为归档文件，并重新打开原文件名继续写入
- 归档文件命名 {base}.{n}.{ext}（log.txt -> log.1.txt, log.2.txt, ...）
- 已存在的归档文件会被跳过，不会被覆盖
"""

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Callable, ClassVar, Dict, Optional

from .entry import LogEntry
from .errors import WriterClosedError
from .writer import LogWriter

logger = logging.getLogger(__name__)

# 默认日志文件
DEFAULT_FILEPATH = "log.txt"
# 默认轮转大小（字节）
DEFAULT_ROTATE_SIZE = 5 * 1024


@dataclass(eq=False)
class FileLogWriter(LogWriter):
    """带大小轮转的文件日志写入器

    一个物理文件只应由一个写入器持有。可以直接构造并显式传递，
    也可以通过 FileLogWriter.instance() 获取按路径共享的进程级实例。

    文件命名示例：
    - log.txt      当前写入的文件
    - log.1.txt    第一个归档
    - log.2.txt    第二个归档
    """

    # 日志文件路径
    filepath: str = DEFAULT_FILEPATH
    # 按大小轮转（字节），0 表示不轮转
    rotate_size: int = DEFAULT_ROTATE_SIZE
    # 文件编码
    encoding: str = "utf-8"
    # 轮转回调函数，参数为归档文件路径
    rotate_callback: Optional[Callable[[str], None]] = None

    # 内部状态
    _file: Optional[IO[str]] = field(default=None, init=False, repr=False)
    _next_number: int = field(default=1, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    # 按路径共享的实例
    _instances: ClassVar[Dict[str, "FileLogWriter"]] = {}
    _instances_lock: ClassVar[threading.Lock] = threading.Lock()

    def __post_init__(self):
        self.filepath = os.fspath(self.filepath)
        parent = os.path.dirname(self.filepath)
        if parent:
            Path(parent).mkdir(parents=True, exist_ok=True)
        self._open_nolock()

    @classmethod
    def instance(cls, filepath: str = DEFAULT_FILEPATH, **kwargs) -> "FileLogWriter":
        """获取指定路径的共享写入器，不存在时创建

        写入器已存在时 kwargs 不生效（沿用首次创建时的参数），
        与现有参数不一致时输出 debug 日志。

        Args:
            filepath: 日志文件路径
            **kwargs: 首次创建时传给构造函数的参数

        Returns:
            FileLogWriter: 该路径唯一的写入器
        """
        key = os.path.abspath(os.fspath(filepath))
        with cls._instances_lock:
            writer = cls._instances.get(key)
            if writer is None or writer.closed:
                writer = cls(filepath=filepath, **kwargs)
                cls._instances[key] = writer
                return writer

        ignored = {k: v for k, v in kwargs.items() if getattr(writer, k, v) != v}
        if ignored:
            logger.debug(f"Log file writer for {key} already exists, ignoring {ignored}")
        return writer

    @classmethod
    def reset_instances(cls) -> None:
        """关闭并清空所有共享写入器"""
        with cls._instances_lock:
            writers = list(cls._instances.values())
            cls._instances.clear()
        for writer in writers:
            writer.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def next_number(self) -> int:
        """下一次轮转尝试使用的归档序号"""
        return self._next_number

    def write_log(self, entry: LogEntry) -> None:
        """写入一条日志并检查是否需要轮转

        写入与轮转在同一把锁内完成。
        """
        data = entry.render() + "\n"
        with self._lock:
            self._write_nolock(data)
            self._rotate_nolock(data)

    def _write_nolock(self, data: str) -> None:
        if self._closed or self._file is None:
            raise WriterClosedError(f"Log file writer is closed: {self.filepath}")
        self._file.write(data)
        self._file.flush()

    def _open_nolock(self) -> None:
        self._file = open(self.filepath, "a", encoding=self.encoding)
        logger.debug(f"Opened log file: {self.filepath}")

    def _rotate_nolock(self, data: str) -> None:
        """按大小轮转日志文件

        Args:
            data: 刚写入的内容，文件被外部删除时重新写入新文件
        """
        # 以磁盘上的大小为准，兼容外部截断
        try:
            file_size = os.stat(self.filepath).st_size
        except FileNotFoundError:
            # 文件被外部删除，刚写入的内容落在已删除的 inode 上
            logger.warning(f"Log file removed externally, recreating: {self.filepath}")
            self._file.close()
            self._open_nolock()
            self._write_nolock(data)
            return

        if self.rotate_size <= 0 or file_size < self.rotate_size:
            return

        self._file.close()
        self._file = None
        try:
            archive_path = self._generate_archive_filename()
            os.rename(self.filepath, archive_path)
        finally:
            self._open_nolock()

        logger.debug(f"Rotated log file: {self.filepath} -> {archive_path}")
        if self.rotate_callback:
            try:
                self.rotate_callback(archive_path)
            except Exception:
                logger.exception("Rotate callback error")

    def _generate_archive_filename(self) -> str:
        """生成下一个未被占用的归档文件名

        从当前序号开始，跳过磁盘上已存在的文件名。
        """
        base, ext = os.path.splitext(self.filepath)
        while True:
            archive_path = f"{base}.{self._next_number}{ext}"
            self._next_number += 1
            if not os.path.exists(archive_path):
                return archive_path

    def close(self) -> None:
        """关闭文件"""
        with self._lock:
            self._closed = True
            if self._file is not None:
                self._file.close()
                self._file = None
