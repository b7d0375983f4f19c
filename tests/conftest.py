#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
pytest 配置文件

提供测试夹具和配置
"""

import sys
import threading
import time
from pathlib import Path
from typing import List

import pytest

# 将 src 目录添加到 Python 路径
ROOT_DIR = Path(__file__).parent.parent
SRC_DIR = ROOT_DIR / "src"
sys.path.insert(0, str(SRC_DIR))

from plog.logs import FileLogWriter, LogEntry, LogWriter  # noqa: E402


class RecordingWriter(LogWriter):
    """把日志条目记录到内存的写入器，可选地模拟慢速写入或写入失败"""

    def __init__(self, delay: float = 0.0, fail_on: str = ""):
        self.delay = delay
        self.fail_on = fail_on
        self.entries: List[LogEntry] = []
        self.threads: List[str] = []
        self._lock = threading.Lock()

    def write_log(self, entry: LogEntry) -> None:
        if self.delay:
            time.sleep(self.delay)
        if self.fail_on and entry.message == self.fail_on:
            raise OSError(f"simulated write failure: {entry.message}")
        with self._lock:
            self.entries.append(entry)
            self.threads.append(threading.current_thread().name)

    @property
    def messages(self) -> List[str]:
        with self._lock:
            return [e.message for e in self.entries]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """项目根目录"""
    return ROOT_DIR


@pytest.fixture(scope="function")
def temp_dir(tmp_path: Path) -> Path:
    """临时目录（每个测试函数独立）"""
    return tmp_path


@pytest.fixture
def recording_writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture(autouse=True)
def reset_file_writers():
    """每个测试结束后关闭共享的文件写入器"""
    yield
    FileLogWriter.reset_instances()
