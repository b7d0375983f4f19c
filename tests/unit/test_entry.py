# -*- coding: utf-8 -*-
"""日志级别与日志条目测试

运行测试命令:
    pytest tests/unit/test_entry.py -v
"""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from plog.logs import LogEntry, LogLevel


class TestLogLevel:
    """LogLevel 测试"""

    def test_ordering(self):
        """级别有序：DEBUG < INFO < ERROR"""
        assert LogLevel.DEBUG < LogLevel.INFO < LogLevel.ERROR

    def test_tags(self):
        assert LogLevel.DEBUG.tag == "Dbg"
        assert LogLevel.INFO.tag == "Inf"
        assert LogLevel.ERROR.tag == "Err"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("debug", LogLevel.DEBUG),
            ("INFO", LogLevel.INFO),
            (" Error ", LogLevel.ERROR),
            ("Inf", LogLevel.INFO),
            (2, LogLevel.ERROR),
            (LogLevel.DEBUG, LogLevel.DEBUG),
        ],
    )
    def test_parse(self, value, expected):
        assert LogLevel.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            LogLevel.parse("warning")


class TestLogEntry:
    """LogEntry 测试"""

    def test_render(self):
        """测试日志行格式"""
        entry = LogEntry(
            level=LogLevel.INFO,
            message="Hello World",
            time=datetime(2017, 7, 13, 21, 4, 5, 123456),
        )
        assert entry.render() == "2017-07-13 21:04:05.123 [Inf] Hello World"
        assert str(entry) == entry.render()

    def test_render_pads_milliseconds(self):
        entry = LogEntry(
            level=LogLevel.ERROR, message="x", time=datetime(2020, 1, 2, 3, 4, 5, 7000)
        )
        assert entry.render() == "2020-01-02 03:04:05.007 [Err] x"

    def test_positional_field_order(self):
        """字段顺序为 level, time, message"""
        t = datetime(2017, 7, 13, 21, 4, 5)
        entry = LogEntry(LogLevel.DEBUG, t, "positional")

        assert entry.time == t
        assert entry.message == "positional"
        assert entry.render() == "2017-07-13 21:04:05.000 [Dbg] positional"

    def test_immutable(self):
        """日志条目创建后不可修改"""
        entry = LogEntry.create(LogLevel.DEBUG, "msg")
        with pytest.raises(FrozenInstanceError):
            entry.message = "changed"

    def test_create_uses_current_time(self):
        before = datetime.now()
        entry = LogEntry.create(LogLevel.DEBUG, "msg")
        after = datetime.now()
        assert before <= entry.time <= after

    @pytest.mark.parametrize(
        "message",
        ["plain", "", "with [brackets] and 2017-07-13 text", "unicode 日志 ✓", "  padded  "],
    )
    def test_parse_round_trip(self, message):
        """渲染后解析可还原时间（毫秒精度）、级别和消息"""
        entry = LogEntry.create(LogLevel.ERROR, message)
        parsed = LogEntry.parse(entry.render() + "\n")

        assert parsed.level is entry.level
        assert parsed.message == entry.message
        assert parsed.time == entry.time.replace(
            microsecond=entry.time.microsecond // 1000 * 1000
        )

    def test_parse_malformed(self):
        with pytest.raises(ValueError):
            LogEntry.parse("not a log line")

    def test_parse_unknown_level(self):
        with pytest.raises(ValueError):
            LogEntry.parse("2017-07-13 21:04:05.123 [Wrn] message")
