#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
日志库使用示例

对每种记录器（同步 / 异步）与写入器（控制台 / 文件 / 流）的组合运行级别测试与批量测试。

用法:
    python examples/logs/main.py
    python examples/logs/main.py --workdir /tmp/plog-demo
    python examples/logs/main.py --config examples/logs/config.yaml
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# 添加项目路径
ROOT_DIR = Path(__file__).parent.parent.parent
sys.path.insert(0, str(ROOT_DIR / "src"))

from plog.logs import (
    AsyncLogger,
    BaseLogger,
    ConsoleLogWriter,
    FileLogWriter,
    LogLevel,
    StreamLogWriter,
    SyncLogger,
    install_logs,
    load_config,
)


# ======================== 测试套件 ========================


def suite_debug(log: BaseLogger) -> None:
    """DEBUG 级别：三条都输出"""
    log.level = LogLevel.DEBUG
    log.debug("Suite #1 test dbg level message")
    log.info("Suite #1 test inf level message")
    log.error("Suite #1 test err level message")


def suite_info(log: BaseLogger) -> None:
    log.level = LogLevel.INFO
    log.debug("Suite #2 test dbg level message (NOT to be logged)")
    log.info("Suite #2 test inf level message")
    log.error("Suite #2 test err level message")


def suite_error(log: BaseLogger) -> None:
    log.level = LogLevel.ERROR
    log.debug("Suite #3 test dbg level message (NOT to be logged)")
    log.info("Suite #3 test inf level message (NOT to be logged)")
    log.error("Suite #3 test err level message")


def suite_bulk(log: BaseLogger, count: int = 100) -> None:
    """批量写入，足以触发文件轮转"""
    log.level = LogLevel.DEBUG
    for i in range(count):
        log.debug(f"Suite #4 test dbg level message: {i}")
        log.info(f"Suite #4 test inf level message: {i}")
        log.error(f"Suite #4 test err level message: {i}")


# ======================== 组合示例 ========================


def example_sync(workdir: Path) -> None:
    print("=" * 50)
    print("同步记录器")
    print("=" * 50)

    console = SyncLogger(ConsoleLogWriter())
    suite_debug(console)
    suite_info(console)
    suite_error(console)

    suite_bulk(SyncLogger(FileLogWriter.instance(str(workdir / "log.txt"))))

    with open(workdir / "stream_s.txt", "ab") as f:
        suite_bulk(SyncLogger(StreamLogWriter(f)))


def example_async(workdir: Path) -> None:
    print("=" * 50)
    print("异步记录器")
    print("=" * 50)

    console = AsyncLogger(ConsoleLogWriter())
    suite_debug(console)
    suite_info(console)
    suite_error(console)
    console.stop()
    # 停止后的调用被静默丢弃
    suite_debug(console)

    file_logger = AsyncLogger(FileLogWriter.instance(str(workdir / "log.txt")))
    suite_bulk(file_logger)
    file_logger.stop()
    suite_bulk(file_logger)

    with open(workdir / "stream_a.txt", "ab") as f:
        with AsyncLogger(StreamLogWriter(f)) as stream_logger:
            suite_bulk(stream_logger)
        suite_bulk(stream_logger)


def example_from_config(config_file: str) -> None:
    print("=" * 50)
    print(f"从配置文件创建: {config_file}")
    print("=" * 50)

    config = load_config(config_file=config_file, env_prefix="PLOG")
    log = install_logs(config, stream=sys.stdout)
    suite_bulk(log, count=10)
    if isinstance(log, AsyncLogger):
        log.stop()


def main():
    parser = argparse.ArgumentParser(description="plog logger demo")
    parser.add_argument("--workdir", default="./log", help="文件与流输出目录")
    parser.add_argument("--config", default="", help="YAML 配置文件")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出日志库自身的调试日志")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    workdir = Path(args.workdir)
    workdir.mkdir(parents=True, exist_ok=True)

    if args.config:
        example_from_config(args.config)
        return

    example_sync(workdir)
    example_async(workdir)
    FileLogWriter.reset_instances()

    print(f"\n输出文件: {sorted(os.listdir(workdir))}")


if __name__ == "__main__":
    main()
