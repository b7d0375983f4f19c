# -*- coding: utf-8 -*-
"""
日志配置模块

提供：
- Pydantic 配置模型
- YAML 配置文件 / 字典 / 环境变量加载
- 按配置构造写入器与记录器

示例 YAML 配置:
```yaml
log:
  level: info
  mode: async
  writer: file
  filepath: ./log/log.txt
  rotate_size: 5k
```
"""

import logging
import os
import re
from enum import Enum
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from .entry import LogLevel
from .logger import AsyncLogger, BaseLogger, SyncLogger
from .rotate import DEFAULT_FILEPATH, DEFAULT_ROTATE_SIZE, FileLogWriter
from .writer import MAX_MESSAGE_LENGTH, ConsoleLogWriter, LogWriter, StreamLogWriter

logger = logging.getLogger(__name__)


def parse_size(value: Union[str, int, float, None]) -> int:
    """
    解析大小字符串为字节数

    支持格式:
    - 纯数字: 直接作为字节数
    - "512b": 512 字节
    - "5k" / "5kb": 5 * 1024 字节
    - "1m" / "1mb": 1024 * 1024 字节
    - "1g" / "1gb": 1024 ** 3 字节

    Args:
        value: 大小字符串或数字

    Returns:
        字节数（int）

    Raises:
        ValueError: 无法解析
    """
    if value is None:
        return 0

    if isinstance(value, (int, float)):
        return int(value)

    text = value.strip().lower()
    if not text:
        return 0

    match = re.fullmatch(r"(\d+(?:\.\d+)?)\s*([kmg]?)b?", text)
    if match is None:
        raise ValueError(f"Invalid size: {value!r}")

    unit_multipliers = {
        "": 1,
        "k": 1024,
        "m": 1024 ** 2,
        "g": 1024 ** 3,
    }
    num, unit = match.groups()
    return int(float(num) * unit_multipliers[unit])


class LogMode(str, Enum):
    """记录器分发方式"""

    SYNC = "sync"
    ASYNC = "async"


class LogWriterType(str, Enum):
    """写入目标"""

    CONSOLE = "console"
    FILE = "file"
    STREAM = "stream"


class LogConfig(BaseModel):
    """日志配置"""

    level: LogLevel = Field(default=LogLevel.DEBUG, description="日志级别阈值")
    mode: LogMode = Field(default=LogMode.SYNC, description="分发方式: sync, async")
    writer: LogWriterType = Field(
        default=LogWriterType.CONSOLE, description="写入目标: console, file, stream"
    )
    filepath: str = Field(default=DEFAULT_FILEPATH, description="日志文件路径")
    rotate_size: int = Field(
        default=DEFAULT_ROTATE_SIZE, ge=0, description="按大小轮转（字节），0 表示不轮转"
    )
    max_message_length: int = Field(
        default=MAX_MESSAGE_LENGTH, ge=1, description="控制台消息长度上限"
    )
    enable_colors: Optional[bool] = Field(
        default=None, description="控制台着色，None 表示仅在终端上着色"
    )
    queue_size: int = Field(default=0, ge=0, description="异步队列长度上限，0 表示不限制")

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v):
        """解析日志级别"""
        return LogLevel.parse(v)

    @field_validator("mode", "writer", mode="before")
    @classmethod
    def lower_case(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("rotate_size", mode="before")
    @classmethod
    def parse_rotate_size(cls, v):
        """解析轮转大小"""
        return parse_size(v)


class AppConfig(BaseModel):
    """配置根节点"""

    log: LogConfig = Field(default_factory=LogConfig, description="日志配置")


# ======================== 配置加载器 ========================


class ConfigLoader:
    """
    配置加载器

    支持从 YAML 文件、字典或环境变量加载配置
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Args:
            config_file: YAML 配置文件路径
        """
        self.config_file = config_file
        self._raw_config: Dict[str, Any] = {}
        self._config: Optional[AppConfig] = None

    def load(self) -> "ConfigLoader":
        """加载配置文件，支持链式调用"""
        if self.config_file:
            self._load_from_file(self.config_file)
        return self

    def _load_from_file(self, file_path: str) -> None:
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with open(path, "r", encoding="utf-8") as f:
            self._raw_config = yaml.safe_load(f) or {}
        self._config = None

        logger.info(f"Loaded config from {file_path}")

    def load_from_dict(self, config_dict: Dict[str, Any]) -> "ConfigLoader":
        """从字典加载配置（与已加载内容深度合并）"""
        self._deep_merge(self._raw_config, config_dict)
        self._config = None
        return self

    def load_from_env(self, prefix: str = "PLOG") -> "ConfigLoader":
        """
        从环境变量加载配置

        环境变量格式: {PREFIX}_LOG_{FIELD}，如 PLOG_LOG_ROTATE_SIZE=10k

        Args:
            prefix: 环境变量前缀

        Returns:
            self
        """
        env_config: Dict[str, Any] = {}
        section_prefix = f"{prefix}_"

        for key, value in os.environ.items():
            if not key.startswith(section_prefix):
                continue

            # 第一段为配置节点，其余部分为字段名
            parts = key[len(section_prefix):].lower().split("_", 1)
            if len(parts) != 2:
                continue
            self._set_nested_value(env_config, parts, value)

        self._deep_merge(self._raw_config, env_config)
        self._config = None
        return self

    def _set_nested_value(self, config: Dict, keys: List[str], value: str) -> None:
        """设置嵌套字典值"""
        for key in keys[:-1]:
            config = config.setdefault(key, {})

        final_key = keys[-1]
        if value.lower() in ("true", "false"):
            config[final_key] = value.lower() == "true"
        elif value.isdigit():
            config[final_key] = int(value)
        else:
            config[final_key] = value

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """深度合并字典"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value
        return base

    def get_config(self) -> AppConfig:
        if self._config is None:
            self._config = AppConfig(**self._raw_config)
        return self._config

    def get_log_config(self) -> LogConfig:
        return self.get_config().log

    def get_raw_config(self) -> Dict[str, Any]:
        return self._raw_config


# ======================== 便捷函数 ========================


def load_config(
    config_file: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
    env_prefix: Optional[str] = None,
) -> LogConfig:
    """
    加载日志配置

    优先级: env_prefix > config_dict > config_file > 默认值

    Args:
        config_file: YAML 配置文件路径
        config_dict: 配置字典
        env_prefix: 环境变量前缀

    Returns:
        LogConfig 实例
    """
    loader = ConfigLoader(config_file)

    if config_file:
        loader.load()

    if config_dict:
        loader.load_from_dict(config_dict)

    if env_prefix:
        loader.load_from_env(env_prefix)

    return loader.get_log_config()


def create_writer(config: LogConfig, stream: Optional[IO] = None) -> LogWriter:
    """
    按配置创建写入器

    Args:
        config: 日志配置
        stream: writer 为 stream 时由调用者提供的可写流

    Returns:
        LogWriter 实例

    Raises:
        ValueError: writer 为 stream 但未提供 stream
    """
    if config.writer is LogWriterType.FILE:
        return FileLogWriter.instance(config.filepath, rotate_size=config.rotate_size)

    if config.writer is LogWriterType.STREAM:
        if stream is None:
            raise ValueError("Stream writer requires an open writable stream")
        return StreamLogWriter(stream)

    return ConsoleLogWriter(
        stream=stream,
        enable_colors=config.enable_colors,
        max_message_length=config.max_message_length,
    )


def install_logs(
    config: Optional[LogConfig] = None, stream: Optional[IO] = None
) -> BaseLogger:
    """
    按配置创建记录器

    Args:
        config: 日志配置，为 None 时使用默认配置
        stream: 写入目标为 stream（或控制台重定向）时使用的流

    Returns:
        SyncLogger 或 AsyncLogger
    """
    if config is None:
        config = LogConfig()

    writer = create_writer(config, stream)
    if config.mode is LogMode.ASYNC:
        log = AsyncLogger(writer, level=config.level, queue_size=config.queue_size)
    else:
        log = SyncLogger(writer, level=config.level)

    logger.debug(
        f"Logger installed: level={config.level.name}, mode={config.mode.value}, "
        f"writer={config.writer.value}"
    )
    return log
