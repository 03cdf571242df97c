"""日志配置工具

为根日志记录器添加控制台 handler（已存在则只调整级别），并可选地追加
文件 handler。多次调用不会重复添加控制台输出。
"""

from __future__ import annotations

import logging
import os

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"未知的日志级别: {level}")
    return value


def setup_logging(
    level: int | str = logging.WARNING,
    fmt: str | None = None,
    datefmt: str | None = None,
    log_file: str | None = None,
) -> logging.Logger:
    """配置根日志记录器

    Parameters
    ----------
    level : int or str, optional
        日志级别，可为 ``logging.INFO`` 或 ``"INFO"``
    fmt : str, optional
        日志格式，默认 ``"%(asctime)s | %(levelname)s | %(name)s: %(message)s"``
    datefmt : str, optional
        时间格式，默认 ``"%H:%M:%S"``
    log_file : str, optional
        日志文件路径；提供时追加一个 DEBUG 级别的文件 handler

    Returns
    -------
    logging.Logger
        根日志记录器

    Raises
    ------
    ValueError
        如果日志级别名称未知
    """
    level = _parse_level(level)
    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(
        fmt=fmt or DEFAULT_FORMAT, datefmt=datefmt or DEFAULT_DATEFMT
    )

    # 控制台 handler：若不存在则添加，存在则调到期望级别
    stream_handlers = [
        h
        for h in root.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    if not stream_handlers:
        sh = logging.StreamHandler()
        sh.setLevel(level)
        sh.setFormatter(formatter)
        root.addHandler(sh)
    else:
        for h in stream_handlers:
            h.setLevel(level)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fh = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    return root
