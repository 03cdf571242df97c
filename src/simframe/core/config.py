"""配置加载模块

提供轻量的 YAML 配置加载与工具函数：

- 读取包内置的 ``default.yaml`` 作为默认值
- 递归合并多份 YAML（后者覆盖前者）
- 点路径访问（如 ``logging.level``）
- 将配置应用到日志与元素性质表

Notes
-----
本模块刻意不引入 Hydra，以保持依赖简单与行为透明。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from simframe.core.errors import FormatError
from simframe.core.periodic_table import PERIODIC_TABLE, PeriodicTable
from simframe.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default.yaml"


def _deep_update(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_update(out[k], v)
        else:
            out[k] = v
    return out


def _get_by_path(d: dict, path: str, default: Any = None) -> Any:
    cur = d
    for key in path.split("."):
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def _load_yaml(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise FormatError(f"无法解析配置文件 {path}: {e}") from e
    if not isinstance(data, dict):
        raise FormatError(f"配置文件 {path} 的顶层必须是映射，得到: {type(data).__name__}")
    return data


@dataclass
class _Resolved:
    data: dict
    sources: list[str]


class ConfigManager:
    """配置管理器

    加载一组 YAML 配置文件并进行递归合并，提供点路径访问。

    Parameters
    ----------
    files : Iterable[str] | None, optional
        需要加载的 YAML 文件列表，后者覆盖前者；不存在的文件会被跳过。
    use_defaults : bool, optional
        是否先加载包内置的默认配置，默认 True。

    Attributes
    ----------
    data : dict
        合并后的配置数据（只读属性 ``.data`` 暴露内部字典）。
    sources : list of str
        实际加载的文件路径。

    Raises
    ------
    FormatError
        如果某个配置文件不是合法的 YAML 映射
    """

    def __init__(
        self, files: Iterable[str] | None = None, use_defaults: bool = True
    ) -> None:
        self._resolved = self._load_all(files, use_defaults)

    # --------- 加载与解析 ---------
    def _load_all(self, files: Iterable[str] | None, use_defaults: bool) -> _Resolved:
        data: dict[str, Any] = {}
        sources: list[str] = []
        if use_defaults and DEFAULT_CONFIG_PATH.exists():
            data = _load_yaml(DEFAULT_CONFIG_PATH)
            sources.append(str(DEFAULT_CONFIG_PATH))
        # 用户覆盖
        if files:
            for p in files:
                path = Path(p)
                if not path.exists():
                    logger.warning(f"Config file not found, skipped: {path}")
                    continue
                data = _deep_update(data, _load_yaml(path))
                sources.append(str(path))
        return _Resolved(data=data, sources=sources)

    @property
    def data(self) -> dict:
        """获取合并后的配置数据字典。"""
        return self._resolved.data

    @property
    def sources(self) -> list[str]:
        """获取实际加载的配置文件列表。"""
        return list(self._resolved.sources)

    # --------- 访问接口 ---------
    def get(self, path: str, default: Any | None = None) -> Any:
        """获取配置值（点路径）

        使用 ``a.b.c`` 形式访问嵌套字典，若不存在则返回 ``default``。

        Parameters
        ----------
        path : str
            点路径键名，例如 ``"logging.level"``。
        default : Any, optional
            当键不存在时返回的默认值。

        Returns
        -------
        Any
            对应的配置值或 ``default``。
        """
        return _get_by_path(self._resolved.data, path, default)

    # --------- 应用配置 ---------
    def apply_element_overrides(self, table: PeriodicTable | None = None) -> int:
        """将 ``elements.overrides`` 注册到元素性质表

        Parameters
        ----------
        table : PeriodicTable, optional
            目标性质表，默认为 :data:`PERIODIC_TABLE`

        Returns
        -------
        int
            注册的类型数量

        Raises
        ------
        FormatError
            如果 ``elements.overrides`` 不是映射，或其中某个类型无效
        """
        overrides = self.get("elements.overrides", {}) or {}
        if not isinstance(overrides, dict):
            raise FormatError(
                f"elements.overrides 必须是映射，得到: {type(overrides).__name__}"
            )
        try:
            (PERIODIC_TABLE if table is None else table).load_overrides(overrides)
        except (KeyError, ValueError, TypeError) as e:
            detail = e.args[0] if e.args else e
            raise FormatError(f"elements.overrides 无效: {detail}") from e
        return len(overrides)

    def apply_logging(self) -> None:
        """按 ``logging.*`` 配置根日志记录器"""
        setup_logging(
            level=self.get("logging.level", "WARNING"),
            fmt=self.get("logging.format"),
            datefmt=self.get("logging.datefmt"),
            log_file=self.get("logging.file"),
        )
