"""
SimFrame - 模拟帧数据模型

描述分子模拟单帧中的原子元数据与周期性晶胞：晶胞长度/角度与矩阵表示的
相互转换、体积计算以及周期性边界条件下的矢量折叠。
"""

__version__ = "1.0.0"

from collections.abc import Iterable

from . import core, utils
from .core.config import ConfigManager
from .core.errors import (
    AllocationError,
    EngineError,
    ErrorKind,
    FileError,
    FormatError,
    InternalError,
    InvalidArgumentError,
    InvalidOperationError,
    InvalidPathError,
    SelectionError,
    SimFrameError,
)
from .core.structure import Atom, CellShape, UnitCell, UnitCellView

__all__ = [
    "core",
    "utils",
    "configure",
    "Atom",
    "CellShape",
    "UnitCell",
    "UnitCellView",
    "ConfigManager",
    "ErrorKind",
    "SimFrameError",
    "FileError",
    "FormatError",
    "AllocationError",
    "SelectionError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "InvalidPathError",
    "InternalError",
    "EngineError",
]


def configure(files: Iterable[str] | None = None) -> ConfigManager:
    """加载配置并应用到日志与默认元素性质表

    Parameters
    ----------
    files : Iterable[str] | None, optional
        用户 YAML 配置文件，后者覆盖前者

    Returns
    -------
    ConfigManager
        已加载的配置
    """
    cfg = ConfigManager(files=files)
    cfg.apply_logging()
    cfg.apply_element_overrides()
    return cfg
