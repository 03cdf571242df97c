"""
核心模块 - 基础数据结构、错误模型和配置管理
"""

__all__ = [
    "Atom",
    "CellShape",
    "UnitCell",
    "UnitCellView",
    "ConfigManager",
    "PeriodicTable",
    "ElementData",
]

# 延迟导入避免循环依赖
def __getattr__(name):
    if name in ("Atom", "CellShape", "UnitCell", "UnitCellView"):
        from . import structure

        return getattr(structure, name)
    elif name == "ConfigManager":
        from .config import ConfigManager

        return ConfigManager
    elif name in ("PeriodicTable", "ElementData"):
        from . import periodic_table

        return getattr(periodic_table, name)
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
