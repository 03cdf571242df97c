"""
pytest配置文件 - 提供全局fixtures和测试配置
"""

import logging

import numpy as np
import pytest

from simframe.core.periodic_table import PERIODIC_TABLE
from simframe.core.structure import Atom, UnitCell


@pytest.fixture
def sample_atom():
    """创建一个标准的氦原子用于测试"""
    return Atom("He")


@pytest.fixture
def orthorhombic_cell():
    """创建正交晶胞"""
    return UnitCell([10.0, 20.0, 30.0])


@pytest.fixture
def triclinic_cell():
    """创建三斜晶胞用于测试复杂情况"""
    return UnitCell.triclinic([10.0, 12.0, 15.0], [80.0, 95.0, 105.0])


@pytest.fixture
def infinite_cell():
    """创建无限晶胞"""
    return UnitCell.infinite()


@pytest.fixture
def valid_cell_parameters():
    """提供多组合法的 (长度, 角度) 用于往返测试"""
    return [
        ([10.0, 10.0, 10.0], [90.0, 90.0, 90.0]),
        ([10.0, 10.0, 10.0], [98.0, 99.0, 90.0]),
        ([20.0, 20.0, 20.0], [100.0, 120.0, 90.0]),
        ([1.0, 2.0, 3.0], [80.0, 90.0, 100.0]),
        ([5.43, 5.43, 5.43], [60.0, 60.0, 60.0]),
        ([3.2, 7.5, 11.1], [110.0, 75.0, 62.0]),
        ([4.0, 4.0, 6.0], [90.0, 90.0, 120.0]),
    ]


@pytest.fixture
def restore_periodic_table():
    """测试结束后恢复默认元素性质表"""
    saved = dict(PERIODIC_TABLE._entries)
    yield PERIODIC_TABLE
    PERIODIC_TABLE._entries.clear()
    PERIODIC_TABLE._entries.update(saved)


@pytest.fixture
def restore_root_logger():
    """测试结束后恢复根日志记录器的级别与handlers"""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    handler_levels = [h.level for h in handlers]
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h, handler_level in zip(handlers, handler_levels):
        if h not in root.handlers:
            root.addHandler(h)
        h.setLevel(handler_level)
    root.setLevel(level)


# 全局测试配置
def pytest_configure(config):
    """pytest全局配置"""
    # 设置numpy错误处理
    np.seterr(all="raise")


def pytest_runtest_setup(item):
    """每个测试前的设置"""
    # 设置随机种子确保可重现性
    np.random.seed(42)
