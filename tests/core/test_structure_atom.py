"""
Atom类的单元测试

测试覆盖：
- 构造器和初始化
- 属性访问和修改
- 元素性质查询与缺省值
- 拷贝与相等性
"""

import copy

import pytest

from simframe.core.periodic_table import ElementData, PeriodicTable
from simframe.core.structure import Atom


class TestAtomConstructor:
    """测试Atom构造器"""

    def test_name_seeds_type(self):
        """测试名称同时作为初始类型"""
        atom = Atom("He")
        assert atom.name == "He"
        assert atom.type == "He"

    def test_mass_from_periodic_table(self):
        """测试质量按类型查询"""
        atom = Atom("He")
        assert atom.mass == pytest.approx(4.002602, abs=1e-6)

    def test_default_charge(self):
        """测试默认电荷为零"""
        assert Atom("He").charge == 0.0

    def test_unknown_type_mass_is_zero(self):
        """测试未收录类型的质量为零"""
        assert Atom("Xx").mass == 0.0

    def test_explicit_overrides(self):
        """测试构造时显式给出类型、质量和电荷"""
        atom = Atom("OW", atom_type="O", mass=15.9994, charge=-0.834)
        assert atom.name == "OW"
        assert atom.type == "O"
        assert atom.mass == 15.9994
        assert atom.charge == -0.834
        assert atom.full_name == "Oxygen"

    def test_empty_name_allowed(self):
        """测试允许空名称"""
        atom = Atom("")
        assert atom.name == ""
        assert atom.full_name == ""


class TestAtomProperties:
    """测试属性访问和修改"""

    def test_mass(self, sample_atom):
        """测试质量修改"""
        sample_atom.mass = 15.0
        assert sample_atom.mass == 15.0

    def test_charge(self, sample_atom):
        """测试电荷修改"""
        sample_atom.charge = -1.5
        assert sample_atom.charge == -1.5

    def test_name(self, sample_atom):
        """测试名称修改"""
        sample_atom.name = "Zn-12"
        assert sample_atom.name == "Zn-12"
        # 类型不随名称变化
        assert sample_atom.type == "He"

    def test_type_change_updates_lookups(self, sample_atom):
        """测试修改类型后查询结果随之变化"""
        assert sample_atom.full_name == "Helium"

        sample_atom.type = "Zn"
        assert sample_atom.type == "Zn"
        assert sample_atom.full_name == "Zinc"
        assert sample_atom.atomic_number == 30

    def test_type_change_keeps_mass_and_charge(self, sample_atom):
        """测试修改类型不会重新计算质量和电荷"""
        sample_atom.charge = 0.5
        sample_atom.type = "Zn"
        assert sample_atom.mass == pytest.approx(4.002602, abs=1e-6)
        assert sample_atom.charge == 0.5

    def test_scalar_conversion(self, sample_atom):
        """测试标量属性转换为float"""
        sample_atom.mass = 3
        sample_atom.charge = -1
        assert isinstance(sample_atom.mass, float)
        assert isinstance(sample_atom.charge, float)


class TestAtomLookups:
    """测试元素性质查询"""

    def test_radii(self, sample_atom):
        """测试半径查询"""
        assert sample_atom.vdw_radius == pytest.approx(1.4, abs=1e-2)
        assert sample_atom.covalent_radius == pytest.approx(0.32, abs=1e-3)

    def test_atomic_number(self, sample_atom):
        """测试原子序数"""
        assert sample_atom.atomic_number == 2

    def test_unknown_type_sentinels(self):
        """测试未收录类型返回缺省值而不是报错"""
        atom = Atom("Xx")
        assert atom.full_name == ""
        assert atom.vdw_radius == -1
        assert atom.covalent_radius == -1
        assert atom.atomic_number == -1

    def test_missing_vdw_radius(self):
        """测试收录元素但缺少范德华半径"""
        atom = Atom("Fe")
        assert atom.full_name == "Iron"
        assert atom.vdw_radius == -1
        assert atom.covalent_radius > 0

    def test_case_insensitive_symbol(self):
        """测试大小写不同的元素符号"""
        assert Atom("HE").full_name == "Helium"
        assert Atom("cl").atomic_number == 17

    def test_custom_table(self):
        """测试使用自定义元素性质表"""
        table = PeriodicTable([ElementData("CT", "Carbon", 6, 12.011, 0.77, 1.7)])
        atom = Atom("CT", table=table)
        assert atom.mass == 12.011
        assert atom.atomic_number == 6
        # 默认表中的元素在自定义表中不存在
        atom.type = "He"
        assert atom.full_name == ""


class TestAtomCopy:
    """测试拷贝与相等性"""

    def test_copy_is_independent(self, sample_atom):
        """测试拷贝后互不影响"""
        clone = sample_atom.copy()
        assert clone == sample_atom

        clone.name = "X"
        clone.mass = 1.0
        assert sample_atom.name == "He"
        assert sample_atom.mass == pytest.approx(4.002602, abs=1e-6)
        assert clone != sample_atom

    def test_copy_module(self, sample_atom):
        """测试copy模块的浅拷贝和深拷贝"""
        shallow = copy.copy(sample_atom)
        deep = copy.deepcopy(sample_atom)
        assert shallow == sample_atom
        assert deep == sample_atom
        assert shallow is not sample_atom
        assert deep is not sample_atom

    def test_unhashable(self, sample_atom):
        """测试可变对象不可哈希"""
        with pytest.raises(TypeError):
            hash(sample_atom)

    def test_repr(self, sample_atom):
        """测试字符串表示"""
        text = repr(sample_atom)
        assert "He" in text
        assert text.startswith("Atom(")
