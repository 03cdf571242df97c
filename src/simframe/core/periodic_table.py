#!/usr/bin/env python3
r"""
元素性质查询模块

该模块为原子类型提供元素性质查询：元素全名、原子序数、原子质量、
共价半径与范德华半径。查询以原子类型字符串为键，未收录的类型返回
``None``，由调用方决定缺省值（参见 :class:`simframe.core.structure.Atom`）。

主要组件：

ElementData
    单个元素（或力场类型）的性质数据类

PeriodicTable
    按类型符号查询的性质表，支持注册自定义力场类型

PERIODIC_TABLE
    默认性质表，收录 H 至 Pu 的元素

基本使用：
    >>> from simframe.core.periodic_table import lookup
    >>> lookup("He").name
    'Helium'
    >>> lookup("Xx") is None
    True

Notes
-----
原子质量单位为 amu，半径单位为 Å。未收录的范德华半径记为 ``-1.0``。

"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields, replace

logger = logging.getLogger(__name__)

MISSING_RADIUS: float = -1.0
"""未收录半径时使用的缺省值。"""

MISSING_ATOMIC_NUMBER: int = -1
"""未收录原子序数时使用的缺省值。"""


@dataclass(frozen=True)
class ElementData:
    """
    元素性质数据类

    使用 frozen=True 确保数据不可变，查询结果可以安全共享。

    Attributes
    ----------
    symbol : str
        类型符号，如 "He" 或力场类型 "CT"
    name : str
        元素全名，如 "Helium"
    atomic_number : int
        原子序数，未知时为 -1
    mass : float
        原子质量 (amu)
    covalent_radius : float
        共价半径 (Å)，未知时为 -1
    vdw_radius : float
        范德华半径 (Å)，未知时为 -1

    Examples
    --------
    >>> ElementData("CT", "Carbon", 6, 12.011, 0.77, 1.7)
    ElementData(symbol='CT', name='Carbon', atomic_number=6, mass=12.011, covalent_radius=0.77, vdw_radius=1.7)
    """

    symbol: str
    name: str
    atomic_number: int = MISSING_ATOMIC_NUMBER
    mass: float = 0.0
    covalent_radius: float = MISSING_RADIUS
    vdw_radius: float = MISSING_RADIUS

    def __post_init__(self):
        """参数验证"""
        if not self.symbol:
            raise ValueError("类型符号不能为空")

        if self.mass < 0:
            raise ValueError(f"原子质量不能为负数，得到: {self.mass}")

        for radius_name in ("covalent_radius", "vdw_radius"):
            radius = getattr(self, radius_name)
            if radius < 0 and radius != MISSING_RADIUS:
                raise ValueError(f"{radius_name} 必须非负或为 -1，得到: {radius}")

        if self.atomic_number < 0 and self.atomic_number != MISSING_ATOMIC_NUMBER:
            raise ValueError(f"原子序数必须非负或为 -1，得到: {self.atomic_number}")


# (原子序数, 符号, 全名, 质量 amu, 共价半径 Å, 范德华半径 Å)
_ELEMENTS = [
    (1, "H", "Hydrogen", 1.008, 0.37, 1.2),
    (2, "He", "Helium", 4.002602, 0.32, 1.4),
    (3, "Li", "Lithium", 6.94, 1.34, 1.82),
    (4, "Be", "Beryllium", 9.0121831, 0.90, 1.53),
    (5, "B", "Boron", 10.81, 0.82, 1.92),
    (6, "C", "Carbon", 12.011, 0.77, 1.7),
    (7, "N", "Nitrogen", 14.007, 0.75, 1.55),
    (8, "O", "Oxygen", 15.999, 0.73, 1.52),
    (9, "F", "Fluorine", 18.998403163, 0.71, 1.47),
    (10, "Ne", "Neon", 20.1797, 0.69, 1.54),
    (11, "Na", "Sodium", 22.98976928, 1.54, 2.27),
    (12, "Mg", "Magnesium", 24.305, 1.30, 1.73),
    (13, "Al", "Aluminum", 26.9815385, 1.18, 1.84),
    (14, "Si", "Silicon", 28.085, 1.11, 2.1),
    (15, "P", "Phosphorus", 30.973761998, 1.06, 1.8),
    (16, "S", "Sulfur", 32.06, 1.02, 1.8),
    (17, "Cl", "Chlorine", 35.45, 0.99, 1.75),
    (18, "Ar", "Argon", 39.948, 0.97, 1.88),
    (19, "K", "Potassium", 39.0983, 1.96, 2.75),
    (20, "Ca", "Calcium", 40.078, 1.74, 2.31),
    (21, "Sc", "Scandium", 44.955908, 1.44, 2.11),
    (22, "Ti", "Titanium", 47.867, 1.36, -1.0),
    (23, "V", "Vanadium", 50.9415, 1.25, -1.0),
    (24, "Cr", "Chromium", 51.9961, 1.27, -1.0),
    (25, "Mn", "Manganese", 54.938044, 1.39, -1.0),
    (26, "Fe", "Iron", 55.845, 1.25, -1.0),
    (27, "Co", "Cobalt", 58.933194, 1.26, -1.0),
    (28, "Ni", "Nickel", 58.6934, 1.21, 1.63),
    (29, "Cu", "Copper", 63.546, 1.38, 1.4),
    (30, "Zn", "Zinc", 65.38, 1.31, 1.39),
    (31, "Ga", "Gallium", 69.723, 1.26, 1.87),
    (32, "Ge", "Germanium", 72.630, 1.22, 2.11),
    (33, "As", "Arsenic", 74.921595, 1.19, 1.85),
    (34, "Se", "Selenium", 78.971, 1.16, 1.9),
    (35, "Br", "Bromine", 79.904, 1.14, 1.85),
    (36, "Kr", "Krypton", 83.798, 1.10, 2.02),
    (37, "Rb", "Rubidium", 85.4678, 2.11, 3.03),
    (38, "Sr", "Strontium", 87.62, 1.92, 2.49),
    (39, "Y", "Yttrium", 88.90584, 1.62, -1.0),
    (40, "Zr", "Zirconium", 91.224, 1.48, -1.0),
    (41, "Nb", "Niobium", 92.90637, 1.37, -1.0),
    (42, "Mo", "Molybdenum", 95.95, 1.45, -1.0),
    (43, "Tc", "Technetium", 98.0, 1.56, -1.0),
    (44, "Ru", "Ruthenium", 101.07, 1.26, -1.0),
    (45, "Rh", "Rhodium", 102.90550, 1.35, -1.0),
    (46, "Pd", "Palladium", 106.42, 1.31, 1.63),
    (47, "Ag", "Silver", 107.8682, 1.53, 1.72),
    (48, "Cd", "Cadmium", 112.414, 1.48, 1.58),
    (49, "In", "Indium", 114.818, 1.44, 1.93),
    (50, "Sn", "Tin", 118.710, 1.41, 2.17),
    (51, "Sb", "Antimony", 121.760, 1.38, 2.06),
    (52, "Te", "Tellurium", 127.60, 1.35, 2.06),
    (53, "I", "Iodine", 126.90447, 1.33, 1.98),
    (54, "Xe", "Xenon", 131.293, 1.30, 2.16),
    (55, "Cs", "Cesium", 132.90545196, 2.25, 3.43),
    (56, "Ba", "Barium", 137.327, 1.98, 2.68),
    (57, "La", "Lanthanum", 138.90547, 2.07, -1.0),
    (58, "Ce", "Cerium", 140.116, 2.04, -1.0),
    (59, "Pr", "Praseodymium", 140.90766, 2.03, -1.0),
    (60, "Nd", "Neodymium", 144.242, 2.01, -1.0),
    (61, "Pm", "Promethium", 145.0, 1.99, -1.0),
    (62, "Sm", "Samarium", 150.36, 1.98, -1.0),
    (63, "Eu", "Europium", 151.964, 1.98, -1.0),
    (64, "Gd", "Gadolinium", 157.25, 1.96, -1.0),
    (65, "Tb", "Terbium", 158.92535, 1.94, -1.0),
    (66, "Dy", "Dysprosium", 162.500, 1.92, -1.0),
    (67, "Ho", "Holmium", 164.93033, 1.92, -1.0),
    (68, "Er", "Erbium", 167.259, 1.89, -1.0),
    (69, "Tm", "Thulium", 168.93422, 1.90, -1.0),
    (70, "Yb", "Ytterbium", 173.045, 1.87, -1.0),
    (71, "Lu", "Lutetium", 174.9668, 1.87, -1.0),
    (72, "Hf", "Hafnium", 178.49, 1.50, -1.0),
    (73, "Ta", "Tantalum", 180.94788, 1.38, -1.0),
    (74, "W", "Tungsten", 183.84, 1.46, -1.0),
    (75, "Re", "Rhenium", 186.207, 1.59, -1.0),
    (76, "Os", "Osmium", 190.23, 1.28, -1.0),
    (77, "Ir", "Iridium", 192.217, 1.37, -1.0),
    (78, "Pt", "Platinum", 195.084, 1.28, 1.75),
    (79, "Au", "Gold", 196.966569, 1.44, 1.66),
    (80, "Hg", "Mercury", 200.592, 1.49, 1.55),
    (81, "Tl", "Thallium", 204.38, 1.48, 1.96),
    (82, "Pb", "Lead", 207.2, 1.47, 2.02),
    (83, "Bi", "Bismuth", 208.98040, 1.46, 2.07),
    (84, "Po", "Polonium", 209.0, 1.40, 1.97),
    (85, "At", "Astatine", 210.0, 1.50, 2.02),
    (86, "Rn", "Radon", 222.0, 1.45, 2.20),
    (87, "Fr", "Francium", 223.0, 2.60, 3.48),
    (88, "Ra", "Radium", 226.0, 2.21, 2.83),
    (89, "Ac", "Actinium", 227.0, 2.15, -1.0),
    (90, "Th", "Thorium", 232.0377, 2.06, -1.0),
    (91, "Pa", "Protactinium", 231.03588, 2.00, -1.0),
    (92, "U", "Uranium", 238.02891, 1.96, 1.86),
    (93, "Np", "Neptunium", 237.0, 1.90, -1.0),
    (94, "Pu", "Plutonium", 244.0, 1.87, -1.0),
]


class PeriodicTable:
    """
    按类型符号查询的元素性质表

    Parameters
    ----------
    entries : iterable of ElementData, optional
        初始条目；若为 ``None`` 则构建空表

    Examples
    --------
    注册一个力场类型，继承碳的性质：

    >>> table = PeriodicTable.default()
    >>> table.load_overrides({"CT": {"element": "C"}})
    >>> table.lookup("CT").atomic_number
    6
    """

    def __init__(self, entries=None) -> None:
        self._entries: dict[str, ElementData] = {}
        for entry in entries or ():
            self._entries[entry.symbol] = entry

    @classmethod
    def default(cls) -> PeriodicTable:
        """创建收录内置元素数据的新表"""
        return cls(
            ElementData(symbol, name, number, mass, covalent, vdw)
            for number, symbol, name, mass, covalent, vdw in _ELEMENTS
        )

    def lookup(self, symbol: str) -> ElementData | None:
        """查询类型符号对应的性质

        先按原样匹配；对不超过三个字符的符号，再尝试首字母大写的形式
        （如 ``"HE"``、``"he"`` → ``"He"``）。

        Parameters
        ----------
        symbol : str
            原子类型符号

        Returns
        -------
        ElementData or None
            未收录时返回 ``None``
        """
        entry = self._entries.get(symbol)
        if entry is None and 0 < len(symbol) <= 3:
            entry = self._entries.get(symbol.capitalize())
        return entry

    def register(self, entry: ElementData) -> None:
        """注册或替换一个条目"""
        if entry.symbol in self._entries:
            logger.debug(f"Replacing periodic table entry '{entry.symbol}'")
        self._entries[entry.symbol] = entry

    def load_overrides(self, overrides: Mapping[str, Mapping]) -> None:
        """根据配置注册自定义类型

        Parameters
        ----------
        overrides : Mapping
            ``{类型符号: {字段: 值}}``。字段可取 :class:`ElementData` 的字段名，
            另有 ``element`` 表示从已有元素继承未给出的字段。

        Raises
        ------
        KeyError
            如果 ``element`` 指向未收录的元素
        ValueError
            如果给出了未知字段或字段值无效
        """
        allowed = {f.name for f in fields(ElementData)} - {"symbol"}
        for symbol, values in (overrides or {}).items():
            values = dict(values or {})
            parent_symbol = values.pop("element", None)
            unknown = set(values) - allowed
            if unknown:
                raise ValueError(f"类型 '{symbol}' 包含未知字段: {sorted(unknown)}")

            if parent_symbol is not None:
                parent = self.lookup(str(parent_symbol))
                if parent is None:
                    raise KeyError(
                        f"Element '{parent_symbol}' for type '{symbol}' not found."
                    )
                entry = replace(parent, symbol=str(symbol), **values)
            else:
                values.setdefault("name", "")
                entry = ElementData(symbol=str(symbol), **values)

            self.register(entry)
            logger.info(f"Registered custom atom type '{symbol}'")

    def __contains__(self, symbol) -> bool:
        return isinstance(symbol, str) and self.lookup(symbol) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ElementData]:
        return iter(self._entries.values())


PERIODIC_TABLE = PeriodicTable.default()
"""默认元素性质表，:class:`Atom` 默认在此表中查询。"""


def lookup(symbol: str) -> ElementData | None:
    """在默认性质表 :data:`PERIODIC_TABLE` 中查询类型符号"""
    return PERIODIC_TABLE.lookup(symbol)
