#!/usr/bin/env python3
r"""
模拟帧结构模块

该模块提供模拟帧中的基础数据结构：原子元数据与周期性晶胞。
晶胞部分实现了 (长度, 角度) 与上三角矩阵之间的相互转换、体积计算
以及周期性边界条件下的矢量折叠。

理论基础
--------
晶胞矩阵采用列向量记号，三列依次为基矢 :math:`\mathbf{a}, \mathbf{b}, \mathbf{c}`。
将 :math:`\mathbf{a}` 沿 x 轴、:math:`\mathbf{b}` 置于 xy 平面，得到上三角矩阵：

.. math::
    \mathbf{H} = \begin{pmatrix}
        a_x & b_x & c_x \\
        0   & b_y & c_y \\
        0   & 0   & c_z
    \end{pmatrix}

由长度 :math:`(a, b, c)` 与角度 :math:`(\alpha, \beta, \gamma)` 构造：

.. math::
    a_x = a,\quad
    b_x = b\cos\gamma,\quad b_y = b\sin\gamma,\quad
    c_x = c\cos\beta,\quad
    c_y = c\,\frac{\cos\alpha - \cos\beta\cos\gamma}{\sin\gamma},\quad
    c_z = \sqrt{c^2 - c_x^2 - c_y^2}

分数/笛卡尔坐标：

.. math::
    \mathbf{r} = \mathbf{H}\,\mathbf{s},\qquad
    \mathbf{s} = \mathbf{H}^{-1}\,\mathbf{r}

:math:`\mathbf{H}` 为上三角矩阵，:math:`\mathbf{H}^{-1}\mathbf{r}` 通过回代求解。

矢量折叠（最小镜像）：

.. math::
    \mathbf{r}_{\min} = \mathbf{H}\,(\mathbf{s} - \operatorname{rint}(\mathbf{s}))

``rint`` 为就近取整，恰好位于 0.5 处时取偶数（round half to even）。
与半整数相差在容差内的分数坐标先归为该半整数，避免舍入误差使
边界上的点在重复折叠时跳到另一侧。

Classes
-------
Atom
    单个粒子的元数据：名称、类型、质量、电荷以及元素性质查询
CellShape
    晶胞形状：正交、三斜、无限
UnitCell
    周期性晶胞，管理晶胞矩阵与形状
UnitCellView
    晶胞的只读视图

Functions
---------
_wrap_numba
    JIT优化的矢量折叠函数

Notes
-----
所有长度单位为埃(Å)，角度单位为度，质量单位为 amu，电荷单位为元电荷。

Examples
--------
>>> from simframe.core.structure import Atom, UnitCell
>>> cell = UnitCell([10.0, 20.0, 30.0])
>>> cell.wrap([12.0, 5.2, -45.3])
array([ 2. ,  5.2, 14.7])
>>> Atom("He").full_name
'Helium'
"""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np
from numba import jit

from simframe.core.errors import InvalidArgumentError, InvalidOperationError
from simframe.core.periodic_table import (
    MISSING_ATOMIC_NUMBER,
    MISSING_RADIUS,
    PERIODIC_TABLE,
    ElementData,
    PeriodicTable,
)

# 配置日志记录
logger = logging.getLogger(__name__)

# c_z 被开方数的相对容差，超出即认为角度无法构成平行六面体
_DEGENERACY_TOLERANCE = 1e-10

# 折叠时分数坐标视为恰好位于半整数的容差
_HALF_TOLERANCE = 1e-10


@jit(nopython=True)
def _to_fractional_numba(vectors, matrix):
    """JIT优化的笛卡尔坐标到分数坐标转换（上三角回代）

    Parameters
    ----------
    vectors : numpy.ndarray
        笛卡尔矢量数组 (N, 3)
    matrix : numpy.ndarray
        上三角晶胞矩阵 (3, 3)

    Returns
    -------
    numpy.ndarray
        分数坐标数组 (N, 3)
    """
    fractional = np.empty_like(vectors)
    for i in range(vectors.shape[0]):
        fz = vectors[i, 2] / matrix[2, 2]
        fy = (vectors[i, 1] - matrix[1, 2] * fz) / matrix[1, 1]
        fx = (vectors[i, 0] - matrix[0, 1] * fy - matrix[0, 2] * fz) / matrix[0, 0]
        fractional[i, 0] = fx
        fractional[i, 1] = fy
        fractional[i, 2] = fz
    return fractional


@jit(nopython=True)
def _to_cartesian_numba(fractional, matrix):
    """JIT优化的分数坐标到笛卡尔坐标转换"""
    cartesian = np.empty_like(fractional)
    for i in range(fractional.shape[0]):
        fx = fractional[i, 0]
        fy = fractional[i, 1]
        fz = fractional[i, 2]
        cartesian[i, 0] = matrix[0, 0] * fx + matrix[0, 1] * fy + matrix[0, 2] * fz
        cartesian[i, 1] = matrix[1, 1] * fy + matrix[1, 2] * fz
        cartesian[i, 2] = matrix[2, 2] * fz
    return cartesian


@jit(nopython=True)
def _wrap_numba(vectors, matrix):
    """JIT优化的矢量折叠

    Parameters
    ----------
    vectors : numpy.ndarray
        笛卡尔矢量数组 (N, 3)
    matrix : numpy.ndarray
        上三角晶胞矩阵 (3, 3)，对角元均非零

    Returns
    -------
    numpy.ndarray
        折叠后的矢量数组 (N, 3)

    Notes
    -----
    与半整数相差不超过 ``_HALF_TOLERANCE * max(1, |s|)`` 的分数坐标先归为
    该半整数再取整，保证重复折叠结果不变。
    """
    fractional = _to_fractional_numba(vectors, matrix)
    for i in range(fractional.shape[0]):
        for k in range(3):
            f = fractional[i, k]
            half = np.floor(f) + 0.5
            if abs(f - half) <= _HALF_TOLERANCE * max(1.0, abs(f)):
                f = half
            fractional[i, k] = f - np.rint(f)
    return _to_cartesian_numba(fractional, matrix)


def _as_triplet(values, what: str) -> np.ndarray:
    """将输入转换为 3 个有限浮点数组成的数组"""
    try:
        array = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{what}必须是3个数值，得到: {values!r}") from e

    if array.shape != (3,):
        raise InvalidArgumentError(f"{what}必须是3个数值，当前形状: {array.shape}")

    if not np.all(np.isfinite(array)):
        raise InvalidArgumentError(f"{what}包含无效值: {array}")

    return array


def _check_lengths(lengths, strictly_positive: bool = False) -> np.ndarray:
    lengths = _as_triplet(lengths, "晶胞长度")
    if np.any(lengths < 0):
        raise InvalidArgumentError(f"晶胞长度不能为负数，得到: {lengths}")
    if strictly_positive and np.any(lengths == 0):
        raise InvalidArgumentError(f"三斜晶胞的长度必须为正数，得到: {lengths}")
    return lengths


def _check_angles(angles) -> np.ndarray:
    angles = _as_triplet(angles, "晶胞角度")
    if np.any(angles <= 0) or np.any(angles >= 180):
        raise InvalidArgumentError(f"晶胞角度必须在 (0, 180) 度之间，得到: {angles}")
    return angles


def _cos_sin_deg(angle: float) -> tuple[float, float]:
    """角度的余弦与正弦，90° 时返回精确的 (0, 1)"""
    if angle == 90.0:
        return 0.0, 1.0
    radians = np.deg2rad(angle)
    return float(np.cos(radians)), float(np.sin(radians))


def _triclinic_matrix(lengths: np.ndarray, angles: np.ndarray) -> np.ndarray:
    """由长度与角度构造上三角晶胞矩阵

    Parameters
    ----------
    lengths : numpy.ndarray
        已验证的长度 (a, b, c)，单位 Å
    angles : numpy.ndarray
        已验证的角度 (alpha, beta, gamma)，单位度

    Returns
    -------
    numpy.ndarray
        上三角晶胞矩阵 (3, 3)，各列为基矢

    Raises
    ------
    InvalidArgumentError
        如果三个角度无法构成平行六面体
    """
    a, b, c = lengths
    cos_alpha, _ = _cos_sin_deg(angles[0])
    cos_beta, _ = _cos_sin_deg(angles[1])
    cos_gamma, sin_gamma = _cos_sin_deg(angles[2])
    if sin_gamma <= 0:
        raise InvalidArgumentError(f"角度 {angles} 无法构成有效的晶胞")

    c_x = c * cos_beta
    c_y = c * (cos_alpha - cos_beta * cos_gamma) / sin_gamma
    radicand = c * c - c_x * c_x - c_y * c_y

    if not np.isfinite(radicand) or radicand < -_DEGENERACY_TOLERANCE * c * c:
        raise InvalidArgumentError(f"角度 {angles} 无法构成有效的晶胞")

    # 舍入误差可能使被开方数略小于零
    c_z = np.sqrt(max(radicand, 0.0))

    return np.array(
        [
            [a, b * cos_gamma, c_x],
            [0.0, b * sin_gamma, c_y],
            [0.0, 0.0, c_z],
        ],
        dtype=np.float64,
    )


def _angle_between(u: np.ndarray, v: np.ndarray) -> float:
    """两个矢量的夹角（度）；任一矢量长度为零时返回 90"""
    norms = np.linalg.norm(u) * np.linalg.norm(v)
    if norms == 0:
        return 90.0
    cosine = np.clip(np.dot(u, v) / norms, -1.0, 1.0)
    return float(np.rad2deg(np.arccos(cosine)))


class Atom:
    r"""原子对象，模拟帧中单个粒子的元数据

    原子只记录名称、类型、质量与电荷，不包含位置。元素全名、范德华半径、
    共价半径与原子序数根据当前类型在元素性质表中实时查询，不做存储。

    Parameters
    ----------
    name : str
        原子名称，同时作为初始类型
    atom_type : str, optional
        原子类型，默认与 ``name`` 相同
    mass : float, optional
        原子质量 (amu)，默认按类型查询，未收录的类型为 0
    charge : float, optional
        电荷（元电荷），默认为 0
    table : PeriodicTable, optional
        元素性质表，默认使用 :data:`simframe.core.periodic_table.PERIODIC_TABLE`

    Attributes
    ----------
    name : str
        原子名称
    type : str
        原子类型，用于性质查询
    mass : float
        原子质量 (amu)
    charge : float
        电荷（元电荷）

    Notes
    -----
    修改 ``type`` 不会重新计算 ``mass`` 与 ``charge``，二者完全由用户管理。
    类型未收录时，查询返回缺省值：全名为 ``""``，半径为 ``-1``，原子序数为 ``-1``。

    Examples
    --------
    >>> atom = Atom("He")
    >>> atom.mass
    4.002602
    >>> atom.type = "Zn"
    >>> atom.full_name
    'Zinc'
    >>> atom.mass  # 质量不随类型变化
    4.002602
    """

    def __init__(
        self,
        name: str,
        atom_type: str | None = None,
        mass: float | None = None,
        charge: float = 0.0,
        table: PeriodicTable | None = None,
    ) -> None:
        self._table = table
        self._name = str(name)
        self._type = self._name if atom_type is None else str(atom_type)

        if mass is None:
            element = self._element()
            mass = element.mass if element is not None else 0.0
        self._mass = float(mass)
        self._charge = float(charge)

    def _element(self) -> ElementData | None:
        table = self._table if self._table is not None else PERIODIC_TABLE
        return table.lookup(self._type)

    @property
    def name(self) -> str:
        """原子名称"""
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = str(value)

    @property
    def type(self) -> str:
        """原子类型"""
        return self._type

    @type.setter
    def type(self, value: str) -> None:
        self._type = str(value)

    @property
    def mass(self) -> float:
        """原子质量 (amu)"""
        return self._mass

    @mass.setter
    def mass(self, value: float) -> None:
        self._mass = float(value)

    @property
    def charge(self) -> float:
        """电荷（元电荷）"""
        return self._charge

    @charge.setter
    def charge(self, value: float) -> None:
        self._charge = float(value)

    @property
    def full_name(self) -> str:
        """元素全名，类型未收录时为空字符串"""
        element = self._element()
        return element.name if element is not None else ""

    @property
    def vdw_radius(self) -> float:
        """范德华半径 (Å)，未知时为 -1"""
        element = self._element()
        return element.vdw_radius if element is not None else MISSING_RADIUS

    @property
    def covalent_radius(self) -> float:
        """共价半径 (Å)，未知时为 -1"""
        element = self._element()
        return element.covalent_radius if element is not None else MISSING_RADIUS

    @property
    def atomic_number(self) -> int:
        """原子序数，未知时为 -1"""
        element = self._element()
        return element.atomic_number if element is not None else MISSING_ATOMIC_NUMBER

    def copy(self) -> Atom:
        """创建 Atom 的副本

        Returns
        -------
        Atom
            新的 Atom 对象，与原对象互不影响

        Examples
        --------
        >>> atom1 = Atom("He")
        >>> atom2 = atom1.copy()
        >>> atom2.name = "X"
        >>> atom1.name
        'He'
        """
        return Atom(
            self._name,
            atom_type=self._type,
            mass=self._mass,
            charge=self._charge,
            table=self._table,
        )

    def __copy__(self) -> Atom:
        return self.copy()

    def __deepcopy__(self, memo) -> Atom:
        return self.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Atom):
            return NotImplemented
        return (
            self._name == other._name
            and self._type == other._type
            and self._mass == other._mass
            and self._charge == other._charge
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Atom(name={self._name!r}, type={self._type!r}, "
            f"mass={self._mass}, charge={self._charge})"
        )


class CellShape(str, Enum):
    """晶胞形状"""

    ORTHORHOMBIC = "orthorhombic"
    """正交晶胞，三个角度均为 90°"""

    TRICLINIC = "triclinic"
    """三斜晶胞，角度任意"""

    INFINITE = "infinite"
    """无限晶胞，没有周期性"""


class UnitCell:
    r"""晶胞对象，描述模拟帧的周期性盒子

    晶胞内部以上三角矩阵为唯一数据源，长度与角度在读取时由矩阵计算。
    形状决定哪些修改合法：

    ``ORTHORHOMBIC``
        角度固定为 90°，不能修改角度
    ``TRICLINIC``
        长度与角度均可修改
    ``INFINITE``
        报告长度 (0, 0, 0)、角度 (90, 90, 90)、体积 0，折叠为恒等变换；
        存储的矩阵保持不变

    Parameters
    ----------
    lengths : array_like
        三个边长 (a, b, c)，单位 Å，必须有限且非负

    Attributes
    ----------
    lengths : numpy.ndarray
        三个边长 (Å)
    angles : numpy.ndarray
        三个角度 (alpha, beta, gamma)，单位度
    matrix : numpy.ndarray
        上三角晶胞矩阵 (3, 3) 的副本
    shape : CellShape
        晶胞形状
    volume : float
        晶胞体积 (Å³)

    Raises
    ------
    InvalidArgumentError
        如果长度不是 3 个有限的非负数

    Notes
    -----
    长度为零的正交晶胞是合法的，形状仍为 ``ORTHORHOMBIC``，不会自动变为
    ``INFINITE``；这样的晶胞不能用于折叠。

    Examples
    --------
    >>> cell = UnitCell([30.0, 30.0, 23.0])
    >>> cell.angles
    array([90., 90., 90.])
    >>> cell = UnitCell.triclinic([10.0, 10.0, 10.0], [98.0, 99.0, 90.0])
    >>> cell.shape
    <CellShape.TRICLINIC: 'triclinic'>
    """

    def __init__(self, lengths) -> None:
        lengths = _check_lengths(lengths)
        if np.any(lengths == 0) and np.any(lengths != 0):
            logger.warning(f"Orthorhombic cell with a zero length: {lengths}")
        self._matrix = np.diag(lengths)
        self._shape = CellShape.ORTHORHOMBIC

    @classmethod
    def infinite(cls) -> UnitCell:
        """创建无限晶胞

        Returns
        -------
        UnitCell
            长度为零、形状为 ``INFINITE`` 的晶胞
        """
        cell = cls([0.0, 0.0, 0.0])
        cell.set_shape(CellShape.INFINITE)
        return cell

    @classmethod
    def triclinic(cls, lengths, angles) -> UnitCell:
        """由长度与角度创建三斜晶胞

        ``alpha`` 为 b 与 c 的夹角，``beta`` 为 a 与 c 的夹角，``gamma`` 为 a 与 b 的夹角。

        Parameters
        ----------
        lengths : array_like
            三个边长 (Å)，必须为正数
        angles : array_like
            三个角度（度），必须在 (0, 180) 之间

        Returns
        -------
        UnitCell
            形状为 ``TRICLINIC`` 的晶胞

        Raises
        ------
        InvalidArgumentError
            如果长度或角度无效，或角度无法构成平行六面体

        Examples
        --------
        >>> cell = UnitCell.triclinic([20.0, 20.0, 20.0], [100.0, 120.0, 90.0])
        >>> np.allclose(cell.angles, [100.0, 120.0, 90.0])
        True
        """
        lengths = _check_lengths(lengths, strictly_positive=True)
        angles = _check_angles(angles)
        matrix = _triclinic_matrix(lengths, angles)

        cell = cls.__new__(cls)
        cell._matrix = matrix
        cell._shape = CellShape.TRICLINIC
        return cell

    @classmethod
    def from_matrix(cls, matrix) -> UnitCell:
        """由上三角矩阵创建晶胞

        Parameters
        ----------
        matrix : array_like
            3×3 上三角矩阵，各列为基矢，对角元非负

        Returns
        -------
        UnitCell
            非对角元全为零时为 ``ORTHORHOMBIC``，否则为 ``TRICLINIC``

        Raises
        ------
        InvalidArgumentError
            如果矩阵形状错误、包含无效值、不是上三角或对角元为负；
            非对角元不全为零时对角元必须为正数，且导出的角度在 (0, 180) 之间
        """
        try:
            matrix = np.array(matrix, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"晶胞矩阵无效: {matrix!r}") from e

        if matrix.shape != (3, 3):
            raise InvalidArgumentError(f"晶胞矩阵必须是3x3矩阵，当前形状: {matrix.shape}")

        if not np.all(np.isfinite(matrix)):
            raise InvalidArgumentError("晶胞矩阵包含无效值")

        if np.any(np.tril(matrix, k=-1) != 0):
            raise InvalidArgumentError(f"晶胞矩阵必须是上三角矩阵:\n{matrix}")

        if np.any(np.diag(matrix) < 0):
            raise InvalidArgumentError(f"晶胞矩阵的对角元不能为负数: {np.diag(matrix)}")

        if not np.any(np.triu(matrix, k=1) != 0):
            return cls(np.diag(matrix))

        if np.any(np.diag(matrix) == 0):
            raise InvalidArgumentError(
                f"三斜晶胞矩阵的对角元必须为正数: {np.diag(matrix)}"
            )

        cell = cls.__new__(cls)
        cell._matrix = matrix
        cell._shape = CellShape.TRICLINIC
        _check_angles(cell.angles)
        return cell

    # --------- 长度与角度 ---------
    @property
    def lengths(self) -> np.ndarray:
        """三个边长 (a, b, c)，单位 Å"""
        if self._shape is CellShape.INFINITE:
            return np.zeros(3)
        if self._shape is CellShape.ORTHORHOMBIC:
            return np.diag(self._matrix).copy()
        return np.linalg.norm(self._matrix, axis=0)

    def set_lengths(self, lengths) -> None:
        """设置三个边长，保持角度不变

        Parameters
        ----------
        lengths : array_like
            新的边长 (Å)

        Raises
        ------
        InvalidArgumentError
            如果长度无效
        InvalidOperationError
            如果晶胞为 ``INFINITE``

        Examples
        --------
        >>> cell = UnitCell([30.0, 30.0, 23.0])
        >>> cell.set_lengths([10.0, 30.0, 42.0])
        >>> cell.lengths
        array([10., 30., 42.])
        """
        if self._shape is CellShape.INFINITE:
            raise InvalidOperationError("不能修改无限晶胞的长度，请先修改晶胞形状")

        if self._shape is CellShape.ORTHORHOMBIC:
            matrix = np.diag(_check_lengths(lengths))
        else:
            lengths = _check_lengths(lengths, strictly_positive=True)
            matrix = _triclinic_matrix(lengths, self.angles)

        self._matrix = matrix
        logger.debug(f"Cell lengths set to {lengths}")

    @property
    def angles(self) -> np.ndarray:
        """三个角度 (alpha, beta, gamma)，单位度

        正交与无限晶胞总是精确返回 (90, 90, 90)。
        """
        if self._shape is not CellShape.TRICLINIC:
            return np.full(3, 90.0)

        a, b, c = self._matrix.T
        return np.array(
            [_angle_between(b, c), _angle_between(a, c), _angle_between(a, b)]
        )

    def set_angles(self, angles) -> None:
        """设置三个角度，仅适用于三斜晶胞

        Parameters
        ----------
        angles : array_like
            新的角度（度），必须在 (0, 180) 之间

        Raises
        ------
        InvalidOperationError
            如果晶胞不是 ``TRICLINIC``
        InvalidArgumentError
            如果角度无效，或当前长度含零

        Examples
        --------
        >>> cell = UnitCell.triclinic([20.0, 20.0, 20.0], [100.0, 120.0, 90.0])
        >>> cell.set_angles([90.0, 90.0, 90.0])
        >>> cell.angles
        array([90., 90., 90.])
        """
        if self._shape is not CellShape.TRICLINIC:
            raise InvalidOperationError(
                f"只能修改三斜晶胞的角度，当前形状: {self._shape.value}"
            )

        angles = _check_angles(angles)
        lengths = _check_lengths(self.lengths, strictly_positive=True)
        self._matrix = _triclinic_matrix(lengths, angles)
        logger.debug(f"Cell angles set to {angles}")

    # --------- 矩阵、形状与体积 ---------
    @property
    def matrix(self) -> np.ndarray:
        r"""上三角晶胞矩阵的副本

        .. code-block:: text

            | a_x   b_x   c_x |
            |  0    b_y   c_y |
            |  0     0    c_z |
        """
        return self._matrix.copy()

    @property
    def shape(self) -> CellShape:
        """晶胞形状"""
        return self._shape

    def set_shape(self, shape: CellShape | str) -> None:
        """修改晶胞形状

        Parameters
        ----------
        shape : CellShape or str
            新的形状

        Raises
        ------
        InvalidArgumentError
            如果形状名称未知

        Notes
        -----
        ``ORTHORHOMBIC``
            用当前存储的长度重建矩阵，角度归为 90°
        ``TRICLINIC``
            矩阵保持不变
        ``INFINITE``
            只改变报告的长度、角度与体积，矩阵保持不变
        """
        if isinstance(shape, str):
            shape = shape.lower()
        try:
            shape = CellShape(shape)
        except ValueError as e:
            raise InvalidArgumentError(f"未知的晶胞形状: {shape!r}") from e

        if shape is CellShape.ORTHORHOMBIC:
            self._matrix = np.diag(np.linalg.norm(self._matrix, axis=0))

        logger.debug(f"Cell shape changed from {self._shape.value} to {shape.value}")
        self._shape = shape

    @property
    def volume(self) -> float:
        r"""晶胞体积 (Å³)

        矩阵为上三角，体积等于对角元之积：

        .. math::
            V = a_x\, b_y\, c_z

        无限晶胞的体积为 0。
        """
        if self._shape is CellShape.INFINITE:
            return 0.0
        diagonal = np.diag(self._matrix)
        return float(diagonal[0] * diagonal[1] * diagonal[2])

    # --------- 周期性折叠 ---------
    def _prepare_vectors(self, vectors) -> tuple[np.ndarray, bool]:
        try:
            array = np.array(vectors, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"矢量无效: {vectors!r}") from e

        single = array.ndim == 1
        if single:
            array = array.reshape(1, -1)

        if array.ndim != 2 or array.shape[1] != 3:
            raise InvalidArgumentError(
                f"矢量必须是 (3,) 或 (N, 3) 形状，当前形状: {np.shape(vectors)}"
            )

        if not np.all(np.isfinite(array)):
            raise InvalidArgumentError("矢量包含无效值")

        return np.ascontiguousarray(array), single

    def _check_periodic(self) -> None:
        if np.any(np.diag(self._matrix) == 0):
            raise InvalidArgumentError(
                f"晶胞矩阵的对角元含零，无法进行周期性折叠: {np.diag(self._matrix)}"
            )

    def wrap(self, vector) -> np.ndarray:
        r"""将矢量折叠到晶胞内（最小镜像）

        算法（列向量记号）：

        .. math::
            \mathbf{s} = \mathbf{H}^{-1}\,\mathbf{r},\qquad
            \mathbf{s}' = \mathbf{s} - \operatorname{rint}(\mathbf{s}),\qquad
            \mathbf{r}' = \mathbf{H}\,\mathbf{s}'

        Parameters
        ----------
        vector : array_like
            笛卡尔矢量，形状为 (3,) 或 (N, 3)

        Returns
        -------
        numpy.ndarray
            折叠后的新矢量，保持输入形状；无限晶胞返回输入的副本

        Raises
        ------
        InvalidArgumentError
            如果矢量形状错误或包含非有限值，或晶胞矩阵对角元含零

        Notes
        -----
        ``rint`` 对恰好位于 0.5 的分数坐标取偶数，因此分数坐标落在
        :math:`[-0.5, 0.5]` 内，边界上的点按取偶规则归属。与半整数相差
        不超过 ``1e-10 * max(1, |s|)`` 的分数坐标按恰好位于边界处理，
        因此 ``wrap(wrap(v))`` 与 ``wrap(v)`` 相同。

        Examples
        --------
        >>> cell = UnitCell([10.0, 20.0, 30.0])
        >>> cell.wrap([12.0, 5.2, -45.3])
        array([ 2. ,  5.2, 14.7])
        """
        vectors, single = self._prepare_vectors(vector)

        if self._shape is CellShape.INFINITE:
            wrapped = vectors
        else:
            self._check_periodic()
            wrapped = _wrap_numba(vectors, self._matrix)

        return wrapped[0].copy() if single else wrapped.copy()

    def fractional(self, vector) -> np.ndarray:
        """笛卡尔矢量转换为分数坐标

        Parameters
        ----------
        vector : array_like
            笛卡尔矢量，形状为 (3,) 或 (N, 3)

        Returns
        -------
        numpy.ndarray
            分数坐标，保持输入形状

        Raises
        ------
        InvalidOperationError
            如果晶胞为 ``INFINITE``
        """
        if self._shape is CellShape.INFINITE:
            raise InvalidOperationError("无限晶胞没有分数坐标")

        vectors, single = self._prepare_vectors(vector)
        self._check_periodic()
        fractional = _to_fractional_numba(vectors, self._matrix)
        return fractional[0] if single else fractional

    def cartesian(self, fractional) -> np.ndarray:
        """分数坐标转换为笛卡尔矢量"""
        if self._shape is CellShape.INFINITE:
            raise InvalidOperationError("无限晶胞没有分数坐标")

        vectors, single = self._prepare_vectors(fractional)
        cartesian = _to_cartesian_numba(vectors, self._matrix)
        return cartesian[0] if single else cartesian

    # --------- 复制与视图 ---------
    def copy(self) -> UnitCell:
        """创建 UnitCell 的深拷贝"""
        cell = UnitCell.__new__(UnitCell)
        cell._matrix = self._matrix.copy()
        cell._shape = self._shape
        return cell

    def __copy__(self) -> UnitCell:
        return self.copy()

    def __deepcopy__(self, memo) -> UnitCell:
        return self.copy()

    def view(self) -> UnitCellView:
        """返回该晶胞的只读视图"""
        return UnitCellView(self)

    def __eq__(self, other) -> bool:
        if isinstance(other, UnitCellView):
            other = other._cell
        if not isinstance(other, UnitCell):
            return NotImplemented
        return self._shape is other._shape and np.array_equal(
            self._matrix, other._matrix
        )

    __hash__ = None

    def __repr__(self) -> str:
        lengths = np.array2string(self.lengths, precision=6, separator=", ")
        angles = np.array2string(self.angles, precision=6, separator=", ")
        return f"UnitCell(shape={self._shape.value}, lengths={lengths}, angles={angles})"


class UnitCellView:
    """晶胞的只读视图

    视图引用父晶胞，反映父晶胞之后的所有修改，但不提供任何修改方法。
    需要独立副本时使用 :meth:`copy`。

    Parameters
    ----------
    cell : UnitCell
        被引用的晶胞

    Examples
    --------
    >>> cell = UnitCell([10.0, 10.0, 10.0])
    >>> view = cell.view()
    >>> cell.set_lengths([5.0, 5.0, 5.0])
    >>> view.volume
    125.0
    """

    __slots__ = ("_cell",)

    def __init__(self, cell: UnitCell) -> None:
        if not isinstance(cell, UnitCell):
            raise InvalidArgumentError(f"只能为 UnitCell 创建视图，得到: {type(cell)}")
        self._cell = cell

    @property
    def lengths(self) -> np.ndarray:
        return self._cell.lengths

    @property
    def angles(self) -> np.ndarray:
        return self._cell.angles

    @property
    def matrix(self) -> np.ndarray:
        return self._cell.matrix

    @property
    def shape(self) -> CellShape:
        return self._cell.shape

    @property
    def volume(self) -> float:
        return self._cell.volume

    def wrap(self, vector) -> np.ndarray:
        return self._cell.wrap(vector)

    def fractional(self, vector) -> np.ndarray:
        return self._cell.fractional(vector)

    def cartesian(self, fractional) -> np.ndarray:
        return self._cell.cartesian(fractional)

    def copy(self) -> UnitCell:
        """返回独立的 UnitCell 深拷贝"""
        return self._cell.copy()

    def __eq__(self, other) -> bool:
        if isinstance(other, (UnitCell, UnitCellView)):
            return self._cell.__eq__(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"UnitCellView({self._cell!r})"
