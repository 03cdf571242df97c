"""错误模型模块

定义 SimFrame 的分类错误类型。每个错误携带错误类别 :class:`ErrorKind`
与可读的错误信息，同时继承对应的内置异常，调用方既可以按 SimFrame 的
类型捕获，也可以按 ``ValueError`` / ``OSError`` 等内置类型捕获。

底层引擎通过整数状态码报告失败，:func:`check` 将状态码转换为对应的异常；
最近一次错误信息保存在进程级记录中，可通过 :func:`last_error` 读取、
:func:`clear_errors` 清除。

Examples
--------
>>> from simframe.core.errors import InvalidArgumentError, last_error
>>> try:
...     raise InvalidArgumentError("晶胞长度不能为负数")
... except ValueError as e:
...     print(e.kind.name)
INVALID_ARGUMENT
>>> last_error()
'晶胞长度不能为负数'
"""

from __future__ import annotations

import logging
import os
from enum import Enum, IntEnum

logger = logging.getLogger(__name__)

_last_error: str = ""


def last_error() -> str:
    """返回最近一次记录的错误信息，没有错误时为空字符串。"""
    return _last_error


def clear_errors() -> None:
    """清除最近一次记录的错误信息。"""
    global _last_error
    _last_error = ""


def _record(message: str) -> None:
    global _last_error
    _last_error = message


class ErrorKind(Enum):
    """错误类别"""

    IO = "io"
    FORMAT = "format"
    MEMORY = "memory"
    SELECTION = "selection"
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_PATH = "invalid_path"
    INTERNAL = "internal"
    ENGINE = "engine"

    @property
    def description(self) -> str:
        """错误类别的固定描述"""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ErrorKind.IO: "Error while reading or writing a file",
    ErrorKind.FORMAT: "Error in file formatting, i.e. the file is invalid",
    ErrorKind.MEMORY: "Error in memory allocations",
    ErrorKind.SELECTION: "Error in selection string syntax",
    ErrorKind.INVALID_ARGUMENT: "Invalid argument given to a function",
    ErrorKind.INVALID_PATH: "The given path is not representable as text",
    ErrorKind.INTERNAL: "Got an invalid or missing handle from a lower layer",
    ErrorKind.ENGINE: "Exception from the wrapped chemistry engine",
}


class SimFrameError(Exception):
    """SimFrame 所有错误的基类

    Parameters
    ----------
    message : str
        描述错误原因的信息

    Attributes
    ----------
    kind : ErrorKind
        错误类别，由子类固定
    message : str
        错误信息
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message
        _record(message)

    def __str__(self) -> str:
        return self.message

    def __eq__(self, other) -> bool:
        if not isinstance(other, SimFrameError):
            return NotImplemented
        return self.kind == other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))


class FileError(SimFrameError, OSError):
    """读写文件时出错"""

    kind = ErrorKind.IO


class FormatError(SimFrameError, ValueError):
    """文件格式错误，即文件内容无效"""

    kind = ErrorKind.FORMAT


class AllocationError(SimFrameError, MemoryError):
    """内存分配失败"""

    kind = ErrorKind.MEMORY


class SelectionError(SimFrameError, ValueError):
    """选择语句语法错误"""

    kind = ErrorKind.SELECTION


class InvalidArgumentError(SimFrameError, ValueError):
    """函数参数无效"""

    kind = ErrorKind.INVALID_ARGUMENT


class InvalidOperationError(InvalidArgumentError):
    """对象当前状态不允许该操作，例如修改正交晶胞的角度"""


class InvalidPathError(SimFrameError, ValueError):
    """路径无法表示为文本"""

    kind = ErrorKind.INVALID_PATH

    @classmethod
    def from_path(cls, path) -> InvalidPathError:
        """根据无法转换的路径创建错误"""
        return cls(f"Could not convert {os.fsdecode(path)!r} to UTF8")


class InternalError(SimFrameError, RuntimeError):
    """底层返回了空的或无效的句柄"""

    kind = ErrorKind.INTERNAL

    @classmethod
    def null_handle(cls, what: str = "handle") -> InternalError:
        """底层返回空句柄时使用，附带最近一次的错误信息"""
        detail = _last_error
        message = f"got a null {what} from the engine"
        if detail:
            message = f"{message}: {detail}"
        return cls(message)


class EngineError(SimFrameError, RuntimeError):
    """底层引擎报告的错误，携带引擎自身的最近错误信息"""

    kind = ErrorKind.ENGINE


class Status(IntEnum):
    """底层引擎的状态码"""

    SUCCESS = 0
    CXX_ERROR = 1
    GENERIC_ERROR = 2
    MEMORY_ERROR = 3
    FILE_ERROR = 4
    FORMAT_ERROR = 5
    SELECTION_ERROR = 6


_STATUS_ERRORS = {
    Status.CXX_ERROR: EngineError,
    Status.GENERIC_ERROR: EngineError,
    Status.MEMORY_ERROR: AllocationError,
    Status.FILE_ERROR: FileError,
    Status.FORMAT_ERROR: FormatError,
    Status.SELECTION_ERROR: SelectionError,
}


def error_from_status(status: int, message: str | None = None) -> SimFrameError:
    """将非成功状态码转换为对应的异常对象

    Parameters
    ----------
    status : int
        引擎返回的状态码
    message : str, optional
        错误信息；默认使用最近一次记录的错误信息

    Returns
    -------
    SimFrameError
        与状态码对应的异常（未抛出）

    Raises
    ------
    InvalidArgumentError
        如果 ``status`` 为成功状态码
    """
    if message is None:
        message = _last_error
    try:
        code = Status(status)
    except ValueError:
        return InternalError(f"unknown engine status code {status}: {message}")
    if code is Status.SUCCESS:
        raise InvalidArgumentError("成功状态码不对应任何错误")
    return _STATUS_ERRORS[code](message)


def check(status: int, message: str | None = None) -> None:
    """检查引擎状态码，失败时抛出对应异常

    Parameters
    ----------
    status : int
        引擎返回的状态码
    message : str, optional
        错误信息；默认使用最近一次记录的错误信息

    Raises
    ------
    SimFrameError
        当 ``status`` 不是 :attr:`Status.SUCCESS` 时
    """
    if status == Status.SUCCESS:
        return
    error = error_from_status(status, message)
    logger.debug(f"Engine call failed with status {status}: {error.message}")
    raise error
