from collections.abc import Callable
from ctypes import *
import ctypes.util
import os

from .factory import make_unique_resource_checked
from .handle import unique_resource


libc = CDLL(ctypes.util.find_library("c"), use_errno=True)

def _import(symbol: str, restype: type | None, *argtypes: type):
    f = libc[symbol]
    f.argtypes = argtypes
    f.restype = restype
    return f

# Pointers

class void_p(c_void_p): pass

class _Null:
    '''Equal to None and to any ctypes pointer holding NULL'''
    __hash__ = None

    def __eq__(self, other):
        if isinstance(other, (c_void_p, c_char_p)):
            return other.value is None
        return other is None

    def __repr__(self):
        return "NULL"

NULL = _Null()

# Error handling

class LibcError(OSError):
    def __init__(self, func: str):
        err = get_errno()
        super().__init__(err, f"{func}: {os.strerror(err)}")

# Memory

_malloc = _import("malloc", void_p, c_size_t)
_calloc = _import("calloc", void_p, c_size_t, c_size_t)
free = _import("free", None, c_void_p)

def malloc(size: int) -> unique_resource[void_p, Callable[[c_void_p], None]]:
    mem = make_unique_resource_checked(_malloc(size), NULL, free)
    if not mem:
        raise MemoryError(f"malloc({size}) failed")
    return mem

def calloc(count: int, size: int) -> unique_resource[void_p, Callable[[c_void_p], None]]:
    mem = make_unique_resource_checked(_calloc(count, size), NULL, free)
    if not mem:
        raise MemoryError(f"calloc({count}, {size}) failed")
    return mem

# File descriptors

_dup = _import("dup", c_int, c_int)
_close = _import("close", c_int, c_int)

def close(fd: int) -> None:
    if _close(fd) != 0:
        raise LibcError("close")

def dup(fd: int) -> unique_resource[int, Callable[[int], None]]:
    '''Duplicate `fd`, the copy is closed by the returned handle'''
    handle = make_unique_resource_checked(_dup(fd), -1, close)
    if not handle:
        raise LibcError("dup")
    return handle
