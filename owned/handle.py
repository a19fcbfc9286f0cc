import logging
import os
from collections.abc import Callable
from ctypes import pointer
from typing import Any, Self


logger = logging.getLogger(__name__)

# What happens when a deleter raises while a handle is garbage collected
finalizer_policy = os.getenv("OWNED_FINALIZER_ERRORS") or "log"
if finalizer_policy not in ("log", "abort"):
    raise ValueError(f"OWNED_FINALIZER_ERRORS must be 'log' or 'abort', got {finalizer_policy!r}")

_UNSET: Any = object()


class unique_resource[R, D: Callable[..., object]]:
    """
    Owns a resource value together with the deleter that cleans it up.

    The deleter is owed exactly once while the handle is armed, and runs on the
    current value when the handle is reset, overwritten by move_from(), leaves a
    `with` block or is collected. release() hands the value back to the caller
    and disarms the handle without calling the deleter.

    Public attributes and item access (including item assignment) are forwarded
    to the resource. Other protocols such as len() or iteration go through get().

    Subclasses may set `default_deleter` to a zero-argument factory so that the
    deleter can be omitted at construction.
    """

    __slots__ = ("__resource", "__deleter", "__armed")

    default_deleter: Callable[[], Any] | None = None

    def __init__(self, resource: R = _UNSET, deleter: D | None = None) -> None:
        self.__armed = False

        if deleter is None:
            factory = type(self).default_deleter
            if factory is None:
                raise TypeError(f"{type(self).__name__} requires a deleter")
            deleter = factory()
        if not callable(deleter):
            raise TypeError(f"deleter must be callable, not {type(deleter).__name__}")
        self.__deleter = deleter

        if resource is _UNSET:
            self.__resource = None
        else:
            self.__resource = resource
            self.__armed = True

    def __del__(self):
        if not self.__armed:
            return
        self.__armed = False
        try:
            self.__deleter(self.__resource)
        except Exception:
            if finalizer_policy == "abort":
                logger.critical("deleter failed while finalizing %r, aborting", self.__resource, exc_info=True)
                os.abort()
            logger.exception("deleter failed while finalizing %r", self.__resource)

    def __repr__(self):
        return f"{type(self).__name__}({self.__resource!r}, {"armed" if self.__armed else "disarmed"})"

    def __bool__(self):
        return self.__armed

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.reset()

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} cannot be copied, use move()")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} cannot be copied, use move()")

    def __reduce_ex__(self, protocol):
        raise TypeError(f"{type(self).__name__} cannot be pickled")

    def __getattr__(self, name: str):
        # only reached for names the handle doesn't define
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self.__resource, name)

    def __getitem__(self, key):
        return self.__resource[key]

    def __setitem__(self, key, value):
        self.__resource[key] = value

    def get(self) -> R:
        return self.__resource

    def get_deleter(self) -> D:
        return self.__deleter

    def pointer(self):
        '''ctypes pointer to the owned value, usable as an out-parameter'''
        return pointer(self.__resource)

    def valid(self) -> bool:
        return self.__armed

    def reset(self, resource: R = _UNSET) -> None:
        '''Clean up the owed value, then take ownership of `resource` if given'''
        try:
            if self.__armed:
                self.__armed = False
                self.__deleter(self.__resource)
        finally:
            if resource is not _UNSET:
                self.__resource = resource
                self.__armed = True

    def release(self) -> R:
        self.__armed = False
        return self.__resource

    def move(self) -> Self:
        '''Transfer ownership to a new handle, leaving this one disarmed'''
        other = type(self).__new__(type(self))
        other.__resource = self.__resource
        other.__deleter = self.__deleter
        other.__armed, self.__armed = self.__armed, False
        return other

    def move_from(self, other: "unique_resource[R, D]") -> None:
        '''Clean up the owed value, then take over everything `other` owns'''
        if other is self:
            return
        if not isinstance(other, unique_resource):
            raise TypeError(f"cannot move from {type(other).__name__}")
        try:
            self.reset()
        finally:
            self.__resource = other.__resource
            self.__deleter = other.__deleter
            self.__armed, other.__armed = other.__armed, False
