from collections.abc import Callable
from typing import Any

from .handle import unique_resource


def make_unique_resource[R, D: Callable[..., object]](resource: R, deleter: D) -> unique_resource[R, D]:
    return unique_resource(resource, deleter)


def make_unique_resource_checked[R, D: Callable[..., object]](
    resource: R,
    invalid: Any,
    deleter: D,
) -> unique_resource[R, D]:
    '''Like make_unique_resource(), but the handle starts disarmed when `resource == invalid`'''
    # decided before the handle exists, a failing comparison must not leave it armed
    failed = bool(resource == invalid)
    handle = unique_resource(resource, deleter)
    if failed:
        handle.release()
    return handle
