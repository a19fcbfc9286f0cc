import sys

if sys.version_info < (3, 12):
    print("owned requires python 3.12+", file=sys.stderr)
    exit(1)


from .handle import unique_resource
from .factory import make_unique_resource, make_unique_resource_checked


__all__ = [
    "unique_resource",
    "make_unique_resource",
    "make_unique_resource_checked",
]
