"""
Utilities module for the combat core.

Provides the singleton metaclass used by the content repository.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

_T = TypeVar("_T")


class Singleton(type, Generic[_T]):
    """Metaclass that returns the same instance every time."""

    _instances: dict[Singleton[_T], _T] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> _T:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        else:
            # Later calls may still pass arguments, e.g. a new data directory.
            cls._instances[cls].__init__(*args, **kwargs)
        return cls._instances[cls]

    def clear_instance(cls) -> None:
        """Forget the instance, the next call builds a new one."""
        cls._instances.pop(cls, None)
