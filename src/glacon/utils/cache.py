"""Compute-once cache for decoded icon maps."""

import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType


class IconMapCache:
    """Holds an icon map that is computed at most once.

    The first call to get_or_init() runs the factory and stores its result
    as a read-only mapping. Every later call, including calls racing the
    first one from other threads, returns that same mapping object.

    Example:
        ICONS = IconMapCache()

        def icon_map() -> Mapping[str, str]:
            return ICONS.get_or_init(lambda: build_icon_map(FONT_BYTES))
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: Mapping[str, str] | None = None

    def get_or_init(self, factory: Callable[[], Mapping[str, str]]) -> Mapping[str, str]:
        """Return the cached mapping, computing it with factory on first use.

        If the factory raises, nothing is stored and the exception propagates;
        the next caller tries again.
        """
        value = self._value
        if value is not None:
            return value

        with self._lock:
            if self._value is None:
                self._value = MappingProxyType(dict(factory()))
            return self._value

    def get(self) -> Mapping[str, str] | None:
        """Return the cached mapping, or None if not computed yet."""
        return self._value

    def clear(self) -> None:
        """Forget the cached mapping."""
        with self._lock:
            self._value = None
