"""Value sources — the single capability visibility evaluation needs from its caller.

A value source answers ``get(code)`` with the current value of a field, or
``None`` when the field has no value. Two kinds exist:

* a snapshot: any ``dict``/``Mapping`` already satisfies the protocol;
* a live accessor over in-progress form state, wrapped in ``LiveValueSource``.
"""

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@runtime_checkable
class ValueSource(Protocol):
    """Anything that can look up a field value by code."""

    def get(self, code: str) -> Any:
        ...


class LiveValueSource:
    """Adapts a ``(code) -> value`` getter (e.g. bound to form state) to ``ValueSource``.

    A getter that signals a missing key with ``LookupError`` yields ``None``.
    """

    def __init__(self, getter: Callable[[str], Any]):
        self._getter = getter

    def get(self, code: str) -> Any:
        try:
            return self._getter(code)
        except LookupError:
            return None


def as_value_source(source: "ValueSource | Mapping[str, Any] | Callable[[str], Any] | None") -> ValueSource:
    """Normalise the accepted value-source shapes to something with ``get``."""
    if source is None:
        return _EMPTY
    if isinstance(source, ValueSource):
        return source
    if callable(source):
        return LiveValueSource(source)
    raise TypeError(f"Unsupported value source: {type(source).__name__}")
