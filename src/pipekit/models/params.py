"""Query-parameter bag attached to a single request."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import urlencode


def _to_str(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Params:
    """Multi-valued mapping from parameter name to string values.

    Keys encode in sorted order; values under one key keep insertion order.
    Implements ``IParamsContainer`` by returning itself.
    """

    def __init__(self, values: Mapping[str, object | Iterable[object]] | None = None) -> None:
        self._values: dict[str, list[str]] = {}
        for key, value in (values or {}).items():
            if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
                self.add(key, value)
            else:
                for item in value:
                    self.add(key, item)

    def add(self, key: str, value: object) -> None:
        self._values.setdefault(key, []).append(_to_str(value))

    def set(self, key: str, value: object) -> None:
        self._values[key] = [_to_str(value)]

    def get(self, key: str, default: str | None = None) -> str | None:
        values = self._values.get(key)
        return values[0] if values else default

    def get_all(self, key: str) -> list[str]:
        return list(self._values.get(key, []))

    def items(self) -> list[tuple[str, str]]:
        return [(key, value) for key in sorted(self._values) for value in self._values[key]]

    def encode(self) -> str:
        """URL-encode as a query string (without the leading ``?``)."""
        return urlencode(self.items())

    def get_params(self) -> Params:
        return self

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Params):
            return NotImplemented
        return self.items() == other.items()

    def __repr__(self) -> str:
        return f"Params({self.encode()!r})"
