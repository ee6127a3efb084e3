"""Immutable, case-insensitive HTTP headers.

Stores the raw byte pairs from the ASGI scope and decodes on access.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only view over raw ASGI header pairs.

    Lookups ignore case. ``headers[name]`` returns the first value;
    ``get_list`` returns every value sent under that name.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    def _values(self, key: str) -> Iterator[str]:
        wanted = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == wanted:
                yield value.decode("latin-1")

    def __getitem__(self, key: str) -> str:
        for value in self._values(key):
            return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return next(self._values(key), None) is not None

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*, in the order received."""
        return list(self._values(key))

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        return self._raw
