"""Immutable query string parameters."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Parsed query string.

    ``params[key]`` returns the first value; ``get_list`` returns all of
    them. The undecoded string is kept for rebuilding URLs.
    """

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        object.__setattr__(self, "_raw", query_string)
        parsed = parse_qs(query_string.decode("latin-1"), keep_blank_values=True)
        object.__setattr__(self, "_data", parsed)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def get_list(self, key: str) -> list[str]:
        return list(self._data.get(key, ()))

    @property
    def raw(self) -> str:
        """The query string as sent, without the leading ``?``."""
        return self._raw.decode("latin-1")
