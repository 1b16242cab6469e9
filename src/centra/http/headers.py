"""Case-insensitive HTTP headers.

``Headers`` is the immutable request side: it stores raw byte pairs
from the ASGI scope and decodes on access. ``MutableHeaders`` is the
response side, filled in by error handlers through a ``ResponseWriter``.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value.decode("latin-1")
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower().encode("latin-1")
        return any(name.lower() == key_lower for name, _ in self._raw)

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

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == key_lower]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Access raw header byte pairs for ASGI compatibility."""
        return self._raw


class MutableHeaders:
    """Case-insensitive response headers that keep insertion order.

    Names keep the casing of the first ``set``/``add`` so
    ``Content-Type`` is emitted the way the handler wrote it.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[tuple[str, str]] = []

    def set(self, name: str, value: str) -> None:
        """Replace every value of *name* with a single *value*."""
        lower = name.lower()
        for i, (existing, _) in enumerate(self._items):
            if existing.lower() == lower:
                self._items[i] = (existing, value)
                self._items[i + 1 :] = [
                    item for item in self._items[i + 1 :] if item[0].lower() != lower
                ]
                return
        self._items.append((name, value))

    def add(self, name: str, value: str) -> None:
        """Append another value for *name* (e.g. ``Set-Cookie``)."""
        self._items.append((name, value))

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the first value for *name*, or *default* if missing."""
        lower = name.lower()
        for existing, value in self._items:
            if existing.lower() == lower:
                return value
        return default

    def get_list(self, name: str) -> list[str]:
        """Return all values for *name*."""
        lower = name.lower()
        return [value for existing, value in self._items if existing.lower() == lower]

    def delete(self, name: str) -> None:
        """Remove every value of *name*. Missing names are ignored."""
        lower = name.lower()
        self._items = [item for item in self._items if item[0].lower() != lower]

    def items(self) -> tuple[tuple[str, str], ...]:
        """All (name, value) pairs in insertion order."""
        return tuple(self._items)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"MutableHeaders({self._items!r})"
