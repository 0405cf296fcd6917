"""API – LabelSet, the canonical aggregation key."""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, ClassVar


class LabelSet(Mapping[str, str]):
    """Immutable, order-independent ``str -> str`` mapping.

    Pairs are stored sorted by key, so two label sets built from the same
    pairs in any insertion order compare equal and hash identically.  The
    empty label set is a shared singleton (:attr:`EMPTY`).

    Example::

        a = LabelSet({"dim1": "value1", "dim2": "value1"})
        b = LabelSet({"dim2": "value1", "dim1": "value1"})
        assert a == b and hash(a) == hash(b)
    """

    __slots__ = ("_items", "_hash")

    EMPTY: ClassVar[LabelSet]

    _items: tuple[tuple[str, str], ...]
    _hash: int

    def __new__(cls, labels: Mapping[str, Any] | None = None) -> LabelSet:
        if not labels:
            return cls.EMPTY
        items: list[tuple[str, str]] = []
        for key, value in labels.items():
            if not isinstance(key, str):
                raise TypeError(f"label keys must be str, got {type(key).__name__}")
            items.append((key, str(value)))
        items.sort()
        return cls._from_items(tuple(items))

    @classmethod
    def _from_items(cls, items: tuple[tuple[str, str], ...]) -> LabelSet:
        self = object.__new__(cls)
        object.__setattr__(self, "_items", items)
        object.__setattr__(self, "_hash", hash(items))
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("LabelSet is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (LabelSet, (dict(self._items),))

    @classmethod
    def of(cls, labels: LabelSet | Mapping[str, Any] | None) -> LabelSet:
        """Coerce a mapping (or ``None``) to a LabelSet; LabelSets pass through."""
        if isinstance(labels, LabelSet):
            return labels
        return cls(labels)

    @classmethod
    def empty(cls) -> LabelSet:
        return cls.EMPTY

    def __getitem__(self, key: str) -> str:
        for k, v in self._items:
            if k == key:
                return v
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return (k for k, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LabelSet):
            return self._items == other._items
        if isinstance(other, Mapping):
            return dict(self._items) == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"LabelSet({dict(self._items)!r})"

    @property
    def pairs(self) -> tuple[tuple[str, str], ...]:
        """Key/value pairs sorted by key."""
        return self._items

    def as_dict(self) -> dict[str, str]:
        return dict(self._items)


LabelSet.EMPTY = LabelSet._from_items(())


__all__ = ["LabelSet"]
