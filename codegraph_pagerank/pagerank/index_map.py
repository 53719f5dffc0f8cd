"""
Node Index

Bidirectional mapping between external node identifiers and dense
internal indices.

Indices are handed out on first sight, in first-seen order, and are never
reused until the map is cleared.
"""

from collections.abc import Hashable, Iterator

from codegraph_pagerank.common.exceptions import CapacityError


class NodeIndex:
    """
    Identifier <-> index bijection bounded by a fixed capacity.

    Two plain dicts plus a cursor: `_key_to_index[k] == i` iff
    `_index_to_key[i] == k`, and every index below the cursor is assigned.
    """

    def __init__(self, capacity: int):
        self._capacity = capacity
        self._key_to_index: dict[Hashable, int] = {}
        self._index_to_key: dict[int, Hashable] = {}
        self._next_index = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def remaining(self) -> int:
        """Number of identifiers that can still be registered."""
        return self._capacity - self._next_index

    def __len__(self) -> int:
        return self._next_index

    def __contains__(self, key: Hashable) -> bool:
        return key in self._key_to_index

    def __iter__(self) -> Iterator[Hashable]:
        return self.keys()

    def get(self, key: Hashable) -> int | None:
        return self._key_to_index.get(key)

    def key_of(self, index: int) -> Hashable:
        return self._index_to_key[index]

    def keys(self) -> Iterator[Hashable]:
        """Registered identifiers in index order."""
        return (self._index_to_key[i] for i in range(self._next_index))

    def resolve(self, *keys: Hashable) -> tuple[int, ...]:
        """
        Resolve identifiers to indices, registering unseen ones.

        Either every unseen key gets an index or none does: when the unseen
        keys do not fit, CapacityError is raised before anything is assigned.

        Args:
            *keys: Identifiers to resolve (duplicates allowed)

        Returns:
            Indices in argument order

        Raises:
            CapacityError: If a new index would exceed capacity
        """
        unseen = [key for key in dict.fromkeys(keys) if key not in self._key_to_index]
        if len(unseen) > self.remaining:
            raise CapacityError(self._next_index, self._capacity)

        for key in unseen:
            index = self._next_index
            self._key_to_index[key] = index
            self._index_to_key[index] = key
            self._next_index += 1

        return tuple(self._key_to_index[key] for key in keys)

    def clear(self) -> None:
        self._key_to_index.clear()
        self._index_to_key.clear()
        self._next_index = 0

    def __repr__(self) -> str:
        return f"NodeIndex(size={self._next_index}, capacity={self._capacity})"
