"""Weighted tables for random selection.

A WeightMap maps each candidate value to a non-negative integer weight.
Sampling splits the table into an ordered value list and a WeightedIndex
(cumulative weights searched with bisect), so each draw is O(log n).

Tables keep insertion order, which makes a seeded draw reproducible.

Example:
    >>> import random
    >>> colors = WeightMap({"brown": 6, "blue": 3, "green": 1})
    >>> colors.sample(random.Random(7)) in colors
    True
"""

from __future__ import annotations

import random
from bisect import bisect_right
from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping, Sequence
from itertools import accumulate
from typing import Any, Generic, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from npc_generator.core.exceptions import WeightedError


K = TypeVar("K", bound=Hashable)


class WeightedIndex:
    """A distribution over indices proportional to integer weights.

    Attributes:
        weights: The weights, in index order.
        total: Sum of all weights.
    """

    __slots__ = ("_cumulative", "weights", "total")

    def __init__(self, weights: Sequence[int]) -> None:
        """Build the cumulative table.

        Args:
            weights: Non-negative weights, one per index.

        Raises:
            WeightedError: If there are no weights, a weight is negative,
                or every weight is zero.
        """
        if not weights:
            raise WeightedError("Cannot sample from an empty table")
        for weight in weights:
            if weight < 0:
                raise WeightedError("Weights must not be negative", details={"weight": weight})

        self.weights: tuple[int, ...] = tuple(weights)
        self._cumulative = list(accumulate(self.weights))
        self.total = self._cumulative[-1]
        if self.total <= 0:
            raise WeightedError(
                "Cannot sample from a table whose weights are all zero",
                details={"entries": len(self.weights)},
            )

    def sample(self, rng: random.Random) -> int:
        """Draw an index.

        Args:
            rng: Random source to draw from.

        Returns:
            An index whose weight is positive.
        """
        return bisect_right(self._cumulative, rng.randrange(self.total))

    def __len__(self) -> int:
        return len(self.weights)


class WeightMap(Generic[K]):
    """A mapping from values to integer selection weights.

    A weight of zero keeps a value in the table without it ever being
    drawn, unless an override assigns it a positive weight at sampling
    time.
    """

    __slots__ = ("_weights",)

    def __init__(self, entries: Mapping[K, int] | Iterable[tuple[K, int]] | None = None) -> None:
        """Create a table.

        Args:
            entries: Initial key/weight pairs. Duplicate keys add up.
        """
        self._weights: dict[K, int] = {}
        if entries is not None:
            self.extend(entries)

    # -------------------------------------------------------------------------
    # Mapping protocol
    # -------------------------------------------------------------------------

    def get(self, key: K, default: int | None = None) -> int | None:
        """Get the weight of a key."""
        return self._weights.get(key, default)

    def keys(self) -> list[K]:
        """Get the keys in insertion order."""
        return list(self._weights)

    def items(self) -> list[tuple[K, int]]:
        """Get the key/weight pairs in insertion order."""
        return list(self._weights.items())

    def __getitem__(self, key: K) -> int:
        return self._weights[key]

    def __contains__(self, key: object) -> bool:
        return key in self._weights

    def __iter__(self) -> Iterator[K]:
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightMap):
            return NotImplemented
        return self._weights == other._weights

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"WeightMap({self._weights!r})"

    # -------------------------------------------------------------------------
    # Merging
    # -------------------------------------------------------------------------

    def extend(self, other: WeightMap[K] | Mapping[K, int] | Iterable[tuple[K, int]]) -> None:
        """Merge entries into this table.

        Weights of keys already present are added together, so merging is
        commutative and associative.

        Args:
            other: Another table, a mapping, or key/weight pairs.
        """
        pairs: Iterable[tuple[K, int]]
        if isinstance(other, WeightMap):
            pairs = other.items()
        elif isinstance(other, Mapping):
            pairs = other.items()
        else:
            pairs = other
        for key, weight in pairs:
            self._weights[key] = self._weights.get(key, 0) + int(weight)

    def merged(self, *others: WeightMap[K] | None) -> WeightMap[K]:
        """Return a new table combining this one with others.

        Args:
            *others: Tables to merge in; None entries are skipped.

        Returns:
            A fresh WeightMap; this table is left untouched.
        """
        result: WeightMap[K] = WeightMap(self._weights)
        for other in others:
            if other is not None:
                result.extend(other)
        return result

    # -------------------------------------------------------------------------
    # Sampling
    # -------------------------------------------------------------------------

    def split_weights_with_modifications(
        self,
        modify_weight: Callable[[K], int | None],
    ) -> tuple[list[K], WeightedIndex]:
        """Split into values and a distribution, overriding some weights.

        Args:
            modify_weight: Called with each key; a non-None result replaces
                the stored weight for this split only.

        Returns:
            The keys in order and a WeightedIndex over them.

        Raises:
            WeightedError: If the resulting weights cannot be sampled.
        """
        values: list[K] = []
        weights: list[int] = []
        for value, weight in self._weights.items():
            values.append(value)
            new_weight = modify_weight(value)
            weights.append(weight if new_weight is None else new_weight)
        return values, WeightedIndex(weights)

    def split_weights(self) -> tuple[list[K], WeightedIndex]:
        """Split into values and a distribution using the stored weights.

        Raises:
            WeightedError: If the table is empty or all weights are zero.
        """
        return self.split_weights_with_modifications(lambda _: None)

    def sample(
        self,
        rng: random.Random,
        modify_weight: Callable[[K], int | None] | None = None,
    ) -> K:
        """Draw a single key.

        Args:
            rng: Random source to draw from.
            modify_weight: Optional per-key weight override.

        Returns:
            A key of this table.

        Raises:
            WeightedError: If the table cannot be sampled.
        """
        if modify_weight is None:
            values, distribution = self.split_weights()
        else:
            values, distribution = self.split_weights_with_modifications(modify_weight)
        return values[distribution.sample(rng)]

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_entries(self) -> list[dict[str, Any]]:
        """Get the table as a list of {"element", "weight"} records."""
        return [{"element": key, "weight": weight} for key, weight in self._weights.items()]

    @classmethod
    def _from_entries(cls, entries: list[dict[str, Any]]) -> WeightMap[Any]:
        return cls((entry["element"], entry["weight"]) for entry in entries)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Validate from a {key: weight} mapping or a list of entries.

        String-like keys read naturally as a JSON object; keys that are
        themselves records (ancestries, backgrounds) use the entry list.
        """
        args = get_args(source_type)
        key_schema = handler.generate_schema(args[0]) if args else core_schema.any_schema()
        weight_schema = core_schema.int_schema(ge=0)

        from_mapping = core_schema.no_info_after_validator_function(
            cls,
            core_schema.dict_schema(keys_schema=key_schema, values_schema=weight_schema),
        )
        from_entries = core_schema.no_info_after_validator_function(
            cls._from_entries,
            core_schema.list_schema(
                core_schema.typed_dict_schema(
                    {
                        "element": core_schema.typed_dict_field(key_schema),
                        "weight": core_schema.typed_dict_field(weight_schema),
                    }
                )
            ),
        )
        return core_schema.json_or_python_schema(
            json_schema=core_schema.union_schema([from_mapping, from_entries]),
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_mapping, from_entries]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_entries()
            ),
        )


__all__ = [
    "WeightMap",
    "WeightedIndex",
]
