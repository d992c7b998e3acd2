"""Value type identifying a single design-matrix column."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Tuple

TIME_KIND = "time"
SEASONAL_KIND = "seasonal"


@total_ordering
@dataclass(frozen=True, eq=False)
class Feature:
    """Named feature identity.

    Equality, hashing and ordering all go through the canonical string, so two
    identities that render the same are the same column wherever they are used.
    """

    kind: str
    name: str
    params: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def time(cls, name: str) -> Feature:
        return cls(kind=TIME_KIND, name=name)

    @classmethod
    def seasonal(cls, source: str, fn: str, order: int) -> Feature:
        # Zero padded so string order agrees with harmonic order.
        return cls(
            kind=SEASONAL_KIND,
            name=source,
            params=(("fn", fn), ("order", f"{int(order):02d}")),
        )

    def __str__(self) -> str:
        if not self.params:
            return self.name
        return "_".join([self.name, *(value for _, value in self.params)])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Feature):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Feature):
            return NotImplemented
        return str(self) < str(other)
