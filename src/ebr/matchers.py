from __future__ import annotations

from typing import Callable, TypeVar

ResultT = TypeVar("ResultT")

Predicate = Callable[[ResultT], bool]


def equals(target: ResultT) -> Predicate[ResultT]:
    def _matches(result: ResultT) -> bool:
        return result == target

    return _matches
