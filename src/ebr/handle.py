from __future__ import annotations

from concurrent import futures
from threading import Lock
from typing import Generic, TypeVar

from .errors import EbrHandleConsumedError

ResultT = TypeVar("ResultT")


class ResultHandle(Generic[ResultT]):
    def __init__(self, future: futures.Future[ResultT]) -> None:
        self._future = future
        self._lock = Lock()
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> ResultT:
        if self._consumed:
            raise EbrHandleConsumedError()
        finished, _ = futures.wait([self._future], timeout=timeout)
        if not finished:
            raise futures.TimeoutError()
        with self._lock:
            if self._consumed:
                raise EbrHandleConsumedError()
            self._consumed = True
        return self._future.result()
