from __future__ import annotations

import copy
import itertools
import logging
import threading
from concurrent.futures import Future
from time import sleep as default_sleep
from typing import Any, Callable, TypeVar

from .constants import LOGGER_NAME, WORKER_THREAD_PREFIX
from .handle import ResultHandle
from .matchers import Predicate, equals
from .models import RetryPolicy

ResultT = TypeVar("ResultT")

_LOGGER = logging.getLogger(f"{LOGGER_NAME}.executor")
_THREAD_SEQ = itertools.count(1)


class BackoffRetryExecutor:
    """Runs a callable in a background thread until its result matches.

    Each ``execute`` call gets its own worker thread and its own retry counter.
    Arguments are deep copied once at submission and every attempt receives a
    fresh copy of that snapshot. Pass ``copy_args=False`` to hand the original
    objects to every attempt instead, e.g. for locks or sessions.

    Any failure, including an argument that cannot be copied, ends the run and
    is re-raised from ``ResultHandle.result``; ``execute`` itself does not raise.
    """

    def __init__(
        self,
        max_retries: int,
        base_delay_ms: float,
        backoff_factor: float,
        *,
        sleep_fn: Callable[[float], None] | None = None,
        copy_args: bool = True,
    ) -> None:
        self._policy = RetryPolicy(
            max_retries=max_retries,
            base_delay_ms=base_delay_ms,
            backoff_factor=backoff_factor,
        )
        self._sleep_fn = sleep_fn or default_sleep
        self._copy_args = copy_args

    @classmethod
    def from_policy(
        cls,
        policy: RetryPolicy,
        *,
        sleep_fn: Callable[[float], None] | None = None,
        copy_args: bool = True,
    ) -> BackoffRetryExecutor:
        return cls(
            policy.max_retries,
            policy.base_delay_ms,
            policy.backoff_factor,
            sleep_fn=sleep_fn,
            copy_args=copy_args,
        )

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def __call__(self, target: ResultT, fn: Callable[..., ResultT], *args: Any, **kwargs: Any) -> ResultHandle[ResultT]:
        return self.execute(target, fn, *args, **kwargs)

    def execute(self, target: ResultT, fn: Callable[..., ResultT], *args: Any, **kwargs: Any) -> ResultHandle[ResultT]:
        return self.execute_until(equals(target), fn, *args, **kwargs)

    def execute_until(
        self,
        predicate: Predicate[ResultT],
        fn: Callable[..., ResultT],
        *args: Any,
        **kwargs: Any,
    ) -> ResultHandle[ResultT]:
        future: Future[ResultT] = Future()
        future.set_running_or_notify_cancel()
        try:
            snapshot = copy.deepcopy((args, kwargs)) if self._copy_args else (args, kwargs)
        except Exception as exc:
            _LOGGER.exception("Retry arguments could not be snapshotted")
            future.set_exception(exc)
            return ResultHandle(future)

        worker = threading.Thread(
            target=self._run,
            args=(future, predicate, fn, snapshot),
            name=f"{WORKER_THREAD_PREFIX}-{next(_THREAD_SEQ)}",
            daemon=True,
        )
        worker.start()
        return ResultHandle(future)

    def _run(
        self,
        future: Future[ResultT],
        predicate: Predicate[ResultT],
        fn: Callable[..., ResultT],
        snapshot: tuple[tuple[Any, ...], dict[str, Any]],
    ) -> None:
        retry_count = 0
        try:
            while True:
                args, kwargs = copy.deepcopy(snapshot) if self._copy_args else snapshot
                result = fn(*args, **kwargs)
                if predicate(result):
                    _LOGGER.debug("Retry target matched: attempt=%s", retry_count + 1)
                    break
                if retry_count >= self._policy.max_retries:
                    _LOGGER.info(
                        "Retry budget exhausted: attempts=%s last_result=%r",
                        retry_count + 1,
                        result,
                    )
                    break
                delay_ms = self._policy.delay_ms(retry_count)
                _LOGGER.debug(
                    "Retry target not matched: attempt=%s next_delay_ms=%s",
                    retry_count + 1,
                    delay_ms,
                )
                # negative delays do not wait
                self._sleep_fn(max(self._policy.delay_seconds(retry_count), 0.0))
                retry_count += 1
        except BaseException as exc:
            _LOGGER.exception("Retry run failed: attempt=%s", retry_count + 1)
            future.set_exception(exc)
            return
        future.set_result(result)
