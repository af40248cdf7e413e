from __future__ import annotations

import os
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ValidationError

from .constants import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_MAX_RETRIES,
    ENV_BACKOFF_FACTOR,
    ENV_BASE_DELAY_MS,
    ENV_MAX_RETRIES,
)
from .errors import EbrSettingsInvalidError
from .executor import BackoffRetryExecutor
from .models import RetryPolicy

_ENV_FIELDS = {
    "max_retries": ENV_MAX_RETRIES,
    "base_delay_ms": ENV_BASE_DELAY_MS,
    "backoff_factor": ENV_BACKOFF_FACTOR,
}


class RetrySettings(BaseModel):
    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay_ms: float = DEFAULT_BASE_DELAY_MS
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR

    def to_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            base_delay_ms=self.base_delay_ms,
            backoff_factor=self.backoff_factor,
        )


def load_settings(payload: Mapping[str, Any]) -> RetrySettings:
    try:
        return RetrySettings.model_validate(dict(payload))
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error.get("loc") else "?"
        raise EbrSettingsInvalidError(field=field, value=payload.get(field), reason=error["msg"]) from exc


def load_settings_from_env(environ: Mapping[str, str] | None = None) -> RetrySettings:
    source = os.environ if environ is None else environ
    payload: dict[str, str] = {}
    for field, env_name in _ENV_FIELDS.items():
        raw = source.get(env_name)
        if raw is None or not raw.strip():
            continue
        payload[field] = raw.strip()
    return load_settings(payload)


def executor_from_env(
    environ: Mapping[str, str] | None = None,
    *,
    sleep_fn: Callable[[float], None] | None = None,
    copy_args: bool = True,
) -> BackoffRetryExecutor:
    policy = load_settings_from_env(environ).to_policy()
    return BackoffRetryExecutor.from_policy(policy, sleep_fn=sleep_fn, copy_args=copy_args)
