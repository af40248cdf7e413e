from __future__ import annotations

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY_MS = 100
DEFAULT_BACKOFF_FACTOR = 2.0

ENV_MAX_RETRIES = "EBR_MAX_RETRIES"
ENV_BASE_DELAY_MS = "EBR_BASE_DELAY_MS"
ENV_BACKOFF_FACTOR = "EBR_BACKOFF_FACTOR"
ENV_LOG_LEVEL = "EBR_LOG_LEVEL"

LOGGER_NAME = "ebr"
WORKER_THREAD_PREFIX = "ebr-retry"
