from .errors import EbrError, EbrHandleConsumedError, EbrSettingsInvalidError
from .executor import BackoffRetryExecutor
from .handle import ResultHandle
from .log import configure_logging
from .matchers import Predicate, equals
from .models import RetryPolicy
from .settings import RetrySettings, executor_from_env, load_settings, load_settings_from_env

__all__ = [
    "BackoffRetryExecutor",
    "RetryPolicy",
    "ResultHandle",
    "Predicate",
    "equals",
    "RetrySettings",
    "load_settings",
    "load_settings_from_env",
    "executor_from_env",
    "configure_logging",
    "EbrError",
    "EbrHandleConsumedError",
    "EbrSettingsInvalidError",
]
