from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int
    base_delay_ms: float
    backoff_factor: float

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_ms(self, retry_count: int) -> int:
        return math.floor(self.base_delay_ms * (self.backoff_factor**retry_count))

    def delay_seconds(self, retry_count: int) -> float:
        return self.delay_ms(retry_count) / 1000
