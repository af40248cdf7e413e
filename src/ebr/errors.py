from __future__ import annotations

from typing import Any


class EbrError(RuntimeError):
    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.details = details or {}


class EbrHandleConsumedError(EbrError):
    def __init__(self) -> None:
        super().__init__("EBR_HANDLE_CONSUMED", "result handle has already been read")


class EbrSettingsInvalidError(EbrError):
    def __init__(self, field: str, value: object, reason: str) -> None:
        super().__init__(
            "EBR_SETTINGS_INVALID",
            f"field={field}, value={value!r}, reason={reason}",
            details={"field": field, "value": value, "reason": reason},
        )
        self.field = field
        self.value = value
