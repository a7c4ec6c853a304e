"""Retry defaults and validated option models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_INITIAL_DELAY_MS = 100
LOG_LEVEL_ENV = "SAFEREMOVE_LOG_LEVEL"

_FORCED_REMOVAL_FLAGS = {"recursive": True, "force": True}


class RetryPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    initial_delay_ms: float = Field(default=DEFAULT_INITIAL_DELAY_MS, ge=0)

    def delay_ms(self, attempt_index: int) -> float:
        return self.initial_delay_ms * (2**attempt_index)

    def delay_seconds(self, attempt_index: int) -> float:
        return self.delay_ms(attempt_index) / 1000.0


class RemovalOptions(BaseModel):
    """Removal flags; ``recursive`` and ``force`` always end up ``True``.

    Unknown fields are kept and forwarded to the removal call.
    """

    model_config = ConfigDict(extra="allow")

    recursive: bool = True
    force: bool = True

    @model_validator(mode="before")
    @classmethod
    def _force_flags(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {**data, **_FORCED_REMOVAL_FLAGS}
        return data

    def as_kwargs(self) -> dict[str, Any]:
        return self.model_dump()
