from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .config import ServiceConfigEntry


UNKNOWN_STATE = "unknown"
NOT_FOUND_STATUS = "Not found"


class ServiceStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    display_name: str = Field(..., alias="displayName")
    state: str = Field(UNKNOWN_STATE, description="Runtime state, e.g. running|exited|unknown")
    status: str = Field(NOT_FOUND_STATUS, description="Human readable runtime status")


class ConfigResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    services: list[ServiceConfigEntry]
    poll_interval_seconds: int = Field(..., alias="pollIntervalSeconds")


class ToggleRequest(BaseModel):
    up: str | None = Field(None, description="Service to start")
    down: str | None = Field(None, description="Service to stop")

    @field_validator("up", "down", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        return None if value == "" else value

    @model_validator(mode="after")
    def _exactly_one(self) -> "ToggleRequest":
        if (self.up is None) == (self.down is None):
            raise ValueError("exactly one of 'up' or 'down' is required")
        return self

    @property
    def target(self) -> str:
        return self.up if self.up is not None else self.down  # type: ignore[return-value]

    @property
    def action(self) -> str:
        return "up" if self.up is not None else "down"

    def payload(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class ToggleResponse(BaseModel):
    status: str = "success"
