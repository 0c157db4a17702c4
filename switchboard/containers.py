from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


logger = logging.getLogger(__name__)

WORKING_DIR_LABEL = "com.docker.compose.project.working_dir"


def parse_label_string(raw: str) -> dict[str, str]:
    """Parse the `k=v,k=v` label format printed by `docker ps --format json`."""
    labels: dict[str, str] = {}
    for item in raw.split(","):
        if not item:
            continue
        key, _, value = item.partition("=")
        labels[key] = value
    return labels


class ContainerRecord(BaseModel):
    """One line of the runtime status feed."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    command: str = Field("", alias="Command")
    state: str = Field("", alias="State")
    status: str = Field("", alias="Status")
    name: str = Field("", alias="Names")
    labels: dict[str, str] = Field(default_factory=dict, alias="Labels")

    @field_validator("command", "state", "status", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("name", mode="before")
    @classmethod
    def _first_name(cls, value: Any) -> Any:
        # Engine API lists names; docker ps prints a single string.
        if value is None:
            return ""
        if isinstance(value, list):
            return value[0] if value else ""
        return value

    @field_validator("labels", mode="before")
    @classmethod
    def _label_string(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, str):
            return parse_label_string(value)
        if isinstance(value, dict):
            return {k: "" if v is None else v for k, v in value.items()}
        return value


def resolve_service_name(record: ContainerRecord) -> str:
    """Return the logical service name for a container.

    The last path segment of the compose working directory wins, so a stack
    checked out at /srv/repos/InnerGate resolves to "InnerGate" regardless of
    what compose named the container. Without a usable label the container
    name is used, minus one leading slash.
    """
    work_dir = record.labels.get(WORKING_DIR_LABEL, "")
    if work_dir:
        segment = work_dir.removesuffix("/").split("/")[-1]
        if segment:
            return segment
    return record.name.removeprefix("/")


def parse_container_stream(body: str) -> list[ContainerRecord]:
    """Parse newline-delimited JSON records, skipping lines that do not parse."""
    records: list[ContainerRecord] = []
    for lineno, line in enumerate(body.split("\n"), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            records.append(ContainerRecord.model_validate_json(line))
        except ValidationError as e:
            logger.warning("Skipping malformed container record on line %d: %s", lineno, e.errors(include_url=False))
    return records
