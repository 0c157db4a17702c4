from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .api_models import NOT_FOUND_STATUS, UNKNOWN_STATE, ServiceStatus
from .config import ServiceConfigEntry
from .containers import ContainerRecord, parse_container_stream, resolve_service_name


logger = logging.getLogger(__name__)


def index_containers(records: Iterable[ContainerRecord]) -> dict[str, ContainerRecord]:
    """Key records by resolved service name. Later records overwrite earlier ones."""
    index: dict[str, ContainerRecord] = {}
    for record in records:
        key = resolve_service_name(record)
        if key in index:
            logger.debug("Container %r shadows an earlier record for %r", record.name, key)
        index[key] = record
    return index


def reconcile(services: Sequence[ServiceConfigEntry], records: Iterable[ContainerRecord]) -> list[ServiceStatus]:
    """Produce exactly one status per configured service, in configured order."""
    index = index_containers(records)

    statuses: list[ServiceStatus] = []
    for svc in services:
        record = index.get(svc.name)
        if record is None:
            statuses.append(
                ServiceStatus(name=svc.name, display_name=svc.display_name, state=UNKNOWN_STATE, status=NOT_FOUND_STATUS)
            )
            continue
        statuses.append(ServiceStatus(name=svc.name, display_name=svc.display_name, state=record.state, status=record.status))
    return statuses


def reconcile_stream(services: Sequence[ServiceConfigEntry], body: str) -> list[ServiceStatus]:
    return reconcile(services, parse_container_stream(body))
