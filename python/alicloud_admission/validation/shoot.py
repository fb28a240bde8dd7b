"""
alicloud_admission/validation/shoot.py

Validation of the shoot-level settings that the infrastructure depends on:
networking CIDRs and worker pools (volumes, data volumes, zones).
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from alicloud_admission.models.field import (
    ErrorList,
    FieldPath,
    invalid,
    required,
    too_long,
    too_many,
    validate_immutable_field,
)
from alicloud_admission.models.infrastructure import Zone
from alicloud_admission.models.shoot import DataVolume, Networking, Volume, Worker
from alicloud_admission.validation.cidr import (
    CIDR,
    CIDRParseError,
    networks_intersect,
    parse_cidr,
)

MAX_DATA_DISK_COUNT = 64
MAX_DATA_DISK_NAME_LENGTH = 64
DATA_DISK_NAME_FMT = r"^[a-zA-Z][a-zA-Z0-9\.\-_:]+$"

# Reserved by Alicloud for internal use, e.g. the metadata endpoint 100.100.100.200.
RESERVED_CIDR = "100.64.0.0/10"

_DATA_DISK_NAME_RE = re.compile(DATA_DISK_NAME_FMT)
_NETWORK_FIELDS = ("nodes", "pods", "services")


def validate_networking(networking: Networking, fld_path: FieldPath) -> ErrorList:
    """Nodes CIDR is required; no network may use the reserved range."""
    all_errs: ErrorList = []
    if networking.nodes is None:
        all_errs.append(required(fld_path.child("nodes"), "a CIDR must be provided"))

    for name in _NETWORK_FIELDS:
        value = getattr(networking, name)
        if value is None:
            continue
        path = fld_path.child(name)
        all_errs += CIDR(value, path).validate_parse()
        if networks_intersect(value, RESERVED_CIDR):
            all_errs.append(
                invalid(
                    path,
                    value,
                    f"must not overlap with {RESERVED_CIDR}, it is reserved by Alicloud",
                )
            )
    return all_errs


def validate_networking_update(
    old_networking: Networking, new_networking: Networking, fld_path: FieldPath
) -> ErrorList:
    """
    Network CIDRs are immutable once they hold a valid value.

    An old value that does not parse (e.g. a placeholder) may still be
    replaced by a valid CIDR.
    """
    return [
        err
        for name in _NETWORK_FIELDS
        for err in _validate_network_immutable(
            getattr(old_networking, name),
            getattr(new_networking, name),
            fld_path.child(name),
        )
    ]


def _validate_network_immutable(
    old_cidr: Optional[str], new_cidr: Optional[str], fld_path: FieldPath
) -> ErrorList:
    if old_cidr is None:
        return []
    try:
        parse_cidr(old_cidr)
    except CIDRParseError:
        return []
    return validate_immutable_field(new_cidr, old_cidr, fld_path)


def validate_workers(
    workers: Sequence[Worker], zones: Iterable[Zone], fld_path: FieldPath
) -> ErrorList:
    """
    Validate worker pools against the zones of the infrastructure config.

    Every pool needs a root volume with type and size, at most 64 well-named
    data volumes and at least one zone known to the infrastructure.
    """
    allowed_zones = {zone.name for zone in zones}
    all_errs: ErrorList = []

    for i, worker in enumerate(workers):
        worker_path = fld_path.index(i)
        if worker.volume is None:
            all_errs.append(required(worker_path.child("volume"), "must not be nil"))
        else:
            all_errs += _validate_volume(worker.volume, worker_path.child("volume"))

        if len(worker.data_volumes) > MAX_DATA_DISK_COUNT:
            all_errs.append(
                too_many(
                    worker_path.child("dataVolumes"),
                    len(worker.data_volumes),
                    MAX_DATA_DISK_COUNT,
                )
            )
        for j, volume in enumerate(worker.data_volumes):
            all_errs += _validate_data_volume(
                volume, worker_path.child("dataVolumes").index(j)
            )

        if not worker.zones:
            all_errs.append(
                required(worker_path.child("zones"), "at least one zone must be configured")
            )
            continue

        all_errs += [
            invalid(
                worker_path.child("zones").index(j),
                zone,
                f"supported values {sorted(allowed_zones)}",
            )
            for j, zone in enumerate(worker.zones)
            if zone not in allowed_zones
        ]

    return all_errs


def _validate_volume(volume: Volume, fld_path: FieldPath) -> ErrorList:
    return _validate_volume_type_and_size(volume.type, volume.size, fld_path)


def _validate_data_volume(volume: DataVolume, fld_path: FieldPath) -> ErrorList:
    all_errs: ErrorList = []
    name_path = fld_path.child("name")
    if not _DATA_DISK_NAME_RE.match(volume.name):
        all_errs.append(
            invalid(
                name_path,
                volume.name,
                f"disk name given: {volume.name} does not match the expected pattern "
                f"(regex used for validation is '{DATA_DISK_NAME_FMT}')",
            )
        )
    elif len(volume.name) > MAX_DATA_DISK_NAME_LENGTH:
        all_errs.append(too_long(name_path, volume.name, MAX_DATA_DISK_NAME_LENGTH))
    return all_errs + _validate_volume_type_and_size(volume.type, volume.size, fld_path)


def _validate_volume_type_and_size(
    volume_type: Optional[str], size: str, fld_path: FieldPath
) -> ErrorList:
    all_errs: ErrorList = []
    if volume_type is None:
        all_errs.append(required(fld_path.child("type"), "must not be empty"))
    if not size:
        all_errs.append(required(fld_path.child("size"), "must not be empty"))
    return all_errs


def should_enforce_immutability(new: Sequence[str], old: Sequence[str]) -> bool:
    """True unless `new` equals `old` or only appends to it."""
    return list(new[: len(old)]) != list(old)


def validate_workers_update(
    old_workers: Sequence[Worker], new_workers: Sequence[Worker], fld_path: FieldPath
) -> ErrorList:
    """A pool that exists in both lists may only add zones at the end."""
    old_by_name = {worker.name: worker for worker in reversed(old_workers)}
    return [
        err
        for i, new_worker in enumerate(new_workers)
        if new_worker.name in old_by_name
        and should_enforce_immutability(
            new_worker.zones, old_by_name[new_worker.name].zones
        )
        for err in validate_immutable_field(
            new_worker.zones,
            old_by_name[new_worker.name].zones,
            fld_path.index(i).child("zones"),
        )
    ]


__all__ = [
    "RESERVED_CIDR",
    "validate_networking",
    "validate_networking_update",
    "validate_workers",
    "validate_workers_update",
    "should_enforce_immutability",
]
