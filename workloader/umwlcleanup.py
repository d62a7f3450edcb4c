"""Find unmanaged workloads that share addresses with managed workloads."""

from __future__ import annotations

import logging

from workloader.models import PCEData, Workload
from workloader.wkldexport import interface_to_string

logger = logging.getLogger(__name__)

BASE_HEADERS = (
    "managed_hostname",
    "umwl_hostname",
    "umwl_name",
    "managed_interfaces",
    "umwl_interfaces",
    "managed_href",
    "unmanaged_href",
    "managed_external_data_set",
    "managed_external_data_ref",
    "umwl_external_data_set",
    "umwl_external_data_ref",
)


def _identifier(umwl: Workload) -> str:
    parts = []
    if umwl.hostname:
        parts.append(f"hostname: {umwl.hostname}")
    if umwl.name:
        parts.append(f"name: {umwl.name}")
    return ";".join(parts)


def _plain_interfaces(wkld: Workload) -> str:
    return ";".join(f"{i.name}:{i.address}" for i in wkld.interfaces)


def find_umwl_matches(pce: PCEData, one_interface_match: bool = False) -> list[list[str]]:
    """Return a header row and one row per unmanaged workload matching a managed one.

    A managed workload matches when an address on its default-gateway interface
    is an address of the unmanaged workload. Unless one_interface_match is set,
    every address of the unmanaged workload must belong to that managed workload.
    The trailing href and label columns let the output feed a workload import.
    """
    dimensions = list(pce.label_dimensions)

    umwl_by_ip: dict[str, Workload] = {}
    managed_default_by_ip: dict[str, Workload] = {}
    managed_by_ip: dict[str, Workload] = {}
    for wkld in pce.workloads_list:
        if wkld.mode() == "unmanaged":
            for iface in wkld.interfaces:
                umwl_by_ip[iface.address] = wkld
        else:
            for iface in wkld.interfaces:
                managed_by_ip[iface.address] = wkld
            for ip in wkld.ips_with_default_gw():
                managed_default_by_ip[ip] = wkld

    header = [
        *BASE_HEADERS,
        *(f"managed_{d}" for d in dimensions),
        *(f"umwl_{d}" for d in dimensions),
        "href",
        *dimensions,
    ]
    data = [header]

    for address, managed in managed_default_by_ip.items():
        umwl = umwl_by_ip.get(address)
        if umwl is None:
            continue

        if not one_interface_match:
            mismatch = any(
                getattr(managed_by_ip.get(i.address), "href", "") != managed.href
                for i in umwl.interfaces
            )
            if mismatch:
                logger.warning(
                    "Unmanaged workload - %s - has multiple IP addresses. At least one "
                    "matches managed workload %s, but others do not. Skipping.",
                    _identifier(umwl),
                    managed.hostname,
                )
                continue

        umwl_labels = [umwl.label_by_key(d, pce.labels).value for d in dimensions]
        data.append(
            [
                managed.hostname,
                umwl.hostname,
                umwl.name,
                _plain_interfaces(managed),
                _plain_interfaces(umwl),
                managed.href,
                umwl.href,
                managed.external_data_set,
                managed.external_data_reference,
                umwl.external_data_set,
                umwl.external_data_reference,
                *(managed.label_by_key(d, pce.labels).value for d in dimensions),
                *umwl_labels,
                managed.href,
                *umwl_labels,
            ]
        )

    logger.info("%d matches found", len(data) - 1)
    return data


__all__ = ["BASE_HEADERS", "find_umwl_matches", "interface_to_string"]