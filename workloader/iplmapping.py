"""Match workload addresses against IP lists."""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Iterable, Mapping

from workloader.models import IPList, Label, Workload
from workloader.wkldexport import interface_to_string

logger = logging.getLogger(__name__)

ANY_IPLIST = "Any (0.0.0.0/0 and ::/0)"

HEADER_ROW = (
    "hostname",
    "interfaces",
    "matching_iplists",
    "policy_state",
    "role",
    "app",
    "env",
    "loc",
)


def _parse_ip(text: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    try:
        return ipaddress.ip_address(text.strip())
    except ValueError:
        return None


def _as_16_bytes(address: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bytes:
    """Return the address in 16-byte form, IPv4 as an IPv4-mapped IPv6 address."""
    if isinstance(address, ipaddress.IPv4Address):
        return ipaddress.IPv6Address(f"::ffff:{address}").packed
    return address.packed


def ip_in_iplist(ip: str, iplist: IPList) -> bool:
    """Return True if the address falls into any range of the IP list.

    Raises ValueError if ip is not a valid address.
    """
    provided = _parse_ip(ip)
    if provided is None:
        raise ValueError(f"{ip} is not a valid IP address")
    provided_bytes = _as_16_bytes(provided)

    for ip_range in iplist.ip_ranges:
        if "/" in ip_range.from_ip:
            try:
                network = ipaddress.ip_network(ip_range.from_ip, strict=False)
            except ValueError:
                network = None
            if network is not None and provided.version == network.version and provided in network:
                return True

        from_ip = _parse_ip(ip_range.from_ip)
        if from_ip is None:
            continue
        to_ip = _parse_ip(ip_range.to_ip) or from_ip
        if _as_16_bytes(from_ip) <= provided_bytes <= _as_16_bytes(to_ip):
            return True
    return False


def _skip_names(skip: str | Iterable[str]) -> set[str]:
    if isinstance(skip, str):
        names = skip.replace(" ", "").split(";")
    else:
        names = list(skip)
    return {ANY_IPLIST, *names}


def map_workloads(
    workloads: Iterable[Workload],
    iplists: Iterable[IPList],
    labels: Mapping[str, Label],
    skip: str | Iterable[str] = "",
) -> list[list[str]]:
    """Return a header row and one row per workload that falls into an IP list.

    skip is a semicolon-separated string or an iterable of IP list names to
    leave out; the Any list is always left out.
    """
    skipped = _skip_names(skip)
    candidates = [ipl for ipl in iplists if ipl.name not in skipped]
    data = [list(HEADER_ROW)]

    for wkld in workloads:
        matched: dict[str, None] = {}
        for iface in wkld.interfaces:
            for ipl in candidates:
                if ip_in_iplist(iface.address, ipl):
                    matched[ipl.name] = None
        if not matched:
            continue
        data.append(
            [
                wkld.hostname,
                ";".join(interface_to_string(wkld, False)),
                ";".join(matched),
                wkld.mode(),
                *(wkld.label_by_key(key, labels).value for key in ("role", "app", "env", "loc")),
            ]
        )

    if len(data) > 1:
        logger.info("%d mapped workloads exported", len(data) - 1)
    else:
        logger.info("no mapped workloads")
    return data