"""Parsing and comparing the network interfaces given in a workload import."""

from __future__ import annotations

import ipaddress

from workloader.models import Interface

DEFAULT_INTERFACE_NAME = "umwl"


class InvalidInterfaceError(ValueError):
    """Raised when an address or interface description cannot be parsed."""


def _parse_address(text: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    if "%" in text:
        raise ValueError(f"{text!r} carries a zone")
    address = ipaddress.ip_address(text)
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


def _parse_cidr(text: str) -> tuple[str, int]:
    address_text, _, prefix_text = text.partition("/")
    if not prefix_text.isdigit():
        raise ValueError(f"{text!r} has no numeric prefix length")
    address = _parse_address(address_text)
    network = ipaddress.ip_network(f"{address}/{int(prefix_text)}", strict=False)
    return str(address), network.prefixlen


def ip_check(text: str) -> Interface:
    """Return an interface for an address or address/prefix, without a name."""
    if "/" in text:
        try:
            address, prefix = _parse_cidr(text)
        except ValueError:
            pass
        else:
            return Interface(address=address, cidr_block=prefix)
    try:
        return Interface(address=str(_parse_address(text)))
    except ValueError:
        raise InvalidInterfaceError("invalid IP address") from None


def user_input_convert(text: str) -> Interface:
    """Parse "addr", "addr/prefix", "name:addr" or "name:addr/prefix" into an interface.

    An interface without a name is called "umwl". IPv6 addresses are tried
    first without a name and then with the part before the first colon as name.
    """
    parts = text.split(":")
    if len(parts) == 1:
        iface = ip_check(text)
        iface.name = DEFAULT_INTERFACE_NAME
        return iface
    if len(parts) == 2:
        iface = ip_check(parts[1])
        iface.name = parts[0]
        return iface

    try:
        iface = ip_check(text)
    except InvalidInterfaceError:
        pass
    else:
        iface.name = DEFAULT_INTERFACE_NAME
        return iface

    try:
        iface = ip_check(":".join(parts[1:]))
    except InvalidInterfaceError:
        raise InvalidInterfaceError(f"{text} is an invalid ip format") from None
    iface.name = parts[0]
    return iface


def public_ip_is_valid(text: str) -> bool:
    """Return True if the text is blank, an IP address or a CIDR."""
    if text == "":
        return True
    try:
        if "/" in text:
            _parse_cidr(text)
        else:
            _parse_address(text)
    except ValueError:
        return False
    return True


def interface_key(iface: Interface, zero_is_nil: bool) -> str:
    """Return a comparison key of address, prefix length (or "nil") and name."""
    if iface.cidr_block is None or (zero_is_nil and iface.cidr_block == 0):
        cidr_text = "nil"
    else:
        cidr_text = str(iface.cidr_block)
    return f"{iface.address}{cidr_text}{iface.name}"