import pytest

from workloader.interfaces import (
    InvalidInterfaceError,
    interface_key,
    ip_check,
    public_ip_is_valid,
    user_input_convert,
)
from workloader.models import Interface


def test_ip_check_plain_address():
    iface = ip_check("192.168.200.20")
    assert iface.address == "192.168.200.20"
    assert iface.cidr_block is None


def test_ip_check_cidr_keeps_host_address():
    iface = ip_check("192.168.200.20/24")
    assert iface.address == "192.168.200.20"
    assert iface.cidr_block == 24


@pytest.mark.parametrize("text", ["abc", "192.168.200.20/abc", "300.1.1.1", ""])
def test_ip_check_rejects_bad_input(text):
    with pytest.raises(InvalidInterfaceError):
        ip_check(text)


def test_convert_without_name_uses_umwl():
    iface = user_input_convert("192.168.200.20")
    assert iface.name == "umwl"
    assert iface.address == "192.168.200.20"


def test_convert_with_name_and_cidr():
    iface = user_input_convert("eth0:192.168.200.20/24")
    assert (iface.name, iface.address, iface.cidr_block) == ("eth0", "192.168.200.20", 24)


def test_convert_ipv6_without_name():
    iface = user_input_convert("fe80::1")
    assert iface.name == "umwl"
    assert iface.address == "fe80::1"


def test_convert_ipv6_with_name():
    iface = user_input_convert("eth0:fe80::1")
    assert iface.name == "eth0"
    assert iface.address == "fe80::1"


def test_convert_invalid_ipv6_form_message():
    with pytest.raises(InvalidInterfaceError, match="is an invalid ip format"):
        user_input_convert("eth0:zz::qq")


def test_convert_invalid_ipv4():
    with pytest.raises(InvalidInterfaceError):
        user_input_convert("eth0:not-an-ip")


@pytest.mark.parametrize(
    "text, valid",
    [
        ("", True),
        ("192.168.200.20", True),
        ("192.168.200.20/24", True),
        ("fe80::1", True),
        ("nope", False),
        ("192.168.200.20/99", False),
    ],
)
def test_public_ip_is_valid(text, valid):
    assert public_ip_is_valid(text) is valid


def test_interface_key_zero_is_nil():
    zero = Interface(name="eth0", address="192.168.200.20", cidr_block=0)
    none = Interface(name="eth0", address="192.168.200.20", cidr_block=None)
    assert interface_key(zero, True) == interface_key(none, True)
    assert interface_key(zero, False) != interface_key(none, False)


def test_interface_key_distinguishes_names_and_prefixes():
    base = Interface(name="eth0", address="192.168.200.20", cidr_block=24)
    other_name = Interface(name="eth1", address="192.168.200.20", cidr_block=24)
    other_cidr = Interface(name="eth0", address="192.168.200.20", cidr_block=16)
    keys = {interface_key(i, False) for i in (base, other_name, other_cidr)}
    assert len(keys) == 3