import pytest

from workloader.iplmapping import ANY_IPLIST, HEADER_ROW, ip_in_iplist, map_workloads
from workloader.models import Interface, IPList, IPRange, Label, PCEData, Workload


def _ipl(name, *ranges):
    return IPList(name=name, ip_ranges=[IPRange(from_ip=f, to_ip=t) for f, t in ranges])


def test_ip_in_cidr():
    ipl = _ipl("net", ("10.0.0.0/8", ""))
    assert ip_in_iplist("10.1.2.3", ipl) is True
    assert ip_in_iplist("11.1.2.3", ipl) is False


def test_ip_in_from_to_range():
    ipl = _ipl("range", ("192.168.1.10", "192.168.1.20"))
    assert ip_in_iplist("192.168.1.10", ipl) is True
    assert ip_in_iplist("192.168.1.20", ipl) is True
    assert ip_in_iplist("192.168.1.15", ipl) is True
    assert ip_in_iplist("192.168.1.21", ipl) is False
    assert ip_in_iplist("192.168.1.9", ipl) is False


def test_single_address_without_to():
    ipl = _ipl("one", ("172.16.0.1", ""))
    assert ip_in_iplist("172.16.0.1", ipl) is True
    assert ip_in_iplist("172.16.0.2", ipl) is False


def test_ipv6_cidr():
    ipl = _ipl("v6", ("2001:db8::/32", ""))
    assert ip_in_iplist("2001:db8::1", ipl) is True
    assert ip_in_iplist("2001:db9::1", ipl) is False
    assert ip_in_iplist("10.0.0.1", ipl) is False


def test_invalid_ip_raises():
    with pytest.raises(ValueError):
        ip_in_iplist("not-an-ip", _ipl("net", ("10.0.0.0/8", "")))


def test_empty_list_matches_nothing():
    assert ip_in_iplist("10.0.0.1", IPList(name="empty")) is False


def _pce():
    pce = PCEData()
    pce.add_label(Label(href="/orgs/1/labels/1", key="role", value="web"))
    pce.add_label(Label(href="/orgs/1/labels/2", key="env", value="prod"))
    return pce


def test_map_workloads_rows():
    pce = _pce()
    wkld = Workload(
        href="/orgs/1/workloads/1",
        hostname="host1",
        interfaces=[Interface(name="eth0", address="10.0.0.5", cidr_block=24)],
        labels=[Label(href="/orgs/1/labels/1"), Label(href="/orgs/1/labels/2")],
    )
    other = Workload(
        hostname="host2",
        interfaces=[Interface(name="eth0", address="8.8.8.8")],
    )
    iplists = [
        _ipl(ANY_IPLIST, ("0.0.0.0/0", "")),
        _ipl("private", ("10.0.0.0/8", "")),
        _ipl("small", ("10.0.0.1", "10.0.0.9")),
    ]
    data = map_workloads([wkld, other], iplists, pce.labels, "")
    assert data[0] == list(HEADER_ROW)
    assert len(data) == 2
    row = data[1]
    assert row[0] == "host1"
    assert row[1] == "eth0:10.0.0.5/24"
    assert set(row[2].split(";")) == {"private", "small"}
    assert row[3] == "unmanaged"
    assert row[4:] == ["web", "", "prod", ""]


def test_map_workloads_skip_string():
    wkld = Workload(hostname="h", interfaces=[Interface(name="eth0", address="10.0.0.5")])
    iplists = [_ipl("private", ("10.0.0.0/8", "")), _ipl("other", ("10.0.0.0/16", ""))]
    data = map_workloads([wkld], iplists, {}, "private; other")
    assert data == [list(HEADER_ROW)]


def test_map_workloads_skip_iterable():
    wkld = Workload(hostname="h", interfaces=[Interface(name="eth0", address="10.0.0.5")])
    iplists = [_ipl("private", ("10.0.0.0/8", "")), _ipl("other", ("10.0.0.0/16", ""))]
    data = map_workloads([wkld], iplists, {}, ["private"])
    assert data[1][2] == "other"


def test_map_workloads_invalid_interface_raises():
    wkld = Workload(hostname="h", interfaces=[Interface(name="eth0", address="bad")])
    with pytest.raises(ValueError):
        map_workloads([wkld], [_ipl("private", ("10.0.0.0/8", ""))], {}, "")