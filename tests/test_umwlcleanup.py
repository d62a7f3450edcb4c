from workloader.models import Interface, Label, PCEData, Workload
from workloader.umwlcleanup import BASE_HEADERS, find_umwl_matches

MANAGED_HREF = "/orgs/1/workloads/managed"
UMWL_HREF = "/orgs/1/workloads/umwl"


def _pce(umwl_addresses):
    pce = PCEData(label_dimensions=["role", "app"])
    pce.add_label(Label(href="/orgs/1/labels/1", key="role", value="web"))
    pce.add_label(Label(href="/orgs/1/labels/2", key="app", value="crm"))
    pce.add_label(Label(href="/orgs/1/labels/3", key="role", value="db"))
    managed = Workload(
        href=MANAGED_HREF,
        hostname="managed-host",
        ven_href="/orgs/1/vens/1",
        enforcement_mode="visibility_only",
        interfaces=[
            Interface(name="eth0", address="10.0.0.5", default_gateway_address="10.0.0.1")
        ],
        labels=[Label(href="/orgs/1/labels/3")],
    )
    umwl = Workload(
        href=UMWL_HREF,
        hostname="umwl-host",
        name="umwl-name",
        interfaces=[
            Interface(name=f"eth{n}", address=a) for n, a in enumerate(umwl_addresses)
        ],
        labels=[Label(href="/orgs/1/labels/1"), Label(href="/orgs/1/labels/2")],
    )
    pce.workloads_list = [managed, umwl]
    return pce


def test_header_row_layout():
    data = find_umwl_matches(_pce(["10.0.0.5"]), False)
    header = data[0]
    assert header[: len(BASE_HEADERS)] == list(BASE_HEADERS)
    assert header[len(BASE_HEADERS):] == [
        "managed_role",
        "managed_app",
        "umwl_role",
        "umwl_app",
        "href",
        "role",
        "app",
    ]


def test_single_match_row():
    data = find_umwl_matches(_pce(["10.0.0.5"]), False)
    assert len(data) == 2
    row = dict(zip(data[0][: len(BASE_HEADERS)], data[1]))
    assert row["managed_hostname"] == "managed-host"
    assert row["umwl_hostname"] == "umwl-host"
    assert row["umwl_name"] == "umwl-name"
    assert row["managed_interfaces"] == "eth0:10.0.0.5"
    assert row["umwl_interfaces"] == "eth0:10.0.0.5"
    assert row["managed_href"] == MANAGED_HREF
    assert row["unmanaged_href"] == UMWL_HREF
    tail = data[1][len(BASE_HEADERS):]
    assert tail == ["db", "", "web", "crm", MANAGED_HREF, "web", "crm"]
    assert len(data[1]) == len(data[0])


def test_partial_match_skipped_by_default():
    data = find_umwl_matches(_pce(["10.0.0.5", "10.0.0.99"]), False)
    assert data[1:] == []


def test_partial_match_allowed_with_one_interface_match():
    data = find_umwl_matches(_pce(["10.0.0.5", "10.0.0.99"]), True)
    assert len(data) == 2
    assert data[1][4] == "eth0:10.0.0.5;eth1:10.0.0.99"


def test_no_shared_address_gives_no_rows():
    data = find_umwl_matches(_pce(["192.168.5.5"]), True)
    assert len(data) == 1


def test_managed_without_default_gateway_not_matched():
    pce = _pce(["10.0.0.5"])
    pce.workloads_list[0].interfaces[0].default_gateway_address = ""
    assert len(find_umwl_matches(pce, True)) == 1