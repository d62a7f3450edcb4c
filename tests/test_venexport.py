from workloader.models import VEN, Label, PCEData, Workload
from workloader.venexport import ven_export_rows, ven_health


def _pce():
    pce = PCEData(label_dimensions=["app", "env"])
    pce.add_label(Label(href="/orgs/1/labels/1", key="app", value="erp"))
    pce.add_label(Label(href="/orgs/1/labels/2", key="env", value="prod"))
    pce.workloads_list = [
        Workload(
            href="/orgs/1/workloads/w1",
            hostname="web01",
            ven_href="/orgs/1/vens/v1",
            labels=[Label(href="/orgs/1/labels/1"), Label(href="/orgs/1/labels/2")],
        )
    ]
    pce.container_clusters = {"/orgs/1/container_clusters/c1": "cluster-a"}
    pce.vens_list = [
        VEN(
            href="/orgs/1/vens/v1",
            name="ven-one",
            hostname="web01",
            status="active",
            version="22.5.0",
            uid="uid-1",
        ),
        VEN(
            href="/orgs/1/vens/v2",
            hostname="kube01",
            container_cluster_href="/orgs/1/container_clusters/c1",
            conditions=["agent.missed_heartbeats", "agent.tampering"],
        ),
    ]
    return pce


def test_ven_health_healthy_without_conditions():
    assert ven_health(VEN()) == "healthy"


def test_ven_health_joins_conditions():
    ven = VEN(conditions=["agent.clone_detected", "agent.suspend"])
    assert ven_health(ven) == "agent.clone_detected; agent.suspend"


def test_header_row():
    header = ven_export_rows(_pce())[0]
    assert header == [
        "name",
        "primary_workload_hostname",
        "description",
        "ven_type",
        "status",
        "ven_health",
        "version",
        "activation_type",
        "active_pce_fqdn",
        "target_pce_fqdn",
        "workloads",
        "container_cluster",
        "href",
        "uid",
        "app",
        "env",
    ]


def test_rows_carry_workload_labels_and_cluster():
    header, first, second = ven_export_rows(_pce())
    one = dict(zip(header, first))
    two = dict(zip(header, second))
    assert one["name"] == "ven-one"
    assert one["ven_health"] == "healthy"
    assert one["app"] == "erp"
    assert one["env"] == "prod"
    assert one["uid"] == "uid-1"
    assert two["container_cluster"] == "cluster-a"
    assert two["ven_health"] == "agent.missed_heartbeats; agent.tampering"
    assert two["app"] == "" and two["env"] == ""


def test_every_row_matches_header_length():
    rows = ven_export_rows(_pce())
    assert all(len(row) == len(rows[0]) for row in rows)
    assert len(rows) == 3


def test_no_vens_gives_only_header():
    assert len(ven_export_rows(PCEData())) == 1