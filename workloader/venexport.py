"""Export VENs with the labels of their workloads."""

from __future__ import annotations

from workloader.headers import (
    HEADER_HOSTNAME,
    HEADER_VEN_HREF,
    VEN_HEADER_ACTIVATION_TYPE,
    VEN_HEADER_ACTIVE_PCE_FQDN,
    VEN_HEADER_CONTAINER_CLUSTER,
    VEN_HEADER_DESCRIPTION,
    VEN_HEADER_HEALTH,
    VEN_HEADER_HOSTNAME,
    VEN_HEADER_HREF,
    VEN_HEADER_NAME,
    VEN_HEADER_STATUS,
    VEN_HEADER_TARGET_PCE_FQDN,
    VEN_HEADER_UID,
    VEN_HEADER_VEN_TYPE,
    VEN_HEADER_VERSION,
    VEN_HEADER_WORKLOADS,
)
from workloader.models import PCEData, VEN
from workloader.wkldexport import WorkloadExport

HEALTHY = "healthy"


def ven_health(ven: VEN) -> str:
    """Return "healthy" or the VEN's condition types joined by "; "."""
    return "; ".join(ven.conditions) if ven.conditions else HEALTHY


def ven_export_rows(pce: PCEData) -> list[list[str]]:
    """Return the VEN export: a header row and one row per VEN."""
    dimensions = list(pce.label_dimensions)
    wkld_map = WorkloadExport(
        pce=pce,
        remove_desc_newlines=False,
        headers=[HEADER_VEN_HREF, *dimensions],
    ).map_data()

    data = [
        [
            VEN_HEADER_NAME,
            VEN_HEADER_HOSTNAME,
            VEN_HEADER_DESCRIPTION,
            VEN_HEADER_VEN_TYPE,
            VEN_HEADER_STATUS,
            VEN_HEADER_HEALTH,
            VEN_HEADER_VERSION,
            VEN_HEADER_ACTIVATION_TYPE,
            VEN_HEADER_ACTIVE_PCE_FQDN,
            VEN_HEADER_TARGET_PCE_FQDN,
            VEN_HEADER_WORKLOADS,
            VEN_HEADER_CONTAINER_CLUSTER,
            VEN_HEADER_HREF,
            VEN_HEADER_UID,
            *dimensions,
        ]
    ]
    for ven in pce.vens_list:
        cluster = ""
        if ven.container_cluster_href:
            cluster = pce.container_clusters.get(ven.container_cluster_href, "")
        wkld_row = wkld_map.get(ven.href, {})
        row = [
            ven.name,
            ven.hostname,
            ven.description,
            ven.ven_type,
            ven.status,
            ven_health(ven),
            ven.version,
            ven.activation_type,
            ven.active_pce_fqdn,
            ven.target_pce_fqdn,
            wkld_row.get(HEADER_HOSTNAME, ""),
            cluster,
            ven.href,
            ven.uid,
        ]
        row.extend(wkld_row.get(dim, "") for dim in dimensions)
        data.append(row)
    return data