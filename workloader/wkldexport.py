"""Export workloads to CSV rows, keyed maps and files."""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from workloader.headers import (
    HEADER_ACTIVE_PCE_FQDN,
    HEADER_AGENT_HEALTH,
    HEADER_AGENT_ID,
    HEADER_AGENT_STATUS,
    HEADER_AGENT_VERSION,
    HEADER_ANY_VULN_EXPOSURE,
    HEADER_CLOUD_INSTANCE_ID,
    HEADER_CREATED_AT,
    HEADER_DATA_CENTER,
    HEADER_DATA_CENTER_ZONE,
    HEADER_DEFAULT_GW,
    HEADER_DEFAULT_GW_NETWORK,
    HEADER_DESCRIPTION,
    HEADER_DISTINGUISHED_NAME,
    HEADER_ENFORCEMENT,
    HEADER_EXTERNAL_DATA_REFERENCE,
    HEADER_EXTERNAL_DATA_SET,
    HEADER_HOSTNAME,
    HEADER_HOURS_SINCE_LAST_HEARTBEAT,
    HEADER_HREF,
    HEADER_INTERFACES,
    HEADER_IP_LIST_VULN_EXPOSURE,
    HEADER_IP_WITH_DEFAULT_GW,
    HEADER_LAST_HEARTBEAT_ON,
    HEADER_MANAGED,
    HEADER_MAX_VULN_SCORE,
    HEADER_NAME,
    HEADER_NETMASK_OF_IP_WITH_DEF_GW,
    HEADER_NUM_VULNS,
    HEADER_ONLINE,
    HEADER_OS_DETAIL,
    HEADER_OS_ID,
    HEADER_PUBLIC_IP,
    HEADER_SECURITY_POLICY_APPLIED_AT,
    HEADER_SECURITY_POLICY_RECEIVED_AT,
    HEADER_SECURITY_POLICY_REFRESH_AT,
    HEADER_SECURITY_POLICY_SYNC_STATE,
    HEADER_SERVICE_PROVIDER,
    HEADER_SPN,
    HEADER_VEN_HREF,
    HEADER_VISIBILITY,
    HEADER_VULN_EXPOSURE_SCORE,
    HEADER_VULN_PORT_EXPOSURE,
    HEADER_VULN_SCORE,
    all_headers,
)
from workloader.models import NOT_AVAILABLE, PCEData, Workload

logger = logging.getLogger(__name__)

UNMANAGED = "unmanaged"

_AGENT_FIELDS = (
    HEADER_SECURITY_POLICY_SYNC_STATE,
    HEADER_SECURITY_POLICY_APPLIED_AT,
    HEADER_SECURITY_POLICY_RECEIVED_AT,
    HEADER_SECURITY_POLICY_REFRESH_AT,
    HEADER_AGENT_VERSION,
    HEADER_LAST_HEARTBEAT_ON,
    HEADER_HOURS_SINCE_LAST_HEARTBEAT,
    HEADER_AGENT_ID,
    HEADER_ACTIVE_PCE_FQDN,
    HEADER_AGENT_STATUS,
    HEADER_CLOUD_INSTANCE_ID,
    HEADER_AGENT_HEALTH,
    HEADER_VEN_HREF,
)


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _strip_newlines(text: str) -> str:
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def interface_to_string(workload: Workload, replace_dots: bool) -> list[str]:
    """Return each interface as "name:address" or "name:address/cidr"."""
    result = []
    for iface in workload.interfaces:
        name = iface.name.replace(".", "-") if replace_dots else iface.name
        text = f"{name}:{iface.address}"
        if iface.cidr_block:
            text = f"{text}/{iface.cidr_block}"
        result.append(text)
    return result


@dataclass
class WorkloadExport:
    """Builds the workload export table from loaded PCE data."""

    pce: PCEData = field(default_factory=PCEData)
    include_vuln: bool = False
    remove_desc_newlines: bool = False
    headers: list[str] = field(default_factory=list)
    no_href: bool = False

    def _label_keys(self) -> list[str]:
        keys = {
            self.pce.labels[ref.href].key
            for wkld in self.pce.workloads_list
            for ref in wkld.labels
            if ref.href in self.pce.labels and self.pce.labels[ref.href].key
        }
        return sorted(keys)

    def _header_row(self, label_keys: list[str]) -> list[str]:
        if self.headers:
            return list(self.headers)
        row = []
        for header in all_headers(self.include_vuln, not self.no_href):
            row.append(header)
            if (not self.no_href and header == HEADER_HREF) or (
                self.no_href and header == HEADER_NAME
            ):
                row.extend(label_keys)
        return row

    def _row_values(self, wkld: Workload, label_keys: list[str]) -> dict[str, str]:
        row: dict[str, str] = {
            HEADER_INTERFACES: ";".join(interface_to_string(wkld, False)),
            HEADER_MANAGED: "true" if wkld.managed else "false",
        }
        row.update(dict.fromkeys(_AGENT_FIELDS, UNMANAGED))

        agent = wkld.agent
        if agent is not None and agent.href:
            status = agent.status
            hours = wkld.hours_since_last_heartbeat()
            row[HEADER_SECURITY_POLICY_SYNC_STATE] = status.security_policy_sync_state
            row[HEADER_SECURITY_POLICY_APPLIED_AT] = status.security_policy_applied_at
            row[HEADER_SECURITY_POLICY_RECEIVED_AT] = status.security_policy_received_at
            row[HEADER_SECURITY_POLICY_REFRESH_AT] = status.security_policy_refresh_at
            row[HEADER_AGENT_VERSION] = status.agent_version
            row[HEADER_LAST_HEARTBEAT_ON] = status.last_heartbeat_on
            row[HEADER_HOURS_SINCE_LAST_HEARTBEAT] = (
                f"{hours:f}" if hours is not None else NOT_AVAILABLE
            )
            row[HEADER_AGENT_ID] = agent.agent_id()
            row[HEADER_ACTIVE_PCE_FQDN] = agent.active_pce_fqdn or self.pce.fqdn
            row[HEADER_AGENT_STATUS] = status.status
            row[HEADER_CLOUD_INSTANCE_ID] = status.instance_id or NOT_AVAILABLE
            row[HEADER_AGENT_HEALTH] = (
                "; ".join(f"{h.type} ({h.severity})" for h in status.agent_health)
                or NOT_AVAILABLE
            )

        if wkld.ven_href:
            row[HEADER_VEN_HREF] = wkld.ven_href

        description = wkld.description
        if self.remove_desc_newlines:
            description = _strip_newlines(description)

        for key in label_keys:
            row[key] = wkld.label_by_key(key, self.pce.labels).value

        row.update(
            {
                HEADER_HOSTNAME: wkld.hostname,
                HEADER_NAME: wkld.name,
                HEADER_HREF: wkld.href,
                HEADER_PUBLIC_IP: wkld.public_ip,
                HEADER_DISTINGUISHED_NAME: wkld.distinguished_name,
                HEADER_IP_WITH_DEFAULT_GW: wkld.ip_with_default_gw(),
                HEADER_NETMASK_OF_IP_WITH_DEF_GW: wkld.netmask_with_default_gw(),
                HEADER_DEFAULT_GW: wkld.default_gw(),
                HEADER_DEFAULT_GW_NETWORK: wkld.network_with_default_gw(),
                HEADER_SPN: wkld.service_principal_name,
                HEADER_DESCRIPTION: description,
                HEADER_ENFORCEMENT: wkld.mode(),
                HEADER_VISIBILITY: wkld.visibility_level(),
                HEADER_ONLINE: str(wkld.online).lower(),
                HEADER_CREATED_AT: wkld.created_at,
                HEADER_OS_ID: wkld.os_id,
                HEADER_OS_DETAIL: wkld.os_detail,
                HEADER_SERVICE_PROVIDER: wkld.service_provider,
                HEADER_DATA_CENTER: wkld.data_center,
                HEADER_DATA_CENTER_ZONE: wkld.data_center_zone,
                HEADER_EXTERNAL_DATA_REFERENCE: wkld.external_data_reference,
                HEADER_EXTERNAL_DATA_SET: wkld.external_data_set,
            }
        )

        vuln = wkld.vulnerability_summary
        if self.include_vuln and vuln is not None:
            row[HEADER_MAX_VULN_SCORE] = str(_round_half_away(vuln.max_vulnerability_score / 10))
            row[HEADER_VULN_SCORE] = str(_round_half_away(vuln.vulnerability_score / 10))
            row[HEADER_VULN_EXPOSURE_SCORE] = str(
                _round_half_away(vuln.vulnerability_exposure_score / 10)
            )
            row[HEADER_NUM_VULNS] = str(vuln.num_vulnerabilities)
            row[HEADER_VULN_PORT_EXPOSURE] = str(vuln.vulnerable_port_exposure)
            row[HEADER_ANY_VULN_EXPOSURE] = str(vuln.any_exposure).lower()
            row[HEADER_IP_LIST_VULN_EXPOSURE] = str(vuln.ip_list_exposure).lower()
        return row

    def csv_data(self) -> list[list[str]]:
        """Return the export as a header row followed by one row per live workload."""
        label_keys = self._label_keys()
        header_row = self._header_row(label_keys)
        data = [header_row]
        for wkld in self.pce.workloads_list:
            if wkld.deleted:
                continue
            values = self._row_values(wkld, label_keys)
            data.append([values.get(header, "") for header in header_row])
        return data

    def map_data(self) -> dict[str, dict[str, str]]:
        """Return rows keyed by their first column, each as a header-to-value map."""
        header_row, *rows = self.csv_data()
        return {row[0]: dict(zip(header_row, row)) for row in rows}

    def write_csv(self, path: str | Path | None = None) -> Path | None:
        """Write the export to a CSV file and return its path, or None if empty."""
        data = self.csv_data()
        if len(data) <= 1:
            logger.info("no workloads in PCE.")
            return None
        if not path:
            path = f"workloader-wkld-export-{datetime.now():%Y%m%d_%H%M%S}.csv"
        target = Path(path)
        with target.open("w", newline="", encoding="utf-8") as handle:
            csv.writer(handle).writerows(data)
        logger.info("%d workloads exported", len(data) - 1)
        return target