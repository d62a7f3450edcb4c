"""Column headers used by workload and VEN CSV files."""

from __future__ import annotations

HEADER_HOSTNAME = "hostname"
HEADER_NAME = "name"
HEADER_INTERFACES = "interfaces"
HEADER_PUBLIC_IP = "public_ip"
HEADER_DISTINGUISHED_NAME = "distinguished_name"
HEADER_IP_WITH_DEFAULT_GW = "ip_with_default_gw"
HEADER_NETMASK_OF_IP_WITH_DEF_GW = "netmask_of_ip_with_def_gw"
HEADER_DEFAULT_GW = "default_gw"
HEADER_DEFAULT_GW_NETWORK = "default_gw_network"
HEADER_HREF = "href"
HEADER_DESCRIPTION = "description"
HEADER_ENFORCEMENT = "enforcement"
HEADER_VISIBILITY = "visibility"
HEADER_ONLINE = "online"
HEADER_AGENT_STATUS = "agent_status"
HEADER_SECURITY_POLICY_SYNC_STATE = "security_policy_sync_state"
HEADER_SECURITY_POLICY_APPLIED_AT = "security_policy_applied_at"
HEADER_SECURITY_POLICY_RECEIVED_AT = "security_policy_received_at"
HEADER_SECURITY_POLICY_REFRESH_AT = "security_policy_refresh_at"
HEADER_LAST_HEARTBEAT_ON = "last_heartbeat_on"
HEADER_HOURS_SINCE_LAST_HEARTBEAT = "hours_since_last_heartbeat"
HEADER_OS_ID = "os_id"
HEADER_OS_DETAIL = "os_detail"
HEADER_VEN_HREF = "ven_href"
HEADER_AGENT_VERSION = "agent_version"
HEADER_AGENT_ID = "agent_id"
HEADER_ACTIVE_PCE_FQDN = "active_pce_fqdn"
HEADER_SERVICE_PROVIDER = "service_provider"
HEADER_DATA_CENTER = "data_center"
HEADER_DATA_CENTER_ZONE = "data_center_zone"
HEADER_CLOUD_INSTANCE_ID = "cloud_instance_id"
HEADER_EXTERNAL_DATA_SET = "external_data_set"
HEADER_EXTERNAL_DATA_REFERENCE = "external_data_reference"
HEADER_CREATED_AT = "created_at"
HEADER_AGENT_HEALTH = "agent_health"
HEADER_SPN = "spn"
HEADER_MANAGED = "managed"
HEADER_VULN_EXPOSURE_SCORE = "vuln_exposure_score"
HEADER_NUM_VULNS = "num_vulns"
HEADER_MAX_VULN_SCORE = "max_vuln_score"
HEADER_VULN_SCORE = "vuln_score"
HEADER_VULN_PORT_EXPOSURE = "vuln_port_exposure"
HEADER_ANY_VULN_EXPOSURE = "any_ip_vuln_exposure"
HEADER_IP_LIST_VULN_EXPOSURE = "ip_list_vuln_exposure"

VEN_HEADER_HREF = "href"
VEN_HEADER_NAME = "name"
VEN_HEADER_DESCRIPTION = "description"
VEN_HEADER_VEN_TYPE = "ven_type"
VEN_HEADER_HOSTNAME = "primary_workload_hostname"
VEN_HEADER_UID = "uid"
VEN_HEADER_STATUS = "status"
VEN_HEADER_VERSION = "version"
VEN_HEADER_ACTIVATION_TYPE = "activation_type"
VEN_HEADER_ACTIVE_PCE_FQDN = "active_pce_fqdn"
VEN_HEADER_TARGET_PCE_FQDN = "target_pce_fqdn"
VEN_HEADER_WORKLOADS = "workloads"
VEN_HEADER_CONTAINER_CLUSTER = "container_cluster"
VEN_HEADER_HEALTH = "ven_health"

_NETWORK_HEADERS = (
    HEADER_HOSTNAME,
    HEADER_NAME,
    HEADER_INTERFACES,
    HEADER_PUBLIC_IP,
    HEADER_DISTINGUISHED_NAME,
    HEADER_IP_WITH_DEFAULT_GW,
    HEADER_NETMASK_OF_IP_WITH_DEF_GW,
    HEADER_DEFAULT_GW,
    HEADER_DEFAULT_GW_NETWORK,
)

_DETAIL_HEADERS = (
    HEADER_DESCRIPTION,
    HEADER_ENFORCEMENT,
    HEADER_ONLINE,
    HEADER_AGENT_STATUS,
    HEADER_SECURITY_POLICY_SYNC_STATE,
    HEADER_SECURITY_POLICY_APPLIED_AT,
    HEADER_SECURITY_POLICY_RECEIVED_AT,
    HEADER_SECURITY_POLICY_REFRESH_AT,
    HEADER_LAST_HEARTBEAT_ON,
    HEADER_HOURS_SINCE_LAST_HEARTBEAT,
    HEADER_OS_ID,
    HEADER_OS_DETAIL,
    HEADER_VEN_HREF,
    HEADER_AGENT_VERSION,
    HEADER_AGENT_ID,
    HEADER_ACTIVE_PCE_FQDN,
    HEADER_SERVICE_PROVIDER,
    HEADER_DATA_CENTER,
    HEADER_DATA_CENTER_ZONE,
    HEADER_CLOUD_INSTANCE_ID,
    HEADER_CREATED_AT,
    HEADER_AGENT_HEALTH,
    HEADER_VISIBILITY,
    HEADER_SPN,
    HEADER_MANAGED,
)

_VULN_HEADERS = (
    HEADER_VULN_EXPOSURE_SCORE,
    HEADER_NUM_VULNS,
    HEADER_MAX_VULN_SCORE,
    HEADER_VULN_SCORE,
    HEADER_VULN_PORT_EXPOSURE,
    HEADER_ANY_VULN_EXPOSURE,
    HEADER_IP_LIST_VULN_EXPOSURE,
)


def all_headers(include_vuln: bool, include_href: bool) -> list[str]:
    """Return every workload export header in export order."""
    headers = list(_NETWORK_HEADERS)
    if include_href:
        headers.append(HEADER_HREF)
    headers.extend(_DETAIL_HEADERS)
    if include_vuln:
        headers.extend(_VULN_HEADERS)
    headers.extend((HEADER_EXTERNAL_DATA_SET, HEADER_EXTERNAL_DATA_REFERENCE))
    return headers


def import_headers() -> list[str]:
    """Return the non-label headers that a workload import can change."""
    return [
        HEADER_HOSTNAME,
        HEADER_NAME,
        HEADER_INTERFACES,
        HEADER_PUBLIC_IP,
        HEADER_DISTINGUISHED_NAME,
        HEADER_SPN,
        HEADER_ENFORCEMENT,
        HEADER_VISIBILITY,
        HEADER_DESCRIPTION,
        HEADER_OS_ID,
        HEADER_OS_DETAIL,
        HEADER_DATA_CENTER,
        HEADER_EXTERNAL_DATA_SET,
        HEADER_EXTERNAL_DATA_REFERENCE,
    ]