"""Data objects describing what a PCE holds: labels, workloads, VENs and IP lists."""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

NOT_AVAILABLE = "NA"

_VISIBILITY_TO_USER = {
    "flow_summary": "blocked_allowed",
    "flow_drops": "blocked",
    "flow_off": "off",
    "enhanced_data_collection": "enhanced_data_collection",
}
_VISIBILITY_FROM_USER = {user: api for api, user in _VISIBILITY_TO_USER.items()}

_FRACTION = re.compile(r"\.(\d+)")


def _parse_rfc3339(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, accepting a trailing Z and any fraction length."""
    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    value = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp {text!r} has no time zone")
    return parsed


@dataclass
class Label:
    """A label: a key and value identified by an href."""

    href: str = ""
    key: str = ""
    value: str = ""


@dataclass
class Interface:
    """A network interface on a workload."""

    name: str = ""
    address: str = ""
    cidr_block: int | None = None
    default_gateway_address: str = ""


@dataclass
class AgentHealth:
    """One health condition reported by an agent."""

    type: str = ""
    severity: str = ""


@dataclass
class AgentStatus:
    """Status block of a managed workload's agent."""

    status: str = ""
    security_policy_sync_state: str = ""
    security_policy_applied_at: str = ""
    security_policy_received_at: str = ""
    security_policy_refresh_at: str = ""
    agent_version: str = ""
    last_heartbeat_on: str = ""
    instance_id: str = ""
    agent_health: list[AgentHealth] = field(default_factory=list)


@dataclass
class Agent:
    """The agent installed on a managed workload."""

    href: str = ""
    active_pce_fqdn: str = ""
    status: AgentStatus = field(default_factory=AgentStatus)

    def agent_id(self) -> str:
        """Return the identifier that ends the agent's href."""
        return self.href.rsplit("/", 1)[-1]


@dataclass
class VulnerabilitySummary:
    """Vulnerability figures attached to a workload."""

    num_vulnerabilities: int = 0
    max_vulnerability_score: int = 0
    vulnerability_score: int = 0
    vulnerability_exposure_score: int = 0
    vulnerable_port_exposure: int = 0
    any_exposure: bool = False
    ip_list_exposure: bool = False


@dataclass
class Workload:
    """A managed or unmanaged workload."""

    href: str = ""
    hostname: str = ""
    name: str = ""
    description: str = ""
    labels: list[Label] = field(default_factory=list)
    interfaces: list[Interface] = field(default_factory=list)
    public_ip: str = ""
    distinguished_name: str = ""
    service_principal_name: str = ""
    enforcement_mode: str = ""
    visibility: str = ""
    online: bool = False
    deleted: bool = False
    created_at: str = ""
    os_id: str = ""
    os_detail: str = ""
    service_provider: str = ""
    data_center: str = ""
    data_center_zone: str = ""
    external_data_set: str = ""
    external_data_reference: str = ""
    agent: Agent | None = None
    ven_href: str = ""
    vulnerability_summary: VulnerabilitySummary | None = None

    @property
    def managed(self) -> bool:
        return bool((self.agent is not None and self.agent.href) or self.ven_href)

    def mode(self) -> str:
        """Return "unmanaged" or the enforcement mode of a managed workload."""
        if not self.managed:
            return "unmanaged"
        return self.enforcement_mode

    def visibility_level(self) -> str:
        """Return the visibility level in user terms (blocked_allowed, blocked, off)."""
        if not self.managed:
            return "unmanaged"
        return _VISIBILITY_TO_USER.get(self.visibility, self.visibility)

    def set_visibility_level(self, level: str) -> None:
        """Set the visibility level from its user term."""
        try:
            self.visibility = _VISIBILITY_FROM_USER[level.lower()]
        except KeyError:
            raise ValueError(
                f"{level!r} is not a valid visibility level; "
                "use blocked_allowed, blocked, off or enhanced_data_collection"
            ) from None

    def label_by_key(self, key: str, labels: dict[str, Label]) -> Label:
        """Return the workload's label with the given key, or an empty label."""
        for ref in self.labels:
            label = labels.get(ref.href)
            if label is not None and label.key == key:
                return label
        return Label()

    def _default_gw_interfaces(self) -> list[Interface]:
        return [i for i in self.interfaces if i.default_gateway_address]

    def ips_with_default_gw(self) -> list[str]:
        """Return every address on an interface that has a default gateway."""
        return [i.address for i in self._default_gw_interfaces()]

    def ip_with_default_gw(self) -> str:
        """Return the first address with a default gateway, or "NA"."""
        ips = self.ips_with_default_gw()
        return ips[0] if ips else NOT_AVAILABLE

    def _default_network(self) -> ipaddress.IPv4Network | ipaddress.IPv6Network | None:
        for iface in self._default_gw_interfaces():
            if iface.cidr_block is None:
                continue
            try:
                return ipaddress.ip_network(f"{iface.address}/{iface.cidr_block}", strict=False)
            except ValueError:
                continue
        return None

    def netmask_with_default_gw(self) -> str:
        """Return the netmask of the default-gateway interface, or "NA"."""
        network = self._default_network()
        return str(network.netmask) if network is not None else NOT_AVAILABLE

    def default_gw(self) -> str:
        """Return the default gateway address, or "NA"."""
        ifaces = self._default_gw_interfaces()
        return ifaces[0].default_gateway_address if ifaces else NOT_AVAILABLE

    def network_with_default_gw(self) -> str:
        """Return the network of the default-gateway interface in CIDR form, or "NA"."""
        network = self._default_network()
        return str(network) if network is not None else NOT_AVAILABLE

    def hours_since_last_heartbeat(self, now: datetime | None = None) -> float | None:
        """Return hours since the agent's last heartbeat, or None if unknown."""
        if self.agent is None or not self.agent.status.last_heartbeat_on:
            return None
        try:
            last = _parse_rfc3339(self.agent.status.last_heartbeat_on)
        except ValueError:
            return None
        current = now if now is not None else datetime.now(timezone.utc)
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        return (current - last).total_seconds() / 3600


@dataclass
class VEN:
    """A VEN (agent) registered with the PCE."""

    href: str = ""
    name: str = ""
    hostname: str = ""
    description: str = ""
    ven_type: str = ""
    status: str = ""
    version: str = ""
    activation_type: str = ""
    active_pce_fqdn: str = ""
    target_pce_fqdn: str = ""
    uid: str = ""
    container_cluster_href: str = ""
    conditions: list[str] = field(default_factory=list)


@dataclass
class IPRange:
    """One entry in an IP list: a single address, a CIDR or a from-to range."""

    from_ip: str = ""
    to_ip: str = ""


@dataclass
class IPList:
    """A named set of IP ranges."""

    href: str = ""
    name: str = ""
    ip_ranges: list[IPRange] = field(default_factory=list)


@dataclass
class PCEData:
    """Objects loaded from a PCE together with lookup maps."""

    fqdn: str = ""
    friendly_name: str = ""
    labels: dict[str, Label] = field(default_factory=dict)
    label_dimensions: list[str] = field(default_factory=list)
    workloads_list: list[Workload] = field(default_factory=list)
    workloads: dict[str, Workload] = field(default_factory=dict)
    vens_list: list[VEN] = field(default_factory=list)
    container_clusters: dict[str, str] = field(default_factory=dict)
    ip_lists: list[IPList] = field(default_factory=list)

    def add_label(self, label: Label) -> None:
        """Make a label findable by href and by key plus value."""
        self.labels[label.href] = label
        self.labels[label.key + label.value] = label

    def index_workloads(self) -> None:
        """Rebuild the workload map keyed by href, hostname, name and external data."""
        self.workloads = {}
        for wkld in self.workloads_list:
            for key in (
                wkld.href,
                wkld.hostname,
                wkld.name,
                wkld.external_data_set + wkld.external_data_reference,
            ):
                if key:
                    self.workloads[key] = wkld