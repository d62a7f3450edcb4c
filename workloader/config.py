"""Settings for a workload import and the mapping of CSV headers to fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields

from workloader.headers import (
    HEADER_HOSTNAME,
    HEADER_HREF,
    HEADER_NAME,
    all_headers,
)
from workloader.models import PCEData

logger = logging.getLogger(__name__)

MATCH_OPTIONS = ("href", "hostname", "name", "external_data")

_UNLOGGED_FIELDS = frozenset({"pce", "keep_all_pce_interfaces", "fqdn_to_hostname"})

_ALIASES = {
    # hostname
    "host": "hostname",
    "host_name": "hostname",
    "host name": "hostname",
    # role
    "role label": "role",
    "role_label": "role",
    "rolelabel": "role",
    "suggested_role": "role",
    "edge_group": "role",
    # app
    "app label": "app",
    "app_label": "app",
    "applabel": "app",
    "application": "app",
    "application label": "app",
    "application_label": "app",
    "applicationlabel": "app",
    "suggested_app": "app",
    # env
    "env label": "env",
    "env_label": "env",
    "envlabel": "env",
    "environment": "env",
    "environment label": "env",
    "environmentlabel": "env",
    "suggested_env": "env",
    # loc
    "Loc label": "loc",
    "loc_label": "loc",
    "loclabel": "loc",
    "location": "loc",
    "location label": "loc",
    "locationlabel": "loc",
    "suggested_loc": "env",
    # interfaces
    "interface": "interfaces",
    "ifaces": "interfaces",
    "iface": "interfaces",
    "ip": "interfaces",
    "ip_address": "interfaces",
    "ips": "interfaces",
    # description
    "desc": "description",
}


class ImportConfigError(ValueError):
    """Raised when import settings or CSV headers cannot be used."""


def field_mapping() -> dict[str, str]:
    """Return a map from accepted CSV header names to the field they set."""
    mapping = {header: header for header in all_headers(True, True)}
    mapping.update(_ALIASES)
    return mapping


@dataclass
class ImportInput:
    """Everything a workload import needs to know before it runs."""

    pce: PCEData = field(default_factory=PCEData)
    import_file: str = ""
    import_data: list[list[str]] = field(default_factory=list)
    remove_value: str = ""
    role_prefix: str = ""
    app_prefix: str = ""
    env_prefix: str = ""
    loc_prefix: str = ""
    headers: dict[str, int] = field(default_factory=dict)
    match_string: str = ""
    umwl: bool = False
    keep_all_pce_interfaces: bool = False
    fqdn_to_hostname: bool = False
    allow_enforcement_changes: bool = False
    update_workloads: bool = True
    update_pce: bool = False
    no_prompt: bool = False
    managed_only: bool = False
    unmanaged_only: bool = False
    ignore_case: bool = False
    max_update: int = -1
    max_create: int = -1

    def process_headers(self, headers: list[str]) -> None:
        """Map the CSV header row to field columns and settle the match column."""
        mapping = field_mapping()
        columns: dict[str, int] = {}
        for col, header in enumerate(headers):
            columns[header] = col
        self.headers = {mapping.get(header, header): col for header, col in columns.items()}

        if self.match_string:
            if self.match_string not in MATCH_OPTIONS:
                raise ImportConfigError(
                    "invalid match value. must be href, hostname, name, or external_data"
                )
            return

        if HEADER_HREF in self.headers and not self.umwl:
            self.match_string = HEADER_HREF
            logger.info(
                "match column set to %d because href header is present and "
                "unmanaged workload flag is not set.",
                self.headers[HEADER_HREF],
            )
            return

        if HEADER_HOSTNAME in self.headers:
            self.match_string = HEADER_HOSTNAME
            logger.info("match column set to hostname column (%d)", self.headers[HEADER_HOSTNAME])
            return

        if HEADER_NAME in self.headers:
            self.match_string = HEADER_NAME
            logger.info("match column set to name column (%d)", self.headers[HEADER_NAME])
            return

        raise ImportConfigError("cannot set a match column based on provided input")

    def describe(self) -> str:
        """Return and log a one-line summary of the settings."""
        entry = "; ".join(
            f"{f.name}: {getattr(self, f.name)}"
            for f in fields(self)
            if f.name not in _UNLOGGED_FIELDS
        )
        logger.info(entry)
        return entry