"""Apply one CSV row of a workload import to a workload, field by field."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Container
from dataclasses import dataclass, field

from workloader.config import ImportInput
from workloader.headers import (
    HEADER_ENFORCEMENT,
    HEADER_HOSTNAME,
    HEADER_INTERFACES,
    HEADER_NAME,
    HEADER_PUBLIC_IP,
    HEADER_VISIBILITY,
)
from workloader.interfaces import (
    InvalidInterfaceError,
    interface_key,
    public_ip_is_valid,
    user_input_convert,
)
from workloader.models import Label, PCEData, Workload

logger = logging.getLogger(__name__)

TEMP_LABEL_PREFIX = "wkld-import-temp"

_ENFORCEMENT_MODES = frozenset({"visibility_only", "full", "selective", "idle", ""})
_VISIBILITY_LEVELS = frozenset({"blocked_allowed", "blocked", "off", ""})


def _blank(value: str) -> str:
    return value if value else "<empty>"


def check_label(pce: PCEData, label: Label, new_labels: list[Label]) -> Label:
    """Return the PCE's label with this key and value, or a placeholder for it.

    A placeholder gets a temporary href, is appended to new_labels and is
    registered in the PCE's label map so later rows find it.
    """
    existing = pce.labels.get(label.key + label.value)
    if existing is not None:
        return existing
    placeholder = Label(
        href=f"{TEMP_LABEL_PREFIX}-{label.key}-{label.value}",
        key=label.key,
        value=label.value,
    )
    new_labels.append(placeholder)
    logger.info("%s label %s needs to be created", placeholder.key, placeholder.value)
    pce.add_label(placeholder)
    return placeholder


@dataclass
class ImportWorkload:
    """A workload together with the CSV row being applied to it."""

    wkld: Workload
    compare_string: str = ""
    csv_line: list[str] = field(default_factory=list)
    csv_line_num: int = 0
    change: bool = False

    def _tracks_changes(self, config: ImportInput) -> bool:
        return bool(self.wkld.href) and config.update_workloads

    def hostname(self, config: ImportInput) -> None:
        """Set the hostname unless the workload exists and is matched by hostname."""
        index = config.headers.get(HEADER_HOSTNAME)
        if index is None:
            return
        if self.wkld.href and config.match_string == HEADER_HOSTNAME:
            return
        value = self.csv_line[index]
        if self.wkld.hostname == value:
            return
        if self._tracks_changes(config):
            self.change = True
            logger.info(
                "csv line %d - %s - hostname to be changed from %s to %s",
                self.csv_line_num, self.compare_string, _blank(self.wkld.hostname), value,
            )
        self.wkld.hostname = value

    def name(self, config: ImportInput) -> None:
        """Set the name unless the workload has one and is matched by name."""
        index = config.headers.get(HEADER_NAME)
        if index is None:
            return
        if self.wkld.name and config.match_string == HEADER_NAME:
            return
        value = self.csv_line[index]
        if self.wkld.name == value:
            return
        if self._tracks_changes(config):
            self.change = True
            logger.info(
                "csv line %d - %s - name to be changed from %s to %s",
                self.csv_line_num, self.compare_string, _blank(self.wkld.name), value,
            )
        self.wkld.name = value

    def public_ip(self, config: ImportInput) -> None:
        """Set the public IP; raise InvalidInterfaceError if it is malformed."""
        index = config.headers.get(HEADER_PUBLIC_IP)
        if index is None:
            return
        value = self.csv_line[index]
        if value == self.wkld.public_ip:
            return
        if not public_ip_is_valid(value):
            raise InvalidInterfaceError(
                f"csv line {self.csv_line_num} - invalid Public IP address format."
            )
        if self._tracks_changes(config):
            self.change = True
            logger.info(
                "csv line %d - %s- public ip to be changed from %s to %s",
                self.csv_line_num, self.compare_string, _blank(self.wkld.public_ip), value,
            )
        self.wkld.public_ip = value

    def enforcement(self, config: ImportInput) -> None:
        """Set the enforcement mode when enforcement changes are allowed."""
        if not config.allow_enforcement_changes:
            return
        index = config.headers.get(HEADER_ENFORCEMENT)
        if index is None:
            return
        raw = self.csv_line[index]
        mode = raw.lower()
        if mode == "unmanaged" or raw == "":
            return
        if mode not in _ENFORCEMENT_MODES:
            logger.warning(
                "csv line %d - %s - invalid mode state. values must be blank, "
                "visibility_only, full, selective, or idle. skipping line.",
                self.csv_line_num, self.compare_string,
            )
            return
        if self.wkld.enforcement_mode == mode:
            return
        if self._tracks_changes(config):
            self.change = True
            logger.info(
                "csv line %d - %s enforcement to be changed from %s to %s",
                self.csv_line_num, self.compare_string, self.wkld.enforcement_mode, raw,
            )
        self.wkld.enforcement_mode = mode

    def visibility(self, config: ImportInput) -> None:
        """Set the visibility level when enforcement changes are allowed."""
        if not config.allow_enforcement_changes:
            return
        index = config.headers.get(HEADER_VISIBILITY)
        if index is None:
            return
        raw = self.csv_line[index]
        level = raw.lower()
        if level == "unmanaged" or raw == "":
            return
        if level not in _VISIBILITY_LEVELS:
            logger.warning(
                "csv line %d - %s - invalid visibility state. values must be blank, "
                "blocked_allowed, blocked, or off. skipping line.",
                self.csv_line_num, self.compare_string,
            )
            return
        if self.wkld.visibility_level() == level:
            return
        if self._tracks_changes(config):
            self.change = True
            logger.info(
                "csv line %d - %s visibility to be changed from %s to %s",
                self.csv_line_num, self.compare_string, self.wkld.visibility, raw,
            )
        self.wkld.set_visibility_level(level)

    def interfaces(self, config: ImportInput) -> None:
        """Replace an unmanaged workload's interfaces when the CSV lists others."""
        if self.wkld.mode() != "unmanaged":
            return
        index = config.headers.get(HEADER_INTERFACES)
        if index is None or not self.csv_line[index]:
            return

        wanted = []
        for text in self.csv_line[index].replace(" ", "").split(";"):
            try:
                wanted.append(user_input_convert(text))
            except InvalidInterfaceError as exc:
                logger.warning(
                    "csv line %d - %s - skipping processing interfaces - ",
                    self.csv_line_num, exc,
                )
                return

        current = self.wkld.interfaces
        if config.keep_all_pce_interfaces:
            wanted_addresses = {iface.address for iface in wanted}
            wanted.extend(i for i in current if i.address not in wanted_addresses)

        current_keys = {interface_key(i, False) for i in current}
        wanted_keys = {interface_key(i, False) for i in wanted}

        update = False
        for iface in current:
            if interface_key(iface, True) not in wanted_keys:
                update = True
                if self._tracks_changes(config):
                    self.change = True
                    logger.info(
                        "csv line %d - %s - interface not in csv and will be removed "
                        "- ip: %s, cidr: %s, name: %s",
                        self.csv_line_num, self.compare_string, iface.address,
                        iface.cidr_block or "nil", iface.name,
                    )
        for iface in wanted:
            if interface_key(iface, True) not in current_keys:
                update = True
                if self._tracks_changes(config):
                    self.change = True
                    logger.info(
                        "csv line %d - %s - interface not in pce and will be added "
                        "- ip: %s, cidr: %s, name: %s",
                        self.csv_line_num, self.compare_string, iface.address,
                        iface.cidr_block or "nil", iface.name,
                    )

        if update:
            self.wkld.interfaces = wanted

    def labels(
        self,
        config: ImportInput,
        new_labels: list[Label],
        label_keys: Container[str],
    ) -> list[Label]:
        """Apply label columns to the workload; return new_labels with any placeholders added."""
        original = dataclasses.replace(self.wkld)
        pce_labels = config.pce.labels

        unprocessed = [
            ref
            for ref in self.wkld.labels
            if pce_labels.get(ref.href, Label()).key not in config.headers
        ]

        cleared = False
        for header, index in config.headers.items():
            if header not in label_keys:
                continue
            if not cleared:
                self.wkld.labels = []
                cleared = True

            current = original.label_by_key(header, pce_labels)
            value = self.csv_line[index]

            if (value == "" and current.href) or (value == current.value and value != ""):
                self.wkld.labels.append(Label(href=current.href))
                continue

            if value == config.remove_value and value != "" and current.href:
                if self._tracks_changes(config):
                    self.change = True
                    logger.info(
                        "csv line %d - %s - %s label of %s to be removed.",
                        self.csv_line_num, self.compare_string, current.key, current.value,
                    )
                continue

            if value != current.value and value != config.remove_value:
                found = check_label(config.pce, Label(key=header, value=value), new_labels)
                self.wkld.labels.append(Label(href=found.href))
                if self._tracks_changes(config):
                    self.change = True
                    logger.info(
                        "csv line %d - %s - %s label to be changed from %s to %s.",
                        self.csv_line_num, self.compare_string, header,
                        _blank(current.value), value,
                    )

        if cleared:
            self.wkld.labels.extend(unprocessed)
        return new_labels