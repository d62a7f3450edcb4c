"""Work out which workloads a CSV import updates or creates."""

from __future__ import annotations

import copy
import logging
from collections.abc import Container, Mapping
from dataclasses import dataclass, field

from workloader.config import ImportInput
from workloader.headers import (
    HEADER_DATA_CENTER,
    HEADER_DESCRIPTION,
    HEADER_DISTINGUISHED_NAME,
    HEADER_EXTERNAL_DATA_REFERENCE,
    HEADER_EXTERNAL_DATA_SET,
    HEADER_HREF,
    HEADER_OS_DETAIL,
    HEADER_OS_ID,
    HEADER_SPN,
)
from workloader.interfaces import InvalidInterfaceError
from workloader.models import Label, PCEData, Workload
from workloader.wkldfields import TEMP_LABEL_PREFIX, ImportWorkload

logger = logging.getLogger(__name__)

DEFAULT_LABEL_KEYS = frozenset({"role", "app", "env", "loc"})

_SIMPLE_FIELDS = (
    (HEADER_DESCRIPTION, "description"),
    (HEADER_DISTINGUISHED_NAME, "distinguished_name"),
    (HEADER_SPN, "service_principal_name"),
    (HEADER_EXTERNAL_DATA_SET, "external_data_set"),
    (HEADER_EXTERNAL_DATA_REFERENCE, "external_data_reference"),
    (HEADER_OS_ID, "os_id"),
    (HEADER_OS_DETAIL, "os_detail"),
    (HEADER_DATA_CENTER, "data_center"),
)


class WorkloadImportError(ValueError):
    """Raised when a workload import cannot go ahead."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass
class ImportPlan:
    """Labels to create and workloads to update or create."""

    fqdn: str = ""
    row_count: int = 0
    new_labels: list[Label] = field(default_factory=list)
    updated_workloads: list[Workload] = field(default_factory=list)
    new_workloads: list[Workload] = field(default_factory=list)

    def resolve_labels(self, created: Mapping[str, str]) -> None:
        """Replace placeholder label hrefs with the hrefs of the created labels."""
        for wkld in (*self.updated_workloads, *self.new_workloads):
            resolved = []
            for ref in wkld.labels:
                href = ref.href
                if TEMP_LABEL_PREFIX in href:
                    try:
                        href = created[href]
                    except KeyError:
                        raise WorkloadImportError(f"label {href} was not created") from None
                resolved.append(Label(href=href))
            wkld.labels = resolved

    def check_limits(self, max_update: int, max_create: int) -> None:
        """Raise WorkloadImportError (exit code 2) if a limit is exceeded; -1 means no limit."""
        if max_update != -1 and len(self.updated_workloads) > max_update:
            raise WorkloadImportError(
                f"update count for {self.fqdn} of {len(self.updated_workloads)} "
                f"exceeds maximum of {max_update}. terminating run with exit code 2.",
                exit_code=2,
            )
        if max_create != -1 and len(self.new_workloads) > max_create:
            raise WorkloadImportError(
                f"create count for {self.fqdn} of {len(self.new_workloads)} "
                f"exceeds maximum of {max_create}. terminating run with exit code 2.",
                exit_code=2,
            )


def label_keys_for(pce: PCEData, major: int, minor: int) -> set[str]:
    """Return the label keys a PCE of this version accepts."""
    if major > 22 or (major == 22 and minor >= 5):
        keys = set(pce.label_dimensions)
    else:
        keys = set(DEFAULT_LABEL_KEYS)
    logger.info("label keys map: %s", sorted(keys))
    return keys


def _restrict_workloads(config: ImportInput) -> None:
    pce = config.pce
    restricted: dict[str, Workload] = {}
    for wkld in pce.workloads_list:
        mode = wkld.mode()
        if (mode == "unmanaged" and config.unmanaged_only) or (
            mode != "managed" and config.managed_only
        ):
            for key in (wkld.href, wkld.hostname, wkld.name):
                if key:
                    restricted[key] = wkld
    pce.workloads = restricted


def _apply_simple_fields(item: ImportWorkload, config: ImportInput) -> None:
    wkld = item.wkld
    for header, attr in _SIMPLE_FIELDS:
        index = config.headers.get(header)
        if index is None:
            continue
        value = item.csv_line[index]
        current = getattr(wkld, attr)
        if value == config.remove_value and current != "":
            if wkld.href:
                logger.info(
                    "csv line %d - %s - %s to be removed",
                    item.csv_line_num, item.compare_string, header,
                )
                item.change = True
            setattr(wkld, attr, "")
        elif value != current and value != "":
            if wkld.href:
                logger.info(
                    'csv line %d - %s - %s - %s to be changed from "%s" to "%s"',
                    item.csv_line_num, wkld.hostname, wkld.href, header,
                    current or "<empty>", value,
                )
                item.change = True
            setattr(wkld, attr, value)


def build_import_plan(
    config: ImportInput,
    data: list[list[str]],
    label_keys: Container[str],
) -> ImportPlan:
    """Apply every CSV row to the loaded workloads and collect the resulting changes."""
    if not data:
        raise WorkloadImportError("import data is empty")
    config.process_headers(data[0])
    config.describe()

    pce = config.pce
    if not pce.workloads and pce.workloads_list:
        pce.index_workloads()

    if config.umwl and (config.managed_only or config.unmanaged_only):
        raise WorkloadImportError(
            "--umwl cannot be used with --managed-only or --unmanaged-ony"
        )
    if config.unmanaged_only or config.managed_only:
        _restrict_workloads(config)

    plan = ImportPlan(fqdn=pce.fqdn, row_count=len(data) - 1)
    prefixes = {
        "role": config.role_prefix,
        "app": config.app_prefix,
        "env": config.env_prefix,
        "loc": config.loc_prefix,
    }

    for line_num, row in enumerate(data[1:], start=2):
        line = list(row)
        for header, prefix in prefixes.items():
            index = config.headers.get(header)
            if index is not None:
                line[index] = prefix + line[index]

        if config.match_string == HEADER_HREF and config.umwl:
            raise WorkloadImportError("cannot match on hrefs and create unmanaged workloads")

        compare = line[config.headers.get(config.match_string, 0)]
        if compare == "":
            logger.warning("csv line %d - the match column cannot be blank.", line_num)
            continue
        if config.match_string == "external_data":
            compare = (
                line[config.headers.get(HEADER_EXTERNAL_DATA_SET, 0)]
                + line[config.headers.get(HEADER_EXTERNAL_DATA_REFERENCE, 0)]
            )

        if config.ignore_case:
            pce.workloads = {key.lower(): wkld for key, wkld in pce.workloads.items()}
            compare = compare.lower()

        existing = pce.workloads.get(compare)
        if existing is None:
            if not config.umwl:
                logger.info(
                    "csv line %d - %s is not a workload. include umwl flag to create it. "
                    "nothing done.",
                    line_num, compare,
                )
                continue
            wkld = Workload()
        else:
            wkld = copy.deepcopy(existing)

        item = ImportWorkload(
            wkld=wkld, compare_string=compare, csv_line=line, csv_line_num=line_num
        )
        item.hostname(config)
        item.name(config)
        item.interfaces(config)
        try:
            item.public_ip(config)
        except InvalidInterfaceError as exc:
            raise WorkloadImportError(str(exc)) from exc
        item.enforcement(config)
        item.visibility(config)
        item.labels(config, plan.new_labels, label_keys)
        _apply_simple_fields(item, config)

        if not wkld.href and config.umwl:
            plan.new_workloads.append(wkld)
            logger.info("csv line %d - %s to be created", line_num, compare)
        if wkld.href and item.change and config.update_workloads:
            plan.updated_workloads.append(wkld)

    if not plan.updated_workloads and not plan.new_workloads:
        logger.info("nothing to be done")
        return plan

    unchanged = plan.row_count - len(plan.updated_workloads) - len(plan.new_workloads)
    logger.info("workloader identified %d labels to create.", len(plan.new_labels))
    logger.info(
        "workloader identified %d workloads requiring updates.", len(plan.updated_workloads)
    )
    logger.info(
        "workloader identified %d unmanaged workloads to create.", len(plan.new_workloads)
    )
    logger.info("%d entries in CSV require no changes", unchanged)
    return plan