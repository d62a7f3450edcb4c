# workloader

Helpers for working with a segmentation inventory (workloads, labels, VENs
and IP lists) as CSV tables:

- build workload and VEN export tables and write workload exports to CSV;
- read a workload import CSV and work out which workloads change, which
  unmanaged workloads to create and which labels are missing;
- report which IP lists each workload's addresses fall into;
- find unmanaged workloads that duplicate managed workloads;
- list the segmentation templates kept in a directory.

Only the standard library is used.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Data model

`workloader.models` holds plain dataclasses: `Label`, `Interface`,
`AgentHealth`, `AgentStatus`, `Agent`, `VulnerabilitySummary`, `Workload`,
`VEN`, `IPRange`, `IPList` and `PCEData`.

`PCEData` is the container every report works from. Its `labels` map finds
a label both by href and by key plus value (`add_label` registers both), and
`index_workloads()` rebuilds the `workloads` map keyed by href, hostname,
name and external data set plus reference.

`Workload` answers questions such as `mode()` (`"unmanaged"` or the
enforcement mode), `visibility_level()` / `set_visibility_level()` in user
terms (`blocked_allowed`, `blocked`, `off`, `enhanced_data_collection`),
`label_by_key()`, the default-gateway helpers (`ip_with_default_gw`,
`ips_with_default_gw`, `netmask_with_default_gw`, `default_gw`,
`network_with_default_gw`, each giving `"NA"` where nothing applies) and
`hours_since_last_heartbeat()`.

## Modules

- `workloader.headers`: column name constants, `all_headers(include_vuln,
  include_href)` for the export column order and `import_headers()` for the
  non-label columns an import can change.
- `workloader.wkldexport`: `WorkloadExport` builds the workload table
  (`csv_data`), rows keyed by their first column (`map_data`) and writes a
  CSV file (`write_csv`; without a path a timestamped
  `workloader-wkld-export-*.csv` is used, and nothing is written when there
  are no workloads). Label columns are the sorted keys of labels in use.
  `interface_to_string` renders interfaces as `name:address[/cidr]`.
- `workloader.venexport`: `ven_export_rows(pce)` builds the VEN table with
  the primary workload hostname and label dimension values;
  `ven_health(ven)` gives `"healthy"` or the VEN's conditions.
- `workloader.config`: `ImportInput` holds the import options.
  `process_headers` maps a CSV header row to columns, resolving alternative
  names through `field_mapping()`, and picks the match column (href, then
  hostname, then name) unless one was given; bad settings raise
  `ImportConfigError`. `describe()` returns and logs the settings.
- `workloader.interfaces`: `user_input_convert` parses `192.168.200.20`,
  `192.168.200.20/24`, `eth0:192.168.200.20` or `eth0:192.168.200.20/24`
  (IPv6 too); interfaces without a name are called `umwl`.
  `public_ip_is_valid`, `ip_check` and `interface_key` support it.
  Malformed input raises `InvalidInterfaceError`.
- `workloader.wkldfields`: `ImportWorkload` applies one CSV row to a
  workload field by field (`hostname`, `name`, `public_ip`, `enforcement`,
  `visibility`, `interfaces`, `labels`) and records in `change` whether
  anything changed. `check_label` returns an existing label or a placeholder
  with a `wkld-import-temp-...` href.
- `workloader.importer`: `build_import_plan(config, data, label_keys)`
  returns an `ImportPlan` with `new_labels`, `updated_workloads` and
  `new_workloads`. `label_keys_for(pce, major, minor)` gives the label keys
  a PCE version accepts (its label dimensions from 22.5 on, otherwise role,
  app, env and loc). `ImportPlan.resolve_labels(created)` swaps placeholder
  hrefs for real ones and `ImportPlan.check_limits(max_update, max_create)`
  raises `WorkloadImportError` with `exit_code` 2 when a limit (other than
  -1) is exceeded.
- `workloader.iplmapping`: `map_workloads(workloads, iplists, labels, skip)`
  lists each workload whose addresses fall into an IP list; the
  `Any (0.0.0.0/0 and ::/0)` list is always skipped. `ip_in_iplist` tests a
  single address.
- `workloader.umwlcleanup`: `find_umwl_matches(pce, one_interface_match)`
  pairs unmanaged workloads with managed workloads whose default-gateway
  address they share. Its trailing `href` and label columns can be fed to a
  workload import.
- `workloader.templates`: `template_directory`, `list_templates` and the
  `workloader-template-list` command.

Progress and warnings are reported through the standard `logging` module.

## Listing templates

Segmentation templates are sets of CSV files named
`<template>.<type>.csv`, for example `web.labels.csv` and
`web.rules.csv`. By default they are looked up in `illumio-templates/`
under the current directory.

```
workloader-template-list
workloader-template-list --directory path/to/templates
```

Each template is printed with the file types it includes:

```
web (labels, rules)
```

## Example

```python
from workloader.config import ImportInput
from workloader.importer import build_import_plan, label_keys_for
from workloader.models import Label, PCEData, Workload

pce = PCEData(
    workloads_list=[Workload(href="/orgs/1/workloads/1", hostname="web01")],
    label_dimensions=["role", "app", "env", "loc"],
)
pce.add_label(Label(href="/orgs/1/labels/1", key="app", value="shop"))

config = ImportInput(pce=pce)
data = [["hostname", "app", "env"], ["web01", "shop", "prod"]]
plan = build_import_plan(config, data, label_keys_for(pce, 23, 2))

print([label.value for label in plan.new_labels])   # ['prod']
print([w.hostname for w in plan.updated_workloads])  # ['web01']
```

## What this package does not do

There is no client for a PCE: nothing here fetches workloads, labels, VENs
or IP lists, and nothing sends changes. The caller fills `PCEData` and acts
on the results. In particular, `build_import_plan` only plans an import;
creating the labels, updating and creating the workloads, and the
confirmation prompt are left to the caller. Apart from
`workloader-template-list` there are no commands, and templates can be
listed but not imported.