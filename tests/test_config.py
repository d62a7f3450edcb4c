import pytest

from workloader.config import ImportConfigError, ImportInput, field_mapping
from workloader.headers import all_headers


def test_field_mapping_maps_every_header_to_itself():
    mapping = field_mapping()
    for header in all_headers(True, True):
        assert mapping[header] == header


def test_field_mapping_aliases_from_source():
    mapping = field_mapping()
    assert mapping["host"] == "hostname"
    assert mapping["application"] == "app"
    assert mapping["suggested_loc"] == "env"
    assert mapping["Loc label"] == "loc"
    assert mapping["desc"] == "description"
    assert mapping["ip_address"] == "interfaces"


def test_process_headers_applies_aliases():
    cfg = ImportInput()
    cfg.process_headers(["host", "environment", "ips"])
    assert cfg.headers == {"hostname": 0, "env": 1, "interfaces": 2}
    assert cfg.match_string == "hostname"


def test_unknown_header_kept_as_is():
    cfg = ImportInput()
    cfg.process_headers(["hostname", "custom_key"])
    assert cfg.headers["custom_key"] == 1


def test_href_preferred_when_not_umwl():
    cfg = ImportInput()
    cfg.process_headers(["hostname", "href"])
    assert cfg.match_string == "href"


def test_href_ignored_with_umwl():
    cfg = ImportInput(umwl=True)
    cfg.process_headers(["hostname", "href"])
    assert cfg.match_string == "hostname"


def test_name_fallback():
    cfg = ImportInput()
    cfg.process_headers(["name", "role"])
    assert cfg.match_string == "name"


def test_no_match_column_raises():
    cfg = ImportInput()
    with pytest.raises(ImportConfigError):
        cfg.process_headers(["role", "app"])


def test_invalid_explicit_match_raises():
    cfg = ImportInput(match_string="ip")
    with pytest.raises(ImportConfigError):
        cfg.process_headers(["hostname"])


@pytest.mark.parametrize("match", ["href", "hostname", "name", "external_data"])
def test_valid_explicit_match_kept(match):
    cfg = ImportInput(match_string=match)
    cfg.process_headers(["href", "hostname"])
    assert cfg.match_string == match


def test_defaults_follow_command_flags():
    cfg = ImportInput()
    assert cfg.update_workloads is True
    assert cfg.max_create == -1
    assert cfg.max_update == -1