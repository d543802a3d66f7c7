import pytest

from winnode.errors import IgnitionParseError
from winnode.ignition.parser import EntryKind, parse_compatible_version

from conftest import ignition_payload


@pytest.mark.parametrize("version", ["3.0.0", "3.1.0", "3.2.0", "3.4.0", "3.5.0"])
def test_supported_versions(version):
    config, report = parse_compatible_version(ignition_payload(units=[], version=version))
    assert config is not None
    assert config.ignition.version == version
    assert not report.is_fatal()


@pytest.mark.parametrize("version", ["2.2.0", "3.6.0", "3.6.0-experimental", "4.0.0", "three"])
def test_unsupported_versions_are_fatal(version):
    config, report = parse_compatible_version(ignition_payload(version=version))
    assert config is None
    assert report.is_fatal()
    assert "ignition.version" in str(report)


def test_missing_version_is_fatal():
    config, report = parse_compatible_version(b'{"storage": {}}')
    assert config is None
    assert report.is_fatal()


@pytest.mark.parametrize("raw", [b"", b"not json", b"[1, 2]", b"\xff\xfe"])
def test_undecodable_payload(raw):
    with pytest.raises(IgnitionParseError):
        parse_compatible_version(raw)


def test_structural_error_is_fatal():
    raw = ignition_payload(units=[{"enabled": True, "contents": "x"}])
    config, report = parse_compatible_version(raw)
    assert config is None
    assert report.is_fatal()
    assert any(e.path.startswith("systemd.units.0") for e in report.entries)


def test_duplicate_unit_is_fatal():
    raw = ignition_payload(units=[{"name": "a.service"}, {"name": "a.service"}])
    config, report = parse_compatible_version(raw)
    assert config is None
    assert "duplicate unit name a.service" in str(report)


def test_unknown_keys_are_warnings():
    raw = b'{"ignition": {"version": "3.2.0"}, "bogus": 1}'
    config, report = parse_compatible_version(raw)
    assert config is not None
    assert not report.is_fatal()
    assert [e.kind for e in report.entries] == [EntryKind.WARNING]


def test_files_and_units_decoded(worker_payload):
    config, _ = parse_compatible_version(worker_payload)
    assert [u.name for u in config.systemd.units] == ["crio.service", "kubelet.service"]
    assert config.storage.files[0].path == "/etc/kubernetes/cloud.conf"
    assert config.storage.files[0].mode == 420
