import base64
import gzip
import json
import logging

import pytest
from pydantic import ValidationError

from winnode.errors import IgnitionParseError, MissingFieldError, NotFoundError
from winnode.ignition.ignition import CLOUD_CONFIG_PATH, Ignition, find_kubelet_ca
from winnode.ignition.models import ControllerConfig, MachineConfig

from conftest import CA_PEM, ignition_payload, ts


def _cc(name, data=CA_PEM):
    return ControllerConfig(name=name, kube_apiserver_serving_ca_data=data)


def _mc(name, hour, raw):
    return MachineConfig(name=name, creation_timestamp=ts(hour), raw=raw)


def test_from_resources_end_to_end(worker_payload):
    mcs = [
        _mc("rendered-worker-a", 1, b"{broken"),
        _mc("rendered-worker-b", 2, worker_payload),
        _mc("other", 3, b"{broken"),
    ]
    ign = Ignition.from_resources(mcs, [_cc("machine-config-controller")])
    assert ign.version == "3.2.0"
    assert ign.kubelet_ca_data == CA_PEM
    assert ign.get_kubelet_args() == {
        "cloud-provider": "aws",
        "cloud-config": "/etc/kubernetes/cloud.conf",
    }
    assert [f.path for f in ign.files] == [CLOUD_CONFIG_PATH]


def test_malformed_bundle_is_parse_error():
    with pytest.raises(IgnitionParseError):
        Ignition.from_bundle(_mc("rendered-worker-a", 1, b"{broken"), [_cc("c")])


def test_fatal_report_is_parse_error():
    bundle = _mc("rendered-worker-a", 1, ignition_payload(version="2.2.0"))
    with pytest.raises(IgnitionParseError) as exc_info:
        Ignition.from_bundle(bundle, [_cc("c")])
    assert exc_info.value.report.is_fatal()
    assert "Report:" in str(exc_info.value)


def test_missing_ca_is_not_found(worker_payload):
    with pytest.raises(NotFoundError, match="kubelet-ca"):
        Ignition.from_bundle(_mc("rendered-worker-a", 1, worker_payload), [_cc("empty", b"")])


def test_missing_bundle_is_not_found():
    with pytest.raises(NotFoundError):
        Ignition.from_resources([], [_cc("c")])


def test_first_ca_wins_and_duplicates_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="winnode"):
        data = find_kubelet_ca([_cc("empty", b""), _cc("first", b"one"), _cc("second", b"two")])
    assert data == b"one"
    assert "first, second" in caplog.text


def test_single_ca_is_not_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="winnode"):
        assert find_kubelet_ca([_cc("only")]) == CA_PEM
    assert caplog.text == ""


def test_missing_unit():
    ign = Ignition.from_bundle(_mc("rendered-worker-a", 1, ignition_payload(units=[])), [_cc("c")])
    with pytest.raises(MissingFieldError, match="kubelet.service"):
        ign.get_kubelet_args()


def test_unit_without_contents():
    raw = ignition_payload(units=[{"name": "kubelet.service", "enabled": True}])
    ign = Ignition.from_bundle(_mc("rendered-worker-a", 1, raw), [_cc("c")])
    with pytest.raises(MissingFieldError):
        ign.get_kubelet_args()


def test_unit_without_exec_start():
    raw = ignition_payload(units=[{"name": "kubelet.service", "contents": "[Service]\nType=notify\n"}])
    ign = Ignition.from_bundle(_mc("rendered-worker-a", 1, raw), [_cc("c")])
    with pytest.raises(MissingFieldError, match="ExecStart"):
        ign.get_kubelet_args()


def test_service_args_for_other_unit(worker_payload):
    ign = Ignition.from_bundle(_mc("rendered-worker-a", 1, worker_payload), [_cc("c")])
    assert ign.service_args("crio.service") == {}


def test_file_contents_url_encoded(worker_payload):
    ign = Ignition.from_bundle(_mc("rendered-worker-a", 1, worker_payload), [_cc("c")])
    assert ign.get_file_contents(CLOUD_CONFIG_PATH) == b"[Global]\nzone = us-east-1a\n"


def test_file_contents_base64_gzip():
    body = b"kind: CredentialProviderConfig\n"
    source = "data:;base64," + base64.b64encode(gzip.compress(body)).decode()
    raw = ignition_payload(files=[{"path": "/etc/x.yaml", "contents": {"source": source, "compression": "gzip"}}])
    ign = Ignition.from_bundle(_mc("rendered-worker-a", 1, raw), [_cc("c")])
    assert ign.get_file_contents("/etc/x.yaml") == body


def test_file_contents_errors():
    raw = ignition_payload(files=[
        {"path": "/remote", "contents": {"source": "https://example.com/x"}},
        {"path": "/zstd", "contents": {"source": "data:,abc", "compression": "zstd"}},
    ])
    ign = Ignition.from_bundle(_mc("rendered-worker-a", 1, raw), [_cc("c")])
    with pytest.raises(NotFoundError):
        ign.get_file_contents("/missing")
    with pytest.raises(IgnitionParseError):
        ign.get_file_contents("/remote")
    with pytest.raises(IgnitionParseError):
        ign.get_file_contents("/zstd")


def test_resources_from_kubernetes_objects(worker_payload):
    mc = MachineConfig.from_resource({
        "metadata": {"name": "rendered-worker-abc", "creationTimestamp": "2024-05-01T10:00:00Z"},
        "spec": {"config": json.loads(worker_payload)},
    })
    cc = ControllerConfig.from_resource({
        "metadata": {"name": "machine-config-controller"},
        "spec": {"kubeAPIServerServingCAData": base64.b64encode(CA_PEM).decode()},
    })
    ign = Ignition.from_resources([mc], [cc])
    assert ign.kubelet_ca_data == CA_PEM
    assert ign.get_kubelet_args()["cloud-provider"] == "aws"


def test_resource_without_config_has_empty_payload():
    mc = MachineConfig.from_resource({
        "metadata": {"name": "rendered-worker-abc", "creationTimestamp": "2024-05-01T10:00:00Z"},
        "spec": {},
    })
    assert mc.raw == b""


def test_invalid_ca_encoding():
    with pytest.raises(IgnitionParseError):
        ControllerConfig.from_resource({"metadata": {"name": "c"}, "spec": {"kubeAPIServerServingCAData": "%%%"}})


@pytest.mark.parametrize("obj", [
    ["not", "a", "mapping"],
    {"metadata": "rendered-worker-abc", "spec": {}},
    {"metadata": {"name": "rendered-worker-abc"}, "spec": ["config"]},
])
def test_non_mapping_resources_are_parse_errors(obj):
    with pytest.raises(IgnitionParseError):
        MachineConfig.from_resource(obj)
    with pytest.raises(IgnitionParseError):
        ControllerConfig.from_resource(obj)


def test_files_are_read_only(worker_payload):
    ign = Ignition.from_resources([_mc("rendered-worker-b", 2, worker_payload)], [_cc("c")])
    with pytest.raises(ValidationError):
        ign.files[0].path = "/etc/other"
    ign.files.clear()
    assert [f.path for f in ign.files] == [CLOUD_CONFIG_PATH]
