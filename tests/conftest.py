import json
import logging
from datetime import datetime, timezone

import pytest

KUBELET_UNIT = """[Unit]
Description=Kubernetes Kubelet
Wants=rpc-statd.service network-online.target
After=network-online.target

[Service]
Type=notify
ExecStartPre=/bin/mkdir --parents /etc/kubernetes/manifests
Environment="KUBELET_LOG_LEVEL=4"
ExecStart=/usr/bin/hyperkube \\
    kubelet \\
      --config=/etc/kubernetes/kubelet.conf \\
      --bootstrap-kubeconfig=/etc/kubernetes/kubeconfig \\
      --cloud-provider=aws \\
      --cloud-config=/etc/kubernetes/cloud.conf \\
      --v=${KUBELET_LOG_LEVEL}

Restart=always
RestartSec=10

[Install]
WantedBy=multi-user.target
"""

CA_PEM = b"-----BEGIN CERTIFICATE-----\nMIIBfake\n-----END CERTIFICATE-----\n"


@pytest.fixture(autouse=True)
def _reset_winnode_logger():
    # init_logging() detaches the logger from the root; undo that between tests
    yield
    logger = logging.getLogger("winnode")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def ignition_payload(units=None, files=None, version="3.2.0"):
    cfg = {"ignition": {"version": version}}
    if files is not None:
        cfg["storage"] = {"files": files}
    if units is not None:
        cfg["systemd"] = {"units": units}
    return json.dumps(cfg).encode()


def ts(hour):
    return datetime(2024, 5, 1, hour, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def kubelet_unit():
    return KUBELET_UNIT


@pytest.fixture
def worker_payload():
    return ignition_payload(
        units=[
            {"name": "crio.service", "enabled": True, "contents": "[Service]\nExecStart=/usr/bin/crio\n"},
            {"name": "kubelet.service", "enabled": True, "contents": KUBELET_UNIT},
        ],
        files=[
            {
                "path": "/etc/kubernetes/cloud.conf",
                "mode": 420,
                "contents": {"source": "data:,%5BGlobal%5D%0Azone%20%3D%20us-east-1a%0A"},
            },
        ],
    )
