import json

import httpx
import pytest

from synth_rebalancer.registry import DeploymentRegistry

SYNTHETIX_ROPSTEN = "0xABCD000000000000000000000000000000001234"
SYNTHETIX_MAINNET = "0xC011a73ee8576Fb46F5E1c5751cA3B9Fe0af2a6F"


class FakeRegistry:
    def __init__(self, targets=None, error=None):
        self.targets = targets or {}
        self.error = error
        self.calls = []

    def get_target(self, network, contract):
        self.calls.append((network, contract))
        if self.error is not None:
            raise self.error
        return self.targets[(network, contract)]


def _deployment(address):
    return {"targets": {"Synthetix": {"name": "Synthetix", "address": address}}}


# registries


@pytest.fixture
def synthetix_ropsten():
    yield SYNTHETIX_ROPSTEN


@pytest.fixture
def make_registry():
    yield FakeRegistry


@pytest.fixture
def registry():
    yield FakeRegistry({("ropsten", "Synthetix"): SYNTHETIX_ROPSTEN})


@pytest.fixture
def failing_registry():
    yield FakeRegistry(error=httpx.ConnectError("connection reset"))


@pytest.fixture
def deployments():
    yield {
        "ropsten": _deployment(SYNTHETIX_ROPSTEN),
        "mainnet": _deployment(SYNTHETIX_MAINNET),
    }


@pytest.fixture
def deployment_dir(tmp_path, deployments):
    for network, deployment in deployments.items():
        path = tmp_path.joinpath(network)
        path.mkdir()
        path.joinpath("deployment.json").write_text(json.dumps(deployment))
    yield tmp_path


@pytest.fixture
def http_requests():
    yield []


@pytest.fixture
def http_client(deployments, http_requests):
    def handler(request):
        http_requests.append(request)
        network, filename = request.url.path.split("/")[-2:]
        if network not in deployments or filename != "deployment.json":
            return httpx.Response(404, text="404: Not Found")
        return httpx.Response(200, json=deployments[network])

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest.fixture
def http_registry(http_client):
    yield DeploymentRegistry("https://registry.test/publish/deployed", client=http_client)


# config


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path.joinpath("brownie-config.yaml")
    path.write_text(
        """
project_structure:
    build: client/src/contracts
compiler:
    solc:
        version: 0.5.15
console:
    show_colors: false
rebalancer:
    core_contract: Synthetix
    registry:
        source: https://registry.test/publish/deployed
        timeout: 5
    networks:
        develop:
            host: 127.0.0.1
            port: 8545
            network_id: "*"
        ropsten:
            provider: infura
            network_id: 3
        mainnet-fork:
            host: 127.0.0.1
            port: 8545
"""
    )
    yield path


@pytest.fixture
def secrets_env():
    yield {"ETH_DEV_MNEMONIC": "test test test junk", "INFURA_PROJECT_ID": "abc123"}
