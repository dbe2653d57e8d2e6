"""
Client for the Synthetix address registry.

Synthetix publishes one `deployment.json` per network, with the deployed
address of every contract under `targets`:

    {"targets": {"Synthetix": {"name": "Synthetix", "address": "0x..."}}}

The documents can be read over HTTP or from a local copy of the
`publish/deployed` directory.
"""
import json
from pathlib import Path

import httpx
import structlog

log = structlog.get_logger()

DEPLOYMENT_FILE = "deployment.json"
DEFAULT_TIMEOUT = 10.0


class RegistryError(Exception):
    pass


class DeploymentRegistry:
    def __init__(self, source, timeout=DEFAULT_TIMEOUT, client=None):
        self.source = str(source).rstrip("/")
        self.is_remote = self.source.startswith(("http://", "https://"))
        self._owns_client = client is None and self.is_remote
        if self._owns_client:
            client = httpx.Client(timeout=timeout)
        self._client = client

    def __repr__(self):
        return f"<DeploymentRegistry '{self.source}'>"

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self._owns_client:
            self._client.close()

    def get_deployment(self, network):
        if self.is_remote:
            raw = self._fetch(network)
        else:
            raw = self._read(network)

        try:
            return json.loads(raw)
        except ValueError as exc:
            raise RegistryError(f"{network}: {DEPLOYMENT_FILE} is not valid JSON") from exc

    def get_target(self, network, contract):
        deployment = self.get_deployment(network)
        try:
            return deployment["targets"][contract]["address"]
        except (KeyError, TypeError):
            raise RegistryError(f"{network}: no deployed target named '{contract}'") from None

    def _fetch(self, network):
        url = f"{self.source}/{network}/{DEPLOYMENT_FILE}"
        log.debug("registry_fetch", url=url)
        response = self._client.get(url)
        if response.status_code == httpx.codes.NOT_FOUND:
            raise RegistryError(f"{network}: no deployment published")
        response.raise_for_status()
        return response.text

    def _read(self, network):
        path = Path(self.source).joinpath(network, DEPLOYMENT_FILE)
        log.debug("registry_read", path=str(path))
        try:
            return path.read_text()
        except FileNotFoundError:
            raise RegistryError(f"{network}: no deployment published") from None
        except OSError as exc:
            raise RegistryError(f"{network}: cannot read {path}") from exc
