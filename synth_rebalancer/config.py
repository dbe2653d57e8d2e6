"""
Project settings, loaded once from `brownie-config.yaml` and the environment.

The network table and registry settings live under the `rebalancer` key;
compiler pin, build directory and console colours are read from the
standard brownie sections so both tools agree on them.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from synth_rebalancer.addresses import CORE_CONTRACT
from synth_rebalancer.registry import DEFAULT_TIMEOUT

CONFIG_FILE = "brownie-config.yaml"

MNEMONIC_ENV = "ETH_DEV_MNEMONIC"
INFURA_PROJECT_ID_ENV = "INFURA_PROJECT_ID"

PROVIDERS = {
    "infura": "https://{network}.infura.io/v3/{project_id}",
}


class ConfigError(Exception):
    pass


class MissingSecretError(ConfigError):
    pass


@dataclass(frozen=True)
class Secrets:
    mnemonic: Optional[str] = field(default=None, repr=False)
    infura_project_id: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        return cls(
            mnemonic=environ.get(MNEMONIC_ENV) or None,
            infura_project_id=environ.get(INFURA_PROJECT_ID_ENV) or None,
        )

    def get(self, env_name):
        return {
            MNEMONIC_ENV: self.mnemonic,
            INFURA_PROJECT_ID_ENV: self.infura_project_id,
        }[env_name]


@dataclass(frozen=True)
class NetworkConfig:
    name: str
    host: Optional[str] = None
    port: Optional[int] = None
    provider: Optional[str] = None
    # None accepts any chain id
    network_id: Optional[int] = None

    def __post_init__(self):
        if (self.host is None) == (self.provider is None):
            raise ConfigError(f"network '{self.name}': set exactly one of 'host' or 'provider'")
        if self.provider is not None and self.provider not in PROVIDERS:
            raise ConfigError(f"network '{self.name}': unknown provider '{self.provider}'")

    @classmethod
    def from_dict(cls, name, values):
        values = dict(values or {})
        unknown = set(values) - {"host", "port", "provider", "network_id"}
        if unknown:
            raise ConfigError(f"network '{name}': unknown keys {sorted(unknown)}")

        network_id = values.get("network_id", "*")
        port = values.get("port")
        try:
            return cls(
                name=name,
                host=values.get("host"),
                port=None if port is None else int(port),
                provider=values.get("provider"),
                network_id=None if network_id == "*" else int(network_id),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"network '{name}': {exc}") from None

    @property
    def is_local(self):
        return self.provider is None

    @property
    def required_secrets(self):
        if self.provider == "infura":
            return (MNEMONIC_ENV, INFURA_PROJECT_ID_ENV)
        return ()

    def endpoint(self, secrets):
        if self.is_local:
            if self.port is None:
                return f"http://{self.host}"
            return f"http://{self.host}:{self.port}"
        return PROVIDERS[self.provider].format(network=self.name, project_id=secrets.infura_project_id)


@dataclass(frozen=True)
class Settings:
    compiler_version: str
    build_directory: str
    show_colors: bool
    core_contract: str
    registry_source: str
    registry_timeout: float
    networks: Mapping[str, NetworkConfig]
    secrets: Secrets = field(default_factory=Secrets, repr=False)

    def network(self, name):
        try:
            return self.networks[name]
        except KeyError:
            raise ConfigError(
                f"unknown network '{name}', expected one of: {', '.join(sorted(self.networks))}"
            ) from None

    def require_secrets(self, network):
        for env_name in network.required_secrets:
            if not self.secrets.get(env_name):
                raise MissingSecretError(f"network '{network.name}' requires ${env_name} to be set")


def _section(data, *keys):
    for key in keys:
        data = (data or {}).get(key)
    return data


def load_settings(path=CONFIG_FILE, environ=None, dotenv_path=None):
    """
    Read `path` and the process environment into a `Settings`.

    `.env` is loaded into the environment first unless an explicit
    `environ` mapping is given.
    """
    if environ is None:
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

    try:
        data = yaml.safe_load(Path(path).read_text()) or {}
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {path}") from None
    except yaml.YAMLError as exc:
        raise ConfigError(f"cannot parse {path}: {exc}") from None

    compiler_version = _section(data, "compiler", "solc", "version")
    if not compiler_version:
        raise ConfigError("compiler.solc.version must be pinned")

    rebalancer = data.get("rebalancer") or {}
    registry = rebalancer.get("registry") or {}
    if not registry.get("source"):
        raise ConfigError("rebalancer.registry.source is required")

    networks = {
        name: NetworkConfig.from_dict(name, values)
        for name, values in (rebalancer.get("networks") or {}).items()
    }
    if not networks:
        raise ConfigError("rebalancer.networks is empty")

    console = data.get("console") or {}
    return Settings(
        compiler_version=str(compiler_version),
        build_directory=str(_section(data, "project_structure", "build") or "build"),
        show_colors=bool(console.get("show_colors", True)),
        core_contract=rebalancer.get("core_contract", CORE_CONTRACT),
        registry_source=str(registry["source"]),
        registry_timeout=float(registry.get("timeout", DEFAULT_TIMEOUT)),
        networks=MappingProxyType(networks),
        secrets=Secrets.from_env(environ),
    )
