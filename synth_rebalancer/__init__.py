from synth_rebalancer.addresses import (
    ZERO_ADDRESS,
    Resolved,
    Unresolved,
    lookup,
    normalize_network,
    resolve,
)
from synth_rebalancer.config import ConfigError, MissingSecretError, load_settings
from synth_rebalancer.registry import DeploymentRegistry, RegistryError

__all__ = [
    "ZERO_ADDRESS",
    "ConfigError",
    "DeploymentRegistry",
    "MissingSecretError",
    "RegistryError",
    "Resolved",
    "Unresolved",
    "load_settings",
    "lookup",
    "normalize_network",
    "resolve",
]
