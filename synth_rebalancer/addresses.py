"""
Resolution of the Synthetix core contract address for a deployment target.

A failed lookup never aborts a deployment: it resolves to `ZERO_ADDRESS`,
which the rebalancer can be repointed away from later.
"""
import re
from dataclasses import dataclass

import structlog
from eth_utils import is_hex_address

log = structlog.get_logger()

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
CORE_CONTRACT = "Synthetix"
FORK_SUFFIX = "-fork"

NETWORK_NAME = re.compile(r"^[a-z0-9][a-z0-9-]*$")


@dataclass(frozen=True)
class Resolved:
    address: str


@dataclass(frozen=True)
class Unresolved:
    reason: str


def normalize_network(network):
    """
    Map a forked network onto the network it was forked from.

    A fork replays the state of its base chain, so both share one set of
    registry entries: `mainnet-fork` -> `mainnet`.
    """
    if network.endswith(FORK_SUFFIX):
        return network[: -len(FORK_SUFFIX)]
    return network


def lookup(registry, network, contract=CORE_CONTRACT):
    """
    Query `registry` for `contract` on an already normalized `network`.

    Returns `Resolved` or `Unresolved`; errors raised by the registry are
    folded into `Unresolved`.
    """
    if not isinstance(network, str) or not NETWORK_NAME.match(network):
        return Unresolved(f"malformed network name: {network!r}")

    try:
        address = registry.get_target(network, contract)
    except Exception as exc:
        return Unresolved(f"{type(exc).__name__}: {exc}")

    if not isinstance(address, str) or not address.startswith("0x") or not is_hex_address(address):
        return Unresolved(f"registry returned an invalid address: {address!r}")

    return Resolved(address)


def resolve(network, registry, contract=CORE_CONTRACT):
    """Return the address of `contract` on `network`, or `ZERO_ADDRESS`."""
    normalized = normalize_network(network) if isinstance(network, str) else network
    result = lookup(registry, normalized, contract)

    if isinstance(result, Resolved):
        log.info("synthetix_resolved", network=network, contract=contract, address=result.address)
        return result.address

    log.warning("synthetix_unresolved", network=network, contract=contract, reason=result.reason)
    return ZERO_ADDRESS
