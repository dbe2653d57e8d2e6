import structlog

from synth_rebalancer.addresses import CORE_CONTRACT, resolve
from synth_rebalancer.config import ConfigError

log = structlog.get_logger()


def get_deployer(accounts, target, secrets):
    if target.is_local:
        return accounts[0]
    return accounts.from_mnemonic(secrets.mnemonic, count=1)


def check_chain(target, chain_id):
    if target.network_id is not None and chain_id != target.network_id:
        raise ConfigError(
            f"network '{target.name}' expects chain id {target.network_id}, connected to {chain_id}"
        )


def check_endpoint(target, secrets, endpoint_uri):
    # the URL may embed a project id, so it stays out of the message
    if endpoint_uri != target.endpoint(secrets):
        raise ConfigError(
            f"brownie's '{target.name}' host differs from the network table, "
            "run `brownie networks import ./network-config.yaml True`"
        )


def deploy_rebalancer(container, network, deployer, registry, contract=CORE_CONTRACT):
    synthetix = resolve(network, registry, contract)
    rebalancer = container.deploy(synthetix, {"from": deployer})
    log.info("rebalancer_deployed", network=network, address=rebalancer.address, synthetix=synthetix)
    return rebalancer
