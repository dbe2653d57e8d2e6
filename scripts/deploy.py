from brownie import SynthRebalancer, accounts, chain, network, web3

from synth_rebalancer.config import load_settings
from synth_rebalancer.deploy import check_chain, check_endpoint, deploy_rebalancer, get_deployer
from synth_rebalancer.log import configure_logging
from synth_rebalancer.registry import DeploymentRegistry


def main():
    settings = load_settings()
    configure_logging(colors=settings.show_colors)

    name = network.show_active()
    target = settings.network(name)
    settings.require_secrets(target)
    check_chain(target, chain.id)
    check_endpoint(target, settings.secrets, getattr(web3.provider, "endpoint_uri", None))

    deployer = get_deployer(accounts, target, settings.secrets)
    with DeploymentRegistry(settings.registry_source, settings.registry_timeout) as registry:
        return deploy_rebalancer(SynthRebalancer, name, deployer, registry, settings.core_contract)
