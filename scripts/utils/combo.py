"""
Wiring of a registry, a proxy and handlers.

Shared by the deploy script and the test fixtures. `deploy` is any callable
`deploy(artifact_name, *args)` returning a contract, so the same wiring runs
through a recorded `Deployment` or straight from the artifacts.
"""
from scripts.utils.calldata import ascii_to_bytes32


def artifact_deployer(artifacts, sender):
    def deploy(name, *args):
        return artifacts.require(name).deploy(*args, sender=sender)
    return deploy


def deploy_proxy(artifacts, deploy, registry, fee_collector, name="Proxy"):
    # newer proxies also take a fee rule registry, deployed with a zero base rate
    if len(artifacts.require(name).constructor_types) == 2:
        fee_rule_registry = deploy("FeeRuleRegistry", 0, fee_collector)
        return deploy(name, registry, fee_rule_registry)
    return deploy(name, registry)


def register_handler(registry, handler, info, sender):
    registry.register(handler.address, ascii_to_bytes32(info), sender=sender)
    return handler
