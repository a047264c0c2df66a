from config.BluePrint import FORKS, HANDLER_INFOS, INTEGRATION_ADDYS, NETWORKS, TOKENS


class BluePrint:
    # address book of the chain a network runs on (the beta network is polygon)
    def __init__(self, network, chain="polygon"):
        self.network = network
        self.chain = chain
        self.NETWORK = NETWORKS.get(network) or FORKS[network]
        self.TOKENS = TOKENS.get(chain, {})
        self.INTEGRATION_ADDYS = INTEGRATION_ADDYS.get(chain, {})
        self.HANDLER_INFOS = HANDLER_INFOS


class DeployArgs:
    def __init__(self, sender, network, environment, ignore_manifest, rpc, handlers):
        self.sender = sender
        self.network = network
        self.environment = environment
        self.ignore_manifest = ignore_manifest
        self.blueprint = BluePrint(network)
        self.rpc = rpc
        self.handlers = handlers

    def __repr__(self):
        return (
            f"DeployArgs(network={self.network}, environment={self.environment}, "
            f"handlers={self.handlers}, ignore_manifest={self.ignore_manifest})"
        )
