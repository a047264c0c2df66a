import boa.deployments
import click
import boa

from config.BluePrint import DEFAULT_NETWORK, FORKS, HANDLER_INFOS, NETWORKS
from scripts.utils import log
from scripts.utils.accounts import derive_accounts, named_account
from scripts.utils.artifacts import ARTIFACTS_DIR, INTERFACES_DIR, Artifacts, check_build_info
from scripts.utils.combo import deploy_proxy
from scripts.utils.deploy_args import DeployArgs
from scripts.utils.deployment import Deployment, manifest_filename
from scripts.utils.networks import network_env
from scripts.utils.secrets import network_accounts


CLICK_PROMPTS = {
    "network": {
        "prompt": "Network name",
        "default": DEFAULT_NETWORK,
        "help": f"Network to deploy to. Defaults to `{DEFAULT_NETWORK}`.",
        "type": click.Choice([*NETWORKS, *FORKS], case_sensitive=False),
    },
    "rpc": {
        "prompt": "What is the desired rpc?",
        "default": "",
        "help": "Override the RPC url of the network. Defaults to the configured url.",
    },
    "environment": {
        "prompt": "Inform the environment name",
        "default": "dev",
        "help": "Name of the manifest written under `deployments/<network>/`. Defaults to `dev`.",
    },
    "handlers": {
        "prompt": "Handlers to deploy (comma separated)",
        "default": ",".join(HANDLER_INFOS),
        "help": "Handler artifacts to deploy and register. Defaults to all known handlers.",
    },
    "proxy": {
        "prompt": "Proxy artifact",
        "default": "Proxy",
        "help": "Proxy artifact to deploy (`Proxy` or `ProxyMock`). Defaults to `Proxy`.",
    },
    "account": {
        "prompt": "Deployer account name",
        "default": "deployer",
        "help": "Named account used on local networks. Defaults to `deployer`.",
    },
    "is_retry": {
        "prompt": "Ignore the current manifest (always deploy)?",
        "help": "Redeploy everything even if the manifest already lists it.",
        "default": False,
    },
}


def param_prompt(ctx, param, value):
    param_config = CLICK_PROMPTS.get(param.name)
    if param_config is None:
        return value

    default_val = param_config.get("default")
    if value != default_val or ctx.params.get("silent"):
        return value

    return click.prompt(
        f"{param_config['prompt']} --{param.name.replace('_', '-')}",
        default=default_val,
        type=param_config.get("type"),
    )


def _option(name, *decls, **kwargs):
    return click.option(
        *decls,
        default=CLICK_PROMPTS[name]["default"],
        help=CLICK_PROMPTS[name]["help"],
        callback=param_prompt,
        **kwargs,
    )


def deploy_combo(deployment, proxy_name, handler_names):
    """Registry, proxy, then every handler registered under its info."""
    registry = deployment.deploy("Registry")
    proxy = deploy_proxy(deployment.artifacts, deployment.deploy, registry, deployment.account, name=proxy_name)

    for name in handler_names:
        handler = deployment.deploy(name)
        deployment.register_handler(registry, handler, HANDLER_INFOS[name])

    return registry, proxy


@click.command()
@click.option("--silent", is_flag=True, default=False, is_eager=True, help="Run command without prompts.")
@_option("network", "--network", "-n", type=CLICK_PROMPTS["network"]["type"])
@_option("rpc", "--rpc")
@_option("environment", "--environment", "-e")
@_option("handlers", "--handlers")
@_option("proxy", "--proxy")
@_option("account", "--account", "-a")
@_option("is_retry", "--is-retry", is_flag=True)
@click.option(
    "--artifacts",
    "artifacts_dir",
    default=ARTIFACTS_DIR,
    help=f"Hardhat artifacts directory. Defaults to `{ARTIFACTS_DIR}`.",
)
def cli(silent, network, rpc, environment, handlers, proxy, account, is_retry, artifacts_dir):
    """
    Deploys a registry, a proxy and the selected handlers, and registers
    every handler in the registry.

    Contracts come from compiled hardhat artifacts. Every deployed contract
    and registered handler is written to
    `deployments/<network>/<environment>-manifest.json`; re-running against the
    same manifest reuses what is already there unless `--is-retry` is set.
    """
    handler_names = [h.strip() for h in handlers.split(",") if h.strip()]
    unknown = [h for h in handler_names if h not in HANDLER_INFOS]
    if unknown:
        raise click.BadParameter(f"Unknown handlers: {', '.join(unknown)}", param_hint="--handlers")

    # only remote networks outlive the run, local chains always start fresh
    is_remote = "secret_file" in NETWORKS.get(network, {})
    if is_remote and not network_accounts(network):
        raise click.ClickException(f"No signing key available for `{network}`")

    artifacts = Artifacts([artifacts_dir, INTERFACES_DIR])
    check_build_info(artifacts_dir)

    log.h1("Combo Deployment")
    log.info(f"Network `{network}`.")
    log.info(f"Manifest `{manifest_filename(network, environment)}`.")
    log.info(f"Loaded {len(artifacts.files)} artifacts from {artifacts_dir}.")
    log.info("")

    boa.deployments.set_deployments_db(boa.deployments.DeploymentsDB(":memory:"))

    with network_env(network, rpc or None) as env:
        if is_remote:
            sender = env.eoa
        else:
            sender = named_account(account, derive_accounts()).address
        log.info(f"Deployer account `{sender}`.")

        deploy_args = DeployArgs(sender, network, environment, ignore_manifest=is_retry or not is_remote, rpc=rpc, handlers=handler_names)
        # in-process reverts are deterministic, only remote sends are retried
        deployment = Deployment(deploy_args, artifacts, max_attempts=20 if is_remote else 1)
        registry, proxy_contract = deploy_combo(deployment, proxy, handler_names)
        total_gas = deployment.end()

    log.info(f"Registry at {registry.address}, proxy at {proxy_contract.address}")
    log.info(f"Total gas used: {total_gas}")
    log.info("Done.")


if __name__ == "__main__":
    cli()
