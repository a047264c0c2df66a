import contextlib
import subprocess
import sys
import time
from urllib.parse import urlparse

import boa
import requests
from boa.environment import Env
from eth_account import Account
from web3 import Web3

from config.BluePrint import ACCOUNT_BALANCE, DERIVATION_PATH, FORKS, MNEMONIC, NETWORKS, NUM_ACCOUNTS
from scripts.utils import log
from scripts.utils.accounts import derive_accounts, named_account
from scripts.utils.errors import NetworkConfigError
from scripts.utils.secrets import network_accounts

EIGHTEEN_DECIMALS = 10 ** 18
NODE_START_TIMEOUT = 60  # seconds


def get_network_config(name):
    if name in NETWORKS:
        return NETWORKS[name]
    if name in FORKS:
        return FORKS[name]
    raise NetworkConfigError(f"Unknown network `{name}` (known: {', '.join([*NETWORKS, *FORKS])})")


def fund_accounts(env, addresses, amount=ACCOUNT_BALANCE * EIGHTEEN_DECIMALS):
    for address in addresses:
        env.set_balance(address, amount)


def _seed_accounts(env, count=NUM_ACCOUNTS):
    # mnemonic accounts get funded and the deployer becomes the default sender
    accounts = derive_accounts(count=count)
    fund_accounts(env, [a.address for a in accounts])
    env.eoa = named_account("deployer", accounts).address
    return accounts


def node_is_up(url, timeout=2):
    try:
        requests.post(
            url,
            json={"jsonrpc": "2.0", "id": 1, "method": "web3_clientVersion", "params": []},
            timeout=timeout,
        )
    except requests.exceptions.RequestException:
        return False
    return True


def check_chain_id(url, expected, timeout=30):
    w3 = Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": timeout}))
    chain_id = w3.eth.chain_id
    if chain_id != expected:
        raise NetworkConfigError(f"Expected chain id {expected} at {url}, got {chain_id}")
    log.info(f"Connected to network with Chain ID: {chain_id}")
    return chain_id


def node_args(port, fork_url=None, block_number=None):
    hardhat = NETWORKS["hardhat"]
    localhost = NETWORKS["localhost"]
    args = [
        "anvil",
        "--port", str(port),
        "--mnemonic", MNEMONIC,
        "--derivation-path", f"{DERIVATION_PATH}/",
        "--accounts", str(NUM_ACCOUNTS),
        "--balance", str(ACCOUNT_BALANCE),
        "--hardfork", hardhat["hardfork"],
        "--gas-price", str(localhost["gas_price"]),
        "--gas-limit", str(localhost["gas"]),
    ]

    if fork_url:
        args.extend(["--fork-url", fork_url, "--no-rate-limit", "--timeout", str(localhost["timeout"])])
    if block_number:
        args.extend(["--fork-block-number", str(block_number)])
    return args


@contextlib.contextmanager
def launch_node(port, fork_url=None, block_number=None):
    """
    Runs a local node on `port` for the duration of the context.
    Yields its RPC url once it answers requests.
    """
    process = subprocess.Popen(
        node_args(port, fork_url, block_number),
        stdout=sys.stdout,
        stderr=sys.stderr,
    )

    url = f"http://127.0.0.1:{port}"
    try:
        deadline = time.monotonic() + NODE_START_TIMEOUT
        while not node_is_up(url):
            if process.poll() is not None:
                raise NetworkConfigError(f"Node exited with code {process.returncode} before accepting requests")
            if time.monotonic() > deadline:
                raise NetworkConfigError(f"Node on port {port} did not start within {NODE_START_TIMEOUT}s")
            time.sleep(1)
        log.h3(f"Node listening on {url}")
        yield url
    finally:
        process.terminate()
        try:
            process.wait(timeout=10)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait(timeout=1)


@contextlib.contextmanager
def _local_env():
    with boa.set_env(Env()) as env:
        env.enable_fast_mode()
        _seed_accounts(env, NETWORKS["hardhat"]["accounts"]["count"])
        yield env


@contextlib.contextmanager
def _localhost_env(rpc=None):
    url = rpc or NETWORKS["localhost"]["url"]
    with contextlib.ExitStack() as stack:
        if not node_is_up(url):
            log.h3(f"Nothing listening on {url}, launching a node")
            url = stack.enter_context(launch_node(urlparse(url).port or 8545))
        env = stack.enter_context(boa.fork(url, allow_dirty=True))
        _seed_accounts(env)
        yield env


@contextlib.contextmanager
def _remote_env(name, rpc=None):
    config = NETWORKS[name]
    url = rpc or config["url"]
    check_chain_id(url, config["chain_id"])

    with boa.set_network_env(url) as env:
        keys = network_accounts(name)
        if not keys:
            log.warning(f"No signing account for `{name}`, only calls are possible")
        for key in keys:
            env.add_account(Account.from_key(key), force_eoa=True)
        yield env


@contextlib.contextmanager
def _fork_env(name, rpc=None):
    config = FORKS[name]
    kwargs = {"block_identifier": config["block"]} if config.get("block") else {}
    with boa.fork(rpc or config["rpc_url"], **kwargs) as env:
        _seed_accounts(env)
        yield env


@contextlib.contextmanager
def network_env(name, rpc=None):
    """
    Yields a titanoboa environment for a configured network:

    - `hardhat`: fresh in-process chain with the mnemonic accounts funded
    - `localhost`: fork of the node on localhost:8545 (launched when absent)
    - `beta`: live remote network, signing with the key from `.secret_beta`
    - any name in `FORKS`: in-process fork of that chain
    """
    get_network_config(name)
    log.h2(f"Network `{name}`")

    if name == "hardhat":
        with _local_env() as env:
            yield env
    elif name == "localhost":
        with _localhost_env(rpc) as env:
            yield env
    elif name in FORKS:
        with _fork_env(name, rpc) as env:
            yield env
    else:
        with _remote_env(name, rpc) as env:
            yield env
