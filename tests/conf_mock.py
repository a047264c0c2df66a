from pathlib import Path

import pytest
import boa

from constants import EIGHTEEN_DECIMALS
from config.BluePrint import HANDLER_INFOS
from scripts.export_artifacts import export_artifacts
from scripts.utils import json_file
from scripts.utils.accounts import derive_accounts, named_account
from scripts.utils.artifacts import Artifacts
from scripts.utils.combo import register_handler


############
# Accounts #
############


@pytest.fixture(scope="session")
def accounts(env):
    # same mnemonic accounts the network was seeded with
    return [a.address for a in derive_accounts()]


@pytest.fixture(scope="session")
def deploy3r(env, accounts):
    return named_account("deployer", accounts)


@pytest.fixture(scope="session")
def user(accounts):
    return accounts[1]


@pytest.fixture(scope="session")
def someone(accounts):
    return accounts[2]


@pytest.fixture(scope="session")
def sally(env):
    # not a mnemonic account, holds nothing
    return env.generate_address("sally")


#########
# Mocks #
#########


@pytest.fixture(scope="session")
def mock_token(deploy3r):
    return boa.load("contracts/mock/MockErc20.vy", name="mock_token")


@pytest.fixture(scope="session")
def mock_registry(deploy3r):
    return boa.load("contracts/mock/MockRegistry.vy", name="mock_registry")


@pytest.fixture(scope="session")
def mock_proxy(mock_registry, deploy3r):
    return boa.load("contracts/mock/MockProxy.vy", mock_registry, name="mock_proxy")


@pytest.fixture(scope="session")
def mock_handler(mock_registry, deploy3r):
    handler = boa.load("contracts/mock/MockHandler.vy", name="mock_handler")
    return register_handler(mock_registry, handler, "Mock", deploy3r)


@pytest.fixture(scope="session")
def fund_mock_token(mock_token):
    def fund_mock_token(_recipient, _amount=1_000 * EIGHTEEN_DECIMALS):
        mock_token.mint(_recipient, _amount)
        return _amount
    yield fund_mock_token


#############
# Artifacts #
#############


@pytest.fixture(scope="session")
def mock_artifacts_dir(tmp_path_factory):
    # hardhat-shaped artifacts of the vyper mocks
    directory = tmp_path_factory.mktemp("artifacts")
    export_artifacts(Path("contracts/mock"), directory)
    return directory


@pytest.fixture(scope="session")
def mock_artifacts(mock_artifacts_dir):
    return Artifacts([str(mock_artifacts_dir)])


@pytest.fixture(scope="session")
def combo_artifacts_dir(mock_artifacts_dir, tmp_path_factory):
    """
    The mocks saved under protocol names: `Registry`, `Proxy` and one
    handler per registry info.
    """
    directory = tmp_path_factory.mktemp("combo_artifacts")
    renames = {"MockRegistry": "Registry", "MockProxy": "Proxy"}
    for source, target in renames.items():
        artifact = json_file.load(str(mock_artifacts_dir / f"{source}.json"))
        json_file.save(str(directory / f"{target}.json"), {**artifact, "contractName": target})

    handler = json_file.load(str(mock_artifacts_dir / "MockHandler.json"))
    for name in HANDLER_INFOS:
        json_file.save(str(directory / f"{name}.json"), {**handler, "contractName": name})
    return directory
