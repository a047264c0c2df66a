import pytest
from eth_account import Account

from config.BluePrint import DERIVATION_PATH, MNEMONIC, NUM_ACCOUNTS
from scripts.utils.accounts import derive_accounts, named_account


@pytest.always
def test_derive_accounts():
    accounts = derive_accounts()

    assert len(accounts) == NUM_ACCOUNTS
    assert len({a.address for a in accounts}) == NUM_ACCOUNTS
    assert accounts[0].address == Account.from_mnemonic(MNEMONIC, account_path=f"{DERIVATION_PATH}/0").address
    assert accounts[7].address == Account.from_mnemonic(MNEMONIC, account_path=f"{DERIVATION_PATH}/7").address


@pytest.always
def test_derive_accounts_initial_index():
    accounts = derive_accounts()
    shifted = derive_accounts(initial_index=5, count=3)

    assert [a.address for a in shifted] == [a.address for a in accounts[5:8]]


@pytest.always
def test_derive_accounts_is_deterministic():
    assert [a.key for a in derive_accounts(count=2)] == [a.key for a in derive_accounts(count=2)]


@pytest.always
def test_named_account():
    accounts = derive_accounts(count=3)

    assert named_account("deployer", accounts) == accounts[0]
    assert named_account("deployer", accounts, network="beta") == accounts[0]


@pytest.always
def test_named_account_unknown_name():
    with pytest.raises(KeyError, match="owner"):
        named_account("owner", derive_accounts(count=1))


@pytest.always
def test_named_account_out_of_range():
    with pytest.raises(KeyError, match="deployer"):
        named_account("deployer", [])
