from eth_account import Account

from config.BluePrint import DERIVATION_PATH, MNEMONIC, NAMED_ACCOUNTS, NUM_ACCOUNTS

Account.enable_unaudited_hdwallet_features()


def derive_accounts(mnemonic=MNEMONIC, path=DERIVATION_PATH, initial_index=0, count=NUM_ACCOUNTS):
    """
    Derives `count` accounts from the mnemonic, the same way a hardhat node
    seeds its accounts: `{path}/{initial_index + i}`.
    """
    return [
        Account.from_mnemonic(mnemonic, account_path=f"{path}/{initial_index + i}")
        for i in range(count)
    ]


def named_account(name, accounts, network="default"):
    if name not in NAMED_ACCOUNTS:
        raise KeyError(f"Unknown named account `{name}`")

    config = NAMED_ACCOUNTS[name]
    index = config.get(network, config["default"])
    if index >= len(accounts):
        raise KeyError(f"Named account `{name}` points to index {index}, only {len(accounts)} accounts available")
    return accounts[index]

