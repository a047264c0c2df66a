import os

import dotenv

dotenv.load_dotenv()


###########
# Compile #
###########


SOLIDITY = {
    "compilers": [
        {
            "version": "0.8.9",
            "settings": {
                "optimizer": {
                    "enabled": True,
                    "runs": 200,
                },
            },
        },
    ],
}


############
# Accounts #
############


NAMED_ACCOUNTS = {
    "deployer": {
        "default": 0,
    },
}


MNEMONIC = "dice shove sheriff police boss indoor hospital vivid tenant method game matter"
DERIVATION_PATH = "m/44'/60'/0'/0"

# funded accounts on the in-process network (native units)
NUM_ACCOUNTS = 20
ACCOUNT_BALANCE = 10_000


############
# Networks #
############


DEFAULT_NETWORK = "hardhat"

NETWORKS = {
    "beta": {
        "secret_file": ".secret_beta",
        "chain_id": 137,
        "url": "https://polygon-beta.furucombo.app/",
    },
    "hardhat": {
        "accounts": {
            "mnemonic": MNEMONIC,
            "path": DERIVATION_PATH,
            "initial_index": 0,
            "count": NUM_ACCOUNTS,
        },
        "hardfork": "berlin",
    },
    # snapshot/revert runs need a standalone node on localhost:8545,
    # gas settings live here so the in-process network keeps its defaults
    "localhost": {
        "url": "http://127.0.0.1:8545",
        "gas_price": 1,
        "gas": 30_000_000,
        "timeout": 900_000,  # ms
    },
}

# seconds, applied to every collected test
TEST_TIMEOUT = 900


#########
# Forks #
#########


FORKS = {
    "polygon": {
        "rpc_url": os.environ.get(
            "POLYGON_RPC_URL",
            f"https://polygon-mainnet.g.alchemy.com/v2/{os.environ.get('WEB3_ALCHEMY_API_KEY')}",
        ),
        "block": int(os.environ.get("POLYGON_FORK_BLOCK", "0")) or None,
        "chain_id": 137,
    },
}


##########
# Tokens #
##########


TOKENS = {
    "polygon": {
        # native pseudo-token, rejected by every handler
        "MATIC": "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE",
        "WMATIC": "0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",
        "WETH": "0x7ceB23fD6bC0adD59E62ac25578270cFf1b9f619",
        "DAI": "0x8f3Cf7ad23Cd3CaDbD9735AFf958023239c6A063",
        "USDC": "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174",
        "BAT": "0x3Cef98bb43d732E2F285eE605a8158cDE967D219",
        "COMP": "0x8505b9d2254A7Ae468c0E9dd10Ccea3A837aef5c",
        # aave v2
        "ADAI_V2": "0x27F8D03b3a2196956ED754baDc28D73be8830A6e",
        "AWMATIC_V2": "0x8dF3aad3a84da6b69A4DA8aeC3eA40d9091B2Ac4",
        "AWMATIC_V2_DEBT_STABLE": "0xb9A6E29fB540C5F1243ef643EB39b0AcbC2e68E3",
        "AWMATIC_V2_DEBT_VARIABLE": "0x59e8E9100cbfCBCBAdf86b9279fa61526bBB8765",
        "AWETH_V2_DEBT_STABLE": "0xc478cBbeB590C76b01ce658f8C4dda04f30e2C6f",
        "AWETH_V2_DEBT_VARIABLE": "0xeDe17e9d79fc6f9fF9250D9EEfbdB88Cc18038b5",
        # quickswap pairs
        "QUICKSWAP_WMATIC_WETH": "0xadbF1854e5883eB8aa7BAf50705338739e558E5b",
        "QUICKSWAP_DAI_WETH": "0x4A35582a710E1F4b2030A3F826DA20BfB6703C09",
        # sushiswap pairs
        "SUSHISWAP_WMATIC_WETH": "0xc4e595acDD7d12feC385E5dA5D43160e8A0bAC0E",
        "SUSHISWAP_DAI_WETH": "0x6FF62bfb8c12109E8000935A6De54daD83a4f39f",
    },
}


INTEGRATION_ADDYS = {
    "polygon": {
        "AAVEPROTOCOL_V2_PROVIDER": "0xd05e3E715d945B59290df0ae8eF85c1BdB684744",
        "QUICKSWAP_ROUTER": "0xa5E0829CaCEd8fFDD4De3c43696c57F7D7A678ff",
        "QUICKSWAP_FACTORY": "0x5757371414417b8C6CAad45bAeF941aBc7d3Ab32",
        "SUSHISWAP_ROUTER": "0x1b02dA8Cb0d097eB8D57A175b88c7D8b47997506",
        "SUSHISWAP_FACTORY": "0xc35DADB65012eC5796536bD9864eD8773aBc74C4",
    },
}


class AAVE_RATEMODE:
    STABLE = 1
    VARIABLE = 2


###########
# Handler #
###########


# registry info (bytes32) each handler is registered under
HANDLER_INFOS = {
    "HAaveProtocolV2": "AaveProtocolV2",
    "HERC20TokenIn": "ERC20In",
    "HFurucomboStaking": "Furucombo",
    "HQuickSwap": "QuickSwap",
    "HSushiSwap": "SushiSwap",
}


# merkle redeem test allocation (whole tokens)
MR_TOTAL_SUPPLY = 10_000
MR_CLAIM_AMOUNT = 100
