import os
import time

from scripts.utils import json_file, log
from scripts.utils.calldata import ascii_to_bytes32
from scripts.utils.deploy_args import DeployArgs
from scripts.utils.errors import DeploymentError

DEPLOYMENTS_DIR = "./deployments"


def gas_used(contract):
    computation = getattr(contract, "_computation", None)
    if computation is None:
        return 0
    return computation.get_gas_used()


def execute_transaction(transaction, *args, max_attempts=20, retry_delay=3, **kwargs):
    attempts = 0
    while True:
        attempts += 1
        try:
            return transaction(*args, **kwargs)

        except Exception as exception:
            log.info(
                f"\tTransaction Failed {attempts} time{'s' if attempts > 1 else ''}"
                + (f" (Trying again in {retry_delay} seconds)" if attempts < max_attempts else "")
            )
            log.error(f"\tException: {exception}\n")
            if attempts >= max_attempts:
                log.error("\tMax attempts reached.\n")
                raise
            time.sleep(retry_delay)


def manifest_filename(network, environment, directory=DEPLOYMENTS_DIR):
    return os.path.join(directory, network, f"{environment}-manifest.json")


class Deployment:
    """
    Deploys artifacts and sends setup transactions, recording every deployed
    contract and registered handler in a JSON manifest.

    Contracts already present in the manifest are reused unless the deploy
    args ask to ignore it.
    """

    def __init__(self, deploy_args: DeployArgs, artifacts, manifest_path=None, max_attempts=20, retry_delay=3):
        self._deploy_args = deploy_args
        self._artifacts = artifacts
        self._manifest_path = manifest_path or manifest_filename(deploy_args.network, deploy_args.environment)
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        self._contracts = {}
        self._count = 0
        self.gas = 0

        if deploy_args.ignore_manifest:
            self._manifest = {}
        else:
            self._manifest = json_file.load_or_empty(self._manifest_path)
            if self._manifest:
                log.h3(f"Loaded previous manifest {self._manifest_path}")

    @property
    def account(self):
        return self._deploy_args.sender

    @property
    def network(self):
        return self._deploy_args.network

    @property
    def artifacts(self):
        return self._artifacts

    def deploy(self, name, *args, label=None):
        """
        Deploys artifact `name` with `args`, or reuses the manifest entry for `label`.
        Returns the contract.
        """
        label = label or name
        self._count += 1
        log.h2(f"Step {self._count} on {self.network} - Deploying {label}")

        recorded = self._manifest.get("contracts", {}).get(label)
        if recorded and recorded["artifact"] == name:
            log.h3(f"Skipping, {label} already deployed at {recorded['address']}")
            contract = self._artifacts.require(name).at(recorded["address"])
        else:
            artifact = self._artifacts.require(name)
            contract = self._run(label, artifact.deploy, *args, sender=self.account)
            self.gas += gas_used(contract)
            log.h3(f"Contract {label} deployed at {contract.address}")
            self._record(
                "contracts",
                label,
                {
                    "address": str(contract.address),
                    "artifact": name,
                    "args": "0x" + artifact.encode_constructor_args(args).hex(),
                },
            )

        self._contracts[label] = contract
        return contract

    def execute(self, transaction, *args, **kwargs):
        """Sends a transaction from the deployer, retrying on failure."""
        self._count += 1
        log.h2(f"Step {self._count} on {self.network} - {getattr(transaction, '__name__', transaction)}{args}")

        kwargs["sender"] = self.account
        result = self._run(f"step {self._count}", transaction, *args, **kwargs)
        log.h3("Transaction confirmed")

        contract = getattr(transaction, "contract", None)
        if contract is not None:
            self.gas += gas_used(contract)
        return result

    def register_handler(self, registry, handler, info):
        info_bytes = ascii_to_bytes32(info)
        registered = self._manifest.get("handlers", {}).get(info)
        if registered == str(handler.address):
            log.h3(f"Skipping, {info} already registered")
            return handler

        self.execute(registry.register, handler.address, info_bytes)
        self._record("handlers", info, str(handler.address))
        return handler

    def get_contract(self, label):
        if label in self._contracts:
            return self._contracts[label]
        recorded = self._manifest["contracts"][label]
        return self._artifacts.require(recorded["artifact"]).at(recorded["address"])

    def end(self):
        log.info(f"Gas spent for deployment: {self.gas}")
        log.info(f"Manifest saved to {self._manifest_path}")
        return self.gas

    def _run(self, label, transaction, *args, **kwargs):
        try:
            return execute_transaction(
                transaction,
                *args,
                max_attempts=self._max_attempts,
                retry_delay=self._retry_delay,
                **kwargs,
            )
        except Exception as exception:
            raise DeploymentError(label) from exception

    def _record(self, section, label, entry):
        # the file keeps every run, lookups only see this run's view
        json_file.merge_save(self._manifest_path, {section: {label: entry}})
        self._manifest.setdefault(section, {})[label] = entry
        log.h3(f"{label} added to manifest")
