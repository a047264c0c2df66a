import json
import os
from functools import cached_property

import boa
from eth_utils import to_bytes
from eth_utils.abi import collapse_if_tuple

from config.BluePrint import SOLIDITY
from scripts.utils import json_file, log
from scripts.utils.calldata import encode_args
from scripts.utils.errors import ArtifactError, ArtifactNotFound

ARTIFACTS_DIR = "./artifacts"
INTERFACES_DIR = "./interfaces"
BUILD_INFO_DIR = "build-info"


def load_artifact_files(directories=[ARTIFACTS_DIR, INTERFACES_DIR]):
    """
    Map every contract artifact found in `directories` (recursively) to its path.
    Debug files and build-info are skipped; the first directory wins on duplicates.
    """
    artifact_files = {}

    for directory in directories:
        if not os.path.exists(directory):
            continue

        for root, dirs, files in os.walk(directory):
            dirs[:] = [d for d in dirs if d != BUILD_INFO_DIR]
            for file in sorted(files):
                if not file.endswith(".json") or file.endswith(".dbg.json"):
                    continue
                key = file[:-5]
                artifact_files.setdefault(key, os.path.relpath(os.path.join(root, file)))

    return artifact_files


class ContractArtifact:
    """
    A compiled contract: ABI plus creation bytecode. Interfaces have an empty
    bytecode and can only be bound to existing addresses with `at`.
    """

    def __init__(self, name, abi, bytecode="0x", link_references=None, path=None):
        self.name = name
        self.abi = abi
        self.bytecode = bytecode or "0x"
        self.link_references = link_references or {}
        self.path = path

    @classmethod
    def from_file(cls, path):
        content = json_file.load(path)
        name = os.path.basename(path)[:-5]

        # bare abi list (interface exports)
        if isinstance(content, list):
            return cls(name, content, path=path)

        if "abi" not in content:
            raise ArtifactError(f"{path} has no `abi`")
        return cls(
            content.get("contractName", name),
            content["abi"],
            content.get("bytecode", "0x"),
            content.get("linkReferences"),
            path=path,
        )

    @cached_property
    def factory(self):
        return boa.loads_abi(json.dumps(self.abi), name=self.name)

    @property
    def is_deployable(self):
        return self.bytecode not in ("", "0x")

    @property
    def constructor_types(self):
        constructor = next((item for item in self.abi if item.get("type") == "constructor"), None)
        if constructor is None:
            return []
        return [collapse_if_tuple(i) for i in constructor["inputs"]]

    def encode_constructor_args(self, args):
        types = self.constructor_types
        if not types:
            if args:
                raise ArtifactError(f"{self.name} takes no constructor arguments, got {len(args)}")
            return b""
        return encode_args(types, list(args))

    def deploy(self, *args, sender=None, value=0, gas=None):
        if not self.is_deployable:
            raise ArtifactError(f"{self.name} has no bytecode (interface or abstract contract)")
        if self.link_references:
            raise ArtifactError(f"{self.name} needs linked libraries: {', '.join(self.link_references)}")

        initcode = to_bytes(hexstr=self.bytecode) + self.encode_constructor_args(args)
        kwargs = {"value": value, "bytecode": initcode}
        if sender is not None:
            kwargs["sender"] = str(getattr(sender, "address", sender))
        if gas is not None:
            kwargs["gas"] = gas

        address, computation = boa.env.deploy(**kwargs)
        if computation.is_error:
            raise computation.error
        contract = self.at(address)
        # creation gas, read back like any call's
        contract._computation = computation
        return contract

    def at(self, address):
        return self.factory.at(str(getattr(address, "address", address)))

    def __repr__(self):
        return f"<ContractArtifact {self.name} ({self.path})>"


class Artifacts:
    """Name based lookup over artifact directories (`artifacts.require("Proxy")`)."""

    def __init__(self, directories=[ARTIFACTS_DIR, INTERFACES_DIR]):
        self.directories = list(directories)
        self.files = load_artifact_files(self.directories)
        self._cache = {}

    def __contains__(self, name):
        return name in self.files

    def require(self, name):
        if name not in self.files:
            raise ArtifactNotFound(name, self.directories)
        if name not in self._cache:
            self._cache[name] = ContractArtifact.from_file(self.files[name])
        return self._cache[name]


def check_build_info(artifacts_dir=ARTIFACTS_DIR, solidity=SOLIDITY):
    """
    Compare the compiler recorded in hardhat build-info files with the
    configured compiler. Returns the list of mismatches (also logged).
    """
    build_info_dir = os.path.join(artifacts_dir, BUILD_INFO_DIR)
    if not os.path.isdir(build_info_dir):
        return []

    expected = [
        (c["version"], c["settings"]["optimizer"]["enabled"], c["settings"]["optimizer"]["runs"])
        for c in solidity["compilers"]
    ]

    mismatches = []
    for file in sorted(os.listdir(build_info_dir)):
        if not file.endswith(".json"):
            continue
        info = json_file.load(os.path.join(build_info_dir, file))
        optimizer = info.get("input", {}).get("settings", {}).get("optimizer", {})
        actual = (info.get("solcVersion"), optimizer.get("enabled", False), optimizer.get("runs"))
        if actual not in expected:
            log.warning(f"{file} was built with solc {actual[0]} (optimizer={actual[1]}, runs={actual[2]})")
            mismatches.append((file, actual))

    return mismatches
