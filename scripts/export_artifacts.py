"""
Compile Vyper sources into hardhat-shaped artifacts (`contractName`, `abi`, `bytecode`).

The harness loads contracts from artifact JSON only, this lets the local mocks
go through the same loader as the compiled protocol contracts.

Usage:
    python scripts/export_artifacts.py
    python scripts/export_artifacts.py --output-dir ./artifacts/mock
"""

import argparse
from pathlib import Path

from vyper.compiler import compile_code

from scripts.utils import json_file, log


def export_artifacts(contracts_dir: Path, output_dir: Path, exclude_dirs: list[str] = None):
    exclude_dirs = exclude_dirs or []
    output_dir.mkdir(parents=True, exist_ok=True)

    exported = []
    for vy_file in sorted(Path(contracts_dir).rglob("*.vy")):
        if any(excluded in vy_file.parts for excluded in exclude_dirs):
            continue

        result = compile_code(vy_file.read_text(), output_formats=["abi", "bytecode"])
        artifact = {
            "contractName": vy_file.stem,
            "sourceName": str(vy_file),
            "abi": result["abi"],
            "bytecode": result["bytecode"],
            "linkReferences": {},
        }
        json_file.save(str(output_dir / f"{vy_file.stem}.json"), artifact)
        log.h3(f"✓ {vy_file.stem}")
        exported.append(vy_file.stem)

    log.info(f"\nExported {len(exported)} artifacts to {output_dir}")
    return exported


def main():
    parser = argparse.ArgumentParser(description="Export hardhat-shaped artifacts for Vyper contracts")
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=Path("artifacts/mock"),
        help="Output directory for artifact files (default: artifacts/mock)",
    )
    parser.add_argument(
        "--contracts-dir",
        "-c",
        type=Path,
        default=Path("contracts/mock"),
        help="Contracts directory (default: contracts/mock)",
    )
    args = parser.parse_args()

    export_artifacts(args.contracts_dir, args.output_dir)


if __name__ == "__main__":
    main()
