#!/usr/bin/env python3
"""Compute the payout ranges and CET prefix groups of a contract.

Loads a contract descriptor (payout function, rounding intervals, total
collateral and oracle digit layout) from a JSON file and prints its CET set
as JSON on stdout:

1. Builds the curve of every payout function piece
2. Splits each piece into rounded payout ranges
3. Compresses every range into oracle digit prefixes

Usage:
    python scripts/compute_cets.py CONTRACT.json [--ranges-only] [--verbose]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).parent.parent))

from dlc_engine.cets import compute_cet_groups, contract_payouts
from dlc_engine.config import EngineConfig
from dlc_engine.errors import PayoutEngineError
from dlc_engine.models.contract import ContractDescriptor


def load_contract(path: Path) -> ContractDescriptor:
    """Load contract descriptor from JSON file."""
    with open(path) as f:
        data = json.load(f)
    return ContractDescriptor.model_validate(data)


def build_report(descriptor: ContractDescriptor, config: EngineConfig, ranges_only: bool) -> dict:
    """Compute the CET set of a contract as a JSON-serializable dict."""
    ranges = contract_payouts(descriptor, config)
    report: dict[str, Any] = {
        "totalCollateral": descriptor.total_collateral,
        "ranges": [
            {"indexFrom": r.index_from, "indexTo": r.index_to, "payout": r.payout} for r in ranges
        ],
    }
    if ranges_only:
        return report

    groups = compute_cet_groups(ranges, descriptor.oracle_base, descriptor.oracle_num_digits)
    report["cetGroups"] = [
        {
            "payout": group.payout,
            "indexFrom": group.index_from,
            "indexTo": group.index_to,
            "prefixes": [list(prefix) for prefix in group.prefixes],
        }
        for group in groups
    ]
    report["cetCount"] = sum(group.cet_count for group in groups)
    return report


def main():
    parser = argparse.ArgumentParser(description="Compute CET payout groups for a contract")
    parser.add_argument("contract", type=Path, help="Contract descriptor JSON file")
    parser.add_argument(
        "--ranges-only",
        action="store_true",
        help="Only print payout ranges, skip digit-prefix grouping",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    args = parser.parse_args()

    # Logs go to stderr, stdout carries the JSON report
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )

    try:
        descriptor = load_contract(args.contract)
    except (OSError, json.JSONDecodeError, ValidationError) as err:
        print(f"Error: cannot load contract {args.contract}: {err}", file=sys.stderr)
        sys.exit(1)

    try:
        report = build_report(descriptor, EngineConfig.from_env(), args.ranges_only)
    except PayoutEngineError as err:
        print(f"Error: {type(err).__name__}: {err}", file=sys.stderr)
        sys.exit(1)

    json.dump(report, sys.stdout, indent=2)
    print()


if __name__ == "__main__":
    main()
