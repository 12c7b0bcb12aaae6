"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from dlc_engine.models import ContractDescriptor

FIXTURES_DIR = Path(__file__).parent / "fixtures"
CONTRACTS_DIR = FIXTURES_DIR / "contracts"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


def load_contract_fixture(name: str) -> ContractDescriptor:
    """Load a contract descriptor fixture by name.

    Args:
        name: Fixture name (e.g., "linear_piecewise")

    Returns:
        Parsed ContractDescriptor
    """
    path = CONTRACTS_DIR / f"{name}.json"
    with open(path) as f:
        data = json.load(f)
    return ContractDescriptor.model_validate(data)


@pytest.fixture
def linear_piecewise_contract() -> ContractDescriptor:
    """Flat 40, ramp 40 -> 60 over outcomes [40, 60], flat 60 up to 2^18 - 1."""
    return load_contract_fixture("linear_piecewise")


@pytest.fixture
def inverse_hyperbola_contract() -> ContractDescriptor:
    """Descending 500000 / x payout, collateral 100, base-10 oracle with 6 digits."""
    return load_contract_fixture("inverse_hyperbola")
