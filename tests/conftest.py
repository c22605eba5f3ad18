# tests/conftest.py
"""Shared helpers for the growth engine test suite."""

import pytest
from fastapi.testclient import TestClient

from growth_engine.domain import VariableRelations, parse_growth, to_notation


def g(text: str):
    """Growth expression from notation."""
    return parse_growth(text)


def notation(expression) -> str:
    return to_notation(expression)


def relations(*statements: str) -> VariableRelations:
    return VariableRelations.parse(statements)


@pytest.fixture(scope="session")
def client() -> TestClient:
    from growth_engine.main import create_app

    return TestClient(create_app())
