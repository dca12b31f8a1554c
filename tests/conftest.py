# tests/conftest.py

"""Shared pytest fixtures for the price updater tests."""

import os
from collections.abc import Generator
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def clean_amazon_env() -> Generator[None, None, None]:
    """Strip AMAZON_* variables so local secrets never reach a test."""
    kept = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith("AMAZON_")
    }
    with patch.dict(os.environ, kept, clear=True):
        yield
