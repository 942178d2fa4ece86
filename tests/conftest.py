"""
Pytest configuration for envkit tests.

This file contains shared fixtures and configuration for all tests.
"""

import logging
import os

import pytest

from envkit.environment import Environment

# Setup logging for tests
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


@pytest.fixture(autouse=True)
def isolate_environment():
    """Start each test without ENVKIT_* variables and restore os.environ afterwards"""
    saved = dict(os.environ)
    for key in list(os.environ):
        if key.startswith("ENVKIT_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def env():
    """An Environment backed by a plain dict instead of os.environ"""
    return Environment({})


@pytest.fixture
def write_env_file(tmp_path):
    """Factory writing a dotenv file into tmp_path and returning its path"""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
