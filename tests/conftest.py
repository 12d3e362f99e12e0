"""Test configuration and fixtures for schemaql."""

from dotenv import load_dotenv
import copy
import logging
import pytest

from tests.backend import InMemoryBackend
from tests.schema import CLIENT_SCHEMA_OBJECTS, SAMPLE_DATA

# Try to load environment variables from .env file
load_dotenv()


@pytest.fixture(autouse=True)
def _schemaql_debug_logging(caplog):
    """Capture the package logger at DEBUG so build passes show up in failures."""
    caplog.set_level(logging.DEBUG, logger="schemaql")
    yield


@pytest.fixture(scope="function")
def sample_data():
    return copy.deepcopy(SAMPLE_DATA)


@pytest.fixture(scope="function")
def backend(sample_data):
    """A fresh in-memory backend for each test function."""
    return InMemoryBackend(CLIENT_SCHEMA_OBJECTS, sample_data)


@pytest.fixture(scope="function")
def failing_backend(sample_data):
    return InMemoryBackend(CLIENT_SCHEMA_OBJECTS, sample_data, fail_on={'fetch_related_collection'})


@pytest.fixture(scope="function")
def context(backend):
    return {'backend': backend}
