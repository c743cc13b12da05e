"""
Module: conftest.py
Description: Shared pytest fixtures for IronMQ client tests.

Provides test settings, a client wired to the test project and sample
messages. HTTP traffic is intercepted with pytest-httpx (httpx_mock) in
unit tests.
"""

import pytest
import pytest_asyncio
from pydantic import Field
from pydantic_settings import SettingsConfigDict

from ironmq.client import Client
from ironmq.config.settings import Settings
from ironmq.models.message import Message

PROJECT_ID = "test-project"
TOKEN = "test-token"
BASE_URL = f"https://mq-aws-us-east-1.iron.io/1/projects/{PROJECT_ID}/"


class TestSettings(Settings):
    """Test settings that don't read the environment or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="IRONMQ_TEST_UNUSED_",
        env_file=None,
        case_sensitive=False,
        extra="ignore"
    )

    project_id: str = Field(default=PROJECT_ID)
    token: str = Field(default=TOKEN)
    connect_attempts: int = Field(default=1, ge=1, le=10)
    retry_backoff: float = Field(default=0.0, ge=0)
    log_level: str = Field(default="DEBUG")


@pytest.fixture
def test_settings():
    """
    Provide test configuration settings.

    Single connection attempt and no backoff so transport failures surface
    immediately.
    """
    return TestSettings()


@pytest_asyncio.fixture
async def client(test_settings):
    """Provide a Client for the test project, closed after the test."""
    ironmq_client = Client.from_settings(test_settings)
    yield ironmq_client
    await ironmq_client.aclose()


@pytest.fixture
def queue(client):
    """Provide a handle for the "demo" queue."""
    return client.get_queue("demo")


@pytest.fixture
def reserved_message():
    """A message as returned by a reserve call."""
    return Message(body="hello", id=5924620498196814694)


@pytest.fixture
def sample_messages():
    """Three unsubmitted messages with distinct bodies."""
    return [Message(body="a"), Message(body="b"), Message(body="c")]
