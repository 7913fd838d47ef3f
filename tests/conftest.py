import datetime as dt
from unittest.mock import AsyncMock

import pytest

from sigv4_asyncio_client.auth import AWSSignatureV4
from sigv4_asyncio_client.client import AWSClient
from sigv4_asyncio_client.models import Credentials, ServiceMetadata

# Credentials and timestamp of the AWS SigV4 test suite
TEST_ACCESS_KEY = "AKIDEXAMPLE"
TEST_SECRET_KEY = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"
TEST_NOW = dt.datetime(2015, 8, 30, 12, 36, 0, tzinfo=dt.UTC)


def frozen_clock() -> dt.datetime:
    return TEST_NOW


@pytest.fixture
def clock():
    return frozen_clock


@pytest.fixture
def credentials():
    return Credentials(TEST_ACCESS_KEY, TEST_SECRET_KEY)


@pytest.fixture
def service():
    return ServiceMetadata("service")


@pytest.fixture
def auth(credentials, service, clock):
    return AWSSignatureV4(credentials, "us-east-1", service, clock=clock)


class MockResponse:
    def __init__(self, status: int, body: bytes, headers: dict | None = None):
        self.status = status
        self.headers = headers or {}
        self.read = AsyncMock(return_value=body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class MockSession:
    def __init__(self):
        self._responses = []
        self.requests = []
        self.close = AsyncMock()

    def request(self, method, url, headers=None, data=None):
        self.requests.append(
            {"method": method, "url": url, "headers": headers, "data": data}
        )
        if self._responses:
            return self._responses.pop(0)
        raise ValueError("No more responses available in the mock session.")

    def add_response(
        self, status: int = 200, body: bytes = b"", headers: dict | None = None
    ):
        self._responses.append(MockResponse(status, body, headers))


@pytest.fixture
def mock_session():
    return MockSession()


@pytest.fixture
def mock_client(credentials, mock_session):
    client = AWSClient(
        credentials=credentials,
        region="us-east-1",
        service="service",
        endpoint_url="https://example.amazonaws.com",
        clock=frozen_clock,
    )
    client._session = mock_session
    return client
