import pytest
from yarl import URL

from sigv4_asyncio_client.models import Credentials, Request, ServiceMetadata


def test_request_coerces_url_and_body():
    request = Request("GET", "https://example.amazonaws.com/path?a=1", body="ü")

    assert isinstance(request.url, URL)
    assert request.url.host == "example.amazonaws.com"
    assert request.body == b"\xc3\xbc"
    assert request.headers == {}


def test_request_query_views():
    request = Request("GET", URL("https://example.amazonaws.com/?a=2&b=1&a=1"))

    assert request.query_parameters_all == {"a": ["2", "1"], "b": ["1"]}
    assert request.query_parameters == {"a": "1", "b": "1"}


def test_request_header_helpers_are_case_insensitive():
    request = Request(
        "GET", URL("https://example.amazonaws.com/"), headers={"Content-Type": "a"}
    )

    assert request.get_header("content-type") == "a"
    assert request.get_header("X-Missing") is None

    request.set_header("CONTENT-TYPE", "b")
    assert request.headers == {"CONTENT-TYPE": "b"}

    assert request.pop_header("content-type") == "b"
    assert request.headers == {}
    assert request.pop_header("content-type") is None


def test_requests_do_not_share_headers():
    first = Request("GET", URL("https://example.amazonaws.com/"))
    second = Request("GET", URL("https://example.amazonaws.com/"))

    first.set_header("Host", "example.amazonaws.com")

    assert second.headers == {}


def test_service_metadata_scope_name():
    assert ServiceMetadata("s3").scope_name == "s3"
    assert ServiceMetadata("runtime.lex", "lex").scope_name == "lex"


def test_credentials_repr_hides_secrets():
    credentials = Credentials("AKIDEXAMPLE", "very-secret", "session-token")

    assert "AKIDEXAMPLE" in repr(credentials)
    assert "very-secret" not in repr(credentials)
    assert "session-token" not in repr(credentials)


def test_credentials_from_env(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "env-key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "env-secret")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "env-token")

    credentials = Credentials.from_env()

    assert credentials == Credentials("env-key", "env-secret", "env-token")


def test_credentials_from_env_without_session_token(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "env-key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "env-secret")
    monkeypatch.delenv("AWS_SESSION_TOKEN", raising=False)

    assert Credentials.from_env().session_token is None


def test_credentials_from_env_missing(monkeypatch):
    monkeypatch.delenv("AWS_ACCESS_KEY_ID", raising=False)
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "env-secret")

    with pytest.raises(ValueError, match="AWS_ACCESS_KEY_ID"):
        Credentials.from_env()
