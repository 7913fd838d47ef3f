import os
from dataclasses import dataclass, field
from typing import Self

from yarl import URL

from .encoding import query_parameters, query_parameters_all


@dataclass(frozen=True)
class Credentials:
    access_key: str
    secret_key: str = field(repr=False)
    session_token: str | None = field(default=None, repr=False)

    @classmethod
    def from_env(cls) -> Self:
        access_key = os.environ.get("AWS_ACCESS_KEY_ID")
        secret_key = os.environ.get("AWS_SECRET_ACCESS_KEY")

        if not access_key or not secret_key:
            raise ValueError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must be set"
            )

        return cls(access_key, secret_key, os.environ.get("AWS_SESSION_TOKEN") or None)


@dataclass(frozen=True)
class ServiceMetadata:
    endpoint_prefix: str
    signing_name: str | None = None

    @property
    def scope_name(self) -> str:
        """Service name used in the credential scope."""
        return self.signing_name or self.endpoint_prefix


@dataclass
class Request:
    """An outbound HTTP request, signed in place by the signer."""

    method: str
    url: URL
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self):
        self.url = URL(self.url)
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    @property
    def query_parameters(self) -> dict[str, str]:
        return query_parameters(self.url)

    @property
    def query_parameters_all(self) -> dict[str, list[str]]:
        return query_parameters_all(self.url)

    def get_header(self, name: str) -> str | None:
        lower_name = name.lower()
        for header_name, value in self.headers.items():
            if header_name.lower() == lower_name:
                return value
        return None

    def set_header(self, name: str, value: str) -> None:
        """Set a header, dropping any existing key that differs only in case."""
        lower_name = name.lower()
        for header_name in list(self.headers):
            if header_name.lower() == lower_name and header_name != name:
                del self.headers[header_name]
        self.headers[name] = value

    def pop_header(self, name: str) -> str | None:
        value = None
        lower_name = name.lower()
        for header_name in list(self.headers):
            if header_name.lower() == lower_name:
                value = self.headers.pop(header_name)
        return value
