import json
import logging
import pathlib
import xml.etree.ElementTree as ET
from typing import Any, Self

import aiohttp
from yarl import URL

from .auth import AWSSignatureV4, Clock
from .config import load_aws_profile
from .exceptions import (
    AWSAccessDeniedError,
    AWSClientError,
    AWSError,
    AWSInvalidRequestError,
    AWSNotFoundError,
    AWSServerError,
    AWSThrottlingError,
)
from .models import Credentials, Request, ServiceMetadata

log = logging.getLogger(__name__)

_NOT_FOUND_CODES = {
    "NotFound",
    "NoSuchKey",
    "NoSuchBucket",
    "ResourceNotFoundException",
}
_ACCESS_DENIED_CODES = {"AccessDenied", "AccessDeniedException"}
_THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "TooManyRequestsException",
    "RequestLimitExceeded",
}


def default_endpoint_url(service: ServiceMetadata, region: str) -> URL:
    return URL(f"https://{service.endpoint_prefix}.{region}.amazonaws.com")


def _find_xml_text(root: ET.Element, name: str) -> str | None:
    # error documents may be namespaced and nested in <ErrorResponse>
    for element in root.iter():
        if element.tag == name or element.tag.endswith("}" + name):
            return element.text
    return None


def parse_error_body(response_text: str) -> tuple[str, str]:
    """Extract ``(error_code, message)`` from a JSON or XML error body."""
    text = response_text.strip()

    if text.startswith("{"):
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            return "Unknown", response_text or "Unknown error"
        code = data.get("__type") or data.get("code") or data.get("Code") or "Unknown"
        message = data.get("message") or data.get("Message") or "Unknown error"
        # "com.amazon.coral.service#ThrottlingException" -> "ThrottlingException"
        return code.rsplit("#", 1)[-1], message

    try:
        root = ET.fromstring(text)
    except ET.ParseError:
        return "Unknown", response_text or "Unknown error"

    code = _find_xml_text(root, "Code") or "Unknown"
    message = _find_xml_text(root, "Message") or "Unknown error"
    return code, message


def parse_request_id(response_text: str) -> str | None:
    try:
        root = ET.fromstring(response_text.strip())
    except ET.ParseError:
        return None
    # S3 spells it RequestId, EC2 RequestID
    return _find_xml_text(root, "RequestId") or _find_xml_text(root, "RequestID")


class _AWSClientBase:
    def __init__(
        self,
        credentials: Credentials,
        region: str,
        service: ServiceMetadata | str,
        endpoint_url: URL | str | None = None,
        clock: Clock | None = None,
    ):
        if isinstance(service, str):
            service = ServiceMetadata(service)

        self.credentials = credentials
        self.region = region
        self.service = service
        if endpoint_url is None:
            self.endpoint_url = default_endpoint_url(service, region)
        else:
            self.endpoint_url = URL(endpoint_url)

        self._auth = AWSSignatureV4(credentials, region, service, clock)
        self._session: aiohttp.ClientSession | None = None

    @classmethod
    def from_aws_config(
        cls,
        service: ServiceMetadata | str,
        profile_name: str = "default",
        config_path: str | pathlib.Path | None = None,
        credentials_path: str | pathlib.Path | None = None,
    ) -> Self:
        profile = load_aws_profile(profile_name, config_path, credentials_path)
        return cls(
            profile.credentials, profile.region, service, profile.endpoint_url
        )

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self):
        if self._session is None:
            self._session = aiohttp.ClientSession()

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    def _parse_error_response(
        self, status: int, response_text: str, request_id: str | None = None
    ) -> AWSError:
        error_code, message = parse_error_body(response_text)
        request_id = request_id or parse_request_id(response_text)

        if status == 404 or error_code in _NOT_FOUND_CODES:
            return AWSNotFoundError(message, request_id=request_id)
        elif status == 403 or error_code in _ACCESS_DENIED_CODES:
            return AWSAccessDeniedError(message, request_id=request_id)
        elif status == 429 or error_code in _THROTTLING_CODES:
            return AWSThrottlingError(message, status, request_id)
        elif error_code == "InvalidRequest":
            return AWSInvalidRequestError(message, request_id=request_id)
        elif 400 <= status < 500:
            return AWSClientError(message, status, error_code, request_id)
        else:
            return AWSServerError(message, status, error_code, request_id)

    def _build_request(
        self,
        method: str,
        path: str = "/",
        headers: dict[str, str] | None = None,
        params: dict[str, str | list[str]] | None = None,
        data: bytes | str | None = None,
    ) -> Request:
        url = self.endpoint_url
        if path.strip("/"):
            url = url.with_path(path if path.startswith("/") else f"/{path}")
        if params:
            url = url.with_query(params)

        return Request(
            method=method.upper(),
            url=url,
            headers=headers.copy() if headers else {},
            body=data or b"",
        )

    async def _make_request(
        self,
        method: str,
        path: str = "/",
        headers: dict[str, str] | None = None,
        params: dict[str, str | list[str]] | None = None,
        data: bytes | str | None = None,
    ) -> dict[str, Any]:
        await self._ensure_session()

        request = self._build_request(method, path, headers, params, data)
        self._auth.sign_request(request)

        log.debug("%s %s", request.method, request.url)
        async with self._session.request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            data=request.body or None,
        ) as response:
            body = await response.read()

            if response.status >= 400:
                raise self._parse_error_response(
                    response.status,
                    body.decode("utf-8", errors="replace"),
                    response.headers.get("x-amzn-RequestId")
                    or response.headers.get("x-amz-request-id"),
                )

            return {
                "status": response.status,
                "headers": dict(response.headers),
                "body": body,
            }
