"""AWS Signature Version 4 request signing."""

import datetime as dt
import hashlib
import hmac
import logging
from collections.abc import Callable, Mapping

from .encoding import canonical_query_parameters_all, encode_uri_path
from .models import Credentials, Request, ServiceMetadata

log = logging.getLogger(__name__)

AWS4_HMAC_SHA256 = "AWS4-HMAC-SHA256"
AWS4_REQUEST = "aws4_request"

Clock = Callable[[], dt.datetime]


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def sha256_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def hmac_sha256(key: bytes, data: str) -> bytes:
    return hmac.new(key, data.encode("utf-8"), hashlib.sha256).digest()


def format_timestamp(now: dt.datetime) -> str:
    """Format ``now`` as ``YYYYMMDDTHHMMSSZ``; naive datetimes are taken as UTC."""
    if now.tzinfo is not None:
        now = now.astimezone(dt.UTC)
    return now.strftime("%Y%m%dT%H%M%SZ")


def canonical_headers(headers: Mapping[str, str]) -> list[str]:
    return sorted(f"{name.lower()}:{value.strip()}" for name, value in headers.items())


def signed_header_names(headers: Mapping[str, str]) -> str:
    return ";".join(sorted(name.lower() for name in headers))


def get_signature_key(secret_key: str, credential_scope: list[str]) -> bytes:
    """Derive the signing key by chaining HMACs over the scope components."""
    key = f"AWS4{secret_key}".encode("utf-8")
    for component in credential_scope:
        key = hmac_sha256(key, component)
    return key


def create_canonical_request(
    method: str,
    canonical_uri: str,
    canonical_query: str,
    headers: Mapping[str, str],
    payload_hash: str,
) -> str:
    return "\n".join(
        [
            method.upper(),
            canonical_uri,
            canonical_query,
            *canonical_headers(headers),
            "",
            signed_header_names(headers),
            payload_hash,
        ]
    )


def create_string_to_sign(
    timestamp: str, credential_scope: list[str], canonical_request: str
) -> str:
    return "\n".join(
        [
            AWS4_HMAC_SHA256,
            timestamp,
            "/".join(credential_scope),
            sha256_hash(canonical_request.encode("utf-8")),
        ]
    )


class AWSSignatureV4:
    def __init__(
        self,
        credentials: Credentials,
        region: str,
        service: ServiceMetadata,
        clock: Clock | None = None,
    ):
        self.credentials = credentials
        self.region = region
        self.service = service
        self.clock = clock or utc_now

    def credential_scope(self, date_stamp: str) -> list[str]:
        return [date_stamp, self.region, self.service.scope_name, AWS4_REQUEST]

    def canonical_request(self, request: Request, payload_hash: str) -> str:
        return create_canonical_request(
            method=request.method,
            # raw_path is already percent-encoded and gets encoded once more
            canonical_uri=encode_uri_path(request.url.raw_path),
            canonical_query=canonical_query_parameters_all(
                request.query_parameters_all
            ),
            headers=request.headers,
            payload_hash=payload_hash,
        )

    def prepare_request(self, request: Request) -> tuple[str, str]:
        """Set the headers that take part in the signature.

        Sets ``X-Amz-Date``, ``Host``, ``x-amz-content-sha256`` (unless the
        caller already supplied one) and ``X-Amz-Security-Token`` (when the
        credentials carry a session token). Returns the timestamp and the
        payload hash.
        """
        timestamp = format_timestamp(self.clock())

        # a previous signature must not end up in the signed headers
        request.pop_header("Authorization")

        request.set_header("X-Amz-Date", timestamp)
        request.set_header("Host", request.url.host)

        payload_hash = sha256_hash(request.body)
        if request.get_header("x-amz-content-sha256") is None:
            request.set_header("x-amz-content-sha256", payload_hash)

        if self.credentials.session_token is not None:
            request.set_header("X-Amz-Security-Token", self.credentials.session_token)

        return timestamp, payload_hash

    def sign_request(self, request: Request) -> None:
        """Add the SigV4 authentication headers to ``request`` in place."""
        timestamp, payload_hash = self.prepare_request(request)
        date_stamp = timestamp[:8]

        canonical_request = self.canonical_request(request, payload_hash)
        log.debug("Canonical request:\n%s", canonical_request)

        credential_scope = self.credential_scope(date_stamp)
        string_to_sign = create_string_to_sign(
            timestamp, credential_scope, canonical_request
        )
        log.debug("String to sign:\n%s", string_to_sign)

        signing_key = get_signature_key(self.credentials.secret_key, credential_scope)
        signature = hmac.new(
            signing_key,
            string_to_sign.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

        authorization_header = (
            f"{AWS4_HMAC_SHA256} "
            f"Credential={self.credentials.access_key}/{'/'.join(credential_scope)}, "
            f"SignedHeaders={signed_header_names(request.headers)}, "
            f"Signature={signature}"
        )
        request.set_header("Authorization", authorization_header)


def sign_aws4_hmac_sha256(
    request: Request,
    service: ServiceMetadata,
    region: str,
    credentials: Credentials,
    clock: Clock | None = None,
) -> None:
    AWSSignatureV4(credentials, region, service, clock).sign_request(request)
