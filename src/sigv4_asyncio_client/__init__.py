"""AWS Signature Version 4 signing with a minimal asyncio client."""

__version__ = "0.1.0"

from .auth import AWSSignatureV4, sign_aws4_hmac_sha256
from .client import AWSClient
from .encoding import (
    canonical_query_parameters,
    canonical_query_parameters_all,
    encode_rfc3986,
    encode_uri_path,
)
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

__all__ = [
    "AWSClient",
    "AWSSignatureV4",
    "sign_aws4_hmac_sha256",
    "Credentials",
    "Request",
    "ServiceMetadata",
    "encode_rfc3986",
    "encode_uri_path",
    "canonical_query_parameters",
    "canonical_query_parameters_all",
    "AWSError",
    "AWSClientError",
    "AWSServerError",
    "AWSNotFoundError",
    "AWSAccessDeniedError",
    "AWSInvalidRequestError",
    "AWSThrottlingError",
]
