"""RFC 3986 encoding and canonical query/path construction for SigV4."""

import string
from collections.abc import Iterable, Mapping

from yarl import URL

# Unreserved bytes from RFC 3986, section 2.3.
_UNRESERVED = frozenset((string.ascii_letters + string.digits + "-._~").encode())


def encode_rfc3986(value: str) -> str:
    """Percent-encode every byte of the UTF-8 form of ``value``.

    Only the unreserved bytes ``A-Z a-z 0-9 - . _ ~`` are left as they are,
    everything else becomes ``%XX`` with uppercase hex digits. The whole
    string is encoded to bytes first, so a multi-byte character always
    yields its complete percent sequence.
    """
    return "".join(
        chr(byte) if byte in _UNRESERVED else f"%{byte:02X}"
        for byte in value.encode("utf-8")
    )


def canonical_query_parameters(params: Mapping[str, str]) -> str:
    """Canonical query string for parameters with one value per key."""
    if not params:
        return ""

    return "&".join(
        f"{encode_rfc3986(key)}={encode_rfc3986(params[key])}"
        for key in sorted(params)
    )


def canonical_query_parameters_all(params: Mapping[str, Iterable[str]]) -> str:
    """Canonical query string for parameters that may repeat.

    Repeated keys are ordered by value, so ``a=10`` comes before ``a=2``.
    """
    if not params:
        return ""

    pairs = [(key, value) for key, values in params.items() for value in values]
    pairs.sort()

    return "&".join(
        f"{encode_rfc3986(key)}={encode_rfc3986(value)}" for key, value in pairs
    )


def encode_uri_path(path: str) -> str:
    """Encode each ``/``-separated segment of ``path``, keeping the slashes."""
    if not path:
        return "/"

    return "/".join(encode_rfc3986(segment) for segment in path.split("/"))


def query_parameters(url: URL) -> dict[str, str]:
    # the last value wins for repeated keys
    return {key: value for key, value in url.query.items()}


def query_parameters_all(url: URL) -> dict[str, list[str]]:
    params: dict[str, list[str]] = {}
    for key, value in url.query.items():
        params.setdefault(key, []).append(value)
    return params
