from typing import Any

from .base import _AWSClientBase
from .models import Request


class AWSClient(_AWSClientBase):
    def sign(
        self,
        method: str,
        path: str = "/",
        headers: dict[str, str] | None = None,
        params: dict[str, str | list[str]] | None = None,
        data: bytes | str | None = None,
    ) -> Request:
        """Build and sign a request without sending it."""
        request = self._build_request(method, path, headers, params, data)
        self._auth.sign_request(request)
        return request

    async def request(
        self,
        method: str,
        path: str = "/",
        headers: dict[str, str] | None = None,
        params: dict[str, str | list[str]] | None = None,
        data: bytes | str | None = None,
    ) -> dict[str, Any]:
        return await self._make_request(
            method, path=path, headers=headers, params=params, data=data
        )
