class AWSError(Exception):
    """An error response returned by an AWS endpoint."""

    default_message = "Unknown error"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        error_code: str | None = None,
        request_id: str | None = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.status_code = status_code
        self.error_code = error_code
        self.request_id = request_id

    def __str__(self) -> str:
        if self.error_code and self.status_code:
            text = f"{self.error_code} ({self.status_code}): {self.message}"
        elif self.status_code:
            text = f"HTTP {self.status_code}: {self.message}"
        else:
            text = self.message

        if self.request_id:
            text += f" [request id: {self.request_id}]"
        return text


class AWSClientError(AWSError):
    pass


class AWSServerError(AWSError):
    pass


class _FixedCodeError(AWSClientError):
    status: int
    code: str

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        request_id: str | None = None,
    ):
        super().__init__(message, status_code or self.status, self.code, request_id)


class AWSNotFoundError(_FixedCodeError):
    status, code = 404, "NotFound"
    default_message = "The specified resource was not found"


class AWSAccessDeniedError(_FixedCodeError):
    status, code = 403, "AccessDenied"
    default_message = "Access denied"


class AWSInvalidRequestError(_FixedCodeError):
    status, code = 400, "InvalidRequest"
    default_message = "Invalid request"


class AWSThrottlingError(_FixedCodeError):
    status, code = 400, "Throttling"
    default_message = "Rate exceeded"
