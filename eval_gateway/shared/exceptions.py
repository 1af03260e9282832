"""Custom exceptions for the evaluation client."""


class EvaluationClientError(Exception):
    """Base exception for failed calls to the evaluation service."""
    pass


class EvaluationTransportError(EvaluationClientError):
    """Exception raised when the service cannot be reached."""
    pass


class EvaluationStatusError(EvaluationClientError):
    """Exception raised when the service answers with a non-2xx status."""

    def __init__(self, status_code: int, path: str):
        super().__init__(f"{path} returned HTTP {status_code}")
        self.status_code = status_code
        self.path = path


class EvaluationResponseError(EvaluationClientError):
    """Exception raised when a response body has the wrong shape."""
    pass


class RetryExhaustedError(Exception):
    """Exception raised when every attempt of a retried call failed."""

    def __init__(self, attempts: int, last_error: BaseException):
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error
