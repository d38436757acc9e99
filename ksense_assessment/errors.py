class AssessmentError(Exception):
    pass


class ConfigError(AssessmentError):
    pass


class TransportError(AssessmentError):
    def __init__(self, message, url=None):
        super().__init__(message)
        self.url = url


class FatalHTTPError(TransportError):
    """Non-retryable HTTP status. Raised on the first occurrence."""

    def __init__(self, status, body, url=None):
        super().__init__(f"HTTP {status} from {url}. Body: {body}", url=url)
        self.status = status
        self.body = body


class ExhaustedRetries(TransportError):
    """Every attempt allowed by the retry policy failed.

    ``status`` and ``body`` describe the last HTTP response when the final
    failure was a retryable status; both are None when it was a network or
    decoding error (see ``__cause__``).
    """

    def __init__(self, url, attempts, status=None, body=None, cause=None):
        if status is not None:
            message = f"HTTP {status} from {url} after {attempts} attempts. Body: {body}"
        else:
            message = f"Request to {url} failed after {attempts} attempts: {cause}"
        super().__init__(message, url=url)
        self.attempts = attempts
        self.status = status
        self.body = body
