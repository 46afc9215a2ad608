"""Custom exceptions for Feedback Analytics."""


class FeedbackAnalyticsError(Exception):
    """Base exception for all application errors."""

    pass


# Configuration Errors
class ConfigurationError(FeedbackAnalyticsError):
    """Configuration-related errors."""

    pass


class MissingCredentialsError(ConfigurationError):
    """Missing required credentials."""

    pass


# Cloudflare API Errors
class CloudflareAPIError(FeedbackAnalyticsError):
    """Base for Cloudflare API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class CloudflareAuthenticationError(CloudflareAPIError):
    """Authentication failed (401)."""

    def __init__(self, message: str = "Cloudflare authentication failed"):
        super().__init__(message, status_code=401)


class CloudflarePermissionError(CloudflareAPIError):
    """Permission denied (403)."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, status_code=403)


class CloudflareNotFoundError(CloudflareAPIError):
    """Model or index not found (404)."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class CloudflareRateLimitError(CloudflareAPIError):
    """Rate limit exceeded (429)."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int | None = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class WorkersAIError(CloudflareAPIError):
    """Workers AI returned an unusable response."""

    pass


class VectorizeError(CloudflareAPIError):
    """Vectorize returned an unusable response."""

    pass


# Validation Errors
class ValidationError(FeedbackAnalyticsError):
    """Request data validation errors."""

    pass
