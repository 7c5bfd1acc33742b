class AgentError(Exception):
    """Base class for errors surfaced to panel callers."""


class RequestValidationFailed(AgentError):
    """Raised when an action name or payload fails validation."""


class ConfigurationError(AgentError):
    """Raised when required environment variables are missing."""


class IntegrationError(AgentError):
    """Raised when an external API call fails."""


class AuthenticationError(IntegrationError):
    """Raised when external credentials are rejected."""


class RateLimitError(IntegrationError):
    """Raised when an external API rate limit is hit."""
