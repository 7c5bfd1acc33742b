from google.oauth2.credentials import Credentials

from agentpanel.config import GMAIL_ENV_VARS, Settings
from agentpanel.exceptions import ConfigurationError

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


def get_gmail_credentials(settings: Settings) -> Credentials:
    """Build refresh-token credentials for Gmail from settings.

    No access token is stored; google-auth refreshes one on the first request.
    """
    if settings.missing(GMAIL_ENV_VARS):
        raise ConfigurationError(
            "Missing required Gmail environment variables. Ensure "
            f"{', '.join(GMAIL_ENV_VARS.values())} are set."
        )
    return Credentials(
        token=None,
        refresh_token=settings.google_refresh_token,
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        token_uri=GOOGLE_TOKEN_URI,
    )
