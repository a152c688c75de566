"""Internal constants shared across the library."""

BASE_URL = "https://public-api.wordpress.com"
API_PATH = "rest/v1.1"
USER_AGENT = "pyaccountsettings/1"

VALIDATE_USERNAME_ENDPOINT = "/me/username/validate/{username}"
CHANGE_USERNAME_ENDPOINT = "/me/username"

#: Error codes the REST API uses for a missing or rejected bearer token.
AUTHENTICATION_ERROR_CODES: frozenset[str] = frozenset({"authorization_required", "invalid_token", "unauthorized"})

#: Value of the ``action`` field sent with a username change. ``"none"`` keeps
#: existing sites on their current address.
DEFAULT_USERNAME_CHANGE_ACTION = "none"
