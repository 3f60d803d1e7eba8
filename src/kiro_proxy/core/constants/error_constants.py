"""Error types, machine codes and messages returned to clients."""

ERROR_TYPE_AUTHENTICATION = "authentication_error"
ERROR_TYPE_INVALID_REQUEST = "invalid_request_error"
ERROR_TYPE_API = "api_error"
ERROR_TYPE_SERVER = "server_error"

CODE_MISSING_AUTHORIZATION = "missing_authorization"
CODE_INVALID_AUTHORIZATION_FORMAT = "invalid_authorization_format"
CODE_INVALID_TOKEN = "invalid_token"
CODE_MISSING_API_KEY = "missing_api_key"
CODE_BACKEND_ERROR = "backend_error"
CODE_BACKEND_UNAVAILABLE = "backend_unavailable"
CODE_BACKEND_UNREACHABLE = "backend_unreachable"
CODE_INVALID_JSON = "invalid_json"
CODE_INVALID_REQUEST = "invalid_request"
CODE_TRANSLATION_FAILED = "translation_failed"

MISSING_AUTHORIZATION_MESSAGE = (
    "Missing Authorization header. Set your Kiro access token as the api_key "
    "of your OpenAI client."
)
INVALID_AUTHORIZATION_FORMAT_MESSAGE = (
    "Invalid Authorization header format. Make sure the api_key of your OpenAI "
    "client holds a valid Kiro access token."
)
INVALID_TOKEN_MESSAGE = (
    "Authentication failed. Check that the Kiro access token in api_key is "
    "correct and has not expired."
)
INVALID_TOKEN_DETAILS = (
    "Get a fresh access token from the Kiro IDE and use it as the api_key of "
    "your OpenAI client."
)
MISSING_API_KEY_MESSAGE = (
    "Missing API key. Set KIRO_ACCESS_TOKEN or provide an Authorization header."
)
BACKEND_ERROR_MESSAGE_TEMPLATE = "Kiro API error, status code: {status_code}"
BACKEND_UNAVAILABLE_MESSAGE = (
    "The Kiro backend could not be reached with any request format."
)
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"
