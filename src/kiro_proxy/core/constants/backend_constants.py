"""Constants describing the Kiro backend."""

DEFAULT_BACKEND_URL = (
    "https://codewhisperer.us-east-1.amazonaws.com/generateAssistantResponse"
)
DEFAULT_MODEL = "claude-sonnet-4-20250514"
SUPPORTED_MODELS = (
    "claude-sonnet-4-20250514",
    "claude-3-7-sonnet-20250219",
)
MODEL_OWNER = "kiro"

USER_AGENT = "Kiro2API/1.0"
PASSTHROUGH_USER_AGENT = "Kiro2API-AnthropicProxy/1.0"
AMZ_TARGET = "CodeWhispererService.GenerateAssistantResponse"
AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"

DEFAULT_ATTEMPT_TIMEOUT = 10.0
DEFAULT_PASSTHROUGH_TIMEOUT = 30.0
DEFAULT_PORT = 8080

PASSTHROUGH_SERVICE_NAME = "kiro2api-anthropic-proxy"
