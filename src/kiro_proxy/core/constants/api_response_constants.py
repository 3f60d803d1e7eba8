"""Constants for API response values."""

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_AMZ_JSON = "application/x-amz-json-1.0"

# API response object types
OBJECT_TYPE_LIST = "list"
OBJECT_TYPE_MODEL = "model"
OBJECT_TYPE_CHAT_COMPLETION = "chat.completion"

# Identifier prefixes
CHAT_COMPLETION_ID_PREFIX = "chatcmpl-"
CONVERSATION_ID_PREFIX = "conv_"

# Usage is not reported by the backend; these are fixed placeholders.
PLACEHOLDER_PROMPT_TOKENS = 100
PLACEHOLDER_COMPLETION_TOKENS = 200
PLACEHOLDER_TOTAL_TOKENS = 300

HEALTH_STATUS_OK = "ok"
