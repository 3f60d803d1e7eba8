"""Constants module for the Kiro proxy.

Collects the constants used throughout the application and tests behind a
single import point.
"""

from .api_response_constants import *  # noqa: F403
from .backend_constants import *  # noqa: F403
from .error_constants import *  # noqa: F403
