"""
Framework defaults
Fallbacks used when neither the environment nor the application settings
provide a value
"""

# ============================================================================
# APPLICATION DEFAULTS
# ============================================================================

DEFAULT_APP_NAME = 'cosy'
DEFAULT_APP_ENV = 'production'
DEFAULT_USER_DATA_PATH = '.cosy'

# ============================================================================
# NETWORK DEFAULTS
# ============================================================================

# HTTP transport
DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 8000
DEFAULT_DISPATCH_PATH = '/dispatch'

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_CHANNEL = 'app'
DEFAULT_LOG_FORMAT = 'text'
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5

# ============================================================================
# RATE LIMITING DEFAULTS
# ============================================================================

DEFAULT_RATE_LIMIT = 100  # requests
DEFAULT_RATE_LIMIT_WINDOW = 60  # seconds

# ============================================================================
# DEADLINE DEFAULTS
# ============================================================================

DEFAULT_DEADLINE = 30  # seconds
