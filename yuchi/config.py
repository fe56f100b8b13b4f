"""Configuration defaults for Yuchi."""

# ShapesAI API
DEFAULT_HOST = "https://api.shapes.inc"
AUTH_NONCE_URL = f"{DEFAULT_HOST}/auth/nonce"
AUTHORIZE_URL = "https://shapes.inc/authorize"

# Application id used by the user auth token flow
APP_ID = "3718bde3-c803-4bfc-b41b-3b5f0aa0ddd8"

# Models
MODEL_PREFIX = "shapesinc/"
DEFAULT_MODEL = "shapesinc/ariwa"

# Prompt sent when validating credentials or a shape
VALIDATION_PROMPT = "Test"

# Reply used when the follow-up request returns no content
NO_TOOL_RESPONSE = "No response from tool execution."

# Generated images are served from here
IMAGE_URL_PATTERN = r"https://files\.shapes\.inc/[^\s]+"

# Overrides the platform config directory when set
CONFIG_DIR_ENV = "YUCHI_CONFIG_DIR"
