"""Constants for the Nural eval gateway."""

# Default configuration values
DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 3000
DEFAULT_EVALUATION_ORIGIN = "https://llm-evaluation-platform-main.onrender.com"
DEFAULT_GATEWAY_URL = "http://localhost:3000"
DEFAULT_PROXY_PREFIX = "/api/proxy"
DEFAULT_PROXY_TARGET = "http://localhost:5000"
DEFAULT_REQUEST_TIMEOUT = 30.0

# Aggregate score retry policy
DEFAULT_RETRY_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 1.0

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library log levels
LIBRARY_LOG_LEVELS = {
    "uvicorn": "WARNING",
    "uvicorn.access": "WARNING",
    "fastapi": "WARNING",
    "httpx": "WARNING"
}

# HTTP status codes
HTTP_BAD_GATEWAY = 502
HTTP_GATEWAY_TIMEOUT = 504

# Public paths served by the external evaluation service
EXPERIMENT_PATH = "/experiment/runOnePrompt"
AGGREGATE_SCORES_PATH = "/llm/aggregateScores"
HEALTH_PATH = "/health"

# Placeholder routes served by the gateway itself
MOCK_EXPERIMENT_PATH = "/api/experiment/runOnePrompt"
LEGACY_MOCK_EXPERIMENT_PATH = "/api/expirement/runOnePrompt"

# Methods accepted by rewrite and proxy routes
FORWARDED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# Hop-by-hop headers
REQUEST_HEADERS_TO_DROP = ("host", "content-length", "transfer-encoding", "connection")
RESPONSE_HEADERS_TO_DROP = ("content-length", "content-encoding", "transfer-encoding", "connection")

# Mock evaluation data: (model, response template, time in ms, score)
MOCK_EVALUATION_RESPONSES = (
    ("ModelA", "Processed: {prompt}", 150, 4.2),
    ("ModelB", "Alternative: {prompt}", 200, 3.8),
)
MOCK_AGGREGATE_SCORES = {
    "ModelA": 4.5,
    "ModelB": 3.9,
}

# Health check constants
HEALTH_STATUS_HEALTHY = "healthy"
HEALTH_STATUS_UNHEALTHY = "unhealthy"
HEALTH_STATUS_OK = "Ok"
HEALTH_STATUS_ERROR = "error"

# Score scale
MAX_SCORE = 5.0
SCORE_VARIANT_DEFAULT = "default"
SCORE_VARIANT_SECONDARY = "secondary"
SCORE_VARIANT_DESTRUCTIVE = "destructive"
PROGRESS_BAR_WIDTH = 20

# User-visible messages
SUBMIT_ERROR_MESSAGE = "Failed to submit query. Please try again."
AGGREGATE_SCORES_ERROR_MESSAGE = "Failed to load aggregate scores after multiple attempts."
NO_RESULTS_MESSAGE = "No results available."
LOADING_MESSAGE = "Processing..."

# FastAPI app constants
APP_TITLE = "Nural Eval Gateway"
APP_DESCRIPTION = "Gateway for the LLM evaluation service with mock endpoints and a reverse proxy"
APP_VERSION = "0.1.0"
