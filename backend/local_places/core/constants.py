"""
Centralized constants for the service, tools and scheduler.

Change identifiers, limits or messages here instead of scattering literals across routes and tools.
"""

SERVICE_NAME = "local-places-mcp"
SERVICE_TITLE = "Local Places MCP Server"
SERVICE_VERSION = "1.0.0"
MCP_SERVER_NAME = "local-places-server"

# Scheduler job IDs (must match ids used in main.py add_job)
SESSION_PRUNE_JOB_ID = "chat_session_prune"

# Bounding-box approximation: kilometres per degree of latitude
KM_PER_DEGREE = 111.0
# Below this cos(latitude) the longitude window is unbounded (at or next to a pole)
MIN_COS_LATITUDE = 1e-6

# Default result caps
SEARCH_DEFAULT_LIMIT = 50
NEARBY_DEFAULT_LIMIT = 20
NAME_SEARCH_DEFAULT_LIMIT = 10

# Returned instead of an empty final answer from the model
FALLBACK_RESPONSE = (
    "I received the data but had trouble formulating a response. "
    "Please try rephrasing your question."
)

EXAMPLE_QUESTIONS = [
    "Find me a good coffee shop",
    "Show me all parks",
    "What are the best rated restaurants?",
    "Add a new cafe called The Bean Counter",
    "What are the statistics for gyms?",
    "Find bookstores with WiFi",
]
