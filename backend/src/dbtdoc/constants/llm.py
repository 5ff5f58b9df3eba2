"""LLM client configuration.

Default parameters for generation calls. The INI config can override the
model and sampling parameters; the endpoints are fixed.
"""

# =============================================================================
# Generation Defaults
# =============================================================================
# Low temperature keeps documentation factual. MAX_TOKENS bounds each answer;
# model and column write-ups are short markdown sections.

DEFAULT_MODEL = "gpt-3.5-turbo-instruct"
DEFAULT_TEMPERATURE = 0.2
MAX_TOKENS = 1000
REQUEST_TIMEOUT_SECONDS = 120.0

# =============================================================================
# Endpoints
# =============================================================================
# Without an API key, requests go through a free-tier proxy that identifies
# the caller by email address and answers in the completions response shape.

PROXY_URL = "https://api.textql.com/api/oai"
