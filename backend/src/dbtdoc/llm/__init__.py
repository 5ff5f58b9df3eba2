"""Text-generation capability."""

from dbtdoc.llm.client import (
    GenerationAuthenticationError,
    GenerationConnectionError,
    GenerationError,
    GenerationRateLimitError,
    GenerationResponseError,
    LLMClient,
    ProxyClient,
    TextGenerator,
)
from dbtdoc.llm.credentials import (
    ApiKey,
    Credential,
    CredentialError,
    UserEmail,
    create_generator,
    credential_from_env,
)

__all__ = [
    "ApiKey",
    "Credential",
    "CredentialError",
    "GenerationAuthenticationError",
    "GenerationConnectionError",
    "GenerationError",
    "GenerationRateLimitError",
    "GenerationResponseError",
    "LLMClient",
    "ProxyClient",
    "TextGenerator",
    "UserEmail",
    "create_generator",
    "credential_from_env",
]
