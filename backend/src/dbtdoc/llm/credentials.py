"""Credential selection and dispatch into a generation capability."""

import os
from dataclasses import dataclass

from dbtdoc.config import Config
from dbtdoc.llm.client import LLMClient, ProxyClient, TextGenerator


class CredentialError(Exception):
    """Raised when no usable credential is available."""

    pass


@dataclass(frozen=True)
class ApiKey:
    """Provider API key sent as a bearer token."""

    key: str


@dataclass(frozen=True)
class UserEmail:
    """Email address identifying a free-tier proxy user."""

    email: str


Credential = ApiKey | UserEmail


def credential_from_env() -> Credential | None:
    """Pick a credential from OPENAI_API_KEY, then DBTDOC_EMAIL.

    Returns:
        The credential, or None when neither variable is set.
    """
    key = os.getenv("OPENAI_API_KEY")
    if key:
        return ApiKey(key)
    email = os.getenv("DBTDOC_EMAIL")
    if email:
        return UserEmail(email)
    return None


def create_generator(
    credential: Credential, config: Config, log_queries: bool = True
) -> TextGenerator:
    """Build the one generation capability used for the whole run.

    Args:
        credential: Selected credential.
        config: Run configuration (model, sampling, timeout, query log path).
        log_queries: Append calls to the project query log. Off for dry runs,
            which must not write inside the project.

    Returns:
        A client exposing ``async generate(prompt) -> str``.
    """
    log_path = config.llm_log_path if log_queries else None
    if isinstance(credential, ApiKey):
        return LLMClient(
            api_key=credential.key,
            model=config.llm.model,
            temperature=config.llm.temperature,
            max_tokens=config.llm.max_tokens,
            timeout=config.llm.request_timeout,
            log_path=log_path,
        )
    if isinstance(credential, UserEmail):
        return ProxyClient(
            email=credential.email,
            timeout=config.llm.request_timeout,
            log_path=log_path,
        )
    raise CredentialError(f"Unsupported credential: {credential!r}")
