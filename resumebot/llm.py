"""Claude/Anthropic client factory."""

import anthropic

from resumebot.config import get_anthropic_api_key


def create_client(api_key: str | None = None, max_retries: int = 2) -> anthropic.Anthropic:
    """
    Create an Anthropic API client for one analysis run.

    The key is read from the environment unless given; a missing key raises
    EnvironmentError before any request is made.
    """
    return anthropic.Anthropic(
        api_key=api_key or get_anthropic_api_key(),
        max_retries=max_retries,
    )
