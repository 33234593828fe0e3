"""
Prompt gateway: forwards a prompt to the Anthropic Messages API and returns the generated text.
One request, one response. No retries, no streaming.
"""
import logging
import os

import anthropic
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-5")
MAX_TOKENS = 4096

_client: anthropic.AsyncAnthropic | None = None


class GatewayError(Exception):
    """The generative backend could not produce a completion."""


def get_client() -> anthropic.AsyncAnthropic:
    # Key is checked and the client built on first use, so a missing key fails the call, not the import
    global _client
    if not ANTHROPIC_API_KEY or ANTHROPIC_API_KEY == "your-api-key-here":
        logger.error("ANTHROPIC_API_KEY is not configured")
        raise GatewayError("API key not configured")
    if _client is None:
        _client = anthropic.AsyncAnthropic(api_key=ANTHROPIC_API_KEY)
    return _client


async def generate_text(prompt: str) -> str:
    """Send the prompt verbatim as a single user message and return the reply text."""
    try:
        response = await get_client().messages.create(
            model=ANTHROPIC_MODEL,
            max_tokens=MAX_TOKENS,
            messages=[{"role": "user", "content": prompt}]
        )
    except anthropic.AnthropicError as e:
        logger.error("Anthropic API error: %s", e)
        raise GatewayError("Failed to generate content") from e

    if response.stop_reason == "max_tokens":
        # A cut-off reply would only surface later as unparseable JSON
        logger.error("Model response truncated at %d tokens", MAX_TOKENS)
        raise GatewayError("Model response was truncated")

    text = "".join(block.text for block in response.content if block.type == "text")
    logger.info("Model response: %s", text)
    return text
