import logging

import httpx

from services.config import FunctionsConfig
from services.errors import EmptyInput, MalformedResponse
from services.functions_client import post_function, require_config

logger = logging.getLogger("summarizer.summary")

DEFAULT_PROMPT = "Summarize the key points and action items from this meeting"


def build_summary_payload(transcript: str, prompt: str) -> dict[str, str]:
    return {
        "transcript": transcript.strip(),
        "prompt": prompt.strip() or DEFAULT_PROMPT,
    }


def validate_summary_request(transcript: str, config: FunctionsConfig) -> None:
    """Check preconditions in order; raises before any network call."""
    if not transcript.strip():
        raise EmptyInput("transcript")
    require_config(config)


async def generate_summary(
    transcript: str,
    prompt: str,
    config: FunctionsConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Ask the summarize function for a summary of the transcript.

    Args:
        transcript: Raw transcript text; surrounding whitespace is dropped.
        prompt: Custom instructions; falls back to DEFAULT_PROMPT when blank.
        config: Base URL and anon key of the functions deployment.
        transport: Optional httpx transport, used by tests.

    Returns the non-empty summary string. Raises a SummarizerError subclass
    on any failure.
    """
    validate_summary_request(transcript, config)
    payload = build_summary_payload(transcript, prompt)
    logger.debug(
        "Summary payload: %d transcript chars, prompt=%r",
        len(payload["transcript"]),
        payload["prompt"],
    )

    response = await post_function(config, "summarize", payload, transport=transport)

    try:
        data = response.json()
    except ValueError as exc:
        raise MalformedResponse() from exc

    summary = data.get("summary") if isinstance(data, dict) else None
    if not isinstance(summary, str) or not summary:
        raise MalformedResponse()
    return summary
