import logging

import httpx

from services.config import FunctionsConfig
from services.errors import EmptyInput
from services.functions_client import post_function, require_config

logger = logging.getLogger("summarizer.email")

DEFAULT_SUBJECT = "Meeting Summary"


def parse_recipients(recipients: str) -> list[str]:
    """Split a comma-delimited address list. Addresses are not validated."""
    return [address.strip() for address in recipients.split(",")]


def validate_email_request(
    edited_summary: str, recipients: str, config: FunctionsConfig
) -> None:
    if not edited_summary.strip():
        raise EmptyInput("summary")
    if not recipients.strip():
        raise EmptyInput("recipients")
    require_config(config)


async def send_email(
    edited_summary: str,
    recipients: str,
    subject: str,
    config: FunctionsConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[str]:
    """Send the summary through the send-email function.

    Any 2xx status counts as delivered; the response body is ignored.
    Returns the list of addresses the request was sent to.
    """
    validate_email_request(edited_summary, recipients, config)
    to = parse_recipients(recipients)
    payload = {"to": to, "subject": subject, "summary": edited_summary}

    await post_function(config, "send-email", payload, transport=transport)
    logger.info("Summary emailed to %d recipient(s)", len(to))
    return to
