import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import Request

from models.schemas import FormState, StatusMessage
from services import email_dispatch, summarizer
from services.config import FunctionsConfig
from services.errors import EmptyInput, NetworkUnreachable, ServerError, SummarizerError

logger = logging.getLogger("summarizer.form")

SUMMARY_OK = "Summary generated successfully!"
EMAIL_OK = "Email sent successfully!"
ENV_MISSING = "Environment variables missing! Check your .env file."


class SummaryForm:
    """State behind the single-page summarizer form.

    Holds the text inputs, the generated and edited summary, the two busy
    flags and the status slot. The two orchestrating methods never raise:
    every outcome ends up in ``status``.
    """

    def __init__(
        self,
        config: FunctionsConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.transport = transport
        self.transcript = ""
        self.prompt = summarizer.DEFAULT_PROMPT
        self.summary = ""
        self.edited_summary = ""
        self.email_recipients = ""
        self.email_subject = email_dispatch.DEFAULT_SUBJECT
        self.status: StatusMessage | None = None
        self.is_generating = False
        self.is_sending = False

        missing = config.missing()
        if missing:
            logger.warning("Missing environment variables: %s", ", ".join(missing))
            self.report_error(ENV_MISSING)

    # ---- Status reporter ----

    def report_success(self, text: str):
        self.status = StatusMessage(kind="success", text=text)

    def report_error(self, text: str):
        self.status = StatusMessage(kind="error", text=text)

    def clear_status(self):
        self.status = None

    # ---- Inputs ----

    def set_transcript(self, text: str):
        self.transcript = text

    def set_prompt(self, text: str):
        self.prompt = text

    def edit_summary(self, text: str):
        """Replace the editable copy. The generated summary is left as is."""
        if not self.summary:
            raise EmptyInput("summary")
        self.edited_summary = text

    def reset_edits(self):
        if not self.summary:
            raise EmptyInput("summary")
        self.edited_summary = self.summary

    def update_email(self, recipients: str | None = None, subject: str | None = None):
        if recipients is not None:
            self.email_recipients = recipients
        if subject is not None:
            self.email_subject = subject

    def snapshot(self) -> FormState:
        return FormState(
            transcript=self.transcript,
            prompt=self.prompt,
            summary=self.summary,
            edited_summary=self.edited_summary,
            email_recipients=self.email_recipients,
            email_subject=self.email_subject,
            status=self.status,
            is_generating=self.is_generating,
            is_sending=self.is_sending,
            summary_visible=bool(self.summary),
            email_visible=bool(self.summary),
            can_generate=not self.is_generating and bool(self.transcript.strip()),
            can_send=(
                not self.is_sending
                and bool(self.edited_summary.strip())
                and bool(self.email_recipients.strip())
            ),
        )

    # ---- Orchestrators ----

    @asynccontextmanager
    async def _busy(self, flag: str):
        setattr(self, flag, True)
        try:
            yield
        finally:
            setattr(self, flag, False)

    async def generate_summary(self) -> bool:
        """Request a summary of the current transcript. Returns True on success."""
        try:
            summarizer.validate_summary_request(self.transcript, self.config)
        except SummarizerError as e:
            self.report_error(e.message)
            return False

        self.clear_status()
        async with self._busy("is_generating"):
            try:
                summary = await summarizer.generate_summary(
                    self.transcript,
                    self.prompt,
                    self.config,
                    transport=self.transport,
                )
            except NetworkUnreachable as e:
                self.report_error(f"Error generating summary. {e.message}")
                return False
            except SummarizerError as e:
                logger.warning("Summary request failed: %s", e.message)
                self.report_error(f"Error generating summary. Details: {e.message}")
                return False
            except Exception as e:
                logger.exception("Unexpected failure while generating summary")
                self.report_error(f"Error generating summary. Details: {e}")
                return False

        self.summary = summary
        self.edited_summary = summary
        self.report_success(SUMMARY_OK)
        logger.info("Summary generated (%d chars)", len(summary))
        return True

    async def send_email(self) -> bool:
        """Email the edited summary to the current recipients. Returns True on success."""
        try:
            email_dispatch.validate_email_request(
                self.edited_summary, self.email_recipients, self.config
            )
        except SummarizerError as e:
            self.report_error(e.message)
            return False

        self.clear_status()
        async with self._busy("is_sending"):
            try:
                await email_dispatch.send_email(
                    self.edited_summary,
                    self.email_recipients,
                    self.email_subject,
                    self.config,
                    transport=self.transport,
                )
            except ServerError as e:
                self.report_error(
                    f"Error sending email: Failed to send email: {e.status} - {e.body}"
                )
                return False
            except SummarizerError as e:
                logger.warning("Email request failed: %s", e.message)
                self.report_error(f"Error sending email: {e.message}")
                return False
            except Exception as e:
                logger.exception("Unexpected failure while sending email")
                self.report_error(f"Error sending email: {e}")
                return False

        self.report_success(EMAIL_OK)
        # Subject and summary stay for a re-send to another list.
        self.email_recipients = ""
        return True


def get_form(request: Request) -> SummaryForm:
    """FastAPI dependency returning the app's form."""
    return request.app.state.form
