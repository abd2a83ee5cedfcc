from typing import Literal

from pydantic import BaseModel


class StatusMessage(BaseModel):
    kind: Literal["success", "error"]
    text: str


class FormState(BaseModel):
    transcript: str
    prompt: str
    summary: str = ""
    edited_summary: str = ""
    email_recipients: str = ""
    email_subject: str
    status: StatusMessage | None = None
    is_generating: bool = False
    is_sending: bool = False
    summary_visible: bool = False  # editor section is shown
    email_visible: bool = False  # email section is shown
    can_generate: bool = False
    can_send: bool = False


class TextUpdate(BaseModel):
    text: str


class EmailUpdate(BaseModel):
    recipients: str | None = None
    subject: str | None = None
