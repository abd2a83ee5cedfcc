import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from models.schemas import FormState, TextUpdate
from services.summary_form import SummaryForm, get_form
from services.transcript_source import UnsupportedTranscriptFile, decode_transcript

logger = logging.getLogger("summarizer.transcript")

router = APIRouter()


@router.put("", response_model=FormState)
async def set_transcript(update: TextUpdate, form: SummaryForm = Depends(get_form)):
    """Replace the transcript with pasted text."""
    form.set_transcript(update.text)
    return form.snapshot()


@router.post("/upload", response_model=FormState)
async def upload_transcript(
    file: UploadFile = File(...), form: SummaryForm = Depends(get_form)
):
    """Replace the transcript with the contents of an uploaded .txt file."""
    content = await file.read()
    try:
        text = decode_transcript(content, file.content_type)
    except UnsupportedTranscriptFile as e:
        logger.info("Rejected transcript upload %s: %s", file.filename, e)
        return JSONResponse(
            status_code=415, content={"status": "error", "message": str(e)}
        )

    form.set_transcript(text)
    logger.info("Loaded transcript from %s (%d chars)", file.filename, len(text))
    return form.snapshot()
