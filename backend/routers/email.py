from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from models.schemas import EmailUpdate, FormState
from services.summary_form import SummaryForm, get_form

router = APIRouter()


@router.put("", response_model=FormState)
async def update_email(update: EmailUpdate, form: SummaryForm = Depends(get_form)):
    """Set the comma-separated recipients and/or the subject line."""
    form.update_email(recipients=update.recipients, subject=update.subject)
    return form.snapshot()


@router.post("/send", response_model=FormState)
async def send(form: SummaryForm = Depends(get_form)):
    if form.is_sending:
        return JSONResponse(
            status_code=409,
            content={"status": "error", "message": "An email is already being sent"},
        )
    await form.send_email()
    return form.snapshot()
