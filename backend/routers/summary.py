from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from models.schemas import FormState, TextUpdate
from services.errors import EmptyInput
from services.summary_form import SummaryForm, get_form

router = APIRouter()


@router.put("/prompt", response_model=FormState)
async def set_prompt(update: TextUpdate, form: SummaryForm = Depends(get_form)):
    form.set_prompt(update.text)
    return form.snapshot()


@router.post("/generate", response_model=FormState)
async def generate(form: SummaryForm = Depends(get_form)):
    # Stands in for the disabled "Generate Summary" button.
    if form.is_generating:
        return JSONResponse(
            status_code=409,
            content={"status": "error", "message": "A summary is already being generated"},
        )
    await form.generate_summary()
    return form.snapshot()


@router.put("", response_model=FormState)
async def edit_summary(update: TextUpdate, form: SummaryForm = Depends(get_form)):
    """Edit the copy of the summary that will be emailed."""
    try:
        form.edit_summary(update.text)
    except EmptyInput as e:
        return JSONResponse(
            status_code=409, content={"status": "error", "message": e.message}
        )
    return form.snapshot()


@router.post("/reset", response_model=FormState)
async def reset_summary(form: SummaryForm = Depends(get_form)):
    """Discard edits and go back to the generated summary."""
    try:
        form.reset_edits()
    except EmptyInput as e:
        return JSONResponse(
            status_code=409, content={"status": "error", "message": e.message}
        )
    return form.snapshot()
