"""Message template API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from botdesk.core.schema import (
    MessageTemplate,
    MessageTemplateCreate,
    MessageTemplateUpdate,
)
from botdesk.core.storage import StorageProvider, get_storage

from .engine import PREVIEW_VARIABLES, extract_placeholders, sample_bindings, substitute
from .models import PreviewVariableResponse, TemplatePreviewRequest, TemplatePreviewResponse

router = APIRouter(prefix="/api/templates", tags=["templates"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[MessageTemplate])
async def list_templates(storage: StorageProvider = Depends(get_storage)):
    """List all message templates, newest first."""
    try:
        return await storage.get_message_templates()
    except Exception:
        logger.exception("Failed to fetch message templates")
        raise HTTPException(status_code=500, detail="Failed to fetch message templates")


@router.get("/variables", response_model=list[PreviewVariableResponse])
async def list_variables():
    """Variables the editor can insert, with their preview samples."""
    return [
        PreviewVariableResponse(
            key=variable.key,
            label=variable.label,
            sample=variable.sample,
            placeholder=f"{{{{{variable.key}}}}}",
        )
        for variable in PREVIEW_VARIABLES
    ]


@router.post("/preview", response_model=TemplatePreviewResponse)
async def preview_template(body: TemplatePreviewRequest):
    """
    Render a template with sample data.

    Explicit bindings override the sample values. Placeholders that are
    neither bound nor known variables stay in the preview as typed.
    """
    bindings = {**sample_bindings(), **(body.bindings or {})}
    variables = extract_placeholders(body.content)

    return TemplatePreviewResponse(
        preview=substitute(body.content, bindings),
        variables=variables,
        unknown_variables=[name for name in variables if name not in bindings],
    )


@router.get("/{template_id}", response_model=MessageTemplate)
async def get_template(template_id: str, storage: StorageProvider = Depends(get_storage)):
    """Get a single template."""
    try:
        template = await storage.get_message_template(template_id)
    except Exception:
        logger.exception("Failed to fetch template %s", template_id)
        raise HTTPException(status_code=500, detail="Failed to fetch template")

    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.post("", response_model=MessageTemplate, status_code=status.HTTP_201_CREATED)
async def create_template(
    body: MessageTemplateCreate,
    storage: StorageProvider = Depends(get_storage),
):
    """Create a template. Usage count starts at zero."""
    try:
        return await storage.create_message_template(body)
    except Exception:
        logger.exception("Failed to create template")
        raise HTTPException(status_code=500, detail="Failed to create template")


@router.put("/{template_id}", response_model=MessageTemplate)
async def update_template(
    template_id: str,
    body: MessageTemplateUpdate,
    storage: StorageProvider = Depends(get_storage),
):
    """Partially update a template."""
    try:
        template = await storage.update_message_template(template_id, body)
    except Exception:
        logger.exception("Failed to update template %s", template_id)
        raise HTTPException(status_code=500, detail="Failed to update template")

    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(template_id: str, storage: StorageProvider = Depends(get_storage)):
    """Delete a template."""
    try:
        deleted = await storage.delete_message_template(template_id)
    except Exception:
        logger.exception("Failed to delete template %s", template_id)
        raise HTTPException(status_code=500, detail="Failed to delete template")

    if not deleted:
        raise HTTPException(status_code=404, detail="Template not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
