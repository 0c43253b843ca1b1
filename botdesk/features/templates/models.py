"""Pydantic models for template previews."""

from pydantic import Field

from botdesk.core.schema import CamelModel


class PreviewVariableResponse(CamelModel):
    """Variable offered by the template editor."""

    key: str
    label: str
    sample: str
    placeholder: str


class TemplatePreviewRequest(CamelModel):
    """Template text to render. Sample values fill unbound variables."""

    content: str = Field(..., max_length=4000)
    bindings: dict[str, str] | None = None


class TemplatePreviewResponse(CamelModel):
    """Rendered preview with the placeholders the template uses."""

    preview: str
    variables: list[str]
    unknown_variables: list[str]
