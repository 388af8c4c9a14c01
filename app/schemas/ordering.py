"""Question ordering API schemas."""

from pydantic import BaseModel, Field


class NormalizeOrderResponse(BaseModel):
    """Response for POST /templates/{template_id}/normalize-question-order."""

    ok: bool = True
    updated: int = Field(..., ge=0, description="Questions whose order changed")
