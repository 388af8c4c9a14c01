"""Audit template maintenance API: question order normalization.

Runs with the caller's own store access; the store's row rules decide
which sections and questions the caller can see and update.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import get_question_order_normalizer
from app.application.services.question_order_normalizer import QuestionOrderNormalizer
from app.core.limiter import limit_writes
from app.schemas.ordering import NormalizeOrderResponse

router = APIRouter()


@router.post(
    "/{template_id}/normalize-question-order",
    response_model=NormalizeOrderResponse,
)
@limit_writes
async def normalize_question_order(
    request: Request,
    template_id: str,
    normalizer: Annotated[
        QuestionOrderNormalizer, Depends(get_question_order_normalizer)
    ],
) -> NormalizeOrderResponse:
    """Re-sequence questions of every section of the template to 1..N."""
    updated = await normalizer.normalize_template(template_id)
    return NormalizeOrderResponse(updated=updated)
