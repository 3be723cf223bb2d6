from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from ..consent.store import ConsentTokenStore, get_consent_store
from .exceptions import InvalidApplicationId
from .handlers import dispatch
from .responses import ResponseEnvelope
from .types import RequestEnvelope

router = APIRouter(tags=["skill"])

ConsentStore = Annotated[ConsentTokenStore, Depends(get_consent_store)]


@router.post(
    "/alexa",
    response_model=ResponseEnvelope,
    response_model_exclude_none=True,
)
async def alexa_webhook(
    envelope: RequestEnvelope, store: ConsentStore
) -> ResponseEnvelope:
    """
    Endpoint for the skill, configured as the HTTPS endpoint in the Alexa
    developer console.
    """
    try:
        return await dispatch(envelope, store=store)
    except InvalidApplicationId as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
