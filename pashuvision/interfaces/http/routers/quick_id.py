from __future__ import annotations

from fastapi import APIRouter, Depends

from pashuvision.application.interfaces.ai_gateway import AIGateway
from pashuvision.interfaces.http.deps import get_ai_gateway
from pashuvision.interfaces.http.routers.ai import identification_response, to_image_input
from pashuvision.interfaces.http.schemas.ai import QuickIdRequest
from pashuvision.interfaces.http.schemas.registrations import BreedIdentificationSchema

router = APIRouter(prefix="/quick-id", tags=["quick-id"])


@router.post("", response_model=BreedIdentificationSchema)
async def quick_id_endpoint(payload: QuickIdRequest, gateway: AIGateway = Depends(get_ai_gateway)):
    """Identify a single photo without storing anything."""
    result = await gateway.identify_breed([to_image_input(payload.image)])
    return identification_response(result)
