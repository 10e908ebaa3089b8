from __future__ import annotations

from fastapi import APIRouter, Depends, status

from pashuvision.application.interfaces.ai_gateway import AIGateway, ImageInput
from pashuvision.domain.models.breed_identification import BreedIdentificationResult
from pashuvision.interfaces.http.deps import get_ai_gateway
from pashuvision.interfaces.http.schemas.ai import (
    BreedFactsResponse,
    BreedQuery,
    BreedSourceResponse,
    ChatMessageRequest,
    ChatMessageResponse,
    DetectDetailsRequest,
    DetectDetailsResponse,
    DetectedAnimalResponse,
    IdentifyBreedRequest,
    ImagePayload,
    SchemeInfoResponse,
    SchemeLookupResponse,
    StartChatRequest,
    StartChatResponse,
)
from pashuvision.interfaces.http.schemas.registrations import BreedIdentificationSchema

router = APIRouter(prefix="/ai", tags=["ai"])


def to_image_input(image: ImagePayload) -> ImageInput:
    return ImageInput(mime_type=image.mime_type, data=image.data)


def identification_response(result: BreedIdentificationResult) -> BreedIdentificationSchema:
    return BreedIdentificationSchema.model_validate(result.to_dict())


@router.post("/identify-breed", response_model=BreedIdentificationSchema)
async def identify_breed_endpoint(
    payload: IdentifyBreedRequest, gateway: AIGateway = Depends(get_ai_gateway)
):
    """Identify species and breed from one or more photos of the same animal."""
    result = await gateway.identify_breed([to_image_input(i) for i in payload.images])
    return identification_response(result)


@router.post("/detect-details", response_model=DetectDetailsResponse)
async def detect_details_endpoint(
    payload: DetectDetailsRequest, gateway: AIGateway = Depends(get_ai_gateway)
):
    result = await gateway.detect_animal_details(to_image_input(payload.image))
    return DetectDetailsResponse(
        error=result.error,
        animals=[
            DetectedAnimalResponse(species=a.species, sex=a.sex, sex_confidence=a.sex_confidence)
            for a in result.animals
        ],
    )


@router.post("/breed-facts", response_model=BreedFactsResponse)
async def breed_facts_endpoint(payload: BreedQuery, gateway: AIGateway = Depends(get_ai_gateway)):
    result = await gateway.get_breed_facts(payload.breed_name, payload.species)
    return BreedFactsResponse(
        facts=result.facts,
        sources=[BreedSourceResponse(uri=s.uri, title=s.title) for s in result.sources],
        error=result.error,
    )


@router.post("/schemes", response_model=SchemeLookupResponse)
async def schemes_endpoint(payload: BreedQuery, gateway: AIGateway = Depends(get_ai_gateway)):
    result = await gateway.get_scheme_info(payload.breed_name, payload.species)
    return SchemeLookupResponse(
        schemes=[
            SchemeInfoResponse(
                scheme_name=s.scheme_name,
                issuing_body=s.issuing_body,
                description=s.description,
                eligibility=s.eligibility,
                health_check_required=s.health_check_required,
                health_check_frequency=s.health_check_frequency,
            )
            for s in result.schemes
        ],
        error=result.error,
    )


@router.post(
    "/chat/sessions", response_model=StartChatResponse, status_code=status.HTTP_201_CREATED
)
async def start_chat_endpoint(
    payload: StartChatRequest, gateway: AIGateway = Depends(get_ai_gateway)
):
    """Open a breed-focused veterinary assistant conversation."""
    return StartChatResponse(session_id=gateway.start_breed_chat(payload.breed_name))


@router.post("/chat/sessions/{session_id}/messages", response_model=ChatMessageResponse)
async def send_chat_message_endpoint(
    session_id: str,
    payload: ChatMessageRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    reply = await gateway.send_chat_message(session_id, payload.message)
    return ChatMessageResponse(reply=reply)


@router.post("/chat/general", response_model=ChatMessageResponse)
async def general_chat_endpoint(
    payload: ChatMessageRequest, gateway: AIGateway = Depends(get_ai_gateway)
):
    """Talk to the general livestock and app assistant."""
    reply = await gateway.send_general_message(payload.message)
    return ChatMessageResponse(reply=reply)
