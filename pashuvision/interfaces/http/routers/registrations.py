from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from pashuvision.application.use_cases.health import (
    add_vaccination,
    delete_vaccination,
    suggest_vaccinations,
)
from pashuvision.application.use_cases.registrations import (
    get_registration,
    list_registrations,
    save_registration,
    update_registration,
)
from pashuvision.config.settings import Settings
from pashuvision.infrastructure.reports.pdf_generator import PDFGenerator
from pashuvision.interfaces.http.deps import get_ai_gateway, get_app_settings, get_uow
from pashuvision.interfaces.http.schemas.registrations import (
    RegistrationCreate,
    RegistrationListResponse,
    RegistrationResponse,
    RegistrationUpdate,
    VaccinationCreate,
    VaccinationSuggestionSchema,
    VaccinationSuggestionsResponse,
)

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.get("", response_model=RegistrationListResponse)
async def list_registrations_endpoint(
    search: str | None = Query(None, description="Matches id, owner, location or breed"),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    items = await list_registrations.execute(
        uow, search=search, seed_sample_data=settings.seed_sample_data
    )
    newest_first = sorted(items, key=lambda r: r.timestamp, reverse=True)
    return RegistrationListResponse(
        items=[RegistrationResponse.from_domain(r) for r in newest_first],
        total=len(newest_first),
    )


@router.post("", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def save_registration_endpoint(payload: RegistrationCreate, uow=Depends(get_uow)):
    """Submit the registration wizard, or save it as a draft."""
    saved = await save_registration.execute(
        uow,
        save_registration.SaveRegistrationInput(
            owner=payload.owner.to_domain(),
            animals=[a.to_domain() for a in payload.animals],
            status=payload.status,
            registration_id=payload.id,
            timestamp=payload.timestamp,
        ),
    )
    return RegistrationResponse.from_domain(saved)


@router.get("/{registration_id}", response_model=RegistrationResponse)
async def get_registration_endpoint(registration_id: str, uow=Depends(get_uow)):
    registration = await get_registration.execute(uow, registration_id)
    return RegistrationResponse.from_domain(registration)


@router.put("/{registration_id}", response_model=RegistrationResponse)
async def update_registration_endpoint(
    registration_id: str, payload: RegistrationUpdate, uow=Depends(get_uow)
):
    updated = await update_registration.execute(
        uow,
        registration_id,
        update_registration.UpdateRegistrationInput(
            owner=payload.owner.to_domain(),
            animals=[a.to_domain() for a in payload.animals],
            status=payload.status,
            timestamp=payload.timestamp,
        ),
    )
    return RegistrationResponse.from_domain(updated)


@router.post(
    "/{registration_id}/animals/{animal_id}/vaccinations",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_vaccination_endpoint(
    registration_id: str,
    animal_id: str,
    payload: VaccinationCreate,
    uow=Depends(get_uow),
):
    result = await add_vaccination.execute(
        uow,
        registration_id,
        animal_id,
        add_vaccination.AddVaccinationInput(
            vaccine_name=payload.vaccine_name,
            administered_date=payload.administered_date,
            due_date=payload.due_date,
            notes=payload.notes,
        ),
    )
    return RegistrationResponse.from_domain(result.registration)


@router.delete(
    "/{registration_id}/animals/{animal_id}/vaccinations/{vaccination_id}",
    response_model=RegistrationResponse,
)
async def delete_vaccination_endpoint(
    registration_id: str,
    animal_id: str,
    vaccination_id: str,
    uow=Depends(get_uow),
):
    saved = await delete_vaccination.execute(uow, registration_id, animal_id, vaccination_id)
    return RegistrationResponse.from_domain(saved)


@router.post(
    "/{registration_id}/animals/{animal_id}/vaccination-suggestions",
    response_model=VaccinationSuggestionsResponse,
)
async def suggest_vaccinations_endpoint(
    registration_id: str,
    animal_id: str,
    uow=Depends(get_uow),
    gateway=Depends(get_ai_gateway),
):
    schedule = await suggest_vaccinations.execute(uow, gateway, registration_id, animal_id)
    return VaccinationSuggestionsResponse(
        suggestions=[
            VaccinationSuggestionSchema(
                vaccine_name=s.vaccine_name, schedule=s.schedule, importance=s.importance
            )
            for s in schedule.suggestions
        ],
        error=schedule.error,
    )


@router.get("/{registration_id}/report.pdf")
async def registration_report_endpoint(registration_id: str, uow=Depends(get_uow)):
    registration = await get_registration.execute(uow, registration_id)
    content = PDFGenerator().registration_report(registration)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{registration.id}.pdf"'},
    )
