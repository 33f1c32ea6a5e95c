"""Charge endpoints (tenant-scoped)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.billing.api.dependencies import ChargeServiceDep, IntegrationChargeServiceDep
from src.billing.schemas.charge import (
    ChargeCreate,
    ChargeListQuery,
    ChargeRead,
    ChargeUpdate,
    MessageSummary,
    SituationItem,
    SituationSummary,
)
from src.billing.schemas.customer import CustomerSummary
from src.billing.schemas.pagination import PaginatedResponse
from src.billing.services.charge_service import ChargeWithCustomer, SituationEntry

router = APIRouter(prefix="/charges", tags=["charges"])

_NOT_FOUND = {404: {"description": "Charge not found"}}


def _charge_read(item: ChargeWithCustomer) -> ChargeRead:
    customer = CustomerSummary.model_validate(item.customer) if item.customer else None
    return ChargeRead.model_validate(item.charge).model_copy(update={"customer": customer})


def _situation_item(entry: SituationEntry) -> SituationItem:
    return SituationItem(
        id=entry.charge.id,
        amount=entry.charge.amount,
        due_date=entry.charge.due_date,
        status=entry.charge.status,
        customer=CustomerSummary.model_validate(entry.customer),
        messages=[MessageSummary.model_validate(m) for m in entry.messages],
    )


@router.post(
    "",
    response_model=ChargeRead,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Customer not found or inactive"}},
)
async def create_charge(data: ChargeCreate, service: ChargeServiceDep) -> ChargeRead:
    """Create a charge. It starts OVERDUE if the due date has already passed."""
    item = await service.create_charge(
        customer_id=data.customer_id,
        amount=data.amount,
        due_date=data.due_date,
        pix_qr_code=data.pix_qr_code,
        pix_copy_paste=data.pix_copy_paste,
        notes=data.notes,
    )
    return _charge_read(item)


@router.get("", response_model=PaginatedResponse[ChargeRead])
async def list_charges(
    query: Annotated[ChargeListQuery, Query()],
    service: ChargeServiceDep,
) -> PaginatedResponse[ChargeRead]:
    """List charges ordered by due date, optionally for a single month."""
    items, total = await service.list_charges(
        query.page,
        query.limit,
        status=query.status,
        customer_id=query.customer_id,
        month=query.month,
        year=query.year,
    )
    return PaginatedResponse[ChargeRead].build(
        [_charge_read(i) for i in items], query.page, query.limit, total
    )


@router.get("/due-today", response_model=list[ChargeRead])
async def list_due_today(service: ChargeServiceDep) -> list[ChargeRead]:
    """Open charges due today."""
    return [_charge_read(i) for i in await service.list_due_today()]


@router.get("/overdue", response_model=list[ChargeRead])
async def list_overdue(service: ChargeServiceDep) -> list[ChargeRead]:
    """Open charges past their due date."""
    return [_charge_read(i) for i in await service.list_overdue()]


@router.get(
    "/situation-summary",
    response_model=SituationSummary,
    responses={
        200: {
            "description": "Open charges grouped by due date",
            "content": {
                "application/json": {
                    "example": {
                        "upcoming": [],
                        "dueToday": [
                            {
                                "id": "0b5f8e1e-6a3c-4f7e-9b1d-2c8e4a6f1d3b",
                                "amount": 150.0,
                                "dueDate": "2025-01-15",
                                "status": "PENDING",
                                "customer": {
                                    "id": "5d2b7c1a-3e4f-4a6b-8c9d-0e1f2a3b4c5d",
                                    "name": "Maria Silva",
                                    "phone": "+55 11 98765-4321",
                                },
                                "messages": [],
                            }
                        ],
                        "overdue": [],
                    }
                }
            },
        },
    },
)
async def situation_summary(service: IntegrationChargeServiceDep) -> SituationSummary:
    """Open charges grouped as upcoming (next two days), due today and overdue.

    Accepts an integration token in place of a user session.
    """
    situation = await service.situation_summary()
    return SituationSummary(
        upcoming=[_situation_item(e) for e in situation.upcoming],
        due_today=[_situation_item(e) for e in situation.due_today],
        overdue=[_situation_item(e) for e in situation.overdue],
    )


@router.get("/{charge_id}", response_model=ChargeRead, responses=_NOT_FOUND)
async def get_charge(charge_id: UUID, service: ChargeServiceDep) -> ChargeRead:
    """Get a charge."""
    return _charge_read(await service.get_charge(charge_id))


@router.put("/{charge_id}", response_model=ChargeRead, responses=_NOT_FOUND)
async def update_charge(
    charge_id: UUID, data: ChargeUpdate, service: ChargeServiceDep
) -> ChargeRead:
    """Update a charge. Changing the due date re-derives the status unless paid."""
    return _charge_read(await service.update_charge(charge_id, data.model_dump(exclude_unset=True)))


@router.patch(
    "/{charge_id}/pay",
    response_model=ChargeRead,
    responses={**_NOT_FOUND, 400: {"description": "Charge already paid"}},
)
async def pay_charge(charge_id: UUID, service: ChargeServiceDep) -> ChargeRead:
    """Mark a charge as paid now."""
    return _charge_read(await service.mark_as_paid(charge_id))
