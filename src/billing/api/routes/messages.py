"""Message endpoints (tenant-scoped).

Creating and updating messages also accepts the tenant's integration token, so
the messaging integration can log what it sends.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.billing.api.dependencies import IntegrationMessageServiceDep, MessageServiceDep
from src.billing.schemas.customer import CustomerSummary
from src.billing.schemas.message import MessageCreate, MessageListQuery, MessageRead, MessageUpdate
from src.billing.schemas.pagination import PaginatedResponse
from src.billing.services.message_service import MessageWithCustomer

router = APIRouter(prefix="/messages", tags=["messages"])

_NOT_FOUND = {404: {"description": "Message not found"}}


def _message_read(item: MessageWithCustomer) -> MessageRead:
    customer = CustomerSummary.model_validate(item.customer) if item.customer else None
    return MessageRead.model_validate(item.message).model_copy(update={"customer": customer})


@router.post(
    "",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Charge does not belong to the customer"},
        404: {"description": "Customer not found or inactive"},
    },
)
async def create_message(data: MessageCreate, service: IntegrationMessageServiceDep) -> MessageRead:
    """Record a message.

    ``scheduledAt`` accepts ISO 8601 or ``dd/MM/yyyy HH:mm:ss``. Charge statuses
    sent as ``status`` are mapped onto message statuses.
    """
    item = await service.create_message(
        customer_id=data.customer_id,
        phone=data.phone,
        body=data.body,
        status=data.status,
        charge_id=data.charge_id,
        scheduled_at=data.scheduled_at,
    )
    return _message_read(item)


@router.get("", response_model=PaginatedResponse[MessageRead])
async def list_messages(
    query: Annotated[MessageListQuery, Query()],
    service: MessageServiceDep,
) -> PaginatedResponse[MessageRead]:
    """List messages, newest first."""
    items, total = await service.list_messages(
        query.page,
        query.limit,
        status=query.status,
        customer_id=query.customer_id,
        charge_id=query.charge_id,
        search=query.search,
        created_from=query.start_date,
        created_to=query.end_date,
    )
    return PaginatedResponse[MessageRead].build(
        [_message_read(i) for i in items], query.page, query.limit, total
    )


@router.get("/{message_id}", response_model=MessageRead, responses=_NOT_FOUND)
async def get_message(message_id: UUID, service: MessageServiceDep) -> MessageRead:
    """Get a message."""
    return _message_read(await service.get_message(message_id))


@router.put("/{message_id}", response_model=MessageRead, responses=_NOT_FOUND)
@router.patch("/{message_id}", response_model=MessageRead, responses=_NOT_FOUND)
async def update_message(
    message_id: UUID, data: MessageUpdate, service: IntegrationMessageServiceDep
) -> MessageRead:
    """Record delivery progress: status, sent time, error and attempt count."""
    item = await service.update_message(message_id, data.model_dump(exclude_unset=True))
    return _message_read(item)
