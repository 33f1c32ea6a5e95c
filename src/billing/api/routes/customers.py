"""Customer endpoints (tenant-scoped)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.billing.api.dependencies import CustomerServiceDep
from src.billing.schemas.charge import ChargeRead, CustomerDetail
from src.billing.schemas.customer import (
    CustomerCreate,
    CustomerListQuery,
    CustomerRead,
    CustomerUpdate,
)
from src.billing.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/customers", tags=["customers"])

_PHONE_CONFLICT = {409: {"description": "An active customer already uses this phone"}}
_NOT_FOUND = {404: {"description": "Customer not found"}}


@router.post(
    "",
    response_model=CustomerRead,
    status_code=status.HTTP_201_CREATED,
    responses=_PHONE_CONFLICT,
)
async def create_customer(data: CustomerCreate, service: CustomerServiceDep) -> CustomerRead:
    """Create a customer."""
    customer = await service.create_customer(
        name=data.name,
        phone=data.phone,
        amount=data.amount,
        due_day=data.due_day,
        notes=data.notes,
    )
    return CustomerRead.model_validate(customer)


@router.get("", response_model=PaginatedResponse[CustomerRead])
async def list_customers(
    query: Annotated[CustomerListQuery, Query()],
    service: CustomerServiceDep,
) -> PaginatedResponse[CustomerRead]:
    """List customers with filters, sorting and pagination."""
    customers, total = await service.list_customers(
        query.page,
        query.limit,
        active=query.active,
        search=query.search,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
    )
    return PaginatedResponse[CustomerRead].build(
        [CustomerRead.model_validate(c) for c in customers], query.page, query.limit, total
    )


@router.get("/{customer_id}", response_model=CustomerDetail, responses=_NOT_FOUND)
async def get_customer(customer_id: UUID, service: CustomerServiceDep) -> CustomerDetail:
    """Get a customer with their five latest charges."""
    customer, charges = await service.get_customer(customer_id)
    return CustomerDetail.model_validate(customer).model_copy(
        update={"charges": [ChargeRead.model_validate(c) for c in charges]}
    )


@router.put(
    "/{customer_id}",
    response_model=CustomerRead,
    responses={**_NOT_FOUND, **_PHONE_CONFLICT},
)
async def update_customer(
    customer_id: UUID, data: CustomerUpdate, service: CustomerServiceDep
) -> CustomerRead:
    """Update a customer."""
    customer = await service.update_customer(customer_id, data.model_dump(exclude_unset=True))
    return CustomerRead.model_validate(customer)


@router.delete(
    "/{customer_id}",
    response_model=CustomerRead,
    responses={**_NOT_FOUND, 400: {"description": "Customer already inactive"}},
)
async def deactivate_customer(customer_id: UUID, service: CustomerServiceDep) -> CustomerRead:
    """Deactivate a customer. Their charges and messages are kept."""
    return CustomerRead.model_validate(await service.deactivate_customer(customer_id))


@router.patch(
    "/{customer_id}/activate",
    response_model=CustomerRead,
    responses={**_NOT_FOUND, **_PHONE_CONFLICT, 400: {"description": "Customer already active"}},
)
async def activate_customer(customer_id: UUID, service: CustomerServiceDep) -> CustomerRead:
    """Reactivate a customer."""
    return CustomerRead.model_validate(await service.activate_customer(customer_id))
