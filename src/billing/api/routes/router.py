from fastapi import APIRouter

from src.billing.api.routes import (
    auth,
    charges,
    customers,
    dashboard,
    integrations,
    messages,
    tenants,
)

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(integrations.router)
api_router.include_router(tenants.public_router)
api_router.include_router(tenants.router, prefix="/admin/tenants")
api_router.include_router(tenants.router, prefix="/tenants")
api_router.include_router(customers.router)
api_router.include_router(charges.router)
api_router.include_router(messages.router)
api_router.include_router(dashboard.router)
