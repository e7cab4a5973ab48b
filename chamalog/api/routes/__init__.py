"""REST routes, mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from chamalog.api.routes import (
    activities,
    auth,
    health,
    labels,
    orders,
    postal_code,
    stores,
    users,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, prefix="/usuarios", tags=["users"])
router.include_router(stores.router, prefix="/lojas", tags=["stores"])
router.include_router(orders.router, prefix="/pedidos", tags=["orders"])
router.include_router(orders.tracking_router, tags=["orders"])
router.include_router(labels.router, prefix="/etiquetas", tags=["labels"])
router.include_router(activities.router, prefix="/atividades-recentes", tags=["activities"])
router.include_router(postal_code.router, prefix="/cep", tags=["postal-code"])
