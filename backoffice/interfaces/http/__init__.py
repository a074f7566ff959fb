from fastapi import APIRouter


def create_api_router(prefix: str = "") -> APIRouter:
    from backoffice.interfaces.http.routers import (
        admin,
        agents,
        allocations,
        auth,
        float_requests,
        notifications,
        transactions,
        wallets,
    )

    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
    router.include_router(float_requests.router, prefix="/float-requests", tags=["float requests"])
    router.include_router(allocations.router, prefix="/float-allocations", tags=["float allocations"])
    router.include_router(wallets.router, prefix="/wallets", tags=["wallets"])
    router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
    router.include_router(agents.router, prefix="/agents", tags=["agents"])
    router.include_router(admin.router, prefix="/admin", tags=["admin"])
    return router


__all__ = [
    "create_api_router",
]
