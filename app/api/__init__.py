from fastapi import APIRouter

from app.interfaces.http.routers import health, ledger


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(ledger.router, tags=["ledger"])
    router.include_router(health.router, tags=["health"])
    return router


__all__ = [
    "create_api_router",
]
