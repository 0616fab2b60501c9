from fastapi import APIRouter

from search_proxy.web.routers import health, search


def setup_routers() -> APIRouter:
    router = APIRouter()
    router.include_router(search.router)
    router.include_router(health.router)
    return router


__all__ = ["setup_routers"]
