"""HTTP binding for the search proxy handler."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from search_proxy.web.handler import SearchProxyHandler
from search_proxy.web.utils.client import client_identity, read_json_object

router = APIRouter(tags=["search"])

ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_search_handler(request: Request) -> SearchProxyHandler:
    return request.app.state.search_handler


@router.api_route("/api/search", methods=ROUTED_METHODS)
async def search(
    request: Request,
    handler: SearchProxyHandler = Depends(get_search_handler),
) -> JSONResponse:
    payload = await read_json_object(request) if request.method == "POST" else {}
    result = await handler.handle(request.method, payload, client_identity(request))
    return JSONResponse(status_code=result.status_code, content=result.body)
