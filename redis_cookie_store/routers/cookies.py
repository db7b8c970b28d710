from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Query, Request

from redis_cookie_store.models import Cookie
from redis_cookie_store.schemas import CookieListResponse, RemoveResponse
from redis_cookie_store.services.stores.base import CookieStore

router = APIRouter(tags=["cookies"])


def _get_store(request: Request) -> CookieStore:
    store = getattr(request.app.state, "cookie_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Cookie store is not ready")
    return store


def _to_response(cookies: List[Cookie]) -> CookieListResponse:
    return CookieListResponse(count=len(cookies), cookies=[cookie.to_json() for cookie in cookies])


@router.get("/cookies", response_model=CookieListResponse)
async def list_cookies(request: Request) -> CookieListResponse:
    cookies = await _get_store(request).get_all_cookies()
    return _to_response(cookies)


@router.put("/cookies")
async def put_cookie(request: Request, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    try:
        cookie = Cookie.from_json(payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    await _get_store(request).put_cookie(cookie)
    return cookie.to_json()


@router.get("/cookies/{domain}", response_model=CookieListResponse)
async def find_cookies(request: Request, domain: str, path: Optional[str] = Query(default=None)) -> CookieListResponse:
    cookies = await _get_store(request).find_cookies(domain, path)
    return _to_response(cookies)


@router.delete("/cookies/{domain}", response_model=RemoveResponse)
async def remove_cookies(request: Request, domain: str, path: Optional[str] = Query(default=None)) -> RemoveResponse:
    await _get_store(request).remove_cookies(domain, path)
    return RemoveResponse()


@router.get("/cookies/{domain}/{key}")
async def find_cookie(request: Request, domain: str, key: str, path: str = Query(default="/")) -> Dict[str, Any]:
    cookie = await _get_store(request).find_cookie(domain, path, key)
    if cookie is None:
        raise HTTPException(status_code=404, detail="Cookie not found")
    return cookie.to_json()


@router.delete("/cookies/{domain}/{key}", response_model=RemoveResponse)
async def remove_cookie(request: Request, domain: str, key: str, path: str = Query(default="/")) -> RemoveResponse:
    await _get_store(request).remove_cookie(domain, path, key)
    return RemoveResponse()
