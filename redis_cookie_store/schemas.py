from typing import Any, Dict, List

from pydantic import BaseModel, Field


class CookieListResponse(BaseModel):
    count: int
    cookies: List[Dict[str, Any]] = Field(default_factory=list)


class RemoveResponse(BaseModel):
    removed: bool = True
