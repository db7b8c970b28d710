import itertools
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

_creation_counter = itertools.count(1)


def next_creation_index() -> int:
    return next(_creation_counter)


def format_js_date(value: datetime) -> str:
    """Render a datetime the way JavaScript's ``Date#toISOString`` does."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class Cookie(BaseModel):
    """A stored cookie in the canonical tough-cookie serialized shape.

    ``creation_index`` is process-local: every constructed record, including
    one rebuilt from a snapshot, takes the next value of a shared counter and
    the index is never written out.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key: str = ""
    value: str = ""
    expires: Union[Literal["Infinity"], datetime] = "Infinity"
    max_age: Optional[Union[Literal["Infinity", "-Infinity"], int]] = None
    domain: str
    path: str
    secure: bool = False
    http_only: bool = False
    extensions: Optional[List[str]] = None
    host_only: Optional[bool] = None
    path_is_default: Optional[bool] = None
    creation: Optional[datetime] = None
    last_accessed: Optional[datetime] = None
    same_site: Optional[str] = None
    creation_index: Optional[int] = Field(default_factory=next_creation_index, exclude=True)

    @field_serializer("expires", "creation", "last_accessed")
    def _serialize_date(self, value: Union[str, datetime, None]) -> Optional[str]:
        if isinstance(value, datetime):
            return format_js_date(value)
        return value

    @property
    def triple(self) -> tuple:
        return self.domain, self.path, self.key

    def to_json(self) -> Dict[str, Any]:
        # Properties still at their default are left out, as tough-cookie does.
        payload = self.model_dump(mode="json", by_alias=True)
        for name, field in type(self).model_fields.items():
            if field.exclude or field.is_required():
                continue
            if getattr(self, name) == field.default:
                payload.pop(field.alias or name, None)
        return payload

    @classmethod
    def from_json(cls, data: Union[str, bytes, Dict[str, Any]]) -> "Cookie":
        if isinstance(data, (str, bytes)):
            data = json.loads(data)
        return cls.model_validate(data)
