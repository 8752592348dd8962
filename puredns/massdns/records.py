"""Records of the JSON output format of massdns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional


@dataclass(frozen=True)
class JSONRecord:
    """A resource record from a massdns JSON answer."""

    ttl: int = 0
    type: str = ""
    class_: str = ""
    name: str = ""
    data: str = ""


@dataclass(frozen=True)
class JSONResponseData:
    """The record sections of a massdns JSON response."""

    answers: List[JSONRecord] = field(default_factory=list)
    authorities: List[JSONRecord] = field(default_factory=list)
    additionals: List[JSONRecord] = field(default_factory=list)


@dataclass(frozen=True)
class JSONResponse:
    """A response as written by massdns in JSON output mode."""

    name: str = ""
    type: str = ""
    class_: str = ""
    status: str = ""
    data: JSONResponseData = field(default_factory=JSONResponseData)
    resolver: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JSONResponse:
        """Build a response from a decoded JSON object; missing keys take defaults."""
        sections = data.get("data") or {}
        return cls(
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            class_=str(data.get("class", "")),
            status=str(data.get("status", "")),
            data=JSONResponseData(
                answers=_records(sections.get("answers")),
                authorities=_records(sections.get("authorities")),
                additionals=_records(sections.get("additionals")),
            ),
            resolver=str(data.get("resolver", "")),
        )


def _records(items: Optional[List[Mapping[str, Any]]]) -> List[JSONRecord]:
    return [
        JSONRecord(
            ttl=int(item.get("ttl", 0)),
            type=str(item.get("type", "")),
            class_=str(item.get("class", "")),
            name=str(item.get("name", "")),
            data=str(item.get("data", "")),
        )
        for item in items or []
    ]