from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    REFUSAL = "refusal"
    EMPTY = "empty"
    PARSE_ERROR = "parse_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class ToolOutcome:
    """Result of one model round trip, classified once per response.

    Only SUCCESS carries a `value`; every other kind carries the
    user-facing `message`.
    """

    kind: OutcomeKind
    value: Any = None
    message: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> "ToolOutcome":
        return cls(kind=OutcomeKind.SUCCESS, value=value)

    @classmethod
    def refusal(cls, message: str) -> "ToolOutcome":
        return cls(kind=OutcomeKind.REFUSAL, message=message)

    @classmethod
    def empty(cls, message: str) -> "ToolOutcome":
        return cls(kind=OutcomeKind.EMPTY, message=message)

    @classmethod
    def parse_error(cls, message: str) -> "ToolOutcome":
        return cls(kind=OutcomeKind.PARSE_ERROR, message=message)

    @classmethod
    def transport_error(cls, message: str) -> "ToolOutcome":
        return cls(kind=OutcomeKind.TRANSPORT_ERROR, message=message)

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        value = self.value
        if hasattr(value, "model_dump"):
            value = value.model_dump(mode="json", by_alias=True)
        return {"kind": self.kind.value, "value": value, "message": self.message}
