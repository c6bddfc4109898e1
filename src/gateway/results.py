"""
Dispatch results.

A dispatch either succeeds with a Stripe payload or fails with a message and
a kind. The HTTP layer turns these into the response envelope.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class FailureKind(str, Enum):
    CONFIGURATION_ERROR = "configuration_error"
    BAD_REQUEST = "bad_request"
    TIMEOUT_ERROR = "timeout_error"
    API_ERROR = "api_error"


@dataclass(frozen=True)
class DispatchSuccess:
    entity: str
    payload: Dict[str, Any]

    def to_body(self) -> Dict[str, Any]:
        return {"success": True, self.entity: self.payload}


@dataclass(frozen=True)
class DispatchFailure:
    message: str
    kind: str
    available_methods: Optional[List[str]] = None
    context: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def status_code(self) -> int:
        return 400 if self.kind == FailureKind.BAD_REQUEST.value else 500

    def to_body(self) -> Dict[str, Any]:
        if self.available_methods is not None:
            return {"error": self.message, "available_methods": list(self.available_methods)}
        return {"error": self.message, "type": self.kind}


DispatchResult = Union[DispatchSuccess, DispatchFailure]
