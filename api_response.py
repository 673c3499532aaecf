# api_response.py - normalized result of a single api request
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ResponseStatus(Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class ErrorKind(Enum):
    """Why a request failed. Only set on FAILED responses."""
    CONNECTIVITY = "connectivity"
    NETWORK = "network"
    TIMEOUT = "timeout"
    DECODE = "decode"
    ENCODE = "encode"
    HTTP_STATUS = "http_status"


@dataclass(frozen=True)
class APIResponse:
    status: ResponseStatus
    data: Any = None
    error: Optional[str] = None
    message: str = ""
    error_kind: Optional[ErrorKind] = None

    def __post_init__(self):
        if self.status is ResponseStatus.SUCCESS and self.error is not None:
            raise ValueError("a successful response cannot carry an error")

    @classmethod
    def success(cls, data: Any, message: str = "") -> "APIResponse":
        return cls(ResponseStatus.SUCCESS, data, message=message)

    @classmethod
    def failed(cls, error: str, data: Any = None, kind: Optional[ErrorKind] = None,
               message: str = "") -> "APIResponse":
        return cls(ResponseStatus.FAILED, data, error=error, message=message, error_kind=kind)

    @property
    def is_success(self) -> bool:
        return self.status is ResponseStatus.SUCCESS

    def to_json(self) -> Dict[str, Any]:
        """
        Fixed-shape mapping of this response.

        Response_Exception is only present when there is an error and
        Response_Message only when the message is non-empty.
        """
        out: Dict[str, Any] = {
            "Response_Status": self.status.value,
            "Response_Data": self.data,
        }
        if self.error is not None:
            out["Response_Exception"] = self.error
        if self.message:
            out["Response_Message"] = self.message
        return out
