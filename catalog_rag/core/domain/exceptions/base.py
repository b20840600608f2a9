"""Root of the Catalog RAG error hierarchy."""

import inspect
import traceback
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from types import FrameType
from typing import Any


@dataclass
class RaiseLocation:
    """Where an error was raised: owning class, function, file and line."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @classmethod
    def unknown(cls) -> "RaiseLocation":
        return cls("<unknown>", "<unknown>", "<unknown>", 0)

    @classmethod
    def from_frame(cls, frame: FrameType) -> "RaiseLocation":
        owner = frame.f_locals.get("self")
        return cls(
            class_name=type(owner).__name__ if owner is not None else "<module>",
            method_name=frame.f_code.co_name,
            file_name=Path(frame.f_code.co_filename).name,
            line_number=frame.f_lineno,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {
            "class": data["class_name"],
            "method": data["method_name"],
            "file": data["file_name"],
            "line": data["line_number"],
            "timestamp": data["timestamp"],
        }


def _raise_site(error: "CatalogRAGError") -> FrameType | None:
    """First frame outside the ``__init__`` chain of ``error``."""
    frame = inspect.currentframe()
    frame = frame.f_back if frame else None
    while (
        frame is not None
        and frame.f_code.co_name == "__init__"
        and frame.f_locals.get("self") is error
    ):
        frame = frame.f_back
    return frame


class CatalogRAGError(Exception):
    """Base class for every error the pipelines raise.

    Carries a stable ``error_code``, the wrapped ``cause`` and free-form
    ``context``. Wrap provider faults with ``raise ... from e``.
    """

    error_code: str = "CR_ERR_001"

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = context or {}
        site = _raise_site(self)
        self.location = RaiseLocation.from_frame(site) if site else RaiseLocation.unknown()
        self.stack_trace = traceback.format_exc() if cause else None

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """JSON-ready form used by API responses and structured logs."""
        data: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }
        if self.extra_context:
            data["context"] = self.extra_context
        if include_trace and self.stack_trace:
            data["stack_trace"] = [line for line in self.stack_trace.splitlines() if line.strip()]
        if self.cause is not None:
            data["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        return data
