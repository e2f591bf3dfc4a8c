"""Records passed between the generators and the writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Artifact:
    """One generated source file."""

    file_name: str
    content: str
    dir_name: Optional[str] = None

    @property
    def key(self) -> tuple[Optional[str], str]:
        return (self.dir_name, self.file_name)


@dataclass
class ResponseRecord:
    description: str
    schema: dict[str, Any]


@dataclass
class OperationRecord:
    """Request and response bodies collected for one operationId."""

    operation_id: str
    summary: str
    method: str
    path: str
    request: Optional[dict[str, Any]] = None
    responses: dict[str, ResponseRecord] = field(default_factory=dict)
