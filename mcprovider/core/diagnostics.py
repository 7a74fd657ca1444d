"""Diagnostics reported back from resource lifecycle operations."""

import logging
from typing import Iterable, List, Optional

from pydantic import BaseModel

from mcprovider.core.metrics import metrics

logger = logging.getLogger(__name__)


class Severity:
    """Diagnostic severities."""

    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """A single error or warning attached to a lifecycle response."""

    severity: str
    summary: str
    detail: str = ""
    attribute: Optional[str] = None


class Diagnostics(list):
    """Ordered collection of diagnostics with error/warning helpers."""

    def add_error(self, summary: str, detail: str = "", attribute: Optional[str] = None) -> None:
        self._add(Diagnostic(severity=Severity.ERROR, summary=summary, detail=detail, attribute=attribute))

    def add_warning(self, summary: str, detail: str = "", attribute: Optional[str] = None) -> None:
        self._add(Diagnostic(severity=Severity.WARNING, summary=summary, detail=detail, attribute=attribute))

    def append_all(self, other: Iterable[Diagnostic]) -> None:
        """Append diagnostics produced by a helper call."""
        for diagnostic in other:
            self.append(diagnostic)

    def has_error(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self)

    def errors(self) -> List[Diagnostic]:
        return [d for d in self if d.severity == Severity.ERROR]

    def warnings(self) -> List[Diagnostic]:
        return [d for d in self if d.severity == Severity.WARNING]

    def _add(self, diagnostic: Diagnostic) -> None:
        if diagnostic.severity == Severity.ERROR:
            logger.error(diagnostic.summary, extra={"attribute": diagnostic.attribute})
        else:
            logger.warning(diagnostic.summary, extra={"attribute": diagnostic.attribute})
        metrics.record_diagnostic(diagnostic.severity)
        self.append(diagnostic)
