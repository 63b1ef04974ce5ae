"""Report rendering for query findings."""
from __future__ import annotations

from typing import Any, Dict, List

from .models import Finding


def render_findings(findings: List[Finding]) -> str:
    """Return one line per finding; an empty report is an empty string."""
    return "\n".join(str(finding) for finding in findings)


def serialize_findings(query: str, findings: List[Finding]) -> Dict[str, Any]:
    return {
        "query": query,
        "count": len(findings),
        "findings": [
            {"code": finding.code, "key": finding.key, "message": finding.message}
            for finding in findings
        ],
    }
