"""FastAPI + Tailwind interface for the citation checker.

Run with:
    uvicorn citation_checker.web:app --reload
"""
from __future__ import annotations

import html
import tempfile
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .app import CitationCheckerApp
from .errors import CitationCheckerError
from .models import Finding
from .queries import BIB_ONLY_QUERIES, QUERIES
from .report import render_findings

app = FastAPI(title="Citation Checker", description="Check LaTeX citations against a bibliography")

QUERY_LABELS = {
    "unused": "Unused bibliography entries",
    "undefined": "Undefined citations",
    "pages": "Malformed page ranges",
    "article": "Articles missing required fields",
}


class FindingModel(BaseModel):
    code: str
    key: str
    message: str


class CheckResponse(BaseModel):
    query: str
    findings: List[FindingModel] = Field(default_factory=list)


def _layout(content: str) -> str:
    """Wrap provided content in a Tailwind-powered HTML page."""

    return f"""
    <!doctype html>
    <html lang=\"en\" class=\"h-full bg-gray-50\">
    <head>
        <meta charset=\"utf-8\" />
        <title>Citation Checker</title>
        <link href=\"https://cdn.jsdelivr.net/npm/tailwindcss@3.4.4/dist/tailwind.min.css\" rel=\"stylesheet\" />
    </head>
    <body class=\"min-h-full py-10\">
        <div class=\"max-w-5xl mx-auto px-4\">
            <div class=\"bg-white shadow rounded-lg p-6\">
                <h1 class=\"text-3xl font-semibold text-gray-900\">Citation Checker</h1>
                <p class=\"text-gray-600 mt-2\">Upload a LaTeX document and its bibliography to find unused, undefined, or malformed citations.</p>
                {content}
            </div>
        </div>
    </body>
    </html>
    """


def _form_page(query: str | None = None, report: str | None = None) -> str:
    """Render the landing page with optional report output."""

    options = "".join(
        f"<option value=\"{name}\" {'selected' if name == query else ''}>{label}</option>"
        for name, label in QUERY_LABELS.items()
    )
    form = f"""
    <form action=\"/check\" method=\"post\" enctype=\"multipart/form-data\" class=\"bg-gray-50 border border-gray-200 rounded-lg p-4 mt-6\">
        <label class=\"block text-sm font-medium text-gray-700 mb-2\" for=\"document\">LaTeX document</label>
        <input type=\"file\" name=\"document\" accept=\".tex\" class=\"block w-full text-sm text-gray-800\" />
        <label class=\"block text-sm font-medium text-gray-700 mt-3 mb-2\" for=\"bibliography\">Bibliography</label>
        <input type=\"file\" name=\"bibliography\" accept=\".bib\" required class=\"block w-full text-sm text-gray-800\" />
        <label class=\"block text-sm font-medium text-gray-700 mt-3 mb-2\" for=\"query\">Check</label>
        <select name=\"query\" class=\"block w-full border border-gray-300 rounded-md p-2 text-sm\">{options}</select>
        <button type=\"submit\" class=\"mt-4 inline-flex items-center px-4 py-2 bg-indigo-600 text-white rounded-md shadow hover:bg-indigo-700\">Run check</button>
    </form>
    """

    report_block = ""
    if report is not None:
        body = html.escape(report) if report else "No findings."
        report_block = f"""
        <div class=\"mt-8\">
            <h2 class=\"text-xl font-semibold text-gray-800\">{QUERY_LABELS.get(query or '', 'Report')}</h2>
            <pre class=\"mt-3 bg-gray-900 text-green-100 p-4 rounded-lg whitespace-pre-wrap text-sm\">{body}</pre>
        </div>
        """
    return _layout(form + report_block)


async def _run_uploads(
    query: str, document: Optional[UploadFile], bibliography: UploadFile
) -> List[Finding]:
    """Write the uploads to a scratch directory and run ``query`` on them."""

    if query not in QUERIES:
        raise HTTPException(status_code=400, detail=f"Unknown query {query!r}")

    with tempfile.TemporaryDirectory() as tmp:
        workdir = Path(tmp)
        bib_path = workdir / "references.bib"
        bib_path.write_bytes(await bibliography.read())
        doc_path = None
        if document is not None and document.filename:
            doc_path = workdir / (Path(document.filename).name or "document.tex")
            doc_path.write_bytes(await document.read())
        elif query not in BIB_ONLY_QUERIES:
            raise HTTPException(status_code=400, detail="A LaTeX document is required for this check")

        checker = CitationCheckerApp()
        try:
            return checker.run(query, document=doc_path, bibliography=bib_path)
        except CitationCheckerError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Serve the upload form."""

    return HTMLResponse(_form_page())


@app.post("/check", response_class=HTMLResponse)
async def check(
    bibliography: UploadFile = File(...),
    document: Optional[UploadFile] = File(None),
    query: str = Form("unused"),
) -> HTMLResponse:
    """Run a check on uploaded files and render the report."""

    findings = await _run_uploads(query, document, bibliography)
    return HTMLResponse(_form_page(query, render_findings(findings)))


@app.post("/api/check", response_model=CheckResponse)
async def api_check(
    bibliography: UploadFile = File(...),
    document: Optional[UploadFile] = File(None),
    query: str = Form("unused"),
) -> CheckResponse:
    """Run a check on uploaded files and return structured findings."""

    findings = await _run_uploads(query, document, bibliography)
    return CheckResponse(
        query=query,
        findings=[
            FindingModel(code=finding.code, key=finding.key, message=finding.message)
            for finding in findings
        ],
    )


def main() -> None:
    """Run the FastAPI app using uvicorn."""

    import uvicorn

    uvicorn.run("citation_checker.web:app", host="0.0.0.0", port=8000, reload=False)


__all__ = ["app", "main", "CheckResponse", "FindingModel"]
