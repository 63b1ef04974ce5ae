"""Command line interface for checking citations against a bibliography."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List

from .app import CitationCheckerApp
from .config import load_settings, parse_field_list
from .errors import CitationCheckerError
from .report import render_findings, serialize_findings

LOG = logging.getLogger(__name__)


def _selected_query(args: argparse.Namespace) -> str:
    for query in ("unused", "undefined", "pages", "article"):
        if getattr(args, query):
            return query
    raise AssertionError("argparse should require one query")  # pragma: no cover


def main(argv: List[str] | None = None) -> int:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        description=(
            "Look through citations in LaTeX and bibliography source and "
            "perform checks for correctness"
        )
    )
    parser.add_argument(
        "-f",
        "--file",
        default=settings.document,
        help="LaTeX file (default: %(default)s)",
    )
    parser.add_argument(
        "-b",
        "--bibliography",
        default=settings.bibliography,
        help="BibTeX file (default: %(default)s)",
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "-u",
        "--unused",
        action="store_true",
        help="Show bib keys defined in the bibliography that are not used in the LaTeX source",
    )
    group.add_argument(
        "-d",
        "--undefined",
        action="store_true",
        help="Show keys cited in the LaTeX source that the bibliography does not define",
    )
    group.add_argument(
        "-p",
        "--pages",
        action="store_true",
        help="Show bib keys whose pages field is not two numbers joined by -- or an en dash",
    )
    group.add_argument(
        "-a",
        "--article",
        action="store_true",
        help="Show bib keys of articles that do not contain the required fields",
    )
    parser.add_argument(
        "--entry-type",
        default=settings.entry_type,
        help="Entry type checked by --article (default: %(default)s)",
    )
    parser.add_argument(
        "--fields",
        type=parse_field_list,
        default=settings.required_fields,
        help="Comma separated fields required by --article (default: volume,number,pages,doi)",
    )
    parser.add_argument(
        "--json-output",
        type=Path,
        help="Write findings to a JSON file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug diagnostics to stderr",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s: %(message)s",
    )

    query = _selected_query(args)
    checker = CitationCheckerApp(settings)
    try:
        findings = checker.run(
            query,
            document=args.file,
            bibliography=args.bibliography,
            entry_type=args.entry_type,
            required_fields=args.fields,
        )
    except CitationCheckerError as exc:
        LOG.error("%s", exc)
        return 1

    report = render_findings(findings)
    if report:
        print(report)

    if args.json_output:
        args.json_output.write_text(json.dumps(serialize_findings(query, findings), indent=2))

    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
