import json
import logging

import pytest

from citation_checker import cli


def _args(project, *flags):
    return ["-f", str(project["tex"]), "-b", str(project["bib"]), *flags]


def test_cli_reports_unused(sample_project, capsys):
    exit_code = cli.main(_args(sample_project, "--unused"))

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == ["d"]


def test_cli_reports_undefined(sample_project, capsys):
    assert cli.main(_args(sample_project, "-d")) == 0
    assert capsys.readouterr().out.splitlines() == ["b"]


def test_cli_reports_pages_and_articles(sample_project, capsys):
    cli.main(_args(sample_project, "-p"))
    assert capsys.readouterr().out.splitlines() == ["c (123-145)"]

    cli.main(_args(sample_project, "-a"))
    assert capsys.readouterr().out.splitlines() == ["c (missing: number, doi)"]

    cli.main(_args(sample_project, "-a", "--fields", "volume, pages"))
    assert capsys.readouterr().out == ""


def test_cli_pages_ignores_missing_document(sample_project, tmp_path, capsys):
    exit_code = cli.main(["-f", str(tmp_path / "nope.tex"), "-b", str(sample_project["bib"]), "-p"])

    assert exit_code == 0
    assert "c (123-145)" in capsys.readouterr().out


def test_cli_writes_json_output(sample_project, tmp_path):
    json_out = tmp_path / "findings.json"

    cli.main(_args(sample_project, "-u", "--json-output", str(json_out)))

    payload = json.loads(json_out.read_text())
    assert payload["query"] == "unused"
    assert payload["count"] == 1
    assert payload["findings"][0]["key"] == "d"


def test_cli_requires_exactly_one_query(sample_project):
    with pytest.raises(SystemExit):
        cli.main(_args(sample_project))
    with pytest.raises(SystemExit):
        cli.main(_args(sample_project, "-u", "-p"))


def test_cli_fatal_errors_exit_nonzero(sample_project, tmp_path, caplog, capsys):
    with caplog.at_level(logging.ERROR):
        exit_code = cli.main(["-f", str(sample_project["tex"]), "-b", str(tmp_path / "missing.bib"), "-u"])

    assert exit_code == 1
    assert "missing.bib" in caplog.text
    assert capsys.readouterr().out == ""


def test_cli_keeps_diagnostics_off_stdout(write_files, capsys, caplog):
    root = write_files(
        {
            "doc.tex": "\\cite{k}\n",
            "refs.bib": "@misc{k,\n  title = {T}, % note\n}\n@misc{unused,\n  title = {U}\n}\n",
        }
    )

    with caplog.at_level(logging.WARNING):
        cli.main(["-f", str(root / "doc.tex"), "-b", str(root / "refs.bib"), "-u"])

    assert capsys.readouterr().out.splitlines() == ["unused"]
    assert "Violating lines: 2" in caplog.text


def test_cli_defaults_come_from_environment(sample_project, monkeypatch, capsys):
    monkeypatch.setenv("CITATION_CHECKER_DOCUMENT", str(sample_project["tex"]))
    monkeypatch.setenv("CITATION_CHECKER_BIBLIOGRAPHY", str(sample_project["bib"]))

    assert cli.main(["-u"]) == 0
    assert capsys.readouterr().out.splitlines() == ["d"]
