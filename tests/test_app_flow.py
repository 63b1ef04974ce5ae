import pytest

from citation_checker.app import CitationCheckerApp
from citation_checker.config import Settings, load_settings, parse_field_list


def test_app_runs_named_queries(sample_project):
    app = CitationCheckerApp()

    unused = app.run("unused", document=sample_project["tex"], bibliography=sample_project["bib"])
    pages = app.run("pages", bibliography=sample_project["bib"])

    assert [f.key for f in unused] == ["d"]
    assert [f.message for f in pages] == ["c (123-145)"]


def test_app_article_query_uses_settings(sample_project):
    app = CitationCheckerApp(Settings(required_fields=("journal", "number")))

    findings = app.run("article", bibliography=sample_project["bib"])

    assert [f.message for f in findings] == ["c (missing: number)"]


def test_app_rejects_unknown_query(sample_project):
    with pytest.raises(ValueError):
        CitationCheckerApp().run("duplicates", bibliography=sample_project["bib"])


def test_parse_field_list_normalizes():
    assert parse_field_list(" Volume, ,DOI ") == ("volume", "doi")


def test_load_settings_reads_env_file(tmp_path, monkeypatch):
    for name in ("DOCUMENT", "BIBLIOGRAPHY", "REQUIRED_FIELDS", "LOG_LEVEL", "ENTRY_TYPE", "DEFAULT_SUFFIX"):
        # setenv first so undo removes whatever the .env file loads
        monkeypatch.setenv(f"CITATION_CHECKER_{name}", "")
        monkeypatch.delenv(f"CITATION_CHECKER_{name}")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "CITATION_CHECKER_DOCUMENT=thesis.tex\n"
        "CITATION_CHECKER_REQUIRED_FIELDS=volume,doi\n"
        "CITATION_CHECKER_LOG_LEVEL=info\n"
    )

    settings = load_settings(str(env_file))

    assert settings.document == "thesis.tex"
    assert settings.bibliography == "references.bib"
    assert settings.required_fields == ("volume", "doi")
    assert settings.log_level == "INFO"
