import pytest

from citation_checker.citations import Citations, HollowCitations, gather_citations
from citation_checker.errors import GatherError
from citation_checker.models import LaTeXCitation
from citation_checker.sources import ABSTRACT, BIB, LATEX, CitationSource


def test_hollow_gather_from_latex_and_bib(sample_project):
    src = CitationSource.new(sample_project["tex"], sample_project["bib"])

    cited = gather_citations(HollowCitations, LATEX, src)
    defined = gather_citations(HollowCitations, BIB, src)

    assert cited.list_sorted() == ["a", "b", "c"]
    assert defined.list_sorted() == ["a", "c", "d"]
    assert cited.source is LATEX
    assert defined.source is BIB


def test_difference_is_abstract_and_cannot_regather(sample_project):
    src = CitationSource.new(sample_project["tex"], sample_project["bib"])
    cited = HollowCitations.gather(LATEX, src)
    defined = HollowCitations.gather(BIB, src)

    unused = defined.difference(cited)

    assert unused.source is ABSTRACT
    assert unused.list_sorted() == ["d"]
    with pytest.raises(GatherError):
        HollowCitations.gather(unused.source, src)


def test_hollow_insert_keeps_keys_unique():
    keys = HollowCitations(LATEX, ["Key"])
    assert keys.insert("key") is True
    assert keys.insert("Key") is False
    assert len(keys) == 2
    assert "key" in keys


def test_full_latex_collection_records_commands(write_files):
    root = write_files({"many.tex": "\\cite{x}\n\\textcite{x} \\cite{y}\n"})
    src = CitationSource.from_latex(root / "many.tex")

    citations = gather_citations(Citations, LATEX, src)

    assert citations.get("x") == LaTeXCitation(key="x", commands=("cite", "textcite"))
    assert [c.key for c in citations.list_sorted()] == ["x", "y"]


def test_full_bib_collection_filter_keeps_source(sample_project):
    src = CitationSource.from_bib(sample_project["bib"])
    entries = Citations.gather(BIB, src)

    articles = entries.filter(lambda c: c.entry_type == "article")

    assert articles.source is BIB
    assert sorted(articles.keys()) == ["a", "c"]
    assert "d" in entries and "d" not in articles
    assert len(entries) == 3


def test_gathering_without_required_file_fails(sample_project):
    with pytest.raises(GatherError):
        HollowCitations.gather(LATEX, CitationSource.from_bib(sample_project["bib"]))
    with pytest.raises(GatherError):
        Citations.gather(BIB, CitationSource.from_latex(sample_project["tex"]))
