import sys
from pathlib import Path
from typing import Callable, Dict

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

import pytest


SAMPLE_BIB = """\
@article{a,
  author = {Doe, Jane},
  title = {Sample article title},
  journal = {Journal of Testing},
  year = {2021},
  volume = {10},
  number = {2},
  pages = {123--130},
  doi = {10.1234/jt.2021.456}
}

@article{c,
  author = {Smith, Alex and Lee, Bo},
  title = {Another study on testing},
  journal = {Testing Letters},
  year = {2020},
  volume = {3},
  pages = {123-145}
}

@book{d,
  author = {Patel, Ravi},
  title = {Data validation handbook},
  publisher = {Testing Press},
  year = {2019}
}
"""

SAMPLE_TEX = """\
\\documentclass{article}
\\begin{document}
Results follow earlier work \\cite{a,b}. % \\cite{hidden}
As \\textcite{c} argue, checking matters.
\\end{document}
"""


@pytest.fixture()
def write_files(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Write a mapping of relative paths to contents under ``tmp_path``."""

    def _write(files: Dict[str, str]) -> Path:
        for name, content in files.items():
            target = tmp_path / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture()
def sample_project(write_files) -> Dict[str, Path]:
    """A document citing a, b, c with a bibliography defining a, c, d."""

    root = write_files({"document.tex": SAMPLE_TEX, "references.bib": SAMPLE_BIB})
    return {"tex": root / "document.tex", "bib": root / "references.bib"}
