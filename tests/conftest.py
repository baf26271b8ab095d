"""Test setup for modbook."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SCRIPTS = ROOT / "scripts"
if str(SCRIPTS) not in sys.path:
    sys.path.insert(0, str(SCRIPTS))

from modbook.book import Book  # noqa: E402


@pytest.fixture
def write_exercise(tmp_path):
    """Write an exercise source file and return its path."""

    def _write(name, content):
        path = tmp_path / "exercises" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def single_exercise_book(write_exercise):
    """Book 'T' / chapter 'C1' / section 'Intro' / exercise 'Ex1'."""
    content = write_exercise("ex1.md", "# Hello\n")
    builder = Book.builder("T")
    chapter = builder.chapter("C1")
    section = chapter.section("Intro")
    section.subsection("Ex1", content, "/tmp/ex1")
    section.add()
    chapter.add()
    return builder.build()
