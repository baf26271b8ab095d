"""Tests for loading book outlines."""

import os
import textwrap

import pytest

from modbook.book import Book, Chapter, Section, Subsection
from modbook.config import BookConfig, ConfigError


def write_outline(directory, text, name="book.yaml"):
    path = directory / name
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


OUTLINE = """\
title: Rust exercises
chapters:
  - title: Basics
    sections:
      - title: Intro
        subsections:
          - title: Hello
            content: exercises/hello/description.md
          - title: Vars
            content: exercises/vars.md
            out_dir: /abs/vars
  - title: Empty chapter
"""


class TestLoad:
    """Tests for BookConfig.load."""

    def test_loads_file(self, tmp_path):
        path = write_outline(tmp_path, OUTLINE)
        config = BookConfig.load(str(path))
        assert config.title == "Rust exercises"
        assert config.outline_path == str(path)
        assert config.output_dir == "."

    def test_loads_directory(self, tmp_path):
        write_outline(tmp_path, OUTLINE)
        config = BookConfig.load(str(tmp_path))
        assert config["title"] == "Rust exercises"

    def test_missing_outline(self, tmp_path):
        with pytest.raises(ConfigError, match="No outline found"):
            BookConfig.load(str(tmp_path))

    def test_invalid_yaml(self, tmp_path):
        path = write_outline(tmp_path, "title: [unclosed\n")
        with pytest.raises(ConfigError, match="not valid YAML"):
            BookConfig.load(str(path))

    def test_not_a_mapping(self, tmp_path):
        path = write_outline(tmp_path, "- a\n- b\n")
        with pytest.raises(ConfigError, match="must be a YAML mapping"):
            BookConfig.load(str(path))

    def test_missing_title(self, tmp_path):
        path = write_outline(tmp_path, "chapters: []\n")
        with pytest.raises(ConfigError, match="missing required fields: title"):
            BookConfig.load(str(path))

    def test_defaults_for_empty_lists(self, tmp_path):
        path = write_outline(tmp_path, "title: T\nchapters:\n  - title: C\n    sections:\n")
        config = BookConfig.load(str(path))
        assert config.chapters == [{"title": "C", "sections": []}]

    @pytest.mark.parametrize(
        "text, message",
        [
            ("title: T\nchapters: nope\n", r"chapters: must be a list"),
            ("title: T\nchapters:\n  - nope\n", r"chapters\[0\]: must be a mapping"),
            ("title: T\nchapters:\n  - sections: []\n", r"chapters\[0\]: missing 'title'"),
            (
                "title: T\nchapters:\n  - title: C\n    sections:\n      - title: S\n        subsections: 3\n",
                r"chapters\[0\]\.sections\[0\]\.subsections: must be a list",
            ),
            (
                "title: T\nchapters:\n  - title: C\n    sections:\n      - {}\n",
                r"chapters\[0\]\.sections\[0\]: missing 'title'",
            ),
            (
                "title: T\nchapters:\n  - title: C\n    sections:\n      - title: S\n"
                "        subsections:\n          - title: E\n",
                r"chapters\[0\]\.sections\[0\]\.subsections\[0\]: missing 'content'",
            ),
        ],
    )
    def test_invalid_nodes_are_named(self, tmp_path, text, message):
        path = write_outline(tmp_path, text)
        with pytest.raises(ConfigError, match=message):
            BookConfig.load(str(path))


class TestToBook:
    """Tests for building a Book from an outline."""

    def test_builds_tree_with_resolved_paths(self, tmp_path):
        path = write_outline(tmp_path, OUTLINE)
        book = BookConfig.load(str(path)).to_book()

        hello = os.path.join(str(tmp_path), "exercises", "hello", "description.md")
        vars_md = os.path.join(str(tmp_path), "exercises", "vars.md")
        assert book == Book(
            "Rust exercises",
            (
                Chapter(
                    "Basics",
                    (
                        Section(
                            "Intro",
                            (
                                Subsection("Hello", hello, os.path.dirname(hello)),
                                Subsection("Vars", vars_md, "/abs/vars"),
                            ),
                        ),
                    ),
                ),
                Chapter("Empty chapter", ()),
            ),
        )

    def test_non_string_titles(self, tmp_path):
        path = write_outline(tmp_path, "title: 2024\nchapters:\n  - title: 1\n")
        book = BookConfig.load(str(path)).to_book()
        assert book.title == "2024"
        assert book.chapters[0].title == "1"

    def test_output_path_relative_to_outline(self, tmp_path):
        path = write_outline(tmp_path, "title: T\noutput_dir: dist\n")
        assert BookConfig.load(str(path)).output_path == os.path.join(str(tmp_path), "dist")

    def test_summary(self, tmp_path, capsys):
        path = write_outline(tmp_path, OUTLINE)
        BookConfig.load(str(path)).summary()
        out = capsys.readouterr().out
        assert "Rust exercises" in out
        assert "Chapters:  2" in out
        assert "Sections:  1" in out
        assert "Exercises: 2" in out
