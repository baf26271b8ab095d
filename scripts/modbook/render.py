"""
Render a Book to an mdBook source tree.

Layout produced under the output root:

    book/book.toml
    book/src/SUMMARY.md
    book/src/<tag>.md        one per section

Every render is a full rebuild. The first I/O failure aborts the render
with RenderBookError; files already written are left in place.
"""

import os
import re

from modbook.fileio import create_dir_all, create_file, read_to_string, write_all
from modbook.tags import to_tag


BOOK_TOML = """\
[book]
language = "en"
multilingual = false

[build]
build-dir = "./target"
"""

EXERCISE_DIR_TOKEN = "#[modmod:exercise_dir]"
EXERCISE_REF_TOKEN = "#[modmod:exercise_ref]"

# Top-level headings in exercise sources nest under the "## Exercise" heading
TOP_LEVEL_HEADING = re.compile(r"^# ", re.MULTILINE)


class RenderBookError(Exception):
    """Raised when the book cannot be rendered. The I/O cause is chained."""

    def __init__(self, message="unable to render book"):
        super().__init__(message)


# ── Substitution ───────────────────────────────────────────────────────


def substitute(content, out_dir, exercise_ref):
    """
    Apply the placeholder substitutions to exercise source content.

    Order matters: the directory and reference tokens are replaced first,
    then top-level headings are demoted to level three.
    """
    content = content.replace(EXERCISE_DIR_TOKEN, str(out_dir))
    content = content.replace(EXERCISE_REF_TOKEN, exercise_ref)
    return TOP_LEVEL_HEADING.sub("### ", content)


def section_file_name(section):
    return f"{to_tag(section.title)}.md"


def check_tags(book):
    """Raise RenderBookError if two sections would write the same file."""
    seen = {}
    for _, _, section in book.numbered_sections():
        name = section_file_name(section)
        if name in seen:
            raise RenderBookError(
                f"unable to render book: sections '{seen[name]}' and "
                f"'{section.title}' both render to {name}"
            )
        seen[name] = section.title


# ── Render ─────────────────────────────────────────────────────────────


def render(book, out_dir, verbose=False):
    """Write the book tree under `out_dir`. Raises RenderBookError."""
    check_tags(book)

    book_out_dir = os.path.join(out_dir, "book")
    book_src_dir = os.path.join(book_out_dir, "src")

    try:
        _render(book, book_out_dir, book_src_dir, verbose)
    except (OSError, UnicodeDecodeError) as e:
        raise RenderBookError() from e


def _render(book, book_out_dir, book_src_dir, verbose):
    create_dir_all(book_src_dir)

    with create_file(os.path.join(book_out_dir, "book.toml")) as book_toml:
        write_all(book_toml, BOOK_TOML)

    summary_path = os.path.join(book_src_dir, "SUMMARY.md")
    with create_file(summary_path) as summary_md:
        write_all(summary_md, "# Summary\n\n")

        for chapter_i, chapter in enumerate(book.chapters, 1):
            # mdBook has no custom numbering; an unlinked draft entry keeps
            # its chapter numbers in step with ours
            write_all(summary_md, f"- [{chapter.title}]()\n")

            for section_i, section in enumerate(chapter.sections, 1):
                file_name = section_file_name(section)
                write_all(summary_md, f"\t- [{section.title}]({file_name})\n")

                section_path = os.path.join(book_src_dir, file_name)
                _render_section(section_path, section, chapter_i, section_i)

                if verbose:
                    print(f"  ✓ {chapter_i}.{section_i} {section_path}")

            write_all(summary_md, "\n")

    if verbose:
        print(f"  ✓ {summary_path}")


def _render_section(path, section, chapter_i, section_i):
    with create_file(path) as section_file:
        write_all(
            section_file, f"# Unit {chapter_i}.{section_i} - {section.title}\n\n"
        )

        for subsection_i, subsection in enumerate(section.subsections, 1):
            exercise_ref = f"{chapter_i}.{section_i}.{subsection_i}"
            write_all(
                section_file,
                f"## Exercise {exercise_ref}: {subsection.title}\n\n",
            )
            content = read_to_string(subsection.content)
            content = substitute(content, subsection.out_dir, exercise_ref)
            write_all(section_file, f"{content.strip()}\n")
