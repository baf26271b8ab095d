"""
Document model: Book → Chapter → Section → Subsection.

The tree is assembled through a chain of builders. Each nested builder
holds a draft node plus a reference back to its parent, and only attaches
the draft when its terminal `add()` runs:

    builder = Book.builder("Rust exercises")
    chapter = builder.chapter("Basics")
    section = chapter.section("Intro")
    section.subsection("Hello", "hello/description.md", "hello")
    section.add()
    chapter.add()
    book = builder.build()

Builders also work as context managers, calling `add()` on a clean exit:

    with builder.chapter("Basics") as chapter:
        with chapter.section("Intro") as section:
            section.subsection("Hello", "hello/description.md", "hello")

Numbers are never stored; they follow from sequence order at render time.
"""

from dataclasses import dataclass

from modbook.render import render


class BuilderError(Exception):
    """Raised when a builder is used after it has been consumed."""
    pass


# ── Tree ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Subsection:
    title: str
    content: str
    out_dir: str


@dataclass(frozen=True)
class Section:
    title: str
    subsections: tuple = ()


@dataclass(frozen=True)
class Chapter:
    title: str
    sections: tuple = ()


@dataclass(frozen=True)
class Book:
    title: str
    chapters: tuple = ()

    @staticmethod
    def builder(title):
        return BookBuilder(title)

    def numbered_sections(self):
        """Yield (chapter_i, section_i, section) in render order, 1-based."""
        for chapter_i, chapter in enumerate(self.chapters, 1):
            for section_i, section in enumerate(chapter.sections, 1):
                yield chapter_i, section_i, section

    def render(self, out_dir, verbose=False):
        render(self, out_dir, verbose=verbose)


# ── Builders ───────────────────────────────────────────────────────────


class _DraftBuilder:
    """Shared consume-once bookkeeping for the nested builders."""

    def __init__(self, parent, title):
        self._parent = parent
        self._title = title
        self._children = []
        self._consumed = False

    def _check_open(self):
        if self._consumed:
            raise BuilderError(
                f"builder for '{self._title}' was already added to its parent"
            )

    def _finish(self):
        self._check_open()
        self._consumed = True
        return self._title, tuple(self._children)

    def __enter__(self):
        self._check_open()
        return self

    def __exit__(self, exc_type, exc, tb):
        # On error the draft is dropped; the parent never sees it
        if exc_type is None and not self._consumed:
            self.add()
        elif exc_type is not None:
            self._consumed = True
        return False


class BookBuilder:
    """Top-level builder. `build()` consumes it and yields the Book."""

    def __init__(self, title):
        self._title = title
        self._chapters = []
        self._consumed = False

    def chapter(self, title):
        if self._consumed:
            raise BuilderError(f"book '{self._title}' was already built")
        return ChapterBuilder(self, title)

    def build(self):
        if self._consumed:
            raise BuilderError(f"book '{self._title}' was already built")
        self._consumed = True
        return Book(self._title, tuple(self._chapters))


class ChapterBuilder(_DraftBuilder):

    def section(self, title):
        self._check_open()
        return SectionBuilder(self, title)

    def add(self):
        """Append the chapter to the book and hand the book builder back."""
        title, sections = self._finish()
        if self._parent._consumed:
            raise BuilderError(f"book '{self._parent._title}' was already built")
        self._parent._chapters.append(Chapter(title, sections))
        return self._parent


class SectionBuilder(_DraftBuilder):

    def subsection(self, title, content, out_dir):
        self._check_open()
        self._children.append(Subsection(title, str(content), str(out_dir)))
        return self

    def add(self):
        """Append the section to the chapter and hand the chapter builder back."""
        title, subsections = self._finish()
        self._parent._check_open()
        self._parent._children.append(Section(title, subsections))
        return self._parent
