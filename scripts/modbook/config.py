"""
Book outline: load, validate, and provide defaults for book.yaml.

The outline lists the book tree; paths are relative to the outline file:

    title: Rust exercises
    chapters:
      - title: Basics
        sections:
          - title: Intro
            subsections:
              - title: Hello
                content: exercises/hello/description.md
                out_dir: exercises/hello    # defaults to content's directory
"""

import os
import sys

try:
    import yaml
except ImportError:
    print("Error: PyYAML is required. Install with: pip install pyyaml")
    sys.exit(1)

from modbook.book import Book


OUTLINE_NAME = "book.yaml"

# Fields required in every book.yaml
REQUIRED_FIELDS = ["title"]

# Defaults applied if missing
DEFAULTS = {
    "chapters": [],
    "output_dir": ".",
}


class ConfigError(Exception):
    """Raised when book.yaml is missing or invalid."""
    pass


class BookConfig:
    """
    Loaded, validated book outline.

    Usage:
        config = BookConfig.load("books/rust/book.yaml")
        config.title          # "Rust exercises"
        book = config.to_book()
    """

    def __init__(self, data, outline_path):
        self._data = data
        self.outline_path = outline_path
        self.root_dir = os.path.dirname(outline_path)

    @classmethod
    def load(cls, path):
        """Load and validate an outline file, or book.yaml inside a directory."""
        if os.path.isdir(path):
            path = os.path.join(path, OUTLINE_NAME)
        if not os.path.exists(path):
            raise ConfigError(f"No outline found at {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path} is not valid YAML: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must be a YAML mapping, got {type(data).__name__}")

        missing = [key for key in REQUIRED_FIELDS if not data.get(key)]
        if missing:
            raise ConfigError(
                f"{path} missing required fields: {', '.join(missing)}"
            )

        for key, default in DEFAULTS.items():
            if data.get(key) is None:
                data[key] = type(default)(default) if isinstance(default, list) else default

        _validate_nodes(data["chapters"], "chapters", "sections")
        for i, chapter in enumerate(data["chapters"]):
            if chapter.get("sections") is None:
                chapter["sections"] = []
            _validate_nodes(chapter["sections"], f"chapters[{i}].sections", "subsections")

            for j, section in enumerate(chapter["sections"]):
                if section.get("subsections") is None:
                    section["subsections"] = []
                where = f"chapters[{i}].sections[{j}].subsections"
                _validate_nodes(section["subsections"], where, None)

                for k, subsection in enumerate(section["subsections"]):
                    if not subsection.get("content"):
                        raise ConfigError(f"{where}[{k}]: missing 'content'")

        return cls(data, os.path.abspath(path))

    # ── Attribute access ───────────────────────────────────

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"BookConfig has no field '{name}'")

    def get(self, key, default=None):
        return self._data.get(key, default)

    def __getitem__(self, key):
        return self._data[key]

    def __contains__(self, key):
        return key in self._data

    # ── Convenience ────────────────────────────────────────

    def resolve_path(self, path):
        """Resolve a path from the outline against the outline's directory."""
        return os.path.normpath(os.path.join(self.root_dir, os.path.expanduser(str(path))))

    @property
    def output_path(self):
        return self.resolve_path(self.output_dir)

    def to_book(self):
        """Build the Book tree described by the outline."""
        builder = Book.builder(str(self.title))
        for chapter in self.chapters:
            with builder.chapter(str(chapter["title"])) as chapter_builder:
                for section in chapter["sections"]:
                    with chapter_builder.section(str(section["title"])) as section_builder:
                        for sub in section["subsections"]:
                            content = self.resolve_path(sub["content"])
                            out_dir = sub.get("out_dir")
                            out_dir = (
                                self.resolve_path(out_dir)
                                if out_dir
                                else os.path.dirname(content)
                            )
                            section_builder.subsection(str(sub["title"]), content, out_dir)
        return builder.build()

    def summary(self):
        """Print a short outline summary."""
        sections = [s for c in self.chapters for s in c["sections"]]
        exercises = sum(len(s["subsections"]) for s in sections)
        print(f"\n  Book:      {self.title}")
        print(f"  Outline:   {self.outline_path}")
        print(f"  Chapters:  {len(self.chapters)}")
        print(f"  Sections:  {len(sections)}")
        print(f"  Exercises: {exercises}")


def _validate_nodes(nodes, where, child_key):
    """Check that `nodes` is a list of mappings, each with a title."""
    if not isinstance(nodes, list):
        raise ConfigError(f"{where}: must be a list, got {type(nodes).__name__}")
    for i, node in enumerate(nodes):
        if not isinstance(node, dict):
            raise ConfigError(f"{where}[{i}]: must be a mapping")
        if not node.get("title"):
            raise ConfigError(f"{where}[{i}]: missing 'title'")
        if child_key and node.get(child_key) is not None and not isinstance(node[child_key], list):
            raise ConfigError(f"{where}[{i}].{child_key}: must be a list")
