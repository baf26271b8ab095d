"""
Outline resolution.

Every command that needs to find a book outline imports from here.
"""

import os
import re

import yaml

from modbook.config import OUTLINE_NAME


def natural_sort_key(s):
    """Sort strings with embedded numbers naturally (2_intro before 10_traits)."""
    return [
        int(text) if text.isdigit() else text.lower()
        for text in re.split(r"(\d+)", s)
    ]


def find_outline(identifier, project_root):
    """
    Resolve a book identifier to its outline file.

    Accepts:
        - Direct path:  books/rust/book.yaml  or  books/rust
        - Number:       1      (matches "1_..." prefix under books/)
        - Keyword:      rust   (matches dir name or YAML title)

    Returns: absolute path to the outline file, or None.
    """
    for candidate in [identifier, os.path.join(project_root, identifier)]:
        if os.path.isfile(candidate):
            return os.path.abspath(candidate)
        outline = os.path.join(candidate, OUTLINE_NAME)
        if os.path.isdir(candidate) and os.path.exists(outline):
            return os.path.abspath(outline)

    books_root = os.path.join(project_root, "books")
    if not os.path.isdir(books_root):
        return None

    identifier_lower = identifier.lower()

    for entry in sorted(os.listdir(books_root), key=natural_sort_key):
        outline = os.path.join(books_root, entry, OUTLINE_NAME)
        if not os.path.exists(outline):
            continue

        # Match by number prefix: "1" matches "1_rust_basics"
        match = re.match(r"^(\d+)_", entry)
        if match and match.group(1) == identifier:
            return os.path.abspath(outline)

        if identifier_lower in entry.lower():
            return os.path.abspath(outline)

        # Unreadable outlines are reported when loaded, not while searching
        try:
            with open(outline, encoding="utf-8") as f:
                cfg = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            continue
        if isinstance(cfg, dict) and identifier_lower in str(cfg.get("title", "")).lower():
            return os.path.abspath(outline)

    return None
