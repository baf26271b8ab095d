"""
Filesystem primitives used by the renderer.

Each helper raises OSError on failure; callers decide how to report it.
"""

import os


def create_dir_all(path):
    """Create a directory and any missing parents."""
    os.makedirs(path, exist_ok=True)


def create_file(path):
    """Open a file for writing, truncating it if it exists."""
    return open(path, "w", encoding="utf-8", newline="\n")


def read_to_string(path):
    """Read a file verbatim; line endings are not translated."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_all(f, text):
    f.write(text)
