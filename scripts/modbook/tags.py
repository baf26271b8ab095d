"""
Tags: filesystem-safe identifiers derived from titles.
"""


def to_tag(title):
    """Lowercase the title and turn every non-alphanumeric character into '_'."""
    return "".join(c if c.isalnum() else "_" for c in title.lower())
