"""
modbook — render exercise books to mdBook sources.

Public API:
    from modbook.book import Book, BuilderError
    from modbook.render import render, RenderBookError
    from modbook.config import BookConfig, ConfigError
    from modbook.resolve import find_outline
    from modbook.lint import Linter
"""
