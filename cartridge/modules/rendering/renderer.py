"""Markdown-to-HTML rendering, delegated to Python-Markdown."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import markdown

from cartridge.infra.config import settings

Renderer = Callable[[str], str]


def render_markdown(text: str, extensions: Sequence[str] | None = None) -> str:
    """Render markdown text to an HTML fragment.

    Single line breaks become <br />; tables and fenced code are honoured.
    A fresh Markdown instance is used per call, so calls share no state.
    """
    exts = list(extensions) if extensions is not None else settings.markdown_extensions
    return markdown.markdown(text, extensions=exts)
