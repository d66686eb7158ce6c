"""diskview.render registry."""

from __future__ import annotations

from diskview.render.json import JsonRenderer
from diskview.render.table import TableRenderer
from diskview.render.text import TextRenderer

_RENDERERS = {
    "json": JsonRenderer(),
    "text": TextRenderer(),
    "table": TableRenderer(),
}

RENDERER_NAMES = tuple(sorted(_RENDERERS))


def get_renderer(name: str):
    if name not in _RENDERERS:
        raise ValueError(f"unknown renderer: {name}")
    return _RENDERERS[name]
