"""Public package surface for filedeck.

Exports ``main`` for programmatic CLI invocation.
The engine itself lives in submodules: ``entry_model``, ``sorting``,
``search``, ``selection``, ``clipboard``, ``operations`` and ``workspace``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
