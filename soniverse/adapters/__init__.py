"""
Adapters module - I/O surfaces.

Adapters are thin wrappers over the core modules; they do no synthesis
of their own.
"""

from soniverse.adapters.cli import main, parse_component

__all__ = [
    "main",
    "parse_component",
]
