"""Source parsing backends."""

from .tree_sitter import TypeScriptParser

__all__ = ["TypeScriptParser"]
