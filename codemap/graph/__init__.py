"""
Graph Subpackage

Integer-handle arena holding the structural graph of a codebase.
"""

from .store import GraphStore

__all__ = ['GraphStore']
