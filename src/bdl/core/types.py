"""
Core type definitions for the BDL document model.

This module contains type aliases shared by the parser, the document model
and the loader.
"""

from bdl.core.values import Value

VariableMap = dict[str, Value]

DependencySet = frozenset[str]

VariableScopes = tuple[VariableMap | None, VariableMap]
