"""Semantic analysis."""

from gabcpy.semantic.analyzer import SemanticAnalyzer, analyze

__all__ = ["SemanticAnalyzer", "analyze"]
