"""
Parsers package for document classification.

Decides from a file's frontmatter whether it is a managed document.
"""

from .document_classifier import DocumentClassifier, extract_frontmatter_block, is_managed_content

__all__ = [
    "DocumentClassifier",
    "extract_frontmatter_block",
    "is_managed_content",
]
