"""
Classifier deciding whether a markdown file is a managed Strata document.

A file qualifies when it opens with a frontmatter block that contains a
``doc-type: strata`` line. Only that block is inspected, line by line; no YAML
parsing is done, so malformed content elsewhere in the file is irrelevant.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

OPENING_DELIMITERS = ("---\r\n", "---\n")
CLOSING_DELIMITER = "\n---"

DOC_TYPE_MARKERS = frozenset(
    {
        "doc-type: strata",
        'doc-type: "strata"',
        "doc-type: 'strata'",
    }
)


def extract_frontmatter_block(content: str) -> str | None:
    """
    Extract the text between the opening and closing frontmatter delimiters.

    Args:
        content: Full file content

    Returns:
        The block text, or None if the content has no complete block
    """
    for opening in OPENING_DELIMITERS:
        if content.startswith(opening):
            body_start = len(opening)
            break
    else:
        return None

    end = content.find(CLOSING_DELIMITER, body_start)
    if end == -1:
        return None
    return content[body_start:end]


def is_managed_content(content: str) -> bool:
    """Check if in-memory text carries the document-type marker in its frontmatter."""
    block = extract_frontmatter_block(content)
    if block is None:
        return False
    return any(line.strip() in DOC_TYPE_MARKERS for line in block.split("\n"))


class DocumentClassifier:
    """
    Decides whether files on disk are managed documents.

    Never raises: a file that cannot be read or decoded is not a document.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def is_managed_document(self, file_path: str | Path) -> bool:
        """
        Check if a file is a managed document.

        Args:
            file_path: Path to the file to classify

        Returns:
            True if the file's frontmatter carries the document-type marker
        """
        try:
            with open(file_path, encoding=self.encoding, newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cannot read %s for classification: %s", file_path, e)
            return False

        return is_managed_content(content)

