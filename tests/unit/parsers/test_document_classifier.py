"""
Unit tests for DocumentClassifier.

Tests frontmatter block extraction, marker detection and the
degrade-to-false behaviour on unreadable files.
"""

import os
import sys

import pytest

from strata_fs.parsers import DocumentClassifier, extract_frontmatter_block, is_managed_content


class TestExtractFrontmatterBlock:
    """Test cases for frontmatter block extraction."""

    def test_block_between_delimiters(self):
        content = "---\ntitle: A\ndoc-type: strata\n---\nbody\n"
        assert extract_frontmatter_block(content) == "title: A\ndoc-type: strata"

    def test_crlf_opening_delimiter(self):
        content = "---\r\ndoc-type: strata\r\n---\r\nbody"
        assert extract_frontmatter_block(content) == "doc-type: strata\r"

    def test_no_opening_delimiter(self):
        assert extract_frontmatter_block("# Title\n---\ndoc-type: strata\n---\n") is None

    def test_opening_delimiter_not_at_offset_zero(self):
        assert extract_frontmatter_block("\n---\ndoc-type: strata\n---\n") is None

    def test_no_closing_delimiter(self):
        assert extract_frontmatter_block("---\ndoc-type: strata\nbody text\n") is None


class TestIsManagedContent:
    """Test cases for marker detection in text."""

    @pytest.mark.parametrize(
        "marker",
        [
            "doc-type: strata",
            'doc-type: "strata"',
            "doc-type: 'strata'",
            "   doc-type: strata   ",
            "\tdoc-type: strata",
        ],
    )
    def test_marker_variants(self, marker):
        content = f"---\ntitle: Plan\n{marker}\n---\n\n# Plan\n"
        assert is_managed_content(content) is True

    def test_crlf_line_endings(self):
        content = "---\r\ntitle: Plan\r\ndoc-type: strata\r\n---\r\nbody\r\n"
        assert is_managed_content(content) is True

    def test_missing_closing_delimiter_is_not_managed(self):
        content = "---\ndoc-type: strata\n\n# Body without a closing delimiter\n"
        assert is_managed_content(content) is False

    def test_marker_outside_block_is_not_managed(self):
        content = "---\ntitle: Notes\n---\n\ndoc-type: strata\n"
        assert is_managed_content(content) is False

    def test_marker_without_frontmatter(self):
        assert is_managed_content("doc-type: strata\n") is False

    def test_other_doc_type(self):
        assert is_managed_content("---\ndoc-type: kanban\n---\n") is False

    def test_marker_must_be_whole_line(self):
        assert is_managed_content("---\nnote: doc-type: strata\n---\n") is False

    @pytest.mark.parametrize("separator", ["\r", "\x0c", "\x1c", "\x85", "\u2028", "\u2029"])
    def test_only_line_feed_separates_lines(self, separator):
        content = f"---\ntitle: x{separator}doc-type: strata\n---\n"
        assert is_managed_content(content) is False

    def test_malformed_body_is_tolerated(self):
        content = "---\ndoc-type: strata\n---\n{{{ not: [valid yaml\n---\n:::\n"
        assert is_managed_content(content) is True

    def test_empty_content(self):
        assert is_managed_content("") is False


class TestDocumentClassifier:
    """Test cases for classifying files on disk."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = DocumentClassifier()

    def test_managed_file(self, tmp_path):
        path = tmp_path / "plan.md"
        path.write_text("---\ndoc-type: strata\n---\n# Plan\n", encoding="utf-8")

        assert self.classifier.is_managed_document(path) is True
        assert self.classifier.is_managed_document(str(path)) is True

    def test_crlf_file_on_disk(self, tmp_path):
        path = tmp_path / "plan.md"
        path.write_bytes(b"---\r\ndoc-type: strata\r\n---\r\n# Plan\r\n")

        assert self.classifier.is_managed_document(path) is True

    def test_unmanaged_file(self, tmp_path):
        path = tmp_path / "readme.md"
        path.write_text("# Readme\n", encoding="utf-8")

        assert self.classifier.is_managed_document(path) is False

    def test_missing_file_is_false(self, tmp_path):
        assert self.classifier.is_managed_document(tmp_path / "missing.md") is False

    def test_directory_is_false(self, tmp_path):
        assert self.classifier.is_managed_document(tmp_path) is False

    def test_invalid_utf8_is_false(self, tmp_path):
        path = tmp_path / "binary.md"
        path.write_bytes(b"---\ndoc-type: strata\n---\n\xff\xfe\xfa")

        assert self.classifier.is_managed_document(path) is False

    @pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="permissions not enforced")
    def test_unreadable_file_is_false(self, tmp_path):
        path = tmp_path / "locked.md"
        path.write_text("---\ndoc-type: strata\n---\n", encoding="utf-8")
        path.chmod(0)
        try:
            assert self.classifier.is_managed_document(path) is False
        finally:
            path.chmod(0o644)
