"""
Tests for attachment storage helpers
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from file_storage import (
    GenerateAttachmentName, GetAttachmentPath, RemoveAttachment,
    StageAttachmentRemoval, RestoreStagedAttachment, DiscardStagedAttachment
)


def test_generated_names_keep_extension_and_differ():
    first = GenerateAttachmentName("Surat Undangan.PDF")
    second = GenerateAttachmentName("Surat Undangan.PDF")

    assert first.startswith("file-")
    assert first.endswith(".pdf")
    assert first != second


def test_generated_names_drop_odd_extensions():
    assert "." not in GenerateAttachmentName("archive.tar.g z")
    assert "." not in GenerateAttachmentName(None)


def test_references_cannot_escape_attachment_dir(tmp_path):
    root = str(tmp_path)
    assert GetAttachmentPath("attachments/file-1.pdf", root) == (tmp_path / "attachments" / "file-1.pdf").resolve()

    with pytest.raises(ValueError):
        GetAttachmentPath("../outside.txt", root)
    with pytest.raises(ValueError):
        GetAttachmentPath("attachments/../database/arsip.db", root)


def test_stage_restore_and_discard(tmp_path):
    root = str(tmp_path)
    stored = tmp_path / "attachments" / "file-1.pdf"
    stored.parent.mkdir()
    stored.write_bytes(b"scan")

    staged = StageAttachmentRemoval("attachments/file-1.pdf", root)
    assert not stored.exists()
    assert staged.exists()

    RestoreStagedAttachment(staged)
    assert stored.read_bytes() == b"scan"

    staged = StageAttachmentRemoval("attachments/file-1.pdf", root)
    DiscardStagedAttachment(staged)
    assert list(stored.parent.iterdir()) == []


def test_missing_files_are_not_errors(tmp_path):
    root = str(tmp_path)
    (tmp_path / "attachments").mkdir()

    assert StageAttachmentRemoval("attachments/missing.pdf", root) is None
    RestoreStagedAttachment(None)
    DiscardStagedAttachment(None)
    RemoveAttachment("attachments/missing.pdf", root)
