"""
Arsip Server - Attachment Storage

This module handles storage of uploaded letter documents:
- Storage directory creation
- Collision-resistant file naming
- Path resolution for stored references
- Staged removal so a letter deletion can be undone if its database
  transaction fails

Letters store the attachment as a path relative to the storage root,
e.g. "attachments/file-1718000000000-123456789.pdf".
"""

import logging
import re
import secrets
import time
from pathlib import Path
from typing import Optional

from config import settings

logger = logging.getLogger(__name__)


# ==================== Storage Configuration ====================

ATTACHMENT_DIR = "attachments"
STAGED_SUFFIX = ".deleting"
CHUNK_SIZE = 8192


def _Root(storage_root: Optional[str]) -> Path:
    return Path(storage_root or settings.storage_root)


# ==================== Storage Directory Management ====================

def InitializeStorage(storage_root: Optional[str] = None) -> None:
    """
    Initialize the attachment storage directory structure

    Args:
        storage_root: Root directory for file storage (config value if None)
    """
    attachment_path = _Root(storage_root) / ATTACHMENT_DIR

    try:
        attachment_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Attachment directory ready: {attachment_path.absolute()}")
    except Exception as e:
        logger.error(f"Failed to initialize storage: {str(e)}")
        raise


def GenerateAttachmentName(original_filename: Optional[str]) -> str:
    """
    Build a unique stored file name, keeping the original extension

    Args:
        original_filename: Name supplied by the client

    Returns:
        str: e.g. "file-1718000000000-123456789.pdf"
    """
    suffix = Path(original_filename or "").suffix.lower()
    if not re.match(r'^\.[a-z0-9]{1,10}$', suffix):
        suffix = ""
    unique = f"{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}"
    return f"file-{unique}{suffix}"


def GetAttachmentPath(relative_path: str, storage_root: Optional[str] = None) -> Path:
    """
    Resolve a stored attachment reference to an absolute path

    Args:
        relative_path: Reference stored on the letter
        storage_root: Root directory for file storage

    Returns:
        Path: Absolute path inside the attachment directory

    Raises:
        ValueError: If the reference points outside the attachment directory
    """
    attachment_dir = (_Root(storage_root) / ATTACHMENT_DIR).resolve()
    file_path = (_Root(storage_root) / relative_path).resolve()
    if attachment_dir not in file_path.parents:
        raise ValueError(f"Invalid attachment reference: {relative_path}")
    return file_path


# ==================== Store / Remove ====================

async def StoreAttachment(upload_file, storage_root: Optional[str] = None) -> str:
    """
    Write an uploaded file into attachment storage

    Args:
        upload_file: FastAPI UploadFile
        storage_root: Root directory for file storage

    Returns:
        str: Reference to store on the letter
    """
    InitializeStorage(storage_root)

    relative_path = f"{ATTACHMENT_DIR}/{GenerateAttachmentName(upload_file.filename)}"
    file_path = GetAttachmentPath(relative_path, storage_root)

    size = 0
    with open(file_path, 'wb') as f:
        # Read file in chunks to handle large files efficiently
        while chunk := await upload_file.read(CHUNK_SIZE):
            f.write(chunk)
            size += len(chunk)

    logger.info(f"Stored attachment '{upload_file.filename}' as {relative_path} ({size} bytes)")
    return relative_path


def RemoveAttachment(relative_path: str, storage_root: Optional[str] = None) -> None:
    """
    Remove a stored attachment. A file that is already gone is not an error.

    Args:
        relative_path: Reference stored on the letter
        storage_root: Root directory for file storage
    """
    file_path = GetAttachmentPath(relative_path, storage_root)
    file_path.unlink(missing_ok=True)
    logger.info(f"Removed attachment {relative_path}")


def StageAttachmentRemoval(relative_path: str, storage_root: Optional[str] = None) -> Optional[Path]:
    """
    Move an attachment aside ahead of deleting its letter

    Args:
        relative_path: Reference stored on the letter
        storage_root: Root directory for file storage

    Returns:
        Path: Location of the staged file, or None if the file was missing
    """
    file_path = GetAttachmentPath(relative_path, storage_root)
    if not file_path.exists():
        logger.warning(f"Attachment {relative_path} already missing, nothing to stage")
        return None

    staged_path = file_path.with_name(file_path.name + STAGED_SUFFIX)
    file_path.rename(staged_path)
    return staged_path


def RestoreStagedAttachment(staged_path: Optional[Path]) -> None:
    """Put a staged attachment back after a failed deletion"""
    if staged_path is None:
        return
    original_path = staged_path.with_name(staged_path.name[:-len(STAGED_SUFFIX)])
    staged_path.rename(original_path)
    logger.info(f"Restored attachment {original_path.name}")


def DiscardStagedAttachment(staged_path: Optional[Path]) -> None:
    """Permanently remove a staged attachment once its letter is gone"""
    if staged_path is None:
        return
    staged_path.unlink(missing_ok=True)
