"""Document discovery and loading.

Resolves the invocation target into an ordered list of markdown documents.
Directories are walked recursively; hidden and dependency-cache directories
are pruned before descending so large excluded trees are never scanned.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Collection
from dataclasses import dataclass
from pathlib import Path

from .config import DEFAULT_EXCLUDED_DIRS
from .errors import DocumentNotFound, EmptyDirectory, UnreadableFile

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")
STDIN_NAME = "stdin"


@dataclass(frozen=True)
class DocumentRef:
    path: Path
    display_name: str


def stdin_document() -> DocumentRef:
    """Return the anonymous document used for piped standard input."""
    return DocumentRef(path=Path("-"), display_name=STDIN_NAME)


def is_document_name(name: str) -> bool:
    return name.endswith(MARKDOWN_SUFFIXES)


def should_descend(name: str, excluded_dirs: Collection[str] = DEFAULT_EXCLUDED_DIRS) -> bool:
    """Return whether the walk may enter a subdirectory called ``name``."""
    return not name.startswith(".") and name not in excluded_dirs


def _walk_documents(root: Path, excluded_dirs: Collection[str]) -> list[DocumentRef]:
    documents: list[DocumentRef] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if should_descend(name, excluded_dirs)]
        base = Path(dirpath)
        for filename in filenames:
            if not is_document_name(filename):
                continue
            path = base / filename
            documents.append(DocumentRef(path=path, display_name=path.relative_to(root).as_posix()))
    documents.sort(key=lambda doc: str(doc.path))
    return documents


def resolve(target: Path, excluded_dirs: Collection[str] = DEFAULT_EXCLUDED_DIRS) -> list[DocumentRef]:
    """Resolve ``target`` into the documents it names.

    A file resolves to itself. A directory resolves to every ``.md`` /
    ``.markdown`` file beneath it, sorted by full path.

    Raises:
        DocumentNotFound: ``target`` does not exist.
        EmptyDirectory: ``target`` is a directory without markdown documents.
    """
    target = Path(target)
    if not target.exists():
        raise DocumentNotFound(target)
    if not target.is_dir():
        return [DocumentRef(path=target, display_name=target.name)]

    documents = _walk_documents(target, excluded_dirs)
    logger.debug("Found %d markdown documents under %s", len(documents), target)
    if not documents:
        raise EmptyDirectory(target)
    return documents


def decode_bytes(data: bytes) -> str:
    """Decode document bytes, trying UTF-8 first and falling back to Latin-1."""
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def read_text(path: Path) -> str:
    return decode_bytes(path.read_bytes())


def load_document(document: DocumentRef) -> str:
    """Read a listed document, converting filesystem errors to ``UnreadableFile``."""
    try:
        return read_text(document.path)
    except OSError as exc:
        raise UnreadableFile(document.path, exc.strerror or str(exc)) from exc
