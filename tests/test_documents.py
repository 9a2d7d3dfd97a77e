"""Tests for document discovery and loading.

Covers extension filtering, pruning of hidden and dependency directories,
ordering, and the distinct not-found / empty-directory failures.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from mdview import documents
from mdview.documents import DocumentRef, decode_bytes, load_document, resolve, should_descend, stdin_document
from mdview.errors import DocumentNotFound, EmptyDirectory, UnreadableFile


def _touch(path: Path, text: str = "# doc\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class ResolveTests(unittest.TestCase):
    def test_directory_keeps_only_markdown_extensions(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "a.md")
            _touch(root / "b.markdown")
            _touch(root / "c.txt")

            found = resolve(root)

        self.assertEqual([doc.display_name for doc in found], ["a.md", "b.markdown"])
        self.assertEqual([doc.path for doc in found], [root / "a.md", root / "b.markdown"])

    def test_nested_documents_are_sorted_by_full_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "z.md")
            _touch(root / "docs" / "b.md")
            _touch(root / "docs" / "A.md")
            _touch(root / "Guide.md")

            found = resolve(root)

        paths = [str(doc.path) for doc in found]
        self.assertEqual(paths, sorted(paths))
        self.assertEqual(
            [doc.display_name for doc in found],
            ["Guide.md", "docs/A.md", "docs/b.md", "z.md"],
        )

    def test_hidden_and_dependency_directories_are_excluded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "README.md")
            _touch(root / ".git" / "notes.md")
            _touch(root / "node_modules" / "pkg" / "README.md")
            _touch(root / "src" / "node_modules" / "deep.md")
            _touch(root / "src" / "guide.md")

            found = resolve(root)

        self.assertEqual([doc.display_name for doc in found], ["README.md", "src/guide.md"])

    def test_pruned_directories_are_never_walked(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "README.md")
            _touch(root / "node_modules" / "pkg" / "README.md")
            visited: list[str] = []
            real_walk = os.walk

            def recording_walk(top, *args, **kwargs):
                for dirpath, dirnames, filenames in real_walk(top, *args, **kwargs):
                    visited.append(Path(dirpath).name)
                    yield dirpath, dirnames, filenames

            with mock.patch("mdview.documents.os.walk", side_effect=recording_walk):
                resolve(root)

        self.assertNotIn("node_modules", visited)
        self.assertNotIn("pkg", visited)

    def test_extra_excluded_directories_are_pruned(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "keep.md")
            _touch(root / "vendor" / "skip.md")

            found = resolve(root, excluded_dirs={"node_modules", "vendor"})

        self.assertEqual([doc.display_name for doc in found], ["keep.md"])

    def test_single_file_resolves_to_itself(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "notes.txt"
            _touch(target)

            found = resolve(target)

        self.assertEqual(found, [DocumentRef(path=target, display_name="notes.txt")])

    def test_missing_target_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(DocumentNotFound) as ctx:
                resolve(Path(tmp) / "missing")

        self.assertIn("Not found", str(ctx.exception))

    def test_directory_without_documents_raises_empty_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "c.txt")
            _touch(root / "node_modules" / "x.md")

            with self.assertRaises(EmptyDirectory):
                resolve(root)


class PruningPredicateTests(unittest.TestCase):
    def test_should_descend(self) -> None:
        self.assertTrue(should_descend("docs"))
        self.assertFalse(should_descend(".git"))
        self.assertFalse(should_descend("node_modules"))
        self.assertTrue(should_descend("node_modules", excluded_dirs=()))


class LoadDocumentTests(unittest.TestCase):
    def test_load_document_reads_utf8_text(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "a.md"
            target.write_text("# Überschrift\n", encoding="utf-8")

            text = load_document(DocumentRef(path=target, display_name="a.md"))

        self.assertEqual(text, "# Überschrift\n")

    def test_load_document_falls_back_for_non_utf8_bytes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "a.md"
            target.write_bytes(b"caf\xe9\n")

            text = load_document(DocumentRef(path=target, display_name="a.md"))

        self.assertEqual(text, "café\n")

    def test_vanished_document_raises_unreadable_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "gone.md"
            with self.assertRaises(UnreadableFile) as ctx:
                load_document(DocumentRef(path=target, display_name="gone.md"))

        self.assertEqual(ctx.exception.path, target)

    def test_decode_bytes_uses_the_same_fallback_chain(self) -> None:
        self.assertEqual(decode_bytes("Überschrift".encode("utf-8")), "Überschrift")
        self.assertEqual(decode_bytes(b"caf\xe9 menu\n"), "café menu\n")
        self.assertEqual(decode_bytes(b""), "")

    def test_stdin_document_is_named_stdin(self) -> None:
        self.assertEqual(stdin_document().display_name, documents.STDIN_NAME)
        self.assertEqual(documents.STDIN_NAME, "stdin")


if __name__ == "__main__":
    unittest.main()
