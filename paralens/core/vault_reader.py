"""
Read-only markdown vault reader.

Walks a directory of markdown notes and produces RawNote objects: YAML
frontmatter, inline tags, wiki links and file timestamps. Malformed
frontmatter degrades to empty metadata.
"""

import re
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from paralens.models.snapshot import RawNote
from paralens.utils.exceptions import ContentReadError, VaultReadError
from paralens.utils.logger import get_logger

logger = get_logger(__name__, operation="scan")

FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
WIKI_LINK_RE = re.compile(r"\[\[([^\]|#^]+)(?:[#^][^\]|]*)?(?:\|[^\]]*)?\]\]")
INLINE_TAG_RE = re.compile(r"(?<![\w#/&])#([A-Za-z_][\w/-]*)")


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """
    Split a note into (frontmatter, body).

    Returns:
        Parsed metadata ({} when absent or malformed) and the remaining text
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    body = text[match.end() :]
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring malformed frontmatter: {e}")
        return {}, body
    if not isinstance(data, dict):
        return {}, body
    # YAML allows non-string keys (`2024: started`); metadata lookups are by name
    return {str(key): value for key, value in data.items()}, body


def extract_links(body: str) -> list[str]:
    return [target.strip() for target in WIKI_LINK_RE.findall(body) if target.strip()]


def extract_inline_tags(body: str) -> list[str]:
    return list(dict.fromkeys(INLINE_TAG_RE.findall(body)))


class MarkdownVaultReader:
    """Enumerates notes under a vault root and reads their content."""

    def __init__(self, root: str | Path, encoding: str = "utf-8"):
        """
        Initialize reader.

        Args:
            root: Vault directory
            encoding: Text encoding of notes

        Raises:
            VaultReadError: If root is not a directory
        """
        self.root = Path(root)
        self.encoding = encoding
        if not self.root.is_dir():
            raise VaultReadError(
                f"Vault root is not a directory: {self.root}", context={"root": str(self.root)}
            )

    def paths(self) -> list[Path]:
        """Markdown files under the root, skipping dot-directories."""
        return sorted(
            path
            for path in self.root.rglob("*.md")
            if path.is_file()
            and not any(part.startswith(".") for part in path.relative_to(self.root).parts)
        )

    def read(self, path: str) -> str:
        """
        Read a note by vault-relative path.

        Raises:
            ContentReadError: If the file cannot be read or decoded
        """
        try:
            return (self.root / path).read_text(encoding=self.encoding)
        except (OSError, UnicodeError) as e:
            raise ContentReadError(f"Cannot read {path}: {e}", context={"path": path}) from e

    def notes(self) -> Iterator[RawNote]:
        """Yield a RawNote per readable markdown file."""
        for file_path in self.paths():
            relative = file_path.relative_to(self.root).as_posix()
            try:
                stat = file_path.stat()
                text = self.read(relative)
            except (OSError, ContentReadError) as e:
                logger.warning(f"Skipping unreadable note {relative}: {e}")
                continue

            frontmatter, body = split_frontmatter(text)
            created = getattr(stat, "st_birthtime", None) or stat.st_ctime
            try:
                note = RawNote(
                    path=relative,
                    basename=file_path.stem,
                    frontmatter=frontmatter,
                    inline_tags=extract_inline_tags(body),
                    links=extract_links(body),
                    created=created * 1000,
                    modified=stat.st_mtime * 1000,
                    content=text,
                )
            except PydanticValidationError as e:
                logger.warning(
                    f"Skipping note with invalid metadata {relative}: {e.error_count()} error(s)"
                )
                continue
            yield note
