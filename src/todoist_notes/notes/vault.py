# src/todoist_notes/notes/vault.py

from __future__ import annotations

import asyncio
import logging
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)


class FileSystemVault:
    """
    A vault backed by a plain directory.

    Paths are vault-relative and POSIX-style ("Tasks/Buy_milk.md").
    create() has create-new semantics: an existing file raises FileExistsError
    and is never overwritten. Missing parent folders are created.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).expanduser()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, path: str) -> Path:
        rel = PurePosixPath(path)
        if rel.is_absolute() or ".." in rel.parts:
            raise ValueError(f"Vault path must be relative and stay inside the vault: {path!r}")
        return self._root.joinpath(*rel.parts)

    async def create(self, path: str, content: str) -> None:
        target = self.resolve(path)
        await asyncio.to_thread(self._create_new, target, content)
        logger.debug("Vault file created: %s", target)

    @staticmethod
    def _create_new(target: Path, content: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        # "x" mode: atomic create-or-fail, so a concurrent writer cannot be clobbered.
        f = open(target, "x", encoding="utf-8", newline="\n")
        try:
            with f:
                f.write(content)
        except BaseException:
            # A half-written note would block every later create() for this path.
            target.unlink(missing_ok=True)
            raise
