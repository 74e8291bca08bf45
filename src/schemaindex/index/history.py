"""Assign "updated" timestamps to schema files from repository history."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Set

from schemaindex.utils.files import normalize_path
from schemaindex.utils.git import CommitRecord, GitRepository

LOGGER = logging.getLogger(__name__)


class HistoryResolver:
    """Walks commits newest first and locks in the first commit that contains each file.

    The recorded commit is the newest one whose tree still holds the file at its
    current path. File contents are never compared, so this approximates
    "last touched" rather than "last modified".
    """

    def __init__(self, repository: GitRepository) -> None:
        self.repository = repository

    def resolve(self, pending: Set[Path]) -> Dict[Path, CommitRecord]:
        """Resolve and remove paths from `pending`.

        Returns resolved paths in resolution order. Paths that are never found
        stay in `pending` for the caller to report.
        """
        resolved: Dict[Path, CommitRecord] = {}
        if not pending:
            return resolved

        for commit in self.repository.commits():
            self._scan_tree(commit, pending, resolved)
            if not pending:
                break

        LOGGER.info("Resolved %d file(s), %d left unresolved", len(resolved), len(pending))
        return resolved

    def _scan_tree(
        self,
        commit: CommitRecord,
        pending: Set[Path],
        resolved: Dict[Path, CommitRecord],
    ) -> None:
        for name in self.repository.iter_tree(commit):
            path = normalize_path(self.repository.root / name)
            if path in pending:
                pending.remove(path)
                resolved[path] = commit
                LOGGER.debug("%s last seen in %s", path, commit.sha[:12])
                if not pending:
                    return
