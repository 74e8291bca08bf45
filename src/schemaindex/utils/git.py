"""Thin wrapper around the git command line."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Sequence

from schemaindex.errors import GitError

LOGGER = logging.getLogger(__name__)

# %cd with --date=raw renders "<seconds> <+hhmm>"
_LOG_FORMAT = "--format=%H %cd"


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """A commit reachable from HEAD with its committer time."""

    sha: str
    time: int
    offset_minutes: int

    @property
    def timestamp(self) -> int:
        """Committer wall-clock time expressed as seconds since the epoch."""
        return self.time + self.offset_minutes * 60


def _parse_offset(raw: str) -> int:
    sign = -1 if raw.startswith("-") else 1
    digits = raw.lstrip("+-")
    if len(digits) != 4 or not digits.isdigit():
        raise ValueError(f"unexpected timezone offset {raw!r}")
    return sign * (int(digits[:2]) * 60 + int(digits[2:]))


def parse_log_line(line: str) -> CommitRecord:
    """Parse one line of `git log --format='%H %cd' --date=raw` output."""
    try:
        sha, seconds, offset = line.split()
        return CommitRecord(sha=sha, time=int(seconds), offset_minutes=_parse_offset(offset))
    except ValueError as exc:
        raise GitError(f"unexpected git log output: {line!r}") from exc


def _run_git(args: Sequence[str], cwd: Path) -> str:
    command = ["git", *args]
    LOGGER.debug("Running %s in %s", " ".join(command), cwd)
    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="surrogateescape",
        )
    except FileNotFoundError as exc:
        raise GitError("git executable not found") from exc
    except OSError as exc:
        raise GitError(f"failed to run {' '.join(command)}: {exc}") from exc
    if result.returncode != 0:
        message = result.stderr.strip() or f"exit status {result.returncode}"
        raise GitError(f"{' '.join(command)} failed: {message}")
    return result.stdout


class GitRepository:
    """Read-only access to the history of a git work tree."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    @classmethod
    def discover(cls, path: Path) -> "GitRepository":
        """Find the repository containing `path`, searching parent directories."""
        start = Path(path).expanduser().resolve()
        if not start.is_dir():
            raise GitError(f"not a directory: {start}")
        toplevel = _run_git(["rev-parse", "--show-toplevel"], start).strip()
        if not toplevel:
            raise GitError(f"not a git work tree: {start}")
        return cls(Path(toplevel).resolve())

    def commits(self) -> List[CommitRecord]:
        """Return commits reachable from HEAD, newest commit time first.

        Ties keep the order `git log` reports them in.
        """
        output = _run_git(
            ["log", "--no-show-signature", _LOG_FORMAT, "--date=raw", "HEAD"],
            self.root,
        )
        records = [parse_log_line(line) for line in output.splitlines() if line.strip()]
        records.sort(key=lambda record: record.time, reverse=True)
        return records

    def iter_tree(self, commit: CommitRecord) -> Iterator[str]:
        """Yield every path in the commit's tree, relative to the repository root.

        Names that are not valid UTF-8 are skipped.
        """
        output = _run_git(
            ["ls-tree", "-r", "-z", "--full-tree", "--name-only", commit.sha],
            self.root,
        )
        for name in output.split("\0"):
            if not name:
                continue
            try:
                name.encode("utf-8")
            except UnicodeEncodeError:
                LOGGER.debug("Skipping non UTF-8 path %r in %s", name, commit.sha)
                continue
            yield name
