"""Shared fixtures for schema-index tests."""

from __future__ import annotations

import json
import os
import shutil
import subprocess
from pathlib import Path
from typing import Any

import pytest


class GitRepoBuilder:
    """Creates commits with fixed timestamps in a scratch repository."""

    def __init__(self, root: Path) -> None:
        root.mkdir(parents=True, exist_ok=True)
        self.root = root.resolve()
        self.git("init", "-q")

    def git(self, *args: str, env: dict[str, str] | None = None) -> str:
        run_env = dict(os.environ)
        run_env.update(
            {
                "GIT_AUTHOR_NAME": "Schema Bot",
                "GIT_AUTHOR_EMAIL": "bot@example.com",
                "GIT_COMMITTER_NAME": "Schema Bot",
                "GIT_COMMITTER_EMAIL": "bot@example.com",
                "GIT_CONFIG_NOSYSTEM": "1",
            }
        )
        if env:
            run_env.update(env)
        result = subprocess.run(
            ["git", "-c", "commit.gpgsign=false", *args],
            cwd=self.root,
            env=run_env,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    def write(self, relative: str, content: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def write_schema(self, relative: str, **fields: Any) -> Path:
        return self.write(relative, json.dumps(fields))

    def remove(self, relative: str) -> None:
        (self.root / relative).unlink()

    def commit(self, message: str, timestamp: int, offset: str = "+0000") -> str:
        date = f"@{timestamp} {offset}"
        self.git("add", "-A")
        self.git(
            "commit",
            "-q",
            "--allow-empty",
            "-m",
            message,
            env={"GIT_AUTHOR_DATE": date, "GIT_COMMITTER_DATE": date},
        )
        return self.git("rev-parse", "HEAD").strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepoBuilder:
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    return GitRepoBuilder(tmp_path / "repo")
