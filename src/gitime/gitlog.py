"""Read commit messages from a git repository.

Runs ``git log`` and splits its output on ASCII unit and record
separators, which cannot appear in commit messages typed by hand.
"""

import logging
import subprocess
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\x1f"
RECORD_SEPARATOR = "\x1e"

# hash, author name, author date (ISO 8601), subject, body
LOG_FORMAT = "%H%x1f%an%x1f%aI%x1f%s%x1f%b%x1e"


class GitLogError(Exception):
    """Exception raised when the git history cannot be read."""

    pass


class Commit(BaseModel):
    """A commit as seen by the time collector."""

    hash: str = Field(description="Full commit hash")
    author: str = Field(default="", description="Author name")
    date: str = Field(default="", description="Author date in ISO 8601 format")
    subject: str = Field(default="", description="First line of the commit message")
    body: str = Field(default="", description="Rest of the commit message")

    @property
    def short_hash(self) -> str:
        return self.hash[:8]


def parse_git_log(output: str) -> list[Commit]:
    """Parse the output of ``git log`` run with :data:`LOG_FORMAT`.

    Args:
        output: Raw stdout of git log.

    Returns:
        Commits in the order git listed them.
    """
    commits = []
    for record in output.split(RECORD_SEPARATOR):
        record = record.lstrip("\n")
        if not record.strip():
            continue

        fields = record.split(FIELD_SEPARATOR, 4)
        if len(fields) != 5:
            logger.warning(f"Skipping malformed git log record: {record[:80]!r}")
            continue

        commit_hash, author, date, subject, body = fields
        commits.append(
            Commit(
                hash=commit_hash,
                author=author,
                date=date,
                subject=subject,
                body=body.rstrip("\n"),
            )
        )
    return commits


def read_commits(
    repo_path: str | Path = ".",
    rev: str | None = None,
    git_executable: str = "git",
) -> list[Commit]:
    """Read the commits reachable from a revision, newest first.

    Args:
        repo_path: Directory inside the repository.
        rev: Revision or range to log (e.g. ``main..feature``).
            Defaults to the checked out branch.
        git_executable: Name or path of the git binary.

    Returns:
        List of commits.

    Raises:
        GitLogError: If git cannot be run or fails, or if ``rev`` looks
            like an option.
    """
    if rev and rev.startswith("-"):
        raise GitLogError(f"Invalid revision: {rev!r}")

    cmd = [git_executable, "log", f"--pretty=format:{LOG_FORMAT}"]
    if rev:
        cmd.append(rev)
    cmd.append("--")

    logger.debug(f"Running {' '.join(cmd)} in {repo_path}")

    try:
        result = subprocess.run(
            cmd,
            cwd=repo_path,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
    except OSError as e:
        raise GitLogError(f"Cannot run {git_executable}: {e}") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitLogError(f"Cannot read git log: {stderr or e}") from e

    commits = parse_git_log(result.stdout)
    logger.debug(f"Read {len(commits)} commits from {repo_path}")
    return commits
