"""
git grep pre-filter

For large trees, git grep finds the files containing the pattern much
faster than reading every file line by line. Only those files are then
searched with outline context.
"""

import subprocess
from typing import Iterator, List

from .errors import PrefilterError
from .log import LOG


def gitGrepCommand_build(
    pattern: str,
    pathspec: str,
    regex: bool = False,
    ignore_case: bool = False,
    whole_word: bool = False,
) -> List[str]:
    """
    Build the git grep command line

    Args:
        pattern: Search pattern
        pathspec: Path limiting the search
        regex: Pattern is a regular expression, otherwise a fixed string
        ignore_case: Case-insensitive matching
        whole_word: Match whole words only

    Returns:
        argv list

    Example:
        >>> gitGrepCommand_build("foo", "src")
        ['git', 'grep', '--files-with-matches', '--fixed-strings', '-e', 'foo', '--', 'src']
    """
    command = ["git", "grep", "--files-with-matches"]
    if ignore_case:
        command.append("--ignore-case")
    if not regex:
        command.append("--fixed-strings")
    if whole_word:
        command.append("--word-regexp")
    command += ["-e", pattern, "--", pathspec]
    return command


def files_find(command: List[str]) -> Iterator[str]:
    """
    Run git grep and yield the matching file paths

    Paths are yielded as git prints them, so searching can start before
    git grep finishes.

    Args:
        command: git grep command line, see gitGrepCommand_build()

    Raises:
        PrefilterError: If git grep exits with a status other than
                        0 (matches) or 1 (no matches)
        OSError: If git cannot be started
    """
    LOG(f"Pre-filter: {' '.join(command)}", level=2)
    with subprocess.Popen(command, stdout=subprocess.PIPE, text=True, encoding="utf-8") as process:
        for entry in process.stdout:
            path = entry.rstrip("\n")
            if path:
                yield path
        returncode = process.wait()

    if returncode not in (0, 1):
        raise PrefilterError(returncode)
