"""
paths.py

Turns the command line's positional arguments into a pattern and a stream of
regular files to scan.
"""

import os
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple, Union

DEFAULT_PATHS = ["."]


@dataclass(frozen=True)
class MissingPath:
    path: str


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def iter_files(directory: str, hidden: bool = False) -> Iterator[str]:
    """
    Walk `directory` recursively in sorted order and yield regular files.
    Symbolic links are never followed or yielded. Dotfiles and dot-directories
    are skipped unless `hidden` is set.
    """
    for root, dirnames, filenames in os.walk(directory, followlinks=False):
        dirnames[:] = sorted(
            d for d in dirnames
            if (hidden or not _is_hidden(d)) and not os.path.islink(os.path.join(root, d))
        )
        for name in sorted(filenames):
            if not hidden and _is_hidden(name):
                continue
            full = os.path.join(root, name)
            if os.path.islink(full) or not os.path.isfile(full):
                continue
            yield full


def resolve_targets(paths: Sequence[str], hidden: bool = False) -> Iterator[Union[str, MissingPath]]:
    """Expand each argument into files to scan, or a MissingPath marker."""
    for path in paths:
        if os.path.isfile(path):
            yield path
        elif os.path.isdir(path):
            yield from iter_files(path, hidden=hidden)
        else:
            yield MissingPath(path)


def split_pattern_and_paths(terms: Sequence[str]) -> Tuple[str, List[str]]:
    """
    Separate the pattern from the paths. Trailing arguments that exist on disk
    are paths; whatever precedes them is joined with spaces into the pattern,
    so `searcher Sherlock Holmes book.txt` searches for "Sherlock Holmes".
    If every argument exists, the first one is the pattern.
    """
    if not terms:
        raise ValueError("PATTERN is required")

    args = list(terms)
    detected: List[str] = []
    while len(args) > 1 and os.path.exists(args[-1]):
        detected.insert(0, args.pop())

    # the loop never takes the last remaining argument, so args is non-empty
    pattern = " ".join(args)
    return pattern, detected or list(DEFAULT_PATHS)
