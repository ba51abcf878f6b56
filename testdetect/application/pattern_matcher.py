"""
Pattern matching of a file against resolved test patterns.

Glob patterns are evaluated with wcmatch (globstar, brace expansion and
extglob, case-insensitive) against the path relative to the base
directory. Regex patterns are searched in the same relative path. Jest
``testPathIgnorePatterns`` are searched in the absolute path while glob
exclusions use the relative path.
"""

import logging
import os
import re
from collections.abc import Sequence
from functools import lru_cache

from wcmatch import glob
from wcmatch._wcparse import PatternLimitException

from ..domain.frameworks import DEFAULT_TEST_PATTERNS
from ..domain.models import TestPatterns

logger = logging.getLogger(__name__)

ROOT_DIR_TOKEN = "<rootDir>"

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB | glob.IGNORECASE | glob.FORCEUNIX

# brace expansions allowed per glob; larger globs are skipped
GLOB_EXPANSION_LIMIT = 10000

_ROOT_DIR_PREFIX = re.compile(r"^<rootdir>/?", re.IGNORECASE)
_ROOT_DIR_ANY = re.compile(re.escape(ROOT_DIR_TOKEN), re.IGNORECASE)
_JS_NAMED_GROUP = re.compile(r"\(\?<(?![=!])")


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def is_within(path: str, directory: str) -> bool:
    """Whether ``path`` equals ``directory`` or lies below it."""
    path = os.path.normpath(path)
    directory = os.path.normpath(directory)
    return path == directory or path.startswith(directory.rstrip(os.sep) + os.sep)


@lru_cache(maxsize=512)
def compile_js_regex(source: str) -> re.Pattern[str] | None:
    """Compile a JavaScript regex source with ``re``, or None if invalid."""
    try:
        return re.compile(_JS_NAMED_GROUP.sub("(?P<", source))
    except re.error as e:
        logger.debug(f"Skipping invalid regex {source!r}: {e}")
        return None


def _normalize_glob(pattern: str) -> str:
    pattern = _ROOT_DIR_PREFIX.sub("", pattern)
    return pattern.lstrip("/")


def _resolve_root(root: str, base_dir: str) -> str:
    resolved = _ROOT_DIR_ANY.sub(lambda _: base_dir, root)
    return os.path.normpath(os.path.join(base_dir, resolved))


def glob_matches(relative_path: str, patterns: Sequence[str]) -> bool:
    """Whether a relative posix path matches any glob in ``patterns``."""
    cleaned = [_normalize_glob(p) for p in patterns if isinstance(p, str) and p]
    if not cleaned:
        return False
    return any(globmatch(relative_path, pattern) for pattern in cleaned)


def globmatch(path: str, pattern: str, flags: int = GLOB_FLAGS) -> bool:
    """Match one glob, treating a glob that expands too far as no match."""
    try:
        return glob.globmatch(path, pattern, flags=flags, limit=GLOB_EXPANSION_LIMIT)
    except PatternLimitException as e:
        logger.debug(f"Skipping glob {pattern!r}: {e}")
        return False


def regex_matches(target: str, patterns: Sequence[str]) -> bool:
    for pattern in patterns:
        if not isinstance(pattern, str) or not pattern:
            continue
        compiled = compile_js_regex(pattern)
        if compiled is not None and compiled.search(target):
            return True
    return False


def is_excluded(
    file_path: str,
    relative_path: str,
    base_dir: str,
    ignore_patterns: Sequence[str] | None = None,
    exclude_patterns: Sequence[str] | None = None,
) -> bool:
    """Veto check: regex ignores on the absolute path, glob excludes on the relative path."""
    if ignore_patterns:
        absolute = to_posix(os.path.abspath(file_path))
        escaped_base = re.escape(to_posix(base_dir))
        for pattern in ignore_patterns:
            if not isinstance(pattern, str) or not pattern:
                continue
            compiled = compile_js_regex(_ROOT_DIR_ANY.sub(lambda _: escaped_base, pattern))
            if compiled is not None and compiled.search(absolute):
                return True

    if exclude_patterns and glob_matches(relative_path, exclude_patterns):
        return True

    return False


def file_matches_patterns(
    file_path: str,
    config_dir: str,
    patterns: Sequence[str] | None,
    is_regex: bool = False,
    root_dir: str | None = None,
    ignore_patterns: Sequence[str] | None = None,
    exclude_patterns: Sequence[str] | None = None,
    roots: Sequence[str] | None = None,
    *,
    test_dir: str | None = None,
    default_patterns: Sequence[str] = DEFAULT_TEST_PATTERNS,
) -> bool:
    """
    Decide whether ``file_path`` is selected by a set of test patterns.

    Args:
        file_path: Absolute path of the candidate file
        config_dir: Directory of the config file the patterns came from
        patterns: Globs or regex sources; empty means ``default_patterns``
        is_regex: Interpret ``patterns`` as regular expressions
        root_dir: Anchor directory relative to ``config_dir``
        ignore_patterns: Regex vetoes searched in the absolute path
        exclude_patterns: Glob vetoes matched against the relative path
        roots: Allow-list of directories; may contain ``<rootDir>``
        test_dir: Sub-root (relative to the base directory) narrowing discovery
        default_patterns: Globs used when ``patterns`` is empty

    Returns:
        True if the file matches and is not vetoed
    """
    file_path = os.path.normpath(os.path.abspath(file_path))
    base_dir = os.path.normpath(os.path.join(config_dir, root_dir or "."))

    if test_dir:
        base_dir = os.path.normpath(os.path.join(base_dir, test_dir))

    # nothing outside the base directory is ever selected
    if not is_within(file_path, base_dir):
        return False

    relative_path = to_posix(os.path.relpath(file_path, base_dir))

    if roots:
        resolved_roots = [_resolve_root(root, base_dir) for root in roots if isinstance(root, str)]
        if not any(is_within(file_path, root) for root in resolved_roots):
            return False

    if not patterns:
        patterns, is_regex = default_patterns, False

    if is_regex:
        matched = regex_matches(relative_path, patterns)
    else:
        matched = glob_matches(relative_path, patterns)

    if not matched:
        return False

    return not is_excluded(file_path, relative_path, base_dir, ignore_patterns, exclude_patterns)


def matches_test_patterns(
    file_path: str,
    config_dir: str,
    test_patterns: TestPatterns | None,
    default_patterns: Sequence[str] = DEFAULT_TEST_PATTERNS,
) -> bool:
    """``file_matches_patterns`` over a parsed record; None means defaults."""
    if test_patterns is None:
        return file_matches_patterns(file_path, config_dir, [], default_patterns=default_patterns)
    return file_matches_patterns(
        file_path,
        config_dir,
        test_patterns.patterns,
        test_patterns.is_regex,
        test_patterns.root_dir,
        test_patterns.ignore_patterns,
        test_patterns.exclude_patterns,
        test_patterns.roots,
        test_dir=test_patterns.dir,
        default_patterns=default_patterns,
    )
