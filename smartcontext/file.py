import fnmatch
import os
from pathlib import Path
from typing import List, Optional, Set, Tuple

from smartcontext.config import (
    EXTRANEOUS_DIRS,
    EXTRANEOUS_FILES,
    IGNORE_FILENAMES,
    TEXT_FILE_EXTENSIONS,
    read_ignore_patterns,
)
from smartcontext.logger import get_logger

# --- Caches ---
_ignore_file_cache: dict[str, list[str]] = {}
_is_ignored_cache: dict[str, bool] = {}


def clear_ignore_caches() -> None:
    _ignore_file_cache.clear()
    _is_ignored_cache.clear()


def _read_cached_patterns(ignore_path: str) -> list[str]:
    """Reads patterns from a single ignore file and caches them."""
    if ignore_path not in _ignore_file_cache:
        _ignore_file_cache[ignore_path] = read_ignore_patterns(ignore_path)
    return _ignore_file_cache[ignore_path]


def _is_path_pattern(pattern: str) -> bool:
    # "build/" matches a directory at any depth; "src/gen" is anchored.
    return "/" in pattern.rstrip("/")


def is_text_file(file_path: str) -> bool:
    return os.path.splitext(file_path)[1].lower() in TEXT_FILE_EXTENSIONS


def is_extraneous_file(file_path: str) -> bool:
    """VCS metadata and ignore files never make it into the context."""
    parts = Path(file_path).parts
    if not parts:
        return False
    if parts[-1] in EXTRANEOUS_FILES:
        return True
    return any(part in EXTRANEOUS_DIRS for part in parts)


def is_ignored(
    path: str, default_ignore_patterns: list[str], project_root: Optional[str] = None
) -> bool:
    """
    Checks if a path should be ignored by splitting patterns into fast (basename)
    and slow (full path) checks, with caching. A path inside an ignored
    directory is ignored as well.
    """
    path_abs = os.path.abspath(path)
    if path_abs in _is_ignored_cache:
        return _is_ignored_cache[path_abs]

    parent_dir = os.path.dirname(path_abs)
    if parent_dir != path_abs and _is_ignored_cache.get(parent_dir, False):
        _is_ignored_cache[path_abs] = True
        return True

    if project_root is None:
        project_root = os.getcwd()
    project_root_abs = os.path.abspath(project_root)

    basename_patterns, path_patterns = get_all_patterns(
        default_ignore_patterns, path_abs, project_root_abs
    )

    path_basename = os.path.basename(path_abs)
    for pattern in basename_patterns:
        if fnmatch.fnmatch(path_basename, pattern):
            _is_ignored_cache[path_abs] = True
            return True

    try:
        path_rel_to_root = os.path.relpath(path_abs, project_root_abs)
    except ValueError:
        _is_ignored_cache[path_abs] = False
        return False

    # Every ancestor prefix is checked so "src/gen" also hides "src/gen/a.js".
    path_parts = Path(path_rel_to_root).parts
    path_prefixes = [Path(*path_parts[: i + 1]).as_posix() for i in range(len(path_parts))]

    for prefix in path_prefixes:
        for pattern in path_patterns:
            if fnmatch.fnmatch(prefix, pattern):
                _is_ignored_cache[path_abs] = True
                return True

    # Directories and their contents share one answer for basename patterns.
    for ancestor in path_parts[:-1]:
        for pattern in basename_patterns:
            if fnmatch.fnmatch(ancestor, pattern):
                _is_ignored_cache[path_abs] = True
                return True

    _is_ignored_cache[path_abs] = False
    return False


def get_all_patterns(
    default_ignore_patterns: list[str], path_abs: str, project_root_abs: str
) -> Tuple[Set[str], Set[str]]:
    """
    Gathers all applicable ignore patterns, splitting them into two sets
    for optimized checking: one for basenames, one for root-relative paths.
    Ignore files between the path and the project root contribute patterns
    relative to their own directory.
    """
    basename_patterns: Set[str] = set()
    path_patterns: Set[str] = set()

    for p in default_ignore_patterns:
        if _is_path_pattern(p):
            path_patterns.add(p.strip("/"))
        else:
            basename_patterns.add(p.rstrip("/"))

    search_start_dir = path_abs if os.path.isdir(path_abs) else os.path.dirname(path_abs)

    current_dir = search_start_dir
    while True:
        if not current_dir.startswith(project_root_abs):
            break
        for name in IGNORE_FILENAMES:
            patterns_from_file = _read_cached_patterns(os.path.join(current_dir, name))
            if not patterns_from_file:
                continue
            ignore_dir_rel = Path(os.path.relpath(current_dir, project_root_abs)).as_posix()
            if ignore_dir_rel == ".":
                ignore_dir_rel = ""
            for p in patterns_from_file:
                if _is_path_pattern(p):
                    path_patterns.add(
                        "/".join(part for part in (ignore_dir_rel, p.strip("/")) if part)
                    )
                else:
                    basename_patterns.add(p.rstrip("/"))

        if current_dir == project_root_abs:
            break
        parent = os.path.dirname(current_dir)
        if parent == current_dir:
            break
        current_dir = parent
    return basename_patterns, path_patterns


def should_skip(path: str, ignore_patterns: List[str], project_root: str) -> bool:
    return is_extraneous_file(os.path.relpath(path, project_root)) or is_ignored(
        path, ignore_patterns, project_root
    )


def get_all_text_files(
    folder: str, ignore_patterns: List[str], project_root: Optional[str] = None
) -> List[str]:
    """Recursively lists text files under ``folder`` in sorted name order."""
    logger = get_logger()
    if project_root is None:
        project_root = folder
    results: List[str] = []
    for name in sorted(os.listdir(folder)):
        full_path = os.path.join(folder, name)
        relative_path = Path(os.path.relpath(full_path, project_root)).as_posix()
        if is_extraneous_file(relative_path):
            continue
        if is_ignored(full_path, ignore_patterns, project_root):
            logger.debug("path_ignored", path=relative_path)
            continue
        if os.path.isdir(full_path):
            logger.debug("entering_subfolder", path=relative_path)
            results.extend(get_all_text_files(full_path, ignore_patterns, project_root))
        elif is_text_file(full_path):
            logger.debug("file_added", path=relative_path)
            results.append(full_path)
    return results


def read_file_contents(file_path: str) -> str:
    try:
        with open(file_path, "r", encoding="utf-8", errors="replace") as file:
            return file.read()
    except OSError as e:
        get_logger().warning("read_failed", path=file_path, error=str(e))
        print(f"Error reading {file_path}: {e}")
        return ""
