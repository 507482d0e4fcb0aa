import os
from typing import List

from smartcontext.logger import get_logger

TEXT_FILE_EXTENSIONS = (
    ".asm", ".bat", ".c", ".cfg", ".clj", ".conf", ".cpp", ".cs", ".css", ".csv",
    ".d", ".dart", ".ejs", ".elm", ".erl", ".f", ".go", ".gradle", ".groovy", ".h",
    ".hbs", ".hpp", ".hs", ".html", ".ini", ".jade", ".java", ".js", ".json", ".jsx",
    ".kt", ".less", ".lisp", ".log", ".lua", ".m", ".makefile", ".md", ".mdx", ".ml",
    ".mjs", ".mustache", ".pas", ".php", ".pl", ".properties", ".pug", ".py", ".r",
    ".rb", ".rs", ".sass", ".scala", ".scheme", ".scss", ".sh", ".sql", ".svelte",
    ".swift", ".tcl", ".tex", ".tpl", ".ts", ".tsx", ".twig", ".txt", ".vb", ".vue",
    ".xml", ".yaml", ".yml",
)

EXTRANEOUS_FILES = (".gitignore", ".scignore", ".DS_Store")
EXTRANEOUS_DIRS = (".git",)

IGNORE_FILENAMES = (".gitignore", ".scignore")

DEFAULT_IGNORE_PATTERNS = [
    "node_modules",
    "venv",
    ".venv",
    "__pycache__",
    "*.pyc",
    ".ruff_cache",
    ".mypy_cache",
    ".pytest_cache",
    ".idea",
    ".vscode",
    "Thumbs.db",
]


def read_ignore_patterns(ignore_path: str) -> List[str]:
    """Reads patterns from a single ignore file, skipping blanks and comments."""
    patterns: List[str] = []
    if not os.path.isfile(ignore_path):
        return patterns
    try:
        with open(ignore_path, "r", encoding="utf-8") as f:
            for line in f:
                stripped_line = line.strip()
                if stripped_line and not stripped_line.startswith("#"):
                    patterns.append(stripped_line)
    except (OSError, UnicodeDecodeError) as e:
        get_logger().warning("ignore_file_unreadable", path=ignore_path, error=str(e))
    return patterns


def collect_ancestor_patterns(folder: str) -> List[str]:
    """
    Gathers .gitignore and .scignore patterns from ``folder`` and every
    ancestor up to the filesystem root. All of them apply relative to
    ``folder``; ignore files below ``folder`` are picked up per path by
    ``smartcontext.file.is_ignored``.
    """
    patterns = DEFAULT_IGNORE_PATTERNS.copy()
    current_dir = os.path.abspath(folder)
    while True:
        for name in IGNORE_FILENAMES:
            found = read_ignore_patterns(os.path.join(current_dir, name))
            if found:
                get_logger().info(
                    "ignore_file_loaded",
                    path=os.path.join(current_dir, name),
                    count=len(found),
                )
                patterns.extend(found)
        parent = os.path.dirname(current_dir)
        if parent == current_dir:
            break
        current_dir = parent
    return patterns
