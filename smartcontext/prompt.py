import os
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from smartcontext.file import (
    get_all_text_files,
    read_file_contents,
    should_skip,
)
from smartcontext.minify import minify_content
from smartcontext.skeleton import skeletonize

BLOCK_SEPARATOR_OPEN = "----------------------"
BLOCK_SEPARATOR = "-----------------------"


class ContextMode(Enum):
    FULL = "full"
    MINIFIED = "minified"
    SKELETON = "skeleton"


FOLDER_HEADINGS = {
    ContextMode.FULL: "File Contents:",
    ContextMode.MINIFIED: "File Contents (Minified):",
    ContextMode.SKELETON: "Stripped Methods (Logic Removed):",
}

FILES_HEADINGS = {
    ContextMode.FULL: "Selected Files Contents:",
    ContextMode.MINIFIED: "Selected Files Contents (Minified):",
    ContextMode.SKELETON: "Selected Files Methods (Logic Removed):",
}


def render_content(content: str, mode: ContextMode) -> str:
    if mode is ContextMode.MINIFIED:
        return minify_content(content)
    if mode is ContextMode.SKELETON:
        return skeletonize(content)
    return content


def generate_folder_structure(
    folder: str,
    ignore_patterns: List[str],
    prefix: str = "",
    project_root: Optional[str] = None,
) -> str:
    """Renders the folder as a box-drawing tree, one entry per line."""
    if project_root is None:
        project_root = folder
    entries = [
        name
        for name in sorted(os.listdir(folder))
        if not should_skip(os.path.join(folder, name), ignore_patterns, project_root)
    ]

    structure = ""
    for index, name in enumerate(entries):
        full_path = os.path.join(folder, name)
        is_last = index == len(entries) - 1
        connector = "└── " if is_last else "├── "
        structure += f"{prefix}{connector}{name}\n"
        if os.path.isdir(full_path):
            structure += generate_folder_structure(
                full_path,
                ignore_patterns,
                prefix + ("    " if is_last else "│   "),
                project_root,
            )
    return structure


def format_file_block(relative_path: str, content: str) -> str:
    posix_path = relative_path.replace("\\", "/")
    return (
        f"{BLOCK_SEPARATOR_OPEN}\n/{posix_path}\n{BLOCK_SEPARATOR}\n"
        f"{content}\n{BLOCK_SEPARATOR}\n\n"
    )


def build_folder_context(
    folder: str, mode: ContextMode, ignore_patterns: List[str]
) -> Tuple[str, int]:
    """
    Builds the clipboard text for a whole folder: its structure tree, then
    one block per collected text file rendered according to ``mode``.

    Returns the text and the number of files included. With no files the
    text is empty.
    """
    text_files = get_all_text_files(folder, ignore_patterns)
    if not text_files:
        return "", 0

    folder_structure = generate_folder_structure(folder, ignore_patterns)
    folder_name = os.path.basename(os.path.abspath(folder))
    context = f"{folder_name} Folder Structure:\n{folder_structure}\n"
    context += FOLDER_HEADINGS[mode] + "\n"

    for file_path in text_files:
        relative_path = Path(os.path.relpath(file_path, folder)).as_posix()
        content = render_content(read_file_contents(file_path), mode)
        context += format_file_block(relative_path, content)
    return context, len(text_files)


def build_files_context(
    file_paths: List[str], mode: ContextMode, base_dir: Optional[str] = None
) -> str:
    """Builds the clipboard text for an explicit list of files, in the given order."""
    if base_dir is None:
        base_dir = os.getcwd()
    context = FILES_HEADINGS[mode] + "\n"
    for file_path in file_paths:
        relative_path = Path(os.path.relpath(file_path, base_dir)).as_posix()
        content = render_content(read_file_contents(file_path), mode)
        context += format_file_block(relative_path, content)
    return context
