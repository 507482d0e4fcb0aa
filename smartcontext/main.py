#!/usr/bin/env python3
import argparse
import os
import sys
from typing import List, Optional

import pyperclip
from rich.console import Console

from smartcontext.config import collect_ancestor_patterns
from smartcontext.logger import configure_logging, get_logger
from smartcontext.prompt import ContextMode, build_files_context, build_folder_context


def _mode_from_args(args: argparse.Namespace) -> ContextMode:
    if args.minify:
        return ContextMode.MINIFIED
    if args.strip:
        return ContextMode.SKELETON
    return ContextMode.FULL


def deliver(context: str, success_message: str, console: Console, to_stdout: bool) -> None:
    """Hands the finished context to the clipboard, or stdout when asked or when the clipboard fails."""
    logger = get_logger()
    if to_stdout:
        sys.stdout.write(context)
        logger.info("context_written", target="stdout", chars=len(context))
        return
    try:
        pyperclip.copy(context)
    except pyperclip.PyperclipException as e:
        logger.warning("clipboard_failed", error=str(e))
        err_console = Console(stderr=True, soft_wrap=True)
        err_console.print(f"[bold yellow]Warning: Failed to copy to clipboard: {e}[/bold yellow]")
        err_console.print("Writing the context to stdout instead.")
        sys.stdout.write(context)
        return
    logger.info("context_copied", target="clipboard", chars=len(context))
    console.print(f"[bold green]{success_message}[/bold green]")


def run_folder(args: argparse.Namespace, console: Console) -> int:
    logger = get_logger()
    mode = _mode_from_args(args)
    folder_path = os.path.abspath(args.path)

    if not os.path.isdir(folder_path):
        console.print("[bold red]Please select a valid folder.[/bold red]")
        return 1

    try:
        logger.info("gather_start", folder=folder_path, mode=mode.value)
        ignore_patterns = collect_ancestor_patterns(folder_path)
        context, file_count = build_folder_context(folder_path, mode, ignore_patterns)
        logger.info("gather_done", folder=folder_path, files=file_count)
    except OSError as e:
        logger.error("gather_failed", folder=folder_path, exc_info=True)
        console.print(f"[bold red]Failed to copy folder contents: {e}[/bold red]")
        return 1

    if file_count == 0:
        console.print("No text files found in the selected folder and its subfolders.")
        return 0

    if mode is ContextMode.SKELETON:
        message = f"Folder methods stripped of logic and copied to clipboard! ({file_count} files)"
    else:
        label = "(minified) " if mode is ContextMode.MINIFIED else ""
        message = f"Folder contents {label}copied to clipboard! ({file_count} files)"
    deliver(context, message, console, args.stdout)
    return 0


def run_files(args: argparse.Namespace, console: Console) -> int:
    mode = _mode_from_args(args)
    file_paths: List[str] = []
    for input_path in args.paths:
        abs_path = os.path.abspath(input_path)
        if os.path.isfile(abs_path):
            file_paths.append(abs_path)
        else:
            console.print(f"[yellow]Warning: {input_path} is not a file. Skipping.[/yellow]")

    if not file_paths:
        console.print("No files to copy.")
        return 0

    context = build_files_context(file_paths, mode)
    if mode is ContextMode.SKELETON:
        message = f"Methods in files stripped of logic and copied to clipboard! ({len(file_paths)} files)"
    else:
        label = "(minified) " if mode is ContextMode.MINIFIED else ""
        message = f"Contents of files {label}copied to clipboard! ({len(file_paths)} files)"
    deliver(context, message, console, args.stdout)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smart-context",
        description="Copy a folder or a set of files to the clipboard as full, minified or skeleton context.",
    )
    common = argparse.ArgumentParser(add_help=False)
    mode_group = common.add_mutually_exclusive_group()
    mode_group.add_argument(
        "-m", "--minify", action="store_true", help="Strip comments and whitespace"
    )
    mode_group.add_argument(
        "-s",
        "--strip",
        action="store_true",
        help="Strip logic from methods, keeping declarations only",
    )
    common.add_argument(
        "--stdout", action="store_true", help="Print the context instead of copying it"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    folder_parser = subparsers.add_parser(
        "folder", parents=[common], help="Copy every text file under a folder"
    )
    folder_parser.add_argument(
        "path", nargs="?", default=".", help="Folder to copy. Defaults to current directory."
    )
    folder_parser.set_defaults(handler=run_folder)

    files_parser = subparsers.add_parser(
        "files", parents=[common], help="Copy the given files"
    )
    files_parser.add_argument("paths", nargs="+", help="Files to include")
    files_parser.set_defaults(handler=run_files)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    console = Console(stderr=args.stdout, soft_wrap=True)
    return args.handler(args, console)


if __name__ == "__main__":
    sys.exit(main())
