#!/usr/bin/env python3
"""
chapter-editor — Edit the body of HTML book chapters without touching the rest.

Each chapter is split into doctype, <head> and <body>. Only the body is
edited; on save the original head and doctype are put back, the first save
per session leaves a .html.bak copy, and the file is replaced atomically.

Quick start:
  1. Optionally set CHAPTER_EDITOR_PROJECT_DIR in .env
  2. python chapter_editor.py list book/
  3. python chapter_editor.py read book/ch01.html > ch01.json
  4. python chapter_editor.py write book/ch01.html --body new_body.html
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="List, read and save HTML book chapters, preserving their original markup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List chapters in a project folder:
  python chapter_editor.py list book/

  # Show a chapter split into body, head and project CSS:
  python chapter_editor.py read book/part1/ch01.html --project book/

  # Replace a chapter's body (head and doctype are kept):
  python chapter_editor.py write book/part1/ch01.html --body body.html

  # Check every chapter survives a split/reassemble round trip:
  python chapter_editor.py check book/
        """,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List HTML chapters in a project folder")
    p_list.add_argument("project_dir", type=Path, nargs="?", default=None, help="Project folder")
    p_list.add_argument("--json", action="store_true", help="Print chapters as JSON")

    p_read = sub.add_parser("read", help="Print a chapter's parts as JSON")
    p_read.add_argument("file", type=Path, help="Chapter file")
    p_read.add_argument(
        "--project", type=Path, default=None, metavar="DIR",
        help="Project folder for stylesheet lookup (default: CHAPTER_EDITOR_PROJECT_DIR or the file's folder)",
    )

    p_write = sub.add_parser("write", help="Save a new body into a chapter")
    p_write.add_argument("file", type=Path, help="Chapter file")
    p_write.add_argument("--body", type=Path, required=True, metavar="FILE", help="File holding the new body HTML")
    p_write.add_argument(
        "--head", type=Path, default=None, metavar="FILE",
        help="File holding the head content (default: keep the chapter's current head)",
    )

    p_export = sub.add_parser("export", help="Open a chapter in the default browser")
    p_export.add_argument("file", type=Path, help="Chapter file")

    p_check = sub.add_parser("check", help="Check all chapters survive a split/reassemble round trip")
    p_check.add_argument("project_dir", type=Path, nargs="?", default=None, help="Project folder")

    return parser.parse_args(argv)


def configure_logging() -> None:
    level_name = os.getenv("CHAPTER_EDITOR_LOG_LEVEL", "WARNING").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def resolve_project_dir(arg: Path | None, fallback: Path | None = None) -> Path:
    if arg is not None:
        return arg
    env_dir = os.getenv("CHAPTER_EDITOR_PROJECT_DIR", "").strip()
    if env_dir:
        return Path(env_dir)
    if fallback is not None:
        return fallback
    print("ERROR: No project folder given.")
    print("Pass one on the command line or set CHAPTER_EDITOR_PROJECT_DIR in .env")
    sys.exit(1)


def print_chapter_list(chapters, project_dir: Path):
    print(f"Project: {project_dir}")
    print(f"\nFound {len(chapters)} chapters:")
    print("-" * 70)
    for i, ch in enumerate(chapters, start=1):
        print(f"  {i:2d}. {ch.relative_path}")
    print("-" * 70)
    print()


def check_round_trip(chapters) -> list[tuple[str, str]]:
    """Return (relative_path, problem) for chapters whose parts change on a round trip."""
    from tqdm import tqdm

    from parsers.html_parser import reassemble_html, split_html
    from project import read_text

    problems = []
    for ch in tqdm(chapters, desc="  Checking", unit="chapter"):
        try:
            raw = read_text(Path(ch.path))
        except (OSError, UnicodeDecodeError) as e:
            problems.append((ch.relative_path, f"unreadable: {e}"))
            continue
        first = split_html(raw)
        rebuilt = reassemble_html(first.doctype, first.head_content, first.body_content, first.is_fragment)
        second = split_html(rebuilt)
        if second.body_content.strip("\n") != first.body_content.strip("\n"):
            problems.append((ch.relative_path, "body changed"))
        elif second.head_content.strip("\n") != first.head_content.strip("\n"):
            problems.append((ch.relative_path, "head changed"))
        elif second.doctype != first.doctype:
            problems.append((ch.relative_path, "doctype changed"))
    return problems


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    load_dotenv()
    configure_logging()

    # Lazy imports keep --help fast
    from backup import BackupTracker
    from commands import (
        ChapterEditorError,
        export_chapter,
        list_chapters,
        read_chapter,
        write_chapter,
    )
    from models import SplitResult
    from parsers.html_parser import split_html
    from project import read_text

    try:
        if args.command == "list":
            project_dir = resolve_project_dir(args.project_dir)
            chapters = list_chapters(str(project_dir))
            if args.json:
                print(json.dumps([ch.to_dict() for ch in chapters], indent=2))
            else:
                print_chapter_list(chapters, project_dir)

        elif args.command == "read":
            project_dir = resolve_project_dir(args.project, fallback=args.file.parent)
            data = read_chapter(str(args.file), str(project_dir))
            print(json.dumps(data.to_dict(), indent=2))

        elif args.command == "write":
            # A chapter that does not exist yet is created as a fragment
            if args.file.exists():
                current = split_html(read_text(args.file))
            else:
                current = SplitResult(doctype="", head_content="", body_content="", is_fragment=True)
            body_html = read_text(args.body)
            head = read_text(args.head) if args.head else current.head_content
            tracker = BackupTracker()
            write_chapter(str(args.file), body_html, head, current.is_fragment, tracker)
            print(f"Saved: {args.file}")

        elif args.command == "export":
            export_chapter(str(args.file))
            print(f"Opened in browser: {args.file}")

        elif args.command == "check":
            project_dir = resolve_project_dir(args.project_dir)
            chapters = list_chapters(str(project_dir))
            print(f"Checking {len(chapters)} chapters in {project_dir}")
            problems = check_round_trip(chapters)
            if problems:
                print(f"\n{len(problems)} chapter(s) would not round-trip cleanly:")
                for relative_path, problem in problems:
                    print(f"  {relative_path}: {problem}")
                sys.exit(1)
            print("All chapters round-trip cleanly.")

    except (ChapterEditorError, OSError, UnicodeDecodeError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
