"""Command line interface for editing flashmap descriptors."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from flashmap.config import (
    FLASHMAP_GROW_PATH,
    FLASHMAP_INDENT,
    FLASHMAP_LOG_LEVEL,
    FLASHMAP_RECLAIM_CONTAINER,
    FLASHMAP_RECLAIM_SECTION,
)
from flashmap.defrag import defrag_section
from flashmap.editing import ReclaimOptions, reclaim_section, resize_section
from flashmap.exceptions import FlashmapError, SectionNotFoundError
from flashmap.output_formatter import format_flashmap, format_section_tree
from flashmap.parser import parse_flashmap, parse_size_spec, read_flashmap
from flashmap.schemas import Section
from flashmap.sections import count_sections, find_section, remove_section
from flashmap.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flashmap",
        description="Parse, edit and re-serialize flashmap descriptors.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log more (repeatable)")
    parser.add_argument("-o", "--output", help="Write the result here instead of stdout")
    commands = parser.add_subparsers(dest="command", required=True)

    show = _add_command(commands, "show", "Print the descriptor in canonical form")
    view = show.add_mutually_exclusive_group()
    view.add_argument("--json", action="store_true", help="Dump the section tree as JSON")
    view.add_argument("--tree", action="store_true", help="Print absolute address windows")

    find = _add_command(commands, "find", "Print one section")
    find.add_argument("name", help="Section name")
    find.add_argument("-r", "--recursive", action="store_true", help="Search nested sections too")

    remove = _add_command(commands, "remove", "Remove a section")
    remove.add_argument("name", help="Section name")
    remove.add_argument("-r", "--recursive", action="store_true", help="Search nested sections too")
    remove.add_argument("--defrag", action="store_true", help="Close the gap left behind")

    _add_command(commands, "defrag", "Close gaps between explicitly placed sections")

    resize = _add_command(commands, "resize", "Change the size of a section")
    resize.add_argument("name", help="Section name")
    resize.add_argument("size", help="New size, e.g. 4k or 0x1000")
    resize.add_argument("-r", "--recursive", action="store_true", help="Search nested sections too")
    resize.add_argument("--defrag", action="store_true", help="Close gaps after resizing")

    reclaim = _add_command(commands, "reclaim", "Drop a section and grow the trailing sections")
    reclaim.add_argument("--container", default=FLASHMAP_RECLAIM_CONTAINER, help="Section holding the region")
    reclaim.add_argument("--remove", default=FLASHMAP_RECLAIM_SECTION, help="Region to drop")
    reclaim.add_argument(
        "--grow",
        default=",".join(FLASHMAP_GROW_PATH),
        help="Comma separated chain of trailing sections to enlarge",
    )
    return parser


def _add_command(
    commands: argparse._SubParsersAction,
    name: str,
    help_text: str,
) -> argparse.ArgumentParser:
    command = commands.add_parser(name, help=help_text, description=help_text)
    command.add_argument("file", nargs="?", default="-", help="Descriptor file ('-' for stdin)")
    return command


def load_flashmap(path: str) -> Section:
    """Parse the descriptor at ``path``, or stdin for ``-``."""
    if path == "-":
        logger.info("Reading from stdin")
        return parse_flashmap(getattr(sys.stdin, "buffer", sys.stdin).read())
    return read_flashmap(Path(path))


def run(args: argparse.Namespace) -> int:
    flash = load_flashmap(args.file)
    logger.info("Loaded %s with %d sections", flash.name, count_sections(flash))

    if args.command == "show":
        if args.json:
            text = flash.model_dump_json(indent=2) + "\n"
        elif args.tree:
            text = format_section_tree(flash) + "\n"
        else:
            text = format_flashmap(flash, prefix=FLASHMAP_INDENT)
        return _emit(text, args.output)

    if args.command == "find":
        found = find_section(flash, args.name, recursive=args.recursive)
        if found is None:
            raise SectionNotFoundError(f"No {args.name} section found")
        return _emit(format_flashmap(found, prefix=FLASHMAP_INDENT), args.output)

    if args.command == "remove":
        if not remove_section(flash, args.name, recursive=args.recursive):
            raise SectionNotFoundError(f"Could not find and remove {args.name}")
        logger.info("Removed %s", args.name)
        if args.defrag and defrag_section(flash):
            logger.info("Successfully defragmented %s", flash.name)

    elif args.command == "defrag":
        if defrag_section(flash):
            logger.info("Successfully defragmented %s", flash.name)
        else:
            logger.info("Nothing to defragment")

    elif args.command == "resize":
        section = find_section(flash, args.name, recursive=args.recursive)
        if section is None:
            raise SectionNotFoundError(f"No {args.name} section found")
        size, unit = parse_size_spec(args.size)
        resize_section(section, size, unit)
        logger.info("Resized %s to 0x%x bytes", args.name, section.byte_size)
        if args.defrag and defrag_section(flash):
            logger.info("Successfully defragmented %s", flash.name)

    elif args.command == "reclaim":
        options = ReclaimOptions(
            container=args.container,
            remove=args.remove,
            grow_path=tuple(name.strip() for name in args.grow.split(",") if name.strip()),
        )
        result = reclaim_section(flash, options)
        logger.info("Reclaimed 0x%x bytes into %s", result.freed_bytes, ", ".join(result.grown))

    return _emit(format_flashmap(flash, prefix=FLASHMAP_INDENT), args.output)


def _emit(text: str, output: str | None) -> int:
    if output:
        Path(output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose >= 2:
        configure_logging(logging.DEBUG)
    elif args.verbose == 1:
        configure_logging(logging.INFO)
    else:
        configure_logging(FLASHMAP_LOG_LEVEL)

    try:
        return run(args)
    except (FlashmapError, OSError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
