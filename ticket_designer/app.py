from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .core.exceptions import ProjectError, friendly_message
from .core.generator import generate_script, script_text
from .core.parser import parse_script
from .core.persistence import element_counts, load_project, project_json, save_project
from .core.render import render_preview
from .settings import load_settings

logger = logging.getLogger("ticket_designer")


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _write_text(path: Optional[str], text: str) -> None:
    if not path or path == "-":
        sys.stdout.write(text + "\n")
        return
    with open(path, "w", encoding="utf-8") as f:
        f.write(text + "\n")


def cmd_generate(args) -> int:
    project = load_project(args.project)
    _write_text(args.output, script_text(generate_script(project.elements)))
    return 0


def cmd_parse(args) -> int:
    try:
        code = _read_text(args.script)
    except OSError as e:
        raise ProjectError(f"Could not read script: {e}") from e

    elements = parse_script(code)
    if not elements:
        print("[TicketDesigner] Could not parse script", file=sys.stderr)
        return 1

    project = load_settings().new_project(args.name)
    project.elements = elements
    logger.info("Parsed %d element(s): %s", len(elements), element_counts(project))

    if args.output and args.output.lower().endswith(".json"):
        _write_text(args.output, project_json(project))
    elif args.output:
        save_project(project, args.output)
    else:
        _write_text(None, project_json(project))
    return 0


def cmd_preview(args) -> int:
    project = load_project(args.project)
    columns = args.columns or load_settings().preview_columns
    for line in render_preview(project.elements, project.variables, columns):
        print(line)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ticket_designer",
        description="Convert ticket layouts to BinaryOut printer scripts and back.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="project JSON -> script")
    g.add_argument("project")
    g.add_argument("-o", "--output", help="script file (default: stdout)")
    g.set_defaults(func=cmd_generate)

    pa = sub.add_parser("parse", help="script -> project JSON")
    pa.add_argument("script", help="script file, or - for stdin")
    pa.add_argument(
        "-o", "--output",
        help="*.json file, or a directory to save the project into (default: stdout)",
    )
    pa.add_argument("--name", help="project name")
    pa.set_defaults(func=cmd_parse)

    pr = sub.add_parser("preview", help="plain-text ticket preview")
    pr.add_argument("project")
    pr.add_argument("--columns", type=int, default=0)
    pr.set_defaults(func=cmd_preview)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s: %(message)s",
    )
    try:
        return args.func(args)
    except ProjectError as e:
        print(f"[TicketDesigner] {friendly_message(e)}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
