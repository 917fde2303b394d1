"""
Command line interface.

Examples:
    actionfinder plan src/App.js my-app/actions/UserActions login
    actionfinder plan src/App.js ./UserActions login --apply
    actionfinder actions --root . --document src/App.js
    actionfinder docs
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .buffers import TextBuffer
from .config import render_options_markdown
from .planner import plan_import_edit
from .plugin import ActionFinder
from .settings import Settings
from .types import NoOpEdit, edit_to_dict

logger = logging.getLogger(__name__)


def _cmd_plan(args: argparse.Namespace, settings: Settings) -> int:
    try:
        buffer = TextBuffer.from_file(args.file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    edit = plan_import_edit(buffer, args.module, args.specifier)
    if not args.apply:
        print(json.dumps(edit_to_dict(edit), indent=2))
        return 0

    if isinstance(edit, NoOpEdit):
        print(f"{args.specifier} is already imported from {args.module}")
        return 0

    buffer.apply(edit)
    with open(args.file, "w", encoding="utf-8", newline="") as f:
        f.write(buffer.get_text())
    print(f"Updated {args.file}")
    return 0


def _cmd_actions(args: argparse.Namespace, settings: Settings) -> int:
    session = ActionFinder.for_workspace(
        args.root,
        config_path=args.config or settings.config_path,
        extra_node_paths=settings.extra_node_paths,
    )
    try:
        records = session.load_actions(
            on_warning=lambda message: print(f"Warning: {message}", file=sys.stderr),
            on_error=lambda message: print(f"Error: {message}", file=sys.stderr),
        )
        for record in records:
            if record.mode == "local" and not args.document:
                name = record.file_path
            else:
                name = record.import_name_for(args.document)
            print(f"{name}: {', '.join(record.actions)}")
    finally:
        session.dispose()
    return 0


def _cmd_docs(args: argparse.Namespace, settings: Settings) -> int:
    print(render_options_markdown(), end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="actionfinder",
        description="Find action creators and plan the import edits that use them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan = subparsers.add_parser("plan", help="Plan the edit that imports SPECIFIER from MODULE")
    plan.add_argument("file", help="JavaScript file to edit")
    plan.add_argument("module", help="Module specifier, e.g. my-app/actions/UserActions")
    plan.add_argument("specifier", help="Name to import")
    plan.add_argument("--apply", action="store_true", help="Write the edit to FILE")
    plan.set_defaults(handler=_cmd_plan)

    actions = subparsers.add_parser("actions", help="List discovered actions and their import names")
    actions.add_argument("--root", default=".", help="Workspace root (default: current directory)")
    actions.add_argument("--config", help="Config file (default: search upwards from the root)")
    actions.add_argument("--document", help="Importing document, used to name local modules")
    actions.set_defaults(handler=_cmd_actions)

    docs = subparsers.add_parser("docs", help="Print the configuration options as markdown")
    docs.set_defaults(handler=_cmd_docs)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings()
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    args = build_parser().parse_args(argv)
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
