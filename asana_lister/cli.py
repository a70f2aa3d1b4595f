#!/usr/bin/env python3
"""
Asana Lister CLI

Usage:
    asana-lister workspaces
    asana-lister projects [-w WORKSPACE]
    asana-lister tasks <project_gid>
    asana-lister sections <project_gid>
"""

import argparse
import logging
import sys
from typing import List, Optional

from .client import AsanaClient
from .errors import AsanaClientError
from .infrastructure import get_config
from .listing import (
    list_projects,
    list_sections,
    list_tasks,
    list_workspaces,
    resolve_workspace,
)
from .models import Project
from .options import RequestOptions

# Configure logging
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Flags accepted before or after the subcommand
GLOBAL_FLAGS = {"-v", "--verbose", "--first-page-only", "--pretty"}


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def build_options(args: argparse.Namespace) -> RequestOptions:
    """Request options from the global CLI flags."""
    return RequestOptions(
        pretty=args.pretty,
        fields=_split_csv(args.fields),
        expand=_split_csv(args.expand),
    )


def cmd_workspaces(client: AsanaClient, args):
    """List workspaces."""
    list_workspaces(client, options=build_options(args), all_pages=not args.first_page_only)


def cmd_projects(client: AsanaClient, args):
    """List projects in a workspace."""
    workspace = resolve_workspace(client, args.workspace or get_config().workspace)
    list_projects(
        client, workspace,
        options=build_options(args), all_pages=not args.first_page_only,
    )


def cmd_tasks(client: AsanaClient, args):
    """List tasks in a project."""
    list_tasks(
        client, Project(gid=args.project_gid),
        options=build_options(args), all_pages=not args.first_page_only,
    )


def cmd_sections(client: AsanaClient, args):
    """List sections in a project."""
    list_sections(
        client, Project(gid=args.project_gid),
        options=build_options(args), all_pages=not args.first_page_only,
    )


def build_parser() -> argparse.ArgumentParser:
    epilog = """\
Examples:
  asana-lister workspaces              List workspaces and organizations
  asana-lister projects                List projects in the default workspace
  asana-lister projects -w "Acme"      List projects in a workspace (name or GID)
  asana-lister tasks <project>         List tasks in project
  asana-lister sections <project>      List sections in project

Environment:
  ASANA_ACCESS_TOKEN   Personal access token (or access_token in ASANA_TOKEN_FILE).
  ASANA_WORKSPACE      Optional. Default workspace GID or name.
  ASANA_PAGE_SIZE      Optional. Results per page (1-100, default 100).
"""

    parser = argparse.ArgumentParser(
        prog="asana-lister",
        description="List Asana workspaces, projects, tasks and sections",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    parser.add_argument(
        "--first-page-only", action="store_true",
        help="Only list the first page of results",
    )
    parser.add_argument("--fields", help="Comma-separated fields to return (opt_fields)")
    parser.add_argument("--expand", help="Comma-separated sub-objects to expand (opt_expand)")
    parser.add_argument("--pretty", action="store_true", help="Ask the API for pretty output")

    # Valued options may also follow the subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--fields", default=argparse.SUPPRESS, help=argparse.SUPPRESS)
    common.add_argument("--expand", default=argparse.SUPPRESS, help=argparse.SUPPRESS)

    subparsers = parser.add_subparsers(dest="command", metavar="command")

    ws = subparsers.add_parser("workspaces", parents=[common], help="List workspaces")
    ws.set_defaults(func=cmd_workspaces)

    proj = subparsers.add_parser("projects", parents=[common], help="List projects in a workspace")
    proj.add_argument("-w", "--workspace", help="Workspace GID or name")
    proj.set_defaults(func=cmd_projects)

    tasks = subparsers.add_parser("tasks", parents=[common], help="List tasks in a project")
    tasks.add_argument("project_gid", help="Project GID")
    tasks.set_defaults(func=cmd_tasks)

    sections = subparsers.add_parser("sections", parents=[common], help="List sections in a project")
    sections.add_argument("project_gid", help="Project GID")
    sections.set_defaults(func=cmd_sections)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()

    # Normalize argv: move global flags before the subcommand so they work
    # in any position
    raw_args = sys.argv[1:] if argv is None else list(argv)
    hoisted = [a for a in raw_args if a in GLOBAL_FLAGS]
    rest = [a for a in raw_args if a not in GLOBAL_FLAGS]
    args = parser.parse_args(hoisted + rest)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        client = AsanaClient()
        args.func(client, args)
    except AsanaClientError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
