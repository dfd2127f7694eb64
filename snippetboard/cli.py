from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, Sequence

from .api import SnippetApiClient
from .config import ClientSettings
from .controllers import CollectionController, Notice
from .controllers.collection import NOTICE_SUCCESS, normalize_filter
from .highlight import highlight_terminal
from .logging_config import configure_logging
from .snippet import Snippet, language_label


logger = logging.getLogger("snippetboard")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snippetboard",
        description="Browse and edit a remote code snippet collection",
    )
    parser.add_argument(
        "--api-url",
        dest="api_url",
        default=None,
        help="Snippet collection URL (defaults to SNIPPETS_API_URL env variable)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (defaults to SNIPPETS_API_TIMEOUT or 10)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Logging level (defaults to SNIPPETS_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List snippets")
    list_parser.add_argument("--lang", default=None, help="Only show snippets in this language")
    list_parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        help="Print code without syntax highlighting",
    )

    add_parser = subparsers.add_parser("add", help="Create a snippet")
    _add_field_arguments(add_parser)

    edit_parser = subparsers.add_parser("edit", help="Edit a snippet; omitted fields keep their value")
    edit_parser.add_argument("snippet_id", help="Identifier of the snippet to edit")
    _add_field_arguments(edit_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete a snippet")
    delete_parser.add_argument("snippet_id", help="Identifier of the snippet to delete")
    delete_parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Do not ask for confirmation",
    )

    copy_parser = subparsers.add_parser("copy", help="Copy a snippet's code to the clipboard")
    copy_parser.add_argument("snippet_id", help="Identifier of the snippet to copy")

    serve_parser = subparsers.add_parser("serve", help="Run the browser UI")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: 8000)")

    return parser


def _add_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title", default=None, help="Snippet title")
    parser.add_argument("--language", default=None, help="Language, for example 'python'")
    code_group = parser.add_mutually_exclusive_group()
    code_group.add_argument("--code", default=None, help="Snippet code")
    code_group.add_argument(
        "--code-file",
        dest="code_file",
        default=None,
        help="Read the code from a file ('-' for stdin)",
    )
    parser.add_argument("--description", default=None, help="Optional description")


def _read_code(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _field_values(args: argparse.Namespace) -> Dict[str, str]:
    values = {
        "title": args.title,
        "language": args.language,
        "code": _read_code(args.code_file) if args.code_file else args.code,
        "description": args.description,
    }
    return {name: value for name, value in values.items() if value is not None}


def format_snippets(snippets: Sequence[Snippet], *, color: bool = False, style: str = "monokai") -> str:
    if not snippets:
        return "No snippets found for the selected language."

    lines: list[str] = [f"List of Snippets ({len(snippets)})"]
    for index, snippet in enumerate(snippets, start=1):
        lines.extend(
            [
                "",
                f"{index}. {snippet.title} [{snippet.id}]",
                f"   Language: {language_label(snippet.language)}",
            ]
        )
        if snippet.description:
            lines.append(f"   Description: {snippet.description}")
        lines.append("   Code:")
        code = highlight_terminal(snippet.code, snippet.language, style) if color else snippet.code
        for code_line in code.splitlines() or [""]:
            lines.append(f"   {code_line}")

    return "\n".join(lines)


def print_notice(notice: Notice) -> None:
    if notice.level == NOTICE_SUCCESS:
        print(f"✅ {notice.message}")
    else:
        print(f"❌ {notice.message}", file=sys.stderr)


def prompt_confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


async def run_list(controller: CollectionController, args: argparse.Namespace, settings: ClientSettings) -> int:
    controller.state.filter_language = normalize_filter(args.lang)
    await controller.load()

    if controller.state.error:
        print(f"❌ {controller.state.error}", file=sys.stderr)
        return 1

    print(format_snippets(controller.snippets, color=args.color, style=settings.highlight_style))
    return 0


async def run_add(controller: CollectionController, args: argparse.Namespace) -> int:
    form = controller.create_form
    form.update(**_field_values(args))
    record = await form.submit()
    if record is None:
        print(f"❌ {form.error}", file=sys.stderr)
        return 1
    print(f"✅ {form.success} (id: {record.id})")
    return 0


async def run_edit(controller: CollectionController, args: argparse.Namespace) -> int:
    await controller.load()
    if controller.state.error:
        print(f"❌ {controller.state.error}", file=sys.stderr)
        return 1

    try:
        form = controller.set_edit_target(args.snippet_id)
    except KeyError:
        print(f"❌ Snippet not found: {args.snippet_id}", file=sys.stderr)
        return 1

    form.update(**_field_values(args))
    record = await form.submit()
    if record is None:
        print(f"❌ {form.error}", file=sys.stderr)
        return 1
    print(f"✅ {form.success}")
    return 0


async def run_delete(controller: CollectionController, args: argparse.Namespace) -> int:
    confirm = (lambda _prompt: True) if args.yes else prompt_confirm
    if await controller.delete(args.snippet_id, confirm=confirm):
        return 0
    if controller.state.notice is None:
        # Declined at the prompt; nothing was sent.
        print("Deletion cancelled.")
        return 0
    return 1


async def run_copy(controller: CollectionController, args: argparse.Namespace) -> int:
    await controller.load()
    if controller.state.error:
        print(f"❌ {controller.state.error}", file=sys.stderr)
        return 1

    try:
        copied = controller.copy(args.snippet_id)
    except KeyError:
        print(f"❌ Snippet not found: {args.snippet_id}", file=sys.stderr)
        return 1
    return 0 if copied else 1


async def run_command(args: argparse.Namespace, settings: ClientSettings) -> int:
    handlers = {
        "add": run_add,
        "edit": run_edit,
        "delete": run_delete,
        "copy": run_copy,
    }

    async with SnippetApiClient.from_settings(settings) as client:
        controller = CollectionController(client, confirm=prompt_confirm, notify=print_notice)
        if args.command == "list":
            return await run_list(controller, args, settings)
        return await handlers[args.command](controller, args)


def serve(settings: ClientSettings) -> None:
    import uvicorn

    from .web import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.web_host,
        port=settings.web_port,
        log_level=settings.log_level.lower(),
    )


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = ClientSettings.from_env().with_overrides(
        api_url=args.api_url,
        request_timeout=args.timeout,
        log_level=args.log_level,
        web_host=getattr(args, "host", None),
        web_port=getattr(args, "port", None),
    )
    configure_logging(settings.log_level)

    if args.command == "serve":
        serve(settings)
        return

    try:
        exit_code = asyncio.run(run_command(args, settings))
    except KeyboardInterrupt:
        print("\n⚠️ Operation interrupted", file=sys.stderr)
        sys.exit(1)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        logger.exception("Fatal error while running %s", args.command)
        print("\n❌ Fatal error occurred. See log for details.", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
