"""Command-line entrypoint for showing boot messages, progress, and restoring the console."""

from __future__ import annotations

import argparse
import sys

from bootmessage_core import DisplayOrchestrator, DisplaySession, UsageError, load_config
from bootmessage_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from bootmessage_display import BootMessageError


PROG = "display_boot_message"
ACTIONS = ("restore_frecon",)
COMMANDS = ("show_file", "show_spinner", "update_progress", "action")

USAGE = f"""\
usage: {PROG} <message_id> "<locale> [<locale>...]"
       {PROG} show_file <name> <path>
       {PROG} show_spinner <name> <path>
       {PROG} update_progress <name> <percent>
       {PROG} action restore_frecon

Displays a localized boot message on the frame buffer. Locales are tried in
order and the first one with a text file for <message_id> is shown.
"""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _percent(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"percent must be an integer, got {value!r}") from None


def cmd_show_message(orchestrator: DisplayOrchestrator, args: argparse.Namespace) -> int:
    orchestrator.display_message(args.message_id, args.locales)
    return 0


def cmd_show_file(orchestrator: DisplayOrchestrator, args: argparse.Namespace) -> int:
    orchestrator.display_file(args.name, args.path, spinner=(args.command == "show_spinner"))
    return 0


def cmd_update_progress(orchestrator: DisplayOrchestrator, args: argparse.Namespace) -> int:
    if not orchestrator.update_progress(args.percent):
        get_logger().info("progress for %s not shown", args.name)
    return 0


def cmd_action(orchestrator: DisplayOrchestrator, args: argparse.Namespace) -> int:
    orchestrator.restore()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog=PROG, usage=USAGE, add_help=False)
    sub = parser.add_subparsers(dest="command", required=True, parser_class=_Parser)

    for name in ("show_file", "show_spinner"):
        file_cmd = sub.add_parser(name, add_help=False)
        file_cmd.add_argument("name")
        file_cmd.add_argument("path")
        file_cmd.set_defaults(func=cmd_show_file)

    progress_cmd = sub.add_parser("update_progress", add_help=False)
    progress_cmd.add_argument("name")
    progress_cmd.add_argument("percent", type=_percent)
    progress_cmd.set_defaults(func=cmd_update_progress)

    action_cmd = sub.add_parser("action", add_help=False)
    action_cmd.add_argument("action", choices=ACTIONS)
    action_cmd.set_defaults(func=cmd_action)

    return parser


def build_message_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog=PROG, usage=USAGE, add_help=False)
    parser.add_argument("message_id")
    parser.add_argument("locales")
    parser.set_defaults(func=cmd_show_message, command=None)
    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    if argv and argv[0] in COMMANDS:
        return build_parser().parse_args(argv)
    return build_message_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] in ("-h", "--help"):
        sys.stdout.write(USAGE)
        return 0

    cfg = load_config()
    logger = configure_logging(tag=cfg.runtime.log_tag, log_file=cfg.runtime.log_file)
    install_crash_hooks()

    try:
        args = parse_args(argv)
    except UsageError as exc:
        sys.stderr.write(f"{PROG}: {exc}\n{USAGE}")
        return 1

    orchestrator = DisplayOrchestrator(cfg, DisplaySession(cfg))
    try:
        return int(args.func(orchestrator, args))
    except BootMessageError as exc:
        logger.error("%s failed: %s", " ".join(argv), exc, extra={"event": "command_failed"})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
