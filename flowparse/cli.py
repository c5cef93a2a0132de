"""Command line interface for trying the task parser."""

import argparse
import json
import sys
from datetime import date

import yaml

from .core.config import bootstrap_env, get_settings
from .nlp import ParsedTask, get_examples, parse
from .platform.errors import FlowParseError
from .platform.logging import log_context, setup_structured_logging

FORMATS = ("text", "json", "yaml")


def format_task(task: ParsedTask, output_format: str = "text") -> str:
    """Render a parsed task for the terminal."""
    if output_format == "json":
        return json.dumps(task.to_dict(), indent=2)
    if output_format == "yaml":
        return yaml.safe_dump(task.to_dict(), sort_keys=False, allow_unicode=True).rstrip()

    lines = [
        f'Title: "{task.title}"',
        f"Type: {task.type.value}, Period: {task.period.value}, Priority: {task.priority.value}",
    ]
    if task.due_date:
        lines.append(f"Due: {task.due_date:%b %d, %Y}")
    if task.due_time:
        lines.append(f"Time: {task.due_time}")
    if task.time_block:
        lines.append(f"Duration: {task.time_block} min")
    if task.tags:
        lines.append(f"Tags: {', '.join(task.tags)}")
    if task.context_tags:
        lines.append(f"Contexts: {', '.join(task.context_tags)}")
    if task.recurrence:
        lines.append(f"Recurs: {task.recurrence.pattern.value} (every {task.recurrence.interval})")
    lines.append(f"Confidence: {task.confidence * 100:.1f}% ({task.confidence_level})")
    if task.suggestions:
        lines.append(f"Suggestions: {'; '.join(task.suggestions)}")
    return "\n".join(lines)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flowparse",
        description="Turn free-form task text into a structured task",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s parse "Meeting with John tomorrow at 3pm"
  %(prog)s parse --format json "Review reports urgent!!! #work"
  %(prog)s examples --date 2024-01-15

Environment Variables:
  LOG_LEVEL                              # DEBUG, INFO, WARNING, ...
  FC_LOG_FORMAT                          # plain or json
  FC_DEFAULT_TIMEZONE                    # Timezone used for "today"
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    parse_parser = subparsers.add_parser("parse", help="Parse one task description")
    parse_parser.add_argument("text", nargs="+", help="Task text (words are joined)")

    examples_parser = subparsers.add_parser("examples", help="Parse the built-in examples")

    for sub in (parse_parser, examples_parser):
        sub.add_argument("--format", choices=FORMATS, default="text", help="Output format")
        sub.add_argument(
            "--date", type=_parse_date, default=None, help="Resolve relative dates from this day"
        )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        bootstrap_env()
        settings = get_settings()
        setup_structured_logging(settings.log_level, structured=settings.structured_logging)

        if args.command == "parse":
            with log_context(command="parse"):
                task = parse(" ".join(args.text), today=args.date)
            print(format_task(task, args.format))

        elif args.command == "examples":
            tasks = []
            with log_context(command="examples"):
                for index, example in enumerate(get_examples(), 1):
                    with log_context(example=index):
                        tasks.append(parse(example, today=args.date))
            if args.format == "text":
                print("NLP Testing Results:")
                print("=" * 50)
                for index, task in enumerate(tasks, 1):
                    print(f'\n{index}. "{task.original_input}"')
                    print(format_task(task))
            elif args.format == "json":
                print(json.dumps([task.to_dict() for task in tasks], indent=2))
            else:
                print(yaml.safe_dump([task.to_dict() for task in tasks], sort_keys=False).rstrip())

        else:
            parser.print_help()

    except FlowParseError as e:
        print(f"✗ {e}", file=sys.stderr)
        if e.user_hint:
            print(f"  {e.user_hint}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
