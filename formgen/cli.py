"""Command-line interface for formgen."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml
from pydantic import ValidationError

from .config import load_settings
from .errors import InvalidArgumentError
from .io_utils import read_data_file, warn, write_text
from .models import DropdownRequest, ListBoxRequest, SelectOption
from .select_helpers import build_dropdown, build_list_box
from .tag_builder import sanitize_id


def _load_options(path: Path) -> list[SelectOption]:
    if not path.exists():
        raise SystemExit(f"Options file not found: {path}")
    try:
        payload: Any = read_data_file(path) or []
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SystemExit(f"Invalid options file {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise SystemExit(f"{path} must contain a list of options.")

    options: list[SelectOption] = []
    errors: list[str] = []
    for index, item in enumerate(payload, start=1):
        if isinstance(item, str):
            item = {"text": item}
        try:
            options.append(SelectOption.model_validate(item))
        except ValidationError as exc:
            errors.append(f"{path} item {index}: {exc}")

    if errors:
        for message in errors:
            print(message, file=sys.stderr)
        raise SystemExit(1)

    if not options:
        warn(f"[formgen] no options found in {path}")
    return options


def _parse_attributes(pairs: Optional[list[str]]) -> Optional[dict[str, str]]:
    if not pairs:
        return None
    attributes: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise SystemExit(f"Invalid attribute '{pair}', expected KEY=VALUE.")
        attributes[key] = value
    return attributes


def _handle_render(args: argparse.Namespace) -> None:
    settings = load_settings(Path(args.settings) if args.settings else None)
    options = _load_options(Path(args.options))
    attributes = _parse_attributes(args.attr)

    try:
        if args.list_box:
            selected: Any = args.selected
            if selected is not None and len(selected) == 1:
                selected = selected[0]
            markup = build_list_box(
                ListBoxRequest(
                    name=args.name,
                    default_option=args.default_option,
                    options=options,
                    selected_values=selected,
                    size=args.size,
                    allow_multiple=args.multiple,
                    attributes=attributes,
                ),
                settings,
            )
        else:
            if args.selected and len(args.selected) > 1:
                warn("[formgen] dropdowns take one selected value; using the first")
            markup = build_dropdown(
                DropdownRequest(
                    name=args.name,
                    default_option=args.default_option,
                    options=options,
                    selected_value=args.selected[0] if args.selected else None,
                    attributes=attributes,
                ),
                settings,
            )
    except InvalidArgumentError as exc:
        raise SystemExit(str(exc)) from exc

    output = str(markup) + "\n"
    if args.out:
        write_text(Path(args.out), output)
    else:
        sys.stdout.write(output)


def _handle_sanitize_id(args: argparse.Namespace) -> None:
    settings = load_settings(Path(args.settings) if args.settings else None)
    replacement = args.replacement if args.replacement is not None else settings.id_replacement
    sanitized = sanitize_id(args.value, replacement)
    if sanitized is None:
        print(f"'{args.value}' cannot be turned into an id.", file=sys.stderr)
        raise SystemExit(1)
    print(sanitized)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formgen",
        description="Render HTML select controls from option files.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="formgen 0.1.0",
        help="Show the formgen version and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser(
        "render",
        help="Render a dropdown or list box.",
        description="Render a <select> element from a YAML or JSON list of options.",
    )
    render_parser.add_argument(
        "--options",
        required=True,
        help="Path to a YAML or JSON list of options.",
    )
    render_parser.add_argument(
        "--name",
        required=True,
        help="Form field name of the control.",
    )
    render_parser.add_argument(
        "--list-box",
        dest="list_box",
        action="store_true",
        help="Render a list box instead of a dropdown.",
    )
    render_parser.add_argument(
        "--selected",
        nargs="+",
        default=None,
        help="Value(s) to mark as selected.",
    )
    render_parser.add_argument(
        "--size",
        type=int,
        default=None,
        help="Visible rows for list boxes.",
    )
    render_parser.add_argument(
        "--multiple",
        action="store_true",
        help="Allow several selections in a list box.",
    )
    render_parser.add_argument(
        "--default-option",
        dest="default_option",
        default=None,
        help="Placeholder text rendered as the first option.",
    )
    render_parser.add_argument(
        "--attr",
        action="append",
        default=None,
        help="Extra attribute as KEY=VALUE (repeatable).",
    )
    render_parser.add_argument(
        "--settings",
        default=None,
        help="Path to a YAML or JSON settings file.",
    )
    render_parser.add_argument(
        "--out",
        default=None,
        help="File to write the markup to (defaults to stdout).",
    )
    render_parser.set_defaults(func=_handle_render)

    sanitize_parser = subparsers.add_parser(
        "sanitize-id",
        help="Print the HTML id derived from a field name.",
        description="Sanitize a field name into an HTML 4.01 id.",
    )
    sanitize_parser.add_argument("value", help="Field name to sanitize.")
    sanitize_parser.add_argument(
        "--replacement",
        default=None,
        help="Replacement for invalid characters (defaults to the settings value).",
    )
    sanitize_parser.add_argument(
        "--settings",
        default=None,
        help="Path to a YAML or JSON settings file.",
    )
    sanitize_parser.set_defaults(func=_handle_sanitize_id)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main()
