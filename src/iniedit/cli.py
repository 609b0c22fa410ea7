from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from . import enable_debug_logging
from .backup import list_backups
from .core import IniEditor
from .document import DocumentSnapshot
from .errors import (
    DuplicateSectionError,
    IniEditError,
    IniFileNotFoundError,
    InvalidNameError,
    KeyNotFoundError,
    SectionNotFoundError,
)
from .settings import EditorSettings


def _open(path: Path) -> IniEditor:
    # A command edits once and exits, so edits are always written back,
    # whatever the autosave preference says.
    settings = EditorSettings.load()
    editor = IniEditor(autosave=True, backup_dir=settings.backup_dir)
    editor.load(path)
    return editor


def _as_mapping(snapshot: DocumentSnapshot) -> dict[str, dict[str, str]]:
    return {section.name: section.as_dict() for section in snapshot}


def _dump_yaml(data: dict[str, dict[str, str]]) -> str:
    try:
        import yaml  # type: ignore
    except ModuleNotFoundError as exc:
        raise IniEditError("PyYAML is required for YAML output") from exc
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


# ---------------------------------------------------------------------------
# Read commands
# ---------------------------------------------------------------------------


def show_cmd(args: argparse.Namespace) -> int:
    editor = _open(args.path)
    if args.format == "json":
        print(json.dumps(_as_mapping(editor.current_document()), indent=2))
    elif args.format == "yaml":
        print(_dump_yaml(_as_mapping(editor.current_document())).rstrip())
    else:
        print(editor.text().rstrip())
    return 0


def sections_cmd(args: argparse.Namespace) -> int:
    editor = _open(args.path)
    for section in editor.current_document():
        print(section.name)
    return 0


def get_cmd(args: argparse.Namespace) -> int:
    editor = _open(args.path)
    val = editor.get(args.section, args.key)
    if val is None:
        return 1
    print(val)
    return 0


def backups_cmd(args: argparse.Namespace) -> int:
    settings = EditorSettings.load()
    found = list_backups(args.path, directory_name=settings.backup_dir)
    if not found:
        print("No backups found")
        return 0
    for path in found:
        print(path)
    return 0


# ---------------------------------------------------------------------------
# Edit commands (each one saves, with a backup)
# ---------------------------------------------------------------------------


def set_cmd(args: argparse.Namespace) -> int:
    editor = _open(args.path)
    if args.create_section and not editor.has_section(args.section):
        editor.add_section(args.section)
    editor.set_entry(args.section, args.key, args.value)
    return 0


def unset_cmd(args: argparse.Namespace) -> int:
    editor = _open(args.path)
    editor.remove_entry(args.section, args.key)
    return 0


def add_section_cmd(args: argparse.Namespace) -> int:
    editor = _open(args.path)
    editor.add_section(args.name)
    return 0


def remove_section_cmd(args: argparse.Namespace) -> int:
    editor = _open(args.path)
    editor.remove_section(args.name)
    return 0


def gui_cmd(args: argparse.Namespace) -> int:  # pragma: no cover - GUI interactions
    from .ui.tk import launch

    launch(args.path)
    return 0


def build_parser(prog: str = "iniedit") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="View and edit INI configuration files.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_show = subparsers.add_parser("show", help="Print the parsed file.")
    p_show.add_argument("path", type=Path)
    p_show.add_argument("--as", dest="format", choices=["ini", "json", "yaml"], default="ini")
    p_show.set_defaults(func=show_cmd)

    p_sections = subparsers.add_parser("sections", help="List section names.")
    p_sections.add_argument("path", type=Path)
    p_sections.set_defaults(func=sections_cmd)

    p_get = subparsers.add_parser("get", help="Print the value of KEY in SECTION.")
    p_get.add_argument("path", type=Path)
    p_get.add_argument("section")
    p_get.add_argument("key")
    p_get.set_defaults(func=get_cmd)

    p_set = subparsers.add_parser("set", help="Set KEY in SECTION to VALUE.")
    p_set.add_argument("path", type=Path)
    p_set.add_argument("section")
    p_set.add_argument("key")
    p_set.add_argument("value")
    p_set.add_argument(
        "--create-section", action="store_true", help="Add SECTION if it is missing"
    )
    p_set.set_defaults(func=set_cmd)

    p_unset = subparsers.add_parser("unset", help="Remove KEY from SECTION.")
    p_unset.add_argument("path", type=Path)
    p_unset.add_argument("section")
    p_unset.add_argument("key")
    p_unset.set_defaults(func=unset_cmd)

    p_add = subparsers.add_parser("add-section", help="Add an empty section.")
    p_add.add_argument("path", type=Path)
    p_add.add_argument("name")
    p_add.set_defaults(func=add_section_cmd)

    p_remove = subparsers.add_parser("remove-section", help="Remove a section and its keys.")
    p_remove.add_argument("path", type=Path)
    p_remove.add_argument("name")
    p_remove.set_defaults(func=remove_section_cmd)

    p_backups = subparsers.add_parser("backups", help="List backups of a file.")
    p_backups.add_argument("path", type=Path)
    p_backups.set_defaults(func=backups_cmd)

    p_gui = subparsers.add_parser("gui", help="Launch the form editor.")
    p_gui.add_argument("path", nargs="?", type=Path, default=None)
    p_gui.set_defaults(func=gui_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        enable_debug_logging()
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1
    try:
        return int(func(args))
    except (
        IniFileNotFoundError,
        SectionNotFoundError,
        KeyNotFoundError,
        DuplicateSectionError,
        InvalidNameError,
    ) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except IniEditError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except SystemExit as exc:  # pragma: no cover - argparse may raise
        return int(exc.code)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
