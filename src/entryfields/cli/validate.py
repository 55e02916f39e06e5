#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from entryfields.core.app_context import AppContext
from entryfields.core.constants import DEFAULT_TEXT_ENCODING
from entryfields.core.entry.codec import read_entry
from entryfields.core.errors import EntryFieldsError
from entryfields.core.formatting import format_pydantic_errors_simple
from entryfields.core.schema.content_schema import ContentSchema, get_schema_by_path
from entryfields.core.schema.resolver import resolve_entry_validator
from entryfields.core.utils import load_structured_file, split_front_matter

MARKDOWN_EXTENSIONS = {".md", ".markdown", ".mdx"}
DATA_EXTENSIONS = {".yml", ".yaml", ".json"}
SUPPORTED_EXTENSIONS = MARKDOWN_EXTENSIONS | DATA_EXTENSIONS


def _is_supported_file(p: Path) -> bool:
    return p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS


def find_all_files(paths: Iterable[str | Path], recursive: bool = False) -> list[Path]:
    files: list[Path] = []
    for raw in paths:
        p = Path(raw)
        if _is_supported_file(p):
            files.append(p)
        elif p.is_dir():
            candidates = p.rglob("*") if recursive else p.glob("*")
            files.extend(c for c in candidates if _is_supported_file(c))
    # stable, de-duplicated order
    return sorted(set(files))


def load_entry(file_path: Path) -> Dict[str, Any]:
    """Entry values: front matter of Markdown files, the whole mapping of YAML/JSON files."""
    if file_path.suffix.lower() in MARKDOWN_EXTENSIONS:
        data, _body = split_front_matter(file_path.read_text(encoding=DEFAULT_TEXT_ENCODING))
        return data
    return load_structured_file(file_path)


def _schema_for(file_path: Path, content_name: Optional[str], ctx: AppContext) -> Optional[ContentSchema]:
    if content_name:
        return ContentSchema.from_settings(ctx.settings, content_name)
    raw = get_schema_by_path(ctx.settings, file_path.as_posix())
    return ContentSchema.model_validate(raw) if raw is not None else None


def validate_entry(file_path: Path, schema: ContentSchema, ctx: AppContext) -> Tuple[bool, str, List[str]]:
    """
    Returns: (is_valid, summary_message, error_list)
    """
    try:
        raw = load_entry(file_path)
    except Exception as e:
        return False, f"{file_path}: Failed to read entry ({e})", []

    decoded = read_entry(raw, schema.fields, ctx.settings, ctx.registry)
    errors = [f"{path}: {message}" for path, message in decoded.failures.items()]

    result = resolve_entry_validator(schema.fields, ctx.settings, ctx.registry).validate(decoded.values)
    errors.extend(result.messages())
    if errors:
        return False, f"{file_path}: Validation Failed", errors
    return True, f"{file_path}: Validation Passed", []


def validate(args, ctx: AppContext) -> int:
    files = find_all_files(args.files, recursive=args.recursive)
    if not files:
        print("No entry files found.")
        return 1

    success = 0
    for fp in files:
        try:
            schema = _schema_for(fp, args.content, ctx)
        except LookupError as e:
            print(f"\n{fp}: {e}")
            continue
        except ValidationError as e:
            print(f"\n{fp}: Invalid content schema")
            for line in format_pydantic_errors_simple(e):
                print(f"  - {line}")
            continue
        if schema is None:
            print(f"\n{fp}: No content schema matches this path (use --content)")
            continue

        try:
            ok, msg, errs = validate_entry(fp, schema, ctx)
        except EntryFieldsError as e:
            ok, msg, errs = False, f"{fp}: {e}", []

        if ok:
            success += 1
            if args.verbose:
                print(f"\n{msg}")
            continue
        print(f"\n{msg}")
        for e in errs:
            print(f"  - {e}")

    total = len(files)
    print(f"\nValidation complete: {success}/{total} passed.")
    return 0 if success == total else 1


def register(subparser):
    parser = subparser.add_parser("validate", help="Validate entry files against a content schema.")
    parser.add_argument("files", nargs="+", help="Entry files (Markdown front matter, YAML, JSON) or directories.")
    parser.add_argument("--content", default=None, help="Name of the content entry in the settings file.")
    parser.add_argument("--recursive", "-r", action="store_true", help="Recursively scan directories.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show all results, not only errors.")
    parser.set_defaults(func=validate)
