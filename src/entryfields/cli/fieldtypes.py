#!/usr/bin/env python3
import json

from entryfields.core.app_context import AppContext


def register(subparsers):
    sp = subparsers.add_parser("types", help="List registered field types")
    sp.add_argument("--json", action="store_true", help="JSON output")
    sp.set_defaults(func=list_types)


def list_types(args, ctx: AppContext) -> int:
    entries = ctx.registry.entries()

    if args.json:
        payload = [{
            "name": e.name,
            "label": e.label,
            "sources": list(e.sources),
            "capabilities": list(e.capabilities),
            "edit_component": ctx.registry.edit_component(e.name),
            "view_component": ctx.registry.view_component(e.name),
        } for e in entries]
        print(json.dumps(payload, indent=2))
        return 0 if payload else 1

    if not entries:
        print("No field types registered.")
        return 1

    print("\nField Types:")
    for e in entries:
        sources = "+".join(e.sources)
        print(f"  - {e.name:16} {e.label:20} [{sources}]  {', '.join(e.capabilities)}")
    return 0
