"""
Store utilities - CLI tools for looking at and resetting the persisted dashboard state.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from zervos.core.config import KNOWN_KEYS, debug_enabled, get_store_backend, get_store_path, validate_config
from zervos.core.inspector import inspect_store
from zervos.core.medium import get_medium
from zervos.core.store import SafeStore
from util.logging import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and maintain the Zervos dashboard state store")
    parser.add_argument(
        "--backend",
        default=None,
        help="Store backend (default: ZERVOS_STORE_BACKEND or sqlite)"
    )
    parser.add_argument(
        "--path",
        default=None,
        help="SQLite store path (default: ZERVOS_STORE_PATH)"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print the decoded value of one record")
    show.add_argument("key", help=f"Record key, e.g. one of: {', '.join(KNOWN_KEYS)}")

    sub.add_parser("keys", help="List every stored key")
    sub.add_parser("inspect", help="Decode all known records and report problems")
    sub.add_parser("check-config", help="Validate environment configuration")

    reset = sub.add_parser("reset", help="Remove every record from the store")
    reset.add_argument(
        "--force",
        action="store_true",
        help="Reset without confirmation prompt"
    )

    remove = sub.add_parser("remove", help="Remove one record")
    remove.add_argument("key")

    return parser


def _open_store(args) -> SafeStore:
    backend = args.backend or get_store_backend()
    path = args.path or get_store_path()
    return SafeStore(get_medium(backend, path))


def show_command(store: SafeStore, key: str) -> int:
    result = store.read(key, None)
    if result.used_fallback:
        print(f"❌ {key}: {result.status}")
        return 1
    print(json.dumps(result.value, indent=2, ensure_ascii=False))
    return 0


def keys_command(store: SafeStore) -> int:
    for key in store.keys():
        print(key)
    return 0


def inspect_command(store: SafeStore) -> int:
    report = inspect_store(store)
    for record in report.records:
        marker = "✅" if record.status in ("ok", "absent") else "⚠️ "
        print(f"{marker} {record.key}: {record.status}")
        for error in record.errors:
            print(f"     - {error}")
    if report.dangling_selection:
        print("⚠️  selectedWorkspaceId points at a workspace that no longer exists")
    if report.unknown_keys:
        print(f"   Other keys: {', '.join(report.unknown_keys)}")
    print(f"Issues found: {report.issues_found}")
    return 1 if report.issues_found else 0


def check_config_command() -> int:
    issues = validate_config()
    if not issues:
        print("✅ Configuration OK")
        return 0
    for issue in issues:
        print(f"❌ {issue}")
    return 1


def reset_command(store: SafeStore, force: bool) -> int:
    if not force:
        response = input("Remove every persisted record? (yes/no): ").strip().lower()
        if response != "yes":
            print("Reset cancelled.")
            return 0
    if store.clear():
        print("✅ Store cleared")
        return 0
    print("❌ Store could not be cleared (see log)")
    return 1


def remove_command(store: SafeStore, key: str) -> int:
    if store.remove(key):
        print(f"✅ Removed {key}")
        return 0
    print(f"❌ Could not remove {key} (see log)")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if debug_enabled():
        logger.logger.setLevel(logging.DEBUG)

    if args.command == "check-config":
        return check_config_command()

    store = _open_store(args)
    try:
        if args.command == "show":
            return show_command(store, args.key)
        if args.command == "keys":
            return keys_command(store)
        if args.command == "inspect":
            return inspect_command(store)
        if args.command == "reset":
            return reset_command(store, args.force)
        if args.command == "remove":
            return remove_command(store, args.key)
    except Exception as e:
        print(f"❌ {args.command} failed with unexpected error: {e}")
        logger.error(f"CLI {args.command} failed: {e}")
        return 1
    return 2


if __name__ == "__main__":
    sys.exit(main())
