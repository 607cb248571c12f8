#!/usr/bin/env python3
"""
kvstore CLI: list, get, set and delete key-value pairs.

Usage:
  kvstore list
  kvstore get <key>
  kvstore set <key> <value>
  kvstore delete <key>

Options:
  --path <file>    Store file path (default: ./store.kv, or KVSTORE_PATH)
"""
from __future__ import annotations

import argparse
import os
import sys
from typing import NoReturn, Optional, Sequence

from dotenv import find_dotenv, load_dotenv

from common.logger import configure_logging, get_logger
from kvstore import DEFAULT_STORE_FILENAME, Store, StoreError

USAGE = """Usage:
kvstore list - list all key-value pairs
kvstore get KEY - show value for KEY
kvstore set KEY VALUE - set KEY to VALUE
kvstore delete KEY - remove KEY"""

ARITY = {"list": 0, "get": 1, "set": 2, "delete": 1}


def _fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    sys.exit(1)


def main(argv: Optional[Sequence[str]] = None) -> None:
    load_dotenv(find_dotenv(usecwd=True))
    configure_logging()
    log = get_logger(__name__)

    parser = argparse.ArgumentParser(
        prog="kvstore",
        description="kvstore CLI - persistent key-value pairs in a single file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=USAGE,
    )
    parser.add_argument(
        "--path",
        default=os.environ.get("KVSTORE_PATH", DEFAULT_STORE_FILENAME),
        help="Store file path",
    )
    parser.add_argument("command", nargs="?", help="list, get, set or delete")
    parser.add_argument("args", nargs="*", help="Key and/or value")
    parsed = parser.parse_args(argv)

    cmd = parsed.command
    args = parsed.args or []
    path = parsed.path

    if cmd not in ARITY or len(args) != ARITY[cmd]:
        print(USAGE)
        return

    try:
        store: Store[str] = Store.open_or_create(path)
    except (OSError, StoreError) as e:
        _fail(f"reading {path}: {e}")
    log.debug("cli: command=%s path=%s keys=%d", cmd, path, len(store))

    if cmd == "list":
        for key, value in sorted(store):
            print(f"{key}: {value}")

    elif cmd == "get":
        key = args[0]
        value = store.get(key)
        if value is None:
            print(f'key "{key}" not found')
        else:
            print(f"{key}: {value}")

    elif cmd == "set":
        key, value = args
        store.insert(key, value)
        try:
            store.sync()
        except (OSError, StoreError) as e:
            _fail(f"writing {path}: {e}")

    elif cmd == "delete":
        key = args[0]
        if key not in store:
            _fail(f'key "{key}" not found')
        store.remove(key)
        try:
            store.sync()
        except (OSError, StoreError) as e:
            _fail(f"writing {path}: {e}")


if __name__ == "__main__":
    main()
