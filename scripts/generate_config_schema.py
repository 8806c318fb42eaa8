#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from testweaver.core import paths  # noqa: E402
from testweaver.core.jsonio import dumps, read_json  # noqa: E402
from testweaver.core.schema import build_schema  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Regenerate the config JSON schema from default.json")
    parser.add_argument("--defaults", help="Path to default.json (default: packaged config)")
    parser.add_argument("--out", help="Where to write the schema (default: next to default.json)")
    args = parser.parse_args()

    defaults_path = Path(args.defaults).expanduser() if args.defaults else paths.default_config_path()
    out_path = Path(args.out).expanduser() if args.out else defaults_path.with_name(paths.SCHEMA_FILENAME)

    try:
        defaults = read_json(defaults_path)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"error generating json schema: {exc}", file=sys.stderr)
        print(f"ensure '{defaults_path}' exists and is valid json.", file=sys.stderr)
        return 1
    if not isinstance(defaults, dict):
        print(f"error: '{defaults_path}' must hold a json object", file=sys.stderr)
        return 1

    out_path.write_text(dumps(build_schema(defaults)), encoding="utf-8")
    print(f"json schema generated at: {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
