from __future__ import annotations

import json
import subprocess
import sys

from tests._helpers import PACKAGED_SCHEMA, REPO_ROOT, write_json

SCRIPT = REPO_ROOT / "scripts" / "generate_config_schema.py"


def test_regenerated_schema_matches_packaged(tmp_path):
    out = tmp_path / "schema.json"
    p = subprocess.run([sys.executable, str(SCRIPT), "--out", str(out)], capture_output=True, text=True)
    assert p.returncode == 0, p.stderr
    assert json.loads(out.read_text(encoding="utf-8")) == json.loads(PACKAGED_SCHEMA.read_text(encoding="utf-8"))


def test_custom_defaults_drive_schema(tmp_path):
    defaults = write_json(tmp_path / "default.json", {"patterns": ["*.yaml"], "dryRun": False})
    p = subprocess.run([sys.executable, str(SCRIPT), "--defaults", str(defaults)], capture_output=True, text=True)
    assert p.returncode == 0, p.stderr
    schema = json.loads((tmp_path / "default-config.schema.json").read_text(encoding="utf-8"))
    assert schema["required"] == ["patterns", "dryRun"]
    assert schema["properties"]["dryRun"]["type"] == "boolean"


def test_unreadable_defaults_fail(tmp_path):
    p = subprocess.run(
        [sys.executable, str(SCRIPT), "--defaults", str(tmp_path / "missing.json")], capture_output=True, text=True
    )
    assert p.returncode == 1
    assert "error generating json schema" in p.stderr
