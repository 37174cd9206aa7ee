import json
from importlib import resources

import jsonschema
import pytest


def test_manifest_schema_validation() -> None:
    root = resources.files("pyevchargefinder.provider")
    schema = json.loads((root / "manifest.schema.json").read_text(encoding="utf-8"))
    for entry in root.iterdir():
        if not entry.is_dir():
            continue
        manifest_path = entry / "manifest.json"
        if not manifest_path.is_file():
            continue
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
        jsonschema.validate(instance=data, schema=schema)


def test_manifest_schema_rejects_unknown_keys() -> None:
    root = resources.files("pyevchargefinder.provider")
    schema = json.loads((root / "manifest.schema.json").read_text(encoding="utf-8"))
    data = {
        "id": "sample",
        "name": "Sample",
        "stable_ids": True,
        "requires_api_key": False,
        "region": "US",
    }
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=data, schema=schema)
