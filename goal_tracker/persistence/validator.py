import json
from pathlib import Path
from typing import Any, Dict, List

import jsonschema


def _load_schema(name: str) -> Dict[str, Any]:
    schema_path = Path(__file__).with_name(f"{name}.schema.json")
    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)["schema"]


# Goals are checked one stored item at a time so a single bad record can be dropped.
_goal_validator = jsonschema.Draft7Validator(_load_schema("goals")["items"])
_labs_validator = jsonschema.Draft7Validator(_load_schema("labs"))


def _describe(validator: jsonschema.Draft7Validator, data: Any) -> List[str]:
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(part) for part in e.path])
    return [f"{'/'.join(map(str, err.path)) or '<root>'} {err.message}" for err in errors]


def goal_errors(item: Any) -> List[str]:
    return _describe(_goal_validator, item)


def labs_errors(data: Any) -> List[str]:
    return _describe(_labs_validator, data)
