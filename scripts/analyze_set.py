"""Explain why a requested set has no legal encounter.

Usage examples:
    python -m scripts.analyze_set --data gamedata.json --version SW --set-file pikachu.txt
    python -m scripts.analyze_set --data gamedata.json --version 44 --set-text "$(cat set.txt)"
    python -m scripts.analyze_set --data gamedata.json --version SW \
        --request-json '{"species": 25, "moves": [85, 344], "level": 5}' --json
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from set_analysis.data.interfaces import AnalysisTarget
from set_analysis.data.table import GameDataTable
from set_analysis.engine.analysis_config import AnalysisConfig
from set_analysis.engine.diagnosis import SetAnalyzer
from set_analysis.engine.messages import format_result, result_code
from set_analysis.models.batch import BatchSettings, parse_filters
from set_analysis.models.request import RequestedConfiguration
from set_analysis.parser.showdown_set import parse_showdown_set

logger = logging.getLogger(__name__)


def _parse_int_like(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("bool is not a valid integer value")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip(), 0)
    raise ValueError(f"Expected integer-like value, got: {value!r}")


def _parse_version(value: str, data: GameDataTable) -> int:
    """Accept a version id ("44", "0x2C") or a version name ("SW")."""
    try:
        return _parse_int_like(value)
    except ValueError:
        resolved = data.version_by_name(value)
        if resolved is None:
            raise ValueError(f"Unknown version: {value!r}") from None
        return resolved


def _string_list(value: Any, what: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{what} must be a list of strings")
    return value


def _request_from_dict(data: dict[str, Any]) -> RequestedConfiguration:
    if "species" not in data:
        raise ValueError("Request JSON must include 'species'")
    moves = [_parse_int_like(v) for v in data.get("moves", [])]
    encounter_filters = None
    if data.get("encounter_filters") is not None:
        encounter_filters = tuple(
            parse_filters(_string_list(data["encounter_filters"], "encounter_filters"))
        )
    batch = BatchSettings()
    if data.get("batch") is not None:
        batch = BatchSettings.from_lines(_string_list(data["batch"], "batch"))

    def _optional_int(key: str) -> int | None:
        raw = data.get(key)
        return None if raw is None else _parse_int_like(raw)

    return RequestedConfiguration(
        species=_parse_int_like(data["species"]),
        form=_parse_int_like(data.get("form", 0)),
        form_name=str(data.get("form_name", "")),
        moves=tuple(moves),
        level=_parse_int_like(data.get("level", 100)),
        ability=_optional_int("ability"),
        ability_number=_optional_int("ability_number"),
        version=_optional_int("version"),
        encounter_filters=encounter_filters,
        batch=batch,
    )


def _load_request(args: argparse.Namespace, data: GameDataTable) -> RequestedConfiguration:
    if args.request_json is not None:
        payload = json.loads(args.request_json)
        if not isinstance(payload, dict):
            raise ValueError("JSON payload must be an object")
        return _request_from_dict(payload)
    if args.set_file is not None:
        return parse_showdown_set(args.set_file.read_text(encoding="utf-8"), data)
    return parse_showdown_set(args.set_text, data)


def main() -> None:
    parser = argparse.ArgumentParser(description="Diagnose an illegal set")
    parser.add_argument("--data", type=Path, required=True, help="Game data JSON file.")
    parser.add_argument("--version", type=str, required=True, help="Target game version (id or name).")
    parser.add_argument("--generation", type=int, default=0, help="Target generation (default: from version).")

    set_group = parser.add_mutually_exclusive_group(required=True)
    set_group.add_argument("--set-file", type=Path, help="Path to a Showdown set text file.")
    set_group.add_argument("--set-text", type=str, help="Inline Showdown set text.")
    set_group.add_argument("--request-json", type=str, help="Inline request JSON object.")

    parser.add_argument("--max-probes", type=int, default=None, help="Cap on move-search probes.")
    parser.add_argument("--no-batch", action="store_true", help="Ignore batch filters in the set.")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    data = GameDataTable.load(args.data)
    version = _parse_version(args.version, data)
    request = _load_request(args, data)
    config = AnalysisConfig(
        allow_batch_commands=not args.no_batch,
        max_probes=args.max_probes,
    )
    target = AnalysisTarget(data=data, version=version, generation=args.generation)
    logger.info("Analyzing species %d form %d for version %d", request.species, request.form, version)

    result = SetAnalyzer(target, config).diagnose(request)
    message = format_result(result)

    if args.json:
        payload = {
            "code": result_code(result),
            "message": message,
            "details": asdict(result),
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    print(message)


if __name__ == "__main__":
    main()
