"""
Footgun Definition Loader - reads the canonical structured definition.

The definition is JSON:

    {
        "frameworks": ["Express", "SvelteKit", "Firebase"],
        "footguns": [
            {
                "id": 1,
                "framework": "Express",
                "title": "...",
                "status": "open",
                "explanation": "...",
                "reproduction": {"scenario": "...", "code": "..."},
                "remedies": [{"label": "Solution A", "guidance": "..."}]
            }
        ]
    }

Parsing is all-or-nothing: the first invalid record aborts the load.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..exceptions import CatalogLoadError, DuplicateIdError, MalformedRecordError
from .models import FootgunRecord, FootgunStatus, Remedy, Reproduction

logger = logging.getLogger(__name__)

DefinitionSource = Union[str, Path, Mapping[str, Any]]


def read_definition(source: DefinitionSource) -> Mapping[str, Any]:
    """Resolve a path, JSON text or parsed mapping into a definition mapping."""
    if isinstance(source, Mapping):
        return source

    if isinstance(source, str) and source.lstrip().startswith("{"):
        text = source
        origin = "<string>"
    else:
        path = Path(source)
        if not path.exists():
            raise CatalogLoadError(
                f"Definition file not found: {path}",
                {"path": str(path)}
            )
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        origin = str(path)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(
            f"Definition is not valid JSON ({origin}): {e}",
            {"source": origin, "line": e.lineno, "column": e.colno}
        ) from e

    if not isinstance(data, Mapping):
        raise CatalogLoadError(
            f"Definition must be a JSON object ({origin})",
            {"source": origin}
        )
    return data


def _require_str(raw: Mapping[str, Any], index: int, name: str) -> str:
    if name not in raw or raw[name] is None:
        raise MalformedRecordError(index, name, "is missing")
    value = raw[name]
    if not isinstance(value, str):
        raise MalformedRecordError(index, name, "must be a string")
    if not value.strip():
        raise MalformedRecordError(index, name, "must not be empty")
    return value.strip()


def _optional_str(raw: Mapping[str, Any], index: int, name: str) -> Optional[str]:
    value = raw.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedRecordError(index, name, "must be a string")
    return value


def _parse_id(raw: Mapping[str, Any], index: int) -> int:
    if "id" not in raw or raw["id"] is None:
        raise MalformedRecordError(index, "id", "is missing")
    value = raw["id"]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedRecordError(index, "id", "must be an integer")
    if value < 1:
        raise MalformedRecordError(index, "id", "must be a positive integer")
    return value


def _parse_status(raw: Mapping[str, Any], index: int) -> FootgunStatus:
    value = _require_str(raw, index, "status")
    try:
        return FootgunStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in FootgunStatus)
        raise MalformedRecordError(index, "status", f"must be one of: {allowed}")


def _parse_reproduction(raw: Mapping[str, Any], index: int) -> Reproduction:
    value = raw.get("reproduction")
    if value is None:
        raise MalformedRecordError(index, "reproduction", "is missing")
    if isinstance(value, str):
        return Reproduction(scenario=value)
    if not isinstance(value, Mapping):
        raise MalformedRecordError(index, "reproduction", "must be a string or an object")
    scenario = value.get("scenario")
    if not isinstance(scenario, str) or not scenario.strip():
        raise MalformedRecordError(index, "reproduction.scenario", "is missing")
    return Reproduction(
        scenario=scenario,
        code=_optional_str(value, index, "code"),
    )


def _parse_remedies(raw: Mapping[str, Any], index: int) -> Tuple[Remedy, ...]:
    value = raw.get("remedies", [])
    if not isinstance(value, list):
        raise MalformedRecordError(index, "remedies", "must be a list")

    remedies = []
    for position, item in enumerate(value):
        if not isinstance(item, Mapping):
            raise MalformedRecordError(index, f"remedies[{position}]", "must be an object")
        label = item.get("label")
        guidance = item.get("guidance")
        if not isinstance(label, str) or not label.strip():
            raise MalformedRecordError(index, f"remedies[{position}].label", "is missing")
        if not isinstance(guidance, str) or not guidance.strip():
            raise MalformedRecordError(index, f"remedies[{position}].guidance", "is missing")
        remedies.append(Remedy(
            label=label.strip(),
            guidance=guidance,
            code=_optional_str(item, index, "code"),
        ))
    return tuple(remedies)


def _parse_notes(raw: Mapping[str, Any], index: int) -> Tuple[str, ...]:
    value = raw.get("notes", [])
    if not isinstance(value, list) or not all(isinstance(n, str) for n in value):
        raise MalformedRecordError(index, "notes", "must be a list of strings")
    return tuple(value)


def parse_record(
    raw: Mapping[str, Any],
    index: int,
    frameworks: Optional[Dict[str, str]] = None,
) -> FootgunRecord:
    """
    Parse one raw record.

    Args:
        raw: The record mapping from the definition
        index: Position of the record in the definition, for error messages
        frameworks: Lower-cased name -> canonical name of the snapshot's
            framework set, or None to accept any framework

    Returns:
        The parsed record
    """
    if not isinstance(raw, Mapping):
        raise MalformedRecordError(index, "<record>", "must be an object")

    footgun_id = _parse_id(raw, index)
    framework = _require_str(raw, index, "framework")
    if frameworks is not None:
        canonical = frameworks.get(framework.lower())
        if canonical is None:
            raise MalformedRecordError(index, "framework", f"'{framework}' is not a declared framework")
        framework = canonical

    title = _require_str(raw, index, "title")
    status = _parse_status(raw, index)
    explanation = _require_str(raw, index, "explanation")
    reproduction = _parse_reproduction(raw, index)
    remedies = _parse_remedies(raw, index)

    # an open record may have no known fix yet
    if not remedies and status != FootgunStatus.OPEN:
        raise MalformedRecordError(index, "remedies", f"must not be empty when status is '{status.value}'")

    return FootgunRecord(
        id=footgun_id,
        framework=framework,
        title=title,
        status=status,
        explanation=explanation,
        reproduction=reproduction,
        remedies=remedies,
        fixed_in=_optional_str(raw, index, "fixed_in"),
        notes=_parse_notes(raw, index),
    )


def _declared_frameworks(data: Mapping[str, Any]) -> Optional[List[str]]:
    declared = data.get("frameworks")
    if declared is None:
        return None
    if not isinstance(declared, list) or not all(isinstance(f, str) and f.strip() for f in declared):
        raise CatalogLoadError(
            "'frameworks' must be a list of non-empty strings",
            {"field": "frameworks"}
        )
    return [f.strip() for f in declared]


def parse_definition(data: Mapping[str, Any]) -> Tuple[List[str], List[FootgunRecord]]:
    """
    Parse a definition mapping into its framework set and ordered records.

    Raises:
        MalformedRecordError: A record is missing a required field
        DuplicateIdError: Two records share an id
        CatalogLoadError: The definition itself is structurally invalid
    """
    raw_records = data.get("footguns")
    if not isinstance(raw_records, list):
        raise CatalogLoadError(
            "Definition must contain a 'footguns' list",
            {"field": "footguns"}
        )

    declared = _declared_frameworks(data)
    lookup = None
    if declared is not None:
        lookup = {name.lower(): name for name in declared}

    records = []
    seen_ids = set()
    try:
        for index, raw in enumerate(raw_records):
            record = parse_record(raw, index, lookup)
            if record.id in seen_ids:
                raise DuplicateIdError(record.id)
            seen_ids.add(record.id)
            records.append(record)
    except CatalogLoadError as e:
        logger.warning(f"Rejected footgun definition: {e.message}")
        raise

    if declared is not None:
        frameworks = declared
    else:
        frameworks = []
        for record in records:
            if record.framework not in frameworks:
                frameworks.append(record.framework)

    logger.info(f"Parsed {len(records)} footguns across {len(frameworks)} frameworks")
    return frameworks, records
