"""
Footgun Catalog - the in-memory collection of documented pitfalls.

Built once from a definition and read-only afterwards. Catalog order is
definition order, which is the chronological order in which footguns
were discovered.

Usage:
    catalog = load_catalog("footguns.json")

    # Everything known about one framework
    express = catalog.by_framework("Express")

    # A specific record
    record = catalog.by_id(2)

    # Unresolved hazards first
    for record in catalog.all_open():
        print(record.title)
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

from ..exceptions import DuplicateIdError, MalformedRecordError, NotFoundError
from .loader import DefinitionSource, parse_definition, read_definition
from .models import FootgunRecord, FootgunStatus

logger = logging.getLogger(__name__)


class FootgunCatalog:
    """Immutable, ordered collection of footgun records."""

    def __init__(self, records: Sequence[FootgunRecord], frameworks: Optional[Sequence[str]] = None):
        self._records = tuple(records)
        self._by_id: Dict[int, FootgunRecord] = {}
        for record in self._records:
            if record.id in self._by_id:
                raise DuplicateIdError(record.id)
            self._by_id[record.id] = record

        if frameworks is None:
            frameworks = []
            for record in self._records:
                if record.framework not in frameworks:
                    frameworks.append(record.framework)
        else:
            declared = set(frameworks)
            for index, record in enumerate(self._records):
                if record.framework not in declared:
                    raise MalformedRecordError(
                        index, "framework", f"'{record.framework}' is not a declared framework"
                    )
        self._frameworks = tuple(frameworks)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FootgunCatalog":
        frameworks, records = parse_definition(data)
        return cls(records, frameworks)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FootgunCatalog":
        catalog = cls.from_dict(read_definition(Path(path)))
        logger.info(f"Loaded {len(catalog)} footguns from {path}")
        return catalog

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FootgunRecord]:
        return iter(self._records)

    def __contains__(self, footgun_id: object) -> bool:
        return footgun_id in self._by_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FootgunCatalog):
            return NotImplemented
        return self._records == other._records and self._frameworks == other._frameworks

    @property
    def records(self) -> List[FootgunRecord]:
        """All records in stable catalog order."""
        return list(self._records)

    @property
    def frameworks(self) -> List[str]:
        return list(self._frameworks)

    def by_framework(self, name: str) -> List[FootgunRecord]:
        """Records for a framework in catalog order; empty for an unknown framework."""
        wanted = name.strip().lower()
        return [r for r in self._records if r.framework.lower() == wanted]

    def by_id(self, footgun_id: int) -> FootgunRecord:
        record = self._by_id.get(footgun_id)
        if record is None:
            raise NotFoundError(footgun_id)
        return record

    def get(self, footgun_id: int) -> Optional[FootgunRecord]:
        return self._by_id.get(footgun_id)

    def by_status(self, status: FootgunStatus) -> List[FootgunRecord]:
        return [r for r in self._records if r.status == status]

    def all_open(self) -> List[FootgunRecord]:
        """Unresolved hazards, in catalog order."""
        return self.by_status(FootgunStatus.OPEN)

    def with_status(
        self,
        footgun_id: int,
        status: FootgunStatus,
        fixed_in: Optional[str] = None,
        note: Optional[str] = None,
    ) -> "FootgunCatalog":
        """
        Return a new catalog with one record's status transitioned.

        This catalog is left untouched; records are never removed, only
        re-statused with a note.
        """
        current = self.by_id(footgun_id)
        updated = current.transition(status, fixed_in=fixed_in, note=note)
        logger.info(f"Footgun {footgun_id} moved from {current.status.value} to {status.value}")
        return FootgunCatalog(
            [updated if r.id == footgun_id else r for r in self._records],
            self._frameworks,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frameworks": list(self._frameworks),
            "footguns": [r.to_dict() for r in self._records],
        }

    def get_statistics(self) -> Dict[str, Any]:
        by_framework = {name: 0 for name in self._frameworks}
        by_status = {s.value: 0 for s in FootgunStatus}

        for record in self._records:
            by_framework[record.framework] = by_framework.get(record.framework, 0) + 1
            by_status[record.status.value] += 1

        return {
            "total_footguns": len(self._records),
            "total_frameworks": len(self._frameworks),
            "open_footguns": by_status[FootgunStatus.OPEN.value],
            "by_framework": by_framework,
            "by_status": by_status,
        }


def load_catalog(source: DefinitionSource) -> FootgunCatalog:
    """Load a catalog from a path, JSON text or parsed definition mapping."""
    if isinstance(source, Path) or (isinstance(source, str) and not source.lstrip().startswith("{")):
        return FootgunCatalog.from_file(source)
    return FootgunCatalog.from_dict(read_definition(source))


def load_default_catalog() -> FootgunCatalog:
    """Load the catalog from the configured data path."""
    from config.settings import settings

    return FootgunCatalog.from_file(settings.catalog.data_path)
