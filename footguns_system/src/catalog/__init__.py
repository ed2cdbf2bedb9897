from .models import FootgunRecord, FootgunStatus, Remedy, Reproduction
from .loader import parse_definition, parse_record, read_definition
from .catalog import FootgunCatalog, load_catalog, load_default_catalog
from .search import FootgunSearchEngine, FootgunMatch

__all__ = [
    "FootgunRecord",
    "FootgunStatus",
    "Remedy",
    "Reproduction",
    "parse_definition",
    "parse_record",
    "read_definition",
    "FootgunCatalog",
    "load_catalog",
    "load_default_catalog",
    "FootgunSearchEngine",
    "FootgunMatch",
]
