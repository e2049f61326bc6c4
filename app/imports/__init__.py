from app.imports.importers import (
    IMPORTERS,
    DepartmentImporter,
    DistrictImporter,
    Importer,
    InstitutionImporter,
    NomineeImporter,
    PositionImporter,
)
from app.imports.models import (
    CsvRow,
    CsvTemplate,
    EntityTally,
    ImportParseError,
    ImportResult,
    ImportSummary,
    RowError,
    RowFailure,
    RowOutcome,
    RowSuccess,
)
from app.imports.parsing import read_csv
from app.imports.pipeline import run_bulk_import

__all__ = [
    "IMPORTERS",
    "Importer",
    "NomineeImporter",
    "DistrictImporter",
    "InstitutionImporter",
    "PositionImporter",
    "DepartmentImporter",
    "CsvRow",
    "CsvTemplate",
    "EntityTally",
    "ImportParseError",
    "ImportResult",
    "ImportSummary",
    "RowError",
    "RowFailure",
    "RowOutcome",
    "RowSuccess",
    "read_csv",
    "run_bulk_import",
]
