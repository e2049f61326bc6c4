from __future__ import annotations

import logging
import sqlite3

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.imports.importers import Importer
from app.imports.models import (
    CsvRow,
    ImportResult,
    ImportSummary,
    RowChanges,
    RowError,
    RowFailure,
    RowOutcome,
)
from app.imports.parsing import read_csv

logger = logging.getLogger(__name__)

ROW_ATTEMPTS = 2


def run_bulk_import(
    session: Session,
    importer: Importer,
    data: bytes,
    *,
    filename: str = "upload.csv",
) -> ImportResult:
    """Import every row of ``data`` with ``importer``.

    Parsing happens up front, so a malformed file raises ``ImportParseError``
    without touching the database. Rows are then processed one at a time,
    each committed or rolled back on its own.
    """
    rows = read_csv(data, filename=filename)
    summary = ImportSummary(total=len(rows))
    for entity in importer.tracked_entities:
        summary.tally(entity)
    result = ImportResult(entity=importer.entity, summary=summary)

    for row in rows:
        changes = RowChanges()
        outcome = _import_row(session, importer, row, changes)
        result.outcomes.append(outcome)
        if isinstance(outcome, RowFailure):
            summary.failed += 1
            summary.tally(importer.entity).failed += 1
            logger.debug(
                "Import of %s line %s failed: %s",
                importer.entity,
                outcome.line,
                outcome.reason,
            )
        else:
            summary.successful += 1
            summary.apply(changes)

    logger.info(
        "Bulk import of %s from %s: total=%s successful=%s failed=%s",
        importer.entity,
        filename,
        summary.total,
        summary.successful,
        summary.failed,
    )
    return result


def _import_row(
    session: Session, importer: Importer, row: CsvRow, changes: RowChanges
) -> RowOutcome:
    name = row.get("name") or ""
    reason = ""
    # A conflict usually means another writer created a lookup row first;
    # the retry picks that row up through find-or-create.
    for _ in range(ROW_ATTEMPTS):
        changes.created.clear()
        changes.existing.clear()
        try:
            outcome = importer.import_row(session, row, changes)
            session.commit()
            return outcome
        except RowError as exc:
            session.rollback()
            return RowFailure(line=row.line, name=name, reason=str(exc))
        except (sqlite3.IntegrityError, IntegrityError) as exc:
            session.rollback()
            reason = str(exc)
            logger.debug("Conflict importing %s line %s: %s", importer.entity, row.line, exc)
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Database error importing %s line %s", importer.entity, row.line)
            return RowFailure(line=row.line, name=name, reason=str(exc))
    return RowFailure(line=row.line, name=name, reason=reason)
