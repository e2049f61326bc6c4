from __future__ import annotations

from typing import Protocol

from sqlalchemy.orm import Session

from app import repository
from app.imports.models import CsvRow, CsvTemplate, RowChanges, RowError, RowSuccess
from app.imports.parsing import normalize_image_url, parse_flag


class Importer(Protocol):
    entity: str
    tracked_entities: tuple[str, ...]
    template: CsvTemplate

    def import_row(self, session: Session, row: CsvRow, changes: RowChanges) -> RowSuccess:
        ...


def _require(row: CsvRow, template: CsvTemplate) -> None:
    missing = [column for column in template.required if not row.get(column)]
    if missing:
        raise RowError(f"Missing required fields: {', '.join(missing)}")


class NomineeImporter:
    entity = "nominees"
    tracked_entities = ("positions", "institutions", "districts", "nominees")
    template = CsvTemplate(
        headers=["name", "position", "institution", "district", "region", "image"],
        required=["name", "position", "institution", "district", "region"],
        optional=["image"],
        example={
            "name": "John Doe",
            "position": "Chairman",
            "institution": "Example Institution",
            "district": "Central District",
            "region": "Central",
            "image": "https://example.com/image.jpg",
        },
    )

    def import_row(self, session: Session, row: CsvRow, changes: RowChanges) -> RowSuccess:
        _require(row, self.template)
        image = normalize_image_url(row.get("image"))

        position, created = repository.find_or_create_position(session, row.values["position"])
        changes.record("positions", created)
        institution, created = repository.find_or_create_institution(
            session, row.values["institution"]
        )
        changes.record("institutions", created)
        district, created = repository.find_or_create_district(
            session, row.values["district"], row.values["region"]
        )
        changes.record("districts", created)

        nominee = repository.create_nominee(
            session,
            name=row.values["name"],
            position_id=position.id,
            institution_id=institution.id,
            district_id=district.id,
            status=False,
            image=image,
            commit=False,
        )
        changes.record("nominees", True)
        return RowSuccess(
            line=row.line,
            name=nominee.name,
            record=nominee,
            created_ids={
                "position": position.id,
                "institution": institution.id,
                "district": district.id,
            },
        )


class DistrictImporter:
    entity = "districts"
    tracked_entities = ("districts",)
    template = CsvTemplate(
        headers=["name", "region"],
        required=["name", "region"],
        example={"name": "Example District", "region": "Example Region"},
    )

    def import_row(self, session: Session, row: CsvRow, changes: RowChanges) -> RowSuccess:
        _require(row, self.template)
        name = row.values["name"]
        if repository.get_district_by_name(session, name) is not None:
            raise RowError(f"District '{name}' already exists")
        district = repository.create_district(
            session, name, row.values["region"], commit=False
        )
        changes.record(self.entity, True)
        return RowSuccess(line=row.line, name=district.name, record=district)


class InstitutionImporter:
    entity = "institutions"
    tracked_entities = ("institutions",)
    template = CsvTemplate(
        headers=["name", "status", "image"],
        required=["name"],
        optional=["status", "image"],
        example={
            "name": "Example Institution",
            "status": "true",
            "image": "https://example.com/image.jpg",
        },
    )

    def import_row(self, session: Session, row: CsvRow, changes: RowChanges) -> RowSuccess:
        _require(row, self.template)
        name = row.values["name"]
        if repository.get_institution_by_name(session, name) is not None:
            raise RowError(f"Institution '{name}' already exists")
        institution = repository.create_institution(
            session,
            name,
            status=parse_flag(row.get("status")),
            image=normalize_image_url(row.get("image")),
            commit=False,
        )
        changes.record(self.entity, True)
        return RowSuccess(line=row.line, name=institution.name, record=institution)


class PositionImporter:
    entity = "positions"
    tracked_entities = ("positions",)
    template = CsvTemplate(
        headers=["name"],
        required=["name"],
        example={"name": "Chairman"},
    )

    def import_row(self, session: Session, row: CsvRow, changes: RowChanges) -> RowSuccess:
        _require(row, self.template)
        name = row.values["name"]
        if repository.get_position_by_name(session, name) is not None:
            raise RowError(f"Position '{name}' already exists")
        position = repository.create_position(session, name, commit=False)
        changes.record(self.entity, True)
        return RowSuccess(line=row.line, name=position.name, record=position)


class DepartmentImporter:
    entity = "departments"
    tracked_entities = ("departments",)
    template = CsvTemplate(
        headers=["name"],
        required=["name"],
        example={"name": "Finance"},
    )

    def import_row(self, session: Session, row: CsvRow, changes: RowChanges) -> RowSuccess:
        _require(row, self.template)
        name = row.values["name"]
        if repository.get_department_by_name(session, name) is not None:
            raise RowError(f"Department '{name}' already exists")
        department = repository.create_department(session, name, commit=False)
        changes.record(self.entity, True)
        return RowSuccess(line=row.line, name=department.name, record=department)


IMPORTERS: dict[str, Importer] = {
    importer.entity: importer
    for importer in (
        NomineeImporter(),
        DistrictImporter(),
        InstitutionImporter(),
        PositionImporter(),
        DepartmentImporter(),
    )
}
