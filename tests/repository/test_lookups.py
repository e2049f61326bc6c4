from __future__ import annotations

import sqlite3

import pytest

from app import repository
from app.imports import NomineeImporter, run_bulk_import
from app.query import PageRequest


def test_find_or_create_position_matches_case_insensitively(session) -> None:
    created, was_created = repository.find_or_create_position(session, "Chairman")
    session.commit()

    found, was_found_created = repository.find_or_create_position(session, "  chairman ")

    assert was_created is True
    assert was_found_created is False
    assert found.id == created.id


def test_find_or_create_district_keeps_existing_region(session) -> None:
    repository.create_district(session, "Central", "Mid")

    district, created = repository.find_or_create_district(session, "CENTRAL", "Elsewhere")

    assert created is False
    assert district.region == "Mid"


def test_find_or_create_institution_defaults_status(session) -> None:
    institution, created = repository.find_or_create_institution(session, "Water Board")

    assert created is True
    assert institution.status is False


def test_duplicate_lower_name_raises_integrity_error(session) -> None:
    repository.create_institution(session, "Water Board")

    with pytest.raises(sqlite3.IntegrityError):
        repository.create_institution(session, "WATER BOARD")


def test_find_or_create_folds_non_ascii_case(session) -> None:
    created, was_created = repository.find_or_create_position(session, "Ärztekammer")
    session.commit()

    found, was_found_created = repository.find_or_create_position(session, "ärztekammer")

    assert was_created is True
    assert was_found_created is False
    assert found.id == created.id


def test_duplicate_non_ascii_name_raises_integrity_error(session) -> None:
    repository.create_district(session, "Straße Nord", "North")

    with pytest.raises(sqlite3.IntegrityError):
        repository.create_district(session, "STRASSE NORD", "North")


def test_nominee_import_reuses_non_ascii_lookups(session) -> None:
    data = (
        "name,position,institution,district,region\n"
        "Jane Roe,Ärztekammer,Ämter,Öst,East\n"
        "John Doe,ärztekammer,ämter,öst,East\n"
    ).encode("utf-8")

    result = run_bulk_import(session, NomineeImporter(), data)

    assert result.summary.details["positions"].created == 1
    assert result.summary.details["positions"].existing == 1
    assert repository.list_positions(session, PageRequest()).count == 1
    assert repository.list_institutions(session, PageRequest()).count == 1
    assert repository.list_districts(session, PageRequest()).count == 1
