"""Tests for the intake surface (browse and drop modalities)."""

import asyncio

import pytest

from uploader.intake import IntakeSurface
from uploader.models import UploadConfig
from uploader.state import UploadStateStore


@pytest.fixture
def resume_paths(tmp_path):
    first = tmp_path / "resume.pdf"
    first.write_bytes(b"%PDF-1.4 page one")
    second = tmp_path / "notes.txt"
    second.write_text("Skills: Python")
    return [first, second]


def surface():
    return IntakeSurface(UploadStateStore(UploadConfig()))


def test_browse_and_drop_are_equivalent(resume_paths):
    browsed, dropped = surface(), surface()

    assert asyncio.run(browsed.browse(resume_paths)) is True
    assert asyncio.run(dropped.drop(resume_paths)) is True

    assert browsed.store.files == dropped.store.files
    assert [f.name for f in browsed.store.files] == ["resume.pdf", "notes.txt"]
    assert [f.mime_type for f in browsed.store.files] == ["application/pdf", "text/plain"]
    assert browsed.store.session.encodings == dropped.store.session.encodings


def test_selection_reset_after_success_allows_reselect(resume_paths):
    intake = surface()
    asyncio.run(intake.browse(resume_paths[:1]))
    assert intake.selection == []

    assert asyncio.run(intake.browse(resume_paths[:1])) is True
    assert len(intake.store.files) == 2


def test_rejected_selection_keeps_input_value(tmp_path):
    bad = tmp_path / "sheet.xlsx"
    bad.write_bytes(b"PK")
    intake = surface()

    assert asyncio.run(intake.browse([bad])) is False
    assert intake.selection == [str(bad)]
    assert intake.store.error == "File type not supported"


def test_missing_path_surfaces_error(tmp_path):
    intake = surface()

    assert asyncio.run(intake.drop([tmp_path / "nowhere.pdf"])) is False
    assert "nowhere.pdf" in intake.store.error
    assert intake.store.files == []


def test_drag_state_is_presentation_only(resume_paths):
    intake = surface()

    intake.drag_enter()
    intake.drag_over()
    assert intake.dragging is True
    assert intake.store.files == []

    intake.drag_leave()
    assert intake.dragging is False

    intake.drag_enter()
    asyncio.run(intake.drop(resume_paths))
    assert intake.dragging is False


def test_disabled_while_busy(resume_paths):
    intake = surface()
    asyncio.run(intake.browse(resume_paths[:1]))
    intake.store.begin_submit()

    assert intake.disabled is True
    assert asyncio.run(intake.drop(resume_paths)) is False
    assert len(intake.store.files) == 1


def test_empty_selection_is_ignored():
    intake = surface()
    assert asyncio.run(intake.browse([])) is False
    assert intake.store.error is None
