"""Tests for the upload validator."""

import pytest

from conftest import MB, make_file
from uploader.errors import ValidationError
from uploader.models import UploadConfig, UploadedFile
from uploader.validator import Validator


def test_accepts_supported_types_within_limit():
    validator = Validator(UploadConfig())

    for name in ("cv.jpg", "cv.png", "cv.webp", "cv.heic", "cv.pdf", "cv.txt", "cv.html", "cv.doc", "cv.docx"):
        assert validator.validate(make_file(name, 10)) is None, name


def test_missing_file():
    assert Validator(UploadConfig()).validate(None) == "No file selected"


def test_unsupported_type():
    file = make_file("cv.xlsx", 10)
    assert Validator(UploadConfig()).validate(file) == "File type not supported"


def test_oversized_file_reports_limit_in_megabytes():
    error = Validator(UploadConfig()).validate(make_file("scan.png", 12 * MB))
    assert error == "File size exceeds the maximum limit of 10MB"


def test_file_exactly_at_limit_is_accepted():
    file = UploadedFile(name="cv.pdf", mime_type="application/pdf", size_bytes=10 * MB)
    assert Validator(UploadConfig()).validate(file) is None


def test_type_rule_wins_over_size_rule():
    file = UploadedFile(name="big.zip", mime_type="application/zip", size_bytes=50 * MB)
    assert Validator(UploadConfig()).validate(file) == "File type not supported"


def test_custom_config():
    config = UploadConfig(accepted_types=frozenset({"text/plain"}), max_size=MB // 2)
    validator = Validator(config)

    assert validator.validate(make_file("a.txt", 10)) is None
    assert validator.validate(make_file("a.pdf", 10)) == "File type not supported"
    assert validator.validate(make_file("a.txt", MB)) == "File size exceeds the maximum limit of 0.5MB"


def test_validate_all_returns_first_failure():
    validator = Validator(UploadConfig())
    files = [make_file("a.pdf"), make_file("b.xlsx"), make_file("c.png", 12 * MB)]

    assert validator.validate_all(files) == "File type not supported"
    assert validator.validate_all(files[:1]) is None


def test_validate_is_repeatable():
    validator = Validator(UploadConfig())
    file = make_file("scan.png", 12 * MB)
    assert validator.validate(file) == validator.validate(file)


def test_ensure_valid_raises_first_failure():
    validator = Validator(UploadConfig())

    with pytest.raises(ValidationError, match="File type not supported"):
        validator.ensure_valid([make_file("a.pdf"), make_file("b.xlsx")])

    validator.ensure_valid([make_file("a.pdf")])
