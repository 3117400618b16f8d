"""Shared pytest fixtures for the monolog-parser test suite."""

import os

import pytest

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def fixture_path(name: str) -> str:
    return os.path.join(FIXTURES_DIR, name)


@pytest.fixture()
def test_log() -> str:
    """Three single-line Monolog records with object/array payloads."""
    return fixture_path("test.log")


@pytest.fixture()
def brackets_fail_log() -> str:
    """Records whose context/extra blocks are not valid JSON."""
    return fixture_path("brackets-fail.log")


@pytest.fixture()
def partial_fail_log() -> str:
    """A mix of valid and invalid context/extra blocks."""
    return fixture_path("partial-fail.log")


@pytest.fixture()
def multiline_log() -> str:
    """Records with stack traces and JSON spanning several lines."""
    return fixture_path("multiline.log")


@pytest.fixture()
def laravel_log() -> str:
    return fixture_path("laravel.log")


@pytest.fixture()
def sort_log() -> str:
    """Four records out of order, two sharing a datetime."""
    return fixture_path("datetime-sort.log")


@pytest.fixture()
def read():
    def _read(path: str) -> str:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    return _read
