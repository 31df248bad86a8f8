"""Tests for the management CLI."""

import json
from unittest.mock import patch

import pytest

from cli import main

pytestmark = pytest.mark.unit


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "Certificate API CLI" in capsys.readouterr().out


def test_catalog_prints_all_sections(capsys):
    assert main(["catalog"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert list(payload) == ["templates", "badges", "signatories"]
    assert payload["templates"][0]["requiredFields"][0] == "badgeId"


def test_catalog_single_section(capsys):
    assert main(["catalog", "badges"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert list(payload) == ["badges"]
    assert [b["id"] for b in payload["badges"]] == [
        "badge-001",
        "badge-002",
        "badge-003",
    ]


def test_catalog_rejects_unknown_section():
    with pytest.raises(SystemExit):
        main(["catalog", "certificates"])


def test_serve_runs_uvicorn():
    with patch("uvicorn.run") as mock_run:
        assert main(["serve", "--port", "8080"]) == 0

    mock_run.assert_called_once_with(
        "main:app", host="127.0.0.1", port=8080, reload=False
    )
