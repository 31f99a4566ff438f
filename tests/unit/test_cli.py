"""Unit tests for the command-line entry point."""

from __future__ import annotations

import json

import orjson
import pytest

from starred_search.cli import load_repositories, main


@pytest.fixture
def repositories_file(tmp_path, frontend_repositories):
    path = tmp_path / "repositories.json"
    payload = [repository.model_dump(mode="json", by_alias=True) for repository in frontend_repositories]
    path.write_bytes(orjson.dumps(payload))
    return path


def test_load_repositories_reads_camel_case_records(repositories_file) -> None:
    repositories = load_repositories(repositories_file)

    assert [repository.full_name for repository in repositories] == [
        "facebook/react",
        "vercel/next.js",
        "angular/angular",
    ]
    assert repositories[0].stargazer_count == 100


def test_main_prints_ranked_text(repositories_file, capsys) -> None:
    exit_code = main([str(repositories_file), "-k", "react", "--log-level", "warning"])

    lines = capsys.readouterr().out.strip().splitlines()
    assert exit_code == 0
    assert len(lines) == 2
    assert lines[0].split()[1] == "facebook/react"
    assert "matched=[react]" in lines[0]


def test_main_prints_json(repositories_file, capsys) -> None:
    exit_code = main([str(repositories_file), "-k", "react", "-k", "framework", "--limit", "1", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert len(payload) == 1
    assert payload[0]["id"] in {"facebook/react", "vercel/next.js"}
    assert payload[0]["repository"]["stargazerCount"] == 100
    assert payload[0]["matchedTokens"]


def test_main_prints_nothing_without_matches(repositories_file, capsys) -> None:
    assert main([str(repositories_file), "-k", "kubernetes"]) == 0
    assert capsys.readouterr().out == ""


def test_main_reports_missing_file(tmp_path, capsys) -> None:
    exit_code = main([str(tmp_path / "missing.json"), "-k", "react"])

    assert exit_code == 1
    assert "cannot load" in capsys.readouterr().err


@pytest.mark.parametrize("content", [b"not json", b'[{"owner": "only-owner"}]'])
def test_main_reports_invalid_payload(tmp_path, capsys, content) -> None:
    path = tmp_path / "broken.json"
    path.write_bytes(content)

    assert main([str(path), "-k", "react"]) == 1
    assert "cannot load" in capsys.readouterr().err


def test_keyword_is_required(repositories_file) -> None:
    with pytest.raises(SystemExit):
        main([str(repositories_file)])


def test_main_writes_metrics_file(repositories_file, tmp_path, capsys) -> None:
    metrics_path = tmp_path / "metrics.prom"

    exit_code = main([str(repositories_file), "-k", "react", "--metrics", str(metrics_path)])

    exposition = metrics_path.read_text(encoding="utf-8")
    assert exit_code == 0
    assert "starred_search_index_document_count 3.0" in exposition
    assert "starred_search_search_latency_seconds_count" in exposition
    assert "# HELP" not in capsys.readouterr().out


def test_main_reports_unwritable_metrics_path(repositories_file, tmp_path, capsys) -> None:
    exit_code = main([str(repositories_file), "-k", "react", "--metrics", str(tmp_path / "missing" / "metrics.prom")])

    assert exit_code == 1
    assert "cannot write metrics" in capsys.readouterr().err
