"""
Tests du traitement des fichiers.
"""

import logging

import pytest

from sql_aligner.formatter import FormatOptions
from sql_aligner.runner import (
    RunConfig, FileFormatError, SQLAlignError, find_sql_files, format_file, format_files
)


UNFORMATTED = "INSERT INTO t (a) VALUES (1),(22);\n"
FORMATTED = "INSERT INTO t (a)\nVALUES\n    ( 1),\n    (22);\n"


class TestFindSqlFiles:
    """Tests de la découverte des fichiers."""

    def test_recursive_and_sorted(self, tmp_path):
        (tmp_path / "b.sql").write_text("")
        (tmp_path / "a.sql").write_text("")
        (tmp_path / "notes.txt").write_text("")
        nested = tmp_path / "migrations"
        nested.mkdir()
        (nested / "001.sql").write_text("")

        found = find_sql_files(tmp_path)
        assert found == [tmp_path / "a.sql", tmp_path / "b.sql", nested / "001.sql"]

    def test_skipped_directories(self, tmp_path):
        for name in ("target", ".git", ".cache"):
            directory = tmp_path / name
            directory.mkdir()
            (directory / "x.sql").write_text("")
        (tmp_path / "kept.sql").write_text("")

        assert find_sql_files(tmp_path) == [tmp_path / "kept.sql"]

    def test_symlinked_directory_cycle_not_followed(self, tmp_path):
        nested = tmp_path / "db"
        nested.mkdir()
        (nested / "seed.sql").write_text("")
        (nested / "loop").symlink_to(tmp_path, target_is_directory=True)

        assert find_sql_files(tmp_path) == [nested / "seed.sql"]


class TestFormatFile:
    """Tests du formatage d'un fichier."""

    def test_rewrites_changed_file(self, tmp_path):
        path = tmp_path / "seed.sql"
        path.write_text(UNFORMATTED, encoding="utf-8")

        result = format_file(path)

        assert result.changed
        assert result.written
        assert result.formatted_clauses == 1
        assert path.read_text(encoding="utf-8") == FORMATTED

    def test_unchanged_file_not_written(self, tmp_path):
        path = tmp_path / "seed.sql"
        path.write_text(FORMATTED, encoding="utf-8")

        result = format_file(path)

        assert not result.changed
        assert not result.written

    def test_dry_run(self, tmp_path):
        path = tmp_path / "seed.sql"
        path.write_text(UNFORMATTED, encoding="utf-8")

        result = format_file(path, RunConfig(dry_run=True, backup=True))

        assert result.changed
        assert not result.written
        assert result.backup_path is None
        assert path.read_text(encoding="utf-8") == UNFORMATTED
        assert not (tmp_path / "seed.sql.bak").exists()

    def test_backup(self, tmp_path):
        path = tmp_path / "seed.sql"
        path.write_text(UNFORMATTED, encoding="utf-8")

        result = format_file(path, RunConfig(backup=True))

        assert result.backup_path == tmp_path / "seed.sql.bak"
        assert result.backup_path.read_text(encoding="utf-8") == UNFORMATTED
        assert path.read_text(encoding="utf-8") == FORMATTED

    def test_options_passed_through(self, tmp_path):
        path = tmp_path / "seed.sql"
        path.write_text(UNFORMATTED, encoding="utf-8")

        format_file(path, RunConfig(options=FormatOptions(indent_size=2)))

        assert path.read_text(encoding="utf-8") == "INSERT INTO t (a)\nVALUES\n  ( 1),\n  (22);\n"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileFormatError) as excinfo:
            format_file(tmp_path / "missing.sql")
        assert excinfo.value.path == tmp_path / "missing.sql"
        assert isinstance(excinfo.value, SQLAlignError)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "latin1.sql"
        path.write_bytes(b"INSERT INTO t (a) VALUES ('\xe9');")
        with pytest.raises(FileFormatError):
            format_file(path)

    def test_skipped_clause_logged(self, tmp_path, caplog):
        path = tmp_path / "ragged.sql"
        path.write_text("INSERT INTO t (a) VALUES (1),(2,3);", encoding="utf-8")

        with caplog.at_level(logging.DEBUG, logger="sql_aligner.runner"):
            result = format_file(path)

        assert not result.changed
        assert "rows have different column counts" in caplog.text


class TestFormatFiles:
    """Tests du formatage de plusieurs fichiers."""

    def test_error_does_not_stop_others(self, tmp_path):
        good = tmp_path / "good.sql"
        good.write_text(UNFORMATTED, encoding="utf-8")

        results, errors = format_files([tmp_path / "missing.sql", good])

        assert len(errors) == 1
        assert errors[0].path == tmp_path / "missing.sql"
        assert [r.path for r in results] == [good]
        assert good.read_text(encoding="utf-8") == FORMATTED
