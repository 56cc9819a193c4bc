"""
Tests de la ligne de commande.
"""

import io

from sql_aligner.__main__ import build_parser, main


UNFORMATTED = "INSERT INTO t (a) VALUES (1),(22);\n"
FORMATTED = "INSERT INTO t (a)\nVALUES\n    ( 1),\n    (22);\n"


class TestArguments:
    """Tests de l'analyse des arguments."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.files == []
        assert not args.all
        assert not args.dry_run
        assert not args.backup
        assert not args.verbose
        assert args.indent == 4

    def test_short_flags(self):
        args = build_parser().parse_args(["-a", "-d", "-b", "-v"])
        assert args.all and args.dry_run and args.backup and args.verbose


class TestMain:
    """Tests de bout en bout de main()."""

    def test_stdin_to_stdout(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(UNFORMATTED))
        assert main([]) == 0
        assert capsys.readouterr().out == FORMATTED

    def test_files(self, tmp_path, capsys):
        path = tmp_path / "seed.sql"
        path.write_text(UNFORMATTED, encoding="utf-8")

        assert main([str(path)]) == 0

        assert f"Formatted: {path}" in capsys.readouterr().out
        assert path.read_text(encoding="utf-8") == FORMATTED

    def test_dry_run(self, tmp_path, capsys):
        path = tmp_path / "seed.sql"
        path.write_text(UNFORMATTED, encoding="utf-8")

        assert main(["--dry-run", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Dry run mode enabled" in out
        assert f"Would format: {path}" in out
        assert path.read_text(encoding="utf-8") == UNFORMATTED

    def test_all(self, tmp_path, monkeypatch, capsys):
        nested = tmp_path / "db"
        nested.mkdir()
        path = nested / "seed.sql"
        path.write_text(UNFORMATTED, encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert main(["--all"]) == 0

        assert path.read_text(encoding="utf-8") == FORMATTED
        assert "Formatted:" in capsys.readouterr().out

    def test_missing_file_reported(self, tmp_path, capsys):
        good = tmp_path / "good.sql"
        good.write_text(UNFORMATTED, encoding="utf-8")
        missing = tmp_path / "missing.sql"

        assert main([str(missing), str(good)]) == 1

        captured = capsys.readouterr()
        assert f"Error formatting {missing}" in captured.err
        assert f"Formatted: {good}" in captured.out

    def test_no_create_table(self, monkeypatch, capsys):
        sql = "CREATE TABLE t (a INT, bb TEXT);"
        monkeypatch.setattr("sys.stdin", io.StringIO(sql))
        assert main(["--no-create-table"]) == 0
        assert capsys.readouterr().out == sql

    def test_indent(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(UNFORMATTED))
        assert main(["--indent", "2"]) == 0
        assert capsys.readouterr().out == "INSERT INTO t (a)\nVALUES\n  ( 1),\n  (22);\n"
