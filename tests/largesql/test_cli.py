import logging

import pytest

from largesql.cli import EXIT_FORMAT_VIOLATION, EXIT_SOURCE_ERROR, main

from .conftest import body_lines

T1 = "INSERT INTO [dbo].[T] (a) VALUES (1)"
U2 = "INSERT INTO [dbo].[U] (a) VALUES (2)"


class TestMain:
    def test_writes_chunk_files(self, write_script, tmp_path, caplog):
        out = tmp_path / "out"
        with caplog.at_level(logging.INFO, logger="largesql"):
            assert main([str(write_script([T1, U2])), "-o", str(out)]) == 0
        files = sorted(out.iterdir())
        assert [f.name for f in files] == ["chunk_00001.sql", "chunk_00002.sql"]
        assert body_lines(files[0].read_bytes().decode("utf-8")) == [T1]
        assert body_lines(files[1].read_bytes().decode("utf-8")) == [U2]
        assert "into 2 chunks" in caplog.text

    def test_stdout(self, write_script, capsys):
        assert main([str(write_script([T1, U2])), "--line-separator", "lf"]) == 0
        out = capsys.readouterr().out
        assert out.count("GO\n") == 2
        assert T1 in out
        assert U2 in out

    def test_max_lines(self, write_script, tmp_path):
        out = tmp_path / "out"
        assert main([str(write_script([T1, T1, T1])), "-o", str(out), "--max-lines", "1"]) == 0
        assert len(list(out.iterdir())) == 3

    def test_missing_input(self, tmp_path, caplog):
        assert main([str(tmp_path / "missing.sql")]) == EXIT_SOURCE_ERROR
        assert "Cannot open" in caplog.text

    def test_format_violation(self, write_script, caplog):
        assert main([str(write_script(["INSERT INTO t (a) VALUES (1)"]))]) == EXIT_FORMAT_VIOLATION
        assert "Cannot extract table name" in caplog.text

    def test_invalid_max_lines(self, write_script):
        with pytest.raises(SystemExit) as exc_info:
            main([str(write_script([T1])), "--max-lines", "0"])
        assert exc_info.value.code == 2

    def test_environment_defaults(self, write_script, tmp_path, monkeypatch):
        monkeypatch.setenv("LARGESQL_MAX_LINES", "1")
        out = tmp_path / "out"
        assert main([str(write_script([T1, T1])), "-o", str(out)]) == 0
        assert len(list(out.iterdir())) == 2
