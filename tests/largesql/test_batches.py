import pytest

from largesql import split_batches


class TestSplitBatches:
    def test_single_chunk(self):
        chunk = "BEGIN TRANSACTION\r\nSELECT 1\r\nCOMMIT TRANSACTION\r\nGO"
        assert split_batches(chunk) == ["BEGIN TRANSACTION\r\nSELECT 1\r\nCOMMIT TRANSACTION"]

    def test_multiple_batches(self):
        script = "CREATE TABLE t (a int)\nGO\nINSERT INTO t VALUES (1)\ngo\n"
        assert split_batches(script) == ["CREATE TABLE t (a int)", "INSERT INTO t VALUES (1)"]

    def test_separator_with_surrounding_whitespace(self):
        assert split_batches("SELECT 1\n  GO \t\nSELECT 2") == ["SELECT 1", "SELECT 2"]

    def test_empty_batches_dropped(self):
        assert split_batches("GO\nGO\n\nGO\nSELECT 1\nGO\n\n") == ["SELECT 1"]

    @pytest.mark.parametrize("text", ["", "   ", "GO", "\r\n"])
    def test_nothing_to_execute(self, text):
        assert split_batches(text) == []

    def test_go_inside_line_is_not_a_separator(self):
        script = "SELECT 'GO'\nGOTO done\nPRINT 'go'"
        assert split_batches(script) == [script]

    def test_custom_separator(self):
        assert split_batches("SELECT 1\n;;\nSELECT 2", separator=";;") == ["SELECT 1", "SELECT 2"]

    @pytest.mark.parametrize("separator", ["", " GO"])
    def test_invalid_separator(self, separator):
        with pytest.raises(ValueError):
            split_batches("SELECT 1", separator=separator)

    def test_chunk_reader_output(self, write_script, chunks_of):
        inserts = [f"INSERT INTO [dbo].[T] (a) VALUES ({i})" for i in range(3)]
        chunks = chunks_of(write_script(["GO", *inserts]))
        batches = [batch for chunk in chunks for batch in split_batches(chunk)]
        assert batches == ["BEGIN TRANSACTION", "\r\n".join([*inserts, "COMMIT TRANSACTION"])]
