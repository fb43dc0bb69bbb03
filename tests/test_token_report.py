"""Tests for the token counter, the report table and the report CLI."""

import pytest
import requests
import tiktoken

import config
import count_tokens
from reporting import token_counter
from reporting.report_table import format_report, progress_bar, reduction_percent
from reporting.token_counter import FileStats, TokenCounter, TokenStats
from utils.retry import is_retryable_error, retry_with_backoff


class FakeEncoding:
    """Whitespace tokenizer standing in for a tiktoken Encoding."""

    name = "fake_base"

    def encode(self, text, disallowed_special="all"):
        return text.split()


@pytest.fixture
def fake_tiktoken(monkeypatch):
    calls = []

    def encoding_for_model(model_name):
        calls.append(model_name)
        if model_name == "unknown-model":
            raise KeyError(model_name)
        return FakeEncoding()

    def get_encoding(name):
        calls.append(name)
        return FakeEncoding()

    monkeypatch.setattr(tiktoken, "encoding_for_model", encoding_for_model)
    monkeypatch.setattr(tiktoken, "get_encoding", get_encoding)
    return calls


class TestTokenCounter:
    def test_measure(self, fake_tiktoken):
        with TokenCounter("gpt-4o-mini") as counter:
            stats = counter.measure("users(id name\n|1 Ann")
        assert stats == TokenStats(token_count=4, byte_size=20)

    def test_byte_size_is_utf8(self, fake_tiktoken):
        with TokenCounter() as counter:
            assert counter.measure("é").byte_size == 2

    def test_unknown_model_uses_fallback_encoding(self, fake_tiktoken):
        with TokenCounter("unknown-model", fallback_encoding="o200k_base"):
            pass
        assert fake_tiktoken == ["unknown-model", "o200k_base"]

    def test_encoding_released_on_exit(self, fake_tiktoken):
        with TokenCounter() as counter:
            counter.measure("a b")
        with pytest.raises(RuntimeError):
            counter.measure("a b")

    def test_encoding_released_when_body_raises(self, fake_tiktoken):
        counter = TokenCounter()
        with pytest.raises(ValueError):
            with counter:
                raise ValueError("boom")
        with pytest.raises(RuntimeError):
            counter.count_tokens("x")

    def test_measure_file(self, fake_tiktoken, tmp_path):
        path = tmp_path / "data.tiny"
        path.write_bytes(b"a b c\n" * 512)

        with TokenCounter() as counter:
            stats = counter.measure_file(path, display_name="data.tiny")

        assert stats == FileStats(file="data.tiny", token_count=1536, size_kb=3.0)

    def test_measure_missing_file(self, fake_tiktoken, tmp_path):
        with TokenCounter() as counter:
            with pytest.raises(OSError):
                counter.measure_file(tmp_path / "missing.json")


class TestRetry:
    def test_connection_errors_are_retried(self):
        attempts = []

        @retry_with_backoff(max_retries=2, initial_delay=0, max_delay=0)
        def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise requests.exceptions.ConnectionError("down")
            return "ok"

        assert flaky() == "ok"
        assert len(attempts) == 3

    def test_gives_up_after_max_retries(self):
        attempts = []

        @retry_with_backoff(max_retries=1, initial_delay=0, max_delay=0)
        def always_down():
            attempts.append(1)
            raise requests.exceptions.Timeout("slow")

        with pytest.raises(requests.exceptions.Timeout):
            always_down()
        assert len(attempts) == 2

    def test_other_errors_are_not_retried(self):
        attempts = []

        @retry_with_backoff(max_retries=3, initial_delay=0, max_delay=0)
        def broken():
            attempts.append(1)
            raise KeyError("model")

        with pytest.raises(KeyError):
            broken()
        assert len(attempts) == 1

    def test_is_retryable_error(self):
        assert is_retryable_error(requests.exceptions.ConnectionError())
        assert not is_retryable_error(requests.exceptions.HTTPError())
        assert not is_retryable_error(ValueError())


class TestReportTable:
    def test_progress_bar(self):
        assert progress_bar(50) == "█" * 10 + "░" * 10
        assert progress_bar(0) == "░" * 20
        assert progress_bar(100, width=4) == "████"

    def test_colored_progress_bar(self):
        bar = progress_bar(25, width=4, colored=True)
        assert bar == "\x1b[32m█\x1b[90m░░░\x1b[0m"

    def test_reduction_percent(self):
        assert reduction_percent(25, 100) == 75.0
        assert reduction_percent(0, 0) == 0.0

    def test_format_report(self):
        results = [
            FileStats(file="data.json", token_count=1000, size_kb=4.0),
            FileStats(file="data.tiny", token_count=400, size_kb=1.0),
        ]

        lines = format_report(results, "gpt-4o-mini").split("\n")

        assert lines[0] == "Model tokenizer: gpt-4o-mini"
        assert lines[1] == ""
        assert lines[5] == (
            "│ data.json           │     4.00 │ " + "░" * 20 + "   0.0% "
            "│     1000 │ " + "░" * 20 + "   0.0% │"
        )
        assert lines[6] == (
            "│ data.tiny           │     1.00 │ " + "█" * 15 + "░" * 5 + "  75.0% "
            "│      400 │ " + "█" * 12 + "░" * 8 + "  60.0% │"
        )
        assert lines[-1].startswith("└")

    def test_rows_line_up_with_borders(self):
        results = [FileStats(file="data.json", token_count=10, size_kb=1.5)]
        lines = format_report(results, "m").split("\n")[2:]
        assert len({len(line) for line in lines}) == 1

    def test_empty_results(self):
        lines = format_report([], "m").split("\n")
        assert len(lines) == 6


class TestCountTokensScript:
    def test_missing_files_are_left_out(self, fake_tiktoken, tmp_path, monkeypatch, capsys, caplog):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "data.json").write_text('[{"id": 1}]', encoding="utf-8")
        (tmp_path / "data.tiny").write_text("records(id\n|1\n", encoding="utf-8")

        assert count_tokens.main() == 0

        out = capsys.readouterr().out
        assert f"Model tokenizer: {config.TOKENIZER_MODEL}" in out
        assert "data.json" in out
        assert "data.tiny" in out
        assert "data.toon" not in out
        assert "Error reading data.toon" in caplog.text

    def test_file_that_is_not_utf8_is_still_measured(self, fake_tiktoken, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "data.toon").write_bytes(b"caf\xe9\n")

        assert count_tokens.main() == 0

        out = capsys.readouterr().out
        assert "data.toon" in out
        assert "data.json" not in out

    def test_collect_stats_keeps_file_order(self, fake_tiktoken, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        for name in ("b.txt", "a.txt"):
            (tmp_path / name).write_text("x", encoding="utf-8")

        with TokenCounter() as counter:
            results = count_tokens.collect_stats(counter, ["b.txt", "missing", "a.txt"])

        assert [r.file for r in results] == ["b.txt", "a.txt"]


def test_load_encoding_uses_tiktoken(fake_tiktoken):
    encoding = token_counter.load_encoding("gpt-4o-mini")
    assert encoding.name == "fake_base"
    assert fake_tiktoken == ["gpt-4o-mini"]


def test_measure_file_replaces_undecodable_bytes(fake_tiktoken, tmp_path):
    path = tmp_path / "data.toon"
    path.write_bytes(b"caf\xe9 au lait\n")

    with TokenCounter() as counter:
        stats = counter.measure_file(path, display_name="data.toon")

    assert stats.token_count == 3
    assert stats.size_kb == 13 / 1024
