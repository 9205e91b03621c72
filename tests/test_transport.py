"""Tests for the adventofcode.com client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from aocli.transport import (
    AocClient,
    MissingSessionError,
    TransportError,
    Verdict,
    classify,
    extract_message,
)

CORRECT_PAGE = """
<html><body><main>
<article><p>That's the right answer!  You are <em>one gold star</em> closer.
<a href="/2023/day/7#part2">[Continue to Part Two]</a></p></article>
</main></body></html>
"""


@pytest.fixture
def mock_http():
    """Mock the requests session used by AocClient."""
    with patch("aocli.transport.client.requests.Session") as session_cls:
        yield session_cls.return_value


class TestClassify:
    """Tests for response classification."""

    @pytest.mark.parametrize(
        ("message", "verdict"),
        [
            ("That's the right answer! You are one gold star closer.", Verdict.CORRECT),
            ("That's not the right answer; your answer is too low.", Verdict.INCORRECT),
            ("You gave an answer too recently; you have 38s left to wait.", Verdict.TOO_RECENT),
            (
                "You don't seem to be solving the right level. Did you already complete it?",
                Verdict.ALREADY_SOLVED,
            ),
            ("Something else entirely", Verdict.UNKNOWN),
        ],
    )
    def test_classify(self, message: str, verdict: Verdict) -> None:
        """Test known AoC messages map to verdicts."""
        assert classify(message) is verdict

    def test_extract_message_strips_markup(self) -> None:
        """Test the article text is extracted and whitespace collapsed."""
        message = extract_message(CORRECT_PAGE)
        assert message.startswith("That's the right answer! You are one gold star closer.")
        assert "<" not in message


class TestAocClient:
    """Tests for AocClient."""

    def test_requires_session(self) -> None:
        """Test a missing session cookie is rejected up front."""
        with pytest.raises(MissingSessionError) as exc_info:
            AocClient(None)
        assert "AOC_SESSION" in str(exc_info.value)

    def test_submit_posts_level_and_answer(self, mock_http) -> None:
        """Test submit sends part and answer and classifies the reply."""
        mock_http.request.return_value = MagicMock(status_code=200, text=CORRECT_PAGE)

        result = AocClient("cookie").submit(2023, 7, 2, "300")

        mock_http.request.assert_called_once_with(
            "POST",
            "https://adventofcode.com/2023/day/7/answer",
            timeout=30.0,
            data={"level": "2", "answer": "300"},
        )
        mock_http.cookies.set.assert_called_once_with("session", "cookie")
        assert result.verdict is Verdict.CORRECT
        assert result.accepted

    def test_fetch_input(self, mock_http) -> None:
        """Test fetch_input returns the body text."""
        mock_http.request.return_value = MagicMock(status_code=200, text="1\n2\n3\n")

        text = AocClient("cookie", base_url="http://aoc.test/").fetch_input(2022, 1)

        assert text == "1\n2\n3\n"
        mock_http.request.assert_called_once_with(
            "GET", "http://aoc.test/2022/day/1/input", timeout=30.0
        )

    def test_http_error_status(self, mock_http) -> None:
        """Test a non-2xx response raises TransportError with the status."""
        mock_http.request.return_value = MagicMock(
            status_code=400, text="Please don't repeatedly request this endpoint"
        )

        with pytest.raises(TransportError) as exc_info:
            AocClient("cookie").fetch_input(2023, 30)

        assert exc_info.value.status_code == 400
        assert "/2023/day/30/input" in str(exc_info.value)

    def test_network_failure(self, mock_http) -> None:
        """Test connection errors become TransportError."""
        mock_http.request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(TransportError) as exc_info:
            AocClient("cookie").submit(2023, 7, 1, "1")

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)
