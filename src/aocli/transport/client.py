"""HTTP client for adventofcode.com."""

from __future__ import annotations

import html
import logging
import re

import requests

from aocli import __version__
from aocli.errors import AocError
from aocli.transport.models import SubmissionResult, Verdict

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://adventofcode.com"
USER_AGENT = f"aocli/{__version__} (python-requests)"

_ARTICLE_RE = re.compile(r"<article[^>]*>(.*?)</article>", re.DOTALL | re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")

# Checked in order against the article text
_VERDICT_MARKERS: tuple[tuple[str, Verdict], ...] = (
    ("That's the right answer", Verdict.CORRECT),
    ("That's not the right answer", Verdict.INCORRECT),
    ("You gave an answer too recently", Verdict.TOO_RECENT),
    ("You don't seem to be solving the right level", Verdict.ALREADY_SOLVED),
    ("Did you already complete it", Verdict.ALREADY_SOLVED),
)


class TransportError(AocError):
    """Raised when talking to adventofcode.com fails."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        code = status_code if status_code is not None else "no response"
        super().__init__(f"Request to {url} failed ({code}): {message}")


class MissingSessionError(AocError):
    """Raised when no session cookie is configured."""


def extract_message(page: str) -> str:
    """Plain text of the first <article> in an AoC response page."""
    match = _ARTICLE_RE.search(page)
    body = match.group(1) if match else page
    text = html.unescape(_TAG_RE.sub("", body))
    return _SPACE_RE.sub(" ", text).strip()


def classify(message: str) -> Verdict:
    """Map a response message to a Verdict."""
    for marker, verdict in _VERDICT_MARKERS:
        if marker in message:
            return verdict
    return Verdict.UNKNOWN


class AocClient:
    """Fetches puzzle input and submits answers using a session cookie."""

    def __init__(
        self,
        session: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        if not session:
            raise MissingSessionError(
                "No Advent of Code session cookie: set AOC_SESSION "
                "or 'session' in .aocli/config.yaml"
            )
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http = requests.Session()
        self._http.cookies.set("session", session)
        self._http.headers["User-Agent"] = USER_AGENT

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            resp = self._http.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(url, str(e)) from e
        if resp.status_code // 100 != 2:
            raise TransportError(url, resp.text.strip()[:200], resp.status_code)
        return resp

    def fetch_input(self, year: int, day: int) -> str:
        """Download the puzzle input for a day."""
        url = f"{self._base_url}/{year}/day/{day}/input"
        return self._request("GET", url).text

    def submit(self, year: int, day: int, part: int, answer: str) -> SubmissionResult:
        """Submit an answer and classify the server's reply.

        No retry is attempted; a too-recent verdict is returned as-is.
        """
        url = f"{self._base_url}/{year}/day/{day}/answer"
        resp = self._request("POST", url, data={"level": str(part), "answer": answer})
        message = extract_message(resp.text)
        verdict = classify(message)
        logger.debug("Submission verdict: %s", verdict.value)
        return SubmissionResult(verdict=verdict, message=message)
