"""Answer extraction and submission."""

from aocli.answers.pipeline import (
    AnswerError,
    AnswerSource,
    CommandFailedError,
    EmptyInputError,
    FromProcess,
    FromStdin,
    NoOutputProducedError,
    SubmissionTransport,
    obtain_answer,
    submit_answer,
    use_stdin,
)

__all__ = [
    "AnswerError",
    "AnswerSource",
    "CommandFailedError",
    "EmptyInputError",
    "FromProcess",
    "FromStdin",
    "NoOutputProducedError",
    "SubmissionTransport",
    "obtain_answer",
    "submit_answer",
    "use_stdin",
]
