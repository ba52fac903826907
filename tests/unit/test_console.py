"""Unit tests for the terminal adapters."""

from __future__ import annotations

import io

import pytest

from harbourmaster.console import ConsoleNotifier, ConsolePrompt, ConsoleRouter


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("answer", "expected"),
    [("y", True), (" YES ", True), ("", False), ("n", False), ("maybe", False)],
)
async def test_prompt_accepts_only_yes(
    answer: str,
    expected: bool,  # noqa: FBT001
) -> None:
    """Only y/yes accepts; everything else declines."""
    questions: list[str] = []

    def _reader(question: str) -> str:
        questions.append(question)
        return answer

    prompt = ConsolePrompt(reader=_reader)

    assert await prompt.open("Project Delete Confirm", None) is expected
    assert questions == ["Project Delete Confirm? [y/N] "]


@pytest.mark.asyncio
async def test_prompt_treats_end_of_input_as_decline() -> None:
    """Closed standard input declines."""

    def _reader(_question: str) -> str:
        raise EOFError

    assert await ConsolePrompt(reader=_reader).open("label", None) is False


@pytest.mark.asyncio
async def test_prompt_assume_yes_skips_reader() -> None:
    """assume_yes accepts without reading."""

    def _reader(_question: str) -> str:
        pytest.fail("reader should not be called")

    assert await ConsolePrompt(assume_yes=True, reader=_reader).open("x", None)


def test_router_prints_transition() -> None:
    """Navigation requests render as one line each."""
    stream = io.StringIO()
    router = ConsoleRouter(stream)

    router.go_to("registry.list.public", {"open": "library/nginx"}, reload=True)
    router.go_to("registry.list.catalogs", None, reload=False)

    assert stream.getvalue().splitlines() == [
        "-> registry.list.public (open=library/nginx) [reload]",
        "-> registry.list.catalogs",
    ]


def test_notifier_prints_success() -> None:
    """Success notifications are prefixed with OK."""
    stream = io.StringIO()
    ConsoleNotifier(stream).success("Project Update Success")

    assert stream.getvalue() == "OK Project Update Success\n"
