from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

from knowledge_quiz.client.api_client import QuestionsApiClient
from knowledge_quiz.client.quiz_state import (
    PHASE_ANSWERING,
    PHASE_EDITING,
    PHASE_ERROR,
    InvalidQuizTransitionError,
    QuizStateMachine,
)
from knowledge_quiz.client.views import render_screen
from knowledge_quiz.core.config import get_settings
from knowledge_quiz.core.logging import configure_logging

UNKNOWN_COMMAND = "Unknown command"


@dataclass(frozen=True, slots=True)
class CommandResult:
    keep_running: bool = True
    notice: str | None = None


def _split(line: str) -> tuple[str, str]:
    head, _, rest = line.strip().partition(" ")
    return head.lower(), rest.strip()


def _option_number(token: str, prefix: str) -> int | None:
    suffix = token[len(prefix):]
    if token.startswith(prefix) and suffix.isdigit() and 1 <= int(suffix) <= 4:
        return int(suffix) - 1
    return None


async def _dispatch_editing(machine: QuizStateMachine, command: str, argument: str) -> CommandResult:
    form = machine.edit_form
    if form is None:
        return CommandResult(notice=UNKNOWN_COMMAND)
    if command == "s":
        await machine.save_edit()
    elif command == "c":
        machine.cancel_edit()
    elif command == "d" and form.can_delete:
        await machine.delete_edit()
    elif command == "t":
        form.set_question(argument)
    elif command == "x":
        form.set_explanation(argument)
    elif (option_index := _option_number(command, "o")) is not None:
        form.set_option(option_index, argument)
    elif (option_index := _option_number(command, "k")) is not None:
        form.set_correct_answer(option_index)
    else:
        return CommandResult(notice=UNKNOWN_COMMAND)
    return CommandResult()


async def _dispatch_ready(machine: QuizStateMachine, command: str, argument: str) -> CommandResult:
    if command.isdigit() and machine.phase == PHASE_ANSWERING:
        machine.select_answer(int(command) - 1)
    elif command == "s":
        if not machine.submit():
            return CommandResult(notice="Select an option first")
    elif command == "n":
        machine.advance()
    elif command == "p":
        machine.restart()
    elif command == "r":
        await machine.refresh()
    elif command == "a":
        machine.begin_add()
    elif command == "e":
        if argument:
            position = int(argument)
            if position < 1:
                raise ValueError(f"question number out of range: {position}")
            machine.begin_edit(machine.questions[position - 1].id)
        else:
            machine.begin_edit()
    else:
        return CommandResult(notice=UNKNOWN_COMMAND)
    return CommandResult()


async def dispatch(machine: QuizStateMachine, line: str) -> CommandResult:
    command, argument = _split(line)
    if command == "q" and machine.phase != PHASE_EDITING:
        return CommandResult(keep_running=False)
    try:
        if machine.phase == PHASE_ERROR:
            if command == "t":
                await machine.retry()
                return CommandResult()
            return CommandResult(notice=UNKNOWN_COMMAND)
        if machine.phase == PHASE_EDITING:
            return await _dispatch_editing(machine, command, argument)
        if machine.is_ready:
            return await _dispatch_ready(machine, command, argument)
    except InvalidQuizTransitionError:
        return CommandResult(notice="Not available right now")
    except (ValueError, IndexError):
        return CommandResult(notice="Invalid choice")
    return CommandResult(notice=UNKNOWN_COMMAND)


async def _run(base_url: str) -> int:
    async with QuestionsApiClient(base_url) as api:
        machine = QuizStateMachine(api)
        print(render_screen(machine))  # noqa: T201
        await machine.load()
        while True:
            print()  # noqa: T201
            print(render_screen(machine))  # noqa: T201
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                return 0
            result = await dispatch(machine, line)
            if result.notice:
                print(result.notice)  # noqa: T201
            if not result.keep_running:
                return 0


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Play and edit the knowledge quiz in the terminal.")
    parser.add_argument("--base-url", default=settings.quiz_api_base_url, help="Question API base URL")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(args.log_level, json_output=False)
    try:
        return asyncio.run(_run(args.base_url))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
