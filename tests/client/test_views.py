from __future__ import annotations

from knowledge_quiz.client.quiz_state import QuizStateMachine
from knowledge_quiz.client.views import build_edit_form_text, render_screen
from tests.client.quiz_api_fixtures import FakeQuestionsApi


async def _machine() -> QuizStateMachine:
    machine = QuizStateMachine(FakeQuestionsApi())
    await machine.load()
    return machine


def test_loading_screen() -> None:
    assert render_screen(QuizStateMachine(FakeQuestionsApi())) == "Loading Quiz..."


async def test_error_screen_shows_message_and_retry() -> None:
    api = FakeQuestionsApi()
    api.fail_next.append("list")
    machine = QuizStateMachine(api)
    await machine.load()

    text = render_screen(machine)

    assert "Error Loading Quiz" in text
    assert "Failed to fetch questions" in text
    assert "Retry" in text


async def test_question_screen_shows_progress_and_selection() -> None:
    machine = await _machine()
    machine.select_answer(1)

    text = render_screen(machine)

    assert "Question 1 of 3" in text
    assert "Score: 0" in text
    assert "[*] 2. Berlin" in text
    assert "[ ] 3. Paris" in text


async def test_revealed_screen_marks_correct_and_wrong_choice() -> None:
    machine = await _machine()
    machine.select_answer(1)
    machine.submit()

    text = render_screen(machine)

    assert "[x] 2. Berlin" in text
    assert "[+] 3. Paris" in text
    assert "Incorrect" in text
    assert "Paris has been the capital" in text
    assert "Next Question" in text


async def test_completion_screen_shows_score_and_percentage() -> None:
    machine = await _machine()
    for selection in (2, 1, 0):
        machine.select_answer(selection)
        machine.submit()
        machine.advance()

    text = render_screen(machine)

    assert "Quiz Completed!" in text
    assert "Your score: 2 out of 3" in text
    assert "67%" in text


async def test_edit_form_text_hides_delete_for_new_question() -> None:
    machine = await _machine()
    form = machine.begin_add()

    text = build_edit_form_text(form)

    assert text.startswith("Add Question")
    assert "Delete Question" not in text
    assert "(o) Option 1: Option 1" in text


async def test_edit_form_text_shows_inline_error_and_delete() -> None:
    machine = await _machine()
    form = machine.begin_edit()
    form.error = "Failed to save question"

    text = render_screen(machine)

    assert text.startswith("Edit Question")
    assert "! Failed to save question" in text
    assert "Delete Question" in text
    assert "(o) Option 3: Paris" in text
