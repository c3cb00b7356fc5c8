from __future__ import annotations

from knowledge_quiz.client.edit_form import EditForm
from knowledge_quiz.client.quiz_state import (
    PHASE_COMPLETED,
    PHASE_EDITING,
    PHASE_ERROR,
    PHASE_LOADING,
    PHASE_REVEALED,
    QuizStateMachine,
)
from knowledge_quiz.client.texts import TEXTS_EN


def _option_marker(machine: QuizStateMachine, index: int) -> str:
    question = machine.current_question
    selected = machine.selected_answer == index
    if machine.phase == PHASE_REVEALED and question is not None:
        if index == question.correct_answer:
            return "[+]"
        if selected:
            return "[x]"
        return "[ ]"
    return "[*]" if selected else "[ ]"


def build_question_text(machine: QuizStateMachine) -> str:
    question = machine.current_question
    if question is None:
        return ""
    lines: list[str] = []
    if machine.banner_error:
        lines.extend([f"! {machine.banner_error}", ""])
    lines.extend(
        [
            TEXTS_EN["msg.quiz.title"],
            TEXTS_EN["msg.quiz.progress"].format(
                current=machine.current_index + 1,
                total=machine.total_questions,
            )
            + "  |  "
            + TEXTS_EN["msg.quiz.score"].format(score=machine.score),
            "",
            question.question,
            "",
        ]
    )
    for index, option in enumerate(question.options):
        lines.append(f"{_option_marker(machine, index)} {index + 1}. {option}")
    lines.append("")

    if machine.phase == PHASE_REVEALED:
        feedback_key = "msg.quiz.correct" if machine.answered_correctly else "msg.quiz.incorrect"
        next_key = "msg.quiz.results_hint" if machine.is_last_question else "msg.quiz.next_hint"
        lines.extend([TEXTS_EN[feedback_key], question.explanation, "", TEXTS_EN[next_key]])
    else:
        lines.append(TEXTS_EN["msg.quiz.answer_hint"])
    lines.append(TEXTS_EN["msg.quiz.footer_hint"])
    return "\n".join(lines)


def build_completion_text(machine: QuizStateMachine) -> str:
    return "\n".join(
        [
            TEXTS_EN["msg.completed.title"],
            TEXTS_EN["msg.completed.score"].format(
                score=machine.score,
                total=machine.total_questions,
            ),
            TEXTS_EN["msg.completed.percentage"].format(percentage=machine.percentage),
            "",
            TEXTS_EN["msg.completed.hint"],
        ]
    )


def build_edit_form_text(form: EditForm) -> str:
    lines = [form.title]
    if form.error:
        lines.append(f"! {form.error}")
    lines.extend(["", TEXTS_EN["msg.form.question"].format(question=form.question)])
    for index, option in enumerate(form.options):
        lines.append(
            TEXTS_EN["msg.form.option"].format(
                marker="(o)" if form.correct_answer == index else "( )",
                number=index + 1,
                text=option,
            )
        )
    lines.extend(
        [
            TEXTS_EN["msg.form.explanation"].format(explanation=form.explanation),
            "",
            TEXTS_EN["msg.form.hint"],
        ]
    )
    actions = TEXTS_EN["msg.form.actions"]
    if form.can_delete:
        actions = f"{actions}  {TEXTS_EN['msg.form.delete_action']}"
    lines.append(actions)
    if form.in_flight:
        lines.append(TEXTS_EN["msg.form.saving"])
    return "\n".join(lines)


def render_screen(machine: QuizStateMachine) -> str:
    if machine.phase == PHASE_LOADING:
        return TEXTS_EN["msg.loading"]
    if machine.phase == PHASE_ERROR:
        return "\n".join(
            [
                TEXTS_EN["msg.error.title"],
                machine.load_error or "",
                "",
                TEXTS_EN["msg.error.retry_hint"],
            ]
        )
    if machine.phase == PHASE_EDITING and machine.edit_form is not None:
        return build_edit_form_text(machine.edit_form)
    if machine.phase == PHASE_COMPLETED:
        return build_completion_text(machine)
    return build_question_text(machine)
