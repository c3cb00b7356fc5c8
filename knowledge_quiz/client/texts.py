TEXTS_EN: dict[str, str] = {
    "msg.loading": "Loading Quiz...",
    "msg.error.title": "Error Loading Quiz",
    "msg.error.retry_hint": "[t] Retry",
    "msg.quiz.title": "Knowledge Quiz",
    "msg.quiz.progress": "Question {current} of {total}",
    "msg.quiz.score": "Score: {score}",
    "msg.quiz.correct": "Correct!",
    "msg.quiz.incorrect": "Incorrect",
    "msg.quiz.answer_hint": "[1-4] choose option  [s] submit",
    "msg.quiz.next_hint": "[n] Next Question",
    "msg.quiz.results_hint": "[n] See Results",
    "msg.quiz.footer_hint": "[e] Edit  [a] Add New Question  [r] Refresh  [q] Quit",
    "msg.completed.title": "Quiz Completed!",
    "msg.completed.score": "Your score: {score} out of {total}",
    "msg.completed.percentage": "{percentage}%",
    "msg.completed.hint": "[p] Play Again  [e] Edit Questions  [q] Quit",
    "msg.form.question": "Question: {question}",
    "msg.form.option": "{marker} Option {number}: {text}",
    "msg.form.explanation": "Explanation: {explanation}",
    "msg.form.hint": "[t <text>] question  [o1-o4 <text>] option  [k1-k4] mark correct  [x <text>] explanation",
    "msg.form.actions": "[s] Save Question  [c] Cancel",
    "msg.form.delete_action": "[d] Delete Question",
    "msg.form.saving": "Saving...",
}
