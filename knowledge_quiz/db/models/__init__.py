from knowledge_quiz.db.models.questions import Question

__all__ = ["Question"]
