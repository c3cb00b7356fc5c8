from knowledge_quiz.db.repo.questions_repo import QuestionsRepo

__all__ = ["QuestionsRepo"]
