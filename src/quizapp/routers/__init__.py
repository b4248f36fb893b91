"""API routers."""

from quizapp.routers.quizzes import router as quizzes_router

__all__ = ["quizzes_router"]
