"""QuizApp: quiz publishing and scoring API."""
