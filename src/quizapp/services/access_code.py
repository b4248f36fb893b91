"""Access code generation for newly published quizzes."""

import secrets
import string

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from quizapp.config import settings
from quizapp.exceptions import AccessCodeGenerationError
from quizapp.repositories.quiz import QuizRepository

ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits


class AccessCodeGenerator:
    """Draw random codes until one is not used by any quiz.

    The code is not reserved: the unique constraint on the quiz table is
    the final guard against two authors publishing at the same moment.
    """

    def __init__(
        self,
        length: int | None = None,
        max_attempts: int | None = None,
        alphabet: str = ACCESS_CODE_ALPHABET,
    ) -> None:
        self.length = length or settings.access_code_length
        self.max_attempts = (
            max_attempts if max_attempts is not None else settings.access_code_max_attempts
        )
        self.alphabet = alphabet

    def draw(self) -> str:
        """Draw a single candidate code."""
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))

    async def generate(self, session: AsyncSession) -> str:
        """Return a code that no existing quiz uses.

        Raises:
            AccessCodeGenerationError: If max_attempts is set and exhausted
        """
        attempts = 0
        while True:
            attempts += 1
            candidate = self.draw()
            if not await QuizRepository.access_code_exists(session, candidate):
                return candidate

            logger.debug("Access code collision", attempt=attempts)
            if self.max_attempts is not None and attempts >= self.max_attempts:
                raise AccessCodeGenerationError(attempts=attempts)
