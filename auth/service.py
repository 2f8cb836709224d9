"""
Registration and login use cases.
"""

from __future__ import annotations

import logging
import uuid

from auth.errors import AuthError, ConflictError
from auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from auth.repository import EMAIL_TAKEN, UserRepository
from auth.schemas import (
    LoginRequest,
    LoginResponse,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
)
from auth.tokens import TokenIssuer
from database.models import User

logger = logging.getLogger(__name__)

REGISTERED = "Usuário cadastrado com sucesso"
# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Email ou senha inválidos"


class AuthService:
    def __init__(
        self,
        repository: UserRepository,
        token_issuer: TokenIssuer,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        self.repository = repository
        self.token_issuer = token_issuer
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, data: RegisterRequest) -> RegisterResponse:
        """Create a user unless the email is already taken."""
        if await self.repository.find_by_email(data.email) is not None:
            logger.info("Registration refused, email in use: %s", data.email)
            raise ConflictError(EMAIL_TAKEN)

        user = User(
            id=uuid.uuid4(),
            name=data.name,
            email=data.email,
            password=hash_password(data.password, self.bcrypt_rounds),
        )
        await self.repository.save(user)
        logger.info("Registered user %s (%s)", user.email, user.id)

        return RegisterResponse(message=REGISTERED)

    async def login(self, data: LoginRequest) -> LoginResponse:
        """Check the credentials and issue a token bound to the user id."""
        user = await self.repository.find_by_email(data.email)
        if user is None or not verify_password(data.password, user.password):
            logger.info("Login rejected for %s", data.email)
            raise AuthError(INVALID_CREDENTIALS)

        token = self.token_issuer.issue({"id": str(user.id)})
        logger.info("Login: %s (%s)", user.email, user.id)

        return LoginResponse(
            token=token,
            user=PublicUser(id=user.id, name=user.name, email=user.email),
        )
