from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.adapter.services.argon2_password_hasher import Argon2PasswordHasher
from src.adapter.services.jwt_token_issuer import JwtTokenIssuer

ACCESS_SECRET = "unit-access-secret"
REFRESH_SECRET = "unit-refresh-secret"


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with the user repository"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.swap_refresh_token = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def password_hasher():
    # Minimal cost parameters keep the suite fast
    return Argon2PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def token_issuer():
    return JwtTokenIssuer(
        access_secret=ACCESS_SECRET,
        refresh_secret=REFRESH_SECRET,
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
    )
