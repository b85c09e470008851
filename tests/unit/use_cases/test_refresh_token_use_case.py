from datetime import timedelta
from uuid import uuid4

import pytest

from src.adapter.services.jwt_token_issuer import JwtTokenIssuer
from src.app.repositories.user_repository import StorageError
from src.app.use_cases.auth.refresh_token_use_case import RefreshTokenUseCase
from src.domain.entities import User, UserRole


@pytest.fixture
def user():
    return User(
        id=uuid4(),
        email="user@cms.dev",
        password_hash="$argon2id$placeholder",
        role=UserRole.user,
    )


@pytest.fixture
def logged_in_user(user, token_issuer):
    user.refresh_token = token_issuer.issue_refresh_token(user)
    return user


@pytest.mark.asyncio
async def test_successful_token_refresh(mock_uow, token_issuer, logged_in_user):
    """Valid stored token is rotated into a new pair"""
    # Arrange
    old_refresh_token = logged_in_user.refresh_token
    mock_uow.users.get_by_id.return_value = logged_in_user
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    # Act
    result = await use_case.execute(old_refresh_token)

    # Assert
    assert result.is_ok()
    data = result.value
    assert data.success is True
    assert data.data.refresh_token != old_refresh_token
    assert token_issuer.decode_access_token(data.data.access_token).is_ok()
    assert token_issuer.decode_refresh_token(data.data.refresh_token).is_ok()

    mock_uow.users.get_by_id.assert_called_once_with(logged_in_user.id)
    mock_uow.users.swap_refresh_token.assert_called_once_with(
        logged_in_user.id, old_refresh_token, data.data.refresh_token
    )
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_refresh_response_shape(mock_uow, token_issuer, logged_in_user):
    mock_uow.users.get_by_id.return_value = logged_in_user
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    result = await use_case.execute(logged_in_user.refresh_token)

    dumped = result.value.model_dump(by_alias=True)
    assert dumped["success"] is True
    assert set(dumped["data"]) == {"accessToken", "refreshToken"}


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, ""])
async def test_refresh_missing_token(mock_uow, token_issuer, token):
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    result = await use_case.execute(token)

    assert result.is_err()
    assert result.error.code == "MISSING_TOKEN"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_invalid_token(mock_uow, token_issuer):
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    result = await use_case.execute("not-a-token")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    assert result.error.message == "Invalid refresh token"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(mock_uow, token_issuer, logged_in_user):
    mock_uow.users.get_by_id.return_value = logged_in_user
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    result = await use_case.execute(token_issuer.issue_access_token(logged_in_user))

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_refresh_expired_token(mock_uow, user):
    issuer = JwtTokenIssuer(
        access_secret="a", refresh_secret="r", refresh_ttl=timedelta(seconds=-10)
    )
    user.refresh_token = issuer.issue_refresh_token(user)
    mock_uow.users.get_by_id.return_value = user
    use_case = RefreshTokenUseCase(mock_uow, issuer)

    result = await use_case.execute(user.refresh_token)

    assert result.is_err()
    assert result.error.code == "TOKEN_EXPIRED"
    assert result.error.message == "Refresh token has expired"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_user_not_found(mock_uow, token_issuer, logged_in_user):
    mock_uow.users.get_by_id.return_value = None
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    result = await use_case.execute(logged_in_user.refresh_token)

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
    mock_uow.users.swap_refresh_token.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_inactive_user(mock_uow, token_issuer, logged_in_user):
    logged_in_user.is_active = False
    mock_uow.users.get_by_id.return_value = logged_in_user
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    result = await use_case.execute(logged_in_user.refresh_token)

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_refresh_superseded_token(mock_uow, token_issuer, logged_in_user):
    """A validly signed token that is no longer stored is rejected"""
    superseded = logged_in_user.refresh_token
    logged_in_user.refresh_token = token_issuer.issue_refresh_token(logged_in_user)
    mock_uow.users.get_by_id.return_value = logged_in_user
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    result = await use_case.execute(superseded)

    assert result.is_err()
    assert result.error.code == "TOKEN_MISMATCH"
    mock_uow.users.swap_refresh_token.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_after_logout(mock_uow, token_issuer, logged_in_user):
    """No stored token means every refresh token is rejected"""
    token = logged_in_user.refresh_token
    logged_in_user.refresh_token = None
    mock_uow.users.get_by_id.return_value = logged_in_user
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    result = await use_case.execute(token)

    assert result.is_err()
    assert result.error.code == "TOKEN_MISMATCH"


@pytest.mark.asyncio
async def test_refresh_lost_race(mock_uow, token_issuer, logged_in_user):
    """If another refresh rotated the token first, the swap fails"""
    mock_uow.users.get_by_id.return_value = logged_in_user
    mock_uow.users.swap_refresh_token.return_value = False
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    result = await use_case.execute(logged_in_user.refresh_token)

    assert result.is_err()
    assert result.error.code == "TOKEN_MISMATCH"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_storage_failure(mock_uow, token_issuer, logged_in_user):
    mock_uow.users.get_by_id.side_effect = StorageError("connection reset")
    use_case = RefreshTokenUseCase(mock_uow, token_issuer)

    result = await use_case.execute(logged_in_user.refresh_token)

    assert result.is_err()
    assert result.error.code == "STORAGE_FAILURE"
