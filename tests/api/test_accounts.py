"""API tests for user registration and login."""

import pytest

from stockopname.api.dependencies import get_create_user_use_case, get_login_use_case
from stockopname.application.use_cases import CreateUserUseCase, LoginUseCase
from stockopname.core.exceptions import ConstraintViolationError, InvalidCredentialsError

USER_BODY = {
    "username": "alice",
    "email": "alice@example.com",
    "full_name": "Alice Example",
    "password": "secret123",
}


@pytest.fixture
def account_client(make_client, mock_accounts):
    return make_client(
        {
            get_create_user_use_case: lambda: CreateUserUseCase(mock_accounts),
            get_login_use_case: lambda: LoginUseCase(mock_accounts),
        }
    )


class TestCreateUser:
    async def test_returns_201_without_password(self, account_client, mock_accounts, sample_user):
        mock_accounts.create_user.return_value = sample_user

        response = await account_client.post("/api/users", json=USER_BODY)

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "alice"
        assert "password" not in data
        assert "password_hash" not in data

    async def test_duplicate_username_409(self, account_client, mock_accounts):
        mock_accounts.create_user.side_effect = ConstraintViolationError(
            "create_user", "UNIQUE constraint failed: users.username"
        )

        response = await account_client.post("/api/users", json=USER_BODY)

        assert response.status_code == 409
        assert response.json()["error_code"] == "CONSTRAINT_VIOLATION"

    async def test_malformed_email_422(self, account_client, mock_accounts):
        response = await account_client.post("/api/users", json={**USER_BODY, "email": "a@b..c"})

        assert response.status_code == 422
        assert response.json()["error_code"] == "REQUEST_VALIDATION_ERROR"
        mock_accounts.create_user.assert_not_awaited()


class TestLogin:
    async def test_success(self, account_client, mock_accounts, sample_user):
        mock_accounts.login.return_value = sample_user

        response = await account_client.post(
            "/api/auth/login", json={"username": "alice", "password": "secret123"}
        )

        assert response.status_code == 200
        assert response.json()["id"] == 1

    async def test_bad_credentials_401(self, account_client, mock_accounts):
        mock_accounts.login.side_effect = InvalidCredentialsError()

        response = await account_client.post(
            "/api/auth/login", json={"username": "alice", "password": "nope"}
        )

        assert response.status_code == 401
        body = response.json()
        assert body["error_code"] == "INVALID_CREDENTIALS"
        assert body["message"] == "Invalid username or password"
