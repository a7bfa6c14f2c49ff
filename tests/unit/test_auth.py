from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from balancemonitor.api.deps import get_current_user, get_current_user_id, is_pro_plan_user
from balancemonitor.infra.oauth.token_checker import UserAccount


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    async def test_resolves_account(self):
        account = UserAccount(user_name="alice", user_account_id="user-1")
        checker = AsyncMock()
        checker.check_token.return_value = account

        user = await get_current_user(credentials=_bearer("abc"), token_checker=checker)

        assert user == account
        checker.check_token.assert_awaited_once_with("abc")
        assert await get_current_user_id(account=user) == "user-1"

    async def test_missing_token(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(credentials=None, token_checker=AsyncMock())
        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    async def test_rejected_token(self):
        checker = AsyncMock()
        checker.check_token.return_value = None

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(credentials=_bearer("expired"), token_checker=checker)
        assert exc_info.value.status_code == 401

    async def test_auth_server_down(self):
        checker = AsyncMock()
        checker.check_token.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(credentials=_bearer("abc"), token_checker=checker)
        assert exc_info.value.status_code == 401


class TestProPlan:
    async def test_pro_user_authority(self):
        account = UserAccount(user_name="alice", user_account_id="user-1", authorities={"ROLE_USER", "ROLE_PRO_USER"})

        assert await is_pro_plan_user(account=account) is True

    async def test_plain_user(self):
        account = UserAccount(user_name="bob", user_account_id="user-2", authorities={"ROLE_USER"})

        assert await is_pro_plan_user(account=account) is False
