"""Resolves bearer tokens presented to the API into user accounts via the OAuth2 check_token endpoint."""

import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field

from balancemonitor.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

PRO_USER_AUTHORITY = "ROLE_PRO_USER"


class UserAccount(BaseModel):
    user_name: str
    user_account_id: str
    authorities: set[str] = set()

    @property
    def is_pro_plan(self) -> bool:
        return PRO_USER_AUTHORITY in self.authorities


class _CheckTokenUserAccount(BaseModel):
    user_account_id: str = Field(alias="userAccountId")


class _CheckTokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_name: str
    user_account: _CheckTokenUserAccount = Field(alias="userAccount")
    authorities: set[str] = set()

    def to_user_account(self) -> UserAccount:
        return UserAccount(
            user_name=self.user_name,
            user_account_id=self.user_account.user_account_id,
            authorities=self.authorities,
        )


class AccessTokenChecker:
    def __init__(
        self,
        oauth2_api_url: str,
        client_id: str,
        client_secret: str,
        http_client: RateLimitedClient,
    ) -> None:
        self._check_token_url = f"{oauth2_api_url.rstrip('/')}/oauth/check_token"
        self._client_auth = httpx.BasicAuth(client_id, client_secret)
        self._http = http_client

    async def check_token(self, token: str) -> UserAccount | None:
        """Return the account the token belongs to, or None when the token is rejected."""
        resp = await self._http.post(self._check_token_url, data={"token": token}, auth=self._client_auth)
        if resp.status_code != 200:
            logger.info("Token rejected by authorization server with status %d", resp.status_code)
            return None
        return _CheckTokenResponse.model_validate(resp.json()).to_user_account()
