"""Cliente de usuarios (`/api/v0/users`) e invitaciones (`/api/v0/invitations`)."""

from __future__ import annotations

from typing import TypedDict

from mackerel_client.core.domain.timestamps import from_epoch_seconds
from mackerel_client.core.domain.users import CreateInvitationInput, Invitation, User
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawUser(TypedDict):
    id: str
    screenName: str
    email: str
    authority: str
    isInRegistrationProcess: bool
    isMFAEnabled: bool
    authenticationMethods: list[str]
    joinedAt: int


class RawInvitation(TypedDict):
    email: str
    authority: str
    expiresAt: int


def from_raw_user(raw: RawUser) -> User:
    return User(
        id=raw["id"],
        screen_name=raw["screenName"],
        email=raw["email"],
        authority=raw["authority"],
        is_in_registration_process=raw["isInRegistrationProcess"],
        is_mfa_enabled=raw["isMFAEnabled"],
        authentication_methods=raw["authenticationMethods"],
        joined_at=from_epoch_seconds(raw["joinedAt"]),
    )


def from_raw_invitation(raw: RawInvitation) -> Invitation:
    return Invitation(
        email=raw["email"],
        authority=raw["authority"],
        expires_at=from_epoch_seconds(raw["expiresAt"]),
    )


class UsersApiClient:
    """Usuarios e invitaciones comparten cliente: ambos gestionan la membresía."""

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(self) -> list[User]:
        res = await self._fetcher.fetch("GET", "/api/v0/users")
        return [from_raw_user(raw) for raw in res["users"]]

    async def remove(self, user_id: str) -> User:
        res: RawUser = await self._fetcher.fetch("DELETE", f"/api/v0/users/{user_id}", body={})
        return from_raw_user(res)

    async def list_invitations(self) -> list[Invitation]:
        res = await self._fetcher.fetch("GET", "/api/v0/invitations")
        return [from_raw_invitation(raw) for raw in res["invitations"]]

    async def send_invitation(self, input: CreateInvitationInput) -> Invitation:
        res: RawInvitation = await self._fetcher.fetch(
            "POST",
            "/api/v0/invitations",
            body={"email": input.email, "authority": input.authority},
        )
        return from_raw_invitation(res)

    async def revoke_invitation(self, email: str) -> None:
        await self._fetcher.fetch("POST", "/api/v0/invitations/revoke", body={"email": email})
