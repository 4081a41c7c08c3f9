"""Usuarios de la organización e invitaciones pendientes."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from mackerel_client.core.domain.common import DomainModel, InputModel

UserAuthority = Literal["owner", "manager", "collaborator", "viewer"]
UserAuthenticationMethod = Literal["password", "github", "idcf", "google", "nifty", "kddi"]
InvitationAuthority = Literal["manager", "collaborator", "viewer"]


class User(DomainModel):
    id: str
    screen_name: str
    email: str
    authority: UserAuthority
    is_in_registration_process: bool
    is_mfa_enabled: bool
    authentication_methods: list[UserAuthenticationMethod]
    joined_at: datetime


class Invitation(DomainModel):
    email: str
    authority: InvitationAuthority
    expires_at: datetime


class CreateInvitationInput(InputModel):
    email: str
    authority: InvitationAuthority
