#!/usr/bin/env python3
"""
Credential check

Twitch requires OAuth on every Helix endpoint, even for public channel data.
A bad token silently empties every poll result, so the token is validated
once at startup and problems are reported as warnings.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from twitchAPI.oauth import validate_token

from core.settings import NotifyConfig

LOGGER = logging.getLogger(__name__)


@dataclass
class CredentialStatus:
    """Result of a /validate call"""
    valid: bool
    login: Optional[str] = None
    client_id: Optional[str] = None
    expires_in: Optional[int] = None
    warnings: List[str] = field(default_factory=list)


async def check_credentials(config: NotifyConfig) -> CredentialStatus:
    """
    Validate the bearer token of `config`.

    Never raises: network errors are reported as an invalid status.
    """
    if not config.oauth:
        return CredentialStatus(
            valid=False,
            warnings=["No OAuth token configured (twitch.oauth); every Helix call will fail"]
        )

    try:
        data = await validate_token(config.oauth)
    except Exception as e:
        LOGGER.error(f"❌ Token validation error: {e}")
        return CredentialStatus(valid=False, warnings=[f"Could not validate OAuth token: {e}"])

    if "login" not in data and "client_id" not in data:
        message = data.get("message", "invalid access token")
        return CredentialStatus(valid=False, warnings=[f"OAuth token rejected by Twitch: {message}"])

    status = CredentialStatus(
        valid=True,
        login=data.get("login"),
        client_id=data.get("client_id"),
        expires_in=data.get("expires_in"),
    )
    if status.client_id and status.client_id != config.client_id:
        status.warnings.append(
            f"OAuth token was issued for client {status.client_id}, "
            f"but twitch.client_id is {config.client_id}"
        )
    LOGGER.info(f"✅ Token valid for {status.login or 'app'} (expires in {status.expires_in}s)")
    return status
