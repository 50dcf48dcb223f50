"""Bearer-token identity provider adapter (PyJWT)."""

import logging

import jwt

from bastion.config import JwtConfig
from bastion.domain.auth.model.value import ProviderIdentity
from bastion.domain.auth.port.identity_provider import IdentityProvider

logger = logging.getLogger(__name__)


class JwtIdentityProvider(IdentityProvider):
    """Verifies signed JWTs issued by the upstream session service.

    The ``sub`` claim is the external id the user store knows the user by.
    """

    def __init__(self, config: JwtConfig) -> None:
        self._config = config

    @property
    def provider_name(self) -> str:
        return "jwt"

    async def authenticate(self, credentials: str) -> ProviderIdentity | None:
        if not self._config.secret:
            logger.error("JWT secret is not configured; rejecting all tokens")
            return None

        try:
            payload = jwt.decode(
                credentials,
                self._config.secret,
                algorithms=[self._config.algorithm],
                audience=self._config.audience,
                issuer=self._config.issuer,
                leeway=self._config.leeway_seconds,
                options={"require": ["sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected invalid token: %s", e)
            return None

        return ProviderIdentity(provider=self.provider_name, external_id=str(payload["sub"]))
