"""DI provider for auth infrastructure."""

from dishka import provide

from bastion.config import Config
from bastion.domain.auth.port.identity_provider import IdentityProvider
from bastion.infrastructure.auth.jwt_provider import JwtIdentityProvider
from bastion.util.di.base import Provider
from bastion.util.di.scope import Scope


class AuthInfraProvider(Provider):
    """DI provider for auth infrastructure adapters."""

    @provide(scope=Scope.APP)
    def get_identity_provider(self, config: Config) -> IdentityProvider:
        return JwtIdentityProvider(config=config.auth.jwt)
