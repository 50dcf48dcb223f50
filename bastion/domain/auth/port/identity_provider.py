"""Identity provider port for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from bastion.domain.auth.model.value import ProviderIdentity
from bastion.domain.shared.port import Port


class IdentityProvider(Port, Protocol):
    """Port for the external collaborator that verifies who the caller is.

    The engine never verifies sessions itself; it only receives the identity
    this port establishes. Implementations are adapters in infrastructure/
    (e.g., JwtIdentityProvider).
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique identifier for this provider (e.g., 'jwt')."""
        ...

    @abstractmethod
    async def authenticate(self, credentials: str) -> ProviderIdentity | None:
        """Verify raw credentials (e.g. a bearer token).

        Returns:
            The established identity, or None if the credentials are not valid

        Raises:
            ExternalServiceError: If the provider cannot be reached
        """
        ...
