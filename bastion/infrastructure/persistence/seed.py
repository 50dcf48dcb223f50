"""Seed data for the in-memory user store."""

import logging

from bastion.config import SeedUser
from bastion.domain.auth.model.role import Role
from bastion.domain.auth.model.user import UserRecord
from bastion.domain.auth.model.value import UserId
from bastion.domain.shared.error import ConfigurationError

logger = logging.getLogger(__name__)


def build_seed_users(seeds: list[SeedUser]) -> list[UserRecord]:
    """Turn configured seed users into records. Unknown roles fail startup."""
    users: list[UserRecord] = []
    for seed in seeds:
        try:
            role = Role.parse(seed.role)
        except ValueError as e:
            raise ConfigurationError(f"Seed user {seed.email}: {e}") from e

        users.append(
            UserRecord(
                id=UserId(seed.id) if seed.id else UserId.generate(),
                email=seed.email,
                name=seed.name,
                role=role,
                permissions=list(dict.fromkeys(seed.permissions)),
            )
        )
    logger.info("Seeded %d user(s)", len(users))
    return users
