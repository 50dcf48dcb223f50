from dishka import from_context, provide

from bastion.config import Config
from bastion.domain.auth.port.repository import AuditLog, UserRepository
from bastion.infrastructure.persistence.memory import InMemoryAuditLog, InMemoryUserRepository
from bastion.infrastructure.persistence.seed import build_seed_users
from bastion.util.di.base import Provider
from bastion.util.di.scope import Scope


class PersistenceProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)

    audit_log = provide(InMemoryAuditLog, scope=Scope.APP, provides=AuditLog)

    @provide(scope=Scope.APP)
    def get_user_repo(self, config: Config) -> UserRepository:
        return InMemoryUserRepository(build_seed_users(config.seed_users))
