from bastion.infrastructure.persistence.di import PersistenceProvider

__all__ = ["PersistenceProvider"]
