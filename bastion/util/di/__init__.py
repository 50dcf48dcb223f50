from bastion.util.di.scope import Scope

__all__ = ["Scope"]
