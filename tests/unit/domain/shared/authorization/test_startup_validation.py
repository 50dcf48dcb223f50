"""Tests for startup validation of handler __auth__ declarations."""

import pytest

from bastion.domain.shared.authorization.gate import enforce, public
from bastion.domain.shared.authorization.startup import _check_handler_class, validate_all_handlers
from bastion.domain.shared.command import Command, CommandHandler, Result
from bastion.domain.shared.error import ConfigurationError


class Noop(Command):
    pass


class NoopResult(Result):
    pass


class DeclaredHandler(CommandHandler[Noop, NoopResult]):
    __auth__ = public()

    async def run(self, cmd: Noop) -> NoopResult:
        return NoopResult()


# Plain classes: registering undeclared CommandHandler subclasses would make
# every later validate_all_handlers() call fail.
class UndeclaredHandler:
    pass


class WrongHandler:
    __auth__ = "admin"


class TestCheckHandlerClass:
    def test_declared_handler_passes(self) -> None:
        _check_handler_class(DeclaredHandler)

    def test_undeclared_handler_fails(self) -> None:
        with pytest.raises(ConfigurationError, match="UndeclaredHandler"):
            _check_handler_class(UndeclaredHandler)

    def test_non_gate_declaration_fails(self) -> None:
        with pytest.raises(ConfigurationError, match="WrongHandler"):
            _check_handler_class(WrongHandler)


class TestEnforce:
    def test_enforce_rejects_undeclared_handler(self) -> None:
        with pytest.raises(ConfigurationError):
            enforce(UndeclaredHandler())

    @pytest.mark.asyncio
    async def test_declared_public_handler_runs(self) -> None:
        assert await DeclaredHandler().run(Noop()) == NoopResult()


class TestValidateAllHandlers:
    def test_application_handlers_pass(self) -> None:
        import bastion.domain.auth.command  # noqa: F401
        import bastion.domain.auth.query  # noqa: F401

        validate_all_handlers()

    def test_reports_every_violation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            CommandHandler, "__subclasses__", lambda: [UndeclaredHandler, WrongHandler]
        )
        with pytest.raises(ConfigurationError, match="2 handler"):
            validate_all_handlers()
