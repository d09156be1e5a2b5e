"""Shared in-memory storage for testing."""

from collections.abc import Callable
from contextvars import ContextVar

from intranet.domain.model import Account, Invitation
from intranet.domain.value import InvitationId, UserId

Undo = Callable[[], None]

# Undo log of the attempt running in the current task, if any
_undo_log: ContextVar[list[Undo] | None] = ContextVar("inmemory_undo_log", default=None)


class InMemoryDatabase:
    """Tables shared by all in-memory repositories of one container.

    Writes register an undo step with the attempt open in the current task,
    so concurrent tasks only ever roll back their own changes.
    """

    def __init__(self) -> None:
        self.accounts: dict[UserId, Account] = {}
        self.invitations: dict[InvitationId, Invitation] = {}

    def record_undo(self, undo: Undo) -> None:
        log = _undo_log.get()
        if log is not None:
            log.append(undo)

    def begin(self) -> object:
        return _undo_log.set([])

    def rollback(self) -> None:
        log = _undo_log.get() or []
        for undo in reversed(log):
            undo()
        log.clear()

    def end(self, token: object) -> None:
        _undo_log.reset(token)
