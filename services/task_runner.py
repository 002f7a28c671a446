# -*- coding: utf-8 -*-
"""
Task Runner
===========

Runs blocking data loads off the UI thread and hands their outcome back on
the UI thread, guarded by a cancellation token captured when the request
was issued.

- QtTaskRunner: one QThread worker per task, result delivered through a
  queued signal to the runner living on the GUI thread.
- ImmediateTaskRunner: runs the task inline (headless runs, tests).

Every outcome is an OperationResult; exceptions raised by the task are
turned into ``OperationResult.fail`` and never reach the caller.
"""

import itertools
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from PyQt5.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')

ResultCallback = Callable[[Any], None]  # receives an OperationResult


class CancellationToken:
    """
    Cancellation flag passed to each async request at issue time.

    A child token is cancelled when its parent is, so cancelling the
    engine's mount token invalidates every request issued under it.
    """

    def __init__(self, parent: Optional['CancellationToken'] = None, tag: Any = None):
        self._parent = parent
        self._cancelled = False
        self.tag = tag

    @property
    def is_cancelled(self) -> bool:
        if self._cancelled:
            return True
        return self._parent is not None and self._parent.is_cancelled

    def cancel(self):
        self._cancelled = True

    def child(self, tag: Any = None) -> 'CancellationToken':
        return CancellationToken(parent=self, tag=tag)

    def __repr__(self):
        return f"CancellationToken(tag={self.tag!r}, cancelled={self.is_cancelled})"


class TaskRunner:
    """Base class for task runners."""

    def submit(
        self,
        name: str,
        func: Callable[[], T],
        on_done: ResultCallback,
        token: CancellationToken
    ) -> None:
        """
        Run ``func`` and pass its OperationResult to ``on_done``.

        ``on_done`` is skipped when ``token`` is cancelled by the time the
        task finishes.
        """
        raise NotImplementedError

    @staticmethod
    def _execute(name: str, func: Callable[[], T]) -> 'OperationResult':
        # Import here to avoid circular imports
        from controllers.base_controller import OperationResult

        try:
            return OperationResult.ok(data=func())
        except Exception as e:
            logger.warning(f"Task '{name}' failed: {e}")
            return OperationResult.fail(message=str(e), errors=[type(e).__name__])

    @staticmethod
    def _deliver(name: str, result: 'OperationResult', on_done: ResultCallback, token: CancellationToken):
        if token.is_cancelled:
            logger.debug(f"Discarding result of '{name}' ({token!r})")
            return
        on_done(result)


class ImmediateTaskRunner(TaskRunner):
    """Runs tasks synchronously on the calling thread."""

    def submit(self, name, func, on_done, token):
        self._deliver(name, self._execute(name, func), on_done, token)


class _TaskWorker(QThread):
    """Background worker for a single task."""

    result_ready = pyqtSignal(int, object)  # task id, OperationResult

    def __init__(self, task_id: int, name: str, func: Callable[[], Any]):
        super().__init__()
        self.task_id = task_id
        self.name = name
        self.func = func

    def run(self):
        """Run the task in background."""
        self.result_ready.emit(self.task_id, TaskRunner._execute(self.name, self.func))


class QtTaskRunner(QObject, TaskRunner):
    """
    Runs each task on its own QThread.

    The runner must live on the GUI thread: results arrive through a
    queued connection, so ``on_done`` always runs there.
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._ids = itertools.count(1)
        self._pending: Dict[int, Tuple[_TaskWorker, ResultCallback, CancellationToken]] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def submit(self, name, func, on_done, token):
        task_id = next(self._ids)
        worker = _TaskWorker(task_id, name, func)
        worker.result_ready.connect(self._on_result_ready)
        self._pending[task_id] = (worker, on_done, token)
        logger.debug(f"Starting task '{name}' (#{task_id})")
        worker.start()

    @pyqtSlot(int, object)
    def _on_result_ready(self, task_id: int, result: 'OperationResult'):
        worker, on_done, token = self._pending.pop(task_id)
        worker.wait()
        worker.deleteLater()
        self._deliver(worker.name, result, on_done, token)
