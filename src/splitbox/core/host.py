"""ExecutionHost — runs preparation and chunking off the caller's context.

One long-lived worker (a process by default, a thread when ``isolated``
is False) handles requests one at a time; later submissions queue behind
the current one.  Caller and worker exchange plain dict messages only:
pickled across the process boundary, deep-copied across the thread one.

Every submission resolves exactly once with a :class:`SplitOutcome`,
either ``succeeded`` with groups and stats or ``failed`` with a message.
There is no cancellation; an unresponsive worker is reported as a lost
request when a timeout is configured.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import os
import threading
from concurrent.futures import (
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    TimeoutError as FuturesTimeoutError,
)
from concurrent.futures.process import BrokenProcessPool
from typing import Any, Mapping

import jsonschema

from splitbox.contracts.load import validate_instance
from splitbox.core.worker import RESPONSE_SCHEMA, handle_request
from splitbox.errors import ConfigError, ExecutionError
from splitbox.model import RequestState
from splitbox.model.request import SplitOutcome, SplitRequest

_logger = logging.getLogger(__name__)

# Default wait for a blocking/async result in seconds.  Override with
# SPLITBOX_EXECUTION_TIMEOUT (0 = no limit).
_DEFAULT_EXECUTION_TIMEOUT = 300.0


def timeout_from_env() -> float | None:
    raw = os.environ.get("SPLITBOX_EXECUTION_TIMEOUT", "")
    if not raw:
        return _DEFAULT_EXECUTION_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(
            f"SPLITBOX_EXECUTION_TIMEOUT must be a number of seconds (got {raw!r})"
        ) from None
    return None if value == 0 else value


def _resolved_future(outcome: SplitOutcome) -> Future[SplitOutcome]:
    fut: Future[SplitOutcome] = Future()
    fut.set_result(outcome)
    return fut


class ExecutionHost:
    """Concurrency boundary around the preparer and chunker.

    Usage::

        with ExecutionHost() as host:
            outcome = host.run(SplitRequest(raw_input="a\\nb", split_value=1))
            groups, stats = outcome.unwrap()
    """

    def __init__(self, *, isolated: bool = True, timeout: float | None = None) -> None:
        self.isolated = isolated
        # 0 means no limit, as for the environment variable.
        self.timeout = timeout_from_env() if timeout is None else (timeout or None)
        self._executor: Executor | None = None
        self._lock = threading.Lock()
        self._closed = False
        # Only the latest submission may move the state machine.
        self._state_lock = threading.Lock()
        self._state = RequestState.IDLE
        self._latest = 0

    # ── lifecycle ───────────────────────────────────────────────────

    @property
    def state(self) -> RequestState:
        """State of the most recently submitted request."""
        return self._state

    def _ensure_executor(self) -> Executor:
        with self._lock:
            if self._closed:
                raise ExecutionError("execution context is unavailable: host is closed")
            if self._executor is None:
                if self.isolated:
                    self._executor = ProcessPoolExecutor(max_workers=1)
                else:
                    self._executor = ThreadPoolExecutor(
                        max_workers=1, thread_name_prefix="splitbox-worker"
                    )
                _logger.debug(
                    "started %s execution context",
                    "process" if self.isolated else "thread",
                )
            return self._executor

    def _discard_executor(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False)

    def close(self) -> None:
        """Shut the worker down, letting queued requests finish first."""
        with self._lock:
            self._closed = True
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "ExecutionHost":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ── submission ──────────────────────────────────────────────────

    def submit(self, request: SplitRequest | Mapping[str, Any]) -> Future[SplitOutcome]:
        """Hand *request* to the worker; the returned future resolves once."""
        if isinstance(request, SplitRequest):
            message = request.to_message()
        else:
            message = copy.deepcopy(dict(request))

        with self._state_lock:
            self._latest += 1
            seq = self._latest
            self._state = RequestState.RUNNING

        try:
            executor = self._ensure_executor()
            inner = executor.submit(handle_request, message)
        except (ExecutionError, BrokenProcessPool, RuntimeError) as exc:
            _logger.warning("could not submit request: %s", exc)
            self._discard_executor()
            outcome = SplitOutcome.failed(_unavailable_message(exc))
            self._set_state(seq, outcome.state)
            return _resolved_future(outcome)

        _logger.debug("submitted request (%d chars)", len(message.get("rawInput", "")))

        outer: Future[SplitOutcome] = Future()
        inner.add_done_callback(lambda done: self._settle(seq, done, outer))
        return outer

    def _set_state(self, seq: int, state: RequestState) -> None:
        with self._state_lock:
            if seq == self._latest:
                self._state = state

    def _settle(self, seq: int, inner: Future, outer: Future[SplitOutcome]) -> None:
        try:
            response = inner.result()
        except BrokenProcessPool:
            _logger.exception("execution context terminated while handling a request")
            self._discard_executor()
            outcome = SplitOutcome.failed(
                "execution context is unavailable: worker terminated unexpectedly"
            )
        except Exception as exc:
            _logger.exception("execution context raised while handling a request")
            outcome = SplitOutcome.failed(f"execution failed: {exc}")
        else:
            outcome = self._decode(response)

        if not outcome.ok:
            _logger.warning("request failed: %s", outcome.error)
        self._set_state(seq, outcome.state)
        if not outer.done():
            outer.set_result(outcome)

    def _decode(self, response: Any) -> SplitOutcome:
        if not self.isolated:
            response = copy.deepcopy(response)
        try:
            validate_instance(response, RESPONSE_SCHEMA)
        except jsonschema.ValidationError as exc:
            return SplitOutcome.failed(
                str(ExecutionError(f"malformed response from execution context: {exc.message}"))
            )
        return SplitOutcome.from_message(response)

    # ── waiting ─────────────────────────────────────────────────────

    def run(self, request: SplitRequest | Mapping[str, Any]) -> SplitOutcome:
        """Submit and block until the outcome arrives (or the timeout)."""
        future = self.submit(request)
        try:
            return future.result(timeout=self.timeout)
        except FuturesTimeoutError:
            return SplitOutcome.failed(_lost_message(self.timeout))

    async def arun(self, request: SplitRequest | Mapping[str, Any]) -> SplitOutcome:
        """Awaitable form of :meth:`run` for asyncio callers."""
        future = asyncio.wrap_future(self.submit(request))
        try:
            return await asyncio.wait_for(asyncio.shield(future), timeout=self.timeout)
        except asyncio.TimeoutError:
            return SplitOutcome.failed(_lost_message(self.timeout))


def _unavailable_message(exc: BaseException) -> str:
    if isinstance(exc, ExecutionError):
        return str(exc)
    return f"execution context is unavailable: {exc}"


def _lost_message(timeout: float | None) -> str:
    return str(ExecutionError(f"execution context did not respond within {timeout:g}s"))
