"""
Bounded polling loop for remote long-running operations.

State machine::

    SUBMITTED -> POLLING -> COMPLETED
                         -> FAILED     (operation done with an error, or poll transport failure)
                         -> TIMED_OUT  (attempt ceiling reached)

Each tick sleeps a fixed interval and then issues exactly one poll call.
Polls are strictly sequential and a transport failure is fatal on the first
occurrence.
"""
import asyncio
from enum import Enum
from typing import Awaitable, Callable

from .exceptions import ProviderOperationError, ProviderPollError, ProviderTimeoutError
from .logger import get_library_logger
from .models import Operation

PollFunction = Callable[[str], Awaitable[Operation]]


class PollState(str, Enum):
    """Lifecycle of one tracked operation."""

    SUBMITTED = "submitted"
    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


class OperationPoller:
    """Drive one submitted operation to a terminal state.

    60 attempts at 5 second intervals bounds a single generation to roughly
    five minutes of waiting.
    """

    POLL_INTERVAL_SECONDS = 5
    MAX_ATTEMPTS = 60

    def __init__(self, poll_operation: PollFunction, provider: str = "veo", logger=None):
        """
        Args:
            poll_operation: Coroutine function issuing one poll for an
                operation name; raises ProviderPollError on transport failure
            provider: Provider name used in error messages
            logger: Logger to report to; defaults to the library logger
        """
        self.poll_operation = poll_operation
        self.provider = provider
        self.logger = logger or get_library_logger()
        self.state = PollState.SUBMITTED
        self.attempts = 0

    async def wait(self, operation: Operation) -> Operation:
        """
        Poll until ``operation`` is done.

        Returns:
            The terminal operation snapshot (done, no error)

        Raises:
            ValueError: If the operation has no name to poll with
            ProviderPollError: If a poll call fails at the transport level
            ProviderOperationError: If the operation finished with an error
            ProviderTimeoutError: If MAX_ATTEMPTS polls never saw ``done``
        """
        if not operation.name:
            raise ValueError("Cannot poll an operation without a name")

        self.state = PollState.POLLING
        self.logger.info(f"Starting polling loop (max {self.MAX_ATTEMPTS} attempts)...")

        while self.attempts < self.MAX_ATTEMPTS:
            await asyncio.sleep(self.POLL_INTERVAL_SECONDS)
            self.attempts += 1
            self.logger.info(f"Poll attempt {self.attempts}/{self.MAX_ATTEMPTS}...")

            try:
                current = await self.poll_operation(operation.name)
            except ProviderPollError:
                self.state = PollState.FAILED
                raise

            if not current.done:
                self.logger.debug("Operation still in progress...")
                continue

            if current.error:
                self.state = PollState.FAILED
                self.logger.error(f"Operation failed: {current.error}")
                raise ProviderOperationError(
                    f"{self.provider} generation failed: {current.error_message}",
                    provider=self.provider,
                    body=current.error,
                )

            self.state = PollState.COMPLETED
            self.logger.info(f"Operation complete after {self.attempts} poll(s)")
            return current

        self.state = PollState.TIMED_OUT
        self.logger.error(f"Polling timed out after {self.MAX_ATTEMPTS} attempts")
        raise ProviderTimeoutError(
            f"{self.provider} video generation timed out after {self.attempts} attempts",
            provider=self.provider,
            attempts=self.attempts,
        )
