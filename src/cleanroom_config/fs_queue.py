"""Deferred filesystem commit queue."""

import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any
from typing import TypeVar

from .document import ConfigFileFormat
from .exceptions import OutstandingRequirementsError
from .exceptions import QueueProtocolError
from .paths import PathResolver
from .utils import dump_json

logger = logging.getLogger(__name__)

T = TypeVar("T")

QueueTask = Callable[[], Awaitable[None]]
PathTask = Callable[[str], Awaitable[None]]


class QueueState(Enum):
    """Lifecycle of an FSQueue. There is no way back from RUNNING or COMMITTED."""

    PENDING = "pending"
    RUNNING = "running"
    COMMITTED = "committed"


@dataclass(frozen=True, eq=False)
class Requirement:
    """Opaque token for a mandatory step. Two tokens are equal only if identical."""

    label: str


class FSQueue:
    """Collects filesystem tasks and runs them once, in order, on commit().

    Nothing touches the filesystem until commit(). Writing the configuration
    is mandatory and may be requested once; callers may add their own
    mandatory steps with add_requirement() and satisfy them by passing the
    returned token to a task registration.

    Each task runs with the queue's private resolver pointed at the relative
    path given at registration, and the previous relative path is restored
    afterwards whether or not the task succeeds.

    Args:
        path_resolver: Resolver for the project root; cloned, never shared
        enable_warnings: Log diagnostic context when a task fails
    """

    def __init__(self, path_resolver: PathResolver, *, enable_warnings: bool = True):
        self._path_resolver = path_resolver.clone()
        self._enable_warnings = enable_warnings
        self._state = QueueState.PENDING
        # Insertion ordered so outstanding labels are reported in order.
        self._write_configuration = Requirement("writeConfiguration")
        self._required: dict[Requirement, None] = {self._write_configuration: None}
        self._tasks: list[tuple[QueueTask, str]] = []

    @property
    def state(self) -> QueueState:
        return self._state

    def has_committed(self) -> bool:
        return self._state is QueueState.COMMITTED

    def pending_operations(self) -> tuple[str, ...]:
        """Descriptions of every registered task, in registration order."""
        return tuple(description for _, description in self._tasks)

    # ===== Registration =====

    def add_requirement(self, label: str) -> Requirement:
        """Register a mandatory step and return the token that satisfies it.

        Args:
            label: Human-readable name, reported if the step is never staged

        Returns:
            Token to pass as ``requirement=`` to a task registration
        """
        self._assert_not_started()
        requirement = Requirement(label)
        self._required[requirement] = None
        return requirement

    def write_configuration(self, config: ConfigFileFormat, relative_path: str) -> None:
        """Stage writing the configuration in its current state.

        The document is serialized now, so later changes to it are not
        written.

        Args:
            config: The configuration document
            relative_path: Location of the file relative to the project root

        Raises:
            QueueProtocolError: If called twice, or after commit() started
        """
        self._assert_not_started()
        if self._write_configuration not in self._required:
            raise QueueProtocolError("You've already requested to write the configuration!")

        contents = dump_json(config.to_json())
        del self._required[self._write_configuration]

        self._append_resolver_task(
            relative_path,
            self._writer(contents),
            f"write configuration to {self._preview(relative_path)}",
            {"command": "writeConfiguration", "relative_path": relative_path, "contents": contents},
        )

    def write_file(self, relative_path: str, contents: str, *, requirement: Requirement | None = None) -> None:
        """Stage writing a UTF-8 text file. Contents are captured now."""
        self.add_task(
            relative_path,
            self._writer(contents),
            f"write file {self._preview(relative_path)}",
            context={"command": "writeFile", "relative_path": relative_path, "contents": contents},
            requirement=requirement,
        )

    def make_directory(self, relative_path: str, *, requirement: Requirement | None = None) -> None:
        """Stage creating a directory and any missing parents."""

        async def mkdir(path: str) -> None:
            await asyncio.to_thread(Path(path).mkdir, parents=True, exist_ok=True)

        self.add_task(
            relative_path,
            mkdir,
            f"create directory {self._preview(relative_path)}",
            context={"command": "makeDirectory", "relative_path": relative_path},
            requirement=requirement,
        )

    def add_task(
        self,
        relative_path: str,
        task: PathTask,
        description: str,
        *,
        context: dict[str, Any] | None = None,
        requirement: Requirement | None = None,
    ) -> None:
        """Stage an arbitrary asynchronous filesystem task.

        Args:
            relative_path: Relative path the resolver points at while the task runs
            task: Coroutine function called with the resolved absolute path
            description: Shown by pending_operations()
            context: Logged if the task fails
            requirement: Token from add_requirement() this task satisfies

        Raises:
            QueueProtocolError: If commit() started, or the requirement is not outstanding
        """
        self._assert_not_started()
        if requirement is not None:
            if requirement not in self._required:
                raise QueueProtocolError(f"Requirement '{requirement.label}' is not outstanding on this queue!")
            del self._required[requirement]

        self._append_resolver_task(relative_path, task, description, context)

    def _append_resolver_task(
        self,
        override_path: str,
        task: PathTask,
        description: str,
        context: dict[str, Any] | None,
    ) -> None:
        self._assert_not_started()

        async def scoped() -> None:
            await self._with_temporary_path(override_path, task, description, context)

        self._tasks.append((scoped, description))

    # ===== Execution =====

    async def commit(self) -> None:
        """Run every registered task in registration order.

        A failing task stops the commit; earlier tasks stay done and the
        queue cannot be committed again.

        Raises:
            QueueProtocolError: If commit() was already called
            OutstandingRequirementsError: If a mandatory step was never staged
        """
        self._assert_not_started()

        if self._required:
            labels = tuple(requirement.label for requirement in self._required)
            if self._enable_warnings:
                logger.warning(f"Outstanding requirements: {', '.join(labels)}")
            raise OutstandingRequirementsError(labels)

        self._state = QueueState.RUNNING
        for task, _ in list(self._tasks):
            await task()

        self._state = QueueState.COMMITTED
        logger.info(f"Committed {len(self._tasks)} filesystem task(s)")

    async def suspend_warnings(self, callback: Callable[[], Awaitable[T]]) -> T:
        """Run callback with failure warnings disabled. Intended for tests.

        Args:
            callback: Coroutine function to await during the suspension

        Returns:
            The result of the callback
        """
        previous = self._enable_warnings
        self._enable_warnings = False
        try:
            return await callback()
        finally:
            self._enable_warnings = previous

    async def _with_temporary_path(
        self,
        override_path: str,
        task: PathTask,
        description: str,
        context: dict[str, Any] | None,
    ) -> None:
        current_path = self._path_resolver.get_path(False)
        self._path_resolver.set_path(False, override_path)
        try:
            await task(self._path_resolver.get_path(True))
        except Exception:
            if self._enable_warnings and context:
                logger.warning(f"Task failed: {description}; context: {context}")
            raise
        finally:
            self._path_resolver.set_path(False, current_path)

    # ===== Private Helpers =====

    @staticmethod
    def _writer(contents: str) -> PathTask:
        async def write(path: str) -> None:
            await asyncio.to_thread(Path(path).write_text, contents, encoding="utf-8", newline="")

        return write

    def _preview(self, relative_path: str) -> str:
        preview = self._path_resolver.clone()
        preview.set_path(False, relative_path)
        return preview.get_path(True)

    def _assert_not_started(self) -> None:
        if self._state is not QueueState.PENDING:
            raise QueueProtocolError("I have already started running tasks!")
