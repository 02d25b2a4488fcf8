"""cleanroom-config: Staged build configuration with a deferred filesystem commit.

This library describes the inputs of a multi-variant build (source
checkouts, patches, build-flag files, integration branches and build
targets) as one versioned JSON document, and writes that document together
with any other requested files in a single deferred batch.

Nothing is written until the queue is committed, and the queue refuses to
commit while a mandatory step (such as writing the configuration) has not
been staged.

Public API:
    ConfigFileFormat: The versioned configuration document
    StringSet, File, Integration, Project: Entities stored in the document
    PathResolver: Base directory plus relative subpath
    FSQueue: Deferred, ordered filesystem commit queue
    ConfigurationManager: Loads a project's document and stages it
    Settings, load_settings: Tool settings from layered YAML files
    FakePrompter, FakeAnswers, Question: Answer-source contract and fake
    ConfigError and subclasses: Exception types

Example:
    ```python
    import asyncio
    from pathlib import Path
    from cleanroom_config import ConfigurationManager, Settings, StringSet

    manager = ConfigurationManager(Settings(project_root=Path.cwd()))
    config = manager.load()
    config.sources["hatchedEgg"] = StringSet(["sources/hatchedEgg"])

    queue = manager.create_queue()
    queue.make_directory("cleanroom")
    manager.stage(queue, config)
    asyncio.run(queue.commit())
    ```
"""

from .document import FORMAT_VERSION
from .document import ConfigFileFormat
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .exceptions import OutstandingRequirementsError
from .exceptions import PromptError
from .exceptions import QueueProtocolError
from .exceptions import ReferentialIntegrityError
from .fs_queue import FSQueue
from .fs_queue import QueueState
from .fs_queue import Requirement
from .json_entity import JSONEntity
from .manager import ConfigurationManager
from .models import File
from .models import Integration
from .models import Project
from .models import StringSet
from .paths import PathResolver
from .prompts import FakeAnswers
from .prompts import FakePrompter
from .prompts import Question
from .settings import Settings
from .settings import load_settings

__version__ = "0.1.0"

__all__ = [
    "FORMAT_VERSION",
    "ConfigFileFormat",
    "StringSet",
    "File",
    "Integration",
    "Project",
    "JSONEntity",
    "PathResolver",
    "FSQueue",
    "QueueState",
    "Requirement",
    "ConfigurationManager",
    "Settings",
    "load_settings",
    "FakeAnswers",
    "FakePrompter",
    "Question",
    "ConfigError",
    "ConfigFileError",
    "ConfigValidationError",
    "ReferentialIntegrityError",
    "QueueProtocolError",
    "OutstandingRequirementsError",
    "PromptError",
]
