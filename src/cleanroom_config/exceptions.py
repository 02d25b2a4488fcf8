"""Exceptions for cleanroom-config."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error reading or writing configuration file."""

    pass


class ConfigValidationError(ConfigError):
    """Error validating configuration data."""

    pass


class ReferentialIntegrityError(ConfigValidationError):
    """An entity references a key that does not exist in the document.

    Attributes:
        entity_kind: Kind of the referencing entity ("integration", "project")
        key: Key of the referencing entity
        collection: Name of the mapping the reference should resolve in
        missing_key: The key that could not be found
    """

    def __init__(self, entity_kind: str, key: str, collection: str, missing_key: str):
        self.entity_kind = entity_kind
        self.key = key
        self.collection = collection
        self.missing_key = missing_key
        super().__init__(f"{entity_kind} '{key}' references missing {collection} key '{missing_key}'")


class QueueProtocolError(ConfigError):
    """The filesystem queue was used out of order."""

    pass


class OutstandingRequirementsError(QueueProtocolError):
    """Commit was attempted while mandatory steps are still unstaged."""

    def __init__(self, labels: tuple[str, ...]):
        self.labels = labels
        super().__init__(f"You have required tasks to execute! Outstanding: {', '.join(labels)}")


class PromptError(ConfigError):
    """An answer source violated the question/answer contract."""

    pass
