"""
Exceptions raised by the eaip2sql pipeline.

Every error aborts the run; each carries enough context (source, step,
entity identifier) for an operator to diagnose the failure and re-run.
"""

from typing import Optional


class Eaip2SqlError(Exception):
    """Base class for all pipeline errors."""


class ProviderFetchError(Eaip2SqlError):
    """Exception raised when a source fails to deliver one of its record families."""

    def __init__(self, source: str, step: str, cause: Optional[BaseException] = None):
        """
        Initialize fetch error.

        Args:
            source: Country code of the failing source
            step: Fetch step that failed (e.g. 'navaids', 'airport EGLL')
            cause: Underlying exception raised by the provider
        """
        message = f"Failed to fetch {step} from source {source}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.source = source
        self.step = step
        self.cause = cause


class PersistenceError(Eaip2SqlError):
    """Exception raised when writing an entity to a storage backend fails."""

    def __init__(self, operation: str, identifier: Optional[str] = None, cause: Optional[BaseException] = None):
        """
        Initialize persistence error.

        Args:
            operation: What was being written (e.g. 'navaid', 'airway L9 waypoint 3')
            identifier: Identifier of the entity that failed
            cause: Underlying driver or I/O exception
        """
        message = f"Inserting {operation}"
        if identifier is not None:
            message = f"{message} {identifier}"
        message = f"{message} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.operation = operation
        self.identifier = identifier
        self.cause = cause


class AlreadyPopulatedError(PersistenceError):
    """
    Exception raised when the run metadata cannot be inserted.

    The metadata keys are primary keys, so this is how a target that
    already holds generated data refuses a second ingestion.
    """

    def __str__(self) -> str:
        return (f"{super().__str__()}\n"
                f"Maybe this database has already had navdata generated?")


class WaypointIntegrityError(Eaip2SqlError):
    """Exception raised when an airway waypoint cannot be linked to exactly one navaid or intersection."""

    def __init__(self, airway: str, position: int, designator: str, reason: str):
        super().__init__(f"Airway {airway} waypoint {position} ({designator}): {reason}")
        self.airway = airway
        self.position = position
        self.designator = designator
        self.reason = reason
