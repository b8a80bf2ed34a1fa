"""
Custom exceptions for the mediatag application.

This module defines the domain-specific exceptions raised by the tagging
core. None of them are retried inside the core: a failed mutation leaves
state untouched and the error propagates to the caller. Mapping errors to
HTTP status codes or CLI exit codes is left to the adapters.
"""

from __future__ import annotations

from enum import Enum


class MediatagError(Exception):
    """Base exception for all mediatag errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize MediatagError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class NotFoundError(MediatagError):
    """
    Exception raised when a referenced entity or tag does not exist.

    Attributes
    ----------
    message : str
        Human-readable error message.
    resource_type : str
        The type of resource that was not found (e.g., "Entity", "Tag").
    identifier : str
        The identifier used to look up the resource.

    Examples
    --------
    >>> raise NotFoundError(resource_type="Entity", identifier="0190f1c2-...")
    """

    def __init__(
        self,
        resource_type: str,
        identifier: object,
        hint: str | None = None,
    ) -> None:
        """
        Initialize NotFoundError.

        Parameters
        ----------
        resource_type : str
            The type of resource that was not found.
        identifier : object
            The identifier used to look up the resource; stored as ``str``.
        hint : str | None, optional
            Additional hint appended to the message (default: None).
        """
        self.resource_type = resource_type
        self.identifier = str(identifier)
        self.hint = hint
        message = f"{resource_type} '{self.identifier}' not found"
        if hint:
            message += f". {hint}"
        super().__init__(message)


class InvalidHierarchyError(MediatagError):
    """
    Exception raised when an entity would break the containment rules.

    Raised for a missing required parent, a parent/kind mismatch, a
    domain/kind mismatch, or a parent that does not exist.

    Attributes
    ----------
    message : str
        Human-readable error message.
    kind : str | None
        The kind of entity being created.
    parent_kind : str | None
        The kind of the proposed parent, if one was found.
    """

    def __init__(
        self,
        message: str = "Invalid containment hierarchy",
        kind: str | None = None,
        parent_kind: str | None = None,
    ) -> None:
        """
        Initialize InvalidHierarchyError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Invalid containment hierarchy").
        kind : str | None, optional
            Kind of the entity being created (default: None).
        parent_kind : str | None, optional
            Kind of the proposed parent (default: None).
        """
        self.kind = kind
        self.parent_kind = parent_kind
        super().__init__(message)


class InvalidTagError(MediatagError):
    """
    Exception raised when tag text is empty after normalization.

    Attributes
    ----------
    message : str
        Human-readable error message.
    raw_text : str
        The text that was rejected.
    """

    def __init__(self, raw_text: str, message: str | None = None) -> None:
        """
        Initialize InvalidTagError.

        Parameters
        ----------
        raw_text : str
            The rejected tag text.
        message : str | None, optional
            Override for the default message (default: None).
        """
        self.raw_text = raw_text
        super().__init__(message or f"Invalid tag text: {raw_text!r}")


class CycleRejectedError(MediatagError):
    """
    Exception raised when the containment graph would contain a cycle.

    Creation rules make cycles structurally impossible; this is raised if a
    path walk ever revisits a node, instead of looping or corrupting state.

    Attributes
    ----------
    message : str
        Human-readable error message.
    entity_id : str
        The entity whose ancestry contains the cycle.
    """

    def __init__(self, entity_id: object, message: str | None = None) -> None:
        """
        Initialize CycleRejectedError.

        Parameters
        ----------
        entity_id : object
            The entity whose ancestry contains the cycle.
        message : str | None, optional
            Override for the default message (default: None).
        """
        self.entity_id = str(entity_id)
        super().__init__(
            message or f"Containment cycle detected at entity '{self.entity_id}'"
        )


class CaptureErrorReason(str, Enum):
    """Why a season/episode capture failed."""

    NO_SEASON = "no_season"
    NO_EPISODE = "no_episode"


class CaptureError(MediatagError):
    """
    Exception raised when a TV filename cannot be captured.

    Raised when no explicit season/episode number is given and none can be
    parsed from the file name.

    Attributes
    ----------
    message : str
        Human-readable error message.
    reason : CaptureErrorReason
        Which number was missing.
    file_path : str
        The file name that failed to capture.
    """

    _MESSAGES = {
        CaptureErrorReason.NO_SEASON: (
            "No season number passed as context and it wasn't found in the "
            "file name either"
        ),
        CaptureErrorReason.NO_EPISODE: (
            "No episode number passed as context and it wasn't found in the "
            "file name either"
        ),
    }

    def __init__(self, reason: CaptureErrorReason, file_path: str = "") -> None:
        """
        Initialize CaptureError.

        Parameters
        ----------
        reason : CaptureErrorReason
            Which number was missing.
        file_path : str, optional
            The file name that failed to capture (default: "").
        """
        self.reason = reason
        self.file_path = file_path
        super().__init__(self._MESSAGES[reason])


class LockAcquisitionError(MediatagError):
    """
    Exception raised when the store lock cannot be acquired in time.

    Attributes
    ----------
    message : str
        Human-readable error message.
    timeout : float
        Seconds waited before giving up.
    """

    def __init__(
        self,
        message: str = "Failed to acquire tag store lock",
        timeout: float = 0.0,
    ) -> None:
        """
        Initialize LockAcquisitionError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message.
        timeout : float, optional
            Seconds waited before giving up (default: 0.0).
        """
        self.timeout = timeout
        super().__init__(message)


# Exit codes for CLI integration
EXIT_CODE_SUCCESS = 0
EXIT_CODE_GENERAL_ERROR = 1
EXIT_CODE_INVALID_ARGS = 2
