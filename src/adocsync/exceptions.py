#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the adocsync library.

The serializer and the sync controller recover from bad documents and odd
clicks locally, so these exceptions only surface programming errors: wrong
option types, trees that violate the document invariants when validated
strictly, or calls naming a side that does not exist.

Exception Hierarchy
-------------------
- AdocSyncError (base exception)

  - ValidationError (parameter, option and tree validation)
    - InvalidOptionsError (wrong options class for a component)

  - RenderingError (serialization failures)

  - SyncError (sync controller misuse)

"""

from typing import Any


class AdocSyncError(Exception):
    """Root of every error raised by adocsync.

    Host editors can catch this one class around serializer and controller
    calls. When an error wraps a lower-level failure (a ``KeyError`` while
    loading editor JSON, say), the cause is kept on ``original_error``.

    Parameters
    ----------
    message : str
        What went wrong, in a form fit for a status bar
    original_error : Exception, optional
        Lower-level exception being wrapped

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(AdocSyncError):
    """A tree, an option value or an argument failed validation.

    Raised by strict ``ValidationVisitor`` runs, by strict editor-JSON
    loading and by navigation helpers handed impossible positions.

    Parameters
    ----------
    message : str
        What failed
    parameter_name : str, optional
        Field or argument at fault (``"level"``, ``"type"``, ``"options"``)
    parameter_value : Any, optional
        Offending value
    original_error : Exception, optional
        Lower-level exception being wrapped

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """A serializer or controller was given another component's options.

    Passing ``SyncOptions`` to the serializer (or the reverse) is the usual
    cause; the message names both classes.
    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class RenderingError(AdocSyncError):
    """Serializing a tree to AsciiDoc could not finish.

    ``rendering_stage`` is ``"setup"`` when a visitor method was called
    outside ``serialize()`` and ``"serialization"`` when a node blew up
    mid-walk.
    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class SyncError(AdocSyncError):
    """The sync controller was called with an unknown side, view mode or click type."""

    def __init__(self, message: str, side: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.side = side
