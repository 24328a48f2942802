"""Shared base for the serializer and sync option dataclasses.

Options are frozen so a controller can hand the same instance to the
serializer it builds without either side mutating it; use
``create_updated`` to derive a variant.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Adds ``create_updated`` to frozen option dataclasses."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        ``__post_init__`` runs on the copy, so invalid values raise here just
        as they would in the constructor.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            The updated copy

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Options every tree renderer understands.

    Parameters
    ----------
    warn_on_unknown_nodes : bool, default=True
        Log a warning for node kinds the renderer does not recognize. Such
        nodes are always emitted as raw text, never dropped.

    """

    warn_on_unknown_nodes: bool = field(
        default=True,
        metadata={
            "help": "Log a warning when an unrecognized node kind is emitted as raw text",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Hook for subclass validation."""
