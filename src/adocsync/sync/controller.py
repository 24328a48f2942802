#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/sync/controller.py
"""Synchronization controller for the rich and text views.

The controller owns the shared AsciiDoc text and its source map. It decides
which side last changed, propagates each committed change to the other side
exactly once, and turns clicks on either side into navigation requests and
highlights for the other.

Propagation rules
-----------------
- A tree edit is serialized immediately and pushed to the text view.
- A text edit is debounced. When it commits, the rich view re-absorbs the
  rendered HTML, but only in editor-only mode; in split mode the rendered
  pane is a read-only projection and nothing flows back.
- While the controller writes into one side, edits reported by that side
  are echoes of the write and are ignored.

All delayed work goes through the injected scheduler, so the controller is
single-threaded and deterministic under a ``VirtualScheduler``.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union

from adocsync.ast.nodes import Document
from adocsync.ast.utils import assign_block_ids
from adocsync.constants import Side, ViewMode
from adocsync.exceptions import InvalidOptionsError, SyncError
from adocsync.options.sync import SyncOptions
from adocsync.renderers.asciidoc import AsciiDocSerializer
from adocsync.sync.debounce import Debouncer
from adocsync.sync.navigation import (
    RenderedPane,
    block_id_for_element,
    count_lines,
    estimate_line,
    line_for_element,
    line_from_offset,
)
from adocsync.sync.scheduler import ScheduledTask, Scheduler
from adocsync.sync.source_map import SourceMap
from adocsync.sync.state import HighlightInfo, NavigationRequest, RenderedClick, SyncState, TextClick
from adocsync.sync.surfaces import MarkupRenderer, RichEditingSurface, TextSurface

logger = logging.getLogger(__name__)


def _coerce_side(side: Union[Side, str]) -> Side:
    try:
        return Side(side)
    except ValueError as e:
        raise SyncError(f"Unknown side: {side!r}", side=str(side), original_error=e) from e


class SyncController:
    """Keep the rich view and the text view of one document in step.

    Parameters
    ----------
    rich_surface : RichEditingSurface
        The rich editing view
    text_surface : TextSurface
        The plain-text view
    renderer : MarkupRenderer
        Converts AsciiDoc to HTML carrying ``data-line`` attributes
    scheduler : Scheduler
        Source of delayed execution for debouncing and highlight expiry
    options : SyncOptions or None, default None
        Controller options
    serializer : AsciiDocSerializer or None, default None
        Tree serializer; a default one is created when omitted
    on_commit : callable, optional
        Called with ``(side, text)`` after a side's edit is committed
    on_error : callable, optional
        Called with the exception when a collaborator fails

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a SyncOptions instance

    Examples
    --------
        >>> scheduler = VirtualScheduler()
        >>> controller = SyncController(rich, text, renderer, scheduler)
        >>> controller.on_edit(Side.TREE, doc)
        >>> controller.on_click(Side.TEXT, TextClick(caret_offset=0))
        >>> controller.consume_navigation(Side.TREE).line
        1

    """

    def __init__(
        self,
        rich_surface: RichEditingSurface,
        text_surface: TextSurface,
        renderer: MarkupRenderer,
        scheduler: Scheduler,
        options: SyncOptions | None = None,
        serializer: AsciiDocSerializer | None = None,
        on_commit: Optional[Callable[[Side, str], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        if options is not None and not isinstance(options, SyncOptions):
            raise InvalidOptionsError(
                component_name="SyncController", expected_type=SyncOptions, received_type=type(options)
            )
        self.options: SyncOptions = options or SyncOptions()

        self._rich = rich_surface
        self._text_surface = text_surface
        self._renderer = renderer
        self._scheduler = scheduler
        self._serializer = serializer or AsciiDocSerializer()
        self._on_commit = on_commit
        self._on_error = on_error

        self._state = SyncState()
        self._view_mode = self.options.initial_view_mode
        self._text = ""
        self._source_map = SourceMap.empty()
        self._pane: Optional[RenderedPane] = None

        # Side the controller is currently writing into; its edit events are echoes
        self._pushing: Optional[Side] = None
        self._text_composing = False
        self._debouncer: Debouncer[str] = Debouncer(scheduler, self.options.debounce_ms, self._commit_text)
        self._highlight_task: Optional[ScheduledTask] = None
        self._propagation_count = 0
        self._closed = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        """The last committed AsciiDoc text."""
        return self._text

    @property
    def source_map(self) -> SourceMap:
        """Source map from the most recent tree serialization."""
        return self._source_map

    @property
    def state(self) -> SyncState:
        """Session state: last changed side, pending highlight and navigation."""
        return self._state

    @property
    def propagation_count(self) -> int:
        """Number of pushes made into either side since the session started."""
        return self._propagation_count

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def on_edit(self, side: Union[Side, str], payload: Any = None) -> None:
        """Handle an edit reported by one side.

        Parameters
        ----------
        side : Side
            The side that was edited
        payload : Document or str, optional
            The new tree (rich side) or text (text side). When omitted the
            content is read from the surface.

        Raises
        ------
        SyncError
            If ``side`` is not a known side

        """
        side = _coerce_side(side)
        if self._closed:
            return

        if side is Side.TREE:
            if self._pushing is Side.TREE:
                logger.debug("Ignoring rich-view edit caused by the controller's own update")
                return
            tree = payload if payload is not None else self._call(self._rich.get_tree, "reading the tree")
            if tree is not None:
                self._commit_tree(tree)
            return

        if self._pushing is Side.TEXT:
            logger.debug("Ignoring text-view edit caused by the controller's own update")
            return
        text = payload if payload is not None else self._call(self._text_surface.get_text, "reading the text")
        if text is None:
            return
        self._text_composing = True
        self._debouncer.push(str(text))

    def _commit_tree(self, tree: Document) -> None:
        try:
            if self.options.assign_missing_block_ids:
                issued = assign_block_ids(tree)
                if issued:
                    logger.debug(f"Assigned {issued} block identities before serializing")
            result = self._serializer.serialize(tree)
        except Exception as e:
            self._report(e, "serializing the tree")
            return

        self._state.last_changed_side = Side.TREE
        self._text = result.text
        self._source_map = result.source_map
        self._pane = None
        logger.debug(f"Tree committed: {count_lines(result.text)} lines, {len(result.source_map)} mapped blocks")

        if self._text_composing:
            logger.debug("Text view is composing, not overwriting it")
        else:
            self._push(Side.TEXT, lambda: self._text_surface.set_text(result.text))

        if self._on_commit is not None:
            self._call(lambda: self._on_commit(Side.TREE, result.text), "running on_commit")  # type: ignore[misc]

    def _commit_text(self, text: str) -> None:
        self._text_composing = False
        self._state.last_changed_side = Side.TEXT
        self._text = text
        self._pane = None

        if self._view_mode is ViewMode.EDITOR_ONLY:
            html = self._call(lambda: self._renderer.render_to_html(text), "rendering the text")
            if html is not None:
                self._push(Side.TREE, lambda: self._rich.set_tree(html, emit_events=False))
        else:
            logger.debug("Split view: rendered pane is read-only, not updating the rich view")

        if self._on_commit is not None:
            self._call(lambda: self._on_commit(Side.TEXT, text), "running on_commit")  # type: ignore[misc]

    def _push(self, destination: Side, action: Callable[[], None]) -> None:
        self._pushing = destination
        try:
            action()
            self._propagation_count += 1
            logger.debug(f"Propagated change to the {destination.value} side")
        except Exception as e:
            self._report(e, f"updating the {destination.value} side")
        finally:
            self._pushing = None

    # ------------------------------------------------------------------
    # Clicks, navigation and highlights
    # ------------------------------------------------------------------

    def on_click(self, side: Union[Side, str], click: Union[RenderedClick, TextClick]) -> Optional[NavigationRequest]:
        """Turn a click on one side into a navigation request for the other.

        Parameters
        ----------
        side : Side
            The side that was clicked
        click : RenderedClick or TextClick
            Click details; a RenderedClick for the rich side, a TextClick for
            the text side

        Returns
        -------
        NavigationRequest or None
            The request now pending, or None after ``close()``

        Raises
        ------
        SyncError
            If ``side`` is unknown or the click type does not match the side

        """
        side = _coerce_side(side)
        if self._closed:
            return None

        if side is Side.TREE:
            if not isinstance(click, RenderedClick):
                raise SyncError(f"Rich-view clicks must be RenderedClick, got {type(click).__name__}", side=side.value)
            request = self._resolve_rendered_click(click, side.opposite)
        else:
            if not isinstance(click, TextClick):
                raise SyncError(f"Text-view clicks must be TextClick, got {type(click).__name__}", side=side.value)
            request = self._resolve_text_click(click, side.opposite)

        self._state.pending_navigation = request
        self._set_highlight(HighlightInfo(line=request.line, side=side))
        return request

    def _resolve_rendered_click(self, click: RenderedClick, destination: Side) -> NavigationRequest:
        line: Optional[int] = None
        block_id = click.block_id

        if click.element is not None:
            line = line_for_element(click.element)
            if block_id is None:
                block_id = block_id_for_element(click.element)

        if line is None and block_id is not None:
            line = self._source_map.line_for_block(block_id)

        if line is None:
            # The empty line after the final newline is not content
            total = count_lines(self._text.rstrip("\n"))
            line = estimate_line(click.offset_y, click.content_height, total)
            logger.debug(f"Click carries no line, estimated line {line} of {total}")
            return NavigationRequest(line=line, destination=destination, block_id=block_id, estimated=True)

        if block_id is None:
            block_id = self._source_map.block_at_line(line)
        return NavigationRequest(line=line, destination=destination, block_id=block_id)

    def _resolve_text_click(self, click: TextClick, destination: Side) -> NavigationRequest:
        text = self._call(self._text_surface.get_text, "reading the text")
        line = line_from_offset(text if text is not None else self._text, click.caret_offset)
        return NavigationRequest(line=line, destination=destination, block_id=self._source_map.block_at_line(line))

    def consume_navigation(self, destination: Union[Side, str]) -> Optional[NavigationRequest]:
        """Take the pending navigation request for ``destination``, at most once."""
        destination = _coerce_side(destination)
        request = self._state.pending_navigation
        if request is None or request.destination is not destination:
            return None
        self._state.pending_navigation = None
        return request

    def get_highlight_state(self) -> Optional[HighlightInfo]:
        """Return the current highlight, or None once it has expired."""
        return self._state.pending_highlight

    def _set_highlight(self, info: HighlightInfo) -> None:
        self._cancel_highlight_timer()
        self._state.pending_highlight = info
        self._highlight_task = self._scheduler.call_later(
            self.options.highlight_duration_ms, lambda: self._expire_highlight(info)
        )

    def _expire_highlight(self, info: HighlightInfo) -> None:
        self._highlight_task = None
        if self._state.pending_highlight is info:
            self._state.pending_highlight = None

    def _cancel_highlight_timer(self) -> None:
        if self._highlight_task is not None:
            self._highlight_task.cancel()
            self._highlight_task = None

    # ------------------------------------------------------------------
    # Flushing and lifecycle
    # ------------------------------------------------------------------

    def on_blur(self, side: Union[Side, str]) -> None:
        """Commit any pending text edit immediately when a view loses focus."""
        _coerce_side(side)
        if self._closed:
            return
        self._debouncer.flush()

    def on_search_replace(self, text: Optional[str] = None) -> None:
        """Commit a search-and-replace result on the text side without waiting.

        Parameters
        ----------
        text : str, optional
            The text after replacement. When omitted, only the pending edit
            is flushed.

        """
        if self._closed:
            return
        if text is not None:
            self._text_composing = True
            self._debouncer.push(text)
        self._debouncer.flush()

    def set_view_mode(self, mode: Union[ViewMode, str]) -> None:
        """Switch between editor-only and split layouts.

        Raises
        ------
        SyncError
            If ``mode`` is not a known view mode

        """
        try:
            self._view_mode = ViewMode(mode)
        except ValueError as e:
            raise SyncError(f"Unknown view mode: {mode!r}", original_error=e) from e
        logger.debug(f"View mode set to {self._view_mode.value}")

    def rendered_pane(self) -> RenderedPane:
        """Return an index over the rendered HTML of the current text.

        The pane is built lazily and rebuilt after the text changes.
        """
        if self._pane is None:
            html = self._renderer.render_to_html(self._text)
            self._pane = RenderedPane(html, parser=self.options.html_parser)
        return self._pane

    def close(self) -> None:
        """Flush pending text, stop timers and ignore any later events."""
        if self._closed:
            return
        self._debouncer.flush()
        self._debouncer.cancel()
        self._cancel_highlight_timer()
        self._state.pending_highlight = None
        self._closed = True

    # ------------------------------------------------------------------
    # Collaborator failures
    # ------------------------------------------------------------------

    def _call(self, func: Callable[[], Any], stage: str) -> Any:
        try:
            return func()
        except Exception as e:
            self._report(e, stage)
            return None

    def _report(self, error: Exception, stage: str) -> None:
        logger.error(f"Error while {stage}: {error!r}", exc_info=error)
        if self._on_error is None:
            return
        try:
            self._on_error(error)
        except Exception:
            logger.exception("on_error callback failed")
