"""
Editor state and the reducer that drives the filter engine.

The state is an immutable snapshot; ``reduce(state, event)`` returns the
next snapshot and never edits the one it was given. Engine failures leave
the displayed image unchanged and put a short notice on the new state.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Optional, Union

from ..engine.image_processing.configs.processing_config import FilterProcessingConfig
from ..engine.image_processing.core.dispatcher import FilterDispatcher, FilterKind, ModificationKind
from ..engine.image_processing.core.pixel_buffer import PixelBuffer
from ..engine.image_processing.core.tone import ToneParams
from ..engine.image_processing.utils.image_utils import ImageProcessingError
from ..engine.utils.error_handler import EngineErrorHandler, error_handler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorState:
    original: Optional[PixelBuffer] = None
    displayed: Optional[PixelBuffer] = None
    image_uri: Optional[str] = None
    display_original: bool = False
    selected_filter: FilterKind = FilterKind.GRAYSCALE
    selected_modification: ModificationKind = ModificationKind.ROTATE
    tone: ToneParams = field(default_factory=ToneParams)
    notice: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return self.original is not None

    @property
    def visible(self) -> Optional[PixelBuffer]:
        """The buffer currently on screen."""
        return self.original if self.display_original else self.displayed


# Events ------------------------------------------------------------------

@dataclass(frozen=True)
class LoadImage:
    buffer: PixelBuffer
    image_uri: Optional[str] = None


@dataclass(frozen=True)
class CapturePhoto:
    buffer: PixelBuffer


@dataclass(frozen=True)
class SwitchPhoto:
    pass


@dataclass(frozen=True)
class BrightnessAdjustment:
    brightness: float


@dataclass(frozen=True)
class ContrastAdjustment:
    contrast: float


@dataclass(frozen=True)
class ApplyFilter:
    kind: FilterKind


@dataclass(frozen=True)
class ApplyModification:
    kind: ModificationKind


Event = Union[LoadImage, CapturePhoto, SwitchPhoto, BrightnessAdjustment,
              ContrastAdjustment, ApplyFilter, ApplyModification]


class EditorReducer:
    """Pure ``(state, event) -> state`` transitions backed by a FilterDispatcher"""

    def __init__(self, dispatcher: Optional[FilterDispatcher] = None,
                 errors: Optional[EngineErrorHandler] = None):
        self.dispatcher = dispatcher or FilterDispatcher(FilterProcessingConfig())
        self.errors = errors or error_handler
        self._handlers: Dict[type, Callable[[EditorState, Event], EditorState]] = {
            LoadImage: self._load_image,
            CapturePhoto: self._capture_photo,
            SwitchPhoto: self._switch_photo,
            BrightnessAdjustment: self._adjust_brightness,
            ContrastAdjustment: self._adjust_contrast,
            ApplyFilter: self._apply_filter,
            ApplyModification: self._apply_modification,
        }

    def reduce(self, state: EditorState, event: Event) -> EditorState:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported editor event: {event!r}")
        return handler(state, event)

    __call__ = reduce

    def _load_image(self, state: EditorState, event: LoadImage) -> EditorState:
        return replace(state, original=event.buffer, displayed=event.buffer,
                       image_uri=event.image_uri, tone=ToneParams(), notice=None)

    def _capture_photo(self, state: EditorState, event: CapturePhoto) -> EditorState:
        return replace(state, original=event.buffer, displayed=event.buffer,
                       tone=ToneParams(), notice=None)

    def _switch_photo(self, state: EditorState, event: SwitchPhoto) -> EditorState:
        return replace(state, display_original=not state.display_original)

    def _adjust_brightness(self, state: EditorState, event: BrightnessAdjustment) -> EditorState:
        return self._adjust_tone(state, event, brightness=event.brightness)

    def _adjust_contrast(self, state: EditorState, event: ContrastAdjustment) -> EditorState:
        return self._adjust_tone(state, event, contrast=event.contrast)

    def _adjust_tone(self, state: EditorState, event: Event, **changes) -> EditorState:
        if not state.has_image:
            return state
        try:
            tone = replace(state.tone, **changes)
            displayed = self.dispatcher.adjust_tone(state.original, tone)
        except ImageProcessingError as e:
            return self._fail(state, event, e)
        return replace(state, displayed=displayed, tone=tone, notice=None)

    def _apply_filter(self, state: EditorState, event: ApplyFilter) -> EditorState:
        if state.displayed is None:
            return state
        try:
            displayed = self.dispatcher.apply_filter(event.kind, state.displayed)
        except ImageProcessingError as e:
            return self._fail(state, event, e)
        return replace(state, displayed=displayed, selected_filter=event.kind, notice=None)

    def _apply_modification(self, state: EditorState, event: ApplyModification) -> EditorState:
        if state.displayed is None:
            return state
        try:
            displayed = self.dispatcher.apply_modification(event.kind, state.displayed)
        except ImageProcessingError as e:
            return self._fail(state, event, e)
        return replace(state, displayed=displayed, selected_modification=event.kind, notice=None)

    def _fail(self, state: EditorState, event: Event, error: ImageProcessingError) -> EditorState:
        outcome = self.errors.handle_error(error, context={"event": type(event).__name__})
        return replace(state, notice=outcome["notice"])


_default_reducer: Optional[EditorReducer] = None


def reduce(state: EditorState, event: Event) -> EditorState:
    """Apply ``event`` to ``state`` with a shared default reducer."""
    global _default_reducer
    if _default_reducer is None:
        _default_reducer = EditorReducer()
    return _default_reducer.reduce(state, event)
