from enum import Enum
from typing import Callable, Dict, Optional, Union

from .filters import FilterEngine
from .geometry import GeometricEngine
from .pixel_buffer import PixelBuffer
from .tone import ToneAdjuster, ToneParams
from ..configs.processing_config import FilterProcessingConfig
from ..utils.image_utils import calculate_buffer_metrics, logger


class FilterKind(Enum):
    GRAYSCALE = "grayscale"
    NEGATIVE = "negative"
    MEDIAN = "median"
    GAUSSIAN = "gaussian"
    SEPIA = "sepia"


class ModificationKind(Enum):
    ROTATE = "rotate"
    FLIP = "flip"


Handler = Callable[[PixelBuffer], PixelBuffer]


def _ensure_exhaustive(kind_type, handlers: Dict) -> None:
    missing = [kind.name for kind in kind_type if kind not in handlers]
    if missing:
        raise TypeError(f"No {kind_type.__name__} handler for: {', '.join(missing)}")


class FilterDispatcher:
    """
    Routes a FilterKind or ModificationKind to the engine call that implements it.

    Every member of both enums must have a handler; a new member without one
    makes construction fail. With no source buffer (``None``) every call is a
    no-op and returns ``None``; zero-size buffers still raise EmptyInputError.
    """
    
    def __init__(self, config: Optional[FilterProcessingConfig] = None):
        self.config = config or FilterProcessingConfig()
        self.filters = FilterEngine(self.config)
        self.geometry = GeometricEngine(self.config)
        self.tone = ToneAdjuster(self.config)
        
        self._filter_handlers: Dict[FilterKind, Handler] = {
            FilterKind.GRAYSCALE: self.filters.grayscale,
            FilterKind.NEGATIVE: self.filters.negative,
            FilterKind.MEDIAN: lambda buffer: self.filters.median_blur(buffer, self.config.MEDIAN_KERNEL_SIZE),
            FilterKind.GAUSSIAN: lambda buffer: self.filters.gaussian_blur(buffer, self.config.GAUSSIAN_KERNEL_SIZE),
            FilterKind.SEPIA: self.filters.sepia,
        }
        self._modification_handlers: Dict[ModificationKind, Handler] = {
            ModificationKind.ROTATE: lambda buffer: self.geometry.rotate(buffer, self.config.ROTATION_ANGLE),
            ModificationKind.FLIP: lambda buffer: self.geometry.flip(buffer, self.config.FLIP_AXIS),
        }
        _ensure_exhaustive(FilterKind, self._filter_handlers)
        _ensure_exhaustive(ModificationKind, self._modification_handlers)
    
    def apply(self, kind: Union[FilterKind, ModificationKind],
              buffer: Optional[PixelBuffer]) -> Optional[PixelBuffer]:
        if isinstance(kind, FilterKind):
            return self.apply_filter(kind, buffer)
        if isinstance(kind, ModificationKind):
            return self.apply_modification(kind, buffer)
        raise TypeError(f"Expected a FilterKind or ModificationKind, got {kind!r}")
    
    def apply_filter(self, kind: FilterKind, buffer: Optional[PixelBuffer]) -> Optional[PixelBuffer]:
        return self._run(kind, self._filter_handlers[kind], buffer)
    
    def apply_modification(self, kind: ModificationKind, buffer: Optional[PixelBuffer]) -> Optional[PixelBuffer]:
        return self._run(kind, self._modification_handlers[kind], buffer)
    
    def adjust_tone(self, buffer: PixelBuffer, params: ToneParams) -> PixelBuffer:
        return self.tone.apply(buffer, params)
    
    def _run(self, kind: Enum, handler: Handler, buffer: Optional[PixelBuffer]) -> Optional[PixelBuffer]:
        if buffer is None:
            logger.debug(f"{kind.value}: no source image, nothing to do")
            return None
        result = handler(buffer)
        if self.config.LOG_PROCESSING_STEPS:
            logger.debug(f"{kind.value}: {calculate_buffer_metrics(buffer)} -> {calculate_buffer_metrics(result)}")
        return result
