"""Exception hierarchy for the conversion pipeline."""


class MoonjifyError(Exception):
    """Base class for all errors raised by moonjify."""


class ImageDecodeError(MoonjifyError):
    """The input bytes could not be decoded as an image."""


class ContainerError(MoonjifyError):
    """The animation container is malformed or unsupported."""


class PaletteError(MoonjifyError):
    """A palette is invalid or could not be found in a registry."""


class CurveError(MoonjifyError):
    """A curve edit would break the curve's invariants."""


class RenderSurfaceUnavailable(MoonjifyError):
    """No font is available to rasterize symbols."""
