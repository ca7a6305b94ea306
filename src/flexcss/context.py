"""The measurement basis that relative lengths (`em`, `rem`, `vw`, etc.) are resolved against."""

from dataclasses import dataclass

DEFAULT_FONT_SIZE = 12.0 # Pixels; the font size a text node gets when nothing says otherwise

@dataclass(frozen=True, slots=True)
class Context:
    """Values that resolving a declaration into pixels may depend on.

    Supplied by the caller for every resolution; nothing here is looked up from a global source. The default is the platform default font size for both the element and the root, horizontal text, and a zero-sized viewport.
    """
    font_size: float = DEFAULT_FONT_SIZE
    root_font_size: float = DEFAULT_FONT_SIZE
    vertical_text: bool = False
    viewport_size: tuple[float, float] = (0.0, 0.0) # Width and height, in pixels
