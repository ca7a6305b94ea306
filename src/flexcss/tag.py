"""Identity descriptors: what selectors get to know about the entity they are matched against."""

import logging

from collections.abc import Iterable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

@dataclass(frozen=True, slots=True)
class Identity:
    """The optional id and the class names of an entity, e.g. of a UI node tagged `"#menu.panel.dark"`.

    Neither the id nor any class name may contain white-space; constructing one that does raises `ValueError`.
    """
    id: str | None = None
    classes: frozenset[str] = field(default_factory=frozenset)
    def __post_init__(self):
        if self.id is not None and any(c.isspace() for c in self.id):
            raise ValueError(f"White-space in id {self.id!r}")
        if any(any(c.isspace() for c in name) for name in self.classes):
            raise ValueError(f"White-space in classes {set(self.classes)!r}")
    @classmethod
    def new(cls, id: str | None = None, classes: Iterable[str] = ()) -> 'Identity':
        return cls(id or None, frozenset(classes))
    @classmethod
    def from_string(cls, text: str) -> 'Identity':
        """Parse the `"#id.class1.class2"` notation.

        `#` starts the id and `.` starts a class name, in any order; of several ids, the last one wins. Text before the first `#` or `.` is ignored, with a warning.
        """
        if not text:
            logger.debug("Empty identity string")
            return cls()
        id = None
        classes = []
        marker, start = None, 0
        for index, c in enumerate(text + '.'): # The sentinel ends the last part
            if c not in '#.':
                continue
            part = text[start:index]
            match marker:
                case None if part:
                    logger.warning(f"Text without a `#` or `.` marker in identity string {text!r} is ignored: {part!r}")
                case '#':
                    id = part or None
                case '.' if part:
                    classes.append(part)
            marker, start = c, index + 1
        return cls(id, frozenset(classes))
    @classmethod
    def from_classes(cls, text: str) -> 'Identity':
        """Return the identity with no id and the space-separated class names of `text`, e.g. `"panel dark"`."""
        if not text:
            logger.debug("Empty class string")
        return cls(None, frozenset(text.split()))
    def __str__(self) -> str:
        return ('#' + self.id if self.id else '') + ''.join('.' + name for name in sorted(self.classes))
