"""SGR mouse escape-sequence encoding.

Pointer events are delivered to panes as printable escape sequences of the
form ``ESC [ < button ; column ; row M`` (press) or ``... m`` (release).
Common button codes: 0=left, 1=middle, 2=right, 32+ motion, 64/65 wheel.
"""

from dataclasses import dataclass

SGR_PREFIX = "\x1b[<"


def encode_sgr_mouse(button: int, column: int, row: int, release: bool = False) -> str:
    """Encode a mouse event as an SGR escape sequence.

    Values are emitted as given; range checking is left to the caller.
    """
    final = "m" if release else "M"
    return f"{SGR_PREFIX}{button};{column};{row}{final}"


@dataclass(frozen=True)
class MouseEvent:
    """A single pointer event in 1-based cell coordinates."""

    button: int
    column: int
    row: int
    release: bool = False

    def encode(self) -> str:
        """Return the SGR escape sequence for this event."""
        return encode_sgr_mouse(self.button, self.column, self.row, self.release)
