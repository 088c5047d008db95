"""Display surfaces that a finder session renders onto."""

import fcntl
import os
import shutil
import struct
import termios
import tty

FALLBACK_SIZE = (24, 80)


def _winsize(fd: int) -> tuple[int, int, int, int]:
    """Return (rows, cols, xpixel, ypixel) for the given tty fd."""
    return struct.unpack("HHHH", fcntl.ioctl(fd, termios.TIOCGWINSZ, b"\x00" * 8))


def _set_winsize(fd: int, rows: int, cols: int, xp: int = 0, yp: int = 0) -> None:
    fcntl.ioctl(fd, termios.TIOCSWINSZ, struct.pack("HHHH", rows, cols, xp, yp))


class TerminalSurface:
    """The controlling terminal: keystrokes in from stdin, rendering out to stdout.

    While a session is open the terminal is in raw mode so every key reaches the
    finder untouched; ``close`` restores the saved attributes.
    """

    def __init__(self, stdin_fd: int = 0, stdout_fd: int = 1) -> None:
        self.input_fd: int | None = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_attrs: list | None = None

    def size(self) -> tuple[int, int]:
        """Return (rows, cols) of the terminal."""
        try:
            rows, cols, _, _ = _winsize(self.stdout_fd)
        except OSError:
            cols, rows = shutil.get_terminal_size(fallback=FALLBACK_SIZE[::-1])
        if rows <= 0 or cols <= 0:
            return FALLBACK_SIZE
        return rows, cols

    def open(self) -> None:
        if self.input_fd is None or not os.isatty(self.input_fd):
            self.input_fd = None
            return
        self._saved_attrs = termios.tcgetattr(self.input_fd)
        tty.setraw(self.input_fd)

    def close(self) -> None:
        if self._saved_attrs is not None and self.input_fd is not None:
            termios.tcsetattr(self.input_fd, termios.TCSAFLUSH, self._saved_attrs)
            self._saved_attrs = None

    def write(self, data: bytes) -> None:
        os.write(self.stdout_fd, data)


class HeadlessSurface:
    """A surface with no keyboard that keeps everything the finder draws.

    Used when there is no terminal to attach to, and in tests.
    """

    def __init__(self, rows: int = FALLBACK_SIZE[0], cols: int = FALLBACK_SIZE[1]) -> None:
        self.input_fd: int | None = None
        self.output = bytearray()
        self._rows = rows
        self._cols = cols

    def size(self) -> tuple[int, int]:
        return self._rows, self._cols

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def write(self, data: bytes) -> None:
        self.output.extend(data)
