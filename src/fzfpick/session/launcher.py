"""Spawn the finder inside a pseudo-terminal and report its selection.

The finder draws its UI on ``/dev/tty``, which for the child is the slave side
of a fresh pty. Everything it draws is copied from the master side to a
display surface (the real terminal by default) and keystrokes are copied
back. The child's stdout is a separate pipe: that is the transcript the
parser reads once the child has exited.

Each session owns one watcher thread that pumps I/O, reaps exactly its own
child pid, parses the transcript and calls ``on_complete`` once.
"""

import errno
import fcntl
import logging
import os
import select
import signal
import termios
import threading
import time
from collections.abc import Callable, Sequence

from fzfpick.constants import DEFAULT_COMMAND_ENV, EXIT_ERROR, EXIT_NO_MATCH
from fzfpick.errors import InvalidDirectory, InvalidEntries, SessionBusy, SpawnError
from fzfpick.models import EMPTY, Empty, SelectionResult, SessionConfig
from fzfpick.session.command import build_argv, entries_source_command, require_executable
from fzfpick.session.parser import parse
from fzfpick.session.terminal import TerminalSurface, _set_winsize

log = logging.getLogger(__name__)

Outcome = SelectionResult | Empty
CompletionCallback = Callable[[Outcome], None]

POLL_INTERVAL_SECONDS = 0.1
DRAIN_TIMEOUT_SECONDS = 0.05


def _feed_entries(fd: int, entries: Sequence[str]) -> None:
    """Write entries to the finder's stdin, one per line, then close it."""
    try:
        with os.fdopen(fd, "wb") as f:
            # fsencode keeps surrogate-escaped names (undecodable bytes) intact.
            f.write(os.fsencode("".join(f"{entry}\n" for entry in entries)))
    except BrokenPipeError:
        log.debug("finder closed stdin before reading all %d entries", len(entries))


class Session:
    """One run of the finder, from spawn to completion dispatch."""

    def __init__(
        self,
        config: SessionConfig,
        pid: int,
        master_fd: int,
        stdout_fd: int,
        surface,
        on_complete: CompletionCallback | None,
        on_finish: Callable[["Session"], None],
    ) -> None:
        self.config = config
        self.pid = pid
        self.transcript = bytearray()
        self.exit_code: int | None = None
        self.result: Outcome | None = None
        self._master_fd = master_fd
        self._stdout_fd = stdout_fd
        self._surface = surface
        self._on_complete = on_complete
        self._on_finish = on_finish
        self._state_lock = threading.Lock()
        self._reaped = False
        self._status: int | None = 0
        self._dispatched = False
        self._done = threading.Event()
        self._thread = threading.Thread(
            target=self._run, daemon=True, name=f"fzfpick-session-{pid}"
        )

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> Outcome | None:
        """Block until the outcome has been dispatched; None if the timeout expires.

        Must not be called from inside ``on_complete``.
        """
        if not self._done.wait(timeout):
            return None
        return self.result

    def cancel(self) -> None:
        """Ask the finder to quit. The session completes with EMPTY."""
        self._signal(signal.SIGTERM)

    def kill(self) -> None:
        self._signal(signal.SIGKILL)

    def _signal(self, signum: int) -> None:
        with self._state_lock:
            if self._reaped:
                return
            try:
                os.killpg(self.pid, signum)
            except ProcessLookupError:
                log.debug("session %d already gone", self.pid)

    def _start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        outcome: Outcome = EMPTY
        try:
            try:
                self._pump()
            except OSError:
                log.exception("finder session %d I/O failed", self.pid)
                self.kill()
            self.exit_code = self._reap()
            outcome = self._outcome(self.exit_code)
        finally:
            try:
                self._teardown()
            finally:
                self._dispatch(outcome)

    def _poll_exit(self) -> bool:
        with self._state_lock:
            if self._reaped:
                return True
            try:
                pid, status = os.waitpid(self.pid, os.WNOHANG)
            except ChildProcessError:
                # Reaped elsewhere (e.g. SIGCHLD ignored): the exit status is lost.
                log.warning("exit status of finder %d is unavailable", self.pid)
                self._reaped = True
                self._status = None
                return True
            if pid == 0:
                return False
            self._reaped = True
            self._status = status
            return True

    def _reap(self) -> int | None:
        # Poll rather than block so cancel() never waits behind waitpid.
        while not self._poll_exit():
            time.sleep(POLL_INTERVAL_SECONDS)
        if self._status is None:
            return None
        return os.waitstatus_to_exitcode(self._status)

    def _pump(self) -> None:
        """Shuttle bytes until the finder's stdout closes or the child exits."""
        input_fd = self._surface.input_fd
        size = self._surface.size()
        readers = [self._master_fd, self._stdout_fd]
        if input_fd is not None:
            readers.append(input_fd)

        while self._stdout_fd in readers:
            rfds, _, _ = select.select(readers, [], [], POLL_INTERVAL_SECONDS)

            # Surface -> PTY master (user keystrokes)
            if input_fd is not None and input_fd in rfds:
                data = os.read(input_fd, 1024)
                if data:
                    os.write(self._master_fd, data)
                else:
                    readers.remove(input_fd)

            # PTY master -> surface (finder UI)
            if self._master_fd in rfds and not self._copy_display():
                readers.remove(self._master_fd)

            # Finder stdout -> transcript
            if self._stdout_fd in rfds:
                data = os.read(self._stdout_fd, 4096)
                if data:
                    self.transcript.extend(data)
                else:
                    readers.remove(self._stdout_fd)

            new_size = self._surface.size()
            if new_size != size:
                size = new_size
                self._resize(*size)

            if self._stdout_fd in readers and self._poll_exit():
                self._drain_stdout()
                break

        if self._master_fd in readers:
            self._drain_display()

    def _copy_display(self) -> bool:
        try:
            data = os.read(self._master_fd, 4096)
        except OSError as e:
            # Linux reports EIO on the master once every slave fd is closed.
            if e.errno != errno.EIO:
                raise
            return False
        if not data:
            return False
        self._surface.write(data)
        return True

    def _drain_display(self) -> None:
        while select.select([self._master_fd], [], [], DRAIN_TIMEOUT_SECONDS)[0]:
            if not self._copy_display():
                return

    def _drain_stdout(self) -> None:
        while select.select([self._stdout_fd], [], [], DRAIN_TIMEOUT_SECONDS)[0]:
            data = os.read(self._stdout_fd, 4096)
            if not data:
                return
            self.transcript.extend(data)

    def _resize(self, rows: int, cols: int) -> None:
        try:
            _set_winsize(self._master_fd, rows, cols)
            os.killpg(self.pid, signal.SIGWINCH)
        except OSError:
            pass

    def _outcome(self, exit_code: int | None) -> Outcome:
        if exit_code is None:
            return EMPTY
        if exit_code in (0, EXIT_NO_MATCH):
            return parse(
                bytes(self.transcript),
                working_directory=self.config.working_directory,
                with_query=self.config.print_query,
            )
        if exit_code == EXIT_ERROR:
            log.warning("finder exited with an error (status %d)", exit_code)
        else:
            log.debug("finder cancelled (status %d)", exit_code)
        return EMPTY

    def _teardown(self) -> None:
        for fd in (self._master_fd, self._stdout_fd):
            try:
                os.close(fd)
            except OSError:
                pass
        try:
            self._surface.close()
        except (OSError, termios.error) as e:
            log.warning("could not restore terminal after session %d: %s", self.pid, e)
        finally:
            self._on_finish(self)

    def _dispatch(self, outcome: Outcome) -> None:
        with self._state_lock:
            if self._dispatched:
                return
            self._dispatched = True
        self.result = outcome
        try:
            if self._on_complete is not None:
                self._on_complete(outcome)
        except Exception:
            log.exception("completion callback for session %d failed", self.pid)
        finally:
            self._done.set()


class SessionLauncher:
    """Starts finder sessions, one at a time, on a display surface."""

    def __init__(self, surface=None) -> None:
        self._surface = surface
        self._lock = threading.Lock()
        self._active: Session | None = None

    @property
    def active(self) -> Session | None:
        return self._active

    def start(
        self,
        config: SessionConfig,
        entries: Sequence[str] | None = None,
        on_complete: CompletionCallback | None = None,
    ) -> Session:
        """Spawn the finder and return immediately; on_complete fires once it exits."""
        with self._lock:
            if self._active is not None:
                raise SessionBusy(f"A finder session is already running (pid {self._active.pid})")
            surface = self._surface if self._surface is not None else TerminalSurface()
            session = self._spawn(config, entries, on_complete, surface)
            self._active = session
        session._start()
        return session

    def _release(self, session: Session) -> None:
        with self._lock:
            if self._active is session:
                self._active = None

    def _spawn(
        self,
        config: SessionConfig,
        entries: Sequence[str] | None,
        on_complete: CompletionCallback | None,
        surface,
    ) -> Session:
        if not os.path.isdir(config.working_directory):
            raise InvalidDirectory(f"Directory does not exist: {config.working_directory}")

        env = dict(os.environ)
        pipe_entries = False
        if entries is not None:
            if config.source_command:
                raise InvalidEntries("entries and source_command cannot be used together")
            if config.input_mode == "env":
                env[DEFAULT_COMMAND_ENV] = entries_source_command(entries)
            else:
                # Validates entries the same way the env variant does.
                entries_source_command(entries)
                pipe_entries = True

        executable = require_executable(config.executable)
        rows, cols = surface.size()
        argv = build_argv(config, executable, rows)

        try:
            surface.open()
        except (OSError, termios.error) as e:
            raise SpawnError(f"Cannot prepare the terminal: {e}") from e
        try:
            return self._fork(
                config, argv, env, entries if pipe_entries else None, on_complete, surface, rows, cols
            )
        except BaseException:
            surface.close()
            raise

    def _fork(
        self,
        config: SessionConfig,
        argv: list[str],
        env: dict[str, str],
        entries: Sequence[str] | None,
        on_complete: CompletionCallback | None,
        surface,
        rows: int,
        cols: int,
    ) -> Session:
        pipe_entries = entries is not None

        master_fd, slave_fd = os.openpty()
        _set_winsize(slave_fd, rows, cols)
        out_r, out_w = os.pipe()
        in_r, in_w = os.pipe() if pipe_entries else (None, None)
        err_r, err_w = os.pipe()

        pid = os.fork()
        if pid == 0:
            # Child process: exec the finder attached to the slave PTY.
            try:
                os.close(master_fd)
                os.close(out_r)
                os.close(err_r)
                os.setsid()
                fcntl.ioctl(slave_fd, termios.TIOCSCTTY, 0)
                os.dup2(in_r if in_r is not None else slave_fd, 0)
                os.dup2(out_w, 1)
                os.dup2(slave_fd, 2)
                os.chdir(config.working_directory)
                os.execvpe(argv[0], argv, env)
            except Exception as e:
                os.write(err_w, f"{getattr(e, 'errno', 0)}:{e}".encode())
            finally:
                os._exit(127)

        # Parent process.
        for fd in (slave_fd, out_w, err_w, in_r):
            if fd is not None:
                os.close(fd)

        # err_w is close-on-exec: EOF here means exec succeeded.
        with os.fdopen(err_r, "rb") as f:
            failure = f.read()
        if failure:
            os.waitpid(pid, 0)
            for fd in (master_fd, out_r, in_w):
                if fd is not None:
                    os.close(fd)
            _, _, message = failure.decode(errors="replace").partition(":")
            raise SpawnError(f"Cannot execute {argv[0]}: {message}")

        log.debug("spawned finder pid=%d cwd=%s", pid, config.working_directory)
        session = Session(
            config=config,
            pid=pid,
            master_fd=master_fd,
            stdout_fd=out_r,
            surface=surface,
            on_complete=on_complete,
            on_finish=self._release,
        )
        if pipe_entries:
            threading.Thread(
                target=_feed_entries,
                args=(in_w, list(entries)),
                daemon=True,
                name=f"fzfpick-feed-{pid}",
            ).start()
        return session
