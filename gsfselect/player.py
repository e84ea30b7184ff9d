"""Running the external playgsf player as a child process and signalling it."""

from __future__ import annotations

import os
import signal
import subprocess
from pathlib import Path
from typing import Optional, Union

PLAYER_EXECUTABLE = "/mnt/SDCARD/Apps/PlayGSF/playgsf"


class PlayerProcess:
    """One playgsf child at a time, with pause, resume and bass toggling."""

    def __init__(self, executable: Union[str, Path] = PLAYER_EXECUTABLE) -> None:
        self.executable = str(executable)
        self.process: Optional[subprocess.Popen] = None
        self.paused = False

    @property
    def running(self) -> bool:
        """Whether a child has been started and not yet reaped."""
        return self.process is not None

    def _signal(self, signum: int) -> bool:
        if self.process is None:
            return False
        try:
            os.kill(self.process.pid, signum)
        except ProcessLookupError:
            return False
        return True

    def launch(self, path: Union[str, Path], bass: bool = False) -> bool:
        """Start playing ``path``; ``False`` if a child is running or start fails."""
        if self.process is not None:
            return False
        args = ["playgsf", "-s", "-q"]
        if bass:
            args.append("-b")
        args.append(str(path))
        try:
            self.process = subprocess.Popen(args, executable=self.executable)
        except OSError:
            return False
        self.paused = False
        return True

    def stop(self) -> None:
        """Ask the child to terminate; it is reaped by :meth:`poll`."""
        if self._signal(signal.SIGTERM) and self.paused:
            self._signal(signal.SIGCONT)
        self.paused = False

    def pause(self) -> bool:
        """Suspend the child; ``True`` if it was running and is now paused."""
        if self.paused or not self._signal(signal.SIGSTOP):
            return False
        self.paused = True
        return True

    def resume(self) -> bool:
        """Continue a paused child; ``True`` if it was resumed."""
        if not self.paused or not self._signal(signal.SIGCONT):
            return False
        self.paused = False
        return True

    def toggle_bass(self) -> bool:
        """Ask the child to switch its bass boost; ``True`` if signalled."""
        return self._signal(signal.SIGUSR2)

    def poll(self) -> bool:
        """Reap a finished child; ``True`` once when it has exited.

        A paused child is not checked.
        """
        if self.process is None or self.paused:
            return False
        if self.process.poll() is None:
            return False
        self.process = None
        return True