"""Shell executor: runs a command while teeing its output."""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
import threading
from pathlib import Path
from typing import IO, TextIO

from aocli.executors.base import ProcessResult, ProcessSpawnError

logger = logging.getLogger(__name__)


def _pump(
    source: IO[str],
    sink: TextIO | None,
    buffer: list[str],
) -> None:
    """Copy lines from ``source`` to ``sink`` while keeping them in ``buffer``."""
    for line in iter(source.readline, ""):
        buffer.append(line)
        if sink is not None:
            sink.write(line)
            sink.flush()
    source.close()


class ShellExecutor:
    """Executes rendered commands in a working directory.

    Output is echoed to the terminal in real time (unless ``echo`` is off)
    and buffered for the caller at the same time. A non-zero exit code is
    reported in the result, never raised.
    """

    name = "shell"

    def __init__(self, use_shell: bool = False) -> None:
        self._use_shell = use_shell

    def _argv(self, command_line: str) -> list[str] | str:
        if self._use_shell:
            if not command_line.strip():
                raise ProcessSpawnError(command_line, "empty command")
            return command_line
        try:
            argv = shlex.split(command_line)
        except ValueError as e:
            raise ProcessSpawnError(command_line, str(e)) from None
        if not argv:
            raise ProcessSpawnError(command_line, "empty command")
        return argv

    def run(
        self,
        command_line: str,
        cwd: Path,
        echo: bool = True,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> ProcessResult:
        """Run ``command_line`` in ``cwd`` and wait for it to finish.

        Args:
            command_line: Rendered command.
            cwd: Working directory for the child.
            echo: Forward child output to ``stdout``/``stderr`` as it arrives.
            stdout: Stream for echoed stdout (defaults to sys.stdout).
            stderr: Stream for echoed stderr (defaults to sys.stderr).

        Raises:
            ProcessSpawnError: If the command is empty, unparsable, its
                program is missing, or ``cwd`` does not exist.
        """
        args = self._argv(command_line)
        if not cwd.is_dir():
            raise ProcessSpawnError(command_line, f"working directory not found: {cwd}")

        logger.debug("Running %r in %s", command_line, cwd)
        try:
            proc = subprocess.Popen(
                args,
                cwd=cwd,
                shell=self._use_shell,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            raise ProcessSpawnError(command_line, e.strerror or str(e)) from None

        out_sink = (stdout or sys.stdout) if echo else None
        err_sink = (stderr or sys.stderr) if echo else None
        out_lines: list[str] = []
        err_lines: list[str] = []
        readers = [
            threading.Thread(
                target=_pump, args=(proc.stdout, out_sink, out_lines), daemon=True
            ),
            threading.Thread(
                target=_pump, args=(proc.stderr, err_sink, err_lines), daemon=True
            ),
        ]
        for reader in readers:
            reader.start()
        exit_code = proc.wait()
        for reader in readers:
            reader.join()

        logger.debug("%r exited with %d", command_line, exit_code)
        return ProcessResult(
            command=command_line,
            stdout="".join(out_lines),
            stderr="".join(err_lines),
            exit_code=exit_code,
        )
