"""
Output destination: standard output or a pager process

A custom pager command line from $PAGER may carry its own arguments, so it
is started through the shell ($SHELL, /bin/sh by default). Without $PAGER,
less is started with options that make it exit at once for short output and
pass color escapes through.
"""

import subprocess
import sys
from typing import List, Optional, TextIO

from ..config import appsettings
from .log import LOG

LESS_ARGS = ("--quit-if-one-screen", "--RAW-CONTROL-CHARS", "--quit-on-intr", "--no-init")


def pagerCommand_get() -> List[str]:
    """
    Command line used to start the pager

    Returns:
        argv list for subprocess

    Example:
        With PAGER="less -S" and SHELL=/bin/bash:
        ['/bin/bash', '-c', 'less -S']
    """
    if appsettings.pager:
        return [appsettings.shell, "-c", appsettings.pager]
    return ["less", *LESS_ARGS]


class Output:
    """
    Text stream results are written to

    Use as a context manager; closing waits for the pager to exit.

    Attributes:
        stream: Writable text stream
        process: Pager process, None when writing to stdout
    """

    def __init__(self, stream: TextIO, process: Optional[subprocess.Popen] = None) -> None:
        self.stream = stream
        self.process = process

    @classmethod
    def open(cls, use_pager: bool) -> "Output":
        """
        Open the output

        Args:
            use_pager: Start a pager and write into its standard input

        Raises:
            OSError: If the pager cannot be started
        """
        if not use_pager:
            return cls(sys.stdout)

        command = pagerCommand_get()
        LOG(f"Starting pager: {' '.join(command)}", level=2)
        process = subprocess.Popen(command, stdin=subprocess.PIPE, text=True, encoding="utf-8")
        return cls(process.stdin, process)

    def close(self) -> None:
        """Flush stdout, or close the pager's input and wait for it"""
        if self.process is None:
            self.stream.flush()
            return
        try:
            self.stream.close()
        finally:
            self.process.wait()

    def __enter__(self) -> "Output":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
