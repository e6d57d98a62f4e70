"""Terminal interface - stdin/stdout with ANSI colours."""

import asyncio
import contextlib
import sys
import threading
from typing import TextIO

from learning_agent.interfaces.base import Interface, MessageKind

_COLOURS = {
    MessageKind.PROMPT: "\033[34m",  # blue
    MessageKind.STATUS: "\033[33m",  # yellow
    MessageKind.ANSWER: "\033[32m",  # green
    MessageKind.ERROR: "\033[31m",  # red
}
_RESET = "\033[0m"


class TerminalInterface(Interface):
    """Line-oriented terminal I/O.

    input() blocks, so each read runs on a daemon thread and the event loop
    awaits its result; a pending read never keeps the process alive after
    Ctrl+C. EOFError on closed stdin propagates to the caller.
    """

    def __init__(self, output: TextIO | None = None, colour: bool | None = None):
        self._output = output or sys.stdout
        self._colour = self._output.isatty() if colour is None else colour

    async def ask(self, prompt: str) -> str:
        self.show(f"\n{prompt}", MessageKind.PROMPT)
        return await self._readline()

    def show(self, text: str, kind: MessageKind = MessageKind.STATUS) -> None:
        if self._colour:
            text = f"{_COLOURS[kind]}{text}{_RESET}"
        print(text, file=self._output, flush=True)

    async def _readline(self) -> str:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def deliver(setter, value) -> None:
            if not future.done():
                setter(value)

        def reader() -> None:
            try:
                line = input("> ")
            except Exception as e:
                callback, value = future.set_exception, e
            else:
                callback, value = future.set_result, line
            # Loop may already be closed on shutdown
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(deliver, callback, value)

        threading.Thread(target=reader, name="terminal-input", daemon=True).start()
        return await future
