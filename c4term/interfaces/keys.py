"""
keys.py - Turn lines typed on stdin into KeyEvents for human players

A line of movement characters moves the cursor ('a', 'h' or '<' for left,
'd', 'l' or '>' for right; other characters are ignored). An empty line
confirms the highlighted column. Once the stream ends, get() raises
EOFError.
"""

import asyncio
import sys
import threading
from typing import List, Optional, TextIO

from c4term.debug import debug
from c4term.players.human import KeyEvent

KEYMAP = {
    'a': KeyEvent.MOVE_LEFT,
    'h': KeyEvent.MOVE_LEFT,
    '<': KeyEvent.MOVE_LEFT,
    'd': KeyEvent.MOVE_RIGHT,
    'l': KeyEvent.MOVE_RIGHT,
    '>': KeyEvent.MOVE_RIGHT,
}

# Posted by the reader thread once the stream is exhausted
_END_OF_INPUT = object()


def translate(line: str) -> List[KeyEvent]:
    """Map one typed line to the KeyEvents it stands for."""
    text = line.strip().lower()
    if not text:
        return [KeyEvent.CONFIRM]
    return [KEYMAP[char] for char in text if char in KEYMAP]


class StdinKeySource:
    """
    Reads a text stream on a daemon thread and queues KeyEvents on the loop.

    The daemon thread keeps a blocked readline() from holding up process exit.
    """

    def __init__(self, stream: TextIO = None):
        self.stream = stream or sys.stdin
        self.queue: asyncio.Queue = asyncio.Queue()
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def start(self) -> None:
        """Start reading; must be called from inside the running event loop."""
        self._loop = asyncio.get_running_loop()
        self._thread = threading.Thread(target=self._read, name="stdin-keys", daemon=True)
        self._thread.start()

    def _read(self) -> None:
        for line in iter(self.stream.readline, ''):
            for event in translate(line):
                self._loop.call_soon_threadsafe(self.queue.put_nowait, event)
        debug.debug("Key input stream closed", "cli")
        if not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self.queue.put_nowait, _END_OF_INPUT)

    async def get(self) -> KeyEvent:
        """
        Wait for the next KeyEvent.

        Raises:
            EOFError: Once the stream has ended; repeated calls raise again
        """
        event = await self.queue.get()
        if event is _END_OF_INPUT:
            self.queue.put_nowait(_END_OF_INPUT)
            raise EOFError("Key input closed")
        return event
