import asyncio
import re
import sys
import threading
from typing import Optional
import websockets
from constants import HOST, PORT, MAX_PORT, ROOM_ID_LENGTH, LOG_LEVEL, LOG_FILE
from schemas.messages import (
    ChatMessage,
    ChatRequest,
    CreatedMessage,
    CreateRequest,
    JoinRequest,
    SystemMessage,
    decode_outbound,
    encode,
)
from logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def prompt(question: str) -> str:
    return input(question).strip()


def parse_mode(answer: str) -> str:
    return "join" if answer.strip().lower().startswith("j") else "create"


def parse_port(answer: str, default: int) -> int:
    try:
        port = int(answer.strip())
    except ValueError:
        return default
    return port if 0 < port <= MAX_PORT else default


def normalize_room_id(answer: str) -> Optional[str]:
    """Strip non-digits and keep the first four; None if fewer than four remain."""
    room_id = re.sub(r"\D", "", answer)[:ROOM_ID_LENGTH]
    return room_id if len(room_id) == ROOM_ID_LENGTH else None


def render(frame: str) -> Optional[str]:
    """Terminal line for a server frame, or None for frames that should be ignored."""
    message = decode_outbound(frame)
    if isinstance(message, CreatedMessage):
        return f"Room created. Share this 4-digit ID with your friend: {message.room_id}"
    if isinstance(message, SystemMessage):
        return f"[system] {message.text}"
    if isinstance(message, ChatMessage):
        return f"({message.sender}): {message.text}"
    return None


def _start_stdin_reader(loop: asyncio.AbstractEventLoop, lines: asyncio.Queue):
    # input() blocks, so stdin is read on a daemon thread that never holds up exit
    def pump():
        try:
            for line in sys.stdin:
                loop.call_soon_threadsafe(lines.put_nowait, line)
            loop.call_soon_threadsafe(lines.put_nowait, None)
        except RuntimeError:
            # Loop already closed
            return

    threading.Thread(target=pump, name="stdin-reader", daemon=True).start()


async def receive_loop(ws):
    async for frame in ws:
        line = render(frame)
        if line is not None:
            print(line)


async def input_loop(ws):
    lines: asyncio.Queue = asyncio.Queue()
    _start_stdin_reader(asyncio.get_running_loop(), lines)
    while True:
        line = await lines.get()
        if line is None:
            return
        text = line.strip()
        if text:
            try:
                await ws.send(encode(ChatRequest(text=text)))
            except websockets.exceptions.ConnectionClosed:
                return


async def run_client(url: str, room_id: Optional[str] = None):
    """Connect, send create (or join when room_id is given), then relay stdin as chat."""
    async with websockets.connect(url) as ws:
        first = JoinRequest(room_id=room_id) if room_id else CreateRequest()
        await ws.send(encode(first))

        # Only the server closing the connection ends the client; stdin EOF just stops sending
        sender = asyncio.create_task(input_loop(ws))
        try:
            await receive_loop(ws)
        except websockets.exceptions.ConnectionClosed as e:
            logger.debug(f"Connection closed: {e}")
        finally:
            if sender.done() and not sender.cancelled():
                sender.result()
            sender.cancel()


def main():
    setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
    mode = parse_mode(prompt("Choose mode: [c]reate or [j]oin? "))

    host, port, room_id = HOST, PORT, None
    if mode == "join":
        host = prompt("Enter server IP/host (e.g., 192.168.1.10): ") or host
        port = parse_port(prompt(f"Enter server port (default {port}): "), port)
        room_id = normalize_room_id(prompt("Enter 4-digit room ID: "))
        if room_id is None:
            print("Invalid room ID.")
            sys.exit(1)

    url = f"ws://{host}:{port}"
    logger.debug(f"Connecting to {url} in {mode} mode")
    try:
        asyncio.run(run_client(url, room_id))
    except (OSError, websockets.exceptions.WebSocketException) as e:
        print(f"WebSocket error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        pass
    print("Disconnected.")


if __name__ == "__main__":
    main()
