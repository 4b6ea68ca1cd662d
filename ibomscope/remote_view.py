"""Stream the camera view to remote browsers over a WebSocket connection."""

from __future__ import annotations

import asyncio
import contextlib
import io
import json
import logging
from typing import Optional

import websockets
from PIL import Image

from .signals import Signal

log = logging.getLogger(__name__)

_MAX_STREAM_WIDTH = 1280

_VIEWER_HTML = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>PCB Inspector - Remote View</title>
  <style>
    html, body { margin: 0; height: 100%; background: #1e1e2e; }
    body { display: flex; align-items: center; justify-content: center; }
    canvas { max-width: 100%; max-height: 100%; }
    #status { position: fixed; top: 8px; left: 8px; color: #a6adc8;
              font: 12px monospace; }
  </style>
</head>
<body>
  <div id="status">Connecting...</div>
  <canvas id="view"></canvas>
  <script>
    const view = document.getElementById('view');
    const ctx = view.getContext('2d');
    const statusLine = document.getElementById('status');
    const socket = new WebSocket('ws://' + location.host);
    socket.binaryType = 'arraybuffer';
    let frameCount = 0;
    setInterval(function () {
      statusLine.textContent = frameCount + ' FPS';
      frameCount = 0;
    }, 1000);
    socket.onmessage = function (event) {
      if (typeof event.data === 'string') { return; }
      const url = URL.createObjectURL(new Blob([event.data], { type: 'image/jpeg' }));
      const picture = new Image();
      picture.onload = function () {
        view.width = picture.width;
        view.height = picture.height;
        ctx.drawImage(picture, 0, 0);
        URL.revokeObjectURL(url);
        frameCount += 1;
      };
      picture.src = url;
    };
    socket.onopen = function () { statusLine.textContent = 'Connected'; };
    socket.onclose = function () { statusLine.textContent = 'Disconnected'; };
  </script>
</body>
</html>"""


def viewer_html() -> str:
    """The HTML page that displays the JPEG frame stream in a browser."""
    return _VIEWER_HTML


class RemoteView:
    """A WebSocket server that pushes JPEG frames and status to its clients.

    Binary messages carry frames, throttled to :attr:`max_fps`; a client
    may send ``GET_HTML`` or ``GET_STATUS`` as text to get the viewer page
    or a JSON status object back.
    """

    def __init__(self) -> None:
        self.host = "0.0.0.0"
        self._server = None
        self._clients: list = []
        self._frame_task: Optional[asyncio.Task] = None
        self._latest_frame: Optional[Image.Image] = None
        self._frame_dirty = False
        self._port = 8080
        self._jpeg_quality = 70
        self._max_fps = 15
        self.client_connected = Signal()
        self.client_disconnected = Signal()
        self.server_started = Signal()
        self.server_stopped = Signal()
        self.error = Signal()

    @property
    def port(self) -> int:
        return self._port

    @property
    def jpeg_quality(self) -> int:
        return self._jpeg_quality

    @property
    def max_fps(self) -> int:
        return self._max_fps

    async def start(self, port: int = 8080) -> bool:
        """Start listening on ``port`` (0 picks a free one); False on failure."""
        if self._server is not None:
            log.warning("RemoteView: server already running on port %d", self._port)
            return False

        self._port = port
        try:
            server = await websockets.serve(self._handle_client, self.host, port)
        except OSError as exc:
            self.error.emit(f"Failed to start WebSocket server on port {port}: {exc}")
            log.error("RemoteView: failed to start on port %d", port)
            return False

        self._server = server
        sockets = list(server.sockets or [])
        if sockets:
            self._port = sockets[0].getsockname()[1]
        self._frame_task = asyncio.create_task(self._frame_loop())
        self.server_started.emit(self._port)
        log.info("RemoteView: WebSocket server started on port %d", self._port)
        return True

    async def stop(self) -> None:
        """Stop streaming, disconnect every client and close the server."""
        if self._frame_task is not None:
            self._frame_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._frame_task
            self._frame_task = None

        clients, self._clients = self._clients, []
        for client in clients:
            with contextlib.suppress(Exception):
                await client.close()

        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None

        self.server_stopped.emit()
        log.info("RemoteView: server stopped")

    def push_frame(self, image: Optional[Image.Image]) -> None:
        """Make ``image`` the frame sent to clients on the next tick."""
        self._latest_frame = image
        self._frame_dirty = True

    async def push_status(self, json_status: str) -> None:
        """Send a JSON status text to every connected client."""
        for client in list(self._clients):
            with contextlib.suppress(websockets.ConnectionClosed):
                await client.send(json_status)

    def is_running(self) -> bool:
        return self._server is not None

    def client_count(self) -> int:
        return len(self._clients)

    def set_jpeg_quality(self, quality: int) -> None:
        self._jpeg_quality = max(1, min(100, int(quality)))

    def set_max_fps(self, fps: int) -> None:
        self._max_fps = max(1, min(60, int(fps)))

    def compress_frame(self, image: Image.Image) -> bytes:
        """Encode ``image`` as JPEG, scaled down to at most 1280 pixels wide."""
        frame = image
        if frame.mode not in ("RGB", "L"):
            frame = frame.convert("RGB")
        if frame.width > _MAX_STREAM_WIDTH:
            height = max(1, round(frame.height * _MAX_STREAM_WIDTH / frame.width))
            frame = frame.resize((_MAX_STREAM_WIDTH, height), Image.LANCZOS)
        out = io.BytesIO()
        frame.save(out, "JPEG", quality=self._jpeg_quality)
        return out.getvalue()

    def handle_text_message(self, message: str) -> Optional[str]:
        """The reply to a client's text request, or None if it has none."""
        if message == "GET_HTML":
            return viewer_html()
        if message == "GET_STATUS":
            status = {
                "clients": self.client_count(),
                "streaming": self._latest_frame is not None,
            }
            return json.dumps(status, separators=(",", ":"))
        return None

    async def _handle_client(self, ws, path=None) -> None:
        self._clients.append(ws)
        address = str(ws.remote_address[0]) if ws.remote_address else ""
        self.client_connected.emit(address)
        log.info("RemoteView: client connected from %s", address)
        try:
            async for message in ws:
                if isinstance(message, str):
                    reply = self.handle_text_message(message)
                    if reply is not None:
                        await ws.send(reply)
        except websockets.ConnectionClosed:
            pass
        finally:
            if ws in self._clients:
                self._clients.remove(ws)
                self.client_disconnected.emit(address)
                log.info("RemoteView: client disconnected: %s", address)

    async def _frame_loop(self) -> None:
        while True:
            await asyncio.sleep(1.0 / self._max_fps)
            await self._broadcast_frame()

    async def _broadcast_frame(self) -> None:
        if not self._frame_dirty or self._latest_frame is None or not self._clients:
            return
        data = self.compress_frame(self._latest_frame)
        self._frame_dirty = False
        for client in list(self._clients):
            with contextlib.suppress(websockets.ConnectionClosed):
                await client.send(data)