import socket
import threading

import pytest
from werkzeug.serving import make_server

import httpclient
from test_server.local_jsonplaceholder_server import app


class RawServer:
    """Raw-socket server that answers every request with canned bytes"""

    def __init__(self):
        self.response = b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n\r\n{}"
        self.received = []
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.sock.bind(('127.0.0.1', 0))
        self.sock.listen(5)
        self.sock.settimeout(0.1)
        self.port = self.sock.getsockname()[1]
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self):
        self._thread.start()

    def stop(self):
        self._stop.set()
        self._thread.join()
        self.sock.close()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self.sock.accept()
            except socket.timeout:
                continue
            with conn:
                self._handle(conn)

    def _handle(self, conn):
        conn.settimeout(1.0)
        data = b''
        while b'\r\n\r\n' not in data:
            chunk = conn.recv(4096)
            if not chunk:
                # reachability probe, nothing to answer
                return
            data += chunk

        # drain the unannounced body so closing doesn't reset the connection
        conn.settimeout(0.2)
        try:
            while True:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                data += chunk
        except socket.timeout:
            pass

        self.received.append(data.decode())
        conn.sendall(self.response)


@pytest.fixture
def raw_server(monkeypatch):
    server = RawServer()
    server.start()
    monkeypatch.setattr(httpclient, 'HTTP_PORT', server.port)
    yield server
    server.stop()


@pytest.fixture
def mock_api(monkeypatch):
    srv = make_server('127.0.0.1', 0, app, threaded=True)
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    monkeypatch.setattr(httpclient, 'HTTP_PORT', srv.server_port)
    yield srv
    srv.shutdown()
    thread.join()
