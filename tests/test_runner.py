"""Tests for snippetbox.server.runner — binding, start failures, live serving."""

import json
import logging
import os
import signal
import socket
import subprocess
import sys
from pathlib import Path

import httpx
import pytest

from snippetbox.config import Config
from snippetbox.server.handler import Mux
from snippetbox.server.runner import listen, serve

ROOT = Path(__file__).resolve().parents[1]


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestListen:
    def test_binds_host_and_port(self) -> None:
        port = _free_port()
        sock = listen("127.0.0.1", port)
        try:
            assert sock.getsockname()[:2] == ("127.0.0.1", port)
        finally:
            sock.close()

    def test_empty_host_binds_all_interfaces(self) -> None:
        port = _free_port()
        sock = listen("", port)
        try:
            assert sock.getsockname()[1] == port
        finally:
            sock.close()

    def test_port_in_use(self) -> None:
        with socket.create_server(("127.0.0.1", 0)) as holder:
            port = holder.getsockname()[1]
            with pytest.raises(OSError):
                listen("127.0.0.1", port)


class TestServeFailures:
    def _assert_single_error(self, log_records) -> dict:
        records = log_records()
        assert len(records) == 1
        assert records[0]["level"] == "ERROR"
        return records[0]

    def test_port_zero_exits_one(self, mux: Mux, logger: logging.Logger, log_records) -> None:
        with pytest.raises(SystemExit) as exc_info:
            serve(Config(addr=":0"), mux, logger)
        assert exc_info.value.code == 1
        self._assert_single_error(log_records)

    def test_address_in_use_exits_one(
        self, mux: Mux, logger: logging.Logger, log_records
    ) -> None:
        with socket.create_server(("127.0.0.1", 0)) as holder:
            port = holder.getsockname()[1]
            with pytest.raises(SystemExit) as exc_info:
                serve(Config(addr=f"127.0.0.1:{port}"), mux, logger)
        assert exc_info.value.code == 1
        record = self._assert_single_error(log_records)
        assert record["msg"]

    def test_malformed_address_exits_one(
        self, mux: Mux, logger: logging.Logger, log_records
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            serve(Config(addr="localhost"), mux, logger)
        assert exc_info.value.code == 1
        assert "missing port" in self._assert_single_error(log_records)["msg"]


class TestLiveServer:
    """Run ``python -m snippetbox`` and talk to it over a real socket."""

    @pytest.fixture
    def server(self):
        port = _free_port()
        env = {**os.environ, "PYTHONPATH": os.pathsep.join(
            filter(None, [str(ROOT / "src"), os.environ.get("PYTHONPATH")])
        )}
        proc = subprocess.Popen(
            [sys.executable, "-u", "-m", "snippetbox", "-addr", f"127.0.0.1:{port}"],
            cwd=ROOT,
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
        try:
            yield proc, port
        finally:
            proc.terminate()
            try:
                proc.wait(timeout=10)
            except subprocess.TimeoutExpired:
                proc.kill()
                proc.wait()

    def test_startup_record_and_requests(self, server) -> None:
        proc, port = server
        assert proc.stdout is not None

        record = json.loads(proc.stdout.readline())
        assert record["level"] == "INFO"
        assert record["msg"] == "starting server"
        assert record["addr"] == f"127.0.0.1:{port}"

        base = f"http://127.0.0.1:{port}"
        with httpx.Client(base_url=base, timeout=10) as client:
            home = client.get("/")
            assert home.status_code == 200
            assert home.text == "Hello from Snippetbox"

            css = client.get("/static/css/main.css")
            assert css.status_code == 200
            assert css.content == (ROOT / "ui" / "static" / "css" / "main.css").read_bytes()

            assert client.get("/snippet/view/123").text.endswith("ID 123")
            assert client.post("/snippet/create").status_code == 201
            assert client.get("/static/../../pyproject.toml").status_code == 404

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
    @pytest.mark.parametrize("signum", [signal.SIGINT, signal.SIGTERM])
    def test_signal_shutdown_exits_zero(self, server, signum: signal.Signals) -> None:
        proc, port = server
        assert proc.stdout is not None
        assert json.loads(proc.stdout.readline())["msg"] == "starting server"

        # Serving means uvicorn has installed its signal handlers
        with httpx.Client(base_url=f"http://127.0.0.1:{port}", timeout=10) as client:
            assert client.get("/").status_code == 200

        proc.send_signal(signum)
        out, _ = proc.communicate(timeout=10)
        assert proc.returncode == 0

        records = [json.loads(line) for line in out.splitlines() if line]
        assert records[-1]["level"] == "INFO"
        assert records[-1]["msg"] == "server stopped"
