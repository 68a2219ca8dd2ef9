import os
import socket
import subprocess
import sys
import time
from typing import Dict

import pytest
import requests


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return int(s.getsockname()[1])


def _wait_for_server(base_url: str, timeout: float = 30.0) -> None:
    deadline = time.time() + timeout
    request_timeout = float(os.environ.get("JSONHTTP_E2E_STARTUP_REQUEST_TIMEOUT", "5"))
    last_err = None
    while time.time() < deadline:
        try:
            response = requests.get(f"{base_url}/status", timeout=request_timeout)
            if response.status_code == 200:
                return
        except requests.RequestException as err:  # pragma: no cover - startup timing
            last_err = err
        time.sleep(0.25)
    raise RuntimeError(f"Server did not start at {base_url}: {last_err}")


def _spawn_flask_process(
    module_expr: str, port: int, extra_env: Dict[str, str]
) -> subprocess.Popen:
    env = os.environ.copy()
    env.update(extra_env)
    env["JSONHTTP_TEST_PORT"] = str(port)
    env.setdefault("PYTHONUNBUFFERED", "1")

    code = (
        "import os;"
        f"{module_expr};"
        "app.run(host='127.0.0.1', port=int(os.environ['JSONHTTP_TEST_PORT']), debug=False, use_reloader=False)"
    )
    return subprocess.Popen(
        [sys.executable, "-c", code],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        env=env,
        cwd=os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")),
    )


@pytest.fixture(scope="session")
def reference_server() -> str:
    port = _free_port()
    proc = _spawn_flask_process(
        "from jsonhttp import create_app; app=create_app()",
        port,
        {"JSONHTTP_CONFIG": os.path.join("/tmp", f"jsonhttp_e2e_missing_{port}.yaml")},
    )
    base_url = f"http://127.0.0.1:{port}"
    try:
        _wait_for_server(base_url)
        yield base_url
    finally:
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()


@pytest.fixture
def http_client() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": "jsonhttp-e2e-tests"})
    yield session
    session.close()
