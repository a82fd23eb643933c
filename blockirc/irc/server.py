"""Chat relay server: registers users and fans messages out to them."""

from __future__ import annotations

import argparse
import logging
import secrets
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from urllib.parse import quote

import requests
from flask import Flask, abort, request

log = logging.getLogger(__name__)

CLIENT_PORT = 8001
SERVER_PORT = 8000
ALREADY_REGISTERED = "0"
LOGOUT_OK = "logout successful"
LOGOUT_MISMATCH = "session cache not cleared, use different username"
LOGOUT_UNKNOWN = "No user with the given user name exists to logout"
_MESSAGE_FIELDS = ("source_ip", "user_name", "session_id", "message")

Sender = Callable[[str, str, str, str], str]


@dataclass(frozen=True)
class ClientId:
    """Where a registered user lives and the session they hold."""

    source_ip: str
    session_id: str


class Registry:
    """Thread-safe map from user name to the client that registered it."""

    def __init__(self) -> None:
        self._clients: dict[str, ClientId] = {}
        self._lock = threading.Lock()

    def register(self, name: str, ip: str) -> str:
        """Register ``name`` at ``ip`` and return a new session id.

        Returns ``"0"`` when the name is already taken.
        """
        with self._lock:
            if name in self._clients:
                log.info("%s already registered", name)
                return ALREADY_REGISTERED
            session_id = str(secrets.randbits(64))
            log.info("id generated for %s is %s", name, session_id)
            self._clients[name] = ClientId(source_ip=ip, session_id=session_id)
            return session_id

    def authenticate(self, user_name: str, session_id: str, source_ip: str) -> bool:
        """Tell whether the session and address match the registered user."""
        with self._lock:
            client = self._clients.get(user_name)
        return (
            client is not None
            and client.session_id == session_id
            and client.source_ip == source_ip
        )

    def logout(self, session_id: str, name: str, ip: str) -> str:
        """Remove ``name`` if the session and address match; return a status text."""
        with self._lock:
            client = self._clients.get(name)
            if client is None:
                return LOGOUT_UNKNOWN
            if client.session_id != session_id or client.source_ip != ip:
                return LOGOUT_MISMATCH
            del self._clients[name]
            return LOGOUT_OK

    def clients(self) -> list[ClientId]:
        """Return a snapshot of every registered client."""
        with self._lock:
            return list(self._clients.values())


def deliver(source_ip: str, user_name: str, message: str, formatted_time: str) -> str:
    """Hand one message to the client at ``source_ip`` and return its reply."""
    path = "/".join(quote(part, safe="") for part in (user_name, message, formatted_time))
    url = f"http://{source_ip}:{CLIENT_PORT}/receive/{path}"
    response = requests.get(url, timeout=10)
    return response.text


def create_app(registry: Registry | None = None, sender: Sender | None = None) -> Flask:
    """Build the relay server's web application."""
    registry = registry if registry is not None else Registry()
    send = sender if sender is not None else deliver
    app = Flask(__name__)

    @app.get("/")
    def index() -> str:
        return "Hello, world!"

    @app.get("/register/<name>/<ip>")
    def register(name: str, ip: str) -> str:
        return registry.register(name, ip)

    @app.post("/broadcast")
    def broadcast() -> str:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or not all(
            isinstance(payload.get(key), str) for key in _MESSAGE_FIELDS
        ):
            abort(400)
        if registry.authenticate(
            payload["user_name"], payload["session_id"], payload["source_ip"]
        ):
            log.info("sending message to all %s", payload["message"])
            for client in registry.clients():
                stamp = datetime.now().strftime("%Y-%m-%d:::%H:%M:%S")
                reply = send(client.source_ip, payload["user_name"], payload["message"], stamp)
                log.info("send to client %s", reply)
        return ""

    @app.get("/logout/<session_id>/<name>/<ip>")
    def logout(session_id: str, name: str, ip: str) -> str:
        return registry.logout(session_id, name, ip)

    return app


def main(argv: list[str] | None = None) -> int:
    """Run the relay server."""
    parser = argparse.ArgumentParser(description="Run the chat relay server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    create_app().run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())