"""Chat client: talks to the relay server and keeps received messages."""

from __future__ import annotations

import argparse
import configparser
import logging
import os
import sqlite3
import threading
from dataclasses import dataclass
from urllib.parse import quote

import requests
from flask import Flask

log = logging.getLogger(__name__)

SERVER_PORT = 8000
CLIENT_PORT = 8001
ALREADY_REGISTERED_REPLY = "This name is already registered, please log out and try again"
REGISTERED_REPLY = "registered u"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS messages(
    id INTEGER PRIMARY KEY,
    user_name TEXT NOT NULL,
    message TEXT NOT NULL,
    time TEXT NOT NULL)
"""


@dataclass(frozen=True)
class ClientConfig:
    """Addresses of this client and of the relay server."""

    local_ip: str
    server_ip: str
    server_port: int = SERVER_PORT


def load_config(path: str | os.PathLike[str] = "conf.ini") -> ClientConfig:
    """Read ``local_ip`` and ``server_ip`` from the ``[Config]`` section of an INI file."""
    parser = configparser.ConfigParser()
    with open(path, encoding="utf-8") as handle:
        parser.read_file(handle)
    section = parser["Config"]
    return ClientConfig(local_ip=section["local_ip"], server_ip=section["server_ip"])


class MessageStore:
    """Received messages kept in an SQLite database."""

    def __init__(self, path: str | os.PathLike[str] = "messages.db") -> None:
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(_SCHEMA)

    def store(self, user_name: str, message: str, time: str) -> None:
        """Save one received message."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO messages(user_name, message, time) VALUES(?, ?, ?)",
                (user_name, message, time),
            )

    def latest(self, count: int) -> list[dict[str, str]]:
        """Return up to ``count`` messages, newest first."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT user_name, message, time FROM messages ORDER BY id DESC LIMIT ?",
                (count,),
            ).fetchall()
        return [{"user_name": u, "message": m, "time": t} for u, m, t in rows]

    def close(self) -> None:
        """Close the database."""
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "MessageStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ChatClient:
    """The client's session with the relay server."""

    def __init__(self, config: ClientConfig) -> None:
        self.config = config
        self.session_id = ""
        self.user_name = ""
        self._lock = threading.Lock()

    def _url(self, *segments: str) -> str:
        path = "/".join(quote(segment, safe="") for segment in segments)
        return f"http://{self.config.server_ip}:{self.config.server_port}/{path}"

    def register(self, name: str) -> str:
        """Register ``name`` with the server and return a status text."""
        with self._lock:
            response = requests.get(
                self._url("register", name, self.config.local_ip), timeout=10
            )
            session_id = response.text
            if session_id == "0":
                log.info("response %s", session_id)
                return ALREADY_REGISTERED_REPLY
            self.session_id = session_id
            self.user_name = name
            log.info("response code %s", response.status_code)
            return REGISTERED_REPLY

    def send(self, message: str) -> None:
        """Ask the server to broadcast ``message`` to every client."""
        with self._lock:
            payload = {
                "source_ip": self.config.local_ip,
                "user_name": self.user_name,
                "session_id": self.session_id,
                "message": message,
            }
        requests.post(self._url("broadcast"), json=payload, timeout=10)

    def logout(self) -> str:
        """Log out from the server, forget the session and return the server's reply."""
        with self._lock:
            response = requests.get(
                self._url("logout", self.session_id, self.user_name, self.config.local_ip),
                timeout=10,
            )
            self.session_id = ""
            self.user_name = ""
            return response.text


def _format_message(entry: dict[str, str]) -> str:
    return (
        '{ "user_name":' + entry["user_name"]
        + ', "message":' + entry["message"]
        + ', "time":' + entry["time"] + "}"
    )


def create_app(client: ChatClient, store: MessageStore) -> Flask:
    """Build the client's local web application."""
    app = Flask(__name__)

    @app.get("/")
    def index() -> str:
        return "Hello, world!"

    @app.get("/<user>")
    def hello_user(user: str) -> str:
        return f"Hello, {user}!"

    @app.get("/register/<name>")
    def register_me(name: str) -> str:
        return client.register(name)

    @app.get("/send/<message>")
    def send_msg(message: str) -> str:
        client.send(message)
        return ""

    @app.get("/receive/<user_name>/<message>/<time>")
    def receive_msg(user_name: str, message: str, time: str) -> str:
        log.info("received message %s and storing it locally on client", message)
        store.store(user_name, message, time)
        return ""

    @app.get("/get/messages/<int(signed=True):count>")
    def get_messages(count: int) -> str:
        return ",".join(_format_message(entry) for entry in store.latest(count))

    @app.get("/logout")
    def logout() -> str:
        return client.logout()

    return app


def main(argv: list[str] | None = None) -> int:
    """Run the chat client's local web application."""
    parser = argparse.ArgumentParser(description="Run the chat client.")
    parser.add_argument("--config", default="conf.ini")
    parser.add_argument("--db", default="messages.db")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=CLIENT_PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    config = load_config(args.config)
    with MessageStore(args.db) as store:
        create_app(ChatClient(config), store).run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())