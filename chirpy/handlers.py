"""HTTP handlers of the Chirpy service."""

from __future__ import annotations

import json
import os
import posixpath
import sqlite3
import threading
import uuid
from dataclasses import dataclass, field
from urllib.parse import quote

from flask import Flask, Response, redirect, request, send_file

from chirpy.auth import PasswordMismatchError, check_password_hash, hash_password
from chirpy.database import NotFoundError, Queries
from chirpy.models import Chirp

PROFANE_WORDS = ("kerfuffle", "sharbert", "fornax")
MAX_CHIRP_LENGTH = 140

_TEXT = "text/plain; charset=utf-8"
_HTML = "text/html; charset=utf-8"
_JSON = "application/json"

_METRICS_PAGE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""

_JSON_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&#34;"),
    ("'", "&#39;"),
)


@dataclass
class ApiConfig:
    """Shared state of the service: its database and visit counter."""

    queries: Queries
    platform: str = ""
    _hits: int = field(default=0, init=False, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    @property
    def hits(self) -> int:
        """Number of requests served under /app/ since the last reset."""
        with self._lock:
            return self._hits

    def record_hit(self) -> int:
        """Count one visit and return the new total."""
        with self._lock:
            self._hits += 1
            return self._hits

    def reset_hits(self) -> None:
        """Set the visit counter back to zero."""
        with self._lock:
            self._hits = 0


def replace_profanities(s: str) -> str:
    """Mask every space-separated word that is a known profanity."""
    return " ".join(
        "****" if word.lower() in PROFANE_WORDS else word for word in s.split(" ")
    )


def _text(body: str, status: int) -> Response:
    return Response(body, status=status, content_type=_TEXT)


def _internal_error() -> Response:
    return _text("Internal Server Error", 500)


def _json(payload, status: int) -> Response:
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    for raw, escaped in _JSON_ESCAPES:
        text = text.replace(raw, escaped)
    return Response(text, status=status, content_type=_JSON)


def _escape_html(text: str) -> str:
    for raw, escaped in _HTML_ESCAPES:
        text = text.replace(raw, escaped)
    return text


def _decode_object(raw: bytes, fields: tuple[str, ...]) -> dict:
    """Decode the first JSON value of a body into the named fields.

    Keys match field names without regard to case; unknown keys are ignored.
    """
    text = raw.decode("utf-8", errors="replace").lstrip(" \t\r\n")
    if not text:
        raise ValueError("EOF")
    try:
        value, _ = json.JSONDecoder().raw_decode(text)
    except json.JSONDecodeError as exc:
        raise ValueError(str(exc)) from exc
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(
            f"json: cannot unmarshal {type(value).__name__} into an object"
        )
    result = {}
    for key, item in value.items():
        name = key.lower()
        if name in fields:
            result[name] = item
    return result


def _string_field(data: dict, name: str) -> str:
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"json: cannot unmarshal {type(value).__name__} into field {name}")
    return value


def _uuid_field(data: dict, name: str) -> uuid.UUID:
    value = data.get(name)
    if value is None:
        return uuid.UUID(int=0)
    if not isinstance(value, str):
        raise ValueError(f"json: cannot unmarshal {type(value).__name__} into field {name}")
    return uuid.UUID(value)


def _listed_chirp(chirp: Chirp) -> dict:
    # Listings report the chirp's own id in the user_id field.
    return {**chirp.to_json(), "user_id": str(chirp.id)}


def _directory_listing(directory: str) -> Response:
    with os.scandir(directory) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    lines = [
        "<!doctype html>",
        '<meta name="viewport" content="width=device-width">',
        "<pre>",
    ]
    for entry in ordered:
        name = entry.name + ("/" if entry.is_dir() else "")
        lines.append(f'<a href="{quote(name)}">{_escape_html(name)}</a>')
    lines.append("</pre>")
    return Response("\n".join(lines) + "\n", status=200, content_type=_HTML)


def create_app(config: ApiConfig, static_dir=".") -> Flask:
    """Build the web application serving the API and the static files."""
    app = Flask(__name__, static_folder=None)
    root = os.path.abspath(os.fspath(static_dir))

    @app.route(
        "/app/",
        defaults={"filename": ""},
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"],
    )
    @app.route(
        "/app/<path:filename>",
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"],
    )
    def serve_static(filename: str):
        config.record_hit()
        if request.path.endswith("/index.html"):
            return redirect("./", 301)
        cleaned = posixpath.normpath("/" + filename)
        parts = [part for part in cleaned.split("/") if part]
        target = os.path.join(root, *parts)
        trailing_slash = request.path.endswith("/")
        if os.path.isdir(target):
            if not trailing_slash:
                return redirect(parts[-1] + "/", 301)
            index = os.path.join(target, "index.html")
            if os.path.isfile(index):
                return send_file(index)
            return _directory_listing(target)
        if os.path.isfile(target):
            if trailing_slash:
                return redirect("../" + parts[-1], 301)
            return send_file(target)
        return _text("404 page not found\n", 404)

    @app.get("/api/healthz")
    def healthz():
        return _text("OK", 200)

    @app.get("/admin/metrics")
    def get_metrics():
        page = _METRICS_PAGE.format(hits=config.hits)
        return Response(page, status=200, content_type=_HTML)

    @app.post("/admin/reset")
    def reset_metrics():
        if config.platform != "dev":
            return _text("Forbidden", 403)
        config.reset_hits()
        try:
            config.queries.delete_all_users()
        except sqlite3.Error:
            return _internal_error()
        return _text("OK", 200)

    @app.post("/api/users")
    def create_user():
        try:
            data = _decode_object(request.get_data(), ("password", "email"))
            password = _string_field(data, "password")
            email = _string_field(data, "email")
        except ValueError as exc:
            return _text(str(exc), 400)
        try:
            hashed = hash_password(password)
            user = config.queries.create_user(email, hashed)
        except (ValueError, sqlite3.Error):
            return _internal_error()
        return _json(user.to_json(), 201)

    @app.post("/api/chirps")
    def create_chirp():
        if "application/json" not in request.headers.get("Content-Type", ""):
            return _json({"error": "Something went wrong"}, 400)
        try:
            data = _decode_object(request.get_data(), ("body", "user_id"))
            body = _string_field(data, "body")
            user_id = _uuid_field(data, "user_id")
        except ValueError:
            return _json({"error": "Something went wrong"}, 400)
        if len(body.encode("utf-8")) > MAX_CHIRP_LENGTH:
            return _json({"error": "Chirp is too long"}, 400)
        try:
            chirp = config.queries.create_chirp(replace_profanities(body), user_id)
        except sqlite3.Error:
            return Response(b"", status=200)
        return _json(chirp.to_json(), 201)

    @app.get("/api/chirps")
    def get_all_chirps():
        try:
            chirps = config.queries.get_all_chirps()
        except sqlite3.Error:
            return _internal_error()
        return _json([_listed_chirp(chirp) for chirp in chirps], 200)

    @app.get("/api/chirps/<chirp_id>")
    def get_chirp(chirp_id: str):
        try:
            chirp = config.queries.get_chirp_by_id(uuid.UUID(chirp_id))
        except (ValueError, NotFoundError, sqlite3.Error):
            return _internal_error()
        return _json(_listed_chirp(chirp), 200)

    @app.post("/api/login")
    def login():
        try:
            data = _decode_object(request.get_data(), ("password", "email"))
            password = _string_field(data, "password")
            email = _string_field(data, "email")
        except ValueError as exc:
            return _text(str(exc), 400)
        try:
            user = config.queries.get_user_by_email(email)
            check_password_hash(user.hashed_password, password)
        except (NotFoundError, sqlite3.Error, PasswordMismatchError):
            return _text("Incorrect email or password", 401)
        return _json(user.to_json(), 200)

    return app