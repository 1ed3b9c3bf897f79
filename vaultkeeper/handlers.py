"""Per-state request handlers for the password vault's line protocol."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum

from vaultkeeper.hasher import make_hash, verify_password

MAXLINE = 1024
NOONE = 0
SUCCESS = 1

CONNECTION_LOST = "1003"
DB_CONNECT_FAILED = "2001"
DB_RECONNECT_FAILED = "202"
BAD_QUERY = "200001"
USER_EXISTS = "200101"


class Action(IntEnum):
    """Protocol states a client moves through."""

    GREETINGS = 0
    REGISTRATION = 1
    AUTHENTIFICATION = 2
    COMMAND_CHECKER = 3
    GET = 4
    ADD = 5
    DEL = 6
    EDIT = 7


class HandleError(IntEnum):
    """Failure results a handler can report."""

    DISCONNECT = -1
    BLOCKED = -2
    LOSE_TRIES = -3
    EXISTING = -4
    BAD_AUTH = -5
    NOT_EXIST = -6
    EMPTY_VALUES = -7


def _credentials(line: str) -> tuple[str, str]:
    parts = line.split()
    name = parts[0] if parts else ""
    secret = parts[1] if len(parts) > 1 else ""
    return name, secret


class Handler(ABC):
    """Base for handlers: reads one request line from a client and answers it."""

    def __init__(self, log) -> None:
        self.log = log

    def read_line(self, client) -> str | None:
        """One request from the client without its trailing newline; None when gone."""
        try:
            data = client.sock.recv(MAXLINE - 1)
        except ConnectionResetError:
            self.log.make_note(CONNECTION_LOST)
            return None
        except OSError:
            return None
        if not data:
            return None
        if data.endswith(b"\n"):
            data = data[:-1]
        return data.decode(errors="replace").split("\0", 1)[0]

    @abstractmethod
    def handle(self, client, db) -> int:
        """Serve one request and return the next state, a user id or a HandleError."""

    def _ensure_connected(self, db) -> bool:
        if db.is_connected():
            return True
        self.log.make_note(DB_CONNECT_FAILED)
        if not db.connect():
            self.log.make_note(DB_RECONNECT_FAILED)
            return False
        return True

    @staticmethod
    def _send(client, text: str) -> None:
        client.sock.sendall(text.encode())


class RegOrAuth(Handler):
    """Asks whether the client wants to register or to log in."""

    _ACTIONS = {
        "auth": Action.AUTHENTIFICATION,
        "authentification": Action.AUTHENTIFICATION,
        "reg": Action.REGISTRATION,
        "registration": Action.REGISTRATION,
    }

    def handle(self, client, db) -> int:
        line = self.read_line(client)
        if line is None:
            return HandleError.DISCONNECT
        return self._ACTIONS.get(line, NOONE)


class Registration(RegOrAuth):
    """Creates a user from a "name password" line and returns the new id."""

    def handle(self, client, db) -> int:
        line = self.read_line(client)
        if line is None:
            return HandleError.DISCONNECT
        name, secret = _credentials(line)
        if not name or not secret:
            return HandleError.EMPTY_VALUES
        if not self._ensure_connected(db):
            return HandleError.DISCONNECT

        query = (
            "INSERT INTO users (name_user, password, ip_registration) "
            "VALUES (%s, %s, %s) RETURNING id;"
        )
        rows = db.fetch(query, [name, make_hash(secret), client.host()])
        if not rows:
            self.log.make_note(USER_EXISTS)
            return HandleError.EXISTING
        return int(rows[0][0])


class Authentification(RegOrAuth):
    """Checks a "name password" line against the stored hash; returns the user id."""

    def handle(self, client, db) -> int:
        line = self.read_line(client)
        if line is None:
            return HandleError.DISCONNECT
        name, secret = _credentials(line)
        if not name or not secret:
            return HandleError.EMPTY_VALUES
        if not self._ensure_connected(db):
            return HandleError.DISCONNECT

        rows = db.fetch("SELECT * FROM users WHERE name_user = %s;", [name])
        if not rows:
            self.log.make_note(BAD_QUERY)
            return HandleError.BAD_AUTH
        if not verify_password(rows[0][2], secret):
            return HandleError.BAD_AUTH
        return int(rows[0][0])


class CommandChecker(Handler):
    """Reads a vault command and prompts for its arguments."""

    _COMMANDS = {
        "get": Action.GET,
        "delete": Action.DEL,
        "del": Action.DEL,
        "add": Action.ADD,
        "edit": Action.EDIT,
    }
    _PROMPTS = {
        Action.GET: "Please enter the name of the desired resourse\n",
        Action.ADD: "Please enter add name and password for this resourse\n",
        Action.DEL: "Please enter the name of the desired resourse\n",
        Action.EDIT: "Please enter the new password of your auth\n",
    }
    _VERBS = {
        Action.GET: "get",
        Action.ADD: "add",
        Action.DEL: "delete",
        Action.EDIT: "edit",
    }

    def handle(self, client, db) -> int:
        line = self.read_line(client)
        if line is None:
            return HandleError.DISCONNECT
        action = self._COMMANDS.get(line)
        if action is None:
            self._send(client, "You entered the bad actions. Try again.\n")
            return NOONE
        self._send(client, self._PROMPTS[action])
        return action

    def make_transaction(self, action, client, name, db) -> None:
        """Record a vault action by ``client`` on resource ``name``."""
        query = (
            "INSERT INTO transaction (name_resourse, name_action, time_appeal, ip_user, user_id) "
            "VALUES (%s, %s, NOW(), %s, %s);"
        )
        db.execute(query, [name, self._VERBS[Action(action)], client.host(), str(client.id)])


class Add(CommandChecker):
    """Stores a new "resource password" pair for the logged-in user."""

    def handle(self, client, db) -> int:
        line = self.read_line(client)
        if line is None:
            return HandleError.DISCONNECT
        name, secret = _credentials(line)
        if not name or not secret:
            return HandleError.EMPTY_VALUES

        existing = db.fetch(
            "SELECT * FROM data WHERE resourse_name = %s AND user_id = %s;",
            [name, str(client.id)],
        )
        if existing:
            return HandleError.EXISTING
        if not self._ensure_connected(db):
            return HandleError.DISCONNECT

        db.execute(
            "INSERT INTO data (resourse_name, password, user_id) VALUES (%s, %s, %s);",
            [name, secret, str(client.id)],
        )
        self.make_transaction(Action.ADD, client, name, db)
        return SUCCESS


class Get(CommandChecker):
    """Sends back the stored password of a named resource."""

    def handle(self, client, db) -> int:
        name = self.read_line(client)
        if name is None:
            return HandleError.DISCONNECT
        if not self._ensure_connected(db):
            return HandleError.DISCONNECT

        rows = db.fetch(
            "SELECT * FROM data WHERE resourse_name = %s AND user_id = %s",
            [name, str(client.id)],
        )
        if not rows:
            return HandleError.NOT_EXIST

        self.make_transaction(Action.GET, client, name, db)
        self._send(client, rows[0][2] + "\n")
        return SUCCESS


class Delete(CommandChecker):
    """Removes a named resource of the logged-in user."""

    def handle(self, client, db) -> int:
        name = self.read_line(client)
        if name is None:
            return HandleError.DISCONNECT
        if not self._ensure_connected(db):
            return HandleError.DISCONNECT

        self.make_transaction(Action.DEL, client, name, db)
        removed = db.execute(
            "DELETE FROM data WHERE resourse_name = %s AND user_id = %s;",
            [name, str(client.id)],
        )
        return SUCCESS if removed else HandleError.NOT_EXIST


class Edit(CommandChecker):
    """Replaces the logged-in user's own password."""

    def handle(self, client, db) -> int:
        secret = self.read_line(client)
        if secret is None:
            return HandleError.DISCONNECT
        if not self._ensure_connected(db):
            return HandleError.DISCONNECT

        db.execute(
            "UPDATE users SET password = %s WHERE id = %s;",
            [make_hash(secret), str(client.id)],
        )
        self.make_transaction(Action.EDIT, client, secret, db)
        return SUCCESS