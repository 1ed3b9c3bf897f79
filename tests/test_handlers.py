import socket

import pytest

from vaultkeeper.client import Client
from vaultkeeper.handlers import (
    NOONE,
    SUCCESS,
    Action,
    Add,
    Authentification,
    CommandChecker,
    Delete,
    Edit,
    Get,
    HandleError,
    RegOrAuth,
    Registration,
)
from vaultkeeper.hasher import make_hash, verify_password


class FakeLog:
    def __init__(self):
        self.notes = []

    def make_note(self, code):
        self.notes.append(code)


class FakeDB:
    def __init__(self, rows=None, connected=True, can_connect=True, execute_ok=True):
        self.rows = rows or []
        self.connected = connected
        self.can_connect = can_connect
        self.execute_ok = execute_ok
        self.fetched = []
        self.executed = []

    def is_connected(self):
        return self.connected

    def connect(self):
        self.connected = self.can_connect
        return self.can_connect

    def fetch(self, query, params):
        self.fetched.append((query, list(params)))
        return [list(row) for row in self.rows]

    def execute(self, query, params):
        self.executed.append((query, list(params)))
        return self.execute_ok


@pytest.fixture
def pair():
    server, peer = socket.socketpair()
    server.settimeout(5)
    peer.settimeout(5)
    yield Client(server, ("127.0.0.1", 40000), 7), peer
    server.close()
    peer.close()


@pytest.fixture
def log():
    return FakeLog()


def test_read_line_strips_newline(pair, log):
    client, peer = pair
    peer.sendall(b"get\n")
    assert CommandChecker(log).read_line(client) == "get"


def test_read_line_returns_none_when_peer_closed(pair, log):
    client, peer = pair
    peer.close()
    assert RegOrAuth(log).read_line(client) is None


@pytest.mark.parametrize(
    "line, expected",
    [
        (b"reg\n", Action.REGISTRATION),
        (b"registration\n", Action.REGISTRATION),
        (b"auth\n", Action.AUTHENTIFICATION),
        (b"authentification\n", Action.AUTHENTIFICATION),
        (b"bogus\n", NOONE),
    ],
)
def test_reg_or_auth_choice(pair, log, line, expected):
    client, peer = pair
    peer.sendall(line)
    assert RegOrAuth(log).handle(client, FakeDB()) == expected


def test_reg_or_auth_disconnect(pair, log):
    client, peer = pair
    peer.close()
    assert RegOrAuth(log).handle(client, FakeDB()) == HandleError.DISCONNECT


def test_registration_empty_values(pair, log):
    client, peer = pair
    peer.sendall(b"alice\n")
    assert Registration(log).handle(client, FakeDB()) == HandleError.EMPTY_VALUES


def test_registration_returns_new_id(pair, log):
    client, peer = pair
    peer.sendall(b"alice password\n")
    db = FakeDB(rows=[["42"]])
    assert Registration(log).handle(client, db) == 42
    query, params = db.fetched[0]
    assert "RETURNING id" in query
    assert params[0] == "alice"
    assert params[2] == "127.0.0.1"
    assert verify_password(params[1], "password")


def test_registration_existing_user(pair, log):
    client, peer = pair
    peer.sendall(b"alice password\n")
    assert Registration(log).handle(client, FakeDB()) == HandleError.EXISTING
    assert log.notes == ["200101"]


def test_registration_database_unreachable(pair, log):
    client, peer = pair
    peer.sendall(b"alice password\n")
    db = FakeDB(connected=False, can_connect=False)
    assert Registration(log).handle(client, db) == HandleError.DISCONNECT
    assert log.notes == ["2001", "202"]
    assert db.fetched == []


def test_authentification_success(pair, log):
    client, peer = pair
    peer.sendall(b"alice password\n")
    db = FakeDB(rows=[["5", "alice", make_hash("password"), "127.0.0.1"]])
    assert Authentification(log).handle(client, db) == 5


def test_authentification_wrong_password(pair, log):
    client, peer = pair
    peer.sendall(b"alice secret\n")
    db = FakeDB(rows=[["5", "alice", make_hash("password"), "127.0.0.1"]])
    assert Authentification(log).handle(client, db) == HandleError.BAD_AUTH


def test_authentification_unknown_user(pair, log):
    client, peer = pair
    peer.sendall(b"alice password\n")
    assert Authentification(log).handle(client, FakeDB()) == HandleError.BAD_AUTH
    assert log.notes == ["200001"]


def test_authentification_reconnects(pair, log):
    client, peer = pair
    peer.sendall(b"alice password\n")
    db = FakeDB(rows=[["5", "alice", make_hash("password"), ""]], connected=False)
    assert Authentification(log).handle(client, db) == 5
    assert log.notes == ["2001"]


def test_command_checker_known_command(pair, log):
    client, peer = pair
    peer.sendall(b"del\n")
    assert CommandChecker(log).handle(client, FakeDB()) == Action.DEL
    assert peer.recv(4096) == b"Please enter the name of the desired resourse\n"


def test_command_checker_bad_command(pair, log):
    client, peer = pair
    peer.sendall(b"fly\n")
    assert CommandChecker(log).handle(client, FakeDB()) == NOONE
    assert peer.recv(4096) == b"You entered the bad actions. Try again.\n"


def test_make_transaction_records_action(pair, log):
    client, _ = pair
    db = FakeDB()
    CommandChecker(log).make_transaction(Action.DEL, client, "mail", db)
    query, params = db.executed[0]
    assert query.startswith("INSERT INTO transaction")
    assert params == ["mail", "delete", "127.0.0.1", "7"]


def test_add_stores_resource(pair, log):
    client, peer = pair
    peer.sendall(b"mail password\n")
    db = FakeDB()
    assert Add(log).handle(client, db) == SUCCESS
    assert db.executed[0][1] == ["mail", "password", "7"]
    assert db.executed[1][1] == ["mail", "add", "127.0.0.1", "7"]


def test_add_existing_resource(pair, log):
    client, peer = pair
    peer.sendall(b"mail password\n")
    db = FakeDB(rows=[["1", "mail", "password", "7"]])
    assert Add(log).handle(client, db) == HandleError.EXISTING
    assert db.executed == []


def test_add_empty_values(pair, log):
    client, peer = pair
    peer.sendall(b"\n")
    assert Add(log).handle(client, FakeDB()) == HandleError.EMPTY_VALUES


def test_get_sends_password(pair, log):
    client, peer = pair
    peer.sendall(b"mail\n")
    db = FakeDB(rows=[["1", "mail", "secret", "7"]])
    assert Get(log).handle(client, db) == SUCCESS
    assert peer.recv(4096) == b"secret\n"
    assert db.fetched[0][1] == ["mail", "7"]
    assert db.executed[0][1] == ["mail", "get", "127.0.0.1", "7"]


def test_get_missing_resource(pair, log):
    client, peer = pair
    peer.sendall(b"mail\n")
    assert Get(log).handle(client, FakeDB()) == HandleError.NOT_EXIST


def test_delete_success(pair, log):
    client, peer = pair
    peer.sendall(b"mail\n")
    db = FakeDB()
    assert Delete(log).handle(client, db) == SUCCESS
    assert db.executed[0][1] == ["mail", "delete", "127.0.0.1", "7"]
    assert db.executed[1][1] == ["mail", "7"]


def test_delete_failure(pair, log):
    client, peer = pair
    peer.sendall(b"mail\n")
    assert Delete(log).handle(client, FakeDB(execute_ok=False)) == HandleError.NOT_EXIST


def test_edit_updates_hash(pair, log):
    client, peer = pair
    peer.sendall(b"secret\n")
    db = FakeDB()
    assert Edit(log).handle(client, db) == SUCCESS
    query, params = db.executed[0]
    assert query.startswith("UPDATE users")
    assert verify_password(params[0], "secret")
    assert params[1] == "7"


def test_edit_disconnect(pair, log):
    client, peer = pair
    peer.close()
    assert Edit(log).handle(client, FakeDB()) == HandleError.DISCONNECT