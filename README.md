# vaultkeeper

Building blocks for a small password vault server. Users register or sign
in through a line-based conversation, then store, read, delete and change
secrets. Notable events go to an event log, and an analyzer folds that log
into a report of error counts and session times.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The terminal client

The package installs one command, a client that connects to a vault
server at the given IPv4 address (port 8341 unless `--port` says
otherwise). It relays standard input to the server and prints what the
server sends back. When standard input ends it half-closes the connection
and keeps printing until the server closes its side; if the server closes
first it prints `str_cli server terminated prematurely` on standard error.

```
vaultkeeper-terminal 127.0.0.1
vaultkeeper-terminal 127.0.0.1 --port 9000
```

A conversation goes like this: send `reg` (or `registration`) or `auth`
(or `authentification`), then your name and password separated by a
space. After that send one of `get`, `add`, `del` (or `delete`) or `edit`,
followed by the line the server asks for.

The same relay is available as `vaultkeeper.terminal.relay(source, sock,
sink)`, which returns `True` when the server closed after input ended and
`False` when it closed first.

## Pieces

- `vaultkeeper.handlers` – one handler per step of the conversation. Each
  `handle(client, db)` reads one line from the client's socket and returns
  the next `Action`, a user id, `SUCCESS` (1), `NOONE` (0) or a
  `HandleError` value:
  - `RegOrAuth` – picks `Action.REGISTRATION` or `Action.AUTHENTIFICATION`.
  - `Registration` – creates a user from `name password`, storing the
    hashed password and the client's address; returns the new id.
  - `Authentification` – checks `name password` against the stored hash;
    returns the user id or `HandleError.BAD_AUTH`.
  - `CommandChecker` – reads `get`, `add`, `del`/`delete` or `edit` and
    sends the matching prompt; `make_transaction` records an action.
  - `Add`, `Get`, `Delete`, `Edit` – add a resource and its password, send
    a stored password back, remove a resource, or change the user's own
    password. Each records the action in the `transaction` table.
- `vaultkeeper.client.Client` – one connected peer: its socket, its
  address and its user id; `host()` gives the address as text.
- `vaultkeeper.database.Database` – wraps a connection made by a callable
  you pass in. `fetch` returns rows as lists of text and `execute` returns
  `True` or `False`; failures are noted in the event log instead of being
  raised. Usable as a context manager: it connects on entry if needed and
  disconnects on exit.
- `vaultkeeper.hasher` – `make_hash` and `verify_password` (Argon2id via
  PyNaCl).
- `vaultkeeper.blocker.Blocker` – remembers banned addresses;
  `has_prison(addr)` is true for 10 minutes (or `block_minutes`) after
  `add_prison(addr)`.
- `vaultkeeper.log.EventLog` – a thread-safe event log in a directory.
  `make_note(code)` queues a timestamped note and writes the queue out
  once it passes 25 notes; `flush()` writes it out at once;
  `read_all_notes(compressor)` feeds every note in the current file to a
  `Compressor` and moves on to a new file name. `to_dataline(line)` splits
  a `time code [addr]` note.
- `vaultkeeper.events.InfoValue` – the time and address of an event;
  `from_time_t()` renders the time in `ctime` form.
- `vaultkeeper.compressor.Compressor` – counts error events (codes 107,
  402, 1001, 1003, 2001, 200001) and pairs connect/disconnect events by
  address to get the number of sessions and the longest and average
  session time.
- `vaultkeeper.codebook.CodeBook` – reads a `code:description` table;
  when the file is missing it notes code 5001 and writes the default table
  with `create_table_and_fill(path)`.
- `vaultkeeper.report.ResultGenerator` – writes a report file named after
  the day and time, one `description: count` line per code.
- `vaultkeeper.analyzer.Analyzer` – `run_once()` builds a report from the
  log right away; `time_check(stop_event)` checks every hour and reports
  once a day (or per `interval` and `period`) until the event is set.

## Hashing a password

```python
from vaultkeeper.hasher import make_hash, verify_password

hashed = make_hash("password")
assert verify_password(hashed, "password")
assert not verify_password(hashed, "secret")
```

## Using a handler

```python
from vaultkeeper.client import Client
from vaultkeeper.database import Database
from vaultkeeper.handlers import Authentification, HandleError
from vaultkeeper.log import EventLog

log = EventLog("logs")          # the directory must already exist
db = Database(make_connection, log)   # make_connection returns a DB-API connection
user_id = Authentification(log).handle(Client(sock, address), db)
if user_id == HandleError.BAD_AUTH:
    ...
```

The handlers' queries use the `%s` parameter style and expect `users`,
`data` and `transaction` tables.

## What the package does not do

- It has no server. Nothing here listens for connections, keeps track of
  which step each client has reached or calls the handlers in turn; that
  loop has to be written around `vaultkeeper.handlers`.
- It ships no database driver and creates no tables. `Database` only
  wraps a connection that your own callable opens.
- `EventLog` does not create its directory.

## Event codes

The default code table includes, among others:

| code   | meaning                               |
|--------|---------------------------------------|
| 1003   | connection with client was lost       |
| 2001   | error connect with Postgres Data Base |
| 5001   | file with code-error designations is missing |
| 100001 | new connection                        |
| 100002 | close connection                      |
| 200001 | bad quiry-SQL                         |
| 400001 | maximum communication time            |
| 400002 | average time                          |
| 400004 | count connect-clients                 |