# blockirc

This package holds two small tools:

- **`blockirc.block`** reads a chain of blocks from a YAML file. It checks that
  each block points at the BLAKE2s hash of the block before it. Then it prints
  the hash of every block, in order.
- **`blockirc.irc`** is a tiny chat system over HTTP. A relay server keeps the
  registered users in memory and passes each message on to all of them. A
  client runs its own small HTTP service. The client registers with the server,
  sends messages through it, and stores the messages it receives in SQLite.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Reading a chain

```
blockirc-chain blocks.yaml
```

The file holds YAML documents, each starting with `---`. Any text before the
first `---` is ignored. Each document must have exactly these four fields, with
no others and no repeats:

```yaml
---
version: 1
timestamp: 0
previous: "0000000000000000000000000000000000000000000000000000000000000000"
merkle_root: "0000000000000000000000000000000000000000000000000000000000000000"
```

- `version` is an unsigned 32-bit integer.
- `timestamp` is an unsigned 64-bit integer.
- `previous` and `merkle_root` are 32 bytes written in hex. Whitespace inside
  them is ignored.

The first block's `previous` must be all zeros. Each later block's `previous`
must equal the hash of the block before it. A block's hash is the BLAKE2s-256
of its header: `version` as 4 bytes and `timestamp` as 8 bytes, both
little-endian, followed by `previous` and then `merkle_root`.

Output has one line per block: the index, padded to eight digits, a colon, and
the hash in lowercase hex:

```
00000000: <hash of block 0>
00000001: <hash of block 1>
```

The command handles errors in two ways:

- A block that does not link to the one before it stops the reading. The
  message `read_chain: ...` goes to standard error. The blocks read so far are
  still printed, and the command exits with status 0.
- A file that cannot be opened, or a block that is malformed, gives a message
  on standard error. Nothing is printed, and the command exits with status 1.

From Python:

```python
from blockirc.block.block import Block
from blockirc.block.chain import BlockChain, ChainError

chain = BlockChain()
chain.read_chain("blocks.yaml")   # raises ChainError or BlockFormatError
print(chain)

genesis = Block(timestamp=1)
chain = BlockChain()
chain.append(genesis)
chain.append(Block(previous=genesis.digest()))
```

The building blocks are also available on their own:

- `Block.from_yaml` and `Block.from_mapping` build a block.
- `Block.digest` returns the block's hash.
- `Transaction`, `TransactionInput`, `TransactionOutput` and `OutPoint` are in
  `blockirc.block.transaction`.
- `Hash256` is in `blockirc.block.hashing`.
- `to_hex` and `from_hex` are in `blockirc.block.hexcodec`.
- `now` is in `blockirc.block.timeutil`.

## Chat server

```
blockirc-server [--host 0.0.0.0] [--port 8000]
```

Routes:

- `GET /` returns `Hello, world!`.
- `GET /register/<name>/<ip>` returns a new random session id. It returns `0`
  if the name is already taken.
- `POST /broadcast` takes a JSON body with the string fields `source_ip`,
  `user_name`, `session_id` and `message`. A body without all four fields gets
  status 400. If the user name, session id and address match a registered user,
  the message goes to every registered client with
  `GET http://<client ip>:8001/receive/<user_name>/<message>/<time>`. The time
  has the form `YYYY-MM-DD:::HH:MM:SS`. If they do not match, nothing is sent.
- `GET /logout/<session_id>/<name>/<ip>` removes the user and returns one of:
  - `logout successful`
  - `session cache not cleared, use different username`, when the session id
    or address does not match
  - `No user with the given user name exists to logout`

`blockirc.irc.server.create_app(registry, sender)` builds the Flask application.
`registry` is a `Registry`. `sender` replaces the function that delivers
messages to clients; by default this is `deliver`.

## Chat client

```
blockirc-client [--config conf.ini] [--db messages.db] [--host 0.0.0.0] [--port 8001]
```

The configuration file needs a `[Config]` section:

```ini
[Config]
local_ip = 127.0.0.1
server_ip = 127.0.0.1
```

The client reaches the server at `server_ip` on port 8000. Received messages
are stored in the SQLite file given by `--db`.

Routes:

- `GET /` returns `Hello, world!`, and `GET /<user>` returns `Hello, <user>!`.
- `GET /register/<name>` registers with the server. It returns `registered u`,
  or `This name is already registered, please log out and try again`.
- `GET /send/<message>` asks the server to broadcast the message.
- `GET /receive/<user_name>/<message>/<time>` stores a delivered message.
- `GET /get/messages/<count>` returns up to `count` stored messages, newest
  first, joined by commas. Each one has the form
  `{ "user_name":<name>, "message":<text>, "time":<time>}`. The values are not
  quoted, so the result is not JSON.
- `GET /logout` logs out from the server, forgets the session, and returns the
  server's reply.

From Python, the client is made of these pieces:

- `load_config` returns a `ClientConfig`.
- `ChatClient` has `register`, `send` and `logout`.
- `MessageStore` has `store`, `latest` and `close`, and can be used as a context
  manager.
- `create_app(client, store)` builds the Flask application.

## What this package does not do

- It does not write chain files.
- It does not read transactions from them. A block document that has a
  `transactions` field is rejected.
- There is no Merkle root check and no proof of work.
- The chat server keeps registrations in memory only, and loses them when it
  stops. Registrations never expire.
- Messages travel in URL paths over plain HTTP. The only check on the sender is
  its session id and address.