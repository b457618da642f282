# llmmina

Shared building blocks for an agent-driven chain runtime, written with the
standard library only.

## What is in the package

### `llmmina.protocol`

- `schema`: `SemVer` (frozen, ordered; `SemVer.current()` is `0.1.0`, and
  `str()` gives `"0.1.0"`), `AgentId` (`CORE_RUNTIME`, `SOLANA_QUERY`,
  `PROOF_PROVENANCE`, with `as_str()`), and `ApiVersion`.
- `receipt`: `CanonicalReceipt` with `create()`, `with_merkle_root()`,
  `with_signature()`, `verify_integrity()` and `to_dict()`; `ReceiptType`;
  `hash_json_canonical()` (SHA-256 over JSON with sorted keys) and
  `merkle_root_from_hashes()` (32-byte hashes, an odd last node paired with
  itself, 32 zero bytes for an empty list).
- `canonical_log`: `CanonicalLogEntry` with `create()`, `to_dict()` and
  `to_canonical_json()` (compact, single-line JSON); `LogLevel`; and
  `log_info()` / `log_warn()` (stdout) and `log_error()` (stderr), each
  tagging the entry with a fresh random trace id.
- `config`: `CanonicalConfig` with sections `core`, `storage`, `solana`,
  `proof`, `api`, `network` and `logging`. `CanonicalConfig.from_file(path)`
  reads a TOML file and raises `ConfigError` if it is missing, malformed or
  incomplete. `CanonicalConfig.from_env_or_default(environ=None)` starts from
  built-in defaults and overlays `LLM_MINA_*` variables: the rest of the name is
  lower-cased and split on every `_`, so `LLM_MINA_LOGGING_LEVEL=debug` sets
  `logging.level`. Because of that split, only fields whose names hold no
  underscore can be set this way.

### `llmmina.semantic`

- `context`: `RuntimeContext.gather()` records the working directory, the
  nearest parent holding `Cargo.toml`, `package.json` or `.git`, Git state
  (branch, last commit, origin URL, changed files, last five commit subjects,
  obtained by running `git`) and the `LANG` preference.
  `with_solana(endpoint)` returns a copy attached to an endpoint, with
  `rpc_health` set to `"unknown"`.

### `llmmina.solana`

- `decoder`: `decode_account(owner, data)` decodes SPL Token mints (82 bytes)
  and token accounts (165 bytes), Metaplex metadata, and system accounts, and
  returns a `GenericAccount` for anything else. `decode_from_rpc_response()`
  takes the account object of a `getAccountInfo` response (base64 data).
  `decoded_to_json()` gives a dict tagged with a `"program"` key, and
  `b58encode()` is the base58 encoder used for addresses. Failures raise
  `DecodeError`.
- `knowledge_base`: `SolanaKnowledgeBase` with `ask(question)`,
  `list_topics()` and `get_topic(name)`. `ask` picks the topic whose matched
  keywords are longest in total and returns an `Answer`, or `None`.

## Installation

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Examples

```python
from llmmina.protocol.schema import AgentId
from llmmina.protocol.receipt import CanonicalReceipt, ReceiptType, merkle_root_from_hashes

receipt = CanonicalReceipt.create(
    AgentId.CORE_RUNTIME, ReceiptType.EXECUTION, "block produced", {"height": 1}
)
assert receipt.verify_integrity()
sealed = receipt.with_merkle_root(merkle_root_from_hashes([receipt.payload_hash]))
```

```python
from llmmina.protocol.canonical_log import CanonicalLogEntry, LogLevel
from llmmina.protocol.schema import AgentId

entry = CanonicalLogEntry.create(
    LogLevel.INFO, AgentId.PROOF_PROVENANCE, "prover", "proof_done", {"ok": True}, "trace-1"
)
print(entry.to_canonical_json())
```

```python
from llmmina.protocol.config import CanonicalConfig

config = CanonicalConfig.from_env_or_default({"LLM_MINA_LOGGING_LEVEL": "debug"})
print(config.logging.level, config.core.chain_id)
```

```python
from llmmina.solana.decoder import SYSTEM_PROGRAM, decode_account, decoded_to_json
from llmmina.solana.knowledge_base import SolanaKnowledgeBase

print(decoded_to_json(decode_account(SYSTEM_PROGRAM, b"")))

answer = SolanaKnowledgeBase().ask("How do PDA bump seeds work?")
if answer is not None:
    print(answer.topic, answer.answer)
```

## What the package does not do

It is a library with no command of its own. It has no Solana RPC client, no
HTTP or WebSocket server, no interactive prompt, no intent routing or session
history, no rate limiting or transaction validation, and no persistent
storage. `RuntimeContext.gather()` is the only part that starts another
program (`git`).

## Running the tests

```
pytest
```