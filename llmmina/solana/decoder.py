"""Decoding of Solana account data for SPL Token, Metaplex and system accounts."""

import base64
import binascii
import dataclasses
import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union

TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"
METAPLEX_METADATA = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"
SYSTEM_PROGRAM = "11111111111111111111111111111111"

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

_MINT_LEN = 82
_TOKEN_ACCOUNT_LEN = 165
_METAPLEX_METADATA_KEY = 4


class DecodeError(Exception):
    """Raised when account data cannot be decoded."""

    def __init__(self, message: str, *, expected: int | None = None, actual: int | None = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


def _invalid_length(expected: int, actual: int) -> DecodeError:
    return DecodeError(
        f"Invalid account data length: expected {expected}, got {actual}",
        expected=expected,
        actual=actual,
    )


def b58encode(data: bytes) -> str:
    """Base58 (Bitcoin alphabet) encoding; each leading zero byte becomes '1'."""
    data = bytes(data)
    stripped = data.lstrip(b"\0")
    leading = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_B58_ALPHABET[rem])
    return "1" * leading + "".join(reversed(digits))


class TokenAccountState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    FROZEN = "frozen"


@dataclass
class TokenMintData:
    program_tag: ClassVar[str] = "tokenmint"

    mint_authority: str | None
    supply: int
    decimals: int
    is_initialized: bool
    freeze_authority: str | None


@dataclass
class TokenAccountData:
    program_tag: ClassVar[str] = "tokenaccount"

    mint: str
    owner: str
    amount: int
    delegate: str | None
    state: TokenAccountState
    is_native: int | None
    delegated_amount: int
    close_authority: str | None


@dataclass
class Creator:
    address: str
    verified: bool
    share: int


@dataclass
class MetaplexMetadata:
    program_tag: ClassVar[str] = "metaplexmetadata"

    key: int
    update_authority: str
    mint: str
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    creators: list[Creator] = field(default_factory=list)
    primary_sale_happened: bool = False
    is_mutable: bool = False
    edition_nonce: int | None = None


@dataclass
class PrintSupply:
    current: int
    max: int | None = None


@dataclass
class MetaplexMasterEdition:
    program_tag: ClassVar[str] = "metaplexmasteredition"

    key: int
    edition: int
    mint: str
    print_supply: PrintSupply | None = None


@dataclass
class SystemAccount:
    program_tag: ClassVar[str] = "system"

    lamports: int
    owner: str
    executable: bool


@dataclass
class GenericAccount:
    program_tag: ClassVar[str] = "generic"

    owner: str
    data: bytes
    executable: bool = False


DecodedAccount = Union[
    TokenMintData,
    TokenAccountData,
    MetaplexMetadata,
    MetaplexMasterEdition,
    SystemAccount,
    GenericAccount,
]


def _u64(data: bytes, start: int) -> int:
    return struct.unpack_from("<Q", data, start)[0]


def _decode_token_mint(data: bytes) -> TokenMintData:
    if len(data) < _MINT_LEN:
        raise _invalid_length(_MINT_LEN, len(data))
    return TokenMintData(
        mint_authority=b58encode(data[4:36]) if data[36] != 0 else None,
        supply=_u64(data, 36),
        decimals=data[44],
        is_initialized=data[45] != 0,
        freeze_authority=b58encode(data[45:77]) if data[77] != 0 else None,
    )


_STATES = {
    0: TokenAccountState.UNINITIALIZED,
    1: TokenAccountState.INITIALIZED,
    2: TokenAccountState.FROZEN,
}


def _decode_token_account_data(data: bytes) -> TokenAccountData:
    if len(data) < _TOKEN_ACCOUNT_LEN:
        raise _invalid_length(_TOKEN_ACCOUNT_LEN, len(data))
    return TokenAccountData(
        mint=b58encode(data[0:32]),
        owner=b58encode(data[32:64]),
        amount=_u64(data, 64),
        delegate=b58encode(data[72:104]) if data[104] != 0 else None,
        state=_STATES.get(data[104], TokenAccountState.UNINITIALIZED),
        is_native=_u64(data, 104) if data[136] != 0 else None,
        delegated_amount=_u64(data, 112),
        close_authority=b58encode(data[120:152]) if data[161] != 0 else None,
    )


def _decode_token(data: bytes) -> DecodedAccount:
    if len(data) < 8:
        raise _invalid_length(8, len(data))
    if len(data) == _MINT_LEN:
        return _decode_token_mint(data)
    if len(data) == _TOKEN_ACCOUNT_LEN:
        return _decode_token_account_data(data)
    return GenericAccount(owner=TOKEN_PROGRAM, data=data)


class _Reader:
    def __init__(self, data: bytes, pos: int):
        self._data = data
        self._pos = pos

    def take(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise _invalid_length(end, len(self._data))
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def u32(self) -> int:
        return struct.unpack("<I", self.take(4))[0]

    def u16(self) -> int:
        return struct.unpack("<H", self.take(2))[0]

    def text(self) -> str:
        return self.take(self.u32()).decode("utf-8", errors="replace")


def _decode_metaplex(data: bytes) -> DecodedAccount:
    if not data:
        raise _invalid_length(1, 0)
    key = data[0]
    if key != _METAPLEX_METADATA_KEY or len(data) < _MINT_LEN:
        return GenericAccount(owner=METAPLEX_METADATA, data=data)
    reader = _Reader(data, 65)
    name = reader.text()
    symbol = reader.text()
    uri = reader.text()
    seller_fee = reader.u16()
    flags = reader.take(2)
    return MetaplexMetadata(
        key=key,
        update_authority=b58encode(data[1:33]),
        mint=b58encode(data[33:65]),
        name=name,
        symbol=symbol,
        uri=uri,
        seller_fee_basis_points=seller_fee,
        creators=[],
        primary_sale_happened=flags[0] != 0,
        is_mutable=flags[1] != 0,
        edition_nonce=None,
    )


def decode_account(owner: str, data: bytes) -> DecodedAccount:
    """Decode raw account data according to the program that owns it."""
    data = bytes(data)
    if owner in (TOKEN_PROGRAM, TOKEN_2022_PROGRAM):
        return _decode_token(data)
    if owner == METAPLEX_METADATA:
        return _decode_metaplex(data)
    if owner == SYSTEM_PROGRAM:
        return SystemAccount(lamports=0, owner=owner, executable=False)
    return GenericAccount(owner=owner, data=data)


def _json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, dict):
        return {key: _json_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_value(item) for item in value]
    return value


def decoded_to_json(decoded: DecodedAccount) -> dict[str, Any]:
    """JSON-ready form of a decoded account, tagged with its "program" kind."""
    body = {name: _json_value(item) for name, item in dataclasses.asdict(decoded).items()}
    return {"program": type(decoded).program_tag, **body}


def decode_from_rpc_response(account_data: Any) -> DecodedAccount:
    """Decode the account object of a getAccountInfo RPC response."""
    fields = account_data if isinstance(account_data, dict) else {}
    owner = fields.get("owner")
    if not isinstance(owner, str):
        raise DecodeError("Parse error: Missing owner field")
    raw = fields.get("data")
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    if not isinstance(raw, str):
        raise DecodeError("Parse error: Missing data field")
    try:
        data = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Base64 decode error: {exc}") from exc
    return decode_account(owner, data)