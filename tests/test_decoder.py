import base64
import struct

import pytest

from llmmina.solana.decoder import (
    METAPLEX_METADATA,
    SYSTEM_PROGRAM,
    TOKEN_2022_PROGRAM,
    TOKEN_PROGRAM,
    DecodeError,
    GenericAccount,
    MetaplexMetadata,
    SystemAccount,
    TokenAccountData,
    TokenAccountState,
    TokenMintData,
    b58encode,
    decode_account,
    decode_from_rpc_response,
    decoded_to_json,
)

UNKNOWN = "UnknownProgram111111111111111111111111111"


def _mint_bytes():
    data = bytearray(82)
    data[4:36] = bytes([1] * 32)
    data[36:44] = (1000).to_bytes(8, "little")
    data[44] = 9
    data[45] = 1
    return bytes(data)


def _token_account_bytes(state):
    data = bytearray(165)
    data[32:64] = bytes([2] * 32)
    data[64:72] = (500).to_bytes(8, "little")
    data[72:104] = bytes([3] * 32)
    data[104] = state
    data[112:120] = (7).to_bytes(8, "little")
    return bytes(data)


def _metaplex_bytes():
    def text(s):
        raw = s.encode()
        return struct.pack("<I", len(raw)) + raw

    return (
        bytes([4])
        + bytes([5] * 32)
        + bytes([6] * 32)
        + text("Test")
        + text("TST")
        + text("https://example.com/a.json")
        + struct.pack("<H", 500)
        + bytes([1, 0])
    )


def test_b58encode_known_values():
    assert b58encode(b"") == ""
    assert b58encode(b"hello world") == "StV1DL6CwTryKyV"
    assert b58encode(bytes(32)) == SYSTEM_PROGRAM
    assert b58encode(b"\x00\x00\x01") == "112"


def test_decode_generic_account():
    decoded = decode_account(UNKNOWN, bytes([1, 2, 3, 4]))
    assert isinstance(decoded, GenericAccount)
    assert decoded.owner == UNKNOWN
    assert decoded.data == bytes([1, 2, 3, 4])


def test_system_account():
    decoded = decode_account(SYSTEM_PROGRAM, b"")
    assert isinstance(decoded, SystemAccount)
    assert decoded.owner == SYSTEM_PROGRAM
    assert decoded.lamports == 0


def test_token_data_too_short():
    with pytest.raises(DecodeError) as exc:
        decode_account(TOKEN_PROGRAM, bytes(5))
    assert exc.value.expected == 8
    assert exc.value.actual == 5


def test_token_other_length_is_generic():
    decoded = decode_account(TOKEN_2022_PROGRAM, bytes(10))
    assert isinstance(decoded, GenericAccount)
    assert decoded.owner == TOKEN_PROGRAM


@pytest.mark.parametrize("owner", [TOKEN_PROGRAM, TOKEN_2022_PROGRAM])
def test_token_mint(owner):
    decoded = decode_account(owner, _mint_bytes())
    assert isinstance(decoded, TokenMintData)
    assert decoded.supply == 1000
    assert decoded.decimals == 9
    assert decoded.is_initialized is True
    assert decoded.mint_authority == b58encode(bytes([1] * 32))
    assert decoded.freeze_authority is None


@pytest.mark.parametrize(
    "state_byte,state",
    [(1, TokenAccountState.INITIALIZED), (2, TokenAccountState.FROZEN)],
)
def test_token_account(state_byte, state):
    decoded = decode_account(TOKEN_PROGRAM, _token_account_bytes(state_byte))
    assert isinstance(decoded, TokenAccountData)
    assert decoded.mint == "1" * 32
    assert decoded.owner == b58encode(bytes([2] * 32))
    assert decoded.amount == 500
    assert decoded.delegate == b58encode(bytes([3] * 32))
    assert decoded.state is state
    assert decoded.is_native is None
    assert decoded.delegated_amount == 7
    assert decoded.close_authority is None


def test_metaplex_metadata():
    decoded = decode_account(METAPLEX_METADATA, _metaplex_bytes())
    assert isinstance(decoded, MetaplexMetadata)
    assert decoded.key == 4
    assert decoded.name == "Test"
    assert decoded.symbol == "TST"
    assert decoded.uri == "https://example.com/a.json"
    assert decoded.seller_fee_basis_points == 500
    assert decoded.primary_sale_happened is True
    assert decoded.is_mutable is False
    assert decoded.creators == []
    assert decoded.update_authority == b58encode(bytes([5] * 32))


def test_metaplex_empty_data_errors():
    with pytest.raises(DecodeError) as exc:
        decode_account(METAPLEX_METADATA, b"")
    assert exc.value.expected == 1


def test_metaplex_other_key_is_generic():
    decoded = decode_account(METAPLEX_METADATA, bytes([6] * 100))
    assert isinstance(decoded, GenericAccount)
    assert decoded.owner == METAPLEX_METADATA


def test_metaplex_truncated_errors():
    data = bytearray(_metaplex_bytes())
    data[65:69] = struct.pack("<I", 10_000)
    with pytest.raises(DecodeError):
        decode_account(METAPLEX_METADATA, bytes(data))


def test_decoded_to_json_tags():
    system = decoded_to_json(decode_account(SYSTEM_PROGRAM, b""))
    assert system == {
        "program": "system",
        "lamports": 0,
        "owner": SYSTEM_PROGRAM,
        "executable": False,
    }
    account = decoded_to_json(decode_account(TOKEN_PROGRAM, _token_account_bytes(1)))
    assert account["program"] == "tokenaccount"
    assert account["state"] == "initialized"
    generic = decoded_to_json(decode_account(UNKNOWN, bytes([9, 8])))
    assert generic["data"] == [9, 8]


def test_decode_from_rpc_response_list_data():
    encoded = base64.b64encode(bytes([1, 2, 3])).decode()
    decoded = decode_from_rpc_response({"owner": UNKNOWN, "data": [encoded, "base64"]})
    assert isinstance(decoded, GenericAccount)
    assert decoded.data == bytes([1, 2, 3])


def test_decode_from_rpc_response_string_data():
    encoded = base64.b64encode(_mint_bytes()).decode()
    decoded = decode_from_rpc_response({"owner": TOKEN_PROGRAM, "data": encoded})
    assert isinstance(decoded, TokenMintData)
    assert decoded.supply == 1000


def test_decode_from_rpc_response_missing_owner():
    with pytest.raises(DecodeError, match="Missing owner"):
        decode_from_rpc_response({"data": "AQID"})


def test_decode_from_rpc_response_missing_data():
    with pytest.raises(DecodeError, match="Missing data"):
        decode_from_rpc_response({"owner": UNKNOWN})


def test_decode_from_rpc_response_bad_base64():
    with pytest.raises(DecodeError, match="Base64"):
        decode_from_rpc_response({"owner": UNKNOWN, "data": "!!not-base64!!"})