import json

import pytest
from eth_abi import encode
from eth_utils import keccak

from anchor_resolver import abi_decoder
from anchor_resolver.errors import TransportError

from .conftest import ANCHOR_HASH, FakeTransport

ANCHOR_ABI = [
    {
        "type": "function",
        "name": "anchor",
        "inputs": [{"name": "root", "type": "bytes32"}],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {"type": "event", "name": "Anchored", "inputs": [{"name": "root", "type": "bytes32", "indexed": True}]},
]

BATCH_ABI = [
    {
        "type": "function",
        "name": "publish",
        "inputs": [
            {"name": "id", "type": "uint256"},
            {
                "name": "info",
                "type": "tuple",
                "components": [
                    {"name": "uri", "type": "string"},
                    {"name": "root", "type": "bytes32"},
                ],
            },
        ],
    },
]

ABI_URL = "https://explorer.test/api?module=contract&action=getabi&address=0xc0de"


def anchor_call_input() -> str:
    selector = keccak(text="anchor(bytes32)")[:4]
    return "0x" + (selector + encode(["bytes32"], [bytes.fromhex(ANCHOR_HASH)])).hex()


def publish_call_input() -> str:
    selector = keccak(text="publish(uint256,(string,bytes32))")[:4]
    args = encode(["uint256", "(string,bytes32)"], [7, ("ipfs://cert", bytes.fromhex(ANCHOR_HASH))])
    return "0x" + (selector + args).hex()


class TestDecodeInputWithAbi:

    def test_decodes_bytes32_argument(self):
        assert abi_decoder.decode_input_with_abi(ANCHOR_ABI, anchor_call_input()) == "0x" + ANCHOR_HASH

    def test_decodes_nested_tuple(self):
        assert abi_decoder.decode_input_with_abi(BATCH_ABI, publish_call_input()) == "0x" + ANCHOR_HASH

    def test_decoded_structure(self):
        decoded = abi_decoder.decode_function_input(BATCH_ABI, publish_call_input())
        assert decoded["method"] == "publish"
        assert decoded["types"] == ["uint256", "(string,bytes32)"]
        assert decoded["names"] == ["id", "info"]
        assert decoded["inputs"] == [7, ["ipfs://cert", "0x" + ANCHOR_HASH]]

    def test_unknown_selector(self):
        assert abi_decoder.decode_input_with_abi(BATCH_ABI, anchor_call_input()) is None

    def test_plain_payload_is_not_decoded(self):
        # selector 자리에 해시 앞 4바이트가 오므로 일치하는 함수 없음
        assert abi_decoder.decode_input_with_abi(ANCHOR_ABI, "0x" + ANCHOR_HASH) is None

    def test_garbage_input(self):
        assert abi_decoder.decode_input_with_abi(ANCHOR_ABI, "0xnothex") is None

    def test_truncated_arguments(self):
        assert abi_decoder.decode_input_with_abi(ANCHOR_ABI, anchor_call_input()[:20]) is None

    def test_empty_abi(self):
        assert abi_decoder.decode_input_with_abi([], anchor_call_input()) is None
        assert abi_decoder.decode_input_with_abi(None, anchor_call_input()) is None


class TestFindHashCandidate:

    def test_walks_nested_values(self):
        value = {"method": "x", "inputs": [1, ["short", {"root": "0x" + ANCHOR_HASH}]]}
        assert abi_decoder.find_hash_candidate(value) == "0x" + ANCHOR_HASH

    def test_first_match_wins(self):
        other = "0x" + "11" * 32
        assert abi_decoder.find_hash_candidate([other, "0x" + ANCHOR_HASH]) == other

    def test_no_match(self):
        assert abi_decoder.find_hash_candidate({"a": ["0x1234", 5, None]}) is None


class TestDecode:

    @pytest.mark.asyncio
    async def test_abi_as_json_string(self):
        transport = FakeTransport({"status": "1", "result": json.dumps(ANCHOR_ABI)})
        assert await abi_decoder.decode(transport, ABI_URL, anchor_call_input()) == "0x" + ANCHOR_HASH
        assert transport.calls == [ABI_URL]

    @pytest.mark.asyncio
    async def test_abi_as_list(self):
        transport = FakeTransport({"result": ANCHOR_ABI})
        assert await abi_decoder.decode(transport, ABI_URL, anchor_call_input()) == "0x" + ANCHOR_HASH

    @pytest.mark.asyncio
    async def test_fetch_failure_is_absorbed(self):
        transport = FakeTransport(TransportError(ABI_URL, "rejected"))
        assert await abi_decoder.decode(transport, ABI_URL, anchor_call_input()) is None

    @pytest.mark.asyncio
    async def test_unverified_contract(self):
        transport = FakeTransport({"status": "0", "result": "Contract source code not verified"})
        assert await abi_decoder.decode(transport, ABI_URL, anchor_call_input()) is None

    @pytest.mark.asyncio
    async def test_missing_result(self):
        transport = FakeTransport({"status": "0", "message": "NOTOK"})
        assert await abi_decoder.decode(transport, ABI_URL, anchor_call_input()) is None

    @pytest.mark.asyncio
    async def test_abi_that_is_not_a_list(self):
        transport = FakeTransport({"status": "1", "result": json.dumps({"name": "anchor"})})
        assert await abi_decoder.get_smart_contract_abi(transport, ABI_URL) is None
        assert transport.calls == [ABI_URL]
