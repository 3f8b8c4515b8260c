"""
SchemaEncoder end to end: construction, encode/decode round trips, content
hash fields, validity probing and the static CID helpers.
"""

from __future__ import annotations

import pytest
from eth_abi import encode as abi_encode

from eas_schema import (CodecError, FieldKind, NamedValue, SchemaEncoder,
                        SchemaItem, SchemaParseError, ValidationError,
                        ZERO_ADDRESS)
from eas_schema.utils.bytes import parse_bytes32_string


def test_construction_fails_fast_on_bad_schema():
    with pytest.raises(SchemaParseError):
        SchemaEncoder("uint256 a, strin b")


def test_schema_accessors():
    enc = SchemaEncoder("uint256 eventId, (address who, uint8 score)[] votes")
    assert len(enc) == 2
    assert enc.types() == ["uint256", "(address,uint8)[]"]
    assert enc.signatures() == ["uint256 eventId", "(address who,uint8 score)[] votes"]
    assert [f.kind for f in enc.schema] == [FieldKind.PRIMITIVE, FieldKind.TUPLE_ARRAY]


def test_template_encodes():
    enc = SchemaEncoder("bool ok, uint64 n, address who, string s, bytes32 tag, uint8[] xs")
    items = enc.template()
    assert [i.value for i in items] == [False, "0", ZERO_ADDRESS, "", "", []]
    blob = enc.encode_data(items)
    assert enc.is_encoded_data_valid(blob)


def test_scalar_roundtrip(addresses):
    enc = SchemaEncoder("uint256 eventId, bool ok, address who, string note, bytes raw, int16 delta")
    items = [
        SchemaItem("eventId", "uint256", 2**200),
        SchemaItem("ok", "bool", True),
        SchemaItem("who", "address", addresses[0]),
        SchemaItem("note", "string", "héllo"),
        SchemaItem("raw", "bytes", b"\x00\x01"),
        SchemaItem("delta", "int16", -300),
    ]
    decoded = enc.decode_data(enc.encode_data(items))
    assert [(f.name, f.type) for f in decoded] == [(i.name, i.type) for i in items]
    assert [f.value.value for f in decoded] == [i.value for i in items]


def test_point_tuple_roundtrip():
    enc = SchemaEncoder("(uint256 x,uint256 y) point")
    blob = enc.encode_data(
        [{"name": "point", "type": "(uint256,uint256)", "value": [{"x": 1}, {"y": 2}]}]
    )
    (field,) = enc.decode_data(blob)
    assert field.name == "point"
    assert field.type == "(uint256,uint256)"
    assert field.signature == "(uint256 x,uint256 y) point"
    assert [c.name for c in field.value.value] == ["x", "y"]
    assert [c.value for c in field.value.value] == [1, 2]


def test_mismatches_never_encode():
    enc = SchemaEncoder("uint256 a, uint256 b")
    with pytest.raises(ValidationError):
        enc.encode_data([{"name": "a", "type": "uint256", "value": 1}])
    with pytest.raises(ValidationError):
        enc.encode_data(
            [
                {"name": "b", "type": "uint256", "value": 1},
                {"name": "a", "type": "uint256", "value": 2},
            ]
        )
    with pytest.raises(ValidationError):
        enc.encode_data(
            [
                {"name": "a", "type": "uint8", "value": 1},
                {"name": "b", "type": "uint256", "value": 2},
            ]
        )


@pytest.mark.parametrize("schema", ["ipfsHash ipfsHash", "bytes32 ipfsHash"])
def test_content_hash_field_accepts_cid_and_hex(schema, qm_cid, digest):
    enc = SchemaEncoder(schema)
    for typ, value in (("bytes32", qm_cid), ("ipfsHash", qm_cid), ("bytes32", "0x" + digest.hex())):
        blob = enc.encode_data([{"name": "ipfsHash", "type": typ, "value": value}])
        assert blob == digest
        assert enc.is_encoded_data_valid(blob)
        (field,) = enc.decode_data(blob)
        assert SchemaEncoder.decode_qm_hash(field.value.value) == qm_cid


def test_content_hash_field_falls_back_for_plain_text():
    enc = SchemaEncoder("ipfsHash doc")
    blob = enc.encode_data([{"name": "doc", "type": "ipfsHash", "value": "draft-7"}])
    (field,) = enc.decode_data(blob)
    assert parse_bytes32_string(field.value.value) == "draft-7"


def test_plain_bytes32_field_does_not_parse_cids(qm_cid):
    enc = SchemaEncoder("bytes32 tag")
    blob = enc.encode_data([{"name": "tag", "type": "bytes32", "value": qm_cid[:31]}])
    assert parse_bytes32_string(blob) == qm_cid[:31]


def test_invalid_data_is_reported_not_raised():
    enc = SchemaEncoder("uint256 eventId, string note, (uint8 a, bool b)[] rows")
    blob = enc.encode_data(
        [
            {"name": "eventId", "type": "uint256", "value": 1},
            {"name": "note", "type": "string", "value": "x"},
            {"name": "rows", "type": "(uint8,bool)[]", "value": [[1, True]]},
        ]
    )
    assert enc.is_encoded_data_valid(blob)
    assert enc.is_encoded_data_valid("0x" + blob.hex())
    for bad in (blob[:-32], blob[:5], b"", b"\xff" * len(blob), "0x123"):
        assert enc.is_encoded_data_valid(bad) is False
    with pytest.raises(CodecError):
        enc.decode_data(blob[:5])


def test_empty_schema():
    enc = SchemaEncoder("")
    assert enc.schema == ()
    blob = enc.encode_data([])
    assert blob == abi_encode([], [])
    assert enc.decode_data(blob) == []


def test_decoded_field_envelope():
    enc = SchemaEncoder("uint8 a")
    (field,) = enc.decode_data(enc.encode_data([{"name": "a", "type": "uint8", "value": 4}]))
    assert field.value == NamedValue("a", "uint8", 4)
    assert field.to_dict() == {
        "name": "a",
        "type": "uint8",
        "signature": "uint8 a",
        "value": {"name": "a", "type": "uint8", "value": 4},
    }


def test_static_cid_helpers(qm_cid, digest):
    assert SchemaEncoder.is_cid(qm_cid)
    assert not SchemaEncoder.is_cid("nope")
    assert SchemaEncoder.encode_qm_hash(qm_cid) == digest
    assert SchemaEncoder.decode_qm_hash(digest) == qm_cid
