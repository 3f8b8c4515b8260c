"""
Property tests for the schema encoder.

1) Any value list accepted by encode_data decodes back to the same names,
   canonical types and values.
2) Re-encoding decoded output reproduces the exact bytes.
3) The validity check never raises, whatever bytes it is handed.
"""
from __future__ import annotations

from eas_schema import SchemaEncoder
from tests.property import given, st

SCHEMA = (
    "uint256 id, int64 delta, bool ok, string note, bytes raw, "
    "(uint32 x, uint32 y)[] points, uint8[] tags"
)
ENC = SchemaEncoder(SCHEMA)

uint256 = st.integers(min_value=0, max_value=2**256 - 1)
int64 = st.integers(min_value=-(2**63), max_value=2**63 - 1)
uint32 = st.integers(min_value=0, max_value=2**32 - 1)
uint8 = st.integers(min_value=0, max_value=255)

values = st.tuples(
    uint256,
    int64,
    st.booleans(),
    st.text(max_size=64),
    st.binary(max_size=96),
    st.lists(st.tuples(uint32, uint32), max_size=5),
    st.lists(uint8, max_size=10),
)


def _items(vals):
    return [
        {"name": f.name, "type": f.type, "value": list(v) if isinstance(v, tuple) else v}
        for f, v in zip(ENC.schema, vals)
    ]


@given(values)
def test_roundtrip_preserves_names_types_and_values(vals):
    decoded = ENC.decode_data(ENC.encode_data(_items(vals)))
    assert [f.name for f in decoded] == [f.name for f in ENC.schema]
    assert [f.type for f in decoded] == ENC.types()

    id_, delta, ok, note, raw, points, tags = (f.value.value for f in decoded)
    assert (id_, delta, ok, note, raw, tags) == (vals[0], vals[1], vals[2], vals[3], vals[4], vals[6])
    assert [[c.value for c in p] for p in points] == [list(p) for p in vals[5]]
    assert all([c.name for c in p] == ["x", "y"] for p in points)


@given(values)
def test_reencoding_decoded_output_is_stable(vals):
    blob = ENC.encode_data(_items(vals))
    assert ENC.encode_data([f.to_item() for f in ENC.decode_data(blob)]) == blob


@given(st.binary(max_size=512))
def test_validity_check_never_raises(data):
    assert ENC.is_encoded_data_valid(data) in (True, False)
