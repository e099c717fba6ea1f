"""Tests for ResultCodec."""

from dataclasses import dataclass

import pytest

from querycache import CachedMeta, JsonSerializer, MalformedCacheEntryError
from querycache.core.services.result_codec import ResultCodec, default_id_getter


@dataclass
class Row:
    id: int


class TestDefaultIdGetter:
    """Tests for identifier extraction."""

    def test_attribute(self) -> None:
        assert default_id_getter(Row(id=7)) == 7

    def test_mapping(self) -> None:
        assert default_id_getter({"id": "abc", "title": "x"}) == "abc"

    def test_scalar(self) -> None:
        assert default_id_getter(42) == 42
        assert default_id_getter("slug") == "slug"

    @pytest.mark.parametrize("value", [True, {"title": "x"}, object(), 1.5])
    def test_unidentifiable(self, value: object) -> None:
        with pytest.raises(MalformedCacheEntryError):
            default_id_getter(value)


class TestResultCodec:
    """Tests for ResultCodec."""

    @pytest.fixture
    def codec(self) -> ResultCodec:
        """Create a codec for testing."""
        return ResultCodec(JsonSerializer())

    def test_extract_ids_keeps_order(self, codec: ResultCodec) -> None:
        """Identifiers come back in result order."""
        assert codec.extract_ids([Row(3), Row(1), Row(2)]) == (3, 1, 2)

    def test_custom_id_getter(self) -> None:
        """A custom getter replaces the default extraction."""
        codec = ResultCodec(JsonSerializer(), id_getter=lambda row: row["pk"])

        assert codec.extract_ids([{"pk": 5}]) == (5,)

    def test_ids_roundtrip(self, codec: ResultCodec) -> None:
        """Stored identifiers decode to the same tuple."""
        data = codec.encode_ids((3, 1, "x"))

        assert codec.decode_ids(data) == (3, 1, "x")

    def test_empty_ids_are_distinct_from_absence(self, codec: ResultCodec) -> None:
        """An empty list decodes to an empty tuple, not None."""
        assert codec.decode_ids(codec.encode_ids(())) == ()

    @pytest.mark.parametrize(
        "data",
        [b"{", b'{"ids": [1]}', b'"1,2"', b"[1, null]", b"[[1]]", b"[true]"],
    )
    def test_decode_ids_rejects_bad_shapes(
        self, codec: ResultCodec, data: bytes
    ) -> None:
        """Anything but a flat list of identifiers is malformed."""
        with pytest.raises(MalformedCacheEntryError):
            codec.decode_ids(data)

    def test_meta_roundtrip(self, codec: ResultCodec) -> None:
        """Metadata survives storage."""
        meta = CachedMeta(found_posts=120, max_num_pages=12)

        assert codec.decode_meta(codec.encode_meta(meta)) == meta

    @pytest.mark.parametrize(
        "data",
        [
            b"[]",
            b'{"found_posts": 3}',
            b'{"found_posts": 3, "max_num_pages": "1"}',
            b'{"found_posts": -1, "max_num_pages": 1}',
            b'{"found_posts": false, "max_num_pages": 1}',
        ],
    )
    def test_decode_meta_rejects_bad_shapes(
        self, codec: ResultCodec, data: bytes
    ) -> None:
        """Records missing a valid counter are malformed."""
        with pytest.raises(MalformedCacheEntryError):
            codec.decode_meta(data)
