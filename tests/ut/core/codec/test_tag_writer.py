import pytest

from pulsewire.core.codec.tags import Tag


@pytest.mark.ut
def test_put_methods_chain_and_accumulate(writer):
    result = writer.put_u32(1).put_string("x").put_boolean(True)

    assert result is writer
    assert writer.getvalue() == b"L\x00\x00\x00\x01tx\x001"
    assert len(writer) == 9


@pytest.mark.ut
def test_sample_spec_layout(writer):
    writer.put_sample_spec(3, 2, 44100)

    assert writer.getvalue() == b"a\x03\x02\x00\x00\xac\x44"


@pytest.mark.ut
def test_channel_map_layout(writer):
    writer.put_channel_map([1, 2])

    assert writer.getvalue() == b"m\x02\x01\x02"


@pytest.mark.ut
def test_cvolume_layout(writer):
    writer.put_cvolume([0x10000, 0])

    assert writer.getvalue() == b"v\x02\x00\x01\x00\x00\x00\x00\x00\x00"


@pytest.mark.ut
def test_format_info_layout(writer):
    writer.put_format_info(1, {})

    assert writer.getvalue() == b"fB\x01PN"


@pytest.mark.ut
def test_put_tag_writes_bare_byte(writer):
    writer.put_tag(Tag.STRING_NULL)

    assert writer.getvalue() == b"N"
