"""
Unit tests for Whirlpool (ISO/IEC 10118-3).
"""

import pytest

from digestkit.errors import SizeError
from digestkit.hashing import Whirlpool, whirlpool, whirlpool_hex
from digestkit.hashing.whirlpool import C, IV, RC, SBOX, compress


class TestWhirlpool:
    """Known answers."""

    @pytest.mark.parametrize("text, expected", [
        ("",
         "19FA61D75522A4669B44E39C1D2E1726C530232130D407F89AFEE0964997F7A7"
         "3E83BE698B288FEBCF88E3E03C4F0757EA8964E59B63D93708B138CC42A66EB3"),
        ("a",
         "8ACA2602792AEC6F11A67206531FB7D7F0DFF59413145E6973C45001D0087B42"
         "D11BC645413AEFF63A42391A39145A591A92200D560195E53B478584FDAE231A"),
        ("abc",
         "4E2448A4C6F486BB16B6562C73B4020BF3043E3A731BCE721AE1B303D97E6D4C"
         "7181EEBDB6C57E277D0E34957114CBD6C797FC9D95D8B582D225292076D4EEF5"),
        ("message digest",
         "378C84A4126E2DC6E56DCC7458377AAC838D00032230F53CE1F5700C0FFB4D3B"
         "8421557659EF55C106B4B52AC5A4AAA692ED920052838F3362E86DBD37A8903E"),
        ("abcdbcdecdefdefgefghfghighijhijk",
         "2A987EA40F917061F5D6F0A0E4644F488A7A5A52DEEE656207C562F988E95C69"
         "16BDC8031BC5BE1B7B947639FE050B56939BAAA0ADFF9AE6745B7B181C3BE3FD"),
        ("1234567890" * 8,
         "466EF18BABB0154D25B9D38A6414F5C08784372BCCB204D6549C4AFADB601429"
         "4D5BD8DF2A6C44E538CD047B2681A51A2C60481E88C5A20B2C2A80CF3A9A083B"),
        ("The quick brown fox jumps over the lazy dog",
         "B97DE512E91E3828B40D2B0FDCE9CEB3C4A71F9BEA8D88E75C4FA854DF36725F"
         "D2B52EB6544EDCACD6F8BEDDFEA403CB55AE31F03AD62A5EF54E42EE82C3FB35"),
        ("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789012",
         "44BCBD91A7A355D27364C92CE831FBDF42BF696B18B1E166D4956C6C3B416D33"
         "4663D9817381A878987BE83403891AA55320DFF97EDDBC15558CA8DF1B181F02"),
    ])
    def test_vectors(self, text, expected):
        """ISO test vectors and common sentences."""
        assert whirlpool_hex(text.encode()) == expected.lower()

    def test_returns_64_bytes(self):
        """Whirlpool should return 64 bytes."""
        assert len(whirlpool(b"test")) == 64

    def test_streaming_across_length_field(self):
        """Messages of 31..33 bytes cross the 32-byte length field boundary."""
        for n in (31, 32, 33):
            data = b"q" * n
            h = Whirlpool()
            for byte in data:
                h.update(bytes((byte,)))
            assert h.sum() == whirlpool(data)


class TestTables:
    """Tables built at import time."""

    def test_sbox_is_permutation(self):
        """The S-box maps 256 bytes onto 256 distinct bytes."""
        assert len(SBOX) == 256
        assert len(set(SBOX)) == 256
        assert SBOX[0] == 0x18

    def test_circulant_first_entry(self):
        """C0[0] from the reference tables."""
        assert C[0][0] == 0x18186018c07830d8

    def test_columns_are_rotations(self):
        """Column t is column 0 rotated right by 8t bits."""
        for x in (0, 1, 127, 255):
            v = C[0][x]
            assert C[1][x] == ((v >> 8) | (v << 56)) & 0xFFFFFFFFFFFFFFFF

    def test_round_constants(self):
        """The first round constant starts with the first S-box bytes."""
        assert len(RC) == 10
        assert RC[0] >> 56 == 0x18
        assert RC[0] == 0x1823c6e887b8014f

    def test_compress_block_size(self):
        """compress only takes 64-byte blocks."""
        with pytest.raises(SizeError):
            compress(IV, b"\x00" * 63)
