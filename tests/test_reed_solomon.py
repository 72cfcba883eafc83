import random

import pytest
from reedsolo import RSCodec

import qrsymbol.error_correction.reed_solomon as reed_solomon

# ISO/IEC 18004 예제 "01234567" 1-M
EXAMPLE_DATA = [0x10, 0x20, 0x0C, 0x56, 0x61, 0x80, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11]
EXAMPLE_PARITY = [0xA5, 0x24, 0xD4, 0xC1, 0xED, 0x36, 0xC7, 0x87, 0x2C, 0x55]


def test_galois_field_tables():
    assert reed_solomon.EXP[0] == 1
    assert reed_solomon.EXP[8] == 0x1D
    for i in range(255):
        assert reed_solomon.LOG[reed_solomon.EXP[i]] == i
    assert reed_solomon.EXP[255:510] == reed_solomon.EXP[:255]


def test_gf_mult():
    assert reed_solomon.gf_mult(0, 7) == 0
    assert reed_solomon.gf_mult(1, 0x53) == 0x53
    assert reed_solomon.gf_mult(2, 0x80) == 0x1D


def test_generator_polynomial_degree_7():
    gen = reed_solomon.generate_generator_polynomial(7)
    assert [reed_solomon.LOG[c] for c in gen] == [0, 87, 229, 146, 149, 238, 102, 21]


def test_rs_parity_standard_example():
    assert reed_solomon.rs_parity(EXAMPLE_DATA, 10) == EXAMPLE_PARITY


@pytest.mark.parametrize('nsym', [7, 10, 13, 17, 18, 22, 24, 26, 28, 30])
def test_rs_parity_matches_reedsolo(nsym):
    rng = random.Random(nsym)
    for length in (1, 9, 19, 54, 122):
        data = [rng.randrange(256) for _ in range(length)]
        expected = list(RSCodec(nsym).encode(bytearray(data)))[-nsym:]
        assert reed_solomon.rs_parity(data, nsym) == expected


def test_rs_parity_sensitive_to_every_byte():
    parity = reed_solomon.rs_parity(EXAMPLE_DATA, 10)
    for i in range(len(EXAMPLE_DATA)):
        corrupted = list(EXAMPLE_DATA)
        corrupted[i] ^= 0x01
        assert reed_solomon.rs_parity(corrupted, 10) != parity


def test_rs_parity_does_not_modify_input():
    data = list(EXAMPLE_DATA)
    reed_solomon.rs_parity(data, 10)
    assert data == EXAMPLE_DATA
