import pytest

import qrsymbol.constants as constants
import qrsymbol.util as util
from qrsymbol.exceptions import InvalidCharacterError, UnsupportedConfigurationError

N = constants.MODE_NUMERIC
A = constants.MODE_ALPHANUMERIC
B = constants.MODE_BYTE
K = constants.MODE_KANJI


def units(text):
    return [ord(c) for c in text]


def test_define_mode():
    assert util.define_mode(units('0A%z')) == [N, A, A, B]
    assert util.define_mode([0x935F, 0xA0A0, 0xE9]) == [K, B, B]


def test_define_mode_force_byte():
    assert util.define_mode(units('12AB'), force_byte=True) == [B, B, B, B]


def test_define_mode_fnc1():
    assert util.define_mode([ord('1'), constants.FNC1], gs1=True) == [N, A]
    with pytest.raises(InvalidCharacterError):
        util.define_mode([ord('1'), constants.FNC1])


@pytest.mark.parametrize('unit', [-5, 0x10000, 'A', None])
def test_define_mode_invalid_unit(unit):
    with pytest.raises(InvalidCharacterError):
        util.define_mode([ord('A'), unit])


def test_is_kanji():
    assert util.is_kanji(0x8140)
    assert util.is_kanji(0xE4AA)
    assert not util.is_kanji(0xA0A0)
    assert not util.is_kanji(0x817F)


def test_to_units():
    assert util.to_units('Aé', 3) == [0x41, 0xE9]
    assert util.to_units(b'\x00\xff') == [0x00, 0xFF]
    assert util.to_units([1, 2, constants.FNC1]) == [1, 2, constants.FNC1]


def test_to_units_shift_jis_packs_double_bytes():
    assert util.to_units('A点茗', 20) == [0x41, 0x935F, 0xE4AA]


def test_to_units_unencodable():
    with pytest.raises(InvalidCharacterError):
        util.to_units('点', 3)


def test_get_eci():
    assert util.get_eci('hello') == 3
    assert util.get_eci('点') == 20
    assert util.get_eci('\U0001F600') == 26
    assert util.get_eci(b'hello') == 3
    assert util.get_eci(b'hello', 899) == 899
    assert util.get_eci('hello', 26) == 26


@pytest.mark.parametrize('eci', [-1, 1000000, '26', True])
def test_get_eci_invalid(eci):
    with pytest.raises(UnsupportedConfigurationError):
        util.get_eci(b'data', eci)


def test_get_eci_unknown_charset_for_text():
    with pytest.raises(UnsupportedConfigurationError):
        util.get_eci('data', 899)


def test_get_segments():
    assert util.get_segments([N, N, A, B, B]) == [(N, 0, 2), (A, 2, 1), (B, 3, 2)]
    assert util.get_segments([]) == []


@pytest.mark.parametrize('version, expected', [(1, 0), (9, 0), (10, 1), (26, 1), (27, 2), (40, 2)])
def test_get_version_bracket(version, expected):
    assert util.get_version_bracket(version) == expected


def test_get_char_count_indicator_length():
    assert util.get_char_count_indicator_length(1, N) == 10
    assert util.get_char_count_indicator_length(10, A) == 11
    assert util.get_char_count_indicator_length(27, B) == 16
    assert util.get_char_count_indicator_length(40, K) == 12


def test_optimize_short_numeric_between_alphanumeric():
    modes = util.define_mode(units('A1'))
    assert util.optimize_modes(1, modes) == [A, A]


def test_optimize_keeps_long_numeric_run():
    modes = util.define_mode(units('ab12345678'))
    assert util.optimize_modes(1, modes) == modes


def test_optimize_return_costs_more():
    # a -> 1 -> b pays the byte mode switch twice
    modes = util.define_mode(units('a1b'))
    assert util.optimize_modes(1, modes) == [B, B, B]


def test_optimize_threshold_depends_on_version():
    modes = util.define_mode(units('a123'))
    assert util.optimize_modes(1, modes) == [B, N, N, N]
    assert util.optimize_modes(10, modes) == [B, N, N, N]
    assert util.optimize_modes(27, modes) == [B, B, B, B]


def test_optimize_backward_pass():
    assert util.optimize_modes(1, util.define_mode(units('123a'))) == [N, N, N, B]
    assert util.optimize_modes(1, util.define_mode(units('12a'))) == [B, B, B]


def test_optimize_kanji_counts_bytes():
    modes = util.define_mode([0x935F, ord('a')])
    assert util.optimize_modes(1, modes) == [B, B]
    modes = util.define_mode([0x935F, 0x935F, 0x935F, ord('a')])
    assert util.optimize_modes(1, modes) == [K, K, K, B]


def test_optimize_does_not_mutate_input():
    modes = util.define_mode(units('a1b'))
    before = list(modes)
    util.optimize_modes(1, modes)
    assert modes == before


def test_get_binary_length():
    assert util.get_binary_length(1, [N] * 8, units('01234567')) == 41
    assert util.get_binary_length(1, [A] * 5, units('AC-42')) == 41
    assert util.get_binary_length(1, [A] * 5, units('AC-42'), gs1=True) == 45


@pytest.mark.parametrize('eci, header', [(3, 0), (26, 12), (200, 20), (20000, 28)])
def test_get_binary_length_eci_header(eci, header):
    assert util.get_binary_length(1, [B], [0x41], eci=eci) == 4 + 8 + 8 + header


def test_get_payload_length():
    assert util.get_payload_length(A, units('A%'), gs1=True) == 17
    assert util.get_payload_length(A, units('A%')) == 11
    assert util.get_payload_length(B, [0x41, 0xA0A0]) == 24
    assert util.get_payload_length(K, [0x935F, 0xE4AA]) == 26
    assert util.get_payload_length(N, units('1234')) == 14
    assert util.get_payload_length(N, units('12345')) == 17


def test_add_terminator_and_pad():
    encoded = util.add_terminator_and_pad('1' * 41, 152)
    assert len(encoded) == 152
    assert encoded[41:48] == '0000000'
    codewords = util.to_codewords(encoded)
    assert codewords[6:] == [0xEC, 0x11] * 6 + [0xEC]


def test_add_terminator_on_byte_boundary():
    encoded = util.add_terminator_and_pad('1' * 40, 152)
    # 종단자 4비트 다음 경계까지 0 비트 4개
    assert encoded[40:48] == '00000000'
    assert util.to_codewords(encoded)[5:8] == [0x00, 0xEC, 0x11]


def test_add_terminator_truncated_at_capacity():
    assert util.add_terminator_and_pad('1' * 150, 152) == '1' * 150 + '00'
    assert util.add_terminator_and_pad('1' * 152, 152) == '1' * 152


def test_block_lengths_cover_every_table_entry():
    for ecc_level in constants.ERROR_LEVELS:
        for version in range(constants.MIN_VERSION, constants.MAX_VERSION + 1):
            data_count = constants.DATA_CODEWORDS[ecc_level][version - 1]
            total_count = constants.TOTAL_CODEWORDS[version - 1]
            blocks = constants.ERROR_BLOCKS[ecc_level][version - 1]

            data_lengths, error_count = util.get_block_lengths(version, ecc_level)

            assert sum(data_lengths) == data_count
            assert len(data_lengths) == blocks
            assert data_lengths == sorted(data_lengths)
            assert max(data_lengths) - min(data_lengths) <= 1
            assert data_count + error_count * blocks == total_count


def test_block_lengths_5q():
    assert util.get_block_lengths(5, 'Q') == ([15, 15, 16, 16], 18)


def test_apply_mask_twice_is_identity():
    modules = [[(i * j) % 2 for j in range(21)] for i in range(21)]
    function = [[i < 9 and j < 9 for j in range(21)] for i in range(21)]
    original = [row[:] for row in modules]
    for mask_pattern in constants.MASK_BITS:
        util.apply_mask(modules, function, mask_pattern)
        assert modules != original
        util.apply_mask(modules, function, mask_pattern)
        assert modules == original


def test_apply_mask_skips_function_modules():
    modules = [[0] * 5 for _ in range(5)]
    function = [[True] * 5 for _ in range(5)]
    util.apply_mask(modules, function, 0)
    assert modules == [[0] * 5 for _ in range(5)]


def test_penalty_rules_on_light_grid():
    modules = [[0] * 5 for _ in range(5)]
    assert util.penalty_adjacent(modules) == 30
    assert util.penalty_blocks(modules) == 48
    assert util.penalty_finder_like(modules) == 0
    assert util.penalty_balance(modules) == 100
    assert util.evaluate_mask(modules) == 178


def test_penalty_adjacent_long_run():
    modules = [[1] * 7 + [0]]
    assert util.penalty_adjacent(modules) == 3 + 2


def test_penalty_finder_like():
    assert util.penalty_finder_like([[1, 0, 1, 1, 1, 0, 1]]) == 40
    assert util.penalty_finder_like([[1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0]]) == 40
    assert util.penalty_finder_like([[1, 1, 0, 1, 1, 1, 0, 1, 1]]) == 0


def test_penalty_balance():
    assert util.penalty_balance([[1, 0], [0, 1]]) == 0
    assert util.penalty_balance([[1, 1], [1, 0]]) == 50


def test_evaluate_mask_stops_above_best():
    modules = [[0] * 5 for _ in range(5)]
    assert util.evaluate_mask(modules, best=10) == 30
