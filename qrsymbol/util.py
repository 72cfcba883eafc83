import itertools
import logging
from collections import namedtuple

import qrsymbol.constants as constants
from qrsymbol.exceptions import InvalidCharacterError, UnsupportedConfigurationError

logger = logging.getLogger(__name__)

# 같은 모드가 연속된 구간
Segment = namedtuple('Segment', ['mode', 'start', 'length'])


def get_eci(data, eci=None):
    '''
    입력 데이터에 사용할 ECI 번호 결정하는 함수
    :param data: 입력 데이터 (str, bytes, int 리스트)
    :param eci: 사용자가 지정한 ECI 번호, None이면 자동 선택
    :return: ECI 번호 int
    '''
    if eci is not None:
        if not isinstance(eci, int) or isinstance(eci, bool) or not 0 <= eci <= 999999:
            raise UnsupportedConfigurationError(f'Invalid ECI designator: {eci!r}')
        if isinstance(data, str) and eci not in constants.ECI_CHARSETS:
            raise UnsupportedConfigurationError(f'Unsupported ECI designator for text input: {eci}')
        return eci

    # 텍스트가 아니면 변환 없이 기본 ECI
    if not isinstance(data, str):
        return constants.DEFAULT_ECI

    # 테이블 순서대로 인코딩 가능한 첫번째 문자셋 선택
    for candidate, charset in constants.ECI_CHARSETS.items():
        try:
            data.encode(charset)
        except UnicodeEncodeError:
            continue
        return candidate
    raise InvalidCharacterError('Unable to determine an ECI mode for the provided data')


def to_units(data, eci=constants.DEFAULT_ECI):
    '''
    입력 데이터를 입력 단위(int) 리스트로 바꾸는 함수
    Shift JIS(ECI 20)에서는 2바이트 문자를 하나의 값으로 묶는다
    :param data: 입력 데이터
    :param eci: ECI 번호
    :return: 입력 단위 리스트
    '''
    # bytes와 int 리스트는 그대로 입력 단위
    if not isinstance(data, str):
        return list(data)

    charset = constants.ECI_CHARSETS[eci]
    try:
        if eci == constants.SHIFT_JIS_ECI:
            units = []
            for char in data:
                encoded = char.encode(charset)
                if len(encoded) == 2:
                    units.append((encoded[0] << 8) | encoded[1])
                else:
                    units.extend(encoded)
            return units
        return list(data.encode(charset))
    except UnicodeEncodeError as e:
        raise InvalidCharacterError(
            f'Unable to encode {data[e.start:e.end]!r} using ECI {eci} ({charset})') from e


def is_kanji(value):
    '''
    2바이트로 묶인 값이 Shift JIS 한자 범위에 있는지 판별
    '''
    low = value & 0xff
    if low < 0x40 or low > 0xfc or low == 0x7f:
        return False
    return any(start <= value <= end for start, end, _ in constants.KANJI_RANGES)


def determine_mode(unit):
    '''
    입력 단위 하나의 모드 결정하는 함수
    :param unit: 입력 단위
    :return: 모드 string
    '''
    if unit > 0xff:
        return constants.MODE_KANJI if is_kanji(unit) else constants.MODE_BYTE
    if ord('0') <= unit <= ord('9'):
        return constants.MODE_NUMERIC
    if chr(unit) in constants.ALPHANUMERIC_CHARS:
        return constants.MODE_ALPHANUMERIC
    return constants.MODE_BYTE


def define_mode(units, gs1=False, force_byte=False):
    '''
    입력 단위마다 모드를 지정하는 함수
    :param units: 입력 단위 리스트
    :param gs1: GS1 데이터 여부
    :param force_byte: 모든 단위를 바이트 모드로 강제
    :return: 모드 리스트
    '''
    modes = []
    for position, unit in enumerate(units):
        if unit == constants.FNC1:
            if not gs1:
                raise InvalidCharacterError(f'FNC1 at position {position} is only allowed in GS1 mode')
            # GS1 구분자는 영숫자 모드에서 '%'로 표현
            modes.append(constants.MODE_BYTE if force_byte else constants.MODE_ALPHANUMERIC)
            continue
        if not isinstance(unit, int) or isinstance(unit, bool) or not 0 <= unit <= 0xffff:
            raise InvalidCharacterError(f'Invalid input unit at position {position}: {unit!r}')
        modes.append(constants.MODE_BYTE if force_byte else determine_mode(unit))
    return modes


def get_segments(modes):
    '''
    모드 리스트를 같은 모드 구간으로 묶는 함수
    :param modes: 모드 리스트
    :return: Segment 리스트
    '''
    segments = []
    start = 0
    for mode, group in itertools.groupby(modes):
        length = sum(1 for _ in group)
        segments.append(Segment(mode, start, length))
        start += length
    return segments


def get_version_bracket(version):
    # 버전 구간: 1~9 -> 0, 10~26 -> 1, 27~40 -> 2
    if version < 10:
        return 0
    if version < 27:
        return 1
    return 2


def get_char_count_indicator_length(version, mode):
    '''
    버전별 데이터 길이 표현 비트 수 결정하는 함수
    :param version: qr코드 버전
    :param mode: qr코드 모드
    :return: 데이터 길이 비트 길이 수
    '''
    return constants.CHAR_COUNT_BITS[mode][get_version_bracket(version)]


def _demoted_mode(mode, neighbour, neighbour_length, returns, bracket):
    # 이웃 구간이 모드 전환 비용을 감당할 만큼 길지 않으면 현재 모드 반환
    if mode == constants.MODE_BYTE and neighbour in (
            constants.MODE_KANJI, constants.MODE_ALPHANUMERIC, constants.MODE_NUMERIC):
        key = (mode, neighbour)
    elif mode == constants.MODE_ALPHANUMERIC and neighbour == constants.MODE_NUMERIC:
        key = (mode, neighbour)
    else:
        return None

    # 한자 단위는 2바이트
    if neighbour == constants.MODE_KANJI:
        neighbour_length *= 2

    threshold = constants.MODE_SWITCH_THRESHOLDS[key][1 if returns else 0][bracket]
    if neighbour_length < threshold:
        return mode
    return None


def optimize_modes(version, modes):
    '''
    너무 짧은 모드 구간을 이웃 모드로 합치는 함수
    입력 리스트는 바꾸지 않고 새 리스트를 반환한다
    :param version: 대상 qr코드 버전
    :param modes: 분류된 모드 리스트
    :return: 최적화된 모드 리스트
    '''
    segments = get_segments(modes)
    block_modes = [segment.mode for segment in segments]
    block_lengths = [segment.length for segment in segments]
    block_count = len(segments)
    bracket = get_version_bracket(version)

    if block_count > 1:
        # 앞에서부터 탐색
        for i in range(block_count - 1):
            returns = i + 2 < block_count and block_modes[i + 2] == block_modes[i]
            demoted = _demoted_mode(block_modes[i], block_modes[i + 1], block_lengths[i + 1], returns, bracket)
            if demoted:
                block_modes[i + 1] = demoted

        # 뒤에서부터 탐색
        for i in range(block_count - 1, 0, -1):
            returns = i - 2 >= 0 and block_modes[i - 2] == block_modes[i]
            demoted = _demoted_mode(block_modes[i], block_modes[i - 1], block_lengths[i - 1], returns, bracket)
            if demoted:
                block_modes[i - 1] = demoted

    optimized = []
    for mode, length in zip(block_modes, block_lengths):
        optimized.extend([mode] * length)
    return optimized


def get_eci_header_length(eci):
    if eci == constants.DEFAULT_ECI:
        return 0
    if eci <= 127:
        return 4 + 8
    if eci <= 16383:
        return 4 + 16
    return 4 + 24


def count_percent(units, gs1):
    # GS1 영숫자 모드에서 '%'는 '%%'로 늘어난다
    if not gs1:
        return 0
    return sum(1 for unit in units if unit == ord('%'))


def get_payload_length(mode, units, gs1=False):
    '''
    한 구간의 데이터 비트 수 계산하는 함수 (모드/길이 지시자 제외)
    '''
    length = len(units)
    if mode == constants.MODE_KANJI:
        return 13 * length
    if mode == constants.MODE_BYTE:
        return sum(16 if unit > 0xff else 8 for unit in units)
    if mode == constants.MODE_ALPHANUMERIC:
        length += count_percent(units, gs1)
        return 11 * (length // 2) + 6 * (length % 2)
    return 10 * (length // 3) + (0, 4, 7)[length % 3]


def get_binary_length(version, modes, units, gs1=False, eci=constants.DEFAULT_ECI):
    '''
    최적화된 모드 리스트로 실제 인코딩될 비트 수 계산하는 함수
    :param version: qr코드 버전
    :param modes: 최적화된 모드 리스트
    :param units: 입력 단위 리스트
    :param gs1: GS1 데이터 여부
    :param eci: ECI 번호
    :return: 비트 수
    '''
    b_length = 4 if gs1 else 0
    b_length += get_eci_header_length(eci)
    for segment in get_segments(modes):
        b_length += 4 + get_char_count_indicator_length(version, segment.mode)
        b_length += get_payload_length(
            segment.mode, units[segment.start:segment.start + segment.length], gs1)
    return b_length


def add_terminator_and_pad(encoded_data, total_bits):
    '''
    인코드 데이터에 종단자/패딩 비트 추가하는 함수
    :param encoded_data: 인코드 데이터
    :param total_bits: qr코드의 총 데이터 비트 수
    :return: 종단자/패딩 비트가 추가된 인코드 데이터
    '''

    # 남은 비트 수가 4개 이하면 남은 수 만큼 0 추가
    encoded_data += constants.TERMINATOR_BITS[:max(0, min(4, total_bits - len(encoded_data)))]

    # 8 비트 단위로 끊을 수 있도록 0 비트 추가
    if len(encoded_data) % 8:
        encoded_data += '0' * (8 - len(encoded_data) % 8)

    # 두 패딩 코드워드를 번갈아 가며 총 비트 수에 맞게 추가
    padding_patterns = [format(pad, '08b') for pad in constants.PAD_CODEWORDS]
    bytes_to_fill = (total_bits - len(encoded_data)) // 8
    for i in range(bytes_to_fill):
        encoded_data += padding_patterns[i % 2]
    return encoded_data


def to_codewords(encoded_data):
    # 8비트씩 끊어서 코드워드 리스트로 변환
    return [int(encoded_data[i:i + 8], 2) for i in range(0, len(encoded_data), 8)]


def get_block_lengths(version, ecc_level):
    '''
    블록별 데이터 코드워드 개수와 블록당 오류 정정 코드워드 개수 계산하는 함수
    짧은 블록이 앞, 긴 블록(1개 더 많음)이 뒤에 온다
    :return: (블록별 데이터 코드워드 개수 리스트, 블록당 오류 정정 코드워드 개수)
    '''
    total_count = constants.TOTAL_CODEWORDS[version - 1]
    data_count = constants.DATA_CODEWORDS[ecc_level][version - 1]
    blocks = constants.ERROR_BLOCKS[ecc_level][version - 1]

    short_length = data_count // blocks
    long_blocks = data_count % blocks
    short_blocks = blocks - long_blocks
    error_count = total_count - data_count
    assert error_count % blocks == 0, (version, ecc_level)

    return [short_length] * short_blocks + [short_length + 1] * long_blocks, error_count // blocks


def apply_mask(modules, function, mask_pattern):
    '''
    데이터 영역에 마스크를 적용하는 함수 (두 번 적용하면 원래대로 돌아온다)
    :param modules: qr코드 2darray
    :param function: 기능 패턴 여부 2darray
    :param mask_pattern: 마스크 번호 0~7
    '''
    mask_func = constants.MASK_FUNCTION[mask_pattern]
    for i, row in enumerate(modules):
        for j in range(len(row)):
            if not function[i][j] and mask_func(i, j):
                row[j] ^= 1


def penalty_adjacent(modules):
    # Rule 1: 행/열에서 같은 색이 5개 이상 연속
    penalty = 0
    for line in itertools.chain(modules, zip(*modules)):
        for _, group in itertools.groupby(line):
            count = sum(1 for _ in group)
            if count >= 5:
                penalty += constants.PENALTY_N1 + (count - 5)
    return penalty


def penalty_blocks(modules):
    # Rule 2: 같은 색 2x2 블록 (겹치는 블록도 모두 계산)
    penalty = 0
    for upper, lower in zip(modules, modules[1:]):
        for j in range(len(upper) - 1):
            if upper[j] == upper[j + 1] == lower[j] == lower[j + 1]:
                penalty += constants.PENALTY_N2
    return penalty


def penalty_finder_like(modules):
    # Rule 3: 앞이나 뒤에 밝은 모듈 4개가 붙은 1:1:3:1:1 패턴 (심볼 밖은 밝은 모듈)
    penalty = 0
    pattern = '1011101'
    for line in itertools.chain(modules, zip(*modules)):
        padded = '0000' + ''.join(str(bit) for bit in line) + '0000'
        idx = padded.find(pattern)
        while idx != -1:
            if padded[idx - 4:idx] == '0000' or padded[idx + 7:idx + 11] == '0000':
                penalty += constants.PENALTY_N3
            idx = padded.find(pattern, idx + 1)
    return penalty


def penalty_balance(modules):
    # Rule 4: 전체 모듈의 흑백 비율
    total_modules = len(modules) * len(modules)
    dark_modules = sum(sum(row) for row in modules)
    percent = dark_modules * 100 // total_modules
    return constants.PENALTY_N4 * (abs(percent - 50) // 5)


def evaluate_mask(modules, best=None):
    '''
    마스크가 적용된 qr코드의 패널티를 계산하는 함수
    규칙 1~3의 중간 합계가 best를 넘으면 남은 규칙은 계산하지 않는다
    :param modules: qr코드 2darray
    :param best: 지금까지 가장 낮은 패널티 점수
    :return: 패널티 점수
    '''
    penalty = 0
    for rule in (penalty_adjacent, penalty_blocks, penalty_finder_like, penalty_balance):
        penalty += rule(modules)
        if best is not None and penalty > best:
            logger.debug('penalty %s exceeded best %s after %s', penalty, best, rule.__name__)
            return penalty
    return penalty
