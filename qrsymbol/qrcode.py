import logging
from typing import Union

from PIL import Image

import qrsymbol.constants as constants
import qrsymbol.error_correction.reed_solomon as reed_solomon
import qrsymbol.util as util
from qrsymbol.exceptions import InputTooLongError, UnsupportedConfigurationError

logger = logging.getLogger(__name__)

'''
QRCode 클래스
데이터를 QRCode로 바꾸는 클래스
'''

class QRCode(object):
    def __init__(
        self,
        data: Union[str, bytes, list],
        ecc_level=constants.ERROR_LEVEL_L,
        version=None,
        eci=None,
        gs1=False,
        force_byte=False,
        improve_ecc_level=True,
        min_version=constants.MIN_VERSION
    ):
        self.data = data
        self.ecc_level = ecc_level
        self.preferred_version = version
        self.min_version = min_version
        self.gs1 = gs1
        self.force_byte = force_byte
        self.improve_ecc_level = improve_ecc_level

        # 진단 메시지
        self.info = []

        self.__check_options__()
        self.eci = util.get_eci(data, eci)

        self.__make__()

    def __check_options__(self):
        '''
        설정 값 검증하는 함수
        '''
        if not isinstance(self.ecc_level, str) or self.ecc_level.upper() not in constants.ERROR_LEVELS:
            raise UnsupportedConfigurationError(f'Invalid error correction level: {self.ecc_level!r}')
        self.ecc_level = self.ecc_level.upper()

        for name, value in (('version', self.preferred_version), ('min_version', self.min_version)):
            if value is None and name == 'version':
                continue
            if (not isinstance(value, int) or isinstance(value, bool)
                    or not constants.MIN_VERSION <= value <= constants.MAX_VERSION):
                raise UnsupportedConfigurationError(f'Invalid QR Code {name}: {value!r}')

        if self.preferred_version is not None and self.min_version > self.preferred_version:
            raise UnsupportedConfigurationError(
                f'Minimum version {self.min_version} is larger than version {self.preferred_version}')

    def __info__(self, message, *args):
        self.info.append(message % args)
        logger.debug(message, *args)

    def __data_capacity__(self, version, ecc_level):
        # 데이터 코드워드에 들어갈 수 있는 비트 수
        return constants.DATA_CODEWORDS[ecc_level][version - 1] * 8

    def __select_version__(self):
        '''
        데이터가 들어가는 가장 작은 버전을 찾고 가능하면 오류 정정 레벨을 올리는 함수
        '''
        units = self.units
        raw_modes = self.raw_modes

        def binary_length(version):
            # 버전마다 모드를 새로 최적화한 뒤 비트 수 계산
            modes = util.optimize_modes(version, raw_modes)
            return modes, util.get_binary_length(version, modes, units, self.gs1, self.eci)

        # 가장 큰 버전에도 들어가지 않으면 오류
        modes, b_length = binary_length(constants.MAX_VERSION)
        if b_length > self.__data_capacity__(constants.MAX_VERSION, self.ecc_level):
            raise InputTooLongError('Input too long for selected error correction level')

        # 큰 버전부터 내려가며 데이터가 들어가는 가장 작은 버전 탐색
        version = constants.MAX_VERSION
        for candidate in range(constants.MAX_VERSION, self.min_version - 1, -1):
            candidate_modes, candidate_length = binary_length(candidate)
            if candidate_length <= self.__data_capacity__(candidate, self.ecc_level):
                version, modes, b_length = candidate, candidate_modes, candidate_length

        # 사용자가 지정한 버전 적용
        if self.preferred_version is not None:
            if self.preferred_version < version:
                raise InputTooLongError('Input too long for selected symbol size')
            if self.preferred_version > version:
                version = self.preferred_version
                modes, b_length = binary_length(version)

        # 남는 공간이 있으면 오류 정정 레벨 올리기
        if self.improve_ecc_level:
            requested = constants.ERROR_LEVELS.index(self.ecc_level)
            for ecc_level in constants.ERROR_LEVELS[requested + 1:]:
                if b_length <= self.__data_capacity__(version, ecc_level):
                    self.ecc_level = ecc_level

        self.version = version
        self.modes = modes
        self.segments = util.get_segments(modes)
        self.bit_length = b_length

    def __encode_segment__(self, segment):
        '''
        한 구간을 모드 지시자 + 문자 개수 지시자 + 데이터 비트로 인코딩하는 함수
        :param segment: Segment
        :return: 비트 string
        '''
        units = self.units[segment.start:segment.start + segment.length]
        mode = segment.mode
        count_length = util.get_char_count_indicator_length(self.version, mode)
        encoded_data = constants.MODE_BITS[mode]
        values = []

        if mode == constants.MODE_KANJI:
            encoded_data += format(len(units), f'0{count_length}b')
            for jis in units:
                for start, end, offset in constants.KANJI_RANGES:
                    if start <= jis <= end:
                        jis -= offset
                        break
                value = (jis >> 8) * 0xc0 + (jis & 0xff)
                values.append(value)
                encoded_data += format(value, '013b')

        elif mode == constants.MODE_BYTE:
            # 2바이트로 묶인 값은 바이트 2개
            data = []
            for unit in units:
                if unit == constants.FNC1:
                    data.append(constants.FNC1_BYTE)
                elif unit > 0xff:
                    data.extend((unit >> 8, unit & 0xff))
                else:
                    data.append(unit)
            encoded_data += format(len(data), f'0{count_length}b')
            for byte in data:
                values.append(byte)
                encoded_data += format(byte, '08b')

        elif mode == constants.MODE_ALPHANUMERIC:
            # GS1에서는 FNC1 -> '%', '%' -> '%%'
            chars = ''
            for unit in units:
                if unit == constants.FNC1:
                    chars += '%'
                elif self.gs1 and unit == ord('%'):
                    chars += '%%'
                else:
                    chars += chr(unit)
            encoded_data += format(len(chars), f'0{count_length}b')
            alphanumeric_chars = constants.ALPHANUMERIC_CHARS
            for i in range(0, len(chars), 2):
                if i + 1 < len(chars):
                    value = alphanumeric_chars.index(chars[i]) * 45 + alphanumeric_chars.index(chars[i + 1])
                    encoded_data += format(value, '011b')
                else:
                    value = alphanumeric_chars.index(chars[i])
                    encoded_data += format(value, '06b')
                values.append(value)

        else:
            digits = ''.join(chr(unit) for unit in units)
            encoded_data += format(len(digits), f'0{count_length}b')
            for i in range(0, len(digits), 3):
                group = digits[i:i + 3]
                values.append(int(group))
                encoded_data += format(int(group), f'0{len(group) * 3 + 1}b')

        self.__info__('%s %d: %s', mode, segment.length, ' '.join(str(v) for v in values))
        return encoded_data

    def __encode_data__(self):
        '''
        데이터를 비트로 인코딩하는 함수
        '''
        encoded_data = ''

        # GS1 데이터 표시
        if self.gs1:
            encoded_data += constants.GS1_BITS

        # 기본 문자셋이 아니면 ECI 헤더 추가
        if self.eci != constants.DEFAULT_ECI:
            encoded_data += constants.ECI_BITS
            if self.eci <= 127:
                encoded_data += format(self.eci, '08b')
            elif self.eci <= 16383:
                encoded_data += format(0x8000 + self.eci, '016b')
            else:
                encoded_data += format(0xc00000 + self.eci, '024b')

        for segment in self.segments:
            encoded_data += self.__encode_segment__(segment)
        assert len(encoded_data) == self.bit_length, (len(encoded_data), self.bit_length)

        # 인코드 데이터에 생성 후 남은 공간에 종단자, 패딩 비트 추가
        encoded_data = util.add_terminator_and_pad(
            encoded_data, self.__data_capacity__(self.version, self.ecc_level))
        self.data_codewords = util.to_codewords(encoded_data)

        self.__info__('Codewords: %s', ' '.join(str(cw) for cw in self.data_codewords))

    def __add_error_bits__(self):
        '''
        Reed-Solomon 알고리즘으로 에러 정정 코드워드를 추가하고 블록을 섞는 함수
        '''
        data_lengths, error_count = util.get_block_lengths(self.version, self.ecc_level)

        data_idx = 0 # 데이터 idx
        data_code = [] # 블록별 데이터 코드워드
        error_code = [] # 블록별 에러 정정 코드워드

        for data_count in data_lengths:
            target_data = self.data_codewords[data_idx:data_idx + data_count]
            data_idx += data_count

            data_code.append(target_data)
            error_code.append(reed_solomon.rs_parity(target_data, error_count))
        assert data_idx == len(self.data_codewords)

        # 블록 리스트
        self.codewords = []
        # 데이터 코드워드를 순회하며 앞 코드워드부터 순서대로 추가 (긴 블록의 마지막 코드워드는 맨 뒤)
        for i in range(max(data_lengths)):
            for d in data_code:
                if i < len(d):
                    self.codewords.append(d[i])
        # 오류 정정 코드워드를 순회하며 앞 코드워드부터 순서대로 추가
        for i in range(error_count):
            for d in error_code:
                self.codewords.append(d[i])

        assert len(self.codewords) == constants.TOTAL_CODEWORDS[self.version - 1]
        self.error_blocks = error_code

    def __set_function__(self, row, col, value):
        self.modules[row][col] = value
        self.function[row][col] = True

    def __add_finder_pattern__(self, start_x, start_y):
        '''
        파인더 패턴과 분리자를 추가하는 함수
        :param start_x: 가로 시작 위치
        :param start_y: 세로 시작 위치
        '''
        for r in range(-1, 8):
            for c in range(-1, 8):
                i, j = start_y + r, start_x + c
                if not (0 <= i < self.module_count and 0 <= j < self.module_count):
                    continue
                # 7x7 테두리 + 3x3 가운데는 검정, 나머지(분리자 포함)는 흰색
                dark = (0 <= r <= 6 and 0 <= c <= 6
                        and (r in (0, 6) or c in (0, 6) or (2 <= r <= 4 and 2 <= c <= 4)))
                self.__set_function__(i, j, int(dark))

    def __add_align_pattern__(self):
        '''
        정렬 패턴을 추가하는 함수
        '''
        # 사전 정의된 버전별 정렬 패턴 위치 가져오기
        pos = constants.ALIGN_PATTERN_POSITION[self.version - 1]
        for row in pos:
            for col in pos:
                # 파인더 패턴과 겹치면 건너뛰기
                if self.function[row][col]:
                    continue
                for r in range(-2, 3):
                    for c in range(-2, 3):
                        dark = r in (-2, 2) or c in (-2, 2) or (r == 0 and c == 0)
                        self.__set_function__(row + r, col + c, int(dark))

    def __add_timing_pattern__(self):
        '''
        타이밍 패턴을 추가하는 함수
        '''
        for i in range(8, self.module_count - 8):
            # 세로 타이밍 패턴
            if not self.function[i][6]:
                self.__set_function__(i, 6, int(i % 2 == 0))
            # 가로 타이밍 패턴
            if not self.function[6][i]:
                self.__set_function__(6, i, int(i % 2 == 0))

    def __reserve_information_area__(self):
        '''
        포맷 정보, 버전 정보 영역을 미리 기능 영역으로 표시하는 함수
        '''
        n = self.module_count
        # 좌측 상단 파인더 패턴 주변 포맷 정보
        for i in range(9):
            self.function[8][i] = True
            self.function[i][8] = True
        # 우측 상단 / 좌측 하단 포맷 정보
        for i in range(8):
            self.function[8][n - 1 - i] = True
            self.function[n - 1 - i][8] = True
        # 항상 검정인 모듈
        self.__set_function__(n - 8, 8, 1)

        if self.version >= 7:
            for i in range(6):
                for j in range(n - 11, n - 8):
                    self.function[j][i] = True
                    self.function[i][j] = True

    def __add_version_information__(self):
        '''
        버전 정보를 추가하는 함수
        '''
        version_bits = format(constants.VERSION_INFORMATION[self.version - 7], '018b')
        # 좌측 하단 파인더 패턴 위와 우측 상단 파인더 패턴 왼쪽에 버전 정보 추가
        bits_idx = 17
        for i in range(0, 6):
            for j in range(self.module_count - 11, self.module_count - 8):
                self.modules[j][i] = int(version_bits[bits_idx])
                self.modules[i][j] = int(version_bits[bits_idx])
                bits_idx -= 1

    def __add_format_information__(self, modules, mask_pattern):
        '''
        포맷 정보를 추가하는 함수
        :param modules: qr코드 2darray
        :param mask_pattern: 마스크 번호
        :return: 포맷 정보 추가가 완료된 qr코드 2darray
        '''
        n = self.module_count
        format_index = mask_pattern | constants.ERROR_LEVEL_FORMAT_OFFSET[self.ecc_level]
        format_bit = format(constants.FORMAT_INFORMATION[format_index], '015b')

        # 지정된 위치에 포맷 정보 비트 추가 (bit_idx 14 = 최하위 비트)
        bit_idx = 14
        # 좌측 상단 파인더 패턴 오른쪽 (위 -> 아래)
        for i in range(0, 9):
            if i == 6: continue
            modules[i][8] = int(format_bit[bit_idx])
            bit_idx -= 1
        # 좌측 상단 파인더 패턴 아래 (오른쪽 -> 왼쪽)
        for i in range(7, -1, -1):
            if i == 6: continue
            modules[8][i] = int(format_bit[bit_idx])
            bit_idx -= 1

        bit_idx = 14
        # 우측 상단 파인더 패턴 아래
        for i in range(n - 1, n - 9, -1):
            modules[8][i] = int(format_bit[bit_idx])
            bit_idx -= 1
        # 좌측 하단 파인더 패턴 오른쪽 (검정 모듈 아래부터)
        for i in range(n - 7, n):
            modules[i][8] = int(format_bit[bit_idx])
            bit_idx -= 1
        return modules

    def __place_codewords__(self):
        '''
        코드워드 비트를 지그재그 순서로 데이터 영역에 배치하는 함수
        '''
        # 세로 이동 방향
        direction_y = -1
        # qr코드 가로 위치
        x = self.module_count - 1
        # qr코드 세로 위치
        y = self.module_count - 1

        total_bits = len(self.codewords) * 8
        # 비트 idx
        bit_idx = 0

        # 모든 칸을 순회
        while True:
            # 기능 패턴이 아닌 칸이라면
            if not self.function[y][x]:
                # 남은 비트가 없으면 0 (나머지 비트)
                if bit_idx < total_bits:
                    codeword = self.codewords[bit_idx // 8]
                    self.modules[y][x] = (codeword >> (7 - bit_idx % 8)) & 1
                    bit_idx += 1

            # 데이터가 들어갈 수 있는 마지막 칸에 도달하면 break
            if x == 0 and y == self.module_count - 9:
                break

            # 규칙에 따라 칸을 순회하도록 설정
            if (x % 2 == 0) ^ (x <= 6):
                x -= 1
            else:
                x += 1
                y += direction_y
                if y < 0:
                    direction_y = 1
                    y = 0
                    x -= 2
                elif y >= self.module_count:
                    direction_y = -1
                    y = self.module_count - 1
                    x -= 2
            if x == 6:
                x -= 1

        assert bit_idx == total_bits

    def __apply_best_mask__(self):
        '''
        8개 마스크의 패널티를 비교해서 가장 낮은 마스크를 적용하는 함수
        '''
        # 가장 낮은 패널티 점수
        min_penalty = None
        # 가장 낮은 패널티의 마스크 번호
        min_mask = 0
        for mask_pattern in constants.MASK_BITS:
            # 현재 qr코드 복사
            option = [row[:] for row in self.modules]
            # 마스크 적용
            util.apply_mask(option, self.function, mask_pattern)
            # ecc level, 마스크 정보를 포함한 포맷 정보 추가
            self.__add_format_information__(option, mask_pattern)
            # 마스크 적용 패널티 계산
            penalty = util.evaluate_mask(option, min_penalty)
            self.__info__('Mask %s penalty: %d', format(mask_pattern, '03b'), penalty)
            # 패널티 점수가 가장 작다면 해당 마스크 저장
            if min_penalty is None or penalty < min_penalty:
                min_penalty = penalty
                min_mask = mask_pattern

        # 최종 qr코드 데이터 확정
        util.apply_mask(self.modules, self.function, min_mask)
        self.__add_format_information__(self.modules, min_mask)
        self.mask_pattern = min_mask
        self.penalty = min_penalty
        self.__info__('Mask Pattern: %s', format(min_mask, '03b'))

    def __make__(self):
        # 입력 단위와 모드 결정
        self.units = util.to_units(self.data, self.eci)
        self.raw_modes = util.define_mode(self.units, self.gs1, self.force_byte)
        self.__select_version__()

        self.__info__('ECI Mode: %d', self.eci)
        self.__info__('Version: %d', self.version)
        self.__info__('ECC Level: %s', self.ecc_level)

        self.__encode_data__()
        self.__add_error_bits__()

        # 버전 정보로 qr코드에 들어가는 모듈 개수 산출
        self.module_count = self.version * 4 + 17
        # qr코드를 표현할 2darray와 기능 영역 표시
        self.modules = [[0] * self.module_count for _ in range(self.module_count)]
        self.function = [[False] * self.module_count for _ in range(self.module_count)]
        # 좌측 상단 파인더 패턴 추가
        self.__add_finder_pattern__(0, 0)
        # 우측 상단 파인더 패턴 추가
        self.__add_finder_pattern__(self.module_count - 7, 0)
        # 좌측 하단 파인더 패턴 추가
        self.__add_finder_pattern__(0, self.module_count - 7)
        # 정렬 패턴 추가
        self.__add_align_pattern__()
        # 타이밍 패턴 추가
        self.__add_timing_pattern__()
        # 포맷/버전 정보 자리 확보
        self.__reserve_information_area__()

        # qr코드의 버전이 7 이상이면 버전 정보 추가
        if self.version >= 7:
            self.__add_version_information__()

        self.__place_codewords__()
        self.__apply_best_mask__()

    def is_dark(self, row, col):
        return bool(self.modules[row][col])

    def is_function(self, row, col):
        return self.function[row][col]

    def to_text(self, dark='#', light='.'):
        return '\n'.join(''.join(dark if m else light for m in row) for row in self.modules)

    def make_image(self, box_size=4, border=4):
        '''
        qr코드를 흑백 이미지로 만드는 함수
        :param box_size: 모듈 하나의 픽셀 크기
        :param border: 여백 모듈 수
        :return: PIL Image
        '''
        width = (self.module_count + border * 2) * box_size
        image = Image.new('1', (width, width), 1)
        pixels = image.load()

        offset = border * box_size
        for i in range(self.module_count):
            for j in range(self.module_count):
                if not self.modules[i][j]:
                    continue
                for p_i in range(i * box_size + offset, (i + 1) * box_size + offset):
                    for p_j in range(j * box_size + offset, (j + 1) * box_size + offset):
                        pixels[p_j, p_i] = 0
        return image

    def save_image(self, dir, box_size=4, border=4):
        self.make_image(box_size, border).save(dir)
