'''
QR코드 표준(ISO/IEC 18004) 정적 테이블 모음
'''

# 오류 정정 레벨
ERROR_LEVEL_L = 'L'
ERROR_LEVEL_M = 'M'
ERROR_LEVEL_Q = 'Q'
ERROR_LEVEL_H = 'H'

# 오류 정정 레벨 순서 (낮은 레벨 -> 높은 레벨)
ERROR_LEVELS = (ERROR_LEVEL_L, ERROR_LEVEL_M, ERROR_LEVEL_Q, ERROR_LEVEL_H)

# 포맷 정보에 들어가는 오류 정정 레벨 비트
ERROR_LEVEL_BITS = {
    ERROR_LEVEL_L: '01',
    ERROR_LEVEL_M: '00',
    ERROR_LEVEL_Q: '11',
    ERROR_LEVEL_H: '10',
}

# 포맷 정보 테이블 인덱스 오프셋 (마스크 번호에 OR)
ERROR_LEVEL_FORMAT_OFFSET = {
    ERROR_LEVEL_L: 0x08,
    ERROR_LEVEL_M: 0x00,
    ERROR_LEVEL_Q: 0x18,
    ERROR_LEVEL_H: 0x10,
}

# 모드
MODE_NUMERIC = 'Numeric'
MODE_ALPHANUMERIC = 'Alphanumeric'
MODE_BYTE = 'Byte'
MODE_KANJI = 'Kanji'

# 모드 지시자 4비트
MODE_BITS = {
    MODE_NUMERIC: '0001',
    MODE_ALPHANUMERIC: '0010',
    MODE_BYTE: '0100',
    MODE_KANJI: '1000',
}

# 버전 구간(1~9, 10~26, 27~40)별 문자 개수 지시자 비트 수
CHAR_COUNT_BITS = {
    MODE_NUMERIC: (10, 12, 14),
    MODE_ALPHANUMERIC: (9, 11, 13),
    MODE_BYTE: (8, 16, 16),
    MODE_KANJI: (8, 10, 12),
}

ECI_BITS = '0111'
GS1_BITS = '0101'
TERMINATOR_BITS = '0000'
PAD_CODEWORDS = (0xEC, 0x11)

# GS1 구분자 (FNC1) 센티넬 값
FNC1 = -1
# 바이트 모드에서 FNC1 대신 쓰는 값 (GS)
FNC1_BYTE = 0x1D

ALPHANUMERIC_CHARS = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:'

# 한자(Shift JIS) 범위와 빼야 할 오프셋
KANJI_RANGES = (
    (0x8140, 0x9FFC, 0x8140),
    (0xE040, 0xEBBF, 0xC140),
)

# 모드 전환 손익분기 길이 (구간별 low/mid/high)
# (이전 모드, 다음 모드): (복귀 없음, 복귀 있음)
MODE_SWITCH_THRESHOLDS = {
    (MODE_BYTE, MODE_KANJI): ((6, 8, 8), (12, 18, 20)),
    (MODE_BYTE, MODE_ALPHANUMERIC): ((4, 5, 6), (7, 11, 12)),
    (MODE_BYTE, MODE_NUMERIC): ((3, 3, 4), (4, 7, 7)),
    (MODE_ALPHANUMERIC, MODE_NUMERIC): ((6, 9, 9), (9, 12, 15)),
}

# ECI 번호 -> 파이썬 코덱. 자동 선택 시 이 순서대로 시도
DEFAULT_ECI = 3
SHIFT_JIS_ECI = 20
ECI_CHARSETS = {
    3: 'latin-1',
    4: 'iso8859-2',
    5: 'iso8859-3',
    6: 'iso8859-4',
    7: 'iso8859-5',
    8: 'iso8859-6',
    9: 'iso8859-7',
    10: 'iso8859-8',
    11: 'iso8859-9',
    13: 'iso8859-11',
    15: 'iso8859-13',
    16: 'iso8859-14',
    17: 'iso8859-15',
    18: 'iso8859-16',
    20: 'shift_jis',
    21: 'cp1250',
    22: 'cp1251',
    23: 'cp1252',
    24: 'cp1256',
    26: 'utf-8',
    25: 'utf-16-be',
    27: 'ascii',
    28: 'big5',
    29: 'gb18030',
    30: 'euc_kr',
}

MIN_VERSION = 1
MAX_VERSION = 40

# 버전별 데이터 코드워드 개수
DATA_CODEWORDS = {
    ERROR_LEVEL_L: [
        19, 34, 55, 80, 108, 136, 156, 194, 232, 274, 324, 370, 428, 461, 523, 589, 647,
        721, 795, 861, 932, 1006, 1094, 1174, 1276, 1370, 1468, 1531, 1631,
        1735, 1843, 1955, 2071, 2191, 2306, 2434, 2566, 2702, 2812, 2956,
    ],
    ERROR_LEVEL_M: [
        16, 28, 44, 64, 86, 108, 124, 154, 182, 216, 254, 290, 334, 365, 415, 453, 507,
        563, 627, 669, 714, 782, 860, 914, 1000, 1062, 1128, 1193, 1267,
        1373, 1455, 1541, 1631, 1725, 1812, 1914, 1992, 2102, 2216, 2334,
    ],
    ERROR_LEVEL_Q: [
        13, 22, 34, 48, 62, 76, 88, 110, 132, 154, 180, 206, 244, 261, 295, 325, 367,
        397, 445, 485, 512, 568, 614, 664, 718, 754, 808, 871, 911,
        985, 1033, 1115, 1171, 1231, 1286, 1354, 1426, 1502, 1582, 1666,
    ],
    ERROR_LEVEL_H: [
        9, 16, 26, 36, 46, 60, 66, 86, 100, 122, 140, 158, 180, 197, 223, 253, 283,
        313, 341, 385, 406, 442, 464, 514, 538, 596, 628, 661, 701,
        745, 793, 845, 901, 961, 986, 1054, 1096, 1142, 1222, 1276,
    ],
}

# 버전별 오류 정정 블록 개수
ERROR_BLOCKS = {
    ERROR_LEVEL_L: [
        1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8, 8, 9, 9, 10, 12, 12,
        12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25,
    ],
    ERROR_LEVEL_M: [
        1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16, 17, 17, 18, 20,
        21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49,
    ],
    ERROR_LEVEL_Q: [
        1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20, 23, 23, 25,
        27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68,
    ],
    ERROR_LEVEL_H: [
        1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25, 25, 34, 30,
        32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81,
    ],
}

# 버전별 전체 코드워드 개수
TOTAL_CODEWORDS = [
    26, 44, 70, 100, 134, 172, 196, 242, 292, 346, 404, 466, 532, 581, 655, 733, 815,
    901, 991, 1085, 1156, 1258, 1364, 1474, 1588, 1706, 1828, 1921, 2051,
    2185, 2323, 2465, 2611, 2761, 2876, 3034, 3196, 3362, 3532, 3706,
]

# 버전별 정렬 패턴 중심 좌표
ALIGN_PATTERN_POSITION = [
    [],
    [6, 18],
    [6, 22],
    [6, 26],
    [6, 30],
    [6, 34],
    [6, 22, 38],
    [6, 24, 42],
    [6, 26, 46],
    [6, 28, 50],
    [6, 30, 54],
    [6, 32, 58],
    [6, 34, 62],
    [6, 26, 46, 66],
    [6, 26, 48, 70],
    [6, 26, 50, 74],
    [6, 30, 54, 78],
    [6, 30, 56, 82],
    [6, 30, 58, 86],
    [6, 34, 62, 90],
    [6, 28, 50, 72, 94],
    [6, 26, 50, 74, 98],
    [6, 30, 54, 78, 102],
    [6, 28, 54, 80, 106],
    [6, 32, 58, 84, 110],
    [6, 30, 58, 86, 114],
    [6, 34, 62, 90, 118],
    [6, 26, 50, 74, 98, 122],
    [6, 30, 54, 78, 102, 126],
    [6, 26, 52, 78, 104, 130],
    [6, 30, 56, 82, 108, 134],
    [6, 34, 60, 86, 112, 138],
    [6, 30, 58, 86, 114, 142],
    [6, 34, 62, 90, 118, 146],
    [6, 30, 54, 78, 102, 126, 150],
    [6, 24, 50, 76, 102, 128, 154],
    [6, 28, 54, 80, 106, 132, 158],
    [6, 32, 58, 84, 110, 136, 162],
    [6, 26, 54, 82, 110, 138, 166],
    [6, 30, 58, 86, 114, 142, 170],
]

# 포맷 정보 BCH(15,5) 코드워드 (마스킹 적용 완료)
FORMAT_INFORMATION = [
    0x5412, 0x5125, 0x5E7C, 0x5B4B, 0x45F9, 0x40CE, 0x4F97, 0x4AA0,
    0x77C4, 0x72F3, 0x7DAA, 0x789D, 0x662F, 0x6318, 0x6C41, 0x6976,
    0x1689, 0x13BE, 0x1CE7, 0x19D0, 0x0762, 0x0255, 0x0D0C, 0x083B,
    0x355F, 0x3068, 0x3F31, 0x3A06, 0x24B4, 0x2183, 0x2EDA, 0x2BED,
]

# 버전 정보 BCH(18,6) 코드워드 (버전 7~40)
VERSION_INFORMATION = [
    0x07C94, 0x085BC, 0x09A99, 0x0A4D3, 0x0BBF6, 0x0C762, 0x0D847, 0x0E60D, 0x0F928, 0x10B78,
    0x1145D, 0x12A17, 0x13532, 0x149A6, 0x15683, 0x168C9, 0x177EC, 0x18EC4, 0x191E1, 0x1AFAB,
    0x1B08E, 0x1CC1A, 0x1D33F, 0x1ED75, 0x1F250, 0x209D5, 0x216F0, 0x228BA, 0x2379F, 0x24B0B,
    0x2542E, 0x26A64, 0x27541, 0x28C69,
]

# 포맷 정보 마스크
FORMAT_MASK = 0x5412

# 마스크 패턴 (i = 행, j = 열)
MASK_BITS = [0, 1, 2, 3, 4, 5, 6, 7]
MASK_FUNCTION = {
    0: lambda i, j: (i + j) % 2 == 0,
    1: lambda i, j: i % 2 == 0,
    2: lambda i, j: j % 3 == 0,
    3: lambda i, j: (i + j) % 3 == 0,
    4: lambda i, j: (i // 2 + j // 3) % 2 == 0,
    5: lambda i, j: (i * j) % 2 + (i * j) % 3 == 0,
    6: lambda i, j: ((i * j) % 2 + (i * j) % 3) % 2 == 0,
    7: lambda i, j: ((i + j) % 2 + (i * j) % 3) % 2 == 0,
}

# 패널티 가중치
PENALTY_N1 = 3
PENALTY_N2 = 3
PENALTY_N3 = 40
PENALTY_N4 = 10
