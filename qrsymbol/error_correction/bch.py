'''
BCH 포맷/버전 정보 코드워드 계산
인코더는 constants.py의 미리 계산된 표를 쓰고, 이 모듈은 그 표를 검증할 때 쓴다
'''

import qrsymbol.constants as constants

# 포맷 정보 생성 다항식 x^10 + x^8 + x^5 + x^4 + x^2 + x + 1
FORMAT_GENERATOR = [1, 0, 1, 0, 0, 1, 1, 0, 1, 1, 1]
# 버전 정보 생성 다항식 x^12 + x^11 + x^10 + x^9 + x^8 + x^5 + x^2 + 1
VERSION_GENERATOR = [1, 1, 1, 1, 1, 0, 0, 1, 0, 0, 1, 0, 1]


def gf_poly_div(dividend, divisor):
    # GF(2) 위에서의 다항식 나눗셈 나머지
    result = list(dividend)
    for i in range(len(dividend) - len(divisor) + 1):
        if result[i]:
            for j in range(1, len(divisor)):
                result[i + j] ^= divisor[j]
    return result[-(len(divisor) - 1):]


def bch_encode(data_int, n, k, gen_poly):
    '''
    BCH(n, k) 오류 정정 비트 계산
    :return: n - k 길이의 나머지 비트 string
    '''
    data_poly = [int(bit) for bit in format(data_int, f'0{k}b')]
    data_poly += [0] * (n - k)

    rem = gf_poly_div(data_poly, gen_poly)
    return ''.join(str(bit) for bit in rem)


def format_codeword(ecc_level, mask_pattern):
    # ecc level 비트 + 마스크 비트 = 포맷 비트
    format_bit = constants.ERROR_LEVEL_BITS[ecc_level] + format(mask_pattern, '03b')
    format_bit += bch_encode(int(format_bit, 2), 15, 5, FORMAT_GENERATOR)
    return int(format_bit, 2) ^ constants.FORMAT_MASK


def version_codeword(version):
    version_bits = format(version, '06b')
    version_bits += bch_encode(version, 18, 6, VERSION_GENERATOR)
    return int(version_bits, 2)
