from functools import lru_cache

# QR코드 원시 다항식 x^8 + x^4 + x^3 + x^2 + 1
PRIMITIVE_POLYNOMIAL = 0x11d


def init_galois_field(prim=PRIMITIVE_POLYNOMIAL):
    exp = [0] * 512  # 지수 테이블
    log = [0] * 256  # 로그 테이블

    x = 1
    for i in range(255):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x & 0x100:
            x ^= prim
    for i in range(255, 512):
        exp[i] = exp[i - 255]

    return exp, log


EXP, LOG = init_galois_field()


def gf_mult(x, y):
    if x == 0 or y == 0:
        return 0
    return EXP[LOG[x] + LOG[y]]


# 다항식 곱셈
def poly_mult(p1, p2):
    res = [0] * (len(p1) + len(p2) - 1)
    for i in range(len(p1)):
        for j in range(len(p2)):
            res[i + j] ^= gf_mult(p1[i], p2[j])
    return res


# 생성 다항식 생성 (근: alpha^0 ~ alpha^(nsym-1))
@lru_cache(maxsize=None)
def generate_generator_polynomial(nsym):
    g = [1]
    for i in range(nsym):
        g = poly_mult(g, [1, EXP[i]])
    return tuple(g)


# 다항식 나눗셈 (나머지만 반환)
def poly_div(dividend, divisor):
    msg_out = list(dividend)
    for i in range(len(dividend) - (len(divisor) - 1)):
        coef = msg_out[i]
        if coef != 0:
            for j in range(1, len(divisor)):
                if divisor[j] != 0:
                    msg_out[i + j] ^= EXP[LOG[coef] + LOG[divisor[j]]]
    return msg_out[-(len(divisor) - 1):]


def rs_parity(msg_in, nsym):
    '''
    데이터 코드워드에 대한 오류 정정 코드워드 계산
    :param msg_in: 데이터 코드워드 리스트
    :param nsym: 오류 정정 코드워드 개수 (생성 다항식 차수)
    :return: 전송 순서(최고차항 먼저)의 오류 정정 코드워드 리스트
    '''
    if nsym == 0:
        return []
    gen = generate_generator_polynomial(nsym)
    msg_out = list(msg_in) + [0] * nsym
    return poly_div(msg_out, gen)
