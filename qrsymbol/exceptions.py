'''
QR코드 인코딩 중 발생하는 예외
'''


class QRCodeError(ValueError):
    '''
    모든 인코딩 예외의 기본 클래스
    '''


class InputTooLongError(QRCodeError):
    '''
    데이터가 선택된 오류 정정 레벨 또는 버전에 들어가지 않을 때
    '''


class InvalidCharacterError(QRCodeError):
    '''
    어떤 모드로도 표현할 수 없는 입력 단위가 있을 때
    '''


class UnsupportedConfigurationError(QRCodeError):
    '''
    버전, 오류 정정 레벨, ECI 등의 설정 값이 잘못되었을 때
    '''
