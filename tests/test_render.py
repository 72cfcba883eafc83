from PIL import Image

from qrsymbol import QRCode


def test_make_image_size_and_pixels():
    qr = QRCode('HELLO')
    image = qr.make_image(box_size=2, border=1)
    assert image.mode == '1'
    assert image.size == ((21 + 2) * 2, (21 + 2) * 2)
    # 여백은 흰색, 파인더 패턴 왼쪽 위는 검정
    assert image.getpixel((0, 0)) != 0
    assert image.getpixel((2, 2)) == 0
    assert image.getpixel((3, 3)) == 0
    # 파인더 패턴 안쪽 흰 테두리 (모듈 1, 1)
    assert image.getpixel((4, 4)) != 0


def test_make_image_matches_modules():
    qr = QRCode('HELLO WORLD', version=2)
    box_size, border = 3, 4
    image = qr.make_image(box_size=box_size, border=border)
    for i in range(qr.module_count):
        for j in range(qr.module_count):
            x = (j + border) * box_size + 1
            y = (i + border) * box_size + 1
            assert (image.getpixel((x, y)) == 0) == qr.is_dark(i, j)


def test_save_image(tmp_path):
    qr = QRCode('HELLO')
    path = tmp_path / 'qr.png'
    qr.save_image(str(path), box_size=5, border=2)
    with Image.open(path) as image:
        assert image.size == ((21 + 4) * 5, (21 + 4) * 5)
