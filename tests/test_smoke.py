import numpy as np
import cv2
from PIL import Image, ImageDraw, ImageFont

import pytest
import pytesseract

from namemask.main import main as cli_main


def has_tesseract() -> bool:
    try:
        # This will raise if tesseract is not found
        _ = pytesseract.get_tesseract_version()
        return 'eng' in pytesseract.get_languages(config='')
    except Exception:
        return False


def load_font(size: int):
    for font_path in [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    ]:
        try:
            return ImageFont.truetype(font_path, size)
        except (OSError, IOError):
            continue
    try:
        return ImageFont.load_default(size=size)
    except TypeError:
        pytest.skip("No scalable font available to render sample text")


def make_sample_png(path, text: str, size, font_size: int):
    img = Image.new('RGB', size, color=(255, 255, 255))
    d = ImageDraw.Draw(img)
    d.text((60, size[1] // 3), text, fill=(0, 0, 0), font=load_font(font_size))
    img.save(path)


needs_tesseract = pytest.mark.skipif(not has_tesseract(), reason="Tesseract OCR with English data is not installed or not on PATH")


@needs_tesseract
def test_smoke(tmp_path):
    src = tmp_path / 'alice.png'
    make_sample_png(src, 'ALICE', (1280, 720), 64)

    assert cli_main([str(src), 'alice']) == 0

    out = tmp_path / 'alice_masked.png'
    assert out.exists()
    before = cv2.imread(str(src))
    after = cv2.imread(str(out))
    assert after.shape == before.shape
    changed = np.any(after != before, axis=2)
    ys, xs = np.nonzero(changed)
    assert len(ys) > 0
    # every changed pixel is now the black masking bar
    assert (after[changed] == 0).all()


@needs_tesseract
def test_smoke_no_match(tmp_path):
    src = tmp_path / 'alice.png'
    make_sample_png(src, 'ALICE', (1280, 720), 64)

    assert cli_main([str(src), 'bob']) == 1
    assert not (tmp_path / 'alice_masked.png').exists()


@needs_tesseract
def test_smoke_low_resolution(tmp_path):
    src = tmp_path / 'small.png'
    make_sample_png(src, 'ALICE', (640, 360), 36)

    assert cli_main([str(src), 'alice']) == 0
    assert (tmp_path / 'small_masked.png').exists()
