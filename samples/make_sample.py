import os
from PIL import Image, ImageDraw, ImageFont


def load_font(size: int):
    for font_path in [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "C:\\Windows\\Fonts\\arial.ttf",
    ]:
        try:
            return ImageFont.truetype(font_path, size)
        except (OSError, IOError):
            continue
    return ImageFont.load_default()


def main(out_path: str):
    os.makedirs(os.path.dirname(out_path), exist_ok=True)

    # Chat-window style screenshot with a username in a few places
    img = Image.new('RGB', (1280, 720), color=(255, 255, 255))
    d = ImageDraw.Draw(img)
    font = load_font(28)
    lines = [
        (40, 'john_doe'),
        (200, 'Hello there'),
        (360, 'John Doe'),
        (520, 'See you'),
    ]
    for y, text in lines:
        d.text((60, y), text, fill=(0, 0, 0), font=font)
    # Colored banner, not picked up as text
    d.rectangle((900, 40, 1240, 120), fill=(30, 120, 220))

    img.save(out_path)
    print(f"Sample screenshot written to {out_path}")
    print(f"Try: namemask {out_path} john_doe")


if __name__ == '__main__':
    main(os.path.join(os.path.dirname(__file__), 'screenshot.png'))
