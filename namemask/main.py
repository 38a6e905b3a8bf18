import argparse
import json
import logging
import os
import sys

from .errors import NameMaskError, NoMatchFound
from .ocr_mask import mask_image_file
from .types import MaskConfig


def parse_args(argv=None):
    p = argparse.ArgumentParser(description='Black out every occurrence of a word or name in an image via OCR')
    p.add_argument('image', help='Path to input image')
    p.add_argument('target', nargs='?', default='', help='Text to mask (case-insensitive); empty masks every text region')
    p.add_argument('--lang', default='eng', help='Tesseract OCR language')
    p.add_argument('--tesseract-cmd', default=None, help='Path to tesseract.exe if not in PATH')
    p.add_argument('--mask-padding', type=int, default=0, help='Padding around matched text regions')
    p.add_argument('--skip-unreadable', action='store_true', help='Skip regions Tesseract fails on instead of aborting')
    p.add_argument('--dump-json', default=None, help='Optional path to dump OCR + redaction metadata JSON')
    p.add_argument('--verbose', '-v', action='store_true', help='Log per-region OCR results')
    args = p.parse_args(argv)
    if not os.path.isfile(args.image):
        p.error(f'Input image not found: {args.image}')
    return args


def _dump_report(path, args, outcomes, output):
    report = {
        'image': args.image,
        'target': args.target,
        'masked': output,
        'regions': [
            {**o.region.as_dict(), 'text': o.text, 'matched': o.matched}
            for o in outcomes
        ],
    }
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(report, f, indent=2)
    print(f'Metadata written to {path}')


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    cfg = MaskConfig(
        lang=args.lang,
        mask_padding=args.mask_padding,
        tesseract_cmd=args.tesseract_cmd,
        skip_unreadable=args.skip_unreadable,
    )

    try:
        out_path, result = mask_image_file(args.image, args.target, cfg)
    except NoMatchFound as exc:
        print(f'No text matching {args.target!r} found in {args.image}; nothing written')
        if args.dump_json:
            _dump_report(args.dump_json, args, exc.outcomes, None)
        return 1
    except NameMaskError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        return 2

    print(f'Masked {len(result.matched_regions)} of {len(result.outcomes)} text regions')
    print(f'Wrote output to {out_path}')
    if args.dump_json:
        _dump_report(args.dump_json, args, result.outcomes, out_path)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
