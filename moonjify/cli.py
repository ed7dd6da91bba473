"""
Emoji Art Converter - Command Line Interface
============================================
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from moonjify.config import ConversionConfig
from moonjify.constants import (
    DEFAULT_CELL_WIDTH,
    DEFAULT_CURVE_HEIGHT,
    DEFAULT_FRAME_DELAY_MS,
    MAX_FRAMES,
    ResampleMethod,
)
from moonjify.curve import Curve
from moonjify.exceptions import MoonjifyError
from moonjify.pipeline import EmojiArtConverter
from moonjify.playback import play_in_terminal
from moonjify.raster import is_gif
from moonjify.samples import SAMPLE_IMAGES, get_sample

logger = logging.getLogger(__name__)

CUSTOM_PALETTE_ID = 'custom'


def parse_point(text: str) -> Tuple[float, float]:
    """Parse an ``x,y`` curve point."""
    try:
        x, y = (float(part) for part in text.split(','))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid curve point {text!r}, expected x,y") from None
    return x, y


def parse_symbols(text: str) -> List[str]:
    """Split a custom palette: comma or whitespace separated, else one symbol per character."""
    if ',' in text:
        parts = text.split(',')
    elif any(ch.isspace() for ch in text):
        parts = text.split()
    else:
        parts = list(text)
    return [part.strip() for part in parts if part.strip()]


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog='moonjify',
        description='Convert images and GIF animations to emoji art',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s photo.png                         # Moon phase art, 50 symbols wide
  %(prog)s photo.png -w 80 -p hearts         # 80 wide, heart palette
  %(prog)s photo.png -i --curve 0,200 150,50 300,0
  %(prog)s cat.gif --play                    # Play an animation in the terminal
  %(prog)s cat.gif -o frames.json            # Save frames as a JSON list
  %(prog)s --sample spiral -w 40
  %(prog)s --custom-palette "⬛🟫🟧🟨⬜" --sample gradient
        """
    )

    # Input/Output
    parser.add_argument('input', nargs='?', help='Input image file')
    parser.add_argument('--sample', choices=sorted(SAMPLE_IMAGES),
                        help='Use a generated sample image instead of a file')
    parser.add_argument('-o', '--output', help='Output file (.json for a list of frames, else text)')

    # Size options
    parser.add_argument('-w', '--width', type=int, default=DEFAULT_CELL_WIDTH,
                        help=f'Output width in symbols (default: {DEFAULT_CELL_WIDTH})')
    parser.add_argument('-H', '--height', type=int,
                        help='Output height in symbols (default: from aspect ratio)')
    parser.add_argument('--resample', choices=[m.name.lower() for m in ResampleMethod],
                        default='bilinear', help='Scaling filter (default: bilinear)')

    # Palette options
    parser.add_argument('-p', '--palette', default='moon', help='Palette id (default: moon)')
    parser.add_argument('--custom-palette', metavar='SYMBOLS',
                        help='Custom symbols, ordered automatically by brightness')
    parser.add_argument('--list-palettes', action='store_true', help='List palettes and exit')

    # Brightness options
    parser.add_argument('-i', '--invert', action='store_true', help='Invert brightness')
    parser.add_argument('--curve', nargs='+', type=parse_point, metavar='X,Y',
                        help='Brightness curve control points in editor space')
    parser.add_argument('--curve-height', type=float, default=DEFAULT_CURVE_HEIGHT,
                        help=f'Height of the curve editor space (default: {DEFAULT_CURVE_HEIGHT})')

    # Animation options
    parser.add_argument('--animated', action='store_true',
                        help='Decode the input as an animation even if not a .gif')
    parser.add_argument('--max-frames', type=int, default=MAX_FRAMES,
                        help=f'Maximum number of animation frames (default: {MAX_FRAMES})')
    parser.add_argument('--play', action='store_true', help='Play the frames in the terminal')
    parser.add_argument('--delay', type=int, default=DEFAULT_FRAME_DELAY_MS,
                        help=f'Delay between frames in ms (default: {DEFAULT_FRAME_DELAY_MS})')
    parser.add_argument('--loops', type=int, default=-1,
                        help='Number of loops when playing (-1 for infinite)')

    # Other options
    parser.add_argument('--demo', action='store_true', help='Run demo')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    return parser


def demo(converter: Optional[EmojiArtConverter] = None):
    """Render the gradient sample with every registered palette."""
    converter = converter or EmojiArtConverter()
    data = get_sample('gradient').to_bytes()

    print("=" * 60)
    print("Emoji Art Converter Demo")
    print("=" * 60)

    for index, palette in enumerate(converter.registry.list(), start=1):
        print(f"\n{index}. {palette.name} ({palette.id}):")
        print("-" * 40)
        print(converter.convert_still(data, cell_width=20, cell_height=4, palette=palette), end='')

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)


def write_frames(frames: Sequence[str], path: str):
    """Write frames as a JSON list (``.json``) or as text separated by blank lines."""
    with open(path, 'w', encoding='utf-8') as f:
        if path.lower().endswith('.json'):
            json.dump(list(frames), f, ensure_ascii=False, indent=2)
        else:
            f.write('\n'.join(frames))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for command line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        config = ConversionConfig(
            cell_width=args.width,
            cell_height=args.height,
            inverted=args.invert,
            curve_height=args.curve_height,
            resample=ResampleMethod.from_name(args.resample),
            max_frames=args.max_frames,
        )
    except ValueError as e:
        parser.error(str(e))
    if args.delay <= 0:
        parser.error(f"--delay must be positive, got {args.delay}")

    converter = EmojiArtConverter(config)

    if args.list_palettes:
        for palette in converter.registry.list():
            description = f" - {palette.description}" if palette.description else ""
            print(f"{palette.id:10} {''.join(palette.symbols)}  {palette.name}{description}")
        return 0

    if args.demo:
        demo(converter)
        return 0

    if not args.input and not args.sample:
        parser.print_help()
        return 0

    try:
        palette = args.palette
        if args.custom_palette:
            palette = converter.add_custom_palette(
                CUSTOM_PALETTE_ID, 'Custom', parse_symbols(args.custom_palette))
            logger.info("Custom palette ordered as %s", ''.join(palette.symbols))

        curve = Curve.from_pairs(args.curve, args.curve_height) if args.curve else None

        if args.sample:
            sample = get_sample(args.sample)
            data = sample.to_bytes()
            animated = args.animated or sample.is_animated
        else:
            data = Path(args.input).read_bytes()
            animated = args.animated or is_gif(data)

        options = dict(curve=curve, palette=palette)
        if animated:
            frames = converter.convert_animated(data, **options)
        else:
            frames = [converter.convert_still(data, **options)]

    except (MoonjifyError, OSError, ValueError) as e:
        logger.error("Error converting image: %s", e)
        return 1

    logger.info("Rendered %d frame(s)", len(frames))

    if args.output:
        write_frames(frames, args.output)
        print(f"Saved to {args.output}")
    elif args.play and len(frames) > 1:
        play_in_terminal(frames, delay_ms=args.delay, loops=args.loops)
    else:
        print('\n'.join(frames), end='')

    return 0


if __name__ == '__main__':
    sys.exit(main())
