#!/usr/bin/env python3
"""
Emoji Art Converter
===================
Convert images and GIF animations to emoji art from the command line.

Usage:
    python main.py photo.png -w 60 -p moon
    python main.py animation.gif --play
    python main.py --demo
"""

import sys

from moonjify.cli import main

if __name__ == '__main__':
    sys.exit(main())
