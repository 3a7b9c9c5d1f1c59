#!/usr/bin/env python3
"""
main.py: quick-start entry point.

Rearrange image1.png into the layout of image2.png:

    python main.py run image1.png image2.png -o out1to2.png

Or use the module directly:

    python -m pixswap.cli run --help
    python -m pixswap.cli check image1.png image2.png
"""

from pixswap.cli import app

if __name__ == "__main__":
    app()
