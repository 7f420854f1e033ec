"""Test package for binbreak.

Core tests drive the puzzle, session and animation engines with a fake
clock and seeded RNGs. The smoke tests run the real pygame loop headlessly
using SDL's dummy video driver. Run ``pytest`` from the project root.
"""
