"""Styled strings, rich-text entity trees and message layout for terminal character grids."""

__version__ = "0.1.0"