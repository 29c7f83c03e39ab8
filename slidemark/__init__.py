from slidemark.entry import convert
from slidemark.parser import Parser, parse
from slidemark.toc import build_toc
from slidemark.types import ConversionConfig, Presentation

__all__ = [
    'convert',
    'parse',
    'build_toc',
    'Parser',
    'ConversionConfig',
    'Presentation',
]
