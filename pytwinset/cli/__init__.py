from .cli import build_parser, main
