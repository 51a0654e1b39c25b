from assetmin.stylesheet.assembler import Assembler
from assetmin.stylesheet.compiler import Compiler
from assetmin.stylesheet.model import Block, Node, Rule, Statement
from assetmin.stylesheet.parser import Parser, parse_stylesheet
from assetmin.stylesheet.preminify import minify_css

__all__ = [
    "Assembler",
    "Block",
    "Compiler",
    "Node",
    "Parser",
    "Rule",
    "Statement",
    "minify_css",
    "parse_stylesheet",
]
