"""
htmltagbuilder - build the html text of a single element
"""
from .htmltagbuilder import (
    AttributeDict,
    TagBuilder,
    TagRenderMode,
    attributeencode,
    htmlencode,
    invariantstr,
)

__all__ = [
    "AttributeDict",
    "TagBuilder",
    "TagRenderMode",
    "attributeencode",
    "htmlencode",
    "invariantstr",
]
