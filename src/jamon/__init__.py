# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 21:51:36
# @Author : Kariko Lin

from .errors import SourceUnavailable
from .model import ROOT_SECTION, Document, Section
from .parser import (
    JamonParser,
    LineKind,
    ParsedLine,
    classify,
    load,
    loads,
    resolve
)

__all__ = [
    'Document', 'Section', 'ROOT_SECTION',
    'JamonParser', 'LineKind', 'ParsedLine',
    'classify', 'resolve', 'load', 'loads',
    'SourceUnavailable'
]
