# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/12 21:40:05
# @Author : Kariko Lin


class SourceUnavailable(OSError):
    """The config file (or stream) could not be opened or read.

    The only failure `load()` ever surfaces. Malformed lines are not errors.
    """
    def __init__(self, filename: str, reason: str = '') -> None:
        super().__init__(
            f'cannot read config source "{filename}"'
            + (f': {reason}' if reason else ''))
        self.filename = filename
