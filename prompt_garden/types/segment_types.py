from enum import Enum


class SegmentType(str, Enum):
    TEXT = 'text'
    NOTE = 'note'
    FOLLOWUP = 'followup'


class PartType(str, Enum):
    TEXT = 'text'
    VARIABLE = 'variable'


__all__ = ['SegmentType', 'PartType']
