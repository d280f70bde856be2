"""Core enums used across modules."""

from enum import IntEnum, StrEnum


class SortOrderEnum(StrEnum):
    """Sort direction accepted by list endpoints."""

    ASC = "asc"
    DESC = "desc"


class UserStatusEnum(IntEnum):
    """User account status."""

    DISABLED = 0
    ACTIVE = 1


class FieldTypeEnum(StrEnum):
    """Profile field value types."""

    SINGLE_LINE_TEXT = "SingleLineText"
    MULTI_LINE_TEXT = "MultiLineText"
    SINGLE_CHOICE = "SingleChoice"
    MULTIPLE_CHOICE = "MultipleChoice"
    DATE = "Date"
    TAG = "Tag"
    IMAGE = "Image"
    VIDEO = "Video"
    AUDIO = "Audio"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    FILE = "File"
    SECRET_CARD = "SecretCard"
    ACHIEVEMENTS = "Achievements"
    MOOD = "Mood"
    PREFERENCE = "Preference"
    VIRTUAL_GIFT = "VirtualGift"
    QUESTIONNAIRE = "Questionnaire"
