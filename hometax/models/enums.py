"""Enumerations for HomeTax."""

from enum import StrEnum


class HousingChoice(StrEnum):
    BUY = "BUY"
    RENT = "RENT"


class DeductionMethod(StrEnum):
    STANDARD = "STANDARD"
    ITEMIZED = "ITEMIZED"
