from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

Color = tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class BitMode:
    """Static metadata for one difficulty variant."""

    name: str
    label: str
    bit_width: int
    scale_factor: int
    suggestion_count: int
    high_score_key: int
    base_time_s: float
    is_signed: bool = False
    color: Color = (100, 255, 100)

    def __post_init__(self) -> None:
        if self.bit_width <= 0:
            raise ValueError("bit_width must be > 0")
        if self.scale_factor <= 0:
            raise ValueError("scale_factor must be > 0")
        if not (1 <= self.suggestion_count <= 2**self.bit_width):
            raise ValueError("suggestion_count must fit in the value range")

    @property
    def value_count(self) -> int:
        return 2**self.bit_width

    @property
    def upper_bound(self) -> int:
        return (self.value_count - 1) * self.scale_factor

    @property
    def scale_suffix(self) -> str:
        return "" if self.scale_factor == 1 else f" x{self.scale_factor}"

    def raw_to_signed(self, raw: int) -> int:
        # Two's complement: the top half of the pattern range is negative.
        if self.is_signed and raw >= self.value_count // 2:
            return raw - self.value_count
        return raw

    def display_value(self, candidate: int) -> int:
        """Value shown on a suggestion box for a stored candidate."""
        if self.is_signed:
            return self.raw_to_signed(candidate)
        return candidate


# Colour scheme runs from easy (green/cyan) to hard (purple/pink).
FOUR = BitMode("FOUR", "4 bits", 4, 1, 3, 4, 8.0, color=(100, 255, 100))
FOUR_TWOS_COMPLEMENT = BitMode(
    "FOUR_TWOS_COMPLEMENT",
    "4 bits (Two's complement)",
    4,
    1,
    3,
    42,
    8.0,
    is_signed=True,
    color=(100, 255, 100),
)
FOUR_SHIFT_4 = BitMode("FOUR_SHIFT_4", "4 bits*16", 4, 16, 3, 44, 8.0, color=(100, 255, 180))
FOUR_SHIFT_8 = BitMode("FOUR_SHIFT_8", "4 bits*256", 4, 256, 3, 48, 8.0, color=(100, 220, 255))
FOUR_SHIFT_12 = BitMode("FOUR_SHIFT_12", "4 bits*4096", 4, 4096, 3, 412, 8.0, color=(100, 180, 255))
EIGHT = BitMode("EIGHT", "8 bits", 8, 1, 4, 8, 12.0, color=(125, 120, 255))
TWELVE = BitMode("TWELVE", "12 bits", 12, 1, 5, 12, 16.0, color=(200, 100, 255))
SIXTEEN = BitMode("SIXTEEN", "16 bits", 16, 1, 6, 16, 20.0, color=(255, 80, 150))

ALL_MODES: tuple[BitMode, ...] = (
    FOUR,
    FOUR_TWOS_COMPLEMENT,
    FOUR_SHIFT_4,
    FOUR_SHIFT_8,
    FOUR_SHIFT_12,
    EIGHT,
    TWELVE,
    SIXTEEN,
)

# Order of lines in the persisted high-score file.
HIGH_SCORE_KEYS: tuple[int, ...] = tuple(m.high_score_key for m in ALL_MODES)


class NumberMode(str, Enum):
    UNSIGNED = "unsigned"
    SIGNED = "signed"

    @property
    def label(self) -> str:
        return self.value.upper()

    def toggled(self) -> "NumberMode":
        return NumberMode.SIGNED if self is NumberMode.UNSIGNED else NumberMode.UNSIGNED


@dataclass(frozen=True, slots=True)
class MenuEntry:
    label: str
    unsigned: BitMode
    signed: BitMode | None = None

    def resolve(self, number_mode: NumberMode) -> BitMode:
        # Rows without a signed variant ignore the signed preference.
        if number_mode is NumberMode.SIGNED and self.signed is not None:
            return self.signed
        return self.unsigned


MENU_ENTRIES: tuple[MenuEntry, ...] = (
    MenuEntry("nibble_0    4 bit", FOUR, FOUR_TWOS_COMPLEMENT),
    MenuEntry("nibble_1    4 bit*16", FOUR_SHIFT_4),
    MenuEntry("nibble_2    4 bit*256", FOUR_SHIFT_8),
    MenuEntry("nibble_3    4 bit*4096", FOUR_SHIFT_12),
    MenuEntry("byte        8 bit", EIGHT),
    MenuEntry("hexlet     12 bit", TWELVE),
    MenuEntry("word       16 bit", SIXTEEN),
)


@dataclass(frozen=True, slots=True)
class Preferences:
    """Menu choices that survive a menu -> play -> menu round trip."""

    last_selected_index: int = 4  # "byte 8 bit"
    last_number_mode: NumberMode = NumberMode.UNSIGNED

    def clamped(self, entry_count: int) -> "Preferences":
        if entry_count <= 0:
            raise ValueError("entry_count must be > 0")
        idx = min(max(0, self.last_selected_index), entry_count - 1)
        if idx == self.last_selected_index:
            return self
        return Preferences(last_selected_index=idx, last_number_mode=self.last_number_mode)
