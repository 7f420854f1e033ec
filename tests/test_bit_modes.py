from __future__ import annotations

import pytest

from binbreak.bit_modes import (
    ALL_MODES,
    EIGHT,
    FOUR,
    FOUR_SHIFT_4,
    FOUR_SHIFT_8,
    FOUR_SHIFT_12,
    FOUR_TWOS_COMPLEMENT,
    HIGH_SCORE_KEYS,
    MENU_ENTRIES,
    SIXTEEN,
    TWELVE,
    BitMode,
    NumberMode,
    Preferences,
)


def test_catalog_properties() -> None:
    assert FOUR.bit_width == 4
    assert FOUR.upper_bound == 15
    assert FOUR.suggestion_count == 3

    assert FOUR_SHIFT_4.scale_factor == 16
    assert FOUR_SHIFT_4.upper_bound == 240
    assert FOUR_SHIFT_4.suggestion_count == 3

    assert FOUR_SHIFT_8.scale_factor == 256
    assert FOUR_SHIFT_12.high_score_key == 412
    assert EIGHT.upper_bound == 255
    assert TWELVE.suggestion_count == 5
    assert SIXTEEN.suggestion_count == 6
    assert SIXTEEN.base_time_s == 20.0


def test_high_score_keys_are_a_closed_set_of_eight() -> None:
    assert HIGH_SCORE_KEYS == (4, 42, 44, 48, 412, 8, 12, 16)
    assert len({m.high_score_key for m in ALL_MODES}) == len(ALL_MODES) == 8


def test_twos_complement_display() -> None:
    assert FOUR_TWOS_COMPLEMENT.raw_to_signed(9) == -7
    assert FOUR_TWOS_COMPLEMENT.raw_to_signed(8) == -8
    assert FOUR_TWOS_COMPLEMENT.raw_to_signed(7) == 7
    assert FOUR_TWOS_COMPLEMENT.display_value(15) == -1
    # Unsigned modes never go negative.
    assert FOUR.raw_to_signed(9) == 9
    assert FOUR_SHIFT_4.display_value(240) == 240


def test_scale_suffix() -> None:
    assert FOUR.scale_suffix == ""
    assert FOUR_SHIFT_4.scale_suffix == " x16"
    assert FOUR_SHIFT_12.scale_suffix == " x4096"


def test_invalid_bit_mode_rejected() -> None:
    with pytest.raises(ValueError):
        BitMode("BAD", "bad", 2, 1, 5, 99, 8.0)
    with pytest.raises(ValueError):
        BitMode("BAD", "bad", 4, 0, 3, 99, 8.0)


def test_menu_entries_resolve_number_mode() -> None:
    nibble, byte = MENU_ENTRIES[0], MENU_ENTRIES[4]
    assert nibble.resolve(NumberMode.UNSIGNED) is FOUR
    assert nibble.resolve(NumberMode.SIGNED) is FOUR_TWOS_COMPLEMENT
    assert byte.resolve(NumberMode.SIGNED) is EIGHT


def test_preferences_defaults_and_clamp() -> None:
    prefs = Preferences()
    assert prefs.last_selected_index == 4
    assert prefs.last_number_mode is NumberMode.UNSIGNED
    assert Preferences(last_selected_index=99).clamped(7).last_selected_index == 6
    assert NumberMode.UNSIGNED.toggled() is NumberMode.SIGNED
    assert NumberMode.SIGNED.label == "SIGNED"
