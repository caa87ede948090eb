"""Prompt customization tests."""

from __future__ import annotations

from modules.optimization.customization import Customization, compose_prompt


def test_empty_customization_returns_prompt_untouched():
    assert compose_prompt("  a knight ", Customization()) == "  a knight "
    assert compose_prompt("a knight", Customization(hair_color="   ")) == "a knight"


def test_filled_fields_are_appended_in_order():
    customization = Customization(
        hair_color="deep crimson",
        eye_color="emerald green",
        facial_structure="sharper jawline",
    )

    result = compose_prompt("Change outfit to white armor.", customization)

    assert result.splitlines() == [
        "Change outfit to white armor.",
        "Hair color: deep crimson",
        "Eye color: emerald green",
        "Facial structure adjustments: sharper jawline",
    ]


def test_blank_fields_are_skipped():
    result = compose_prompt("portrait", Customization(eye_color=" piercing blue "))

    assert result == "portrait\nEye color: piercing blue"
    assert not Customization(eye_color="blue").is_empty()
