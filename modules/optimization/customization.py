"""Character customization appended to the user's prompt."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Customization:
    """Optional character attributes the user wants applied."""

    hair_color: str = ""
    eye_color: str = ""
    facial_structure: str = ""

    def is_empty(self) -> bool:
        return not any(value.strip() for value in (self.hair_color, self.eye_color, self.facial_structure))


_FIELD_LABELS = (
    ("hair_color", "Hair color"),
    ("eye_color", "Eye color"),
    ("facial_structure", "Facial structure adjustments"),
)


def compose_prompt(prompt: str, customization: Customization) -> str:
    """Append the filled-in customization fields to the prompt, one per line."""
    if customization.is_empty():
        return prompt

    parts = [prompt.strip()]
    for attr, label in _FIELD_LABELS:
        value = getattr(customization, attr).strip()
        if value:
            parts.append(f"{label}: {value}")
    return "\n".join(part for part in parts if part)
