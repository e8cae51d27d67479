"""Prompt templates and builders for the Gemini outfit generation and edit flows."""

from __future__ import annotations
from dataclasses import dataclass

from virtual_stylist.core.outfits import Style


# --- GENERATION PROMPT ---

OUTFIT_PROMPT_TEMPLATE = """You are a digital fashion stylist.
Generate a high-quality image of a realistic 3D human model wearing the clothing item shown in the input image.

Requirements:
1. The input clothing item MUST be worn by the model.
2. The model should be styled in a complete {STYLE_LABEL} outfit (including matching shoes, accessories, and bottoms/tops as needed). {STYLE_DIRECTION}
3. The aesthetic should be that of {AESTHETIC}.
4. Ensure the model is {POSE_DESCRIPTION}.
"""


@dataclass(frozen=True)
class PromptDefaults:
    """Default wording for the outfit generation prompt."""

    aesthetic: str = (
        "a high-end digital fashion editorial or realistic 3D character render"
    )
    pose_description: str = "posing naturally to showcase the outfit"


DEFAULTS = PromptDefaults()

STYLE_DIRECTIONS = {
    Style.CASUAL: "Keep it relaxed and effortless, suitable for everyday wear.",
    Style.BUSINESS: "Keep it polished and professional, suitable for the office.",
    Style.NIGHT_OUT: "Make it bold and statement-making, suitable for an evening out.",
}


def build_outfit_prompt(
    style: Style,
    aesthetic: str | None = None,
    pose_description: str | None = None,
) -> str:
    """Render the generation prompt for one outfit style."""
    return OUTFIT_PROMPT_TEMPLATE.format(
        STYLE_LABEL=style.label,
        STYLE_DIRECTION=STYLE_DIRECTIONS[style],
        AESTHETIC=aesthetic or DEFAULTS.aesthetic,
        POSE_DESCRIPTION=pose_description or DEFAULTS.pose_description,
    )


# --- EDIT PROMPT ---

EDIT_PROMPT_TEMPLATE = (
    "Edit this image of the fashion model: {INSTRUCTION}. "
    "Maintain the photorealistic 3D model style."
)


def build_edit_prompt(instruction: str) -> str:
    """Render the edit prompt around a user instruction."""
    cleaned = instruction.strip()
    if not cleaned:
        raise ValueError("Edit instruction must not be empty")
    return EDIT_PROMPT_TEMPLATE.format(INSTRUCTION=cleaned)


__all__ = [
    "OUTFIT_PROMPT_TEMPLATE",
    "EDIT_PROMPT_TEMPLATE",
    "DEFAULTS",
    "PromptDefaults",
    "STYLE_DIRECTIONS",
    "build_outfit_prompt",
    "build_edit_prompt",
]
