"""
Prompt Composer
Builds the editing instruction sent alongside the reference images.

The instruction is an ordered list of clauses. Each rule looks at the form
fields and returns its clause, or None when it does not apply. Rule order is
significant: the model reads identity constraints first and output format
last.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from app.models.generation import AspectRatio, FormParameters, Quality


SINGLE_IDENTITY_CLAUSE = (
    "Crucial instruction: You MUST preserve the facial identity of the character "
    "from the uploaded image. Pay close attention to the shape of the eyes, nose, "
    "mouth, and jawline to ensure the person is instantly recognizable. Adapt the "
    "angle and lighting of the face to match the new scene and character pose "
    "naturally. Only modify the rest of the image based on the following descriptions."
)

MULTI_IDENTITY_CLAUSE = (
    "Crucial instruction: The user has uploaded multiple images, each featuring a "
    "distinct character. In the generated scene, you MUST preserve the unique facial "
    "identity of each individual character as shown in their respective source images. "
    "Pay close attention to the shape of their eyes, nose, mouth, and jawline to ensure "
    "they are instantly recognizable. Do not merge their features. Adapt their angles "
    "and lighting to match the new scene and poses naturally. Only modify the rest of "
    "the image based on the following descriptions."
)

REMOVE_BACKGROUND_CLAUSE = "Remove the background."

QUALITY_CLAUSES = {
    Quality.STANDARD: None,
    Quality.TWO_K: (
        "The final image should be very high quality and highly detailed, "
        "suitable for 2K resolution."
    ),
    Quality.FOUR_K: (
        "The final image should be extremely high quality with ultra-fine details, "
        "suitable for 4K resolution."
    ),
    Quality.EIGHT_K: (
        "The final image should be of the highest possible photorealistic quality and "
        "detail, as if shot on a high-end camera, suitable for 8K resolution."
    ),
}


@dataclass(frozen=True)
class PromptContext:
    """The form fields the prompt depends on (image bytes excluded)."""
    image_count: int
    character: str = ""
    scene: str = ""
    quality: Quality = Quality.STANDARD
    remove_background: bool = True
    aspect_ratio: AspectRatio = AspectRatio.SQUARE

    @classmethod
    def from_form(cls, params: FormParameters) -> "PromptContext":
        return cls(
            image_count=len(params.images),
            character=params.character,
            scene=params.scene,
            quality=params.quality,
            remove_background=params.remove_background,
            aspect_ratio=params.aspect_ratio,
        )


PromptRule = Callable[[PromptContext], Optional[str]]


def identity_clause(ctx: PromptContext) -> str:
    return MULTI_IDENTITY_CLAUSE if ctx.image_count > 1 else SINGLE_IDENTITY_CLAUSE


def background_clause(ctx: PromptContext) -> Optional[str]:
    return REMOVE_BACKGROUND_CLAUSE if ctx.remove_background else None


def character_clause(ctx: PromptContext) -> Optional[str]:
    return f"Character description: {ctx.character}." if ctx.character else None


def scene_clause(ctx: PromptContext) -> Optional[str]:
    return f"Scene, environment: {ctx.scene}." if ctx.scene else None


def aspect_ratio_clause(ctx: PromptContext) -> str:
    return f"The final image should have an aspect ratio of {AspectRatio(ctx.aspect_ratio).value}."


def quality_clause(ctx: PromptContext) -> Optional[str]:
    return QUALITY_CLAUSES[Quality(ctx.quality)]


PROMPT_RULES: List[PromptRule] = [
    identity_clause,
    background_clause,
    character_clause,
    scene_clause,
    aspect_ratio_clause,
    quality_clause,
]


def compose_instruction(ctx: PromptContext) -> str:
    """Concatenate every applicable clause in rule order."""
    clauses = (rule(ctx) for rule in PROMPT_RULES)
    return " ".join(c for c in clauses if c).strip()


def compose_prompt(params: FormParameters) -> str:
    """Compose the instruction for a full set of form parameters."""
    return compose_instruction(PromptContext.from_form(params))
