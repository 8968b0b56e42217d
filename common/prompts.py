"""Instruction templates for every generation step.

All builders accept either an ``AspectRatio``/mode enum member or its
string value, and every system instruction names the requested ratio.
"""
from typing import Optional, Union

from common.models import (
    AspectRatio,
    BatchConsistencyMode,
    ConsistencyMode,
    CreativityLevel,
    FusionStyle,
)

RatioLike = Union[AspectRatio, str]


def _ratio(value: RatioLike) -> str:
    return AspectRatio(value).value


def _is_vertical(ratio: str) -> bool:
    return ratio == AspectRatio.PORTRAIT.value


# ---------- Aspect ratio rules ----------
def aspect_ratio_rule(aspect_ratio: RatioLike, subject: str = "generate an image with") -> str:
    """
    Sentence telling the model how to honour the aspect ratio.

    Vertical output must never be cropped; other ratios may be cropped to fit.
    """
    ratio = _ratio(aspect_ratio)
    if _is_vertical(ratio):
        return (
            f"You MUST {subject} an aspect ratio of EXACTLY {ratio} (vertical). "
            "Do not add any padding or black bars. Do NOT crop or cut any text or subjects; "
            f"instead, scale and reposition elements so that all content remains fully inside "
            f"the {ratio} frame with comfortable safe margins."
        )
    return (
        f"You MUST {subject} an aspect ratio of EXACTLY {ratio}. "
        "Do not add any padding or black bars. "
        "Crop the image to fit the requested aspect ratio if necessary."
    )


def generator_system_instruction(aspect_ratio: RatioLike) -> str:
    return "You are an expert image generator.\n" + aspect_ratio_rule(aspect_ratio)


def editor_system_instruction(aspect_ratio: RatioLike) -> str:
    return "You are an expert image editor.\n" + aspect_ratio_rule(
        aspect_ratio, subject="edit the image to have"
    )


# ---------- Prompt optimization ----------
def optimizer_system_instruction(aspect_ratio: RatioLike) -> str:
    ratio_rule = aspect_ratio_rule(aspect_ratio, subject="produce a final image with")
    return f"""You are an expert prompt engineer for a text-to-image model. Your task is to take a user's simple prompt and expand it into a rich, detailed, and creative prompt that will generate a visually stunning and effective thumbnail.

You must follow these rules:
1.  **Incorporate Aspect Ratio**: {ratio_rule}
2.  **Describe Composition**: Detail the layout, including subject placement, background elements, and foreground details. Use terms like "rule of thirds," "leading lines," "depth of field," etc.
3.  **Specify Style**: Define the artistic style. Examples: "hyper-realistic photo," "cinematic 4k," "digital painting," "anime style," "vibrant illustration," "dramatic lighting."
4.  **Enhance Details**: Add specific details about colors, lighting, textures, and mood. Be descriptive and evocative.
5.  **Incorporate User Images**: If the user has provided reference images, your prompt should instruct the image model to incorporate them creatively into the final composition.
6.  **Keep it a single paragraph. Do not use lists or bullet points.**
7.  **Output only the prompt itself, with no extra text or explanation.**"""


def reference_context(image_count: int) -> str:
    if not image_count:
        return "No reference images were provided."
    plural = "s" if image_count > 1 else ""
    return (
        f"The user also provided {image_count} reference image{plural}. "
        "Consider them when composing the scene."
    )


def optimizer_user_prompt(prompt: str, aspect_ratio: RatioLike, image_count: int) -> str:
    return (
        f'User prompt: "{prompt}"\n'
        f"Aspect ratio: {_ratio(aspect_ratio)}\n"
        f"{reference_context(image_count)}"
    )


def fallback_optimized_prompt(prompt: str, aspect_ratio: RatioLike, image_count: int = 0) -> str:
    """Deterministic optimized prompt used when the text model is unavailable."""
    images_note = "Incorporate the provided reference images appropriately." if image_count else ""
    return (
        f"Create an eye-catching thumbnail. Aspect ratio: {_ratio(aspect_ratio)}. "
        "Crop to fit with no padding or black bars. Emphasize strong composition "
        "(rule of thirds, leading lines), clear subject separation, and dramatic lighting. "
        f"Reflect the following intent: {prompt}. {images_note}"
    ).strip()


# ---------- Studio consistency ----------
STUDIO_CONSISTENCY_SUFFIXES = {
    ConsistencyMode.CHARACTER: (
        " Maintain character consistency with the reference image provided. Keep the same "
        "facial features, clothing style, and character design throughout."
    ),
    ConsistencyMode.STYLE: (
        " Apply the artistic style, color palette, lighting, and visual treatment from the "
        "reference image while creating new content."
    ),
}


def studio_consistency_suffix(mode: Union[ConsistencyMode, str]) -> str:
    return STUDIO_CONSISTENCY_SUFFIXES.get(ConsistencyMode(mode), "")


# ---------- Batch generation ----------
BATCH_CONSISTENCY_INSTRUCTIONS = {
    BatchConsistencyMode.CHARACTER: (
        " CRITICAL: Maintain exact character consistency - same facial features, hair, clothing "
        "style, and character design as shown in the reference image. The character should be "
        "immediately recognizable across all variations."
    ),
    BatchConsistencyMode.STYLE: (
        " CRITICAL: Apply the exact artistic style, color palette, lighting technique, brushwork, "
        "and visual treatment from the reference image to create a cohesive series."
    ),
    BatchConsistencyMode.THEME: (
        " CRITICAL: Maintain thematic consistency - same mood, color scheme, composition style, "
        "and visual hierarchy across all thumbnails in this series."
    ),
}

PLATFORM_TARGETS = {
    AspectRatio.LANDSCAPE: "YouTube thumbnails",
    AspectRatio.PORTRAIT: "vertical social media",
    AspectRatio.SQUARE: "square social posts",
}


def consistency_instruction(mode: Union[BatchConsistencyMode, str]) -> str:
    return BATCH_CONSISTENCY_INSTRUCTIONS.get(BatchConsistencyMode(mode), "")


def batch_system_instruction(aspect_ratio: RatioLike, mode: Union[BatchConsistencyMode, str]) -> str:
    ratio = _ratio(aspect_ratio)
    mode = BatchConsistencyMode(mode)
    if _is_vertical(ratio):
        framing = (
            f"Generate vertical {ratio} thumbnails. Keep all text and visual elements fully inside "
            "the frame with comfortable safe margins. Do NOT crop or cut any content; instead, "
            "scale and reposition elements to fit the vertical format."
        )
    else:
        framing = (
            f"Generate thumbnails with exact aspect ratio {ratio}. "
            "Ensure all elements fit properly within the frame."
        )
    emphasis = f" ({mode.value} consistency is CRITICAL)" if mode != BatchConsistencyMode.NONE else ""
    return f"""You are an expert thumbnail designer specializing in creating consistent, high-impact visual series. You excel at maintaining visual consistency across multiple designs while ensuring each thumbnail is unique and engaging.

{framing}

Focus on:
- Visual consistency{emphasis}
- High contrast and readability
- Professional design quality
- Thumbnail-optimized composition
- Clear visual hierarchy"""


def batch_prompt(base_prompt: str, prompt: str, instruction: str, aspect_ratio: RatioLike) -> str:
    """Per-item prompt: base + item prompt + consistency sentence + technical requirements."""
    ratio = _ratio(aspect_ratio)
    target = PLATFORM_TARGETS[AspectRatio(ratio)]
    return f"""{base_prompt} {prompt}{instruction}

TECHNICAL REQUIREMENTS:
- Aspect ratio: exactly {ratio}
- Professional thumbnail quality with high visual impact
- Clear focal point and readable text elements
- Consistent branding and style throughout the series
- Optimized for {target}"""


# ---------- Intelligent fusion ----------
FUSION_ANALYST_SYSTEM = (
    "You are an expert visual analyst specializing in image composition and fusion techniques. "
    "Provide detailed, technical analysis for optimal image combination."
)

FUSION_STYLE_INSTRUCTIONS = {
    FusionStyle.SEAMLESS: "Create a seamless blend where all images flow naturally together with smooth transitions and unified lighting.",
    FusionStyle.COLLAGE: "Arrange the images in an artistic collage layout with clear boundaries but harmonious composition.",
    FusionStyle.OVERLAY: "Layer the images with creative overlays, transparency effects, and depth to create visual interest.",
    FusionStyle.BLEND: "Blend the images together using advanced mixing techniques, creating new visual relationships between elements.",
    FusionStyle.COMPOSITE: "Create a professional composite combining the best elements from each image into a cohesive new design.",
}

CREATIVITY_INSTRUCTIONS = {
    CreativityLevel.CONSERVATIVE: "Maintain the original character of each image while combining them respectfully.",
    CreativityLevel.BALANCED: "Balance preservation of original elements with creative new combinations.",
    CreativityLevel.CREATIVE: "Take creative liberties to produce something new and visually striking.",
    CreativityLevel.EXPERIMENTAL: "Push creative boundaries and experiment with unexpected combinations and effects.",
}


def fusion_analysis_prompt(
    image_count: int,
    fusion_style: Union[FusionStyle, str],
    fusion_goal: str,
    creativity_level: Union[CreativityLevel, str],
) -> str:
    return f"""Analyze these {image_count} images and describe:
1. The main subject/content of each image
2. The artistic style and visual characteristics
3. The lighting and color palette
4. How they could be best combined for a {FusionStyle(fusion_style).value} fusion
5. Potential challenges in combining them

Target fusion goal: {fusion_goal}
Creativity level: {CreativityLevel(creativity_level).value}"""


def fusion_system_instruction(aspect_ratio: RatioLike) -> str:
    ratio = _ratio(aspect_ratio)
    if _is_vertical(ratio):
        framing = (
            f"Create a vertical {ratio} composition. Ensure all fused elements fit perfectly "
            "within the vertical frame with proper spacing and composition."
        )
    else:
        framing = (
            f"Create a composition with exact aspect ratio {ratio}. "
            "Optimize the layout for this specific format."
        )
    return f"""You are a master digital artist specializing in intelligent image fusion. You excel at combining multiple images into cohesive, visually stunning compositions using advanced AI-guided techniques.

{framing}

Your expertise includes:
- Advanced composition techniques
- Seamless element integration
- Professional color harmony
- Visual flow and hierarchy
- Technical precision in fusion"""


def fusion_prompt(
    fusion_goal: str,
    fusion_style: Union[FusionStyle, str],
    creativity_level: Union[CreativityLevel, str],
    aspect_ratio: RatioLike,
    analysis: str,
    dominant_image: Optional[int] = None,
) -> str:
    dominant = (
        f" Use image {dominant_image + 1} as the dominant base composition."
        if dominant_image is not None else ""
    )
    return f"""{fusion_goal}

FUSION SPECIFICATIONS:
- Style: {FUSION_STYLE_INSTRUCTIONS[FusionStyle(fusion_style)]}
- Creativity: {CREATIVITY_INSTRUCTIONS[CreativityLevel(creativity_level)]}
- Aspect ratio: exactly {_ratio(aspect_ratio)}{dominant}
- Ensure all elements work together harmoniously
- Maintain high visual quality and professional finish

ANALYSIS CONTEXT: {analysis}"""
