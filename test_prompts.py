"""Tests for instruction templates."""
import pytest

from common.models import AspectRatio, BatchConsistencyMode, ConsistencyMode, CreativityLevel, FusionStyle
from common import prompts

ALL_RATIOS = ["16:9", "9:16", "1:1"]


@pytest.mark.parametrize("ratio", ALL_RATIOS)
@pytest.mark.parametrize("builder", [
    prompts.generator_system_instruction,
    prompts.editor_system_instruction,
    prompts.optimizer_system_instruction,
    prompts.fusion_system_instruction,
    lambda r: prompts.batch_system_instruction(r, BatchConsistencyMode.NONE),
])
def test_system_instructions_name_the_ratio(builder, ratio):
    assert ratio in builder(ratio)


def test_vertical_rule_forbids_cropping():
    rule = prompts.aspect_ratio_rule("9:16")
    assert "Do NOT crop" in rule
    assert "reposition" in rule
    assert "Crop the image to fit" not in rule


@pytest.mark.parametrize("ratio", ["16:9", "1:1"])
def test_other_ratios_crop_to_fit(ratio):
    rule = prompts.aspect_ratio_rule(ratio)
    assert "Crop the image to fit" in rule
    assert "Do NOT crop" not in rule


def test_enum_and_string_ratios_are_interchangeable():
    assert prompts.generator_system_instruction(AspectRatio.PORTRAIT) == prompts.generator_system_instruction("9:16")


def test_unknown_ratio_is_rejected():
    with pytest.raises(ValueError):
        prompts.generator_system_instruction("4:3")


def test_fallback_prompt_is_deterministic():
    first = prompts.fallback_optimized_prompt("red car on a beach", "1:1")
    assert first == prompts.fallback_optimized_prompt("red car on a beach", "1:1")
    assert "red car on a beach" in first
    assert "Aspect ratio: 1:1." in first
    assert "rule of thirds" in first
    assert not first.endswith(" ")
    assert "reference images" not in first


def test_fallback_prompt_mentions_references_when_present():
    text = prompts.fallback_optimized_prompt("a cat", "16:9", image_count=2)
    assert text.endswith("Incorporate the provided reference images appropriately.")


def test_reference_context_pluralizes():
    assert prompts.reference_context(0) == "No reference images were provided."
    assert "1 reference image." in prompts.reference_context(1)
    assert "3 reference images." in prompts.reference_context(3)


def test_optimizer_user_prompt_quotes_prompt():
    text = prompts.optimizer_user_prompt("red car", "16:9", 0)
    assert text.startswith('User prompt: "red car"')
    assert "Aspect ratio: 16:9" in text


def test_studio_suffix_only_for_character_and_style():
    assert "character consistency" in prompts.studio_consistency_suffix(ConsistencyMode.CHARACTER)
    assert "artistic style" in prompts.studio_consistency_suffix("style")
    assert prompts.studio_consistency_suffix("none") == ""


def test_batch_consistency_instructions():
    assert prompts.consistency_instruction("theme").startswith(" CRITICAL: Maintain thematic consistency")
    assert prompts.consistency_instruction(BatchConsistencyMode.NONE) == ""


@pytest.mark.parametrize("ratio,target", [
    ("16:9", "YouTube thumbnails"),
    ("9:16", "vertical social media"),
    ("1:1", "square social posts"),
])
def test_batch_prompt_targets_platform(ratio, target):
    text = prompts.batch_prompt("Tech channel", "episode 1", "", ratio)
    assert text.startswith("Tech channel episode 1")
    assert "TECHNICAL REQUIREMENTS:" in text
    assert f"Aspect ratio: exactly {ratio}" in text
    assert text.endswith(f"Optimized for {target}")


def test_batch_system_emphasizes_active_mode():
    assert "(style consistency is CRITICAL)" in prompts.batch_system_instruction("1:1", "style")
    assert "is CRITICAL" not in prompts.batch_system_instruction("1:1", "none")


def test_fusion_tables_cover_every_option():
    assert set(prompts.FUSION_STYLE_INSTRUCTIONS) == set(FusionStyle)
    assert set(prompts.CREATIVITY_INSTRUCTIONS) == set(CreativityLevel)


def test_fusion_prompt_embeds_analysis_and_dominant_image():
    text = prompts.fusion_prompt(
        "Put the cat on the mountain", "collage", "experimental", "9:16",
        analysis="Image 1 shows a cat.", dominant_image=1,
    )
    assert text.startswith("Put the cat on the mountain")
    assert prompts.FUSION_STYLE_INSTRUCTIONS[FusionStyle.COLLAGE] in text
    assert prompts.CREATIVITY_INSTRUCTIONS[CreativityLevel.EXPERIMENTAL] in text
    assert "exactly 9:16 Use image 2 as the dominant base composition." in text
    assert text.endswith("ANALYSIS CONTEXT: Image 1 shows a cat.")


def test_fusion_analysis_prompt():
    text = prompts.fusion_analysis_prompt(3, "blend", "one poster", "conservative")
    assert text.startswith("Analyze these 3 images")
    assert "best combined for a blend fusion" in text
    assert "Creativity level: conservative" in text
