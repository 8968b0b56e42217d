"""Tests for batch generation."""
import pytest

from config import Config
from batch.services import batch_generate, select_reference
from common.models import BatchConsistencyMode
from common.prompts import consistency_instruction
from conftest import GENERATED_IMAGE, REFERENCE_IMAGE, REFERENCE_IMAGE_2

PROMPTS = ["episode one", "episode two", "episode three", "episode four"]


def test_all_items_succeed(fake_gemini):
    result = batch_generate(PROMPTS, "Retro gaming channel", "16:9")

    assert [t.index for t in result.thumbnails] == [0, 1, 2, 3]
    assert [t.prompt for t in result.thumbnails] == PROMPTS
    assert all(t.image == GENERATED_IMAGE for t in result.thumbnails)
    assert result.consistency_score == 1.0
    assert len(fake_gemini.image_calls) == len(PROMPTS)


@pytest.mark.parametrize("failing_index", [0, 2, 3])
def test_failed_item_is_skipped(fake_gemini, failing_index):
    responses = [GENERATED_IMAGE] * len(PROMPTS)
    responses[failing_index] = RuntimeError("AI service error: 500")
    fake_gemini.image_responses.extend(responses)

    result = batch_generate(PROMPTS, "base", "1:1")

    expected = [i for i in range(len(PROMPTS)) if i != failing_index]
    assert [t.index for t in result.thumbnails] == expected
    assert result.consistency_score == pytest.approx((len(PROMPTS) - 1) / len(PROMPTS))
    assert len(fake_gemini.image_calls) == len(PROMPTS)


def test_missing_image_counts_as_failure(fake_gemini):
    fake_gemini.image_responses.extend([None, GENERATED_IMAGE])

    result = batch_generate(["a", "b"], "base", "9:16")

    assert [t.index for t in result.thumbnails] == [1]
    assert result.consistency_score == 0.5


def test_every_item_failing_still_returns(fake_gemini):
    fake_gemini.image_responses.extend([RuntimeError("down")] * 2)

    result = batch_generate(["a", "b"], "base", "9:16")

    assert result.thumbnails == []
    assert result.consistency_score == 0.0


def test_items_run_in_order_with_shared_base(fake_gemini):
    batch_generate(["first", "second"], "Cooking show", "16:9", consistency_mode="theme")

    prompts = [call["prompt"] for call in fake_gemini.image_calls]
    assert prompts[0].startswith("Cooking show first" + consistency_instruction("theme"))
    assert prompts[1].startswith("Cooking show second")
    assert all("Optimized for YouTube thumbnails" in p for p in prompts)
    assert all(call["images"] == [] for call in fake_gemini.image_calls)


def test_character_mode_attaches_character_reference(fake_gemini):
    batch_generate(
        ["a"], "base", "1:1",
        consistency_mode=BatchConsistencyMode.CHARACTER,
        style_reference=REFERENCE_IMAGE_2,
        character_reference=REFERENCE_IMAGE,
    )

    call = fake_gemini.image_calls[0]
    assert call["images"] == [REFERENCE_IMAGE]
    assert "character consistency" in call["prompt"]
    assert "(character consistency is CRITICAL)" in call["system"]


def test_style_mode_without_reference_drops_instruction(fake_gemini):
    batch_generate(["a"], "base", "1:1", consistency_mode="style", character_reference=REFERENCE_IMAGE)

    call = fake_gemini.image_calls[0]
    assert call["images"] == []
    assert "CRITICAL: Apply the exact artistic style" not in call["prompt"]


def test_select_reference():
    assert select_reference(BatchConsistencyMode.STYLE, REFERENCE_IMAGE, REFERENCE_IMAGE_2) == REFERENCE_IMAGE
    assert select_reference(BatchConsistencyMode.CHARACTER, REFERENCE_IMAGE, REFERENCE_IMAGE_2) == REFERENCE_IMAGE_2
    assert select_reference(BatchConsistencyMode.THEME, REFERENCE_IMAGE, REFERENCE_IMAGE_2) is None


def test_empty_prompt_list_is_rejected(fake_gemini):
    with pytest.raises(ValueError):
        batch_generate([], "base", "1:1")
    assert fake_gemini.call_count == 0


def test_batch_size_limit(fake_gemini, monkeypatch):
    monkeypatch.setattr(Config, "MAX_BATCH_PROMPTS", 2)
    with pytest.raises(ValueError, match="limited to 2"):
        batch_generate(["a", "b", "c"], "base", "1:1")
    assert fake_gemini.call_count == 0


def test_invalid_reference_is_rejected(fake_gemini):
    with pytest.raises(ValueError):
        batch_generate(["a"], "base", "1:1", consistency_mode="style", style_reference="data:text/plain;base64,aGk=")
    assert fake_gemini.call_count == 0
