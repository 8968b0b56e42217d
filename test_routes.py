"""Tests for the action endpoints and the uniform result shape."""
from conftest import DEFAULT_TEXT, EDITED_IMAGE, GENERATED_IMAGE, REFERENCE_IMAGE, REFERENCE_IMAGE_2


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_optimize_prompt_action(client, fake_gemini):
    response = client.post("/api/actions/optimize-prompt", json={
        "prompt": "red car on a beach",
        "aspect_ratio": "1:1",
    })
    assert response.status_code == 200
    assert response.json() == {"success": True, "optimized_prompt": DEFAULT_TEXT}


def test_optimize_prompt_action_never_fails_on_provider_error(client, fake_gemini):
    fake_gemini.text_responses.append(RuntimeError("AI service error: 503"))
    body = client.post("/api/actions/optimize-prompt", json={"prompt": "red car", "aspect_ratio": "16:9"}).json()
    assert body["success"] is True
    assert "16:9" in body["optimized_prompt"]


def test_generate_thumbnail_action(client, fake_gemini):
    body = client.post("/api/actions/generate-thumbnail", json={
        "prompt": "optimized",
        "aspect_ratio": "16:9",
        "images": [REFERENCE_IMAGE],
    }).json()
    assert body == {"success": True, "thumbnail": GENERATED_IMAGE}


def test_generate_thumbnail_action_reports_missing_image(client, fake_gemini):
    fake_gemini.image_responses.append(None)
    response = client.post("/api/actions/generate-thumbnail", json={"prompt": "optimized", "aspect_ratio": "1:1"})
    body = response.json()
    assert response.status_code == 200
    assert body["success"] is False
    assert "Image generation did not return an image." in body["error"]
    assert "thumbnail" not in body


def test_edit_thumbnail_action(client, fake_gemini):
    fake_gemini.image_responses.append(EDITED_IMAGE)
    body = client.post("/api/actions/edit-thumbnail", json={
        "base_image": GENERATED_IMAGE,
        "prompt": "add dramatic lighting",
        "aspect_ratio": "9:16",
    }).json()
    assert body == {"success": True, "thumbnail": EDITED_IMAGE}


def test_edit_thumbnail_action_reports_provider_error(client, fake_gemini):
    fake_gemini.image_responses.append(RuntimeError("AI service rate limit exceeded: quota"))
    body = client.post("/api/actions/edit-thumbnail", json={
        "base_image": GENERATED_IMAGE,
        "prompt": "bluer",
        "aspect_ratio": "1:1",
    }).json()
    assert body["success"] is False
    assert "quota" in body["error"]


def test_invalid_aspect_ratio_is_a_validation_failure(client, fake_gemini):
    response = client.post("/api/actions/generate-thumbnail", json={"prompt": "x", "aspect_ratio": "4:3"})
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "aspect_ratio" in response.json()["error"]
    assert fake_gemini.call_count == 0


def test_batch_generate_action(client, fake_gemini):
    fake_gemini.image_responses.extend([GENERATED_IMAGE, RuntimeError("boom"), GENERATED_IMAGE])
    body = client.post("/api/actions/batch-generate", json={
        "prompts": ["one", "two", "three"],
        "base_prompt": "Podcast series",
        "aspect_ratio": "16:9",
        "consistency_mode": "theme",
    }).json()
    assert body["success"] is True
    assert [t["index"] for t in body["thumbnails"]] == [0, 2]
    assert body["thumbnails"][1] == {"image": GENERATED_IMAGE, "prompt": "three", "index": 2}
    assert abs(body["consistency_score"] - 2 / 3) < 1e-9


def test_batch_generate_action_rejects_unknown_mode(client, fake_gemini):
    response = client.post("/api/actions/batch-generate", json={
        "prompts": ["one"], "base_prompt": "", "aspect_ratio": "16:9", "consistency_mode": "mood",
    })
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_intelligent_fusion_action(client, fake_gemini):
    body = client.post("/api/actions/intelligent-fusion", json={
        "images": [REFERENCE_IMAGE, REFERENCE_IMAGE_2],
        "fusion_prompt": "Merge into one poster",
        "aspect_ratio": "1:1",
        "fusion_style": "composite",
        "creativity_level": "balanced",
    }).json()
    assert body["success"] is True
    assert body["fused_image"] == GENERATED_IMAGE
    assert body["technical_details"]["fusion_technique"] == "composite"


def test_intelligent_fusion_action_rejects_single_image(client, fake_gemini):
    response = client.post("/api/actions/intelligent-fusion", json={
        "images": [REFERENCE_IMAGE],
        "fusion_prompt": "Merge",
        "aspect_ratio": "1:1",
        "fusion_style": "blend",
        "creativity_level": "balanced",
    })
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert fake_gemini.call_count == 0


def test_intelligent_fusion_action_reports_missing_image(client, fake_gemini):
    fake_gemini.image_responses.append(None)
    body = client.post("/api/actions/intelligent-fusion", json={
        "images": [REFERENCE_IMAGE, REFERENCE_IMAGE_2],
        "fusion_prompt": "Merge",
        "aspect_ratio": "16:9",
        "fusion_style": "seamless",
        "creativity_level": "conservative",
    }).json()
    assert body["success"] is False
    assert "Intelligent fusion failed to generate image." in body["error"]
