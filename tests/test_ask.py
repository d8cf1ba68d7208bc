import base64

from app.services.modality import ImagePart, TextPart


def test_ask_forwards_question_and_returns_answer(client, gemini):
    r = client.post("/ask", json={"question": "What is a noun?"})

    assert r.status_code == 200
    assert r.json() == {"answer": "echo:What is a noun?"}
    assert gemini.generate_calls[0]["parts"] == [TextPart(text="What is a noun?")]


def test_ask_requires_question(client, gemini):
    r = client.post("/ask", json={})

    assert r.status_code == 400
    assert r.json() == {"detail": "Question is required"}
    assert gemini.generate_calls == []


def test_ask_upstream_failure_is_500_without_detail(client, gemini):
    gemini.fail = True

    r = client.post("/ask", json={"question": "hi"})

    assert r.status_code == 500
    assert r.json() == {"detail": "Failed to get answer from AI"}


def test_ask_with_image_orders_text_before_image(client, gemini):
    image_bytes = b"\x89PNG\r\n\x1a\nfake"

    r = client.post(
        "/ask-with-image",
        data={"question": "What is this?"},
        files={"image": ("cat.png", image_bytes, "image/png")},
    )

    assert r.status_code == 200
    assert r.json() == {"answer": "echo:What is this?"}
    parts = gemini.generate_calls[0]["parts"]
    assert parts == [
        TextPart(text="What is this?"),
        ImagePart(
            mime_type="image/png",
            base64_data=base64.b64encode(image_bytes).decode("ascii"),
        ),
    ]


def test_ask_with_image_only(client, gemini):
    r = client.post(
        "/ask-with-image",
        files={"image": ("cat.jpg", b"jpeg-bytes", "image/jpeg")},
    )

    assert r.status_code == 200
    assert r.json() == {"answer": "echo:image"}
    assert len(gemini.generate_calls[0]["parts"]) == 1


def test_ask_with_image_requires_question_or_image(client, gemini):
    r = client.post("/ask-with-image")

    assert r.status_code == 400
    assert r.json() == {"detail": "Question or image is required"}
    assert gemini.generate_calls == []


def test_ask_with_image_upstream_failure(client, gemini):
    gemini.fail = True

    r = client.post("/ask-with-image", data={"question": "hi"})

    assert r.status_code == 500
    assert r.json() == {"detail": "Failed to get answer from AI with image"}


def test_ask_without_body_is_400(client, gemini):
    r = client.post("/ask")

    assert r.status_code == 400
    assert r.json() == {"detail": "Question is required"}
    assert gemini.generate_calls == []
