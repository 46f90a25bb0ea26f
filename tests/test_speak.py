from __future__ import annotations

import wave
from pathlib import Path

import pytest

import assistant_relay.client.speak as speak_mod
from assistant_relay.common.schema import PCMBuffer
from assistant_relay.common.templates import DEFAULT_SPEECH_TEMPLATE


def test_main_writes_wav(monkeypatch, tmp_path: Path) -> None:
    captured: dict = {}

    def fake_tts(self, text, voice="Kore", speakers=None):
        captured.update(text=text, voice=voice, speakers=speakers, template=self.speech_template)
        return PCMBuffer.from_channels(24000, [0.0, 0.25, -0.25, 1.0])

    monkeypatch.setattr(speak_mod.GenerationClient, "text_to_speech", fake_tts)
    out = tmp_path / "hello.wav"

    code = speak_mod.main([
        "--text", "Anna: hi\nBen: hello",
        "--out", str(out),
        "--speaker", "Anna=Kore",
        "--speaker", "Ben=Puck",
        "--template", str(tmp_path / "missing.txt"),
        "--cfg", str(tmp_path / "absent.yaml"),
    ])

    assert code == 0
    assert captured["speakers"] == {"Anna": "Kore", "Ben": "Puck"}
    assert captured["template"] == DEFAULT_SPEECH_TEMPLATE
    with wave.open(str(out), "rb") as wf:
        assert wf.getframerate() == 24000
        assert wf.getnframes() == 4


def test_main_without_audio_fails(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(speak_mod.GenerationClient, "text_to_speech", lambda self, *a, **k: None)
    out = tmp_path / "none.wav"

    code = speak_mod.main(["--text", "hi", "--out", str(out), "--cfg", str(tmp_path / "absent.yaml")])

    assert code == 1
    assert not out.exists()


def test_bad_speaker_mapping_exits() -> None:
    with pytest.raises(SystemExit):
        speak_mod.main(["--text", "hi", "--out", "x.wav", "--speaker", "nobody"])
