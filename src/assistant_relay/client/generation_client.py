"""Client for Gemini generation, either direct or through the relay."""
from __future__ import annotations
import logging
from typing import Any

import httpx

from assistant_relay.audio.pcm import SPEECH_SAMPLE_RATE, extract_inline_audio, pcm16_to_buffer
from assistant_relay.common.errors import ConfigurationError, RelayCallError
from assistant_relay.common.schema import PCMBuffer
from assistant_relay.common.settings import ClientSettings
from assistant_relay.common.templates import DEFAULT_SPEECH_TEMPLATE, render_prompt
from assistant_relay.relay import upstream

LOGGER = logging.getLogger("assistant_relay.client")

TTS_MODEL = "gemini-2.5-flash-preview-tts"


def speech_config(voice: str = "Kore", speakers: dict[str, str] | None = None) -> dict[str, Any]:
    """Build the generation config for spoken output.

    `speakers` maps a speaker name used in the script to a prebuilt voice.
    """
    if speakers:
        voice_block: dict[str, Any] = {
            "multiSpeakerVoiceConfig": {
                "speakerVoiceConfigs": [
                    {
                        "speaker": name,
                        "voiceConfig": {"prebuiltVoiceConfig": {"voiceName": speaker_voice}},
                    }
                    for name, speaker_voice in speakers.items()
                ]
            }
        }
    else:
        voice_block = {"voiceConfig": {"prebuiltVoiceConfig": {"voiceName": voice}}}
    return {"responseModalities": ["AUDIO"], "speechConfig": voice_block}


class GenerationClient:
    def __init__(
        self,
        settings: ClientSettings,
        http_client: httpx.Client | None = None,
        speech_template: str = DEFAULT_SPEECH_TEMPLATE,
    ) -> None:
        self.settings = settings
        self._http = http_client
        self.speech_template = speech_template

    def generate_content(
        self, model: str, contents: Any, config: Any = None
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"model": model, "contents": contents}
        if config is not None:
            params["config"] = config
        if self.settings.use_relay:
            return self._call_relay(params)
        return self._call_direct(params)

    def _call_direct(self, params: dict[str, Any]) -> dict[str, Any]:
        if not self.settings.api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY not configured; set it or enable USE_RELAY"
            )
        return upstream.generate_content_sync(
            self.settings.api_key,
            params["model"],
            params["contents"],
            params.get("config"),
        )

    def _call_relay(self, params: dict[str, Any]) -> dict[str, Any]:
        url = self.settings.relay_url
        if not url:
            raise ConfigurationError(
                "RELAY_URL not configured; point it at the deployed /callGemini endpoint"
            )
        headers = {"Content-Type": "application/json"}
        if self.settings.id_token:
            headers["Authorization"] = f"Bearer {self.settings.id_token}"

        if self._http is not None:
            r = self._http.post(url, headers=headers, json=params)
        else:
            with httpx.Client(timeout=self.settings.timeout) as client:
                r = client.post(url, headers=headers, json=params)

        if r.is_error:
            try:
                body = r.json()
            except ValueError:
                body = {}
            error = body.get("error") if isinstance(body, dict) else None
            LOGGER.error("Relay call failed with status %s", r.status_code)
            raise RelayCallError(
                error or f"HTTP error! status: {r.status_code}", status_code=r.status_code
            )
        return r.json()

    def text_to_speech(
        self,
        text: str,
        voice: str = "Kore",
        speakers: dict[str, str] | None = None,
    ) -> PCMBuffer | None:
        """
        Synthesize speech and return it as 24 kHz mono PCM.

        Args:
            text: Text, or a speaker-labelled script when `speakers` is given.
            voice: Prebuilt voice for single-speaker output.
            speakers: Optional speaker name to voice mapping.

        Returns:
            Decoded audio, or None when the response carries no audio part.
        """
        prompt = render_prompt(self.speech_template, text) if not speakers else text
        result = self.generate_content(
            TTS_MODEL,
            [{"parts": [{"text": prompt}]}],
            speech_config(voice, speakers),
        )
        audio = extract_inline_audio(result)
        if audio is None:
            LOGGER.warning("Speech response contained no inline audio")
            return None
        return pcm16_to_buffer(audio, sample_rate=SPEECH_SAMPLE_RATE, channels=1)
