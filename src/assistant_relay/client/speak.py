"""Synthesize speech with Gemini and save it as a WAV file."""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

from assistant_relay.audio.wav import encode_wav
from assistant_relay.client.generation_client import GenerationClient
from assistant_relay.common.logging_setup import setup_logging
from assistant_relay.common.settings import DEFAULT_CFG_PATH, load_client_settings
from assistant_relay.common.templates import DEFAULT_TEMPLATE_PATH, load_template

LOGGER = logging.getLogger("assistant_relay.client.speak")

def _parse_speakers(values: list[str]) -> dict[str, str]:
    speakers: dict[str, str] = {}
    for item in values:
        name, sep, voice = item.partition("=")
        if not sep or not name or not voice:
            raise argparse.ArgumentTypeError(f"Expected NAME=VOICE, got {item!r}")
        speakers[name] = voice
    return speakers

def main(argv: list[str] | None = None) -> int:
    setup_logging()
    ap = argparse.ArgumentParser(description="Text-to-speech to a WAV file")
    ap.add_argument("--text", required=True, help="Text or speaker-labelled script")
    ap.add_argument("--out", required=True, help="Output .wav path")
    ap.add_argument("--voice", default="Kore", help="Prebuilt voice name")
    ap.add_argument(
        "--speaker", action="append", default=[], metavar="NAME=VOICE",
        help="Multi-speaker mapping; repeat per speaker",
    )
    ap.add_argument("--template", default=DEFAULT_TEMPLATE_PATH, help="Prompt template path")
    ap.add_argument("--cfg", default=DEFAULT_CFG_PATH, help="Config path")
    args = ap.parse_args(argv)

    template = load_template(args.template)

    try:
        speakers = _parse_speakers(args.speaker)
    except argparse.ArgumentTypeError as e:
        ap.error(str(e))

    client = GenerationClient(load_client_settings(args.cfg), speech_template=template)
    buffer = client.text_to_speech(args.text, voice=args.voice, speakers=speakers or None)
    if buffer is None:
        LOGGER.error("No audio returned")
        return 1

    Path(args.out).write_bytes(encode_wav(buffer))
    LOGGER.info(
        "Wrote %s (%d frames at %d Hz)", args.out, buffer.frame_count, buffer.sample_rate
    )
    return 0

if __name__ == "__main__":
    sys.exit(main())
