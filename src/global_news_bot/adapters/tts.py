"""Voice adapters. Priority: ElevenLabs (premium) > Edge-TTS (free)."""

import asyncio
import os
import tempfile

import edge_tts
from elevenlabs.client import ElevenLabs

from global_news_bot.domain.errors import ConfigurationMissing
from global_news_bot.ports.interfaces import IVoiceSynthesizer


class ElevenLabsVoice(IVoiceSynthesizer):
    """ElevenLabs text_to_speech.convert(); the streamed chunks are joined into one mp3."""

    def __init__(self, api_key: str, *, voice_id: str = "21m00Tcm4TlvDq8ikWAM", model_id: str = "eleven_turbo_v2_5"):
        if not api_key:
            raise ConfigurationMissing("ELEVENLABS_API_KEY is not set")
        self.client = ElevenLabs(api_key=api_key)
        self.voice_id = voice_id
        self.model_id = model_id

    def synthesize(self, text: str) -> bytes:
        print(f"  🔊 Using ElevenLabs model: {self.model_id}")
        response = self.client.text_to_speech.convert(
            text=text,
            voice_id=self.voice_id,
            model_id=self.model_id,
            output_format="mp3_44100_128",
        )
        audio_bytes = b""
        for chunk in response:
            if isinstance(chunk, bytes):
                audio_bytes += chunk
            elif hasattr(chunk, "read"):
                audio_bytes += chunk.read()
        return audio_bytes


class EdgeTTSVoice(IVoiceSynthesizer):
    """Microsoft Edge TTS (no key). edge_tts is async-only, so each call runs its own event loop."""

    def __init__(self, voice: str = "en-US-AriaNeural"):
        self.voice = voice

    def synthesize(self, text: str) -> bytes:
        print(f"  🔊 Using voice: {self.voice}")
        fd, temp_path = tempfile.mkstemp(suffix="_edge.mp3")
        os.close(fd)
        try:
            asyncio.run(edge_tts.Communicate(text, self.voice).save(temp_path))
            with open(temp_path, "rb") as f:
                return f.read()
        finally:
            if os.path.exists(temp_path):
                os.remove(temp_path)
