"""
Assistant relay package.

Provides:
- Authenticated relay for Gemini generation calls (FastAPI)
- WAVE container encoding and PCM decoding for generated speech
- Generation client for direct or relayed calls
"""
