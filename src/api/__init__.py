# src/api/__init__.py
# =====================
# API Layer — LyricPractice
#
# Thin FastAPI surface over the audio and pronunciation layers:
#   - POST /api/v1/audio/optimize
#   - POST /api/v1/audio/validate
#   - POST /api/v1/pronunciation/score
#   - POST /api/v1/pronunciation/tokenize
#
# All real work lives in src/audio and src/pronunciation.
