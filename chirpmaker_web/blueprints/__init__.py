"""
Blueprints for the chirpmaker web API:
- api_status: health and player status (/api/health, /api/status)
- api_birds: registry listing, bird voices and concerts (/api/birds, /api/concert)
- api_tones: raw chirp/phaser jobs and scale previews (/api/chirp, /api/phaser, /api/scales)
"""
from __future__ import annotations
