"""
ETICA Core — Ethical tension detection and vigilance scoring.

Architecture:
    etica/
    ├── schemas/         # Pydantic input/output models and enums
    ├── domains/         # Static reference data (domains, patterns, frameworks)
    ├── detection/       # Rule catalog + tension detector
    ├── scoring/         # Vigilance scorer, edge/tension metrics, framework coverage
    ├── config.py        # Settings (pydantic-settings)
    ├── exceptions.py    # Error taxonomy
    └── observability.py # structlog configuration

Module Boundaries:
    - The detector and scorer are pure functions over in-memory inputs
    - No I/O, no persistence, no clock: the caller owns storage and serializes writes
    - Every detected tension names the rule, the pattern and the edges/nodes behind it
    - Scores are recomputed from scratch, never updated incrementally

Data Flow:
    Graph + SystemProfile → TensionDetector → DetectedTension (persisted by caller)
    → VigilanceScorer (with persisted tensions + actions) → VigilanceScores

Version: 1.0.0
"""

from etica.detection import TensionDetector, detect
from etica.scoring import VigilanceScorer, score

__version__ = "1.0.0"

__all__ = [
    "TensionDetector",
    "VigilanceScorer",
    "detect",
    "score",
]
