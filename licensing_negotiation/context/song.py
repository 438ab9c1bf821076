"""
Song Context - Grounded facts about the item under negotiation
==============================================================

Both roles negotiate over the same description. It is rendered once,
before the first round, and never changes during a negotiation.

This is NOT where descriptions come from (transcription, streaming
metadata lookups). Those are upstream collaborators; this module only
shapes what they produced into the shared context string.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SongProfile:
    """
    What is known about the song being licensed.

    Example:
        profile = SongProfile(description="Upbeat synth-pop", monthly_listeners=100000)
    """
    description: str
    monthly_listeners: Optional[int] = None
    title: Optional[str] = None
    artist: Optional[str] = None

    def __post_init__(self):
        if not self.description.strip():
            raise ValueError("Song description must not be empty")
        if self.monthly_listeners is not None and self.monthly_listeners < 0:
            raise ValueError(f"Monthly listeners must be >= 0, got {self.monthly_listeners}")


def build_negotiation_context(profile: SongProfile) -> str:
    """
    Render a SongProfile into the shared context both roles see.

    Example:
        build_negotiation_context(SongProfile("Upbeat synth-pop", 100000))
        # 'Song description: "Upbeat synth-pop". The song has 100000 monthly listeners.'
    """
    parts = []

    if profile.title and profile.artist:
        parts.append(f'Song: "{profile.title}" by {profile.artist}.')
    elif profile.title:
        parts.append(f'Song: "{profile.title}".')

    parts.append(f'Song description: "{profile.description.strip()}".')

    if profile.monthly_listeners is not None:
        parts.append(f"The song has {profile.monthly_listeners} monthly listeners.")

    return " ".join(parts)
