"""
Tests for the Song Context
==========================
"""

import pytest

from licensing_negotiation.context import SongProfile, build_negotiation_context


class TestSongContext:
    """Rendering the shared context."""

    def test_description_and_listeners(self):
        context = build_negotiation_context(SongProfile("Upbeat synth-pop", 100000))

        assert context == 'Song description: "Upbeat synth-pop". The song has 100000 monthly listeners.'

    def test_without_listeners(self):
        context = build_negotiation_context(SongProfile("Upbeat synth-pop"))

        assert "monthly listeners" not in context

    def test_title_and_artist(self):
        context = build_negotiation_context(
            SongProfile("Ballad", 10, title="Night Drive", artist="The Example")
        )

        assert context.startswith('Song: "Night Drive" by The Example.')

    def test_empty_description_rejected(self):
        with pytest.raises(ValueError):
            SongProfile("   ")

    def test_negative_listeners_rejected(self):
        with pytest.raises(ValueError):
            SongProfile("Ballad", -1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
