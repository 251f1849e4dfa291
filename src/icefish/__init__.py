"""icefish: ice fishing simulation components."""
