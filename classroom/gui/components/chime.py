import logging

from nicegui import Client

logger = logging.getLogger(__name__)

# Two-tone beep through the Web Audio API; silently does nothing where unsupported
CHIME_JS = """
try {
  const ctx = new (window.AudioContext || window.webkitAudioContext)();
  const osc = ctx.createOscillator();
  const gain = ctx.createGain();
  osc.connect(gain);
  gain.connect(ctx.destination);
  osc.frequency.setValueAtTime(440, ctx.currentTime);
  gain.gain.setValueAtTime(0.3, ctx.currentTime);
  osc.start();
  osc.frequency.setValueAtTime(550, ctx.currentTime + 0.1);
  osc.frequency.setValueAtTime(440, ctx.currentTime + 0.2);
  gain.gain.exponentialRampToValueAtTime(0.01, ctx.currentTime + 0.5);
  osc.stop(ctx.currentTime + 0.5);
} catch (e) {}
"""


class Chime:
    """Completion sound for a timer. Never raises into the presentation."""

    def __init__(self, client: Client):
        self.client = client

    def play(self):
        try:
            self.client.run_javascript(CHIME_JS)
        except Exception as e:
            logger.debug(f"Chime failed: {e}")
