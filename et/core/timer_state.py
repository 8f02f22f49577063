import math
import re
from dataclasses import dataclass
from typing import NamedTuple
from et.common.logger import log

IDLE = "idle"
RUNNING = "running"
FINISHED = "finished"

# Plain ASCII decimal or exponent notation only. No digit-group underscores and no non-ASCII digits, even
# though float() would take both.
_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

# Leniently turns whatever is in the duration field into seconds. Anything that isn't a finite, non-negative
# number counts as 0 so the user never gets an error popup.
def parse_seconds(raw_text):
    text = (raw_text or "").strip()
    if not _DECIMAL.fullmatch(text):
        log.debug(f"Could not parse duration input '{text}', treating as 0")
        return 0.0
    value = float(text)
    if not math.isfinite(value) or value < 0:
        log.debug(f"Duration input '{text}' is not a usable number of seconds, treating as 0")
        return 0.0
    return value

# Formats seconds with one decimal, rounding halves away from zero (so 0.25 -> "0.3", not "0.2").
def format_remaining(seconds):
    if not math.isfinite(seconds):
        return "0.0"
    scaled = abs(seconds) * 10
    # Past 2**52 floats have no fractional part left to round
    if scaled >= 2 ** 52:
        return f"{seconds:.1f}"
    rounded = math.floor(scaled + 0.5) / 10
    if seconds < 0 and rounded:
        rounded = -rounded
    return f"{rounded:.1f}"


# Everything the view needs to draw one frame.
class RenderSnapshot(NamedTuple):
    display_text: str
    progress: float
    button_label: str


# The one piece of timer state. Only TimerController mutates it.
@dataclass
class TimerState:
    boiling: bool = False
    progress: float = 0.0
    boil_duration_seconds: float = 0.0
    input_text: str = ""


# Owns the TimerState and reacts to ticks, button clicks and text edits. All three arrive on the UI thread,
# so there's only ever one writer at a time.
class TimerController:

    def __init__(self, state=None):
        self.state = state or TimerState()
        log.debug(f"Initialized timer controller with {self.state}")

    @property
    def phase(self):
        if not self.state.boiling:
            return IDLE
        if self.state.progress >= 1.0:
            return FINISHED
        return RUNNING

    # Seconds left on the clock while running, 0 otherwise.
    @property
    def remaining_seconds(self):
        if self.phase != RUNNING:
            return 0.0
        return (1.0 - self.state.progress) * self.state.boil_duration_seconds

    # Advances progress by `delta` while running. Returns True when state actually changed, so the view knows
    # whether it needs a repaint.
    def on_tick(self, delta):
        s = self.state
        if not s.boiling or s.progress >= 1.0:
            return False
        s.progress = max(0.0, s.progress + delta)
        if s.progress >= 1.0:
            # The field keeps whatever it showed last, usually "0.0"
            log.info(f"Timer finished after {s.boil_duration_seconds:.1f} seconds (progress {s.progress:.3f})")
        else:
            s.input_text = format_remaining(self.remaining_seconds)
        return True

    # Start/stop button handler. The order matters: boiling flips BEFORE a finished progress is reset, so
    # clicking "Finished" lands back in idle with a fresh 0 progress.
    def on_toggle_clicked(self, raw_input_text):
        s = self.state
        s.boiling = not s.boiling

        if s.progress >= 1.0:
            s.progress = 0.0

        s.input_text = raw_input_text
        seconds = parse_seconds(raw_input_text)

        # The typed value is what's REMAINING at the current progress, so back-solve the total. This runs on stop
        # too, which keeps the total stable as long as the field still shows the remaining time.
        fraction_left = 1.0 - s.progress
        duration = seconds / fraction_left if fraction_left > 0 else math.inf
        if math.isfinite(duration):
            s.boil_duration_seconds = duration
        else:
            log.warning(f"Refusing to recompute duration from '{raw_input_text}' at progress {s.progress}, "
                        f"keeping {s.boil_duration_seconds}")

        # While running the field mirrors the time left
        if self.phase == RUNNING:
            s.input_text = format_remaining(self.remaining_seconds)

        log.debug(f"Toggled timer to {self.phase} with input '{raw_input_text}', duration now "
                  f"{s.boil_duration_seconds:.2f}s at progress {s.progress:.3f}")

    # User typed into the duration field.
    def on_input_edited(self, text):
        self.state.input_text = text

    def render_snapshot(self):
        s = self.state
        if s.boiling and s.progress >= 1.0:
            label = "Finished"
        elif s.boiling:
            label = "Stop"
        else:
            label = "Start"

        if s.boiling and s.progress < 1.0:
            display_text = format_remaining((1.0 - s.progress) * s.boil_duration_seconds)
        else:
            display_text = s.input_text

        return RenderSnapshot(
            display_text=display_text,
            progress=min(1.0, max(0.0, s.progress)),
            button_label=label,
        )
