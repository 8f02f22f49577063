import sys
from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QApplication, QMainWindow
from et.common.logger import log, enable_console
from et.core import config
from et.core.timer_state import TimerController
from et.ui.widgets import PROGRESS_STEPS, build_timer_panel


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# The egg timer window. Renders the controller's snapshot and feeds it clicks, edits and ticks. Every event
# comes through the Qt event loop, so the controller never sees two at once.
class MainWindow(QMainWindow):

    def __init__(self, settings=None, controller=None):
        super().__init__()
        self.settings = settings if settings is not None else config.load_settings()
        self.controller = controller or TimerController()
        s = self.settings

        self.setWindowTitle(s["window_title"])
        self.setFixedSize(s["window_width"], s["window_height"])
        if s["always_on_top"]:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        # -- Build UI --
        central, self._widgets = build_timer_panel(
            s,
            on_toggle=self._on_toggle,
            on_edited=self._on_edited,
        )
        self.setCentralWidget(central)
        self._render()

        # -- Tick timer --
        self._tick_increment = s["tick_increment"]
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(s["tick_interval_ms"])
        log.info(f"Opened egg timer window, ticking {self._tick_increment} every {s['tick_interval_ms']} ms")

    # ------------------------------------------------------------------ #
    #  Event handlers                                                      #
    # ------------------------------------------------------------------ #

    def _tick(self):
        if self.controller.on_tick(self._tick_increment):
            self._render()

    def _on_toggle(self):
        self.controller.on_toggle_clicked(self._widgets["input"].text())
        self._render()

    def _on_edited(self, text):
        self.controller.on_input_edited(text)

    # ------------------------------------------------------------------ #
    #  Rendering                                                           #
    # ------------------------------------------------------------------ #

    def _render(self):
        snap = self.controller.render_snapshot()
        w = self._widgets

        # Only touch the field when the text really changes, otherwise the cursor jumps around mid-edit
        if w["input"].text() != snap.display_text:
            w["input"].setText(snap.display_text)
        w["progress"].setValue(round(snap.progress * PROGRESS_STEPS))
        w["button"].setText(snap.button_label)
        w["egg"].set_progress(snap.progress)

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def closeEvent(self, event):
        self._timer.stop()
        log.info(f"Closing egg timer window in phase '{self.controller.phase}'")
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    app = QApplication(sys.argv)
    settings = config.load_settings()
    if settings["log_console"]:
        enable_console()
    window = MainWindow(settings)
    window.show()
    sys.exit(app.exec())
