"""Widget builders for the timer window: the egg, duration input, progress bar and button.

``build_timer_panel`` returns a (container, widget_dict) tuple.  The
container is a QWidget ready to be set as the window's central widget.
The widget_dict maps logical names to sub-widgets for later updates.
"""

from PySide6.QtCore import Qt, QPointF
from PySide6.QtGui import QColor, QPainter, QPainterPath
from PySide6.QtWidgets import (
    QLineEdit,
    QProgressBar,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from et.util.egg import egg_outline, egg_fill_rgb

# QProgressBar only takes ints, so progress is mapped onto 0..PROGRESS_STEPS.
PROGRESS_STEPS = 1000

EGG_AREA_HEIGHT = 375
INPUT_BORDER = "#cccccc"


class EggWidget(QWidget):
    """Draws the egg, tinted from raw yellow to red as progress goes 0 -> 1."""

    def __init__(self, a=110.0, b=150.0, d=20.0, parent=None):
        super().__init__(parent)
        self.setFixedHeight(EGG_AREA_HEIGHT)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self._progress = 0.0

        points = egg_outline(a, b, d)
        self._path = QPainterPath()
        self._path.moveTo(QPointF(*points[0]))
        for x, y in points[1:]:
            self._path.lineTo(QPointF(x, y))
        self._path.closeSubpath()

    @property
    def progress(self):
        return self._progress

    def set_progress(self, progress):
        if progress != self._progress:
            self._progress = progress
            self.update()

    def fill_color(self):
        return QColor(*egg_fill_rgb(self._progress))

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        # Centre the egg's bounding box in the widget
        bounds = self._path.boundingRect()
        painter.translate(self.width() / 2 - bounds.center().x(),
                          self.height() / 2 - bounds.center().y())
        painter.setPen(Qt.NoPen)
        painter.setBrush(self.fill_color())
        painter.drawPath(self._path)
        painter.end()


def build_duration_input(placeholder, on_edited):
    """Single-line, centred seconds field wrapped in its margins."""
    wrap = QWidget()
    lay = QVBoxLayout(wrap)
    lay.setContentsMargins(170, 0, 170, 40)

    edit = QLineEdit()
    edit.setPlaceholderText(placeholder)
    edit.setAlignment(Qt.AlignCenter)
    edit.setStyleSheet(f"QLineEdit {{ border: 2px solid {INPUT_BORDER}; border-radius: 3px; }}")
    # textEdited only fires for user edits, not for the setText() calls made while counting down
    edit.textEdited.connect(on_edited)
    lay.addWidget(edit)
    return wrap, edit


def build_progress_bar():
    bar = QProgressBar()
    bar.setRange(0, PROGRESS_STEPS)
    bar.setValue(0)
    bar.setTextVisible(False)
    return bar


def build_start_button(on_click):
    wrap = QWidget()
    lay = QVBoxLayout(wrap)
    lay.setContentsMargins(35, 25, 35, 25)

    btn = QPushButton("Start")
    btn.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
    btn.clicked.connect(lambda _=False: on_click())
    lay.addWidget(btn)
    return wrap, btn


def build_timer_panel(settings, on_toggle, on_edited):
    """Stack egg, input, progress bar and button top to bottom, empty space on top.

    Returns (container, widget_dict).
    """
    rc = QWidget()
    rc_lay = QVBoxLayout(rc)
    rc_lay.setContentsMargins(0, 0, 0, 0)
    rc_lay.setSpacing(0)
    rc_lay.addStretch(1)

    egg = EggWidget(settings["egg_a"], settings["egg_b"], settings["egg_d"])
    rc_lay.addWidget(egg)

    input_wrap, edit = build_duration_input(settings["input_placeholder"], on_edited)
    rc_lay.addWidget(input_wrap)

    bar = build_progress_bar()
    rc_lay.addWidget(bar)

    btn_wrap, btn = build_start_button(on_toggle)
    rc_lay.addWidget(btn_wrap)

    widget_dict = {
        "egg": egg, "input": edit,
        "progress": bar, "button": btn,
        "container": rc,
    }
    return rc, widget_dict
