"""Qt application entrypoint for the habersim GUI."""

from __future__ import annotations

import sys
from typing import Callable

from PySide6 import QtCore, QtGui, QtWidgets
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure

from habersim import constants
from habersim.config import SimulationConfig
from habersim.gui.simulation import SimulationSession
from habersim.models import MoleculeType

SLIDER_STEPS = 1000
SLIDER_BOUNDS = {
    "n2": constants.CONCENTRATION_RANGE,
    "h2": constants.CONCENTRATION_RANGE,
    "temperature": constants.TEMPERATURE_RANGE,
}

EQUATION_TEXT = "N₂ + 3H₂ ⇌ 2NH₃ + heat  (ΔH < 0)"
RATE_LAW_TEXT = (
    "Rates follow the Arrhenius equation k = A·exp(-Ea/T).\n"
    "Forward rate ∝ [N₂][H₂]³, reverse rate ∝ [NH₃]²."
)
OBSERVATION_NOTES = (
    "Adding N₂ or H₂ speeds up the forward reaction: the equilibrium moves right "
    "and more NH₃ forms.",
    "Raising the temperature moves the equilibrium left (exothermic reaction) and "
    "NH₃ falls.",
    "Watch the sliders: they drift down on their own as reactants are consumed.",
)


class QtScheduler:
    """Runs session callbacks on ``QTimer``s owned by ``parent``."""

    def __init__(self, parent: QtCore.QObject) -> None:
        self.parent = parent

    def schedule(self, interval_ms: int, callback: Callable[[], None]) -> QtCore.QTimer:
        timer = QtCore.QTimer(self.parent)
        timer.timeout.connect(callback)
        timer.start(interval_ms)
        return timer

    def cancel(self, handle: QtCore.QTimer) -> None:
        handle.stop()
        handle.deleteLater()


class PlotCanvas(FigureCanvasQTAgg):
    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        self.figure = Figure(figsize=(6, 3), tight_layout=True)
        super().__init__(self.figure)
        self.setParent(parent)
        self.axes = self.figure.add_subplot(1, 1, 1)

    def plot_history(self, history) -> None:
        self.axes.clear()
        time = [point.time for point in history]
        self.axes.plot(time, [p.n2 for p in history], color=constants.COLORS["N2"], label="[N₂]")
        self.axes.plot(time, [p.h2 for p in history], color=constants.COLORS["H2"], label="[H₂]")
        self.axes.plot(time, [p.nh3 for p in history], color=constants.COLORS["NH3"], label="[NH₃]")
        self.axes.set_ylim(0.0, 4.0)
        self.axes.set_xticks([])
        self.axes.legend(loc="upper right")
        self.draw_idle()


class ParticleCanvas(QtWidgets.QWidget):
    def __init__(self, session: SimulationSession, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.session = session
        self.setFixedSize(int(session.config.canvas_width), int(session.config.canvas_height))

    def paintEvent(self, _event: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QtGui.QColor(constants.COLORS["BG"]))
        painter.setPen(QtCore.Qt.PenStyle.NoPen)

        n2 = QtGui.QColor(constants.COLORS["N2"])
        h2 = QtGui.QColor(constants.COLORS["H2"])
        nh3 = QtGui.QColor(constants.COLORS["NH3"])

        for p in self.session.particles:
            if p.species == MoleculeType.N2:
                painter.setBrush(n2)
                _circle(painter, p.x - 3, p.y, 4)
                _circle(painter, p.x + 3, p.y, 4)
            elif p.species == MoleculeType.H2:
                painter.setBrush(h2)
                _circle(painter, p.x - 2, p.y, 2.5)
                _circle(painter, p.x + 2, p.y, 2.5)
            else:
                painter.setBrush(nh3)
                _circle(painter, p.x, p.y, 5)
                painter.setBrush(h2)
                _circle(painter, p.x - 4, p.y + 4, 2)
                _circle(painter, p.x + 4, p.y + 4, 2)
                _circle(painter, p.x, p.y - 5, 2)

        painter.setPen(QtGui.QColor("#cbd5e1"))
        painter.drawText(
            self.rect().adjusted(0, 6, -8, 0),
            QtCore.Qt.AlignmentFlag.AlignRight | QtCore.Qt.AlignmentFlag.AlignTop,
            f"Particles: {self.session.total_particles}",
        )
        painter.end()


def _circle(painter: QtGui.QPainter, x: float, y: float, radius: float) -> None:
    painter.drawEllipse(QtCore.QPointF(x, y), radius, radius)


class EquilibriumWindow(QtWidgets.QMainWindow):
    def __init__(self, config: SimulationConfig | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Ammonia Synthesis Equilibrium")
        self.resize(1000, 700)
        self.session = SimulationSession(config)

        central = QtWidgets.QWidget()
        self.setCentralWidget(central)

        layout = QtWidgets.QHBoxLayout(central)
        visuals = QtWidgets.QWidget()
        visuals_layout = QtWidgets.QVBoxLayout(visuals)
        self.particle_canvas = ParticleCanvas(self.session)
        self.plot_canvas = PlotCanvas()
        visuals_layout.addWidget(QtWidgets.QLabel("Molecular view (speed ~ temperature)"))
        visuals_layout.addWidget(self.particle_canvas)
        visuals_layout.addWidget(QtWidgets.QLabel("Concentration over time"))
        visuals_layout.addWidget(self.plot_canvas)

        header = QtWidgets.QLabel(EQUATION_TEXT)
        header.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        font = header.font()
        font.setPointSize(font.pointSize() + 4)
        font.setBold(True)
        header.setFont(font)
        visuals_layout.insertWidget(0, header)

        form_panel = QtWidgets.QWidget()
        form_layout = QtWidgets.QFormLayout(form_panel)
        form_layout.setLabelAlignment(QtCore.Qt.AlignmentFlag.AlignRight)

        self.sliders = {
            "n2": self._make_slider("n2", self.session.set_n2),
            "h2": self._make_slider("h2", self.session.set_h2),
            "temperature": self._make_slider("temperature", self.session.set_temperature),
        }
        self.value_labels = {key: QtWidgets.QLabel() for key in self.sliders}

        labels = {
            "n2": "[N₂] (M)",
            "h2": "[H₂] (M)",
            "temperature": "Temperature (arb.)",
        }

        for key, slider in self.sliders.items():
            row = QtWidgets.QHBoxLayout()
            row.addWidget(slider)
            row.addWidget(self.value_labels[key])
            form_layout.addRow(labels[key], row)

        self.nh3_label = QtWidgets.QLabel()
        form_layout.addRow("[NH₃] (M)", self.nh3_label)

        self.reset_button = QtWidgets.QPushButton("Reset")
        self.reset_button.clicked.connect(self.session.reset)
        form_layout.addRow(self.reset_button)
        form_layout.addRow(_info_box("How it works", RATE_LAW_TEXT))
        form_layout.addRow(
            _info_box("What to look for", "\n".join(f"• {note}" for note in OBSERVATION_NOTES))
        )

        layout.addWidget(visuals, stretch=2)
        layout.addWidget(form_panel, stretch=1)

        self._last_plotted = None
        self.refresh_timer = QtCore.QTimer(self)
        self.refresh_timer.timeout.connect(self._refresh)
        self.refresh_timer.start(constants.FRAME_INTERVAL_MS)
        self.session.start(QtScheduler(self))

    def _make_slider(self, key: str, setter: Callable[[float], None]) -> QtWidgets.QSlider:
        bounds = SLIDER_BOUNDS[key]
        slider = QtWidgets.QSlider(QtCore.Qt.Orientation.Horizontal)
        slider.setRange(0, SLIDER_STEPS)
        slider.valueChanged.connect(lambda position: setter(_from_slider(position, bounds)))
        return slider

    def _sync_slider(self, key: str, value: float) -> None:
        slider = self.sliders[key]
        self.value_labels[key].setText(f"{value:.2f}")
        if slider.isSliderDown():
            return
        blocker = QtCore.QSignalBlocker(slider)
        slider.setValue(_to_slider(value, SLIDER_BOUNDS[key]))
        del blocker

    def _refresh(self) -> None:
        state = self.session.view_state
        self._sync_slider("n2", state.n2)
        self._sync_slider("h2", state.h2)
        self._sync_slider("temperature", state.temperature)
        self.nh3_label.setText(f"{state.nh3:.2f}")
        self.particle_canvas.update()

        history = self.session.history
        latest = history[-1] if history else None
        if latest is not self._last_plotted:
            self._last_plotted = latest
            self.plot_canvas.plot_history(history)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        self.refresh_timer.stop()
        self.session.stop()
        super().closeEvent(event)


def _info_box(title: str, text: str) -> QtWidgets.QGroupBox:
    box = QtWidgets.QGroupBox(title)
    label = QtWidgets.QLabel(text)
    label.setWordWrap(True)
    QtWidgets.QVBoxLayout(box).addWidget(label)
    return box


def _to_slider(value: float, bounds: tuple[float, float]) -> int:
    low, high = bounds
    clipped = min(max(value, low), high)
    return round((clipped - low) / (high - low) * SLIDER_STEPS)


def _from_slider(position: int, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return min(low + (high - low) * position / SLIDER_STEPS, high)


def main(config: SimulationConfig | None = None) -> None:
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    window = EquilibriumWindow(config)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
