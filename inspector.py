from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import QFrame, QHBoxLayout, QLabel, QToolButton, QVBoxLayout, QWidget

from constants import WINDOW_WIDTH
from summaries import AuthorSummary


class InspectorHeader(QWidget):
    """Title bar of an inspector panel; dragging it moves the panel"""

    def __init__(self, panel, title, parent=None):
        super().__init__(parent)
        self.panel = panel
        self.setCursor(Qt.SizeAllCursor)
        self.setStyleSheet("background: #f8fafc; border-bottom: 1px solid #f1f5f9;")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 8, 8, 8)
        self.title_label = QLabel(title)
        self.title_label.setWordWrap(True)
        self.title_label.setStyleSheet("font-weight: bold; color: #1e293b;")
        layout.addWidget(self.title_label, 1)

        self.close_button = QToolButton()
        self.close_button.setText("×")
        self.close_button.setToolTip("Close")
        self.close_button.setAutoRaise(True)
        self.close_button.clicked.connect(lambda: panel.closed.emit(panel.window_id))
        layout.addWidget(self.close_button, 0, Qt.AlignTop)

    def _container_pos(self, event):
        return self.panel.parentWidget().mapFromGlobal(event.globalPos())

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            pos = self._container_pos(event)
            self.panel.dragStarted.emit(self.panel.window_id, pos.x(), pos.y())
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if event.buttons() & Qt.LeftButton:
            pos = self._container_pos(event)
            self.panel.dragMoved.emit(pos.x(), pos.y())
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.panel.dragFinished.emit()
            event.accept()
            return
        super().mouseReleaseEvent(event)


class InspectorPanel(QFrame):
    """Floating card describing one node"""
    closed = pyqtSignal(str)
    dragStarted = pyqtSignal(str, int, int)
    dragMoved = pyqtSignal(int, int)
    dragFinished = pyqtSignal()
    activated = pyqtSignal(str)

    def __init__(self, window_id, summary, parent=None):
        super().__init__(parent)
        self.window_id = window_id
        self.summary = summary
        self.setObjectName("inspectorPanel")
        self.setFixedWidth(WINDOW_WIDTH)
        self.setFrameShape(QFrame.StyledPanel)
        self.setStyleSheet("#inspectorPanel { background: rgba(255, 255, 255, 240); "
                           "border: 1px solid #e2e8f0; border-radius: 10px; }")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self.header = InspectorHeader(self, summary.title, self)
        layout.addWidget(self.header)

        body = QWidget(self)
        self.body_layout = QVBoxLayout(body)
        self.body_layout.setContentsMargins(12, 8, 12, 12)
        self.body_layout.setSpacing(4)
        layout.addWidget(body)
        if isinstance(summary, AuthorSummary):
            self._fill_author(summary)
        else:
            self._fill_paper(summary)
        self.adjustSize()

    def _row(self, caption, value, tooltip=None):
        label = QLabel(f"<span style='color:#64748b'>{caption}</span> &nbsp; <b>{value}</b>")
        label.setWordWrap(True)
        if tooltip:
            label.setToolTip(tooltip)
        self.body_layout.addWidget(label)
        return label

    def _metric_row(self, metric, decimals=0):
        # The scope qualifier always travels with the number
        return self._row(metric.caption(), metric.display_value(decimals), metric.scope)

    def _fill_author(self, summary):
        self._row("Community", summary.group)
        if summary.top_cited is not None:
            self._metric_row(summary.top_cited)

    def _fill_paper(self, summary):
        if summary.domain:
            self._row("Domain", summary.domain)
        elif summary.group:
            self._row("Group", summary.group)
        if summary.sub_area:
            self._row("Sub-area", summary.sub_area)
        if summary.year:
            self._row("Year", summary.year)
        if summary.citations is not None:
            self._metric_row(summary.citations)
        if summary.influence is not None:
            self._metric_row(summary.influence, decimals=3)

    def mousePressEvent(self, event):
        self.activated.emit(self.window_id)
        super().mousePressEvent(event)
