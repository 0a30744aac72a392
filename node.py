from PyQt5.QtCore import Qt, QPointF, QRectF
from PyQt5.QtGui import QBrush, QColor, QPen
from PyQt5.QtWidgets import QGraphicsEllipseItem, QGraphicsItem

from summaries import build_summary, summary_html

# Pointer travel (screen pixels) below which a press/release counts as a click
CLICK_TOLERANCE = 3.0


class GraphNodeItem(QGraphicsEllipseItem):
    """Circle drawn for one GraphNode, positioned in data coordinates"""

    def __init__(self, node, radius, color, parent=None):
        super().__init__(parent)
        self.node = node
        self.radius = radius
        self.connected_edges = []

        # Moves are routed through the layout engine, never through Qt's movable flag
        self.setFlag(QGraphicsItem.ItemIsSelectable, False)
        self.setAcceptHoverEvents(True)
        self.setCursor(Qt.PointingHandCursor)
        self.setZValue(2)

        self.fill_color = QColor(color)
        self.border_color = QColor('#fff')
        self.border_width = 1.5
        self.setBrush(QBrush(self.fill_color))
        self.setPen(QPen(self.border_color, self.border_width))
        self.setRect(QRectF(-radius, -radius, 2 * radius, 2 * radius))

        self._press_pos = None
        self._dragging = False
        self.sync_position()

    def sync_position(self):
        if self.node.has_position:
            self.setPos(QPointF(self.node.x, self.node.y))

    def update_descendant_edges(self):
        """Re-read both endpoints of every edge touching this node"""
        for edge in self.connected_edges:
            edge.update_path()

    def set_style(self, style):
        self.setOpacity(style.opacity)
        pen = QPen(QColor(style.stroke), style.stroke_width)
        if pen != self.pen():
            self.setPen(pen)

    def set_summary(self, graph_mode, papers=None, domains=None):
        summary = build_summary(self.node, graph_mode, papers, domains)
        self.setToolTip(summary_html(summary))
        return summary

    def hoverEnterEvent(self, event):
        scene = self.scene()
        if scene is not None and hasattr(scene, 'hover_node'):
            scene.hover_node(self.node.id)
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        scene = self.scene()
        if scene is not None and hasattr(scene, 'hover_node'):
            scene.hover_node(None)
        super().hoverLeaveEvent(event)

    def mousePressEvent(self, event):
        """Start a drag; whether it was a click is only known on release"""
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        scene = self.scene()
        self._press_pos = event.scenePos()
        self._dragging = scene is not None and scene.begin_node_drag(self.node.id)
        event.accept()

    def mouseMoveEvent(self, event):
        if not self._dragging:
            super().mouseMoveEvent(event)
            return
        pos = event.scenePos()
        self.scene().drag_node_to(pos.x(), pos.y())
        event.accept()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton or self._press_pos is None:
            super().mouseReleaseEvent(event)
            return
        scene = self.scene()
        moved = (event.scenePos() - self._press_pos).manhattanLength()
        if self._dragging and scene is not None:
            scene.end_node_drag()
        self._dragging = False
        self._press_pos = None
        if moved < CLICK_TOLERANCE and scene is not None:
            # Anchor at the node's current screen position, not the raw data coordinates
            anchor = self.mapToScene(QPointF(0, 0))
            scene.nodeActivated.emit(self.node.id, anchor.x(), anchor.y())
        event.accept()
