from PyQt5.QtCore import QLineF, Qt
from PyQt5.QtGui import QColor, QPainterPath, QPainterPathStroker, QPen
from PyQt5.QtWidgets import QGraphicsLineItem

from constants import DEFAULT_NODE_COLOR
from summaries import link_html

# Width of the invisible stroke that receives pointer events
HIT_WIDTH = 15


class EdgeItem(QGraphicsLineItem):
    """Thin visible stroke of a link; never receives pointer events"""

    def __init__(self, link, source_item, target_item, parent=None):
        super().__init__(parent)
        self.link = link
        self.source_item = source_item
        self.target_item = target_item

        self.edge_color = QColor(DEFAULT_NODE_COLOR)
        self.setPen(QPen(self.edge_color, link.stroke_width, Qt.SolidLine, Qt.RoundCap))
        self.setOpacity(0.6)
        self.setAcceptedMouseButtons(Qt.NoButton)
        self.setAcceptHoverEvents(False)
        self.setZValue(0)
        self.update_path()

    def update_path(self):
        """Follow the current positions of both endpoint items"""
        self.setLine(QLineF(self.source_item.pos(), self.target_item.pos()))

    def set_style(self, style):
        self.setPen(QPen(QColor(style.color), style.width, Qt.SolidLine, Qt.RoundCap))
        self.setOpacity(style.opacity)


class EdgeHitItem(QGraphicsLineItem):
    """Wide transparent stroke over an edge that owns hover and tooltips"""

    def __init__(self, link, source_item, target_item, parent=None):
        super().__init__(parent)
        self.link = link
        self.source_item = source_item
        self.target_item = target_item

        # Create a wider invisible stroke for easier hovering
        self.setPen(QPen(Qt.transparent, HIT_WIDTH))
        self.setAcceptHoverEvents(True)
        self.setZValue(1)
        self.update_path()

    def update_path(self):
        self.setLine(QLineF(self.source_item.pos(), self.target_item.pos()))

    def set_tooltip(self, graph_mode):
        self.setToolTip(link_html(self.link, graph_mode))

    def shape(self):
        """Return a wider shape for easier selection"""
        path = QPainterPath(self.line().p1())
        path.lineTo(self.line().p2())
        stroker = QPainterPathStroker()
        stroker.setWidth(HIT_WIDTH)
        stroker.setCapStyle(Qt.RoundCap)
        stroker.setJoinStyle(Qt.RoundJoin)
        return stroker.createStroke(path)

    def paint(self, painter, option, widget=None):
        # Nothing visible; EdgeItem draws the link
        pass

    def hoverEnterEvent(self, event):
        scene = self.scene()
        if scene is not None and hasattr(scene, 'hover_link'):
            scene.hover_link(self.link)
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        scene = self.scene()
        if scene is not None and hasattr(scene, 'hover_link'):
            scene.hover_link(None)
        super().hoverLeaveEvent(event)
