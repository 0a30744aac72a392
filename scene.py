"""
Graphics scene holding one network: a root group carrying the view
transform, edges (visible stroke plus hit stroke) and node circles.

Scene coordinates are screen pixels; node items live in data coordinates
under the root group.
"""

from PyQt5.QtCore import QRectF, pyqtSignal
from PyQt5.QtGui import QTransform
from PyQt5.QtWidgets import QGraphicsItem, QGraphicsScene

from constants import group_colors
from edge import EdgeHitItem, EdgeItem
from graph_model import GraphMode
from interaction import InteractionState
from node import GraphNodeItem
from viewport import ViewTransform


class GraphRootItem(QGraphicsItem):
    """Invisible parent of every graph item; its transform is the zoom/pan"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFlag(QGraphicsItem.ItemHasNoContents)

    def boundingRect(self):
        return QRectF()

    def paint(self, painter, option, widget=None):
        pass


class GraphScene(QGraphicsScene):
    # node id, anchor x, anchor y (screen coordinates)
    nodeActivated = pyqtSignal(str, float, float)
    dragStarted = pyqtSignal(str)
    highlightChanged = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.root = GraphRootItem()
        self.addItem(self.root)
        self.view_transform = ViewTransform.identity()

        self.network = None
        self.engine = None
        self.graph_mode = GraphMode.SOCIAL
        self.interaction = InteractionState()
        self.node_items = {}
        self.edge_items = []
        self.hit_items = []

    def clear_graph(self):
        for item in self.edge_items + self.hit_items + list(self.node_items.values()):
            self.removeItem(item)
        self.node_items = {}
        self.edge_items = []
        self.hit_items = []
        self.network = None
        self.engine = None

    def set_network(self, network, engine, graph_mode, interaction=None, papers=None, domains=None):
        """Build items for a network whose positions the engine owns"""
        self.clear_graph()
        self.network = network
        self.engine = engine
        self.graph_mode = graph_mode
        self.interaction = interaction if interaction is not None else InteractionState(network)
        colors = group_colors(domains)

        for node in network.nodes:
            item = GraphNodeItem(node, engine.radius(node), node.resolved_color(colors), self.root)
            item.set_summary(graph_mode, papers, domains)
            self.node_items[node.id] = item

        for link in network.links:
            source_item = self.node_items[link.source.id]
            target_item = self.node_items[link.target.id]
            edge = EdgeItem(link, source_item, target_item, self.root)
            hit = EdgeHitItem(link, source_item, target_item, self.root)
            hit.set_tooltip(graph_mode)
            source_item.connected_edges.extend([edge, hit])
            target_item.connected_edges.extend([edge, hit])
            self.edge_items.append(edge)
            self.hit_items.append(hit)

        print(f"[DEBUG] Scene built: {len(self.node_items)} nodes, {len(self.edge_items)} edges")
        self.sync_positions()
        self.apply_highlight()

    def set_view_transform(self, transform):
        self.view_transform = transform
        self.root.setTransform(QTransform(transform.k, 0, 0, transform.k, transform.x, transform.y))

    def sync_positions(self):
        """Move node items to their data positions, then re-read edge endpoints"""
        for item in self.node_items.values():
            item.sync_position()
        for edge in self.edge_items:
            edge.update_path()
        for hit in self.hit_items:
            hit.update_path()

    def apply_highlight(self):
        interaction = self.interaction
        for item in self.node_items.values():
            item.set_style(interaction.node_style(item.node))
        for edge in self.edge_items:
            edge.set_style(interaction.link_style(edge.link))
        self.highlightChanged.emit()

    # Hover and search

    def hover_node(self, node_id):
        if self.interaction.set_hover_node(node_id):
            self.apply_highlight()

    def hover_link(self, link):
        if self.interaction.set_hover_link(link):
            self.apply_highlight()

    def set_search(self, term):
        if self.interaction.set_search(term):
            self.apply_highlight()

    def set_open_windows(self, ids):
        if self.interaction.set_open_windows(ids):
            self.apply_highlight()

    # Dragging

    def begin_node_drag(self, node_id):
        if self.engine is None or not self.engine.begin_drag(node_id):
            return False
        self.interaction.begin_drag(node_id)
        self.dragStarted.emit(node_id)
        return True

    def drag_node_to(self, sx, sy):
        """Pointer at screen (sx, sy); the node and its edges move in the same call"""
        if self.engine is None:
            return
        x, y = self.view_transform.invert(sx, sy)
        if self.engine.drag_to(x, y):
            item = self.node_items.get(self.engine.dragging_id)
            if item is not None:
                item.sync_position()
                item.update_descendant_edges()

    def end_node_drag(self):
        if self.engine is not None:
            self.engine.end_drag()
        if self.interaction.end_drag():
            self.apply_highlight()

    def node_screen_pos(self, node_id):
        item = self.node_items.get(node_id)
        if item is None:
            return None
        pos = item.mapToScene(item.rect().center())
        return pos.x(), pos.y()
