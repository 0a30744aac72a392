"""
Hover / search / drag / open-window state and the visual weight it gives each element.

Priority when several states apply: an active search wins, then hover,
then the open-window emphasis.
"""

from enum import Enum

from constants import DEFAULT_NODE_COLOR


class ElementState(Enum):
    IDLE = 'idle'
    HOVERED = 'hovered'
    SEARCH_MATCHED = 'search-matched'
    CONNECTED_TO_HOVERED = 'connected-to-hovered'
    OPEN_IN_WINDOW = 'open-in-window'


class NodeStyle:
    def __init__(self, opacity=1.0, stroke='#fff', stroke_width=1.5):
        self.opacity = opacity
        self.stroke = stroke
        self.stroke_width = stroke_width

    def __eq__(self, other):
        return isinstance(other, NodeStyle) and (self.opacity, self.stroke, self.stroke_width) == \
            (other.opacity, other.stroke, other.stroke_width)

    def __repr__(self):
        return f"NodeStyle({self.opacity}, {self.stroke}, {self.stroke_width})"


class LinkStyle:
    def __init__(self, color=DEFAULT_NODE_COLOR, width=1.0, opacity=0.6):
        self.color = color
        self.width = width
        self.opacity = opacity

    def __repr__(self):
        return f"LinkStyle({self.color}, {self.width:.2f}, {self.opacity})"


NORMAL_NODE = NodeStyle(1.0, '#fff', 1.5)
HOVER_LINK_COLOR = '#1e293b'
INCIDENT_LINK_COLOR = '#475569'
EMPHASIS_STROKE = '#000'
EMPHASIS_WIDTH = 2.5
SEARCH_DIM = 0.1
HOVER_DIM = 0.3
LINK_DIM = 0.1
LINK_IDLE_OPACITY = 0.6


class InteractionState:
    """Transient (hover, search, drag) and persistent (open windows) highlight state"""

    def __init__(self, network=None):
        self.network = network
        self.search_term = ''
        self.hover_node_id = None
        self.hover_link = None
        self.open_ids = set()
        self.dragging_id = None

        # Hover as seen by the classification; frozen while a drag is active
        self._active_hover_node = None
        self._active_hover_link = None
        self._neighbors = set()

    def reset(self, network=None):
        """Drop every transient state, e.g. when the graph mode changes"""
        self.__init__(network)

    @property
    def term(self):
        return (self.search_term or '').strip().lower()

    @property
    def is_dragging(self):
        return self.dragging_id is not None

    def _refresh_hover(self):
        if self.is_dragging:
            return False
        changed = (self._active_hover_node != self.hover_node_id or self._active_hover_link is not self.hover_link)
        self._active_hover_node = self.hover_node_id
        self._active_hover_link = self.hover_link
        if self.network is not None and self._active_hover_node is not None:
            self._neighbors = self.network.neighbors(self._active_hover_node)
        else:
            self._neighbors = set()
        return changed

    def set_search(self, term):
        """Returns True when the highlight needs recomputing"""
        changed = term != self.search_term
        self.search_term = term or ''
        return changed

    def set_hover_node(self, node_id):
        self.hover_node_id = node_id
        return self._refresh_hover()

    def set_hover_link(self, link):
        self.hover_link = link
        return self._refresh_hover()

    def clear_hover(self):
        self.hover_node_id = None
        self.hover_link = None
        return self._refresh_hover()

    def set_open_windows(self, ids):
        ids = set(ids)
        changed = ids != self.open_ids
        self.open_ids = ids
        return changed

    def begin_drag(self, node_id):
        self.dragging_id = node_id

    def end_drag(self):
        """Release the drag and catch up with hover changes made meanwhile"""
        self.dragging_id = None
        return self._refresh_hover()

    @property
    def hover_active(self):
        return self._active_hover_node is not None or self._active_hover_link is not None

    def node_states(self, node):
        """Every state that currently applies to a node"""
        states = set()
        term = self.term
        if term and node.matches(term):
            states.add(ElementState.SEARCH_MATCHED)
        if node.id == self._active_hover_node:
            states.add(ElementState.HOVERED)
        elif node.id in self._neighbors:
            states.add(ElementState.CONNECTED_TO_HOVERED)
        link = self._active_hover_link
        if link is not None and link.touches(node.id):
            states.add(ElementState.CONNECTED_TO_HOVERED)
        if node.id in self.open_ids:
            states.add(ElementState.OPEN_IN_WINDOW)
        return states or {ElementState.IDLE}

    def is_highlighted(self, node):
        states = self.node_states(node)
        if self.term:
            return ElementState.SEARCH_MATCHED in states
        if self.hover_active:
            return ElementState.HOVERED in states or ElementState.CONNECTED_TO_HOVERED in states
        return ElementState.OPEN_IN_WINDOW in states

    def node_style(self, node):
        highlighted = self.is_highlighted(node)
        if self.term:
            opacity = 1.0 if highlighted else SEARCH_DIM
        elif self.hover_active:
            opacity = 1.0 if highlighted else HOVER_DIM
        else:
            opacity = 1.0
        if highlighted:
            return NodeStyle(opacity, EMPHASIS_STROKE, EMPHASIS_WIDTH)
        return NodeStyle(opacity, NORMAL_NODE.stroke, NORMAL_NODE.stroke_width)

    def link_style(self, link):
        base = link.stroke_width
        hovered_link = self._active_hover_link
        hovered_node = self._active_hover_node
        if hovered_link is not None and link is hovered_link:
            color, width = HOVER_LINK_COLOR, base * 2.5 + 2
        elif hovered_node is not None and link.touches(hovered_node):
            color, width = INCIDENT_LINK_COLOR, base * 1.5
        else:
            color, width = DEFAULT_NODE_COLOR, base

        if self.term:
            opacity = LINK_DIM
        elif hovered_link is not None:
            opacity = 1.0 if link is hovered_link else LINK_DIM
        elif hovered_node is not None:
            opacity = 1.0 if link.touches(hovered_node) else LINK_DIM
        else:
            opacity = LINK_IDLE_OPACITY
        return LinkStyle(color, width, opacity)
