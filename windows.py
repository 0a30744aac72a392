"""
Floating inspector window bookkeeping: one window per entity id, z-ordered.
"""

from constants import DEFAULT_VIEW_WIDTH, WINDOW_FIRST_Z, WINDOW_WIDTH


class FloatingWindow:
    def __init__(self, window_id, entity, x, y, z_index):
        self.id = window_id
        self.entity = entity
        self.x = x
        self.y = y
        self.z_index = z_index

    def __repr__(self):
        return f"FloatingWindow({self.id!r}, x={self.x}, y={self.y}, z={self.z_index})"


class FloatingWindowManager:
    """Open inspector windows of one view, keyed by entity id"""

    def __init__(self, container_width=DEFAULT_VIEW_WIDTH, window_width=WINDOW_WIDTH):
        self.windows = {}
        self.container_width = container_width
        self.window_width = window_width
        # Highest z-index handed out so far
        self.z_counter = WINDOW_FIRST_Z
        self.dragging_id = None
        self.drag_offset = (0.0, 0.0)

    def __len__(self):
        return len(self.windows)

    def __contains__(self, window_id):
        return window_id in self.windows

    def get(self, window_id):
        return self.windows.get(window_id)

    def ids(self):
        return set(self.windows)

    def stacking_order(self):
        """Windows from back to front"""
        return sorted(self.windows.values(), key=lambda w: w.z_index)

    def _next_z(self):
        self.z_counter += 1
        return self.z_counter

    def open(self, window_id, entity, anchor_x, anchor_y):
        """Open a window near the anchor, or raise the existing one for this id"""
        existing = self.windows.get(window_id)
        if existing is not None:
            existing.z_index = self._next_z()
            return existing

        # Cascade new windows a little so they do not stack exactly
        stagger = len(self.windows) * 10
        max_x = max(0, self.container_width - self.window_width)
        x = max(0, min(anchor_x + 20 + stagger, max_x))
        y = max(anchor_y - 50 + stagger, 20)
        window = FloatingWindow(window_id, entity, x, y, self._next_z())
        self.windows[window_id] = window
        print(f"[DEBUG] Window opened: '{window_id}' at ({x:.0f}, {y:.0f})")
        return window

    def close(self, window_id):
        window = self.windows.pop(window_id, None)
        if self.dragging_id == window_id:
            self.dragging_id = None
        if window is not None:
            print(f"[DEBUG] Window closed: '{window_id}'")
        return window

    def bring_to_front(self, window_id):
        window = self.windows.get(window_id)
        if window is None:
            return None
        window.z_index = self._next_z()
        return window

    def begin_drag(self, window_id, pointer_x, pointer_y):
        """Start dragging a window; only one window can be mid-drag"""
        window = self.windows.get(window_id)
        if window is None:
            return False
        if self.dragging_id is not None and self.dragging_id != window_id:
            return False
        self.dragging_id = window_id
        self.drag_offset = (pointer_x - window.x, pointer_y - window.y)
        self.bring_to_front(window_id)
        return True

    def drag_to(self, pointer_x, pointer_y):
        if self.dragging_id is None:
            return None
        window = self.windows.get(self.dragging_id)
        if window is None:
            self.dragging_id = None
            return None
        window.x = pointer_x - self.drag_offset[0]
        window.y = pointer_y - self.drag_offset[1]
        return window

    def end_drag(self):
        self.dragging_id = None

    def clear(self):
        """Close everything; window content depends on the graph mode"""
        if self.windows:
            print(f"[DEBUG] Closing {len(self.windows)} inspector windows")
        self.windows = {}
        self.dragging_id = None
