"""
Community network window: graph view, toolbar, legend and inspector panels.
"""

from PyQt5.QtCore import QEasingCurve, Qt, QTimer, QVariantAnimation, pyqtSignal
from PyQt5.QtGui import QColor, QPainter
from PyQt5.QtWidgets import (QAction, QActionGroup, QGraphicsView, QLabel, QLineEdit, QMainWindow, QMenu,
                             QMessageBox, QSizePolicy, QToolButton, QVBoxLayout, QWidget)

from constants import AUTHOR_NODE_COLOR, MAX_ZOOM, MIN_ZOOM, TOP_CITED_SCOPE
from filters import FilterSpec, apply_filters
from graph_model import CitationScope, GraphMode
from inspector import InspectorPanel
from interaction import InteractionState
from layout import LayoutEngine
from node import GraphNodeItem
from scene import GraphScene
from summaries import build_summary
from version import get_version
from viewport import ViewTransform
from windows import FloatingWindowManager

# Animation-frame interval of the layout timer (ms)
FRAME_INTERVAL = 16
SETTLE_DURATION = 400
RESET_DURATION = 750
ZOOM_DURATION = 300


class GraphView(QGraphicsView):
    """View whose scene rect is its viewport; zoom and pan live in the scene's root transform"""
    resized = pyqtSignal(int, int)

    def __init__(self, scene, parent=None):
        super().__init__(parent)
        self.graph_scene = scene
        self.setScene(scene)

        # Set render hints for better quality
        self.setRenderHints(QPainter.Antialiasing | QPainter.TextAntialiasing | QPainter.SmoothPixmapTransform)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setFrameShape(QGraphicsView.NoFrame)

        # Zoom settings
        self.zoom_in_factor = 1.2
        self.zoom_out_factor = 0.8
        self.zoom_range = [MIN_ZOOM, MAX_ZOOM]
        self.background_color = QColor("#f8fafc")

        self.view_transform = ViewTransform.identity()
        # Set once the user zooms or pans away from the home view
        self.user_moved = False
        self._animation = None
        self._pan_origin = None

    def drawBackground(self, painter, rect):
        painter.fillRect(rect, self.background_color)

    def set_view_transform(self, transform):
        self.view_transform = transform
        self.graph_scene.set_view_transform(transform)

    def stop_animation(self):
        if self._animation is not None:
            self._animation.stop()
            self._animation = None

    def animate_to(self, target, duration):
        """Interpolate the view transform toward `target`"""
        self.stop_animation()
        if duration <= 0:
            self.set_view_transform(target)
            return
        start = self.view_transform
        animation = QVariantAnimation(self)
        animation.setStartValue(0.0)
        animation.setEndValue(1.0)
        animation.setDuration(duration)
        animation.setEasingCurve(QEasingCurve.InOutCubic)
        animation.valueChanged.connect(lambda t: self.set_view_transform(start.interpolate(target, float(t))))
        animation.finished.connect(lambda: self.set_view_transform(target))
        self._animation = animation
        animation.start()

    def zoom_by(self, factor, duration=ZOOM_DURATION):
        """Zoom about the viewport centre"""
        self.user_moved = True
        cx = self.viewport().width() / 2.0
        cy = self.viewport().height() / 2.0
        target = self.view_transform.scaled_about(factor, cx, cy, *self.zoom_range)
        self.animate_to(target, duration)

    def wheelEvent(self, event):
        """Handle zooming with mouse wheel"""
        delta = event.angleDelta().y()
        if not delta:
            event.ignore()
            return
        self.stop_animation()
        self.user_moved = True
        factor = 2 ** (delta / 500.0)
        pos = event.pos()
        self.set_view_transform(self.view_transform.scaled_about(factor, pos.x(), pos.y(), *self.zoom_range))
        event.accept()

    def mousePressEvent(self, event):
        item = self.itemAt(event.pos())
        if event.button() == Qt.LeftButton and not isinstance(item, GraphNodeItem):
            # Background (or an edge) pans the whole drawing
            self.stop_animation()
            self._pan_origin = event.pos()
            self.viewport().setCursor(Qt.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._pan_origin is not None:
            delta = event.pos() - self._pan_origin
            self._pan_origin = event.pos()
            self.user_moved = True
            self.set_view_transform(self.view_transform.translated(delta.x(), delta.y()))
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if self._pan_origin is not None and event.button() == Qt.LeftButton:
            self._pan_origin = None
            self.viewport().unsetCursor()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        size = self.viewport().size()
        self.setSceneRect(0, 0, size.width(), size.height())
        self.resized.emit(size.width(), size.height())


class CommunityWindow(QMainWindow):
    def __init__(self, store, show=True):
        super().__init__()
        self.store = store
        self.graph_mode = GraphMode.SOCIAL
        self.scope = CitationScope.MIXED
        self.filters = FilterSpec()
        self.interaction = InteractionState()
        self.window_manager = FloatingWindowManager()
        self.panels = {}
        self.network = None
        self.engine = None
        self.initUI()
        self.activate()
        if show:
            self.show()

    def initUI(self):
        self.setWindowTitle("Network Cartography")
        self.setGeometry(100, 100, 1200, 800)

        # Create toolbar
        toolbar = self.addToolBar("Main Toolbar")
        toolbar.setMovable(False)

        mode_group = QActionGroup(self)
        self.social_action = toolbar.addAction("Co-Authorship")
        self.social_action.setToolTip("Authors linked by shared papers")
        self.citation_action = toolbar.addAction("Citation")
        self.citation_action.setToolTip("Citation links between papers and authors")
        for action, mode in ((self.social_action, GraphMode.SOCIAL), (self.citation_action, GraphMode.CITATION)):
            action.setCheckable(True)
            mode_group.addAction(action)
            action.triggered.connect(lambda checked, m=mode: self.set_mode(m))
        self.social_action.setChecked(True)

        toolbar.addSeparator()

        scope_group = QActionGroup(self)
        self.scope_actions = {}
        for label, scope in (("Authors", CitationScope.AUTHOR), ("Papers", CitationScope.PAPER),
                             ("Mixed", CitationScope.MIXED)):
            action = toolbar.addAction(label)
            action.setCheckable(True)
            action.setChecked(scope == self.scope)
            scope_group.addAction(action)
            action.triggered.connect(lambda checked, s=scope: self.set_scope(s))
            self.scope_actions[scope] = action

        # Filters only apply to citation networks
        self.filter_button = QToolButton()
        self.filter_button.setText("Filters")
        self.filter_button.setPopupMode(QToolButton.InstantPopup)
        self.filter_menu = QMenu(self.filter_button)
        self.filter_menu.aboutToShow.connect(self.populate_filter_menu)
        self.filter_button.setMenu(self.filter_menu)
        self.filter_button_action = toolbar.addWidget(self.filter_button)

        # Add an expanding spacer before the search box
        spacer = QWidget()
        spacer.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        toolbar.addWidget(spacer)

        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search nodes...")
        self.search_box.setClearButtonEnabled(True)
        self.search_box.setMaximumWidth(260)
        self.search_box.textChanged.connect(self.on_search)
        toolbar.addWidget(self.search_box)

        toolbar.addSeparator()
        zoom_in_action = toolbar.addAction("Zoom In")
        zoom_in_action.triggered.connect(self.zoomIn)
        zoom_out_action = toolbar.addAction("Zoom Out")
        zoom_out_action.triggered.connect(self.zoomOut)
        home_action = toolbar.addAction("Home")
        home_action.setToolTip("Reset to the home view")
        home_action.triggered.connect(self.resetZoom)

        # Central widget: scope banner above the graph view
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.banner = QLabel()
        self.banner.setWordWrap(True)
        self.banner.setStyleSheet("background: #fffbeb; color: #92400e; padding: 6px 12px;")
        layout.addWidget(self.banner)

        self.scene = GraphScene(self)
        self.view = GraphView(self.scene, self)
        layout.addWidget(self.view)
        self.scene.nodeActivated.connect(self.open_window)
        self.scene.dragStarted.connect(self._ensure_frames)
        self.view.resized.connect(self.on_view_resized)

        self.legend = QLabel(self.view.viewport())
        self.legend.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.legend.setStyleSheet("background: rgba(255, 255, 255, 230); border: 1px solid #e2e8f0; "
                                  "border-radius: 6px; padding: 6px; font-size: 11px;")

        # Layout advances one step per frame
        self.timer = QTimer(self)
        self.timer.setInterval(FRAME_INTERVAL)
        self.timer.timeout.connect(self.on_frame)

        self.info_label = QLabel()
        self.statusBar().addPermanentWidget(self.info_label)
        self.statusBar().showMessage("Ready")

        self.createMenu()

    def createMenu(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        exit_action = file_menu.addAction("Exit")
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)

        view_menu = menubar.addMenu("&View")
        zoom_in_action = view_menu.addAction("Zoom In")
        zoom_in_action.setShortcut("Ctrl++")
        zoom_in_action.triggered.connect(self.zoomIn)
        zoom_out_action = view_menu.addAction("Zoom Out")
        zoom_out_action.setShortcut("Ctrl+-")
        zoom_out_action.triggered.connect(self.zoomOut)
        reset_zoom_action = view_menu.addAction("Reset Zoom")
        reset_zoom_action.setShortcut("Ctrl+0")
        reset_zoom_action.triggered.connect(self.resetZoom)
        view_menu.addSeparator()
        close_windows_action = view_menu.addAction("Close Inspectors")
        close_windows_action.triggered.connect(self.close_all_windows)

        help_menu = menubar.addMenu("&Help")
        about_action = help_menu.addAction("About")
        about_action.triggered.connect(self.show_about)

    # Graph lifecycle

    @property
    def active_scope(self):
        return self.scope if self.graph_mode == GraphMode.CITATION else None

    def activate(self):
        """Tear down the current graph and lay out the one for the current mode"""
        self.timer.stop()
        self.view.stop_animation()
        if self.engine is not None:
            self.engine.stop()
        self.scene.clear_graph()

        source = self.store.network_for(self.graph_mode, self.active_scope)
        if self.graph_mode == GraphMode.CITATION:
            source = apply_filters(source, self.filters, self.store.papers)
        # Positions written by layout and drags stay on this copy
        network = source.copy()

        size = self.view.viewport().size()
        engine = LayoutEngine(network, self.graph_mode, self.active_scope,
                              max(size.width(), 1), max(size.height(), 1))
        engine.on_settled = self.on_layout_settled
        home = engine.start()
        self.network = network
        self.engine = engine

        self.interaction.reset(network)
        self.interaction.set_search(self.search_box.text())
        self.interaction.set_open_windows(self.window_manager.ids())
        self.scene.set_network(network, engine, self.graph_mode, self.interaction,
                               self.store.papers_by_id, self.store.domains)
        self.view.set_view_transform(home)
        self.view.user_moved = False
        if engine.running:
            self.timer.start()
        self.update_info()

    def set_mode(self, mode):
        if mode == self.graph_mode:
            return
        print(f"[DEBUG] Graph mode: {self.graph_mode.value} -> {mode.value}")
        self.graph_mode = mode
        self.close_all_windows()
        if mode == GraphMode.SOCIAL:
            self.filters.clear()
        self.activate()

    def set_scope(self, scope):
        if scope == self.scope:
            return
        print(f"[DEBUG] Citation scope: {self.scope.value} -> {scope.value}")
        self.scope = scope
        self.close_all_windows()
        self.activate()

    def on_frame(self):
        if self.engine is None or not self.engine.tick():
            self.timer.stop()
            return
        self.scene.sync_positions()

    def _ensure_frames(self, node_id=None):
        if self.engine is not None and self.engine.running and not self.timer.isActive():
            self.timer.start()

    def on_layout_settled(self, home):
        self.view.animate_to(home, SETTLE_DURATION)
        self.statusBar().showMessage("Layout settled", 2000)

    def on_view_resized(self, width, height):
        self.window_manager.container_width = width
        if self.engine is not None:
            self.engine.resize(width, height)
            if self.engine.authoritative and not self.view.user_moved:
                self.view.stop_animation()
                self.view.set_view_transform(self.engine.home)
        self._place_legend()

    # Toolbar handlers

    def on_search(self, text):
        self.scene.set_search(text)

    def zoomIn(self):
        self.view.zoom_by(self.view.zoom_in_factor)

    def zoomOut(self):
        self.view.zoom_by(self.view.zoom_out_factor)

    def resetZoom(self):
        if self.engine is not None:
            self.view.user_moved = False
            self.view.animate_to(self.engine.home, RESET_DURATION)

    def populate_filter_menu(self):
        self.filter_menu.clear()
        for domain in self.store.domains:
            domain_id = domain['id']
            sub_menu = self.filter_menu.addMenu(domain['name'])
            whole = QAction("All of " + domain['name'], sub_menu)
            whole.setCheckable(True)
            whole.setChecked(self.filters.is_domain_selected(domain_id))
            whole.triggered.connect(lambda checked, d=domain_id: self.toggle_domain(d))
            sub_menu.addAction(whole)
            sub_menu.addSeparator()
            for sub_area in domain.get('subAreas', []):
                action = QAction(sub_area, sub_menu)
                action.setCheckable(True)
                action.setChecked(self.filters.is_subdomain_selected(sub_area, domain_id))
                action.triggered.connect(lambda checked, s=sub_area, d=domain_id: self.toggle_subdomain(s, d))
                sub_menu.addAction(action)
        self.filter_menu.addSeparator()
        clear_action = self.filter_menu.addAction("Clear Filters")
        clear_action.setEnabled(bool(self.filters))
        clear_action.triggered.connect(self.clear_filters)

    def toggle_domain(self, domain_id):
        self.filters.toggle_domain(domain_id)
        self.activate()

    def toggle_subdomain(self, sub_area, domain_id):
        self.filters.toggle_subdomain(sub_area, domain_id)
        self.activate()

    def clear_filters(self):
        self.filters.clear()
        self.activate()

    # Inspector windows

    def open_window(self, node_id, anchor_x, anchor_y):
        node = self.network.node(node_id) if self.network is not None else None
        if node is None:
            return
        window = self.window_manager.open(node_id, node, anchor_x, anchor_y)
        panel = self.panels.get(node_id)
        if panel is None:
            summary = build_summary(node, self.graph_mode, self.store.papers_by_id, self.store.domains)
            panel = InspectorPanel(node_id, summary, self.view.viewport())
            panel.closed.connect(self.close_window)
            panel.activated.connect(self.bring_window_to_front)
            panel.dragStarted.connect(self.begin_window_drag)
            panel.dragMoved.connect(self.drag_window)
            panel.dragFinished.connect(self.window_manager.end_drag)
            self.panels[node_id] = panel
            panel.move(int(window.x), int(window.y))
            panel.show()
        self._restack_windows()
        self.scene.set_open_windows(self.window_manager.ids())

    def close_window(self, window_id):
        self.window_manager.close(window_id)
        panel = self.panels.pop(window_id, None)
        if panel is not None:
            panel.deleteLater()
        self.scene.set_open_windows(self.window_manager.ids())

    def close_all_windows(self):
        self.window_manager.clear()
        for panel in self.panels.values():
            panel.deleteLater()
        self.panels = {}
        self.scene.set_open_windows(())

    def bring_window_to_front(self, window_id):
        if self.window_manager.bring_to_front(window_id) is not None:
            self._restack_windows()

    def begin_window_drag(self, window_id, x, y):
        if self.window_manager.begin_drag(window_id, x, y):
            self._restack_windows()

    def drag_window(self, x, y):
        window = self.window_manager.drag_to(x, y)
        if window is not None and window.id in self.panels:
            self.panels[window.id].move(int(window.x), int(window.y))

    def _restack_windows(self):
        for window in self.window_manager.stacking_order():
            panel = self.panels.get(window.id)
            if panel is not None:
                panel.raise_()

    # Banner, legend and status bar

    def update_info(self):
        network = self.network
        source = self.store.source_for(self.graph_mode, self.active_scope)
        self.info_label.setText(f"Nodes: {len(network.nodes)}  |  Edges: {len(network.links)}  |  "
                                f"Clusters: {network.cluster_count()}  |  Data: {source.value}")

        if self.graph_mode == GraphMode.SOCIAL:
            self.banner.setText(f"Co-authorship network of the {TOP_CITED_SCOPE}. "
                                f"Top-cited counts only cover papers in that subset.")
        else:
            text = f"Citation network within the {TOP_CITED_SCOPE}; citations from outside it are not counted."
            if self.filters:
                text += "  Filters: " + ", ".join(f.value for f in self.filters)
            self.banner.setText(text)

        is_citation = self.graph_mode == GraphMode.CITATION
        for action in self.scope_actions.values():
            action.setVisible(is_citation)
        self.filter_button_action.setVisible(is_citation)
        self.update_legend()

    def update_legend(self):
        rows = []
        if self.graph_mode == GraphMode.SOCIAL:
            rows.append("Node colors from graph data")
        else:
            if self.scope in (CitationScope.AUTHOR, CitationScope.MIXED):
                rows.append(f"<span style='color:{AUTHOR_NODE_COLOR}'>&#9679;</span> Author")
            if self.scope in (CitationScope.PAPER, CitationScope.MIXED):
                for domain in self.store.domains:
                    rows.append(f"<span style='color:{domain['color']}'>&#9679;</span> {domain['name']}")
        self.legend.setText("<br/>".join(rows))
        self.legend.adjustSize()
        self._place_legend()

    def _place_legend(self):
        viewport = self.view.viewport()
        self.legend.move(12, max(0, viewport.height() - self.legend.height() - 12))

    def show_about(self):
        QMessageBox.about(self, "About", f"Network Cartography v{get_version()}")

    def closeEvent(self, event):
        self.timer.stop()
        if self.engine is not None:
            self.engine.stop()
        super().closeEvent(event)
