"""
Layout engine: imported fixed positions or an incremental force simulation.

The simulation is advanced one step per animation frame by the view's
timer; it never blocks. When it cools below `alpha_min` it stops and the
engine frames every node as the new home view.
"""

import math
import random
from enum import Enum

import numpy as np

from constants import (COLLIDE_PADDING, DEFAULT_NODE_SIZE, DEFAULT_VIEW_HEIGHT, DEFAULT_VIEW_WIDTH,
                       FIT_PADDING, FORCE_PARAMS)
from graph_model import CitationScope, GraphMode, NodeType, is_number
from viewport import ViewTransform, fit_to_extent

INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


class LayoutMode(Enum):
    AUTHORITATIVE = 'authoritative'
    SIMULATED = 'simulated'


def select_layout_mode(network):
    """Imported positions are authoritative only when every node has numeric x and y"""
    if all(node.has_position for node in network.nodes):
        return LayoutMode.AUTHORITATIVE
    return LayoutMode.SIMULATED


def node_radius(node, graph_mode, scope=None, authoritative=False):
    """Pixel radius of a node.

    An imported size hint is scaled and clamped to [5, 36]; otherwise the
    radius depends on node type and graph mode.
    """
    if authoritative and is_number(node.val):
        return min(36.0, max(5.0, node.val * 1.2))
    val = node.val if is_number(node.val) else 0.0
    if node.node_type == NodeType.AUTHOR:
        if graph_mode == GraphMode.SOCIAL:
            return 6.0
        if scope == CitationScope.AUTHOR:
            return 4.0 + val / 2.0
        return 4.0
    return 4.0 + (val or 1.0)


class ForceSimulation:
    """Velocity-Verlet style relaxation with link, charge, centre and collision forces"""

    def __init__(self, nodes, links, link_distance=40.0, charge=-80.0, center=(0.0, 0.0), seed=None):
        self.nodes = list(nodes)
        self.index = {node.id: i for i, node in enumerate(self.nodes)}
        self.links = []
        for link in links:
            s = self.index.get(link.source.id)
            t = self.index.get(link.target.id)
            if s is None or t is None or s == t:
                continue
            self.links.append((s, t))
        self.link_distance = link_distance
        self.charge = charge
        self.center = center
        self.rng = random.Random(seed)

        self.alpha = 1.0
        self.alpha_min = 0.001
        self.alpha_decay = 1 - math.pow(self.alpha_min, 1.0 / 300)
        self.alpha_target = 0.0
        self.velocity_decay = 0.4
        self.running = True
        self.ticks = 0

        # Link strength and bias follow node degree so hubs are not yanked around
        degree = [0] * len(self.nodes)
        for s, t in self.links:
            degree[s] += 1
            degree[t] += 1
        self.link_strength = [1.0 / min(degree[s], degree[t]) for s, t in self.links]
        self.link_bias = [degree[s] / float(degree[s] + degree[t]) for s, t in self.links]

        radii = []
        for node in self.nodes:
            val = node.val if is_number(node.val) and node.val else DEFAULT_NODE_SIZE
            radii.append(val + COLLIDE_PADDING)
        self.radii = np.array(radii, dtype=float)

        self._seed_positions()

    def _seed_positions(self):
        """Place nodes without a position on a phyllotaxis spiral"""
        for i, node in enumerate(self.nodes):
            if node.fx is not None:
                node.x = node.fx
            if node.fy is not None:
                node.y = node.fy
            if not node.has_position:
                radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                node.x = radius * math.cos(angle)
                node.y = radius * math.sin(angle)
            if not is_number(node.vx) or not is_number(node.vy):
                node.vx = node.vy = 0.0

    def _jiggle(self):
        return (self.rng.random() - 0.5) * 1e-6

    def restart(self):
        self.running = True

    def stop(self):
        self.running = False

    def step(self):
        """Advance one tick; returns True while the simulation keeps running"""
        if not self.running:
            return False
        self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay
        self.ticks += 1

        x = np.array([node.x for node in self.nodes], dtype=float)
        y = np.array([node.y for node in self.nodes], dtype=float)
        vx = np.array([node.vx for node in self.nodes], dtype=float)
        vy = np.array([node.vy for node in self.nodes], dtype=float)

        if len(self.nodes):
            self._apply_links(x, y, vx, vy)
            self._apply_charge(x, y, vx, vy)
            self._apply_center(x, y)
            self._apply_collide(x, y, vx, vy)

        for i, node in enumerate(self.nodes):
            if node.fx is None:
                vx[i] *= 1 - self.velocity_decay
                node.x = float(x[i] + vx[i])
                node.vx = float(vx[i])
            else:
                node.x = node.fx
                node.vx = 0.0
            if node.fy is None:
                vy[i] *= 1 - self.velocity_decay
                node.y = float(y[i] + vy[i])
                node.vy = float(vy[i])
            else:
                node.y = node.fy
                node.vy = 0.0

        if self.alpha < self.alpha_min:
            self.running = False
        return self.running

    def _apply_links(self, x, y, vx, vy):
        for (s, t), strength, bias in zip(self.links, self.link_strength, self.link_bias):
            dx = x[t] + vx[t] - x[s] - vx[s] or self._jiggle()
            dy = y[t] + vy[t] - y[s] - vy[s] or self._jiggle()
            length = math.sqrt(dx * dx + dy * dy)
            factor = (length - self.link_distance) / length * self.alpha * strength
            dx *= factor
            dy *= factor
            vx[t] -= dx * bias
            vy[t] -= dy * bias
            vx[s] += dx * (1 - bias)
            vy[s] += dy * (1 - bias)

    def _apply_charge(self, x, y, vx, vy):
        # dx[i, j] points from node i to node j
        dx = x[None, :] - x[:, None]
        dy = y[None, :] - y[:, None]
        dist2 = dx * dx + dy * dy
        off_diagonal = ~np.eye(len(x), dtype=bool)
        coincident = (dist2 == 0) & off_diagonal
        if coincident.any():
            dx[coincident] = [self._jiggle() for _ in range(int(coincident.sum()))]
            dy[coincident] = [self._jiggle() for _ in range(int(coincident.sum()))]
            dist2 = dx * dx + dy * dy
        # Very close pairs are softened so the force stays bounded
        dist2 = np.where(dist2 < 1.0, np.sqrt(dist2), dist2)
        dist2[~off_diagonal] = 1.0
        weight = np.where(off_diagonal, self.charge * self.alpha / dist2, 0.0)
        vx += (dx * weight).sum(axis=1)
        vy += (dy * weight).sum(axis=1)

    def _apply_center(self, x, y):
        cx, cy = self.center
        x -= x.mean() - cx
        y -= y.mean() - cy

    def _apply_collide(self, x, y, vx, vy):
        px = x + vx
        py = y + vy
        # dx[i, j] points from node j to node i
        dx = px[:, None] - px[None, :]
        dy = py[:, None] - py[None, :]
        dist2 = dx * dx + dy * dy
        reach = self.radii[:, None] + self.radii[None, :]
        overlap = (dist2 < reach * reach) & ~np.eye(len(x), dtype=bool)
        if not overlap.any():
            return
        dist = np.sqrt(np.where(overlap, dist2, 1.0))
        dist = np.where(dist == 0, 1e-6, dist)
        push = np.where(overlap, (reach - dist) / dist, 0.0)
        r2 = self.radii * self.radii
        share = r2[None, :] / (r2[:, None] + r2[None, :])
        vx += (dx * push * share).sum(axis=1)
        vy += (dy * push * share).sum(axis=1)


class LayoutEngine:
    """Chooses the layout strategy for one network and owns its home view"""

    def __init__(self, network, graph_mode=GraphMode.SOCIAL, scope=None,
                 width=DEFAULT_VIEW_WIDTH, height=DEFAULT_VIEW_HEIGHT, seed=None):
        self.network = network
        self.graph_mode = graph_mode
        self.scope = scope
        self.width = width
        self.height = height
        self.mode = select_layout_mode(network)
        self.simulation = None
        self.home = ViewTransform.identity()
        self.settled = False
        self.dragging_id = None
        self.seed = seed
        # Called with the new home transform once the simulation has settled
        self.on_settled = None

    @property
    def authoritative(self):
        return self.mode == LayoutMode.AUTHORITATIVE

    @property
    def running(self):
        return self.simulation is not None and self.simulation.running

    def radius(self, node):
        return node_radius(node, self.graph_mode, self.scope, self.authoritative)

    def start(self):
        """Compute the initial home view and, without imported positions, start the simulation"""
        print(f"[DEBUG] Layout: {self.mode.value} for {len(self.network.nodes)} nodes, "
              f"{len(self.network.links)} links")
        if self.authoritative:
            self.home = self.fit_imported()
            self.settled = True
            return self.home

        distance, charge = FORCE_PARAMS[self.graph_mode.value]
        self.simulation = ForceSimulation(self.network.nodes, self.network.links,
                                          link_distance=distance, charge=charge,
                                          center=(self.width / 2.0, self.height / 2.0), seed=self.seed)
        # Provisional framing until the physics has settled
        self.home = ViewTransform(0.8, self.width / 2.0 * 0.2, self.height / 2.0 * 0.2)
        self.settled = False
        return self.home

    def fit_imported(self):
        xs = [node.x for node in self.network.nodes]
        ys = [node.y for node in self.network.nodes]
        return fit_to_extent(xs, ys, self.width, self.height)

    def fit_simulated(self):
        """Frame every node including its radius"""
        nodes = self.network.nodes
        return fit_to_extent([n.x for n in nodes], [n.y for n in nodes], self.width, self.height,
                             padding=FIT_PADDING, radii=[self.radius(n) for n in nodes])

    def tick(self):
        """One animation frame; returns True when node positions changed"""
        if not self.running:
            return False
        still_running = self.simulation.step()
        if not still_running:
            self.settled = True
            self.home = self.fit_simulated()
            print(f"[DEBUG] Layout settled after {self.simulation.ticks} ticks")
            if self.on_settled:
                self.on_settled(self.home)
        return True

    def resize(self, width, height):
        self.width = width
        self.height = height
        if self.authoritative:
            self.home = self.fit_imported()
        elif self.simulation is not None:
            self.simulation.center = (width / 2.0, height / 2.0)

    def begin_drag(self, node_id):
        """Pin a node to the pointer; the simulation is woken up so the rest can react"""
        node = self.network.node(node_id)
        if node is None or self.dragging_id is not None:
            return False
        self.dragging_id = node_id
        if not self.authoritative:
            if self.simulation is not None:
                self.simulation.alpha_target = 0.3
                self.simulation.restart()
            node.fx = node.x
            node.fy = node.y
        return True

    def drag_to(self, x, y):
        """Move the dragged node; imported layouts take the coordinates immediately"""
        node = self.network.node(self.dragging_id) if self.dragging_id is not None else None
        if node is None:
            return False
        if self.authoritative:
            node.x = x
            node.y = y
        else:
            node.fx = x
            node.fy = y
            # Keep the drawn position under the pointer until the next tick
            node.x = x
            node.y = y
        return True

    def end_drag(self):
        node = self.network.node(self.dragging_id) if self.dragging_id is not None else None
        self.dragging_id = None
        if node is None:
            return
        if not self.authoritative:
            if self.simulation is not None:
                self.simulation.alpha_target = 0.0
            node.fx = None
            node.fy = None

    def stop(self):
        """Tear down the running simulation"""
        if self.simulation is not None:
            self.simulation.stop()
        self.on_settled = None
        self.dragging_id = None
