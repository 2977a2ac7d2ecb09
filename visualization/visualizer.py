import datetime
import logging
import os
from typing import Dict, Optional

from lan_simulation.network import Network
from lan_simulation.node import NodeKind

_logger = logging.getLogger(__name__)

KIND_COLORS: Dict[NodeKind, str] = {
    NodeKind.WORKSTATION: "lightblue",
    NodeKind.PRINTER: "orange",
    NodeKind.NODE: "lightgray",
}


def ring_graph(network: Network):
    """Return the ring as a networkx DiGraph (one edge per successor link).

    Nodes carry a `kind` attribute. Dangling links are skipped.
    """
    import networkx as nx

    G = nx.DiGraph()
    for name, node in network.entities.items():
        G.add_node(name, kind=node.kind)
    for name, node in network.entities.items():
        if node.next_name is not None and node.next_name in network.entities:
            G.add_edge(name, node.next_name)
    return G


def visualize_ring(network: Network, out_dir: str = "results", show: bool = False) -> Optional[str]:
    """Draw the ring with networkx + matplotlib and save it as a PNG.

    Nodes are placed on a circle in ring order starting at the entry node
    and coloured by kind. Returns the absolute path of the saved figure, or
    None when the plotting libraries are not available or there is nothing
    to draw.
    """
    try:
        import matplotlib as mpl
        if not show:
            # non-interactive backend so saving works headless
            mpl.use('Agg')
        import matplotlib.pyplot as plt
        import networkx as nx
    except ImportError:
        _logger.info("matplotlib/networkx not available, skipping ring visualization")
        return None

    G = ring_graph(network)
    if G.number_of_nodes() == 0:
        return None

    # ring members first (in order) so circular_layout follows the ring, then any orphans
    order = [n.name for n in network.nodes_in_ring_order()]
    order += [n for n in G.nodes() if n not in order]
    pos = nx.circular_layout(order)

    colors = [KIND_COLORS[G.nodes[n]["kind"]] for n in order]
    labels = {n: f"{n}\n[{network.entities[n].label}]" for n in order}
    if network.entry_name is not None:
        labels[network.entry_name] += "\n(entry)"

    fig, ax = plt.subplots(figsize=(max(4.0, len(order) * 1.2), max(4.0, len(order) * 1.2)))
    nx.draw_networkx_nodes(G, pos, nodelist=order, node_color=colors, node_size=1600, ax=ax)
    nx.draw_networkx_edges(G, pos, ax=ax, arrows=True, arrowsize=18, connectionstyle="arc3,rad=0.15",
                           node_size=1600)
    nx.draw_networkx_labels(G, pos, labels=labels, font_size=8, ax=ax)
    ax.set_title("LAN simulation token ring")
    ax.set_axis_off()
    fig.tight_layout()

    os.makedirs(out_dir, exist_ok=True)
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    out_path = os.path.join(out_dir, f"ring_{timestamp}.png")
    try:
        fig.savefig(out_path)
        if show:
            plt.show()
    finally:
        plt.close(fig)
    _logger.info(f"Ring visualization saved to {out_path}")
    return os.path.abspath(out_path)
