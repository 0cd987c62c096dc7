"""
Binary Search Tree Demo -- Removal cases, traversal orders, height growth under
random vs sorted insertion, and structural queries on random trees.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from binary_search_tree import BinarySearchTree

SEED = 42
np.random.seed(SEED)

LOG_LEVEL = logging.WARNING
FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "orange": "#f39c12",
    "green": "#27ae60",
    "purple": "#9b59b6",
    "dark": "#2c3e50",
}

EXAMPLE_KEYS = [50, 30, 70, 20, 40, 60, 80]


def build_tree(keys):
    tree = BinarySearchTree()
    for key in keys:
        tree.insert(int(key), int(key))
    return tree


def node_positions(tree):
    """Map each node to (in-order index, -depth) for plotting."""
    depths = {}
    stack = [(tree, 0)] if not tree.is_empty() else []
    while stack:
        node, depth = stack.pop()
        depths[id(node)] = depth
        for child in (node.left, node.right):
            if child is not None:
                stack.append((child, depth + 1))

    positions = {}
    order = []
    stack = []
    node = tree if not tree.is_empty() else None
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        order.append(node)
        node = node.right
    for x, n in enumerate(order):
        positions[id(n)] = (x, -depths[id(n)], n)
    return positions


def draw_tree(ax, tree, title, labels=None, highlight=None):
    positions = node_positions(tree)
    for x, y, node in positions.values():
        for child in (node.left, node.right):
            if child is not None:
                cx, cy, _ = positions[id(child)]
                ax.plot([x, cx], [y, cy], color=COLORS["dark"], lw=1.2, zorder=1)
    for x, y, node in positions.values():
        color = COLORS["orange"] if highlight is not None and node.key == highlight else COLORS["blue"]
        ax.scatter([x], [y], s=900, color=color, edgecolor=COLORS["dark"], zorder=2)
        ax.text(x, y, str(node.key), ha="center", va="center", color="white",
                fontsize=10, fontweight="bold", zorder=3)
        if labels is not None:
            ax.text(x + 0.25, y + 0.25, str(labels[node.key]), color=COLORS["red"],
                    fontsize=9, fontweight="bold", zorder=3)
    if not positions:
        ax.text(0.5, 0.5, "<empty>", ha="center", va="center", transform=ax.transAxes)
    ax.set_title(title, fontsize=11)
    ax.margins(0.2)
    ax.axis("off")


# ---------------------------------------------------------------------------
# Example 1: Basic Operations and the Three Removal Cases
# ---------------------------------------------------------------------------
def example_1_removal_cases():
    """Insert, find, and remove a leaf, a one-child node, and the root."""
    print("=" * 60)
    print("Example 1: Basic Operations and Removal Cases")
    print("=" * 60)

    tree_logger = logging.getLogger("binary_search_tree")
    tree_logger.setLevel(logging.DEBUG)

    tree = build_tree(EXAMPLE_KEYS)
    root = tree
    print(f"\n  Inserted: {EXAMPLE_KEYS}")
    print(f"  In-order:   {tree.dfs_in_order()}")
    print(f"  Pre-order:  {tree.dfs_pre_order()}")
    print(f"  Post-order: {tree.dfs_post_order()}")
    print(f"  BFS:        {tree.bfs()}")
    print(f"  find(60) -> {tree.find(60)}")

    fig, axes = plt.subplots(2, 2, figsize=(14, 9))
    draw_tree(axes[0, 0], tree, "Initial tree", highlight=20)

    steps = [(20, "leaf", 30), (30, "one child", 50), (50, "two children (root)", None)]
    for ax, (key, case, next_highlight) in zip(axes.flat[1:], steps):
        tree.remove(key)
        try:
            tree.find(key)
        except KeyError:
            found = False
        else:
            found = True
        print(f"\n  remove({key}) [{case}]: in-order now {tree.dfs_in_order()}")
        print(f"    find({key}) after removal raises KeyError: {not found}")
        draw_tree(ax, tree, f"After remove({key}): {case}", highlight=next_highlight)

    assert tree is root
    print(f"\n  Root object preserved across removals: {tree is root} (root key now {tree.key})")

    tree_logger.setLevel(logging.NOTSET)

    plt.tight_layout()
    fig.savefig(VIZ_DIR / "01_removal_cases.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print("  Saved: viz/01_removal_cases.png")


# ---------------------------------------------------------------------------
# Example 2: Traversal Orders
# ---------------------------------------------------------------------------
def example_2_traversal_orders():
    """Annotate each node with the step at which each traversal visits it."""
    print("\n" + "=" * 60)
    print("Example 2: Traversal Orders")
    print("=" * 60)

    tree = build_tree([10, 5, 15, 3, 7, 12, 20, 1])
    orders = {
        "In-order (left, root, right)": tree.dfs_in_order(),
        "Pre-order (root, left, right)": tree.dfs_pre_order(),
        "Post-order (left, right, root)": tree.dfs_post_order(),
        "Breadth-first (level order)": tree.bfs(),
    }

    fig, axes = plt.subplots(2, 2, figsize=(14, 9))
    for ax, (name, values) in zip(axes.flat, orders.items()):
        print(f"  {name:32s} {values}")
        labels = {key: step + 1 for step, key in enumerate(values)}
        draw_tree(ax, tree, name, labels=labels)

    print(f"\n  Height: {tree.get_height()}, leaves: {tree.count_leaves()}")

    plt.tight_layout()
    fig.savefig(VIZ_DIR / "02_traversal_orders.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print("  Saved: viz/02_traversal_orders.png")


# ---------------------------------------------------------------------------
# Example 3: Height Growth -- Random vs Sorted Insertion
# ---------------------------------------------------------------------------
def example_3_height_growth():
    """Without rebalancing, sorted input degrades the tree to a linked list."""
    print("\n" + "=" * 60)
    print("Example 3: Height Growth (random vs sorted insertion)")
    print("=" * 60)

    np.random.seed(SEED)
    sizes = np.array([16, 32, 64, 128, 256, 512, 1024])
    trials = 20

    random_heights = np.zeros((len(sizes), trials))
    for i, n in enumerate(sizes):
        for t in range(trials):
            random_heights[i, t] = build_tree(np.random.permutation(n)).get_height()
    sorted_heights = np.array([build_tree(np.arange(n)).get_height() for n in sizes])
    optimal = np.floor(np.log2(sizes))

    print(f"\n  {'n':>6s} {'optimal':>8s} {'random (mean)':>14s} {'sorted':>8s}")
    for n, opt, rand, srt in zip(sizes, optimal, random_heights.mean(axis=1), sorted_heights):
        print(f"  {n:6d} {opt:8.0f} {rand:14.2f} {srt:8d}")

    fig, axes = plt.subplots(1, 2, figsize=(15, 5.5))

    ax = axes[0]
    ax.plot(sizes, sorted_heights, "o-", color=COLORS["red"], label="Sorted insertion")
    ax.errorbar(sizes, random_heights.mean(axis=1), yerr=random_heights.std(axis=1),
                fmt="s-", color=COLORS["blue"], capsize=3, label="Random permutation")
    ax.plot(sizes, optimal, "^--", color=COLORS["green"], label=r"$\lfloor \log_2 n \rfloor$")
    ax.set_xscale("log", base=2)
    ax.set_yscale("log")
    ax.set_xlabel("Number of keys n")
    ax.set_ylabel("Tree height (edges)")
    ax.set_title("Height vs n")
    ax.legend()
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.hist(random_heights[-1], bins=10, color=COLORS["purple"], edgecolor="white")
    ax.axvline(optimal[-1], color=COLORS["green"], ls="--", label="Optimal")
    ax.set_xlabel("Height")
    ax.set_ylabel("Count")
    ax.set_title(f"Height distribution, n={sizes[-1]}, {trials} random trials")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    fig.savefig(VIZ_DIR / "03_height_growth.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print("  Saved: viz/03_height_growth.png")


# ---------------------------------------------------------------------------
# Example 4: Structural Queries on Random Trees
# ---------------------------------------------------------------------------
def example_4_structural_queries():
    """Leaf counts, root balance, and k-th largest on random trees."""
    print("\n" + "=" * 60)
    print("Example 4: Structural Queries on Random Trees")
    print("=" * 60)

    np.random.seed(SEED)
    sizes = np.arange(10, 301, 10)
    trials = 15

    leaf_counts = np.zeros((len(sizes), trials))
    balanced_roots = np.zeros(len(sizes))
    for i, n in enumerate(sizes):
        for t in range(trials):
            tree = build_tree(np.random.permutation(n))
            leaf_counts[i, t] = tree.count_leaves()
            balanced_roots[i] += tree.is_balanced_bst().balanced
            assert tree.is_bst()
    balanced_roots /= trials

    keys = np.random.choice(10_000, size=200, replace=False)
    tree = build_tree(keys)
    expected = np.sort(keys)[::-1]
    mismatches = sum(tree.find_kth_largest_value(k) != expected[k - 1] for k in range(1, len(keys) + 1))
    print(f"\n  k-th largest checked against numpy sort for k=1..{len(keys)}: {mismatches} mismatches")
    try:
        tree.find_kth_largest_value(len(keys) + 1)
    except IndexError as exc:
        print(f"  k={len(keys) + 1} rejected: IndexError({exc})")

    print(f"  Mean leaves at n={sizes[-1]}: {leaf_counts[-1].mean():.1f} (expected ~(n+1)/3 = {(sizes[-1] + 1) / 3:.1f})")

    fig, axes = plt.subplots(1, 2, figsize=(15, 5.5))

    ax = axes[0]
    ax.plot(sizes, leaf_counts.mean(axis=1), "o-", color=COLORS["blue"], label="Measured (mean)")
    ax.plot(sizes, (sizes + 1) / 3, "--", color=COLORS["orange"], label="(n + 1) / 3")
    ax.set_xlabel("Number of keys n")
    ax.set_ylabel("Leaves")
    ax.set_title("count_leaves() on random trees")
    ax.legend()
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.bar(sizes, balanced_roots, width=7, color=COLORS["green"])
    ax.set_xlabel("Number of keys n")
    ax.set_ylabel("Fraction of trials")
    ax.set_ylim(0, 1)
    ax.set_title("Root passes is_balanced_bst()")
    ax.grid(True, alpha=0.3, axis="y")

    plt.tight_layout()
    fig.savefig(VIZ_DIR / "04_structural_queries.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print("  Saved: viz/04_structural_queries.png")


# ---------------------------------------------------------------------------
# PDF Report
# ---------------------------------------------------------------------------
def generate_pdf_report():
    """Generate PDF report with a title page and one page per visualization."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    report_path = Path(__file__).parent / "report.pdf"
    viz_files = sorted(VIZ_DIR.glob("*.png"))

    with PdfPages(str(report_path)) as pdf:
        fig, ax = plt.subplots(figsize=(11, 8.5))
        ax.axis("off")
        ax.text(0.5, 0.78, "Binary Search Tree", fontsize=28, fontweight="bold",
                ha="center", va="center", transform=ax.transAxes)
        ax.text(0.5, 0.68, "Ordered Keys Without Rebalancing",
                fontsize=13, ha="center", va="center", transform=ax.transAxes, color="gray")
        info_text = (
            "Every left key is strictly smaller than its ancestor and every right\n"
            "key is at least as large. Insert, find and remove cost O(height):\n"
            "about log2(n) for random input, n - 1 for sorted input.\n\n"
            "This demo covers:\n"
            "  1. The three removal cases and root identity preservation\n"
            "  2. In-order, pre-order, post-order and breadth-first traversals\n"
            "  3. Height growth for random vs sorted insertion\n"
            "  4. Leaf counts, root balance and k-th largest on random trees\n\n"
            f"Random seed: {SEED}\n"
            f"Number of visualizations: {len(viz_files)}"
        )
        ax.text(0.5, 0.32, info_text, fontsize=11, ha="center", va="center",
                transform=ax.transAxes, linespacing=1.6)
        ax.text(0.5, 0.06, "Generated by demo.py", fontsize=10, ha="center",
                va="center", transform=ax.transAxes, style="italic", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        titles = {
            "01_removal_cases.png": "Example 1: Removal Cases",
            "02_traversal_orders.png": "Example 2: Traversal Orders",
            "03_height_growth.png": "Example 3: Height Growth",
            "04_structural_queries.png": "Example 4: Structural Queries",
        }

        for viz_file in viz_files:
            fig = plt.figure(figsize=(11, 8.5))
            title = titles.get(viz_file.name, viz_file.stem.replace("_", " ").title())
            fig.suptitle(title, fontsize=14, fontweight="bold", y=0.98)

            img = plt.imread(str(viz_file))
            ax = fig.add_axes([0.02, 0.02, 0.96, 0.92])
            ax.imshow(img)
            ax.axis("off")

            pdf.savefig(fig)
            plt.close(fig)

    print(f"  Report saved: report.pdf ({len(viz_files) + 1} pages)")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    logging.basicConfig(level=LOG_LEVEL, format=FORMAT)

    print("Binary Search Tree Demo")
    print("=" * 60)
    print(f"Seed: {SEED}")
    print()

    example_1_removal_cases()
    example_2_traversal_orders()
    example_3_height_growth()
    example_4_structural_queries()
    generate_pdf_report()

    print("\n" + "=" * 60)
    print("All examples completed successfully.")
    print(f"Visualizations: {VIZ_DIR}/")
    print(f"Report: {Path(__file__).parent / 'report.pdf'}")
    print("=" * 60)


if __name__ == "__main__":
    main()
