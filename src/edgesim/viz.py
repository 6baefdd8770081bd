# src/edgesim/viz.py
import matplotlib.pyplot as plt


def plot_roc_curves(
    curves,
    ax=None,
    figsize=(7, 6),
    title="ROC curves on the test table",
    colors=("#D9534F", "#5BC0DE", "#5CB85C", "#A0A0A0"),
    linewidth=1.8,
    show_chance=True,
):
    """
    Overlay ROC curves on shared axes.

    ``curves`` is an iterable of objects with ``name``, ``fpr``, ``tpr`` and
    ``auc`` attributes (e.g. the values of ComparisonResult.curves). Each
    legend entry reports the AUC to three decimals.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    for i, curve in enumerate(curves):
        ax.plot(
            curve.fpr,
            curve.tpr,
            color=colors[i % len(colors)],
            linewidth=linewidth,
            label=f"{curve.name} (AUC = {curve.auc:.3f})",
        )

    if show_chance:
        ax.plot([0, 1], [0, 1], linestyle="--", color="#808080", linewidth=1)

    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.set_xlabel("False positive rate")
    ax.set_ylabel("True positive rate")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="lower right")
    return fig, ax


def plot_rfe_profile(result, ax=None, figsize=(7, 4), title="RFE profile"):
    """Plot cross-validated score against subset size, marking the pick."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    profile = result.profile
    ax.errorbar(
        profile["size"],
        profile["mean_score"],
        yerr=profile["std_score"],
        marker="o",
        linewidth=1,
        capsize=3,
        color="#333333",
    )
    best = profile.loc[profile["size"] == result.best_size]
    ax.scatter(
        best["size"],
        best["mean_score"],
        s=80,
        color="#D9534F",
        zorder=3,
        label=f"selected size = {result.best_size}",
    )
    ax.set_xlabel("Number of features")
    ax.set_ylabel("CV score")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()
    return fig, ax
