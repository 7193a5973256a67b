"""Entry points producing the full chart payload and incremental updates."""

from dataclasses import dataclass
import logging
from typing import Any, Callable, Mapping

from i18n import Translator
from models import AccessDenied, AncestorNode, ChartOptions, NotFound, PersonRecord, Repository
from options import read_options
from projector import ChartContext, sex_color
from routes import RouteBuilder
from theme import ThemeColors
from tree_builder import build_ancestor_tree

logger = logging.getLogger(__name__)


@dataclass
class ChartServices:
    """Collaborators shared by the handlers."""

    repository: Repository
    translator: Translator
    colors: ThemeColors
    routes: RouteBuilder
    default_generations: int = 4
    tree_name: str = "tree"
    module_name: str = "ancestral-fan-chart"
    ancestor_filter: Callable[[PersonRecord], bool] | None = None


def _resolve_root(xref: str, services: ChartServices) -> PersonRecord:
    person = services.repository.get_person(xref)
    if person is None:
        raise NotFound(xref)
    if not services.repository.can_show(person):
        raise AccessDenied(xref)
    return person


def _build(
    xref: str, raw_options: Mapping[str, Any], services: ChartServices
) -> tuple[ChartOptions, AncestorNode]:
    root = _resolve_root(xref, services)
    options = read_options(raw_options, services.default_generations)

    context = ChartContext(
        max_generations=options.generations,
        colors=services.colors,
        translator=services.translator,
        ancestor_filter=services.ancestor_filter,
    )
    tree = build_ancestor_tree(root, services.repository, context)
    logger.info("Built fan chart for %s with %d generations", xref, options.generations)
    return options, tree


def update_url(services: ChartServices, generations: int) -> str:
    # xref must stay last: the client appends the clicked individual's id
    return services.routes.route(
        "module",
        {
            "module": services.module_name,
            "action": "Update",
            "ged": services.tree_name,
            "generations": generations,
            "xref": "",
        },
    )


def individual_url(services: ChartServices) -> str:
    return services.routes.route("individual", {"xref": ""})


def full_chart(
    xref: str, raw_options: Mapping[str, Any], services: ChartServices
) -> dict[str, Any]:
    """
    Build the complete chart payload for the individual ``xref``.

    Raises:
        NotFound: if ``xref`` does not resolve to an individual
        AccessDenied: if the individual may not be shown
    """
    options, tree = _build(xref, raw_options, services)
    translate = services.translator.translate

    return {
        "rtl": services.translator.direction() == "rtl",
        "fanDegree": options.fan_degree,
        "generations": options.generations,
        "defaultColor": sex_color(None, services.colors),
        "fontScale": options.font_scale,
        "fontColor": "#" + services.colors.parameter("chart-font-color"),
        "hideEmptySegments": options.hide_empty_segments,
        "showColorGradients": options.show_color_gradients,
        "updateUrl": update_url(services, options.generations),
        "individualUrl": individual_url(services),
        "data": tree.to_dict(),
        "labels": {
            "zoom": translate("Use Ctrl + scroll to zoom in the view"),
            "move": translate("Move the view with two fingers"),
        },
    }


def update(xref: str, raw_options: Mapping[str, Any], services: ChartServices) -> dict[str, Any]:
    """Return only the tree of ``xref``, used when the client re-centers the chart."""
    _, tree = _build(xref, raw_options, services)
    return tree.to_dict()
