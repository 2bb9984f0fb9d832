"""Template source selection.

A template source is ``owner/repo[/subdir][#ref]``. Bare names such as
``vue-ts`` resolve to a subdirectory of the configured template repository.
"""

from __future__ import annotations

from .models import FeatureSet

BASE_TEMPLATE = "vue"


def variant_name(features: FeatureSet) -> str:
    """Build the built-in variant name for ``features``.

    Segments are appended in a fixed order so equal feature sets always map
    to the same template.

    Example:
        >>> variant_name(FeatureSet())
        'vue'
        >>> variant_name(FeatureSet(needs_typescript=True, needs_router=True, needs_pinia=True))
        'vue-ts-router-pinia'
        >>> variant_name(FeatureSet(needs_e2e_testing="playwright", needs_eslint=True))
        'vue-playwright-eslint'
    """
    segments = [BASE_TEMPLATE]
    if features.needs_typescript:
        segments.append("ts")
    if features.needs_jsx:
        segments.append("jsx")
    if features.needs_router:
        segments.append("router")
    if features.needs_pinia:
        segments.append("pinia")
    if features.needs_vitest:
        segments.append("vitest")
    if features.needs_e2e_testing:
        segments.append(features.needs_e2e_testing)
    if features.needs_eslint:
        segments.append("eslint")
    if features.needs_prettier:
        segments.append("prettier")
    return "-".join(segments)


def resolve_template_source(name: str, template_repo: str) -> str:
    """Qualify a bare template name with ``template_repo``.

    Example:
        >>> resolve_template_source("vue-ts", "acme/templates")
        'acme/templates/vue-ts'
        >>> resolve_template_source("other/repo#main", "acme/templates")
        'other/repo#main'
    """
    normalized = name.strip().strip("/")
    if "/" in normalized or ":" in normalized:
        return normalized
    return f"{template_repo.strip('/')}/{normalized}"


def select_template_source(
    features: FeatureSet,
    *,
    template_repo: str,
    explicit: str | None = None,
) -> str:
    """Pick the template source for a run.

    An explicit template (``--template`` or the template-mode choice) wins;
    otherwise the variant is derived from ``features``.
    """
    name = explicit.strip() if explicit and explicit.strip() else variant_name(features)
    return resolve_template_source(name, template_repo)
