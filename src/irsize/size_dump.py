# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Declaration size dump entry point."""

import logging
from pathlib import Path
from typing import Sequence

from irsize.collector import DeclarationCollector
from irsize.ir import IrModuleFragment
from irsize.rendering import KotlinLikeRenderer, Renderer
from irsize.report import write_report
from irsize.resolver import ReportEntry, SizeResolver

logger = logging.getLogger(__name__)


def build_report_entries(
    modules: Sequence[IrModuleFragment], renderer: Renderer | None = None
) -> list[ReportEntry]:
    """Collect and resolve the report entries of an IR forest.

    Args:
        modules: Module roots to inspect.
        renderer: Size oracle; defaults to ``KotlinLikeRenderer``.

    Returns:
        One entry per qualified key, in first-seen order.
    """
    declarations = DeclarationCollector().collect(modules)
    return SizeResolver(renderer or KotlinLikeRenderer()).resolve(declarations)


def dump_declaration_sizes_if_needed(
    path: str | Path | None,
    modules: Sequence[IrModuleFragment],
    renderer: Renderer | None = None,
) -> list[ReportEntry] | None:
    """Write the declaration size report of ``modules`` to ``path``.

    Args:
        path: Report file; ``None`` skips the whole run.
        modules: Module roots to inspect.
        renderer: Size oracle; defaults to ``KotlinLikeRenderer``.

    Returns:
        Entries written, or ``None`` when no path was given.

    Raises:
        OSError: If the report file cannot be written.
    """
    if path is None:
        logger.debug("Declaration size report skipped; no output path configured")
        return None
    entries = build_report_entries(modules, renderer)
    write_report(Path(path), entries)
    return entries
