"""
Export collaborators for the canonical product list.

Modules:
    layout - OutputLayout: per-run output directory, file and log paths
    csv_exporter - PriceListCSVExporter: human-readable price list
    sql_exporter - SQLScriptExporter: stored-procedure import script
"""

from .csv_exporter import PRICE_LIST_FIELDNAMES, PriceListCSVExporter
from .layout import OutputLayout
from .sql_exporter import SQLScriptExporter

EXPORT_MODES = ("dry-run", "csv", "sql", "both")


def build_exporters(mode: str, layout: OutputLayout, export_settings) -> list:
    """
    Build the exporters for an export mode.

    Args:
        mode: "dry-run" (nothing written), "csv", "sql" or "both"
        layout: Output layout of the current run
        export_settings: ExportSettings with file names and procedure name

    Returns:
        List of exporters

    Raises:
        ValueError: If mode is not supported
    """
    if mode not in EXPORT_MODES:
        raise ValueError(f"Unsupported export mode: {mode}. Supported: {', '.join(EXPORT_MODES)}")

    exporters = []
    if mode in ("csv", "both"):
        exporters.append(PriceListCSVExporter(layout.path(export_settings.price_list_filename)))
    if mode in ("sql", "both"):
        exporters.append(SQLScriptExporter(
            layout.path(export_settings.sql_filename),
            proc_name=export_settings.sql_proc_name,
            started_at=layout.started_at,
        ))
    return exporters


__all__ = [
    'OutputLayout',
    'PriceListCSVExporter',
    'PRICE_LIST_FIELDNAMES',
    'SQLScriptExporter',
    'EXPORT_MODES',
    'build_exporters',
]
