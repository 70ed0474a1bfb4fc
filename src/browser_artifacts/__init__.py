"""Parsers and writers for browser-produced artifacts.

Basic usage:
    from browser_artifacts.historytrends import ExportReader

    with ExportReader.open("exported_analysis_history_20131116_144918.tsv") as r:
        export = r.read_all()
    print(export.time, len(export.visits))
"""

__version__ = "0.1.0"
