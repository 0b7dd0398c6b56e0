"""
Bar series providers - the only I/O boundary of the scoring engine.

Submodules:
  base       - BarSeriesProvider abstract port
  static     - in-memory provider (tests, notebooks, replay)
  json_file  - reads ``<bars_dir>/<TICKER>.json`` chart exports
"""
