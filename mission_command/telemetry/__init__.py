"""
Telemetry: bar series → vessel stats → environment snapshot.

Modules
-------
primitives  : slope / sign-flip / normalize / clamp helpers - pure math.
stats       : the five stat computators (hull, firepower, sensors, fuel,
              threat) - pure functions over a bar sequence.
environment : build_environment() + compute_environment() - assembles an
              EnvironmentSnapshot, the latter awaiting a BarSeriesProvider.
"""
