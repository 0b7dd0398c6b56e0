"""
Mission persistence - the Persistence Port and its backends.

Submodules:
  base       - MissionStore: serialization + failure containment
  memory     - MemoryMissionStore (dict-backed key/value store)
  json_file  - JsonFileMissionStore (one JSON object file, keyed)
  sqlite     - SqliteMissionStore (kv_store table)
  factory    - build_mission_store(StorageConfig)
"""
